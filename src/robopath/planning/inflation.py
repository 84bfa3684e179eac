# robopath/planning/inflation.py
"""
Configuration-space growth of obstacles.

Every obstacle vertex is offset to the four corners of the robot's (reflected)
square footprint and the convex hull of those candidates becomes the grown
obstacle, an approximation of the Minkowski sum of obstacle and footprint.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from robopath.domain.errors import DegenerateGeometryError
from robopath.domain.geometry import EPSILON, Point, Polygon, Pt, as_point, cross
from robopath.domain.graph import VertexIndex

_TURN_EPS = 1e-9  # cross products below this count as collinear


@dataclass(frozen=True, order=True)
class PolarKey:
    """Sort key of a hull candidate relative to the pivot; the point itself stays immutable."""

    angle: float
    distance: float
    point: Point = field(compare=False)

    @classmethod
    def relative_to(cls, pivot: Point, p: Point) -> "PolarKey":
        return cls(pivot.heading_to(p), pivot.distance_to(p), p)


def footprint_square(side: float, center: Pt = (0.0, 0.0)) -> Polygon:
    if side <= 0:
        raise ValueError(f"footprint side must be > 0, got {side}")
    c = as_point(center)
    h = side / 2.0
    return Polygon(
        [
            (c.x - h, c.y - h),
            (c.x - h, c.y + h),
            (c.x + h, c.y + h),
            (c.x + h, c.y - h),
        ],
        region=True,
    )


def offset_radius(footprint: Polygon) -> float:
    """Half x-extent of the footprint reflected through its own center."""
    c = footprint.center
    robot = footprint.reflect(c.x, c.y)
    return abs(robot.center.x - robot.min_x)


def corner_offsets(points: Iterable[Point], rad: float) -> list[Point]:
    """Four (x +- rad, y +- rad) corners per vertex, epsilon duplicates collapsed."""
    idx = VertexIndex()
    for p in points:
        idx.add(Point(p.x - rad, p.y + rad))
        idx.add(Point(p.x + rad, p.y + rad))
        idx.add(Point(p.x + rad, p.y - rad))
        idx.add(Point(p.x - rad, p.y - rad))
    return idx.points


def convex_hull(candidates: list[Point]) -> list[Point]:
    """Graham scan; returns the hull counter-clockwise starting at the pivot."""
    if len(candidates) < 3:
        raise DegenerateGeometryError(f"need at least 3 hull candidates, got {len(candidates)}")

    # pivot: lowest y, ties broken by highest x
    pivot = candidates[0]
    for p in candidates[1:]:
        if p.y < pivot.y or (p.y == pivot.y and p.x > pivot.x):
            pivot = p

    ordered = sorted(PolarKey.relative_to(pivot, p) for p in candidates)
    pts = [k.point for k in ordered]

    # seeded with the last and first sorted points; the seed is revisited at the end
    stack = [pts[-1], pts[0]]
    for p in pts[1:]:
        while len(stack) >= 2 and cross(stack[-2], stack[-1], p) <= _TURN_EPS:
            stack.pop()
        stack.append(p)

    ring = stack[1:] if len(stack) > 1 and stack[0] is stack[-1] else stack
    if len(ring) < 3:
        raise DegenerateGeometryError(f"hull collapsed to {len(ring)} points")
    return ring


def grow_by_radius(polygon: Polygon, rad: float) -> Polygon:
    if rad < 0:
        raise ValueError(f"growth radius must be >= 0, got {rad}")
    ring = convex_hull(corner_offsets(polygon.points, rad))
    try:
        grown = Polygon(ring)
    except ValueError as exc:
        raise DegenerateGeometryError(str(exc)) from exc
    if abs(grown.signed_area) <= EPSILON * EPSILON:
        raise DegenerateGeometryError(f"grown polygon has zero area: {grown!r}")
    return grown


def grow(polygon: Polygon, footprint: Polygon) -> Polygon:
    return grow_by_radius(polygon, offset_radius(footprint))


def safe_grow(grown: Polygon, robot_diameter: float, scale: float = 0.5) -> Polygon:
    """Second growth of an already grown obstacle with a scaled-down footprint."""
    return grow(grown, footprint_square(robot_diameter * scale))


def is_convex(polygon: Polygon) -> bool:
    pts, n = polygon.points, len(polygon)
    turns = [cross(pts[i], pts[(i + 1) % n], pts[(i + 2) % n]) for i in range(n)]
    return all(t >= -_TURN_EPS for t in turns) or all(t <= _TURN_EPS for t in turns)
