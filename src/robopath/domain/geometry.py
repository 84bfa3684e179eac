# robopath/domain/geometry.py
import math
from collections.abc import Iterable
from dataclasses import dataclass
from itertools import combinations

EPSILON = 1e-3  # absorbs float drift from growth arithmetic


# Core geometry types used by planning
@dataclass(frozen=True, eq=False)
class Point:
    x: float
    y: float

    def __eq__(self, other) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return abs(self.x - other.x) <= EPSILON and abs(self.y - other.y) <= EPSILON

    # epsilon equality is not transitive, so no bucketed hash agrees with it;
    # keyed lookups go through VertexIndex
    __hash__ = None

    def __iter__(self):
        yield self.x
        yield self.y

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def heading_to(self, other: "Point") -> float:
        """Heading in degrees of the vector self -> other."""
        return math.degrees(math.atan2(other.y - self.y, other.x - self.x))


Pt = Point | tuple[float, float]


def as_point(p: Pt) -> Point:
    return p if isinstance(p, Point) else Point(float(p[0]), float(p[1]))


def cross(o: Point, a: Point, b: Point) -> float:
    """
    Cross product of (a - o) and (b - o).
      > 0: o -> a -> b turns counter-clockwise (y axis up)
      < 0: clockwise
      = 0: collinear
    """
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


@dataclass(frozen=True)
class Segment:
    p: Point
    q: Point

    __hash__ = None

    @property
    def midpoint(self) -> Point:
        return Point((self.p.x + self.q.x) / 2.0, (self.p.y + self.q.y) / 2.0)

    @property
    def length(self) -> float:
        return self.p.distance_to(self.q)

    def same_endpoints(self, other: "Segment") -> bool:
        """Undirected equality, used for graph-edge lookups."""
        return (self.p == other.p and self.q == other.q) or (
            self.p == other.q and self.q == other.p
        )

    def intersects(self, other: "Segment") -> bool:
        """
        Proper crossing only: each segment's endpoints lie strictly on opposite
        sides of the other. Shared endpoints and collinear overlap are not crossings.
        """
        a, b, c, d = self.p, self.q, other.p, other.q
        other_crosses_self = cross(a, b, c) * cross(a, b, d) < 0.0
        self_crosses_other = cross(c, d, a) * cross(c, d, b) < 0.0
        return other_crosses_self and self_crosses_other

    def contains_point(self, c: Point) -> bool:
        """True if c lies on the segment and is not one of its endpoints."""
        p, q = self.p, self.q
        if c == p or c == q:
            return False
        if abs((c.y - p.y) * (q.x - p.x) - (c.x - p.x) * (q.y - p.y)) > EPSILON:
            return False
        dot = (c.x - p.x) * (q.x - p.x) + (c.y - p.y) * (q.y - p.y)
        if dot < 0.0:
            return False
        return dot <= (q.x - p.x) ** 2 + (q.y - p.y) ** 2


class Polygon:
    """
    Closed ring of >= 3 distinct points; edge i joins point i to point i+1 and the
    last point back to the first. Region polygons (keep-out squares around start and
    goal) also expose the edges between every pair of their vertices.
    """

    def __init__(self, points: Iterable[Pt], *, region: bool = False):
        pts = tuple(as_point(p) for p in points)
        if len(pts) < 3:
            raise ValueError(f"polygon needs at least 3 points, got {len(pts)}")
        for (i, a), (j, b) in combinations(enumerate(pts), 2):
            if a == b:
                raise ValueError(f"duplicate polygon vertices at {i} and {j}: {a}")
        self.points = pts
        self.region = region
        n = len(pts)
        self.edges = tuple(Segment(pts[i], pts[(i + 1) % n]) for i in range(n))
        self.region_edges = (
            tuple(Segment(a, b) for a, b in combinations(pts, 2)) if region else ()
        )

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __repr__(self) -> str:
        pts = ", ".join(f"({p.x:g}, {p.y:g})" for p in self.points)
        return f"Polygon([{pts}]{', region=True' if self.region else ''})"

    # ---------------- bounding box ----------------

    @property
    def min_x(self) -> float:
        return min(p.x for p in self.points)

    @property
    def min_y(self) -> float:
        return min(p.y for p in self.points)

    @property
    def max_x(self) -> float:
        return max(p.x for p in self.points)

    @property
    def max_y(self) -> float:
        return max(p.y for p in self.points)

    @property
    def center(self) -> Point:
        """Center of the bounding box."""
        return Point((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    @property
    def signed_area(self) -> float:
        """Shoelace area; positive for a counter-clockwise ring."""
        s = 0.0
        for e in self.edges:
            s += e.p.x * e.q.y - e.q.x * e.p.y
        return s / 2.0

    def reflect(self, ox: float, oy: float) -> "Polygon":
        """Point reflection through (ox, oy)."""
        return Polygon(
            [Point(2.0 * ox - p.x, 2.0 * oy - p.y) for p in self.points], region=self.region
        )

    # ---------------- predicates ----------------

    def bbox_contains(self, p: Point) -> bool:
        if p.x < self.min_x + EPSILON or p.x > self.max_x - EPSILON:
            return False
        return self.min_y + EPSILON <= p.y <= self.max_y - EPSILON

    def contains_point(self, p: Point, method: str = "convex") -> bool:
        """
        Strict interior test with an EPSILON margin.
        "convex" sweeps the cross-product sign around the ring and holds for any
        convex polygon; "bbox" only holds for axis-aligned rectangles.
        """
        if method == "bbox":
            return self.bbox_contains(p)
        if method != "convex":
            raise ValueError(f"Unknown containment method {method!r}")
        sign = 1.0 if self.signed_area > 0 else -1.0
        for e in self.edges:
            if sign * cross(e.p, e.q, p) / e.length <= EPSILON:
                return False
        return True

    def intersects(self, seg: Segment) -> bool:
        """Segment crosses a boundary edge, or one of our vertices lies inside the segment."""
        if any(seg.intersects(e) for e in self.edges):
            return True
        return any(seg.contains_point(v) for v in self.points)


@dataclass(frozen=True)
class Path:
    points: tuple[Point, ...]
    length: float

    __hash__ = None

    @classmethod
    def through(cls, points: Iterable[Pt]) -> "Path":
        pts = tuple(as_point(p) for p in points)
        return cls(pts, sum(a.distance_to(b) for a, b in zip(pts, pts[1:])))

    @property
    def segments(self) -> list[Segment]:
        return [Segment(a, b) for a, b in zip(self.points, self.points[1:])]

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]


@dataclass(frozen=True)
class Command:
    turn_deg: float
    distance: float
