# robopath/planning/visibility.py
from collections.abc import Sequence
from itertools import combinations

import numpy as np

from robopath.app.protocols import GraphBuilder
from robopath.domain.errors import BudgetExceededError
from robopath.domain.geometry import EPSILON, Point, Polygon, Segment
from robopath.domain.graph import VertexIndex, VisibilityGraph


def collect_vertices(start: Point, goal: Point, obstacles: Sequence[Polygon]) -> list[Point]:
    """Start, goal, then every obstacle vertex; epsilon-equal points merged."""
    idx = VertexIndex([start, goal])
    for obs in obstacles:
        for v in obs.points:
            idx.add(v)
    return idx.points


def _check_budget(n: int, max_candidates: int | None) -> int:
    m = n * (n - 1) // 2
    if max_candidates is not None and m > max_candidates:
        raise BudgetExceededError(
            f"{m} candidate segments over {n} vertices exceeds max_candidates={max_candidates}"
        )
    return m


class PairwiseGraphBuilder(GraphBuilder):
    """Tests each unordered vertex pair once with the scalar primitives."""

    def __init__(self, *, containment: str = "convex", max_candidates: int | None = None):
        self.containment, self.max_candidates = containment, max_candidates

    def visible(self, seg: Segment, boundary: Polygon, obstacles: Sequence[Polygon]) -> bool:
        if boundary.intersects(seg):
            return False
        mid = seg.midpoint
        for obs in obstacles:
            if obs.intersects(seg) or obs.contains_point(mid, self.containment):
                return False
        return True

    def build(self, start, goal, boundary, obstacles) -> VisibilityGraph:
        vertices = collect_vertices(start, goal, obstacles)
        _check_budget(len(vertices), self.max_candidates)
        edges = [
            (i, j)
            for i, j in combinations(range(len(vertices)), 2)
            if self.visible(Segment(vertices[i], vertices[j]), boundary, obstacles)
        ]
        return VisibilityGraph(vertices, edges)


# ------------------- vectorized -------------------------


def _xy(points: Sequence[Point]) -> np.ndarray:
    return np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)


def _cross(o: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    # same expression as geometry.cross, broadcast over the leading axes
    return (a[..., 0] - o[..., 0]) * (b[..., 1] - o[..., 1]) - (a[..., 1] - o[..., 1]) * (
        b[..., 0] - o[..., 0]
    )


def _edge_arrays(polygons: Sequence[Polygon]) -> tuple[np.ndarray, np.ndarray]:
    edges = [e for poly in polygons for e in poly.edges]
    return _xy([e.p for e in edges]), _xy([e.q for e in edges])


def crosses_any(P: np.ndarray, Q: np.ndarray, A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """(M,) mask: candidate P[m]->Q[m] properly crosses some edge A[e]->B[e]."""
    if len(A) == 0:
        return np.zeros(len(P), dtype=bool)
    p, q = P[:, None, :], Q[:, None, :]
    a, b = A[None, :, :], B[None, :, :]
    hit = (_cross(p, q, a) * _cross(p, q, b) < 0.0) & (_cross(a, b, p) * _cross(a, b, q) < 0.0)
    return hit.any(axis=1)


def passes_vertex(P: np.ndarray, Q: np.ndarray, V: np.ndarray) -> np.ndarray:
    """(M,) mask: some vertex V[k] lies inside candidate P[m]->Q[m] (endpoints excluded)."""
    if len(V) == 0:
        return np.zeros(len(P), dtype=bool)
    p, q, c = P[:, None, :], Q[:, None, :], V[None, :, :]
    at_end = (np.abs(c - p) <= EPSILON).all(axis=-1) | (np.abs(c - q) <= EPSILON).all(axis=-1)
    dx, dy = q[..., 0] - p[..., 0], q[..., 1] - p[..., 1]
    cx, cy = c[..., 0] - p[..., 0], c[..., 1] - p[..., 1]
    collinear = np.abs(cy * dx - cx * dy) <= EPSILON
    dot = cx * dx + cy * dy
    on = ~at_end & collinear & (dot >= 0.0) & (dot <= dx**2 + dy**2)
    return on.any(axis=1)


def midpoint_inside(mids: np.ndarray, obstacles: Sequence[Polygon], method: str) -> np.ndarray:
    """(M,) mask: candidate midpoint strictly inside some obstacle."""
    if not obstacles or len(mids) == 0:
        return np.zeros(len(mids), dtype=bool)
    if method == "bbox":
        lo = np.array([(o.min_x, o.min_y) for o in obstacles])
        hi = np.array([(o.max_x, o.max_y) for o in obstacles])
        m = mids[:, None, :]
        inside = ((m >= lo[None] + EPSILON) & (m <= hi[None] - EPSILON)).all(axis=-1)
        return inside.any(axis=1)
    if method != "convex":
        raise ValueError(f"Unknown containment method {method!r}")

    A, B = _edge_arrays(obstacles)
    sign = np.concatenate(
        [np.full(len(o), 1.0 if o.signed_area > 0 else -1.0) for o in obstacles]
    )
    length = np.hypot(B[:, 0] - A[:, 0], B[:, 1] - A[:, 1])
    offsets = np.cumsum([0] + [len(o) for o in obstacles[:-1]])
    dist = sign[None, :] * _cross(A[None], B[None], mids[:, None, :]) / length[None, :]
    # inside one obstacle == clear of every one of its edges by more than EPSILON
    nearest = np.minimum.reduceat(dist, offsets, axis=1)
    return (nearest > EPSILON).any(axis=1)


class VectorizedGraphBuilder(GraphBuilder):
    """
    Same pruning rules as PairwiseGraphBuilder, evaluated for all candidates at once
    with numpy broadcasting. Memory grows with candidates x edges.
    """

    def __init__(self, *, containment: str = "convex", max_candidates: int | None = None):
        self.containment, self.max_candidates = containment, max_candidates

    def build(self, start, goal, boundary, obstacles) -> VisibilityGraph:
        vertices = collect_vertices(start, goal, obstacles)
        _check_budget(len(vertices), self.max_candidates)
        I, J = np.triu_indices(len(vertices), k=1)
        if len(I) == 0:
            return VisibilityGraph(vertices, [])

        pts = _xy(vertices)
        P, Q = pts[I], pts[J]
        walls = [boundary, *obstacles]
        A, B = _edge_arrays(walls)
        V = _xy([v for poly in walls for v in poly.points])

        blocked = crosses_any(P, Q, A, B)
        blocked |= passes_vertex(P, Q, V)
        blocked |= midpoint_inside((P + Q) / 2.0, list(obstacles), self.containment)

        keep = ~blocked
        return VisibilityGraph(vertices, list(zip(I[keep].tolist(), J[keep].tolist())))
