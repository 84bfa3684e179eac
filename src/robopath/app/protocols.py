from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from robopath.domain.geometry import Path, Point, Polygon
from robopath.domain.graph import VisibilityGraph


# ------------- Planning --------------------
@runtime_checkable
class GraphBuilder(Protocol):
    """
    Responsibilities:
      • Collect start, goal and obstacle vertices into a vertex arena.
      • Keep every vertex pair whose segment stays clear of boundary and obstacles.
    """

    def build(
        self,
        start: Point,
        goal: Point,
        boundary: Polygon,
        obstacles: Sequence[Polygon],
    ) -> VisibilityGraph: ...


@runtime_checkable
class PathSearch(Protocol):
    """
    Single-source shortest path over a visibility graph.
    Returns None when the goal is unreachable; a start equal to the goal yields a
    single-point path of zero length.
    """

    def shortest_path(self, graph: VisibilityGraph, start: Point, goal: Point) -> Path | None: ...
