# robopath/planning/search.py
import heapq
import math
from collections.abc import Callable

from robopath.app.protocols import PathSearch
from robopath.domain.errors import BudgetExceededError
from robopath.domain.geometry import Path, Point
from robopath.domain.graph import VisibilityGraph

Heuristic = Callable[[int], float]


def _zero(_: int) -> float:
    return 0.0


def best_first(
    graph: VisibilityGraph,
    source: int,
    target: int,
    h: Heuristic = _zero,
    max_expansions: int | None = None,
) -> list[int] | None:
    """
    Label-setting search over vertex indices. With h == 0 this is Dijkstra; with an
    admissible h it is A*. Returns the index path source..target, or None.
    """
    adj = graph.adjacency()
    n = len(graph.vertices)
    dist = [math.inf] * n
    prev: list[int | None] = [None] * n
    done = [False] * n

    dist[source] = 0.0
    frontier: list[tuple[float, int]] = [(h(source), source)]
    expanded = 0
    while frontier:
        _, u = heapq.heappop(frontier)
        if done[u]:
            continue  # stale heap entry
        if u == target:
            out = [u]
            while prev[out[-1]] is not None:
                out.append(prev[out[-1]])
            out.reverse()
            return out
        done[u] = True
        expanded += 1
        if max_expansions is not None and expanded > max_expansions:
            raise BudgetExceededError(f"search exceeded max_expansions={max_expansions}")
        for v, w in adj[u]:
            alt = dist[u] + w
            if alt < dist[v] and not done[v]:
                dist[v] = alt
                prev[v] = u
                heapq.heappush(frontier, (alt + h(v), v))
    return None


class DijkstraSearch(PathSearch):
    def __init__(self, *, max_expansions: int | None = None):
        self.max_expansions = max_expansions

    def _heuristic(self, graph: VisibilityGraph, goal: int) -> Heuristic:
        return _zero

    def shortest_path(self, graph: VisibilityGraph, start: Point, goal: Point) -> Path | None:
        s, g = graph.index_of(start), graph.index_of(goal)
        if s == g:
            return Path((graph.vertices[s],), 0.0)
        nodes = best_first(graph, s, g, self._heuristic(graph, g), self.max_expansions)
        if nodes is None:
            return None
        return Path.through(graph.vertices[i] for i in nodes)


class AStarSearch(DijkstraSearch):
    """Dijkstra ordered by distance-so-far plus straight-line distance to the goal."""

    def _heuristic(self, graph: VisibilityGraph, goal: int) -> Heuristic:
        pg = graph.vertices[goal]
        return lambda u: graph.vertices[u].distance_to(pg)
