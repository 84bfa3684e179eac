# robopath/domain/graph.py
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from robopath.domain.errors import VertexNotFoundError
from robopath.domain.geometry import EPSILON, Point, Segment


class VertexIndex:
    """
    Arena of unique points keyed by quantized coordinates.
    Cells are EPSILON wide, so any point within EPSILON of a stored one sits in the
    same or an adjacent cell; lookups scan the 3x3 neighbourhood.
    """

    def __init__(self, points: Iterable[Point] = ()):
        self.points: list[Point] = []
        self._cells: dict[tuple[int, int], list[int]] = {}
        for p in points:
            self.add(p)

    def __len__(self) -> int:
        return len(self.points)

    @staticmethod
    def _cell(p: Point) -> tuple[int, int]:
        return math.floor(p.x / EPSILON), math.floor(p.y / EPSILON)

    def find(self, p: Point) -> int | None:
        cx, cy = self._cell(p)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for i in self._cells.get((cx + dx, cy + dy), ()):
                    if self.points[i] == p:
                        return i
        return None

    def add(self, p: Point) -> int:
        i = self.find(p)
        if i is not None:
            return i
        i = len(self.points)
        self.points.append(p)
        self._cells.setdefault(self._cell(p), []).append(i)
        return i


@dataclass
class VisibilityGraph:
    vertices: list[Point]
    edges: list[tuple[int, int]]  # i < j, indices into vertices
    _index: VertexIndex | None = field(default=None, init=False, repr=False, compare=False)
    _edge_set: set[tuple[int, int]] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def segments(self) -> list[Segment]:
        return [Segment(self.vertices[i], self.vertices[j]) for i, j in self.edges]

    def index_of(self, p: Point) -> int:
        if self._index is None:
            self._index = VertexIndex(self.vertices)
        i = self._index.find(p)
        if i is None:
            raise VertexNotFoundError(f"{p} is not a vertex of the visibility graph")
        return i

    def adjacency(self) -> list[list[tuple[int, float]]]:
        adj: list[list[tuple[int, float]]] = [[] for _ in self.vertices]
        for i, j in self.edges:
            w = self.vertices[i].distance_to(self.vertices[j])
            adj[i].append((j, w))
            adj[j].append((i, w))
        return adj

    def has_edge(self, a: Point, b: Point) -> bool:
        try:
            i, j = self.index_of(a), self.index_of(b)
        except VertexNotFoundError:
            return False
        if self._edge_set is None:
            self._edge_set = set(self.edges)
        return (min(i, j), max(i, j)) in self._edge_set
