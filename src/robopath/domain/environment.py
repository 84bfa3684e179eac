# robopath/domain/environment.py
import time
from collections.abc import Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

from robopath.app.protocols import GraphBuilder, PathSearch
from robopath.domain.errors import NoPathError, PlanningError, StageOrderError
from robopath.domain.geometry import Command, Path, Point, Polygon, as_point
from robopath.domain.graph import VisibilityGraph
from robopath.planning.commands import translate
from robopath.planning.hooks import NoopHooks, PlannerHooks
from robopath.planning.inflation import footprint_square, grow, safe_grow
from robopath.planning.search import DijkstraSearch
from robopath.planning.visibility import PairwiseGraphBuilder

ROBOT_DIAMETER = 0.35  # iRobot Create, meters


@dataclass
class Environment:
    """
    Boundary, obstacles, start and goal, plus the artifacts derived from them.
    Derived fields stay None until computed; recomputing a stage clears every stage
    downstream of it (growth -> graph -> path).
    """

    boundary: Polygon
    obstacles: list[Polygon]
    start: Point
    goal: Point
    robot_diameter: float = ROBOT_DIAMETER
    safe_scale: float = 0.5
    graph_builder: GraphBuilder = field(default_factory=PairwiseGraphBuilder)
    search: PathSearch = field(default_factory=DijkstraSearch)
    hooks: PlannerHooks = field(default_factory=NoopHooks)

    # keep-out squares, side = robot diameter
    start_region: Polygon = field(init=False)
    goal_region: Polygon = field(init=False)

    grown: list[Polygon] | None = field(default=None, init=False)
    safe_grown: list[Polygon] | None = field(default=None, init=False)
    graph: VisibilityGraph | None = field(default=None, init=False)
    path: Path | None = field(default=None, init=False)

    def __post_init__(self):
        if self.robot_diameter <= 0:
            raise ValueError(f"robot_diameter must be > 0, got {self.robot_diameter}")
        self.start, self.goal = as_point(self.start), as_point(self.goal)
        self.obstacles = list(self.obstacles)
        self.start_region = footprint_square(self.robot_diameter, center=self.start)
        self.goal_region = footprint_square(self.robot_diameter, center=self.goal)

    # --------------- Helpers -----------------------------

    @contextmanager
    def _stage(self, name: str):
        info: dict = {}
        t0 = time.perf_counter()
        self.hooks.stage_start(name)
        try:
            yield info
        except PlanningError as exc:
            self.hooks.error(name, exc=exc, **info)
            raise
        self.hooks.stage_end(name, ms=(time.perf_counter() - t0) * 1000, **info)

    @property
    def active_obstacles(self) -> list[Polygon] | None:
        """Safe-grown set when present, else the tight growth."""
        return self.safe_grown if self.safe_grown is not None else self.grown

    def clear_growth(self) -> None:
        self.grown = self.safe_grown = None
        self.clear_graph()

    def clear_graph(self) -> None:
        self.graph = None
        self.clear_path()

    def clear_path(self) -> None:
        self.path = None

    # --------------- Stages -----------------------------

    def grow_obstacles(self, safe: bool = False) -> list[Polygon]:
        """
        Grow every obstacle by the robot footprint. With safe=True the grown set is
        grown a second time by a footprint scaled by safe_scale.
        """
        self.clear_growth()
        with self._stage("grow") as info:
            footprint = footprint_square(self.robot_diameter)
            grown = [grow(o, footprint) for o in self.obstacles]
            safe_grown = (
                [safe_grow(g, self.robot_diameter, self.safe_scale) for g in grown]
                if safe
                else None
            )
            info.update(obstacles=len(grown), safe=safe)
        self.grown, self.safe_grown = grown, safe_grown
        return self.active_obstacles

    def build_visibility_graph(self, obstacles: Sequence[Polygon] | None = None) -> VisibilityGraph:
        if obstacles is None:
            if self.grown is None:
                raise StageOrderError("grow_obstacles() must run before build_visibility_graph()")
            obstacles = self.active_obstacles
        self.clear_graph()
        with self._stage("visibility_graph") as info:
            graph = self.graph_builder.build(self.start, self.goal, self.boundary, list(obstacles))
            info.update(vertices=len(graph.vertices), edges=len(graph.edges))
        self.graph = graph
        return graph

    def compute_shortest_path(self) -> Path:
        if self.graph is None:
            raise StageOrderError("build_visibility_graph() must run before compute_shortest_path()")
        self.clear_path()
        with self._stage("shortest_path") as info:
            path = self.search.shortest_path(self.graph, self.start, self.goal)
            if path is None:
                raise NoPathError(f"no path from {self.start} to {self.goal}")
            info.update(points=len(path.points), length=path.length)
        self.path = path
        return path

    def translate_to_commands(self, *, normalize_turns: bool = False) -> list[Command]:
        if self.path is None:
            raise StageOrderError("compute_shortest_path() must run before translate_to_commands()")
        return translate(self.path, normalize_turns=normalize_turns)
