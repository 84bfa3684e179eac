# runtime/registries.py
from collections.abc import Callable

from robopath.app.protocols import GraphBuilder, PathSearch
from robopath.config.models import (
    GraphBuilderPairwiseModel,
    GraphBuilderUnion,
    GraphBuilderVectorizedModel,
    SearchAStarModel,
    SearchDijkstraModel,
    SearchUnion,
    WorldFiles,
    WorldInline,
    WorldRef,
)
from robopath.domain.geometry import Point, Polygon, as_point
from robopath.io.world_files import read_start_goal, read_world
from robopath.planning.search import AStarSearch, DijkstraSearch
from robopath.planning.visibility import PairwiseGraphBuilder, VectorizedGraphBuilder

GraphBuilderFactory = Callable[[GraphBuilderUnion], GraphBuilder]
SearchFactory = Callable[[SearchUnion], PathSearch]

_graph_builder_registry: dict[str, GraphBuilderFactory] = {}
_search_registry: dict[str, SearchFactory] = {}


# ------------------- Graph builders ---------------------------


def register_graph_builder(kind: str):
    def deco(fn: GraphBuilderFactory):
        _graph_builder_registry[kind] = fn
        return fn

    return deco


def make_graph_builder(cfg: GraphBuilderUnion) -> GraphBuilder:
    try:
        factory = _graph_builder_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown graph builder kind {cfg.kind!r}")
    return factory(cfg)


@register_graph_builder("pairwise")
def _make_pairwise(cfg: GraphBuilderPairwiseModel):
    return PairwiseGraphBuilder(containment=cfg.containment, max_candidates=cfg.max_candidates)


@register_graph_builder("vectorized")
def _make_vectorized(cfg: GraphBuilderVectorizedModel):
    return VectorizedGraphBuilder(containment=cfg.containment, max_candidates=cfg.max_candidates)


# --------------------- Search ---------------------


def register_search(kind: str):
    def deco(fn: SearchFactory):
        _search_registry[kind] = fn
        return fn

    return deco


def make_search(cfg: SearchUnion) -> PathSearch:
    try:
        factory = _search_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown search kind {cfg.kind!r}")
    return factory(cfg)


@register_search("dijkstra")
def _make_dijkstra(cfg: SearchDijkstraModel):
    return DijkstraSearch(max_expansions=cfg.max_expansions)


@register_search("astar")
def _make_astar(cfg: SearchAStarModel):
    return AStarSearch(max_expansions=cfg.max_expansions)


# ---------------------- World ----------------------------


def resolve_world(ref: WorldRef) -> tuple[Polygon, list[Polygon], Point, Point]:
    """(boundary, obstacles, start, goal) from inline literals or world/start-goal files."""
    if isinstance(ref, WorldInline):
        return (
            Polygon(ref.boundary),
            [Polygon(o) for o in ref.obstacles],
            as_point(ref.start),
            as_point(ref.goal),
        )
    if isinstance(ref, WorldFiles):
        boundary, obstacles = read_world(ref.world_file)
        start, goal = read_start_goal(ref.start_goal_file)
        return boundary, obstacles, start, goal
    raise TypeError(ref)
