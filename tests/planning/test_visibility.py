# tests/planning/test_visibility.py
import pytest

from robopath.domain.errors import BudgetExceededError
from robopath.domain.geometry import Point, Polygon, Segment
from robopath.planning.inflation import footprint_square, grow
from robopath.planning.visibility import (
    PairwiseGraphBuilder,
    VectorizedGraphBuilder,
    collect_vertices,
)

BOUNDARY = Polygon([(0, 0), (0, 10), (10, 10), (10, 0)])
START, GOAL = Point(1.0, 1.0), Point(9.0, 9.0)


@pytest.fixture
def grown_square() -> Polygon:
    return grow(Polygon([(4, 4), (4, 6), (6, 6), (6, 4)]), footprint_square(0.35))


@pytest.fixture
def cluttered() -> list[Polygon]:
    fp = footprint_square(0.35)
    return [
        grow(Polygon([(2, 2), (2, 3), (3, 3), (3, 2)]), fp),
        grow(Polygon([(5, 1), (5, 6), (6, 6), (6, 1)]), fp),
        grow(Polygon([(7, 7), (9, 7), (8, 8.5)]), fp),
        grow(Polygon([(1, 6), (1, 7), (3, 7), (3, 6)]), fp),
    ]


BUILDERS = [PairwiseGraphBuilder, VectorizedGraphBuilder]


@pytest.mark.parametrize("builder_cls", BUILDERS)
def test_scenario_graph_routes_around_obstacle(builder_cls, grown_square):
    g = builder_cls().build(START, GOAL, BOUNDARY, [grown_square])
    assert g.vertices[0] == START and g.vertices[1] == GOAL
    assert len(g.vertices) == 6

    assert not g.has_edge(START, GOAL)  # straight line runs through the obstacle
    assert g.has_edge(START, Point(6.175, 3.825))
    assert g.has_edge(START, Point(3.825, 6.175))
    assert g.has_edge(GOAL, Point(6.175, 3.825))
    # start -> far corner passes the near corner
    assert not g.has_edge(START, Point(6.175, 6.175))
    # obstacle sides stay, interior diagonals go
    assert g.has_edge(Point(3.825, 3.825), Point(3.825, 6.175))
    assert not g.has_edge(Point(3.825, 3.825), Point(6.175, 6.175))
    assert not g.has_edge(Point(3.825, 6.175), Point(6.175, 3.825))


@pytest.mark.parametrize("builder_cls", BUILDERS)
@pytest.mark.parametrize("containment", ["convex", "bbox"])
def test_no_edge_midpoint_inside_an_obstacle(builder_cls, containment, cluttered):
    g = builder_cls(containment=containment).build(START, GOAL, BOUNDARY, cluttered)
    assert g.edges
    for seg in g.segments:
        for obs in cluttered:
            assert not obs.contains_point(seg.midpoint)
            assert not obs.intersects(seg)


@pytest.mark.parametrize("containment", ["convex", "bbox"])
def test_builders_agree(containment, cluttered, grown_square):
    for obstacles in ([grown_square], cluttered, []):
        a = PairwiseGraphBuilder(containment=containment).build(START, GOAL, BOUNDARY, obstacles)
        b = VectorizedGraphBuilder(containment=containment).build(START, GOAL, BOUNDARY, obstacles)
        assert a.vertices == b.vertices
        assert a.edges == b.edges


@pytest.mark.parametrize("builder_cls", BUILDERS)
def test_empty_world_is_a_single_edge(builder_cls):
    g = builder_cls().build(START, GOAL, BOUNDARY, [])
    assert g.edges == [(0, 1)]
    assert g.segments[0] == Segment(START, GOAL)


@pytest.mark.parametrize("builder_cls", BUILDERS)
def test_boundary_walls_prune_without_obstacles(builder_cls):
    # a wall pokes down from the top edge between start and goal
    walled = Polygon([(0, 0), (0, 10), (4, 10), (4, 2), (6, 2), (6, 10), (10, 10), (10, 0)])
    g = builder_cls().build(Point(1.0, 8.0), Point(9.0, 8.0), walled, [])
    assert g.edges == []


@pytest.mark.parametrize("builder_cls", BUILDERS)
def test_coincident_points_are_merged(builder_cls, grown_square):
    corner = grown_square.points[0]
    g = builder_cls().build(corner, GOAL, BOUNDARY, [grown_square])
    assert len(g.vertices) == 5
    assert g.index_of(corner) == 0


@pytest.mark.parametrize("builder_cls", BUILDERS)
def test_candidate_budget(builder_cls, grown_square):
    with pytest.raises(BudgetExceededError):
        builder_cls(max_candidates=10).build(START, GOAL, BOUNDARY, [grown_square])
    # 6 vertices -> 15 unordered pairs
    builder_cls(max_candidates=15).build(START, GOAL, BOUNDARY, [grown_square])


def test_collect_vertices_order(grown_square):
    pts = collect_vertices(START, GOAL, [grown_square])
    assert pts[:2] == [START, GOAL]
    assert pts[2:] == list(grown_square.points)
