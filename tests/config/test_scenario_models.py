# tests/config/test_scenario_models.py
import json

import pytest
from pydantic import ValidationError

from robopath.config.models import (
    GraphBuilderPairwiseModel,
    GraphBuilderVectorizedModel,
    ScenarioModel,
    SearchAStarModel,
    WorldFiles,
    WorldInline,
)
from robopath.io.config import load_scenario

INLINE_WORLD = {
    "by": "inline",
    "boundary": [(0, 0), (0, 10), (10, 10), (10, 0)],
    "obstacles": [[(4, 4), (4, 6), (6, 6), (6, 4)]],
    "start": (1, 1),
    "goal": (9, 9),
}


def test_defaults():
    m = ScenarioModel.model_validate({"world": INLINE_WORLD})
    assert isinstance(m.world, WorldInline)
    assert isinstance(m.graph_builder, GraphBuilderVectorizedModel)
    assert m.graph_builder.containment == "convex"
    assert m.search.kind == "dijkstra"
    assert m.robot.diameter == 0.35
    assert m.growth.safe is False and m.growth.safe_scale == 0.5
    assert m.commands.normalize_turns is False


def test_discriminated_unions_pick_models():
    m = ScenarioModel.model_validate(
        {
            "world": {"by": "files", "world_file": "w.txt", "start_goal_file": "sg.txt"},
            "graph_builder": {"kind": "pairwise", "containment": "bbox", "max_candidates": 50},
            "search": {"kind": "astar", "max_expansions": 10},
        }
    )
    assert isinstance(m.world, WorldFiles)
    assert isinstance(m.graph_builder, GraphBuilderPairwiseModel)
    assert m.graph_builder.max_candidates == 50
    assert isinstance(m.search, SearchAStarModel)


def test_world_file_paths_expand_user(monkeypatch):
    monkeypatch.setenv("HOME", "/home/robot")
    w = WorldFiles(world_file="~/w.txt", start_goal_file="$HOME/sg.txt")
    assert w.world_file == "/home/robot/w.txt"
    assert w.start_goal_file == "/home/robot/sg.txt"


@pytest.mark.parametrize(
    "patch",
    [
        {"robot": {"diameter": 0}},
        {"robot": {"diameter": float("inf")}},
        {"growth": {"safe_scale": 1.5}},
        {"graph_builder": {"kind": "quadtree"}},
        {"graph_builder": {"kind": "pairwise", "containment": "winding"}},
        {"search": {"kind": "dijkstra", "max_expansions": 0}},
        {"log": {"level": "TRACE"}},
        {"unexpected": 1},
    ],
)
def test_invalid_fields_are_rejected(patch):
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate({"world": INLINE_WORLD, **patch})


def test_short_rings_are_rejected():
    bad = {**INLINE_WORLD, "obstacles": [[(0, 0), (1, 1)]]}
    with pytest.raises(ValidationError, match="obstacle 0 needs at least 3 vertices"):
        ScenarioModel.model_validate({"world": bad})
    with pytest.raises(ValidationError, match="boundary needs at least 3"):
        ScenarioModel.model_validate({"world": {**INLINE_WORLD, "boundary": [(0, 0), (1, 0)]}})


def test_world_is_required():
    with pytest.raises(ValidationError):
        ScenarioModel.model_validate({})


def test_load_scenario_from_mapping_and_json(tmp_path):
    cfg = {"name": "square", "world": INLINE_WORLD, "search": {"kind": "astar"}}
    assert load_scenario(cfg).name == "square"

    p = tmp_path / "scenario.json"
    p.write_text(json.dumps(cfg))
    m = load_scenario(p)
    assert m.search.kind == "astar"
    assert m.world.start == (1.0, 1.0)
