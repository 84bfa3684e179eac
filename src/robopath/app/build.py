# robopath/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from robopath.config.models import ScenarioModel
from robopath.domain.environment import Environment
from robopath.domain.geometry import Command, Path
from robopath.io.planner_logging import PlannerLogging
from robopath.planning.hooks import NoopHooks
from robopath.runtime.registries import make_graph_builder, make_search, resolve_world


@dataclass
class App:
    model: ScenarioModel
    env: Environment


@dataclass
class PlanResult:
    path: Path
    commands: list[Command]


def build(cfg: ScenarioModel | Mapping, *, use_logging: bool = True) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        PlannerLogging(run_id=model.run_id, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) World geometry
    boundary, obstacles, start, goal = resolve_world(model.world)

    # 3) Environment with its collaborators
    env = Environment(
        boundary=boundary,
        obstacles=obstacles,
        start=start,
        goal=goal,
        robot_diameter=model.robot.diameter,
        safe_scale=model.growth.safe_scale,
        graph_builder=make_graph_builder(model.graph_builder),
        search=make_search(model.search),
        hooks=hooks,
    )
    return App(model, env)


def plan(app: App) -> PlanResult:
    """grow -> visibility graph -> shortest path -> commands; PlanningError on failure."""
    env = app.env
    env.grow_obstacles(safe=app.model.growth.safe)
    env.build_visibility_graph()
    path = env.compute_shortest_path()
    commands = env.translate_to_commands(normalize_turns=app.model.commands.normalize_turns)
    return PlanResult(path, commands)
