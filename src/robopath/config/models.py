import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

XY = tuple[float, float]


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class RobotModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    diameter: float = 0.35  # meters

    @field_validator("diameter")
    @classmethod
    def _positive(cls, v: float) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError("diameter must be a positive finite number")
        return v


class GrowthModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    safe: bool = False
    safe_scale: float = 0.5  # safe footprint side as a fraction of the diameter

    @field_validator("safe_scale")
    @classmethod
    def _scale(cls, v: float) -> float:
        if not (0 < v <= 1):
            raise ValueError("safe_scale must be in (0, 1]")
        return v


# ----------------- WORLD ---------------------


class WorldInline(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    boundary: list[XY]
    obstacles: list[list[XY]] = Field(default_factory=list)
    start: XY
    goal: XY

    @field_validator("boundary", "obstacles")
    @classmethod
    def _min_vertices(cls, v, info: ValidationInfo):
        rings = [v] if info.field_name == "boundary" else v
        for i, ring in enumerate(rings):
            if len(ring) < 3:
                where = "boundary" if info.field_name == "boundary" else f"obstacle {i}"
                raise ValueError(f"{where} needs at least 3 vertices, got {len(ring)}")
        return v


class WorldFiles(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["files"] = "files"
    world_file: str
    start_goal_file: str

    @field_validator("world_file", "start_goal_file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


WorldRef = Annotated[WorldInline | WorldFiles, Field(discriminator="by")]

# ----------------- GRAPH BUILDERS ---------------------


class GraphBuilderPairwiseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["pairwise"] = "pairwise"
    containment: Literal["convex", "bbox"] = "convex"
    max_candidates: int | None = Field(default=None, ge=1)


class GraphBuilderVectorizedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["vectorized"] = "vectorized"
    containment: Literal["convex", "bbox"] = "convex"
    max_candidates: int | None = Field(default=None, ge=1)


GraphBuilderUnion = Annotated[
    GraphBuilderPairwiseModel | GraphBuilderVectorizedModel,
    Field(discriminator="kind"),
]

# ----------------- SEARCH ---------------------


class SearchDijkstraModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["dijkstra"] = "dijkstra"
    max_expansions: int | None = Field(default=None, ge=1)


class SearchAStarModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["astar"] = "astar"
    max_expansions: int | None = Field(default=None, ge=1)


SearchUnion = Annotated[SearchDijkstraModel | SearchAStarModel, Field(discriminator="kind")]


class CommandsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    normalize_turns: bool = False  # wrap turns into (-180, 180]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "scenario"
    run_id: str = "local"
    log: LogModel = LogModel()
    robot: RobotModel = RobotModel()
    growth: GrowthModel = GrowthModel()
    graph_builder: GraphBuilderUnion = Field(default_factory=GraphBuilderVectorizedModel)
    search: SearchUnion = Field(default_factory=SearchDijkstraModel)
    commands: CommandsModel = CommandsModel()
    world: WorldRef
