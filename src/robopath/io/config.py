# src/robopath/io/config.py
import json
from collections.abc import Mapping
from pathlib import Path

from robopath.config.models import ScenarioModel


def load_scenario(src: str | Path | Mapping) -> ScenarioModel:
    """Validate a scenario from a mapping or a JSON file."""
    if isinstance(src, Mapping):
        return ScenarioModel.model_validate(src)
    with open(src, encoding="utf-8") as fp:
        return ScenarioModel.model_validate(json.load(fp))
