from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib.resources import files as resource_files
from typing import Any, Dict, List, Optional

import yaml

from .creatures import Creature
from .errors import ConfigError
from .events import EventBus
from .geometry import Point
from .maps import SMALL_MAP_MAX_SIZE, Map
from .simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatureSpec:
    name: str
    level: int
    position: Point


@dataclass(frozen=True)
class ScenarioConfig:
    """A simulation scenario as described by a YAML file.

    Example:
        map: {size_x: 5, size_y: 5}
        creatures:
          - {name: Elandor, level: 1, position: [0, 0]}
        moves: "urdl"

    ``map.max_size`` defaults to the small-map cap; set it to null for an
    uncapped map.
    """

    size_x: int
    size_y: int
    moves: str
    creatures: List[CreatureSpec] = field(default_factory=list)
    max_size: Optional[int] = SMALL_MAP_MAX_SIZE
    allow_stacking: bool = True

    def build_map(self) -> Map:
        return Map(self.size_x, self.size_y, max_size=self.max_size, allow_stacking=self.allow_stacking)

    def build(self, bus: Optional[EventBus] = None) -> Simulation:
        """Create a fresh map, creatures and Simulation for this scenario."""
        creatures = [Creature(spec.name, spec.level) for spec in self.creatures]
        positions = [spec.position for spec in self.creatures]
        return Simulation(self.build_map(), creatures, positions, self.moves, bus=bus)


def _parse_creature(index: int, raw: Any) -> CreatureSpec:
    if not isinstance(raw, dict):
        raise ConfigError(f"creatures[{index}] must be a mapping")
    position = raw.get("position")
    if not isinstance(position, (list, tuple)) or len(position) != 2:
        raise ConfigError(f"creatures[{index}].position must be a [x, y] pair")
    try:
        return CreatureSpec(
            name=str(raw.get("name", "")),
            level=int(raw.get("level", 1)),
            position=Point(int(position[0]), int(position[1])),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"creatures[{index}] is invalid: {exc}") from exc


def parse_scenario(raw: Any) -> ScenarioConfig:
    """Validate already-decoded YAML content and build a ScenarioConfig."""
    if not isinstance(raw, dict):
        raise ConfigError("Scenario must be a mapping")
    map_raw: Dict[str, Any] = raw.get("map") or {}
    if not isinstance(map_raw, dict):
        raise ConfigError("'map' must be a mapping")
    creatures_raw = raw.get("creatures") or []
    if not isinstance(creatures_raw, list):
        raise ConfigError("'creatures' must be a list")
    moves = raw.get("moves", "")
    if moves is None:
        moves = ""
    try:
        size_x = int(map_raw["size_x"])
        size_y = int(map_raw["size_y"])
    except KeyError as exc:
        raise ConfigError(f"'map' is missing required key {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'map' size is invalid: {exc}") from exc
    max_size = map_raw.get("max_size", SMALL_MAP_MAX_SIZE)
    if max_size is not None:
        try:
            max_size = int(max_size)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"'map.max_size' is invalid: {exc}") from exc
    allow_stacking = map_raw.get("allow_stacking", True)
    if not isinstance(allow_stacking, bool):
        raise ConfigError(f"'map.allow_stacking' must be true or false, got {allow_stacking!r}")
    return ScenarioConfig(
        size_x=size_x,
        size_y=size_y,
        moves=str(moves),
        creatures=[_parse_creature(i, c) for i, c in enumerate(creatures_raw)],
        max_size=max_size,
        allow_stacking=allow_stacking,
    )


def load_scenario(path: Optional[str] = None) -> ScenarioConfig:
    """Load a scenario from YAML.

    If path is None, loads the embedded default resource at
    simulator/scenarios/default.yaml.
    """
    if path is None:
        data = resource_files("simulator.scenarios").joinpath("default.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default scenario resource")
    else:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = f.read()
        except OSError as exc:
            raise ConfigError(f"Cannot read scenario {path}: {exc}") from exc
        logger.debug("Loaded scenario from path: %s", path)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in scenario: {exc}") from exc
    scenario = parse_scenario(raw)
    logger.info(
        "Scenario: map %dx%d | %d creatures | %d moves",
        scenario.size_x,
        scenario.size_y,
        len(scenario.creatures),
        len(scenario.moves),
    )
    return scenario


__all__ = ["CreatureSpec", "ScenarioConfig", "load_scenario", "parse_scenario"]
