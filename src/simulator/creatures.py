from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidOperation
from .geometry import Direction, Point
from .maps import Map

logger = logging.getLogger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 10
NAME_MAX_LENGTH = 25
DEFAULT_NAME = "Unknown"


def _clamp(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(max_value, value))


def _normalize_name(value: str) -> str:
    name = (value or "").strip()
    if not name:
        return DEFAULT_NAME
    name = name[:NAME_MAX_LENGTH].rstrip()
    return name[0].upper() + name[1:]


@dataclass(eq=False)
class Creature:
    """An entity that lives on a map and moves one cell at a time.

    A creature is either unbound (``map`` and ``position`` are None) or bound to
    a map at an in-bounds position. Equality is identity so two creatures with
    the same name can share a cell without confusing occupancy bookkeeping.
    """

    name: str = DEFAULT_NAME
    level: int = MIN_LEVEL
    map: Optional[Map] = field(default=None, init=False, repr=False)
    position: Optional[Point] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.name = _normalize_name(self.name)
        self.level = _clamp(int(self.level), MIN_LEVEL, MAX_LEVEL)

    @property
    def is_placed(self) -> bool:
        return self.map is not None

    @property
    def info(self) -> str:
        return f"{self.name} [{self.level}]"

    def upgrade(self) -> None:
        if self.level < MAX_LEVEL:
            self.level += 1

    def place(self, map: Map, position: Point) -> None:
        """Bind the creature to ``map`` at ``position``.

        Raises:
            InvalidOperation: The creature is already on a map.
            OutOfRange: ``position`` is outside the map.
        """
        if self.map is not None:
            raise InvalidOperation(f"{self.name} is already placed on a map")
        map.add(self, position)
        self.map = map
        self.position = position
        logger.debug("%s placed at %s", self.name, position)

    def go(self, direction: Optional[Direction]) -> bool:
        """Attempt to step one cell in ``direction``.

        Blocked moves (off the map, or into a cell the map refuses) leave the
        creature where it is.

        Returns:
            True if the creature moved; False if blocked or no direction given.
        """
        if self.map is None or self.position is None:
            raise InvalidOperation(f"{self.name} is not placed on a map")
        if direction is None:
            return False
        target = self.map.next_position(self.position, direction)
        if not self.map.can_enter(target):
            logger.debug("Blocked movement for %s: %s -> %s", self.name, self.position, target)
            return False
        self.map.move(self, self.position, target)
        logger.debug("%s goes %s: %s -> %s", self.name, direction.value, self.position, target)
        self.position = target
        return True

    def __str__(self) -> str:
        return self.info


__all__ = ["Creature", "MIN_LEVEL", "MAX_LEVEL"]
