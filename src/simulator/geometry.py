from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """Cardinal movement directions.

    Values are lower-case names so a direction prints and serializes readably.
    """

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"


# Screen orientation: y grows downwards, so UP decrements y.
OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

# Diagonal step for each direction, rotated 45 degrees clockwise.
DIAGONAL_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (1, -1),
    Direction.RIGHT: (1, 1),
    Direction.DOWN: (-1, 1),
    Direction.LEFT: (-1, -1),
}


@dataclass(frozen=True)
class Point:
    """Immutable integer coordinate on a map."""

    x: int
    y: int

    def next(self, direction: Direction) -> "Point":
        dx, dy = OFFSETS[direction]
        return Point(self.x + dx, self.y + dy)

    def next_diagonal(self, direction: Direction) -> "Point":
        dx, dy = DIAGONAL_OFFSETS[direction]
        return Point(self.x + dx, self.y + dy)

    @classmethod
    def of(cls, value) -> "Point":
        """Coerce a Point or an (x, y) pair into a Point."""
        if isinstance(value, Point):
            return value
        x, y = value
        return cls(int(x), int(y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


__all__ = ["Direction", "Point", "OFFSETS", "DIAGONAL_OFFSETS"]
