from __future__ import annotations

import logging
from typing import Any, Callable, Generator, List, Optional, Tuple

from ..errors import OccupancyError, OutOfRange
from ..geometry import DIAGONAL_OFFSETS, OFFSETS, Direction, Point

logger = logging.getLogger(__name__)


def _default_symbol(entity: Any) -> str:
    name = getattr(entity, "name", "") or "?"
    return name[0].upper()


class Map:
    """A bounds-checked 2D grid tracking which entities occupy which cell.

    Each cell holds an ordered list of occupants. The grid shape is fixed at
    construction; the optional ``max_size`` caps both dimensions, which is how
    size variants (e.g. the 20x20 small map) are expressed.

    Coordinate arithmetic (``next_position``/``next_diagonal``) performs no
    bounds checks. Callers validate the result with ``exists``/``can_enter``
    before committing a move.
    """

    __slots__ = ("_size_x", "_size_y", "_max_size", "_allow_stacking", "_fields")

    def __init__(
        self,
        size_x: int,
        size_y: int,
        *,
        max_size: Optional[int] = None,
        allow_stacking: bool = True,
    ) -> None:
        size_x = int(size_x)
        size_y = int(size_y)
        if size_x < 1:
            raise OutOfRange(f"size_x must be at least 1, got {size_x}")
        if size_y < 1:
            raise OutOfRange(f"size_y must be at least 1, got {size_y}")
        if max_size is not None:
            if size_x > max_size:
                raise OutOfRange(f"size_x must be at most {max_size}, got {size_x}")
            if size_y > max_size:
                raise OutOfRange(f"size_y must be at most {max_size}, got {size_y}")
        self._size_x = size_x
        self._size_y = size_y
        self._max_size = max_size
        self._allow_stacking = bool(allow_stacking)
        # fields[x][y]
        self._fields: List[List[List[Any]]] = [[[] for _ in range(size_y)] for _ in range(size_x)]
        logger.debug("Initialized Map %dx%d (max_size=%s, stacking=%s)", size_x, size_y, max_size, allow_stacking)

    @property
    def size_x(self) -> int:
        return self._size_x

    @property
    def size_y(self) -> int:
        return self._size_y

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    @property
    def allow_stacking(self) -> bool:
        return self._allow_stacking

    @property
    def fields(self) -> Tuple[Tuple[Tuple[Any, ...], ...], ...]:
        """Read-only snapshot of the occupancy grid, indexed ``fields[x][y]``."""
        return tuple(tuple(tuple(cell) for cell in column) for column in self._fields)

    # ------------------------ Geometry ------------------------
    def exists(self, point: Point) -> bool:
        """Check if a point lies within the grid bounds. Never raises."""
        return 0 <= point.x < self._size_x and 0 <= point.y < self._size_y

    def next_position(self, point: Point, direction: Direction) -> Point:
        return point.next(direction)

    def next_diagonal(self, point: Point, direction: Direction) -> Point:
        return point.next_diagonal(direction)

    def neighbors(self, point: Point, diagonals: bool = False) -> Generator[Point, None, None]:
        """Yield neighbouring points that are within bounds."""
        offsets = list(OFFSETS.values())
        if diagonals:
            offsets.extend(DIAGONAL_OFFSETS.values())
        for dx, dy in offsets:
            candidate = Point(point.x + dx, point.y + dy)
            if self.exists(candidate):
                yield candidate

    # ------------------------ Occupancy ------------------------
    def _check(self, point: Point) -> None:
        if not self.exists(point):
            raise OutOfRange(f"Point {point} is out of bounds for map {self._size_x}x{self._size_y}")

    def at(self, point: Point) -> List[Any]:
        """Return a copy of the occupants at ``point``.

        Raises OutOfRange if the point is outside the map.
        """
        self._check(point)
        return list(self._fields[point.x][point.y])

    def can_enter(self, point: Point) -> bool:
        """Return True if an entity may be placed at ``point``. Never raises."""
        if not self.exists(point):
            return False
        return self._allow_stacking or not self._fields[point.x][point.y]

    def add(self, entity: Any, point: Point) -> None:
        self._check(point)
        if not self.can_enter(point):
            raise OccupancyError(f"Cell {point} is already occupied")
        self._fields[point.x][point.y].append(entity)
        logger.debug("Added %s at %s", entity, point)

    def remove(self, entity: Any, point: Point) -> None:
        self._check(point)
        cell = self._fields[point.x][point.y]
        if entity not in cell:
            raise OccupancyError(f"{entity} is not at {point}")
        cell.remove(entity)
        logger.debug("Removed %s from %s", entity, point)

    def move(self, entity: Any, src: Point, dst: Point) -> None:
        """Move ``entity`` from ``src`` to ``dst``.

        Both points are validated before the grid is touched, so a failed move
        leaves occupancy unchanged.
        """
        self._check(src)
        self._check(dst)
        if entity not in self._fields[src.x][src.y]:
            raise OccupancyError(f"{entity} is not at {src}")
        if src == dst:
            return
        if not self.can_enter(dst):
            raise OccupancyError(f"Cell {dst} is already occupied")
        self._fields[src.x][src.y].remove(entity)
        self._fields[dst.x][dst.y].append(entity)
        logger.debug("Moved %s from %s to %s", entity, src, dst)

    # ------------------------ Rendering ------------------------
    def to_lines(self, symbol: Optional[Callable[[Any], str]] = None) -> List[str]:
        """Render the grid as ASCII rows (for debugging and the CLI).

        Empty cells render as '.', a single occupant as ``symbol(occupant)``
        and a stack of occupants as 'X'.
        """
        symbol = symbol or _default_symbol
        rows: List[str] = []
        for y in range(self._size_y):
            row_chars = []
            for x in range(self._size_x):
                cell = self._fields[x][y]
                if not cell:
                    row_chars.append(".")
                elif len(cell) == 1:
                    row_chars.append(symbol(cell[0]))
                else:
                    row_chars.append("X")
            rows.append("".join(row_chars))
        return rows

    def __repr__(self) -> str:
        return f"Map(size_x={self._size_x}, size_y={self._size_y}, max_size={self._max_size})"
