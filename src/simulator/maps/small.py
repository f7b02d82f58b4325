from __future__ import annotations

from .grid import Map

# Upper bound for both dimensions of a small map.
SMALL_MAP_MAX_SIZE = 20


def small_map(size_x: int, size_y: int, *, allow_stacking: bool = True) -> Map:
    """Build a map capped at SMALL_MAP_MAX_SIZE in each dimension.

    Raises OutOfRange when either dimension exceeds the cap.
    """
    return Map(size_x, size_y, max_size=SMALL_MAP_MAX_SIZE, allow_stacking=allow_stacking)
