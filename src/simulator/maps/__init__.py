from .grid import Map
from .small import SMALL_MAP_MAX_SIZE, small_map

__all__ = ["Map", "SMALL_MAP_MAX_SIZE", "small_map"]
