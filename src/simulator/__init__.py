"""
Turn-based creature grid simulator.

Creatures stand on a bounded map and take turns executing single-character
move commands (u/r/d/l) in round-robin order until the command string runs out.
"""

from .creatures import Creature
from .errors import (
    ConfigError,
    InvalidOperation,
    OccupancyError,
    OutOfRange,
    SimulationError,
    SimulatorError,
)
from .geometry import Direction, Point
from .maps import Map, small_map
from .simulation import Simulation, TurnRecord

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Creature",
    "Direction",
    "InvalidOperation",
    "Map",
    "OccupancyError",
    "OutOfRange",
    "Point",
    "Simulation",
    "SimulationError",
    "SimulatorError",
    "TurnRecord",
    "small_map",
]
