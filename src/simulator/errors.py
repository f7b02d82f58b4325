class SimulatorError(Exception):
    """Base error for simulator domain exceptions."""


class OutOfRange(SimulatorError, ValueError):
    """Raised when a map dimension or a cell coordinate falls outside the allowed range."""


class OccupancyError(SimulatorError):
    """Raised when cell occupant bookkeeping would become inconsistent."""


class SimulationError(SimulatorError, ValueError):
    """Raised when a simulation is constructed from invalid inputs."""


class InvalidOperation(SimulatorError, RuntimeError):
    """Raised when an operation cannot be performed in current state."""


class ConfigError(SimulatorError):
    """Raised when a scenario file cannot be read or is malformed."""
