import logging
import os
from typing import Optional

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0, env_level: Optional[str] = None) -> int:
    """Configure root logger from CLI verbosity.

    SIM_LOG_LEVEL (or ``env_level``) overrides the verbosity-derived level when
    it names a valid logging level. Returns the level applied.
    """
    level = level_for_verbosity(verbosity)
    level_name = env_level if env_level is not None else os.getenv("SIM_LOG_LEVEL")
    if level_name:
        named = getattr(logging, level_name.upper(), None)
        if isinstance(named, int):
            level = named
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return level
