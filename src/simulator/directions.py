from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .geometry import Direction

logger = logging.getLogger(__name__)


# Command letters understood by the parser. Lookups are done on lower-cased input.
COMMANDS: Dict[str, Direction] = {
    "u": Direction.UP,
    "r": Direction.RIGHT,
    "d": Direction.DOWN,
    "l": Direction.LEFT,
}


def parse(command: Optional[str]) -> List[Direction]:
    """Translate move command characters into directions.

    Each recognized character yields one direction, in input order. Unknown
    characters are skipped, so bad moves never raise.

    Args:
        command: One or more command characters. Case-insensitive.

    Returns:
        List of directions; empty when nothing was recognized.
    """
    if not command:
        return []
    directions: List[Direction] = []
    for ch in command.lower():
        direction = COMMANDS.get(ch)
        if direction is None:
            logger.debug("Ignoring unrecognized move command %r", ch)
            continue
        directions.append(direction)
    return directions


__all__ = ["COMMANDS", "parse"]
