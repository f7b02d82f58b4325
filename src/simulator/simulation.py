from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .creatures import Creature
from .directions import parse
from .errors import InvalidOperation, OccupancyError, OutOfRange, SimulationError
from .events import FINISHED, TURN, EventBus
from .geometry import Direction, Point
from .maps import Map

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnRecord:
    """Outcome of a single consumed move command.

    Attributes:
        turn: 1-based number of the command within the move string.
        command: The raw command character.
        creature: Name of the creature whose slot the command fell on.
        direction: Parsed direction, or None for an unrecognized command.
        start: Creature position before the turn.
        end: Creature position after the turn.
        moved: Whether the creature actually changed cell.
    """

    turn: int
    command: str
    creature: str
    direction: Optional[Direction]
    start: Point
    end: Point
    moved: bool

    @property
    def message(self) -> str:
        if self.direction is None:
            return f"Turn {self.turn}: {self.creature} ignores {self.command!r}"
        outcome = f"{self.start} -> {self.end}" if self.moved else f"blocked at {self.start}"
        return f"Turn {self.turn}: {self.creature} goes {self.direction.value}: {outcome}"


class Simulation:
    """Round-robin turn engine driving creatures across a map.

    Move commands are consumed one per turn. The n-th command (0-based) belongs
    to ``creatures[n % len(creatures)]`` whether or not it parses to a
    direction; unrecognized commands use up the slot without moving anyone.

    Usage:
        sim = Simulation(map, [elf, orc], [Point(0, 0), Point(1, 1)], "udlr")
        while not sim.finished:
            sim.turn()
    """

    def __init__(
        self,
        map: Map,
        creatures: Sequence[Creature],
        positions: Sequence[Point],
        moves: str,
        *,
        bus: Optional[EventBus] = None,
    ) -> None:
        if map is None:
            raise SimulationError("Map cannot be None.")
        if not creatures:
            raise SimulationError("List of creatures cannot be empty.")
        if positions is None or len(creatures) != len(positions):
            raise SimulationError("Number of creatures must match the number of starting positions.")
        if moves is None:
            raise SimulationError("Moves cannot be None.")

        self._map = map
        self._creatures: List[Creature] = list(creatures)
        self._positions: List[Point] = [Point.of(p) for p in positions]
        self._commands = str(moves)
        self._consumed = 0
        self._finished = False
        self._history: List[TurnRecord] = []
        self._bus = bus

        self._check_placements()
        for creature, position in zip(self._creatures, self._positions):
            creature.place(map, position)
        logger.info(
            "Simulation created: %d creatures on %r, %d moves", len(self._creatures), map, len(self._commands)
        )

    def _check_placements(self) -> None:
        """Validate every starting placement before any creature is bound.

        A rejected roster leaves the map and all creatures untouched, so the
        same creatures can be reused once the inputs are fixed.
        """
        seen: List[Creature] = []
        taken: List[Point] = []
        for creature, position in zip(self._creatures, self._positions):
            if creature.is_placed:
                raise InvalidOperation(f"{creature.name} is already placed on a map")
            if any(creature is other for other in seen):
                raise InvalidOperation(f"{creature.name} is listed more than once")
            if not self._map.exists(position):
                raise OutOfRange(f"Starting position {position} of {creature.name} is out of bounds for {self._map!r}")
            if not self._map.allow_stacking and (position in taken or not self._map.can_enter(position)):
                raise OccupancyError(f"Starting position {position} of {creature.name} is already occupied")
            seen.append(creature)
            taken.append(position)

    # ------------------------ Observers ------------------------
    @property
    def map(self) -> Map:
        return self._map

    @property
    def creatures(self) -> List[Creature]:
        return list(self._creatures)

    @property
    def positions(self) -> List[Point]:
        """Starting positions, index-aligned with ``creatures``."""
        return list(self._positions)

    @property
    def moves(self) -> str:
        """Move commands not consumed yet."""
        return self._commands[self._consumed:]

    @property
    def consumed(self) -> int:
        return self._consumed

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def history(self) -> List[TurnRecord]:
        return list(self._history)

    @property
    def current_creature(self) -> Creature:
        """Creature whose slot the next command falls on."""
        return self._creatures[self._consumed % len(self._creatures)]

    @property
    def current_move_name(self) -> str:
        """Lower-cased command the next turn will consume."""
        if self._consumed >= len(self._commands):
            raise InvalidOperation("No moves left.")
        return self._commands[self._consumed].lower()

    # ------------------------ Turn engine ------------------------
    def turn(self) -> Optional[TurnRecord]:
        """Consume one move command and let the matching creature act.

        Returns:
            The TurnRecord for the consumed command, or None when the move
            string was already empty and the call only marked the simulation
            finished.

        Raises:
            InvalidOperation: The simulation is already finished.
        """
        if self._finished:
            raise InvalidOperation("The simulation is already finished.")
        if self._consumed >= len(self._commands):
            self._finish()
            return None

        creature = self.current_creature
        command = self.current_move_name
        self._consumed += 1

        directions = parse(command)
        direction = directions[0] if directions else None
        start = creature.position
        moved = creature.go(direction)

        record = TurnRecord(
            turn=self._consumed,
            command=command,
            creature=creature.name,
            direction=direction,
            start=start,
            end=creature.position,
            moved=moved,
        )
        self._history.append(record)
        logger.debug(record.message)
        if self._bus is not None:
            self._bus.emit(TURN, simulation=self, record=record)

        if self._consumed >= len(self._commands):
            self._finish()
        return record

    def run(self) -> List[TurnRecord]:
        """Drive turns until finished and return the records produced."""
        records: List[TurnRecord] = []
        while not self._finished:
            record = self.turn()
            if record is not None:
                records.append(record)
        return records

    def _finish(self) -> None:
        self._finished = True
        logger.info("Simulation finished after %d moves", self._consumed)
        if self._bus is not None:
            self._bus.emit(FINISHED, simulation=self)


__all__ = ["Simulation", "TurnRecord"]
