from __future__ import annotations

import argparse
import sys
from dataclasses import replace

from . import __version__
from .config import load_scenario
from .errors import SimulatorError
from .events import TURN, EventBus
from .logging_config import configure_logging


def _print_turn(simulation, record) -> None:
    print(record.message)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="simulator",
        description="Run a turn-based creature grid simulation",
    )
    parser.add_argument("scenario", nargs="?", default=None, help="Scenario YAML file (default: bundled demo)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--moves", default=None, help="Override the scenario's move string")
    parser.add_argument("--show-map", action="store_true", help="Print the map after the last turn")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        scenario = load_scenario(args.scenario)
        if args.moves is not None:
            scenario = replace(scenario, moves=args.moves)
        bus = EventBus()
        bus.subscribe(TURN, _print_turn)
        simulation = scenario.build(bus=bus)
    except SimulatorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    simulation.run()

    print(f"Finished after {simulation.consumed} moves")
    for creature in simulation.creatures:
        print(f"{creature.info} at {creature.position}")
    if args.show_map:
        for line in simulation.map.to_lines():
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
