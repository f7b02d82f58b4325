import pytest

from simulator.creatures import Creature
from simulator.errors import InvalidOperation, OccupancyError, OutOfRange, SimulationError
from simulator.events import FINISHED, TURN, EventBus
from simulator.geometry import Direction, Point
from simulator.maps import small_map
from simulator.simulation import Simulation


def make(moves, count=2, positions=None, size=5):
    creatures = [Creature(f"C{i}") for i in range(count)]
    positions = positions or [Point(i, i) for i in range(count)]
    return Simulation(small_map(size, size), creatures, positions, moves), creatures


def test_scenario_a_blocked_then_moved():
    sim, (c0, c1) = make("ud", positions=[Point(0, 0), Point(1, 1)])

    sim.turn()
    assert c0.position == Point(0, 0)
    assert sim.moves == "d"
    assert sim.finished is False

    sim.turn()
    assert c1.position == Point(1, 2)
    assert sim.moves == ""
    assert sim.finished is True


def test_scenario_b_empty_creature_list_rejected():
    with pytest.raises(SimulationError, match="cannot be empty"):
        Simulation(small_map(5, 5), [], [], "ud")


def test_scenario_c_empty_moves_finish_on_first_turn():
    sim, (c0,) = make("", count=1, positions=[Point(0, 0)])
    assert sim.finished is False
    assert sim.turn() is None
    assert sim.finished is True
    assert c0.position == Point(0, 0)
    assert sim.history == []


def test_scenario_d_bad_move_still_consumes_a_turn():
    sim, (c0,) = make("uXd", count=1, positions=[Point(2, 2)])

    sim.turn()
    assert c0.position == Point(2, 1)
    assert sim.finished is False

    record = sim.turn()
    assert record.direction is None
    assert record.moved is False
    assert c0.position == Point(2, 1)
    assert sim.finished is False

    sim.turn()
    assert c0.position == Point(2, 2)
    assert sim.finished is True


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(map=None, creatures=[Creature()], positions=[Point(0, 0)], moves="u"),
        dict(map=small_map(3, 3), creatures=[Creature()], positions=[Point(0, 0)], moves=None),
        dict(map=small_map(3, 3), creatures=[Creature(), Creature()], positions=[Point(0, 0)], moves="u"),
        dict(map=small_map(3, 3), creatures=None, positions=[], moves="u"),
    ],
)
def test_invalid_construction_inputs(kwargs):
    with pytest.raises(SimulationError):
        Simulation(**kwargs)


def test_construction_errors_are_value_errors():
    with pytest.raises(ValueError):
        Simulation(small_map(3, 3), [Creature()], [], "u")


def test_starting_position_outside_map_is_rejected():
    with pytest.raises(OutOfRange):
        Simulation(small_map(3, 3), [Creature()], [Point(3, 0)], "u")


def test_creatures_are_placed_at_starting_positions():
    sim, (c0, c1) = make("", positions=[Point(0, 0), (3, 4)])
    assert c0.position == Point(0, 0)
    assert c1.position == Point(3, 4)
    assert sim.positions == [Point(0, 0), Point(3, 4)]
    assert sim.map.at(Point(3, 4)) == [c1]
    assert len(sim.creatures) == len(sim.positions)


@pytest.mark.parametrize("moves", ["u", "urdl", "uuuuuuu", "xyz", "rX"])
def test_finishes_after_exactly_len_moves_turns(moves):
    sim, _ = make(moves, count=3)
    for _ in range(len(moves)):
        assert sim.finished is False
        sim.turn()
    assert sim.finished is True
    assert sim.moves == ""
    with pytest.raises(InvalidOperation, match="already finished"):
        sim.turn()


def test_round_robin_counts_unrecognized_commands():
    moves = "rX?dLrrQ"
    sim, creatures = make(moves, count=3, positions=[Point(0, 0), Point(0, 2), Point(0, 4)])
    actors = []
    while not sim.finished:
        actors.append(sim.current_creature)
        sim.turn()
    assert actors == [creatures[i % 3] for i in range(len(moves))]
    assert [r.creature for r in sim.history] == [c.name for c in actors]


def test_round_robin_matches_expected_positions():
    # C0 takes commands 0 and 3, C1 takes 1 and 4, C2 takes 2.
    sim, (c0, c1, c2) = make("rxdrd", count=3, positions=[Point(0, 0), Point(2, 2), Point(4, 4)])
    sim.run()
    assert c0.position == Point(2, 0)
    assert c1.position == Point(2, 3)
    assert c2.position == Point(4, 4)


def test_positions_stay_in_bounds():
    sim, creatures = make("uuuullllrrrrrrrrddddddddd" * 2, count=2, positions=[Point(0, 0), Point(4, 4)])
    while not sim.finished:
        sim.turn()
        assert all(sim.map.exists(c.position) for c in creatures)


def test_moves_are_case_insensitive():
    sim, (c0,) = make("DR", count=1, positions=[Point(0, 0)])
    sim.run()
    assert c0.position == Point(1, 1)


def test_current_move_name_and_consumed_cursor():
    sim, _ = make("Ud")
    assert sim.current_move_name == "u"
    assert sim.consumed == 0
    sim.turn()
    assert sim.current_move_name == "d"
    assert sim.consumed == 1
    sim.turn()
    with pytest.raises(InvalidOperation, match="No moves left"):
        sim.current_move_name


def test_turn_records_describe_each_move():
    sim, _ = make("ud", positions=[Point(0, 0), Point(1, 1)])
    first, second = sim.run()
    assert first.turn == 1
    assert first.command == "u"
    assert first.direction is Direction.UP
    assert first.moved is False
    assert "blocked" in first.message
    assert second.start == Point(1, 1)
    assert second.end == Point(1, 2)
    assert second.message == "Turn 2: C1 goes down: (1, 1) -> (1, 2)"


def test_run_returns_records_and_stops():
    sim, _ = make("urdl", count=2)
    records = sim.run()
    assert len(records) == 4
    assert sim.finished is True
    assert sim.history == records


def test_bus_receives_turn_and_finished_events():
    bus = EventBus()
    seen = []
    bus.subscribe(TURN, lambda simulation, record: seen.append(record.command))
    bus.subscribe(FINISHED, lambda simulation: seen.append("done"))
    sim = Simulation(small_map(3, 3), [Creature("Solo")], [Point(1, 1)], "rx", bus=bus)
    sim.run()
    assert seen == ["r", "x", "done"]


def test_finished_event_fires_for_empty_move_string():
    bus = EventBus()
    seen = []
    bus.subscribe(FINISHED, lambda simulation: seen.append(simulation.consumed))
    Simulation(small_map(3, 3), [Creature()], [Point(0, 0)], "", bus=bus).turn()
    assert seen == [0]


def test_rejected_start_leaves_creatures_and_map_untouched():
    m = small_map(5, 5)
    a, b = Creature("A"), Creature("B")
    with pytest.raises(OutOfRange):
        Simulation(m, [a, b], [Point(0, 0), Point(9, 9)], "u")
    assert a.is_placed is False
    assert b.is_placed is False
    assert m.at(Point(0, 0)) == []

    # Same creatures can be reused once the positions are fixed
    sim = Simulation(small_map(5, 5), [a, b], [Point(0, 0), Point(4, 4)], "u")
    assert sim.map.at(Point(0, 0)) == [a]


def test_duplicate_creature_is_rejected_before_placement():
    m = small_map(5, 5)
    a = Creature("A")
    with pytest.raises(InvalidOperation, match="more than once"):
        Simulation(m, [a, a], [Point(0, 0), Point(1, 1)], "u")
    assert a.is_placed is False
    assert m.at(Point(0, 0)) == []


def test_shared_start_on_non_stacking_map_is_rejected_before_placement():
    m = small_map(5, 5, allow_stacking=False)
    a, b = Creature("A"), Creature("B")
    with pytest.raises(OccupancyError):
        Simulation(m, [a, b], [Point(2, 2), Point(2, 2)], "u")
    assert a.is_placed is False
    assert m.at(Point(2, 2)) == []


def test_already_placed_creature_is_rejected_before_placement():
    other = small_map(3, 3)
    a, b = Creature("A"), Creature("B")
    b.place(other, Point(0, 0))
    m = small_map(5, 5)
    with pytest.raises(InvalidOperation, match="already placed"):
        Simulation(m, [a, b], [Point(0, 0), Point(1, 1)], "u")
    assert a.is_placed is False
    assert m.at(Point(0, 0)) == []
