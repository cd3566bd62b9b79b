"""Tests for heading rotation and the command interpreter."""

import pytest

from roverteam.commands import Invalid, Rotate, Translate, interpret
from roverteam.errors import InvalidHeadingError
from roverteam.schemas import EventKind, Heading, rotate_ccw, rotate_cw
from roverteam.session import SimulationSession


def _session(width: int = 5, height: int = 5) -> SimulationSession:
    return SimulationSession.from_matrix([[0] * height for _ in range(width)], verbose=False)


def test_rotation_cycles():
    assert [rotate_cw(h) for h in Heading] == [
        Heading.EAST, Heading.SOUTH, Heading.WEST, Heading.NORTH,
    ]
    assert [rotate_ccw(h) for h in Heading] == [
        Heading.WEST, Heading.NORTH, Heading.EAST, Heading.SOUTH,
    ]
    for heading in Heading:
        assert rotate_ccw(rotate_cw(heading)) is heading


def test_heading_parse():
    assert Heading.parse("S") is Heading.SOUTH
    assert Heading.parse(Heading.WEST) is Heading.WEST
    with pytest.raises(InvalidHeadingError):
        Heading.parse("Q")
    with pytest.raises(InvalidHeadingError):
        Heading.parse("n")


def test_interpret_table():
    assert interpret("l") == Rotate(clockwise=False)
    assert interpret("r") == Rotate(clockwise=True)
    assert interpret("f") == Translate(sign=1)
    assert interpret("b") == Translate(sign=-1)
    assert interpret("F") == Invalid("F")
    assert interpret("?") == Invalid("?")


@pytest.mark.parametrize("first,second", [("l", "r"), ("r", "l")])
def test_opposite_rotations_restore_heading(first, second):
    session = _session()
    for heading in Heading:
        rover_id = session.create_rover(heading_row(heading), 2, heading)
        rover = session.rovers[rover_id]

        session.interpreter.process(rover, first)
        session.interpreter.process(rover, second)

        assert rover.heading is heading
        assert rover.position == (heading_row(heading), 2)


def heading_row(heading: Heading) -> int:
    return list(Heading).index(heading)


def test_command_recorded_before_effect():
    session = _session()
    rover_id = session.create_rover(2, 2, "N")
    rover = session.rovers[rover_id]

    session.interpreter.process(rover, "r")

    kinds = [(e.kind, e.detail) for e in session.rover_history_snapshot(rover_id)]
    assert kinds == [
        (EventKind.SETUP, "2,2,N"),
        (EventKind.COMMAND, "r"),
        (EventKind.POSITION, "2,2,E"),
    ]


def test_forward_and_backward_follow_heading():
    session = _session()
    rover_id = session.create_rover(2, 2, "E")
    rover = session.rovers[rover_id]

    session.interpreter.process(rover, "f")
    assert rover.position == (2, 3)
    session.interpreter.process(rover, "b")
    session.interpreter.process(rover, "b")
    assert rover.position == (2, 1)

    session.interpreter.process(rover, "l")  # now facing north
    session.interpreter.process(rover, "f")
    assert rover.position == (1, 1)
    assert session.grid.cell_state(1, 1).rover_id == rover_id


def test_invalid_command_is_logged_once_and_changes_nothing():
    session = _session()
    rover_id = session.create_rover(1, 1, "S")
    rover = session.rovers[rover_id]
    grid_before = session.grid_snapshot()

    outcome = session.interpreter.process(rover, "x")

    assert outcome is None
    assert rover.position == (1, 1)
    assert rover.heading is Heading.SOUTH
    assert session.grid_snapshot() == grid_before

    log = session.team_log_snapshot()
    assert [e.kind for e in log[-2:]] == [EventKind.COMMAND, EventKind.INVALID_COMMAND]
    assert log[-2].detail == "x"
    assert sum(1 for e in log if e.kind is EventKind.INVALID_COMMAND) == 1
    assert session.rover_history_snapshot(rover_id)[-1].kind is EventKind.INVALID_COMMAND
