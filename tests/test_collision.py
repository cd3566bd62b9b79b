"""Tests for collision detection."""

from roverteam.collision import detect
from roverteam.environment import RoverGrid
from roverteam.schemas import EventKind, OutcomeKind


def _grid() -> RoverGrid:
    return RoverGrid.from_matrix([
        [0, 0, 0],
        [0, -1, 0],
        [0, 0, 7],
    ])


def test_detect_classifies_each_cell_kind():
    grid = _grid()

    assert detect(grid, 0, 0).kind is OutcomeKind.CLEAR
    assert detect(grid, 1, 1).kind is OutcomeKind.OBSTACLE
    ahead = detect(grid, 2, 2)
    assert ahead.kind is OutcomeKind.ROVER_AHEAD
    assert ahead.rover_id == 7


def test_detect_out_of_bounds_is_boundary_not_error():
    grid = _grid()

    for x, y in [(-1, 0), (0, -1), (3, 0), (0, 3)]:
        outcome = detect(grid, x, y)
        assert outcome.kind is OutcomeKind.BOUNDARY
        assert outcome.blocked


def test_detect_does_not_mutate_grid():
    grid = _grid()
    before = grid.snapshot()

    detect(grid, 2, 2)
    detect(grid, 5, 5)

    assert grid.snapshot() == before


def test_outcome_descriptions_and_event_kinds():
    grid = _grid()

    assert detect(grid, -1, 0).describe() == "Boundary!"
    assert detect(grid, 1, 1).describe() == "Obstacle!"
    assert detect(grid, 2, 2).describe() == "Rover 7 ahead!"
    assert detect(grid, 2, 2).event_kind is EventKind.ROVER_AHEAD
    assert not detect(grid, 0, 0).blocked
