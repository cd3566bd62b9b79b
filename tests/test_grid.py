"""Tests for the occupancy grid."""

import pytest

from roverteam.environment import (
    FREE_CELL,
    OBSTACLE_CELL,
    CellKind,
    CellState,
    RoverGrid,
)
from roverteam.errors import (
    CellNotOccupiedError,
    CellOccupiedError,
    GridSetupError,
    OutOfBoundsError,
)


def test_bounds_follow_width_and_height():
    grid = RoverGrid(width=3, height=2)

    assert grid.is_in_bounds(0, 0)
    assert grid.is_in_bounds(2, 1)
    assert not grid.is_in_bounds(3, 0)
    assert not grid.is_in_bounds(0, 2)
    assert not grid.is_in_bounds(-1, 0)


def test_cell_state_out_of_bounds_raises():
    grid = RoverGrid(width=2, height=2)

    with pytest.raises(OutOfBoundsError) as excinfo:
        grid.cell_state(2, 0)
    assert excinfo.value.x == 2
    # Also catchable as a plain IndexError
    with pytest.raises(IndexError):
        grid.cell_state(0, -1)


def test_from_matrix_markers():
    grid = RoverGrid.from_matrix([
        [0, -1, 0],
        [0, 0, 4],
    ])

    assert grid.width == 2
    assert grid.height == 3
    assert grid.cell_state(0, 0) == FREE_CELL
    assert grid.cell_state(0, 1) == OBSTACLE_CELL
    assert grid.cell_state(1, 2) == CellState.occupied_by(4)
    assert grid.occupied_ids() == {4}


@pytest.mark.parametrize(
    "matrix",
    [
        [],
        [[]],
        [[0, 0], [0]],
        [[0, -2]],
        [[0, "x"]],
        [[3, 3]],
    ],
)
def test_from_matrix_rejects_malformed_input(matrix):
    with pytest.raises(GridSetupError):
        RoverGrid.from_matrix(matrix)


def test_place_and_vacate_touch_one_cell():
    grid = RoverGrid(width=3, height=3)

    grid.place(1, 1, 1)
    assert grid.cell_state(1, 1).kind is CellKind.OCCUPIED
    assert grid.cell_state(1, 1).rover_id == 1
    free_cells = [
        (x, y) for x in range(3) for y in range(3) if grid.cell_state(x, y).is_free
    ]
    assert len(free_cells) == 8

    grid.vacate(1, 1)
    assert grid.cell_state(1, 1).is_free


def test_place_on_non_free_cell_fails():
    grid = RoverGrid.from_matrix([[0, -1]])
    grid.place(1, 0, 0)

    with pytest.raises(CellOccupiedError):
        grid.place(2, 0, 0)
    with pytest.raises(CellOccupiedError):
        grid.place(2, 0, 1)
    assert grid.cell_state(0, 0).rover_id == 1


def test_vacate_requires_rover():
    grid = RoverGrid.from_matrix([[0, -1]])

    with pytest.raises(CellNotOccupiedError):
        grid.vacate(0, 0)
    with pytest.raises(CellNotOccupiedError):
        grid.vacate(0, 1)


def test_snapshot_is_detached_from_live_grid():
    grid = RoverGrid(width=2, height=2)
    grid.place(1, 0, 0)

    snapshot = grid.snapshot()
    grid.vacate(0, 0)
    grid.place(1, 1, 1)

    assert snapshot.cell(0, 0).rover_id == 1
    assert snapshot.cell(1, 1).is_free
    assert snapshot.rover_positions() == {1: (0, 0)}
    with pytest.raises(Exception):
        snapshot.width = 5


def test_cell_state_validates_rover_id():
    with pytest.raises(ValueError):
        CellState(kind=CellKind.OCCUPIED)
    with pytest.raises(ValueError):
        CellState(kind=CellKind.FREE, rover_id=2)
