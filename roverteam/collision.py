"""Collision detection for a candidate target cell.

Pure function of the grid contents: no state is read beyond the grid and
nothing is mutated.
"""

from roverteam.environment import CellKind, RoverGrid
from roverteam.schemas import BOUNDARY, CLEAR, OBSTACLE, CollisionOutcome, OutcomeKind


def detect(grid: RoverGrid, x: int, y: int) -> CollisionOutcome:
    """Classify moving into (x, y).

    Checks run in a fixed order: bounds first, so an out-of-grid target never
    reaches ``cell_state``; then obstacle, then another rover, else clear.
    """
    if not grid.is_in_bounds(x, y):
        return BOUNDARY

    cell = grid.cell_state(x, y)
    if cell.kind is CellKind.OBSTACLE:
        return OBSTACLE
    if cell.kind is CellKind.OCCUPIED:
        return CollisionOutcome(kind=OutcomeKind.ROVER_AHEAD, rover_id=cell.rover_id)
    return CLEAR
