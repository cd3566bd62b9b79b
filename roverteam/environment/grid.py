"""Bounded occupancy grid.

Each cell is free, an obstacle, or occupied by exactly one rover id. The grid
knows nothing about rovers beyond their ids; position bookkeeping on the rover
side is kept in step by the movement executor.

Axes follow the scenario matrix: ``x`` selects the row, ``y`` the column.
``width`` is the number of rows and ``height`` the number of columns.
"""

from __future__ import annotations

from typing import List, Sequence, Set

from roverteam.errors import (
    CellNotOccupiedError,
    CellOccupiedError,
    GridSetupError,
    OutOfBoundsError,
)

from .schemas import FREE_CELL, OBSTACLE_CELL, CellKind, CellState, GridSnapshot

# Matrix markers accepted by RoverGrid.from_matrix
FREE_MARKER = 0
OBSTACLE_MARKER = -1
# Any positive integer marks a cell pre-seeded with that rover id


class RoverGrid:
    """Rectangular occupancy matrix with fixed dimensions.

    Mutations touch exactly one cell per call and enforce the single-occupant
    invariant: ``place`` only succeeds on a free cell and ``vacate`` only on a
    rover-occupied one.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise GridSetupError(f"Grid dimensions must be >= 1 (got {width}x{height})")
        self.width = width
        self.height = height
        self._cells: List[List[CellState]] = [
            [FREE_CELL for _ in range(height)] for _ in range(width)
        ]

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]]) -> "RoverGrid":
        """Build a grid from rows of markers (0 free, -1 obstacle, n>0 rover id).

        Raises:
            GridSetupError: If the matrix is empty, ragged, uses an unknown
                marker or pre-seeds the same rover id twice.
        """
        if not matrix or not matrix[0]:
            raise GridSetupError("Grid matrix must have at least one row and one column")
        height = len(matrix[0])
        grid = cls(width=len(matrix), height=height)
        seen: Set[int] = set()
        for x, row in enumerate(matrix):
            if len(row) != height:
                raise GridSetupError(
                    f"Grid row {x} has {len(row)} cells, expected {height}"
                )
            for y, marker in enumerate(row):
                if isinstance(marker, bool) or not isinstance(marker, int):
                    raise GridSetupError(f"Unknown marker {marker!r} at ({x},{y})")
                if marker == FREE_MARKER:
                    continue
                if marker == OBSTACLE_MARKER:
                    grid._cells[x][y] = OBSTACLE_CELL
                elif marker > 0:
                    if marker in seen:
                        raise GridSetupError(f"Rover id {marker} pre-seeded more than once")
                    seen.add(marker)
                    grid._cells[x][y] = CellState.occupied_by(marker)
                else:
                    raise GridSetupError(f"Unknown marker {marker!r} at ({x},{y})")
        return grid

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.is_in_bounds(x, y):
            raise OutOfBoundsError(x=x, y=y, width=self.width, height=self.height)

    def cell_state(self, x: int, y: int) -> CellState:
        """Return the state of cell (x, y). Raises OutOfBoundsError outside the grid."""
        self._require_in_bounds(x, y)
        return self._cells[x][y]

    def place(self, rover_id: int, x: int, y: int) -> None:
        """Mark a free cell as occupied by ``rover_id``."""
        current = self.cell_state(x, y)
        if not current.is_free:
            raise CellOccupiedError(cell=(x, y), state=current.describe())
        self._cells[x][y] = CellState.occupied_by(rover_id)

    def vacate(self, x: int, y: int) -> None:
        """Free a rover-occupied cell."""
        current = self.cell_state(x, y)
        if current.kind is not CellKind.OCCUPIED:
            raise CellNotOccupiedError(cell=(x, y), state=current.describe())
        self._cells[x][y] = FREE_CELL

    def occupied_ids(self) -> Set[int]:
        """Return every rover id currently stored in the grid."""
        return {
            cell.rover_id
            for row in self._cells
            for cell in row
            if cell.kind is CellKind.OCCUPIED
        }

    def snapshot(self) -> GridSnapshot:
        # CellState instances are frozen, so tuples of them are a safe copy
        return GridSnapshot(
            width=self.width,
            height=self.height,
            cells=tuple(tuple(row) for row in self._cells),
        )
