"""Grid environment for rover team simulations."""

from .grid import FREE_MARKER, OBSTACLE_MARKER, RoverGrid
from .schemas import (
    FREE_CELL,
    OBSTACLE_CELL,
    CellKind,
    CellState,
    GridSnapshot,
)

__all__ = [
    "RoverGrid",
    "FREE_MARKER",
    "OBSTACLE_MARKER",
    "CellKind",
    "CellState",
    "GridSnapshot",
    "FREE_CELL",
    "OBSTACLE_CELL",
]
