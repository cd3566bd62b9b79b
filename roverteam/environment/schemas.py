"""Pydantic schemas for the occupancy grid.

Cell states are frozen models so the live grid and its snapshots can share
instances without a renderer being able to mutate engine state.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CellKind(str, Enum):
    """What a single grid cell currently holds."""

    FREE = "free"
    OBSTACLE = "obstacle"
    OCCUPIED = "occupied"


class CellState(BaseModel):
    """Contents of one grid cell: free, an obstacle, or a rover id."""

    model_config = ConfigDict(frozen=True)

    kind: CellKind
    rover_id: Optional[int] = Field(
        None, description="Occupying rover id; set only when kind is OCCUPIED",
    )

    @model_validator(mode="after")
    def _check_rover_id(self) -> "CellState":
        if self.kind is CellKind.OCCUPIED:
            if self.rover_id is None or self.rover_id < 1:
                raise ValueError("occupied cells need a positive rover_id")
        elif self.rover_id is not None:
            raise ValueError(f"{self.kind.value} cells cannot carry a rover_id")
        return self

    @classmethod
    def occupied_by(cls, rover_id: int) -> "CellState":
        return cls(kind=CellKind.OCCUPIED, rover_id=rover_id)

    @property
    def is_free(self) -> bool:
        return self.kind is CellKind.FREE

    def describe(self) -> str:
        if self.kind is CellKind.OCCUPIED:
            return f"occupied by rover {self.rover_id}"
        return self.kind.value


FREE_CELL = CellState(kind=CellKind.FREE)
OBSTACLE_CELL = CellState(kind=CellKind.OBSTACLE)


class GridSnapshot(BaseModel):
    """Immutable copy of the grid, indexed ``cells[x][y]``."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=1, description="Extent along x (number of rows)")
    height: int = Field(..., ge=1, description="Extent along y (number of columns)")
    cells: Tuple[Tuple[CellState, ...], ...]

    def cell(self, x: int, y: int) -> CellState:
        return self.cells[x][y]

    def rover_positions(self) -> Dict[int, Tuple[int, int]]:
        """Map rover id -> (x, y) for every occupied cell."""
        positions: Dict[int, Tuple[int, int]] = {}
        for x, row in enumerate(self.cells):
            for y, cell in enumerate(row):
                if cell.kind is CellKind.OCCUPIED:
                    positions[cell.rover_id] = (x, y)
        return positions
