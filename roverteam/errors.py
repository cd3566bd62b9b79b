"""
Exceptions raised by the rover team engine.

Movement-time conflicts (boundary, obstacle, rover ahead) are NOT exceptions;
they are collision outcomes resolved by the forced-rotation policy. The
classes here cover programming errors (bad grid queries) and setup failures
reported back to whoever is building a session.
"""

from typing import Tuple


class RoverTeamError(Exception):
    """Base class for every error raised by roverteam."""


# =============================
# Grid errors
# =============================

class OutOfBoundsError(RoverTeamError, IndexError):
    """Raised when a grid cell is queried or mutated outside the grid."""

    def __init__(self, *, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(
            f"Cell ({x},{y}) is outside the {width}x{height} grid "
            f"(valid x in [0,{width}), y in [0,{height}))"
        )


class GridSetupError(RoverTeamError, ValueError):
    """Raised when an initial grid matrix is empty, ragged or uses unknown markers."""


class CellNotOccupiedError(RoverTeamError):
    """Raised when vacating a cell that holds no rover."""

    def __init__(self, *, cell: Tuple[int, int], state: str) -> None:
        self.cell = cell
        self.state = state
        super().__init__(f"Cannot vacate cell {cell}: it is {state}, not occupied by a rover")


# =============================
# Setup errors
# =============================

class AgentSetupError(RoverTeamError):
    """Raised when a rover cannot be created. No partial state is left behind."""


class CellOccupiedError(AgentSetupError):
    """Raised when a rover is placed on a cell that is not free."""

    def __init__(self, *, cell: Tuple[int, int], state: str) -> None:
        self.cell = cell
        self.state = state
        message = (
            f"Cell {cell} is not free ({state}).\n"
            "Remediation tips:\n"
            "  - Pick a start cell marked free in the grid matrix\n"
            "  - Check that no earlier rover already starts on this cell"
        )
        super().__init__(message)


class InvalidHeadingError(AgentSetupError, ValueError):
    """Raised when a rover heading is not one of N, E, S, W."""

    def __init__(self, heading: object) -> None:
        self.heading = heading
        super().__init__(
            f"Invalid heading {heading!r}: expected one of 'N', 'E', 'S', 'W'"
        )
