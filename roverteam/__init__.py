"""
Roverteam - deterministic rover team simulation on a bounded grid.

Rovers execute pre-supplied command strings (l, r, f, b) round-robin, avoid
boundaries, obstacles and each other, and record every state transition in
their own history and in a shared team log.

No file I/O required. No global state.
Sessions own the grid, the rovers and the log; schedulers drive a session.
"""

__version__ = "0.1.0"

from .collision import detect
from .commands import CommandInterpreter, interpret
from .config import Config
from .environment import (
    CellKind,
    CellState,
    GridSnapshot,
    RoverGrid,
)
from .errors import (
    AgentSetupError,
    CellNotOccupiedError,
    CellOccupiedError,
    GridSetupError,
    InvalidHeadingError,
    OutOfBoundsError,
    RoverTeamError,
)
from .movement import MovementExecutor
from .report import format_route, format_scene, format_team_log
from .rover import Rover
from .scenario import ScenarioLoader, load_scenario
from .scheduler import Scheduler
from .schemas import (
    CollisionCue,
    CollisionOutcome,
    EventKind,
    Heading,
    OutcomeKind,
    RoverEvent,
    RoverSnapshot,
    StepResult,
    rotate_ccw,
    rotate_cw,
)
from .session import SimulationSession

__all__ = [
    # Engine
    "SimulationSession",
    "Scheduler",
    "RoverGrid",
    "Rover",
    "CommandInterpreter",
    "MovementExecutor",
    "detect",
    "interpret",
    "rotate_cw",
    "rotate_ccw",
    # Schemas
    "Heading",
    "EventKind",
    "RoverEvent",
    "RoverSnapshot",
    "CollisionOutcome",
    "CollisionCue",
    "OutcomeKind",
    "StepResult",
    "CellKind",
    "CellState",
    "GridSnapshot",
    # Errors
    "RoverTeamError",
    "OutOfBoundsError",
    "GridSetupError",
    "CellNotOccupiedError",
    "AgentSetupError",
    "CellOccupiedError",
    "InvalidHeadingError",
    # Setup and reports
    "Config",
    "ScenarioLoader",
    "load_scenario",
    "format_route",
    "format_team_log",
    "format_scene",
]
