"""Command interpreter.

Turns one command character into an action:

    l  rotate 90 degrees counter-clockwise
    r  rotate 90 degrees clockwise
    f  move one cell along the heading
    b  move one cell against the heading

Anything else is an invalid command: it is recorded and otherwise ignored.
Every command, valid or not, is recorded verbatim before its effect so the
log captures intent as well as outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from .schemas import (
    HEADING_DELTAS,
    CollisionOutcome,
    EventKind,
    rotate_ccw,
    rotate_cw,
)

if TYPE_CHECKING:
    from .movement import MovementExecutor
    from .rover import Rover
    from .session import SimulationSession

INVALID_COMMAND_DETAIL = "Invalid cmd!"


@dataclass(frozen=True)
class Rotate:
    clockwise: bool


@dataclass(frozen=True)
class Translate:
    # +1 moves along the heading, -1 against it
    sign: int


@dataclass(frozen=True)
class Invalid:
    command: str


Action = Union[Rotate, Translate, Invalid]

_ACTIONS = {
    "l": Rotate(clockwise=False),
    "r": Rotate(clockwise=True),
    "f": Translate(sign=1),
    "b": Translate(sign=-1),
}


def interpret(command: str) -> Action:
    """Classify a single command character."""
    return _ACTIONS.get(command, Invalid(command))


def target_cell(rover: "Rover", sign: int) -> tuple[int, int]:
    """Cell one step along (sign=+1) or against (sign=-1) the rover heading."""
    dx, dy = HEADING_DELTAS[rover.heading]
    return (rover.x + sign * dx, rover.y + sign * dy)


class CommandInterpreter:
    """Applies commands to rovers of one session."""

    def __init__(self, session: "SimulationSession", movement: "MovementExecutor"):
        self.session = session
        self.movement = movement

    def process(self, rover: "Rover", command: str) -> Optional[CollisionOutcome]:
        """Record and apply one command.

        Returns:
            The collision outcome for translations, None for rotations and
            invalid commands
        """
        self.session.record(rover, EventKind.COMMAND, command)
        action = interpret(command)

        if isinstance(action, Rotate):
            # Rotation cannot collide
            rover.heading = rotate_cw(rover.heading) if action.clockwise else rotate_ccw(rover.heading)
            self.session.record_position(rover)
            return None

        if isinstance(action, Translate):
            x, y = target_cell(rover, action.sign)
            return self.movement.move_to(rover, x, y)

        self.session.record(rover, EventKind.INVALID_COMMAND, INVALID_COMMAND_DETAIL)
        return None
