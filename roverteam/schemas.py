"""
Pydantic schemas for the rover team engine.

Everything handed to callers (events, snapshots, collision outcomes, step
results) is a frozen model, so snapshots are immutable copies rather than live
references into engine state.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from roverteam.errors import InvalidHeadingError


# ============================================================================
# Headings
# ============================================================================


class Heading(str, Enum):
    """Cardinal direction a rover faces."""

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @classmethod
    def parse(cls, value: "Heading | str") -> "Heading":
        """Accept a Heading or its one-letter code; raise InvalidHeadingError otherwise."""
        if isinstance(value, Heading):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidHeadingError(value) from None


# Clockwise order; rotating is a step along this cycle.
_CLOCKWISE: Tuple[Heading, ...] = (Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST)

# (dx, dy) for one forward step. x grows southwards, y grows eastwards.
HEADING_DELTAS: Dict[Heading, Tuple[int, int]] = {
    Heading.NORTH: (-1, 0),
    Heading.EAST: (0, 1),
    Heading.SOUTH: (1, 0),
    Heading.WEST: (0, -1),
}


def rotate_cw(heading: Heading) -> Heading:
    """N -> E -> S -> W -> N."""
    return _CLOCKWISE[(_CLOCKWISE.index(heading) + 1) % 4]


def rotate_ccw(heading: Heading) -> Heading:
    """N -> W -> S -> E -> N."""
    return _CLOCKWISE[(_CLOCKWISE.index(heading) - 1) % 4]


# ============================================================================
# Events
# ============================================================================


class EventKind(str, Enum):
    """Kinds of entries written to rover histories and the team log."""

    SETUP = "setup"
    COMMAND = "command"
    POSITION = "position"
    INVALID_COMMAND = "invalid_command"
    BOUNDARY = "boundary"
    OBSTACLE = "obstacle"
    ROVER_AHEAD = "rover_ahead"
    FORCED_ROTATION = "forced_rotation"


COLLISION_EVENT_KINDS = frozenset(
    {EventKind.BOUNDARY, EventKind.OBSTACLE, EventKind.ROVER_AHEAD}
)


class RoverEvent(BaseModel):
    """One entry of a rover history and of the team log.

    The team log is the ordered sequence of ``(rover_id, kind, detail)``
    triples. Position-bearing events (setup, position) also carry the
    structured coordinates and heading so consumers need not parse ``detail``.
    """

    model_config = ConfigDict(frozen=True)

    rover_id: int = Field(..., ge=1, description="Rover that produced the event")
    kind: EventKind
    # Verbatim command char, "x,y,H" snapshot, or a collision message
    detail: str
    position: Optional[Tuple[int, int]] = None
    heading: Optional[Heading] = None

    def as_triple(self) -> Tuple[int, str, str]:
        return (self.rover_id, self.kind.value, self.detail)


def format_position(x: int, y: int, heading: Heading) -> str:
    """Snapshot text used in event details, e.g. ``"2,3,S"``."""
    return f"{x},{y},{heading.value}"


# ============================================================================
# Collision outcomes
# ============================================================================


class OutcomeKind(str, Enum):
    CLEAR = "clear"
    BOUNDARY = "boundary"
    OBSTACLE = "obstacle"
    ROVER_AHEAD = "rover_ahead"


class CollisionOutcome(BaseModel):
    """Result of probing a target cell before a move."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    rover_id: Optional[int] = Field(None, description="Blocking rover for ROVER_AHEAD")

    @property
    def blocked(self) -> bool:
        return self.kind is not OutcomeKind.CLEAR

    @property
    def event_kind(self) -> EventKind:
        """History/log kind for a blocked outcome."""
        if not self.blocked:
            raise ValueError("A clear outcome has no collision event kind")
        return EventKind(self.kind.value)

    def describe(self) -> str:
        if self.kind is OutcomeKind.BOUNDARY:
            return "Boundary!"
        if self.kind is OutcomeKind.OBSTACLE:
            return "Obstacle!"
        if self.kind is OutcomeKind.ROVER_AHEAD:
            return f"Rover {self.rover_id} ahead!"
        return "Clear"


CLEAR = CollisionOutcome(kind=OutcomeKind.CLEAR)
BOUNDARY = CollisionOutcome(kind=OutcomeKind.BOUNDARY)
OBSTACLE = CollisionOutcome(kind=OutcomeKind.OBSTACLE)


class CollisionCue(BaseModel):
    """Presentation-only notice that a rover collided and turned right.

    The forced rotation is already committed when the cue is published.
    ``delay_seconds`` tells a renderer how long to animate before showing it.
    """

    model_config = ConfigDict(frozen=True)

    rover_id: int
    position: Tuple[int, int]
    outcome: CollisionOutcome
    heading_after: Heading
    delay_seconds: float = Field(..., ge=0)


# ============================================================================
# Snapshots and scheduler results
# ============================================================================


class RoverSnapshot(BaseModel):
    """Immutable copy of one rover's state."""

    model_config = ConfigDict(frozen=True)

    rover_id: int
    x: int
    y: int
    heading: Heading
    pending_commands: str = Field("", description="Commands not yet dequeued, in order")
    history_length: int = 0
    # Renderer hints such as the display color; ignored by the engine
    metadata: Dict[str, str] = Field(default_factory=dict)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


class StepResult(BaseModel):
    """What a single scheduler trigger did."""

    model_config = ConfigDict(frozen=True)

    round_number: int = Field(..., ge=0, description="Rounds executed so far")
    commands_processed: int = Field(0, ge=0)
    events: Tuple[RoverEvent, ...] = ()
    completed: bool = Field(False, description="True when the trigger found every queue already empty")
