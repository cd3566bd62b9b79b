"""Movement executor and collision resolution.

A translation either commits (grid and rover position updated together) or
is blocked. A blocked move never changes the grid; the rover records the
collision and turns right once. That forced rotation is committed right away;
only its on-screen animation is deferred, by handing a CollisionCue to
listeners that own the presentation timing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional

from .collision import detect
from .logging_utils import LOG_TAG_ERROR, log_error
from .schemas import CollisionCue, CollisionOutcome, EventKind, rotate_cw

if TYPE_CHECKING:
    from .rover import Rover
    from .session import SimulationSession

CueListener = Callable[[CollisionCue], None]

FORCED_ROTATION_DETAIL = "R"


class MovementExecutor:
    """Moves rovers of one session across its grid."""

    def __init__(
        self,
        session: "SimulationSession",
        *,
        cue_seconds: float = 1.0,
        cue_listeners: Optional[List[CueListener]] = None,
    ):
        self.session = session
        self.cue_seconds = cue_seconds
        self.cue_listeners: List[CueListener] = list(cue_listeners or [])

    def move_to(self, rover: "Rover", x: int, y: int) -> CollisionOutcome:
        """Move ``rover`` to (x, y) or resolve the collision that prevents it."""
        grid = self.session.grid
        outcome = detect(grid, x, y)

        if not outcome.blocked:
            grid.vacate(rover.x, rover.y)
            grid.place(rover.rover_id, x, y)
            rover.x, rover.y = x, y
            self.session.record_position(rover)
            return outcome

        self.session.record(rover, outcome.event_kind, outcome.describe())
        self.force_rotation(rover)
        self._publish_cue(rover, outcome)
        return outcome

    def force_rotation(self, rover: "Rover") -> None:
        """Turn a blocked rover clockwise once and log it.

        Uses the same transform as the ``r`` command whatever the cause.
        """
        self.session.record(rover, EventKind.FORCED_ROTATION, FORCED_ROTATION_DETAIL)
        rover.heading = rotate_cw(rover.heading)
        self.session.record_position(rover)

    def _publish_cue(self, rover: "Rover", outcome: CollisionOutcome) -> None:
        if not self.cue_listeners:
            return
        cue = CollisionCue(
            rover_id=rover.rover_id,
            position=rover.position,
            outcome=outcome,
            heading_after=rover.heading,
            delay_seconds=self.cue_seconds,
        )
        # Cues are presentation only; a failing renderer must not break the run.
        for listener in self.cue_listeners:
            try:
                listener(cue)
            except Exception as exc:  # pragma: no cover - diagnostic hook
                log_error(f"  {LOG_TAG_ERROR} [Cue] Listener failed: {exc}")
