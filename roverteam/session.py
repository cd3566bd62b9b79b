"""
Simulation session: the explicit owner of all mutable engine state.

A session holds the grid, the id -> rover mapping and the team event log, and
is handed by reference to the scheduler. It is also the single recording
authority: every event goes through ``record`` so a rover's history and the
team log can never disagree about order.

Usage:
    session = SimulationSession.from_matrix([[0, 0, 0], [0, -1, 0], [0, 0, 0]])
    rover_id = session.create_rover(0, 0, "S", "ffrff")
    Scheduler(session).run_to_completion()
    print(session.rover_snapshot(rover_id))
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .commands import CommandInterpreter
from .config import Config
from .environment import GridSnapshot, RoverGrid
from .errors import CellOccupiedError, OutOfBoundsError
from .logging_utils import (
    LOG_TAG_COLLISION,
    LOG_TAG_DETERMINISTIC,
    log_collision,
    log_deterministic,
)
from .movement import CueListener, MovementExecutor
from .rover import Rover
from .schemas import (
    COLLISION_EVENT_KINDS,
    EventKind,
    Heading,
    RoverEvent,
    RoverSnapshot,
    format_position,
)


class SimulationSession:
    """Grid, rovers and team log for one simulation run."""

    def __init__(
        self,
        grid: RoverGrid,
        *,
        verbose: Optional[bool] = None,
        collision_cue_seconds: Optional[float] = None,
        cue_listeners: Optional[List[CueListener]] = None,
    ):
        """Create an empty session over ``grid``.

        Args:
            grid: Occupancy grid; pre-seeded rover ids in it are reserved
            verbose: Print one trace line per event (defaults to Config.VERBOSE)
            collision_cue_seconds: Delay advertised in collision cues
                (defaults to Config.COLLISION_CUE_SECONDS)
            cue_listeners: Callables notified after each collision, e.g. a
                renderer that animates the blocked rover before turning it
        """
        self.grid = grid
        self.verbose = Config.VERBOSE if verbose is None else verbose
        self.rovers: Dict[int, Rover] = {}
        self.team_log: List[RoverEvent] = []
        self._next_id = 1

        self.movement = MovementExecutor(
            self,
            cue_seconds=(
                Config.COLLISION_CUE_SECONDS
                if collision_cue_seconds is None
                else collision_cue_seconds
            ),
            cue_listeners=cue_listeners,
        )
        self.interpreter = CommandInterpreter(self, self.movement)

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]], **kwargs) -> "SimulationSession":
        """Create a session over a grid built from marker rows (see RoverGrid.from_matrix)."""
        return cls(RoverGrid.from_matrix(matrix), **kwargs)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def create_rover(
        self,
        x: int,
        y: int,
        heading: "Heading | str",
        commands: Iterable[str] = "",
        metadata: Optional[Dict[str, str]] = None,
    ) -> int:
        """Add a rover at (x, y) and claim its start cell.

        Returns:
            The new rover id (sequential from 1, skipping pre-seeded ids)

        Raises:
            OutOfBoundsError: Start cell outside the grid
            CellOccupiedError: Start cell holds an obstacle or another rover
            InvalidHeadingError: Heading is not one of N, E, S, W
        """
        # Every check runs before any mutation so a rejected setup leaves no trace.
        if not self.grid.is_in_bounds(x, y):
            raise OutOfBoundsError(x=x, y=y, width=self.grid.width, height=self.grid.height)
        cell = self.grid.cell_state(x, y)
        if not cell.is_free:
            raise CellOccupiedError(cell=(x, y), state=cell.describe())
        parsed_heading = Heading.parse(heading)

        rover_id = self._allocate_id()
        self.grid.place(rover_id, x, y)
        rover = Rover(rover_id, x, y, parsed_heading, commands, metadata)
        self.rovers[rover_id] = rover
        self.record(
            rover,
            EventKind.SETUP,
            format_position(x, y, parsed_heading),
            position=(x, y),
            heading=parsed_heading,
        )
        return rover_id

    def _allocate_id(self) -> int:
        reserved = self.grid.occupied_ids()
        candidate = self._next_id
        while candidate in reserved:
            candidate += 1
        self._next_id = candidate + 1
        return candidate

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record(
        self,
        rover: Rover,
        kind: EventKind,
        detail: str,
        *,
        position: Optional[Tuple[int, int]] = None,
        heading: Optional[Heading] = None,
    ) -> RoverEvent:
        """Append one event to the rover history and the team log."""
        event = RoverEvent(
            rover_id=rover.rover_id,
            kind=kind,
            detail=detail,
            position=position,
            heading=heading,
        )
        rover.append_history(event)
        self.team_log.append(event)
        if self.verbose:
            self._trace(event)
        return event

    def record_position(self, rover: Rover) -> RoverEvent:
        """Record the rover's current (x, y, heading) snapshot."""
        return self.record(
            rover,
            EventKind.POSITION,
            format_position(rover.x, rover.y, rover.heading),
            position=rover.position,
            heading=rover.heading,
        )

    def _trace(self, event: RoverEvent) -> None:
        if event.kind in COLLISION_EVENT_KINDS or event.kind is EventKind.FORCED_ROTATION:
            log_collision(f"  {LOG_TAG_COLLISION} [Rover {event.rover_id}] {event.kind.value}: {event.detail}")
        else:
            log_deterministic(f"  {LOG_TAG_DETERMINISTIC} [Rover {event.rover_id}] {event.kind.value}: {event.detail}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def rovers_in_order(self) -> List[Rover]:
        return [self.rovers[rover_id] for rover_id in sorted(self.rovers)]

    def has_pending_commands(self) -> bool:
        return any(rover.has_commands for rover in self.rovers.values())

    def _get_rover(self, rover_id: int) -> Rover:
        try:
            return self.rovers[rover_id]
        except KeyError:
            raise KeyError(f"Rover {rover_id} not found") from None

    def grid_snapshot(self) -> GridSnapshot:
        return self.grid.snapshot()

    def rover_snapshot(self, rover_id: int) -> RoverSnapshot:
        return self._get_rover(rover_id).snapshot()

    def rover_snapshots(self) -> Tuple[RoverSnapshot, ...]:
        return tuple(rover.snapshot() for rover in self.rovers_in_order())

    def team_log_snapshot(self) -> Tuple[RoverEvent, ...]:
        return tuple(self.team_log)

    def rover_history_snapshot(self, rover_id: int) -> Tuple[RoverEvent, ...]:
        return self._get_rover(rover_id).history
