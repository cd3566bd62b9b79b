"""
Round-robin scheduler.

Drives command execution across the whole team. A round services every rover
that still has a pending command exactly once, in ascending id order, so
round k processes the k-th command of every rover that has one. Each command's
full effect (interpretation, collision detection, mutation, logging) completes
before the next rover is serviced.

Two modes share the same rounds:
1. run_to_completion() - repeat rounds until every queue is empty
2. step_once() - one round per external trigger; a trigger that finds every
   queue empty emits the run-complete signal once and is a no-op afterwards

Both are no-ops once all queues are empty and never reorder a rover's commands.
"""

from typing import Callable, List, Optional, Tuple

from .logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_ERROR,
    LOG_TAG_SUCCESS,
    log_deterministic,
    log_error,
    log_success,
)
from .schemas import RoverEvent, StepResult
from .session import SimulationSession

RoundListener = Callable[[int, Tuple[RoverEvent, ...]], None]
CompletionListener = Callable[[SimulationSession], None]


class Scheduler:
    """Orchestrates command execution for one session."""

    def __init__(
        self,
        session: SimulationSession,
        round_listeners: Optional[List[RoundListener]] = None,
        completion_listeners: Optional[List[CompletionListener]] = None,
    ):
        """Initialize the scheduler.

        Args:
            session: Session whose rovers and grid are driven
            round_listeners: Optional callables invoked after each round with
                (round_number, events_recorded_during_the_round). Renderers
                subscribe here instead of polling.
            completion_listeners: Optional callables invoked once, with the
                session, when the run-complete signal fires.
        """
        self.session = session
        self.round_listeners = round_listeners or []
        self.completion_listeners = completion_listeners or []
        self.rounds_completed = 0
        self._completion_signalled = False

    @property
    def is_complete(self) -> bool:
        return not self.session.has_pending_commands()

    def run_to_completion(self) -> int:
        """Run rounds until every queue is empty.

        Returns:
            Number of rounds executed by this call (0 when already complete;
            the run-complete signal still fires if it has not yet)
        """
        if self.is_complete:
            self._signal_completion()
            return 0

        if self.session.verbose:
            log_deterministic(f"  {LOG_TAG_DETERMINISTIC} [Scheduler] Running {len(self.session.rovers)} rovers to completion...")

        executed = 0
        while not self.is_complete:
            self._run_round()
            executed += 1

        self._signal_completion()
        return executed

    def step_once(self) -> StepResult:
        """Run exactly one round, or signal completion if nothing is pending."""
        if self.is_complete:
            self._signal_completion()
            return StepResult(round_number=self.rounds_completed, completed=True)

        processed, events = self._run_round()
        return StepResult(
            round_number=self.rounds_completed,
            commands_processed=processed,
            events=events,
        )

    def _run_round(self) -> Tuple[int, Tuple[RoverEvent, ...]]:
        """Dequeue and process one command per rover with pending commands."""
        log_start = len(self.session.team_log)
        processed = 0

        for rover in self.session.rovers_in_order():
            command = rover.next_command()
            if command is None:
                continue
            self.session.interpreter.process(rover, command)
            processed += 1

        self.rounds_completed += 1
        events = tuple(self.session.team_log[log_start:])

        if self.session.verbose:
            log_deterministic(f"  {LOG_TAG_DETERMINISTIC} [Scheduler] Round {self.rounds_completed}: {processed} commands")

        # Listener failures are reported but never abort the engine.
        for listener in self.round_listeners:
            try:
                listener(self.rounds_completed, events)
            except Exception as exc:  # pragma: no cover - diagnostic hook
                log_error(f"  {LOG_TAG_ERROR} [Scheduler] Round listener failed: {exc}")

        return processed, events

    def _signal_completion(self) -> None:
        if self._completion_signalled:
            return
        self._completion_signalled = True
        log_success(f"  {LOG_TAG_SUCCESS} Run complete after {self.rounds_completed} rounds")
        for listener in self.completion_listeners:
            try:
                listener(self.session)
            except Exception as exc:  # pragma: no cover - diagnostic hook
                log_error(f"  {LOG_TAG_ERROR} [Scheduler] Completion listener failed: {exc}")
