"""Rover state holder.

A rover owns its position, heading, FIFO command queue and append-only
history. It makes no decisions: the command interpreter and movement executor
change its heading and position, the scheduler only dequeues commands.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Tuple

from .schemas import Heading, RoverEvent, RoverSnapshot


class Rover:
    """One rover of the team."""

    def __init__(
        self,
        rover_id: int,
        x: int,
        y: int,
        heading: Heading,
        commands: Iterable[str] = "",
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.rover_id = rover_id
        self.x = x
        self.y = y
        self.heading = heading
        # Commands are only ever enqueued here, at construction.
        self._commands: Deque[str] = deque(commands)
        self._history: List[RoverEvent] = []
        self.metadata: Dict[str, str] = dict(metadata or {})

    def __repr__(self) -> str:
        return (
            f"Rover(id={self.rover_id}, pos=({self.x},{self.y}), "
            f"heading={self.heading.value}, pending={len(self._commands)})"
        )

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def has_commands(self) -> bool:
        return bool(self._commands)

    @property
    def pending_commands(self) -> str:
        return "".join(self._commands)

    def next_command(self) -> Optional[str]:
        """Dequeue the front command, or return None when the queue is empty."""
        if not self._commands:
            return None
        return self._commands.popleft()

    def append_history(self, event: RoverEvent) -> None:
        self._history.append(event)

    @property
    def history(self) -> Tuple[RoverEvent, ...]:
        return tuple(self._history)

    def snapshot(self) -> RoverSnapshot:
        return RoverSnapshot(
            rover_id=self.rover_id,
            x=self.x,
            y=self.y,
            heading=self.heading,
            pending_commands=self.pending_commands,
            history_length=len(self._history),
            metadata=dict(self.metadata),
        )
