"""Plain-text reports built from snapshots.

These read only immutable snapshots, never live engine state, so they can be
called at any point of a run (e.g. from a round listener).
"""

from typing import Dict, Iterable, List

from .environment import CellKind, GridSnapshot
from .schemas import RoverEvent

_SCENE_SYMBOLS: Dict[CellKind, str] = {
    CellKind.FREE: ".",
    CellKind.OBSTACLE: "#",
}


def format_route(rover_id: int, history: Iterable[RoverEvent]) -> str:
    """One line per history entry, headed by the rover id.

    Example:
        Rover 1 route:
          setup: 0,0,S
          command: f
          position: 1,0,S
    """
    lines: List[str] = [f"Rover {rover_id} route:"]
    for event in history:
        lines.append(f"  {event.kind.value}: {event.detail}")
    return "\n".join(lines)


def format_team_log(events: Iterable[RoverEvent], header: str = "Team log:") -> str:
    """One ``id: kind: detail`` line per team log entry, in log order."""
    lines: List[str] = [header]
    for event in events:
        rover_id, kind, detail = event.as_triple()
        lines.append(f"  {rover_id}: {kind}: {detail}")
    return "\n".join(lines)


def format_scene(snapshot: GridSnapshot, header: str = "Scene:") -> str:
    """Grid dump: ``.`` free, ``#`` obstacle, rover id for occupied cells.

    Rows are x from 0 (north) downwards; columns are y from 0 (west).
    """
    # Pad to the widest id so columns stay aligned past rover 9
    ids = snapshot.rover_positions()
    cell_width = max([1] + [len(str(rover_id)) for rover_id in ids])

    lines: List[str] = [header]
    for row in snapshot.cells:
        symbols = []
        for cell in row:
            if cell.kind is CellKind.OCCUPIED:
                symbols.append(str(cell.rover_id).rjust(cell_width))
            else:
                symbols.append(_SCENE_SYMBOLS[cell.kind].rjust(cell_width))
        lines.append(" ".join(symbols))
    return "\n".join(lines)
