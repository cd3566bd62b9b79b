"""
Scenario loading for JSON-defined rover missions.

A scenario describes the initial grid and the rover team. Loading one returns
a ready SimulationSession with every rover created in listed order, so ids
follow the file.

Scenario file structure:
```json
{
  "name": "Mars Base",
  "description": "...",
  "grid": [
    "..........",
    "...#......",
    "...##....."
  ],
  "rovers": [
    {"x": 0, "y": 0, "heading": "S", "commands": "ffrf", "metadata": {"color": "red"}}
  ]
}
```

Grid rows are either strings (``.`` free, ``#`` obstacle, ``1``-``9``
pre-seeded rover id) or lists of matrix markers (0 free, -1 obstacle, n > 0
rover id). Rover start cells may be given as ``x``/``y`` or as
``"position": [x, y]``.

Usage:
    loader = ScenarioLoader()
    session = loader.load("mars_base")
    Scheduler(session).run_to_completion()
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import Config
from .environment import FREE_MARKER, OBSTACLE_MARKER, RoverGrid
from .errors import GridSetupError
from .session import SimulationSession

_CHAR_MARKERS = {".": FREE_MARKER, "#": OBSTACLE_MARKER}


class ScenarioLoader:
    """Load and validate rover scenarios from JSON files.

    Directory structure:
    - Default: Config.SCENARIOS_DIR ({PROJECT_ROOT}/examples/scenarios)
    - Override via constructor: ScenarioLoader(Path("/custom/scenarios"))
    - Scenario files: {scenario_name}.json (e.g., "mars_base.json")

    Validation:
    - Required fields: name, description, grid, rovers
    - Each rover must give a start cell and a heading
    - Raises ValueError if validation fails; setup errors (occupied start
      cell, bad heading) propagate from SimulationSession.create_rover
    """

    def __init__(self, scenarios_dir: Optional[Path] = None):
        self.scenarios_dir = Path(scenarios_dir) if scenarios_dir else Config.SCENARIOS_DIR

    def load(self, scenario_name: str, **session_kwargs: Any) -> SimulationSession:
        """Load a scenario by name and build its session.

        Args:
            scenario_name: Name of scenario (without .json extension)
            **session_kwargs: Forwarded to SimulationSession (verbose,
                collision_cue_seconds, cue_listeners)

        Raises:
            FileNotFoundError: If scenario file doesn't exist in scenarios_dir
            ValueError: If scenario JSON is missing fields or malformed
            json.JSONDecodeError: If file contains invalid JSON
        """
        scenario_path = self.scenarios_dir / f"{scenario_name}.json"

        if not scenario_path.exists():
            raise FileNotFoundError(
                f"Scenario '{scenario_name}' not found at {scenario_path}"
            )

        data = json.loads(scenario_path.read_text())
        return self.build_session(data, **session_kwargs)

    def build_session(self, data: Dict[str, Any], **session_kwargs: Any) -> SimulationSession:
        """Build a session from already-parsed scenario data."""
        self._validate_scenario(data)

        grid = RoverGrid.from_matrix(self._parse_grid(data["grid"]))
        session = SimulationSession(grid, **session_kwargs)

        for rover_data in data["rovers"]:
            x, y = self._parse_position(rover_data)
            session.create_rover(
                x,
                y,
                rover_data["heading"],
                rover_data.get("commands", ""),
                metadata={str(k): str(v) for k, v in rover_data.get("metadata", {}).items()},
            )
        return session

    def _validate_scenario(self, data: Dict[str, Any]) -> None:
        required = ["name", "description", "grid", "rovers"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Scenario missing required fields: {missing}")

        if not isinstance(data["grid"], list) or not data["grid"]:
            raise ValueError("Scenario grid must be a non-empty list of rows")

        if not isinstance(data["rovers"], list):
            raise ValueError("Scenario rovers must be a list")

        for index, rover in enumerate(data["rovers"]):
            if not isinstance(rover, dict):
                raise ValueError(f"Rover entry {index} must be an object")
            if "heading" not in rover:
                raise ValueError(f"Rover entry {index} is missing 'heading'")
            if "position" in rover:
                raw = rover["position"]
                if not isinstance(raw, (list, tuple)) or len(raw) != 2:
                    raise ValueError(
                        f"Rover entry {index} position must be an [x, y] pair (got {raw!r})"
                    )
                coordinates = list(raw)
            elif "x" in rover and "y" in rover:
                coordinates = [rover["x"], rover["y"]]
            else:
                raise ValueError(
                    f"Rover entry {index} needs 'x' and 'y' or a 'position' pair"
                )
            # bool is an int subclass; reject it along with floats and strings
            if any(isinstance(c, bool) or not isinstance(c, int) for c in coordinates):
                raise ValueError(
                    f"Rover entry {index} coordinates must be integers (got {coordinates!r})"
                )
            if not isinstance(rover.get("commands", ""), str):
                raise ValueError(f"Rover entry {index} commands must be a string")
            if not isinstance(rover.get("metadata", {}), dict):
                raise ValueError(f"Rover entry {index} metadata must be an object")

    def _parse_grid(self, rows: List[Any]) -> List[List[int]]:
        """Convert string or integer rows into matrix markers."""
        matrix: List[List[int]] = []
        for x, row in enumerate(rows):
            if isinstance(row, str):
                parsed: List[int] = []
                for y, char in enumerate(row):
                    if char in _CHAR_MARKERS:
                        parsed.append(_CHAR_MARKERS[char])
                    elif char.isdigit() and char != "0":
                        parsed.append(int(char))
                    else:
                        raise GridSetupError(f"Unknown grid character {char!r} at ({x},{y})")
                matrix.append(parsed)
            elif isinstance(row, list):
                matrix.append(list(row))
            else:
                raise GridSetupError(f"Grid row {x} must be a string or a list")
        return matrix

    def _parse_position(self, data: Dict[str, Any]) -> Tuple[int, int]:
        # Accepts {"x": 1, "y": 2} or {"position": [1, 2]}; types checked in _validate_scenario
        if "position" in data:
            x, y = data["position"]
            return x, y
        return data["x"], data["y"]

    def list_scenarios(self) -> List[str]:
        """List all available scenario names (without .json extension)."""
        if not self.scenarios_dir.exists():
            return []

        return sorted(
            f.stem for f in self.scenarios_dir.glob("*.json")
            if not f.name.startswith("_")
        )

    def get_scenario_info(self, scenario_name: str) -> Dict[str, Any]:
        """Get scenario metadata without building a session."""
        scenario_path = self.scenarios_dir / f"{scenario_name}.json"
        data = json.loads(scenario_path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Scenario '{scenario_name}' must be a JSON object")
        grid = data.get("grid", [])

        return {
            "name": data.get("name", scenario_name),
            "description": data.get("description", "No description"),
            "num_rovers": len(data.get("rovers", [])),
            "grid_size": f"{len(grid)}x{len(grid[0]) if grid else 0}",
        }


def load_scenario(scenario_name: str, **session_kwargs: Any) -> SimulationSession:
    """Convenience function to load a scenario from Config.SCENARIOS_DIR."""
    loader = ScenarioLoader()
    return loader.load(scenario_name, **session_kwargs)
