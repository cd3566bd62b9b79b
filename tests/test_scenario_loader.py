"""Tests for scenario loading via ScenarioLoader."""

import json
from pathlib import Path

import pytest

from roverteam.environment import CellKind
from roverteam.errors import CellOccupiedError, GridSetupError
from roverteam.scenario import ScenarioLoader
from roverteam.scheduler import Scheduler

SCENARIOS_DIR = Path(__file__).resolve().parent.parent / "examples" / "scenarios"


def test_loads_bundled_mars_base():
    loader = ScenarioLoader(scenarios_dir=SCENARIOS_DIR)
    session = loader.load("mars_base")

    assert len(session.rovers) == 7
    assert session.grid.width == 10 and session.grid.height == 10
    assert session.grid.cell_state(2, 3).kind is CellKind.OBSTACLE
    first = session.rover_snapshot(1)
    assert first.position == (0, 0)
    assert first.heading.value == "S"
    assert first.metadata == {"color": "red"}


def test_mars_base_runs_to_completion_without_overlap():
    session = ScenarioLoader(scenarios_dir=SCENARIOS_DIR).load("mars_base")

    Scheduler(session).run_to_completion()

    positions = [snap.position for snap in session.rover_snapshots()]
    assert len(set(positions)) == len(positions)
    assert all(snap.pending_commands == "" for snap in session.rover_snapshots())
    assert session.grid_snapshot().rover_positions() == {
        snap.rover_id: snap.position for snap in session.rover_snapshots()
    }


def test_list_and_info():
    loader = ScenarioLoader(scenarios_dir=SCENARIOS_DIR)

    assert "mars_base" in loader.list_scenarios()
    assert "crossroads" in loader.list_scenarios()
    info = loader.get_scenario_info("mars_base")
    assert info["num_rovers"] == 7
    assert info["grid_size"] == "10x10"


def test_missing_scenario(tmp_path):
    loader = ScenarioLoader(scenarios_dir=tmp_path)

    with pytest.raises(FileNotFoundError):
        loader.load("nowhere")
    assert loader.list_scenarios() == []


def test_integer_rows_and_position_pairs(tmp_path):
    (tmp_path / "tiny.json").write_text(json.dumps({
        "name": "Tiny",
        "description": "two cells",
        "grid": [[0, -1], [0, 0]],
        "rovers": [{"position": [1, 1], "heading": "N", "commands": "f"}],
    }))

    session = ScenarioLoader(scenarios_dir=tmp_path).load("tiny")

    assert session.rover_snapshot(1).position == (1, 1)
    assert session.grid.cell_state(0, 1).kind is CellKind.OBSTACLE


def test_build_session_validation_errors():
    loader = ScenarioLoader()

    with pytest.raises(ValueError, match="missing required fields"):
        loader.build_session({"name": "x", "grid": ["."]})
    with pytest.raises(ValueError, match="heading"):
        loader.build_session({"name": "x", "description": "", "grid": ["."], "rovers": [{"x": 0, "y": 0}]})
    with pytest.raises(ValueError, match="'x' and 'y'"):
        loader.build_session({"name": "x", "description": "", "grid": ["."], "rovers": [{"heading": "N"}]})
    with pytest.raises(GridSetupError):
        loader.build_session({"name": "x", "description": "", "grid": [".?"], "rovers": []})


@pytest.mark.parametrize(
    "rover, message",
    [
        ({"x": 1.9, "y": 2, "heading": "N"}, "integers"),
        ({"x": 1, "y": True, "heading": "N"}, "integers"),
        ({"position": [0, "1"], "heading": "N"}, "integers"),
        ({"position": [0], "heading": "N"}, "pair"),
        ({"x": 0, "y": 0, "heading": "N", "metadata": ["red"]}, "metadata"),
        ("rover", "must be an object"),
    ],
)
def test_malformed_rover_entries_rejected(rover, message):
    data = {"name": "x", "description": "", "grid": ["...", "..."], "rovers": [rover]}

    with pytest.raises(ValueError, match=message):
        ScenarioLoader().build_session(data)


def test_info_rejects_non_object_file(tmp_path):
    (tmp_path / "listy.json").write_text("[]")

    with pytest.raises(ValueError, match="JSON object"):
        ScenarioLoader(scenarios_dir=tmp_path).get_scenario_info("listy")


def test_setup_errors_propagate():
    loader = ScenarioLoader()

    with pytest.raises(CellOccupiedError):
        loader.build_session({
            "name": "x",
            "description": "",
            "grid": [".#"],
            "rovers": [{"x": 0, "y": 1, "heading": "N"}],
        })


def test_session_kwargs_forwarded():
    cues = []
    session = ScenarioLoader().build_session(
        {
            "name": "x",
            "description": "",
            "grid": ["."],
            "rovers": [{"x": 0, "y": 0, "heading": "N", "commands": "f"}],
        },
        verbose=False,
        cue_listeners=[cues.append],
    )

    Scheduler(session).run_to_completion()

    assert len(cues) == 1
    assert cues[0].outcome.describe() == "Boundary!"
