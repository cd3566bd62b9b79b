"""
Command-line harness for rover team scenarios.

Run:
    roverteam list
    roverteam run mars_base --routes --scene
    roverteam run crossroads --mode step --steps 2 --log
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import Config
from .errors import AgentSetupError, GridSetupError
from .logging_utils import LOG_TAG_ERROR, LOG_TAG_INFO, log_error, log_info
from .report import format_route, format_scene, format_team_log
from .scenario import ScenarioLoader
from .scheduler import Scheduler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roverteam",
        description="Simulate a team of rovers executing command strings on a grid.",
    )
    parser.add_argument(
        "--scenarios-dir",
        type=Path,
        default=None,
        help=f"Directory holding scenario JSON files (default: {Config.SCENARIOS_DIR})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List available scenarios")

    run_parser = subparsers.add_parser("run", help="Run a scenario")
    run_parser.add_argument(
        "scenario",
        nargs="?",
        default=Config.DEFAULT_SCENARIO,
        help=f"Scenario name (default: {Config.DEFAULT_SCENARIO})",
    )
    run_parser.add_argument(
        "--mode",
        choices=["complete", "step"],
        default="complete",
        help="complete: run every queue dry; step: trigger single rounds",
    )
    run_parser.add_argument(
        "--steps",
        type=int,
        default=1,
        help="Number of single-step triggers in step mode (default: 1)",
    )
    run_parser.add_argument("--routes", action="store_true", help="Print each rover's route")
    run_parser.add_argument("--log", action="store_true", help="Print the team log")
    run_parser.add_argument("--scene", action="store_true", help="Print initial and final scene")
    run_parser.add_argument("--verbose", action="store_true", help="Trace every event")
    return parser


def _list(loader: ScenarioLoader) -> int:
    names = loader.list_scenarios()
    if not names:
        log_info(f"{LOG_TAG_INFO} No scenarios found in {loader.scenarios_dir}")
        return 0
    for name in names:
        try:
            info = loader.get_scenario_info(name)
        except (json.JSONDecodeError, ValueError) as exc:
            log_error(f"{LOG_TAG_ERROR} {name}: unreadable scenario ({exc})")
            continue
        print(f"{name}: {info['name']} ({info['num_rovers']} rovers, {info['grid_size']}) - {info['description']}")
    return 0


def _run(loader: ScenarioLoader, args: argparse.Namespace) -> int:
    if args.steps < 1:
        log_error(f"{LOG_TAG_ERROR} --steps must be >= 1")
        return 2

    verbose = True if args.verbose else None
    try:
        session = loader.load(args.scenario, verbose=verbose)
    except FileNotFoundError as exc:
        log_error(f"{LOG_TAG_ERROR} {exc}")
        return 1
    except (AgentSetupError, GridSetupError, ValueError) as exc:
        log_error(f"{LOG_TAG_ERROR} Scenario '{args.scenario}' is invalid: {exc}")
        return 1

    info = loader.get_scenario_info(args.scenario)
    log_info(f"{LOG_TAG_INFO} {info['name']}: {len(session.rovers)} rovers on a {info['grid_size']} grid")

    if args.scene:
        print(format_scene(session.grid_snapshot(), header="Initial scene:"))

    scheduler = Scheduler(session)
    if args.mode == "complete":
        scheduler.run_to_completion()
    else:
        for _ in range(args.steps):
            result = scheduler.step_once()
            if result.completed:
                break
            print(f"Round {result.round_number}: {result.commands_processed} commands")

    if args.scene:
        print(format_scene(session.grid_snapshot(), header="Final scene:"))
    if args.routes:
        for snapshot in session.rover_snapshots():
            print(format_route(snapshot.rover_id, session.rover_history_snapshot(snapshot.rover_id)))
    if args.log:
        print(format_team_log(session.team_log_snapshot()))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    Config.validate()

    loader = ScenarioLoader(args.scenarios_dir)
    if args.command == "list":
        return _list(loader)
    return _run(loader, args)


if __name__ == "__main__":
    sys.exit(main())
