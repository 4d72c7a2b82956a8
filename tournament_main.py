"""
Kickerturnier: command-line entry point.

Usage:
    python tournament_main.py demo
    python tournament_main.py schedule
    python tournament_main.py result group 1 3 1
    python tournament_main.py show

Wires together:
    config → logging → state file → TournamentState → command → rich display

The state is loaded from the configured file before each command and saved
after every change through the state's change signal.
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path

from kickerturnier.cli.display import (
    console,
    display_matches,
    display_standings,
    display_state,
    display_teams,
)
from kickerturnier.config import Config, load_config
from kickerturnier.errors import TournamentError
from kickerturnier.store import StateStore
from kickerturnier.tournament.base import MatchPhase, Team
from kickerturnier.tournament.state import TournamentState

logger = logging.getLogger("kickerturnier")

_PHASES = {
    "group": MatchPhase.GROUP_STAGE,
    "final": MatchPhase.FINAL,
    "third": MatchPhase.THIRD_PLACE,
}


def _configure_logging(config: Config) -> None:
    log_dir = config.log_dir_path
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=config.logging.level_number,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.handlers.RotatingFileHandler(
                log_dir / "kickerturnier.log", maxBytes=1024 * 1024, backupCount=3,
                encoding="utf-8",
            ),
        ],
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kickerturnier", description="Table-football tournament manager")
    parser.add_argument("--config", default="config.yaml", help="path to config.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add-team", help="add a team of two players")
    add.add_argument("name")
    add.add_argument("player1")
    add.add_argument("player2")

    upd = sub.add_parser("update-team", help="rename a team or its players")
    upd.add_argument("team", help="1-based roster index or id prefix")
    upd.add_argument("--name")
    upd.add_argument("--player1")
    upd.add_argument("--player2")

    rem = sub.add_parser("remove-team", help="remove a team (only before scheduling)")
    rem.add_argument("team", help="1-based roster index or id prefix")

    res = sub.add_parser("result", help="record a match result")
    res.add_argument("phase", choices=sorted(_PHASES))
    res.add_argument("number", type=int)
    res.add_argument("goals_a", type=int)
    res.add_argument("goals_b", type=int)

    sub.add_parser("demo", help="load the five example teams into an empty roster")
    sub.add_parser("schedule", help="generate the round-robin group stage")
    sub.add_parser("finals", help="(re)generate final and third-place matches")
    sub.add_parser("standings", help="show the group table")
    sub.add_parser("show", help="show teams, matches, table and podium")
    sub.add_parser("reset", help="delete all matches, keep teams")
    sub.add_parser("clear", help="delete teams and matches")
    return parser


def _resolve_team(state: TournamentState, ref: str) -> Team:
    teams = state.teams
    if ref.isdigit() and 1 <= int(ref) <= len(teams):
        return teams[int(ref) - 1]
    found = [t for t in teams if str(t.id).startswith(ref.lower())]
    if len(found) != 1:
        raise ValueError(f"No unique team matches {ref!r}")
    return found[0]


def _run_command(args: argparse.Namespace, state: TournamentState) -> None:
    match args.command:
        case "add-team":
            state.add_team(Team(name=args.name, player1_name=args.player1, player2_name=args.player2))
            display_teams(state.teams)
        case "update-team":
            team = _resolve_team(state, args.team)
            state.update_team(team.id, name=args.name, player1_name=args.player1, player2_name=args.player2)
            display_teams(state.teams)
        case "remove-team":
            state.remove_team(_resolve_team(state, args.team).id)
            display_teams(state.teams)
        case "demo":
            state.load_example_teams()
            display_teams(state.teams)
        case "schedule":
            state.generate_group_stage()
            display_matches(state.matches)
        case "result":
            fixture = state.find_match(_PHASES[args.phase], args.number)
            if fixture is None:
                raise ValueError(f"No {args.phase} match #{args.number}")
            state.record_result(fixture.id, args.goals_a, args.goals_b)
            display_state(state)
        case "finals":
            state.generate_finals()
            display_matches(state.matches)
        case "standings":
            display_standings(state.standings())
        case "show":
            display_state(state)
        case "reset":
            state.reset_tournament()
        case "clear":
            state.clear_all()


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    config_path = Path(args.config)
    try:
        config = load_config(config_path) if config_path.exists() else Config()
    except ValueError as exc:
        console.print(f"[red]Config error:[/] {exc}")
        return 1

    _configure_logging(config)

    state = TournamentState(scoring=config.scoring.to_scoring_system())
    store = StateStore(config.state_path)
    if not store.restore(state) and state.last_load_error is not None:
        console.print(f"[red]Could not read {store.path}:[/] {state.last_load_error}")
        return 1
    store.attach(state)

    logger.debug("Running command %s", args.command)
    try:
        _run_command(args, state)
    except (TournamentError, ValueError) as exc:
        console.print(f"[red]Error:[/] {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
