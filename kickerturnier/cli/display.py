"""
Rich-based rendering of the tournament state for the command-line driver.

This is the only place where terminal output happens.  Everything here reads
from TournamentState; nothing mutates it.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from kickerturnier.tournament.base import Match, MatchPhase, Standing, Team
from kickerturnier.tournament.state import TournamentState

console = Console(legacy_windows=False)

_PHASE_LABELS = {
    MatchPhase.GROUP_STAGE: "Group",
    MatchPhase.FINAL: "Final",
    MatchPhase.THIRD_PLACE: "3rd place",
}


def display_teams(teams: list[Team]) -> None:
    if not teams:
        console.print("[dim]No teams yet.[/]")
        return

    table = Table(title="Teams", show_header=True, header_style="bold", border_style="dim")
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Id", style="dim", width=8)
    table.add_column("Name", min_width=16)
    table.add_column("Players", min_width=24)

    for i, team in enumerate(teams, 1):
        table.add_row(
            str(i),
            str(team.id)[:8],
            f"[bold]{team.name}[/]",
            f"{team.player1_name} & {team.player2_name}",
        )
    console.print(table)


def display_matches(matches: list[Match]) -> None:
    if not matches:
        console.print("[dim]No matches scheduled.[/]")
        return

    table = Table(title="Matches", show_header=True, header_style="bold", border_style="dim")
    table.add_column("Phase", style="dim", width=9)
    table.add_column("#", justify="right", width=3)
    table.add_column("Team A", min_width=16, justify="right")
    table.add_column("Score", justify="center", width=7)
    table.add_column("Team B", min_width=16)

    for match in matches:
        score = (
            f"{match.goals_team_a} : {match.goals_team_b}"
            if match.is_finished
            else "[dim]- : -[/]"
        )
        table.add_row(
            _PHASE_LABELS[match.phase],
            str(match.match_number),
            match.team_a.name,
            score,
            match.team_b.name,
        )
    console.print(table)


def display_standings(standings: list[Standing]) -> None:
    if not standings:
        console.print("[dim]No standings yet.[/]")
        return

    table = Table(title="Group Standings", show_header=True, header_style="bold", border_style="dim")
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Team", min_width=16)
    table.add_column("P", justify="center", width=3)
    table.add_column("W", justify="center", width=3)
    table.add_column("D", justify="center", width=3)
    table.add_column("L", justify="center", width=3)
    table.add_column("Goals", justify="center", width=7)
    table.add_column("Diff", justify="right", width=5)
    table.add_column("Pts", justify="right", width=4)

    for entry in standings:
        style = "bold yellow" if entry.position == 1 and entry.matches_played else ""
        table.add_row(
            str(entry.position),
            entry.team.name,
            str(entry.matches_played),
            str(entry.wins),
            str(entry.draws),
            str(entry.losses),
            f"{entry.goals_for}:{entry.goals_against}",
            f"{entry.goal_difference:+d}",
            str(entry.points),
            style=style,
        )
    console.print(table)


def display_podium(state: TournamentState) -> None:
    champion = state.champion()
    if champion is None:
        return

    lines = [f"[bold yellow]★  {champion.name}[/]"]
    runner_up = state.runner_up()
    if runner_up is not None:
        lines.append(f"[dim]2.[/] {runner_up.name}")
    third = state.third_place()
    if third is not None:
        lines.append(f"[dim]3.[/] {third.name}")

    console.print(
        Panel(
            "\n".join(lines),
            title="[bold green] Tournament Champion [/]",
            border_style="yellow",
            expand=False,
        )
    )


def display_state(state: TournamentState) -> None:
    """Full overview: phase, roster, matches, table and podium."""
    console.rule(f"[bold]Phase: {state.phase.value.replace('_', ' ')}[/]", style="bright_blue")
    display_teams(state.teams)
    display_matches(state.matches)
    if state.group_matches():
        display_standings(state.standings())
    display_podium(state)
