"""CLI entrypoint using Typer.

This module defines the command-line interface for the cricket stats
application. Every command reads the Record Store snapshot, computes
statistics in memory and prints rich tables.

Example:
    $ cricket-stats --help
    $ cricket-stats stats 1700000000001 --format T20 --year 2024
    $ cricket-stats leaderboard --by wickets --tournament "Summer Cup"
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cricket_stats import __version__
from cricket_stats.config import get_settings
from cricket_stats.data.models import Player
from cricket_stats.data.snapshot import Snapshot, load_snapshot
from cricket_stats.logging import setup_logging
from cricket_stats.stats import (
    ACHIEVEMENTS,
    StatsFilter,
    build_leaderboard,
    calculate_career_progression,
    career_achievements,
    compare_players,
    compute_stats,
    evaluate_achievements,
    format_stat,
)
from cricket_stats.types import CricketStatsError

# Initialize console for rich output
console = Console()

app = typer.Typer(
    name="cricket-stats",
    help="Amateur cricket statistics CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Shared option types
DataOption = Annotated[
    Path | None,
    typer.Option("--data", "-d", help="Snapshot JSON file (defaults to CRICKET_DATA_PATH)"),
]
FormatOption = Annotated[
    str | None, typer.Option("--format", "-f", help="Only matches of this format")
]
YearOption = Annotated[
    int | None, typer.Option("--year", "-y", help="Only matches played in this year")
]
TournamentOption = Annotated[
    str | None, typer.Option("--tournament", "-t", help="Only matches in this tournament")
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]cricket-stats[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Enable verbose output",
        ),
    ] = False,
) -> None:
    """Amateur cricket statistics CLI.

    Computes career statistics, progression and achievements from a
    snapshot of players, matches and tournaments.
    """
    setup_logging(verbose=verbose)


# =============================================================================
# Helpers
# =============================================================================


def _load(data: Path | None) -> Snapshot:
    path = data or get_settings().data_path_obj
    try:
        return load_snapshot(path)
    except CricketStatsError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def _player(snapshot: Snapshot, player_id: int) -> Player:
    try:
        return snapshot.get_player(player_id)
    except CricketStatsError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


def _filter(
    format_: str | None, year: int | None, tournament: str | None
) -> StatsFilter:
    return StatsFilter(format=format_, year=year, tournament=tournament)


def _key_value_table(title: str, rows: dict[str, object]) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Stat", style="bold")
    table.add_column("Value", justify="right")
    for label, value in rows.items():
        table.add_row(label, format_stat(value))
    return table


# =============================================================================
# Commands
# =============================================================================


@app.command("stats")
def stats_command(
    player_id: Annotated[int, typer.Argument(help="Player id")],
    data: DataOption = None,
    format_: FormatOption = None,
    year: YearOption = None,
    tournament: TournamentOption = None,
) -> None:
    """Show batting, bowling, fielding and recent form for one player."""
    snapshot = _load(data)
    player = _player(snapshot, player_id)
    stats = compute_stats(
        player.id, snapshot.matches, snapshot.tournaments, _filter(format_, year, tournament)
    )

    age = player.age()
    console.print(
        Panel(
            f"[bold]Role:[/bold] {player.role or '-'}\n"
            f"[bold]Age:[/bold] {f'{age} years old' if age is not None else 'N/A'}\n"
            f"[bold]Batting:[/bold] {player.batting_style or '-'}\n"
            f"[bold]Bowling:[/bold] {player.bowling_style or '-'}",
            title=player.name,
        )
    )
    console.print(
        _key_value_table(
            "Batting",
            {
                "M": stats.matches,
                "I": stats.innings_batted,
                "NO": stats.not_outs,
                "Runs": stats.runs,
                "HS": stats.highest_score,
                "Avg": stats.batting_average,
                "BF": stats.balls_faced,
                "SR": stats.batting_strike_rate,
                "4s": stats.fours,
                "6s": stats.sixes,
                "Ducks": stats.ducks,
            },
        )
    )
    console.print(
        _key_value_table(
            "Bowling",
            {
                "I": stats.innings_bowled,
                "Overs": stats.overs,
                "Balls": stats.balls_bowled,
                "Runs": stats.runs_conceded,
                "Wkts": stats.wickets,
                "BBI": stats.best_bowling,
                "Avg": stats.bowling_average,
                "Econ": stats.economy,
                "SR": stats.bowling_strike_rate,
            },
        )
    )
    console.print(
        _key_value_table(
            "Milestones & Awards",
            {
                "25s": stats.twenty_fives,
                "50s": stats.fifties,
                "100s": stats.hundreds,
                "3W": stats.three_wicket_hauls,
                "5W": stats.five_wicket_hauls,
                "Hattrick": stats.hat_tricks,
                "MOTM": stats.motm,
            },
        )
    )
    console.print(
        _key_value_table(
            "Fielding",
            {
                "Catches": stats.catches,
                "Stumpings": stats.stumpings,
                "Run Outs": stats.run_outs,
            },
        )
    )

    form = Table(title="Recent Form (most recent first)")
    form.add_column("Batting")
    form.add_column("Bowling")
    for runs, figures in zip(stats.last5_batting_scores, stats.last5_bowling_figures):
        form.add_row(format_stat(runs), format_stat(figures))
    console.print(form)

    if stats.dismissal_types:
        console.print(_key_value_table("Dismissals", dict(stats.dismissal_types)))


@app.command("progression")
def progression_command(
    player_id: Annotated[int, typer.Argument(help="Player id")],
    data: DataOption = None,
) -> None:
    """Show cumulative batting and bowling averages after each career match."""
    snapshot = _load(data)
    player = _player(snapshot, player_id)
    stats = compute_stats(player.id, snapshot.matches, snapshot.tournaments)
    points = calculate_career_progression(stats.performances, snapshot.matches)

    if not points:
        console.print(f"[yellow]{player.name} has no matches yet[/yellow]")
        return

    table = Table(title=f"Career Progression: {player.name}")
    table.add_column("Match", justify="right")
    table.add_column("Batting Avg", justify="right")
    table.add_column("Bowling Avg", justify="right")
    for point in points:
        table.add_row(
            str(point.match_number),
            format_stat(point.batting_average),
            format_stat(point.bowling_average),
        )
    console.print(table)


@app.command("achievements")
def achievements_command(
    player_id: Annotated[int, typer.Argument(help="Player id")],
    career: Annotated[
        bool,
        typer.Option(
            "--career/--filtered",
            help="Evaluate the full career, or only matches under the filters",
        ),
    ] = True,
    data: DataOption = None,
    format_: FormatOption = None,
    year: YearOption = None,
    tournament: TournamentOption = None,
) -> None:
    """List the achievements a player has unlocked."""
    snapshot = _load(data)
    player = _player(snapshot, player_id)

    if career:
        unlocked = career_achievements(player, snapshot.matches, snapshot.tournaments)
    else:
        stats = compute_stats(
            player.id,
            snapshot.matches,
            snapshot.tournaments,
            _filter(format_, year, tournament),
        )
        unlocked = evaluate_achievements(player, stats)

    if not unlocked:
        console.print("No achievements unlocked yet.")
        return

    table = Table(title=f"Achievements: {player.name}")
    table.add_column("Achievement", style="bold")
    table.add_column("Description")
    for achievement in ACHIEVEMENTS:
        if achievement.id in unlocked:
            table.add_row(achievement.name, achievement.description)
    console.print(table)


@app.command("leaderboard")
def leaderboard_command(
    by: Annotated[
        str, typer.Option("--by", "-b", help="Rank by 'runs' or 'wickets'")
    ] = "runs",
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", help="Rows to show")
    ] = None,
    data: DataOption = None,
    format_: FormatOption = None,
    year: YearOption = None,
    tournament: TournamentOption = None,
) -> None:
    """Rank players by runs or wickets."""
    if by not in ("runs", "wickets"):
        console.print("[red]Error: --by must be 'runs' or 'wickets'[/red]")
        raise typer.Exit(1)

    snapshot = _load(data)
    board = build_leaderboard(
        snapshot.players,
        snapshot.matches,
        snapshot.tournaments,
        _filter(format_, year, tournament),
        category=by,
        limit=limit or get_settings().leaderboard_limit,
    )

    if board.empty:
        console.print("[yellow]No players have matches under these filters[/yellow]")
        return

    table = Table(title=f"Most {by.capitalize()}")
    table.add_column("#", justify="right")
    for column in board.columns:
        table.add_column(column.replace("_", " ").title())
    for rank, row in board.iterrows():
        table.add_row(str(rank), *(format_stat(v) for v in row))
    console.print(table)


@app.command("compare")
def compare_command(
    player_ids: Annotated[list[int], typer.Argument(help="Two or more player ids")],
    data: DataOption = None,
    format_: FormatOption = None,
    year: YearOption = None,
    tournament: TournamentOption = None,
) -> None:
    """Compare players head to head."""
    snapshot = _load(data)
    comparison = compare_players(
        player_ids,
        snapshot.players,
        snapshot.matches,
        snapshot.tournaments,
        _filter(format_, year, tournament),
    )

    if len(comparison.columns) < 2:
        console.print("[red]Error: Select at least two known players to compare[/red]")
        raise typer.Exit(1)

    table = Table(title="Head-to-Head Comparison")
    table.add_column("Stat", style="bold")
    for name in comparison.columns:
        table.add_column(str(name), justify="center")
    for label, row in comparison.iterrows():
        table.add_row(str(label), *(format_stat(v) for v in row))
    console.print(table)


if __name__ == "__main__":
    app()
