"""Leaderboards, head-to-head comparisons and tournament summaries.

These views run ``compute_stats`` once per player under a shared filter and
collect the results into pandas DataFrames. Players without a match under
the filter are left out.

Example:
    >>> board = build_leaderboard(players, matches, tournaments,
    ...                           StatsFilter(format="T20"), category="runs")
    >>> board.loc[1, "player"]
    'Asha'
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

import pandas as pd

from cricket_stats.data.models import Match, Player, Tournament
from cricket_stats.logging import get_logger
from cricket_stats.stats.aggregator import compute_stats
from cricket_stats.stats.filters import StatsFilter
from cricket_stats.types import PlayerId

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

DEFAULT_LEADERBOARD_LIMIT: int = 10

STATS_TABLE_COLUMNS: list[str] = [
    "player_id",
    "player",
    "matches",
    "runs",
    "batting_average",
    "batting_strike_rate",
    "wickets",
    "bowling_average",
    "economy",
]

# category -> (sort column, stats table column -> display column)
LEADERBOARD_CATEGORIES: dict[str, tuple[str, dict[str, str]]] = {
    "runs": (
        "runs",
        {
            "player": "player",
            "matches": "matches",
            "runs": "runs",
            "batting_average": "average",
            "batting_strike_rate": "strike_rate",
        },
    ),
    "wickets": (
        "wickets",
        {
            "player": "player",
            "matches": "matches",
            "wickets": "wickets",
            "bowling_average": "average",
            "economy": "economy",
        },
    ),
}

# Head-to-head rows: display label -> CalculatedStats attribute
COMPARISON_ROWS: tuple[tuple[str, str], ...] = (
    ("Matches", "matches"),
    ("Batting Innings", "innings_batted"),
    ("Runs Scored", "runs"),
    ("Highest Score", "highest_score"),
    ("Batting Average", "batting_average"),
    ("Batting SR", "batting_strike_rate"),
    ("50s", "fifties"),
    ("25s", "twenty_fives"),
    ("Ducks", "ducks"),
    ("Bowling Innings", "innings_bowled"),
    ("Wickets", "wickets"),
    ("Best Bowling", "best_bowling"),
    ("Bowling Average", "bowling_average"),
    ("Economy", "economy"),
    ("Bowling SR", "bowling_strike_rate"),
    ("3-Wicket Hauls", "three_wicket_hauls"),
    ("MOTM Awards", "motm"),
    ("Catches", "catches"),
)


# =============================================================================
# Filter Options
# =============================================================================


def available_formats(matches: Iterable[Match]) -> list[str]:
    """Distinct match formats in first-seen order."""
    return list(dict.fromkeys(m.format for m in matches if m.format))


def available_years(matches: Iterable[Match]) -> list[int]:
    """Distinct match years, most recent first."""
    return sorted({m.year for m in matches if m.year is not None}, reverse=True)


# =============================================================================
# Tables
# =============================================================================


def player_stats_table(
    players: Iterable[Player],
    matches: Sequence[Match],
    tournaments: Sequence[Tournament],
    stats_filter: StatsFilter | None = None,
) -> pd.DataFrame:
    """One row of headline statistics per player with a match under the filter."""
    rows = []
    for player in players:
        stats = compute_stats(player.id, matches, tournaments, stats_filter)
        if stats.matches == 0:
            continue
        rows.append(
            {
                "player_id": player.id,
                "player": player.name,
                "matches": stats.matches,
                "runs": stats.runs,
                "batting_average": stats.batting_average,
                "batting_strike_rate": stats.batting_strike_rate,
                "wickets": stats.wickets,
                "bowling_average": stats.bowling_average,
                "economy": stats.economy,
            }
        )
    return pd.DataFrame(rows, columns=STATS_TABLE_COLUMNS)


def build_leaderboard(
    players: Iterable[Player],
    matches: Sequence[Match],
    tournaments: Sequence[Tournament],
    stats_filter: StatsFilter | None = None,
    category: str = "runs",
    limit: int | None = DEFAULT_LEADERBOARD_LIMIT,
) -> pd.DataFrame:
    """Rank players by runs or wickets.

    Args:
        players: Players to rank.
        matches: All matches.
        tournaments: All tournaments.
        stats_filter: Filter shared by every player.
        category: "runs" or "wickets".
        limit: Maximum rows; None keeps every ranked player.

    Returns:
        DataFrame indexed by 1-based ``rank``. Ties keep player order.

    Raises:
        ValueError: If ``category`` is unknown.
    """
    if category not in LEADERBOARD_CATEGORIES:
        raise ValueError(
            f"Unknown leaderboard category {category!r}; "
            f"expected one of {sorted(LEADERBOARD_CATEGORIES)}"
        )
    sort_column, columns = LEADERBOARD_CATEGORIES[category]

    table = player_stats_table(players, matches, tournaments, stats_filter)
    board = table.sort_values(sort_column, ascending=False, kind="mergesort")
    if limit is not None:
        board = board.head(limit)

    board = board[list(columns)].rename(columns=columns).reset_index(drop=True)
    board.index = pd.RangeIndex(start=1, stop=len(board) + 1, name="rank")
    logger.debug(f"Built {category} leaderboard with {len(board)} rows")
    return board


def compare_players(
    player_ids: Sequence[PlayerId],
    players: Iterable[Player],
    matches: Sequence[Match],
    tournaments: Sequence[Tournament],
    stats_filter: StatsFilter | None = None,
) -> pd.DataFrame:
    """Head-to-head table: one row per statistic, one column per player.

    Columns are headed by player name; players sharing a name are told apart
    as "Name (id)". Unknown and repeated player ids are skipped.
    """
    players_by_id = {p.id: p for p in players}
    selected: list[Player] = []
    for player_id in dict.fromkeys(player_ids):
        player = players_by_id.get(player_id)
        if player is None:
            logger.debug(f"Skipping unknown player {player_id} in comparison")
            continue
        selected.append(player)

    name_counts = Counter(p.name for p in selected)
    columns: dict[str, list] = {}
    for player in selected:
        label = player.name
        if name_counts[player.name] > 1:
            label = f"{player.name} ({player.id})"
        stats = compute_stats(player.id, matches, tournaments, stats_filter)
        columns[label] = [getattr(stats, attr) for _, attr in COMPARISON_ROWS]

    return pd.DataFrame(
        columns,
        index=pd.Index([label for label, _ in COMPARISON_ROWS], name="stat"),
        dtype=object,
    )


def tournament_summary(
    tournament: Tournament,
    players: Iterable[Player],
    matches: Sequence[Match],
    tournaments: Sequence[Tournament],
) -> dict[str, pd.DataFrame]:
    """Top run scorers and wicket takers within one tournament."""
    players = list(players)
    stats_filter = StatsFilter(tournament=tournament.name)
    return {
        category: build_leaderboard(
            players, matches, tournaments, stats_filter, category=category, limit=None
        )
        for category in LEADERBOARD_CATEGORIES
    }
