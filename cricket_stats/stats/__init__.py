"""Statistics engine for the cricket stats application.

This module turns a player's raw performance log into career statistics,
a progression series and unlocked achievements.

Submodules:
    parsing: Overs notation parsing
    filters: Format/year/tournament performance selection
    derived: Rate statistics with sentinel handling
    aggregator: Single-pass aggregation into CalculatedStats
    progression: Cumulative averages after each career match
    achievements: Fixed achievement rule table
    leaderboard: Leaderboards, head-to-head and tournament tables

Example:
    >>> from cricket_stats.stats import StatsFilter, compute_stats, evaluate_achievements
    >>> stats = compute_stats(player.id, matches, tournaments, StatsFilter(year=2024))
    >>> unlocked = evaluate_achievements(player, stats)
"""

from __future__ import annotations

from cricket_stats.stats.parsing import balls_to_overs, parse_overs_to_balls
from cricket_stats.stats.derived import (
    batting_average,
    batting_strike_rate,
    best_bowling_figures,
    bowling_average,
    bowling_strike_rate,
    economy_rate,
    format_stat,
    times_out,
)
from cricket_stats.stats.filters import (
    AnnotatedPerformance,
    StatsFilter,
    filter_performances,
)
from cricket_stats.stats.aggregator import (
    RECENT_FORM_WINDOW,
    CalculatedStats,
    StatsAccumulator,
    aggregate,
    compute_stats,
)
from cricket_stats.stats.progression import calculate_career_progression
from cricket_stats.stats.achievements import (
    ACHIEVEMENTS,
    Achievement,
    career_achievements,
    evaluate_achievements,
    get_achievement,
    new_achievements,
    unlocked_achievements,
)
from cricket_stats.stats.leaderboard import (
    available_formats,
    available_years,
    build_leaderboard,
    compare_players,
    player_stats_table,
    tournament_summary,
)

__all__ = [
    "ACHIEVEMENTS",
    "RECENT_FORM_WINDOW",
    "Achievement",
    "AnnotatedPerformance",
    "CalculatedStats",
    "StatsAccumulator",
    "StatsFilter",
    "aggregate",
    "available_formats",
    "available_years",
    "balls_to_overs",
    "batting_average",
    "batting_strike_rate",
    "best_bowling_figures",
    "bowling_average",
    "bowling_strike_rate",
    "build_leaderboard",
    "calculate_career_progression",
    "career_achievements",
    "compare_players",
    "compute_stats",
    "economy_rate",
    "evaluate_achievements",
    "filter_performances",
    "format_stat",
    "get_achievement",
    "new_achievements",
    "parse_overs_to_balls",
    "player_stats_table",
    "times_out",
    "tournament_summary",
    "unlocked_achievements",
]
