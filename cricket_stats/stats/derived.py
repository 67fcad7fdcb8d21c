"""Rate statistics derived from raw cumulative counters.

Every function here is pure and total. A zero denominator never produces
NaN or infinity: rates that are meaningless without data return a
``Sentinel`` member, and rates where zero is an honest answer return 0.0.
Numeric results are rounded to two decimal places.

Example:
    >>> batting_average(runs=45, times_out=0)
    <Sentinel.INFINITE: '∞'>
    >>> economy_rate(runs_conceded=12, balls_bowled=24)
    3.0
"""

from __future__ import annotations

from cricket_stats.stats.parsing import BALLS_PER_OVER, balls_to_overs
from cricket_stats.types import Sentinel, StatValue

__all__ = [
    "balls_to_overs",
    "batting_average",
    "batting_strike_rate",
    "best_bowling_figures",
    "bowling_average",
    "bowling_strike_rate",
    "economy_rate",
    "format_stat",
    "times_out",
]


def times_out(innings_batted: int, not_outs: int) -> int:
    return innings_batted - not_outs


def batting_average(runs: int, times_out: int) -> StatValue:
    """Runs per dismissal; ``Sentinel.INFINITE`` when never dismissed."""
    if times_out <= 0:
        return Sentinel.INFINITE
    return round(runs / times_out, 2)


def batting_strike_rate(runs: int, balls_faced: int) -> float:
    """Runs per 100 balls faced; 0.0 when no balls were faced."""
    if balls_faced <= 0:
        return 0.0
    return round(runs / balls_faced * 100, 2)


def bowling_average(runs_conceded: int, wickets: int) -> StatValue:
    """Runs conceded per wicket; ``Sentinel.UNDEFINED`` without wickets."""
    if wickets <= 0:
        return Sentinel.UNDEFINED
    return round(runs_conceded / wickets, 2)


def economy_rate(runs_conceded: int, balls_bowled: int) -> float:
    """Runs conceded per six legal balls; 0.0 when nothing was bowled."""
    if balls_bowled <= 0:
        return 0.0
    return round(runs_conceded / (balls_bowled / BALLS_PER_OVER), 2)


def bowling_strike_rate(balls_bowled: int, wickets: int) -> StatValue:
    """Balls bowled per wicket; ``Sentinel.UNDEFINED`` without wickets."""
    if wickets <= 0:
        return Sentinel.UNDEFINED
    return round(balls_bowled / wickets, 2)


def best_bowling_figures(wickets: int, runs_conceded: int | None) -> str:
    """Render best figures as "wickets/runs".

    Args:
        wickets: Wickets in the best innings.
        runs_conceded: Runs in the best innings; None when the player never
            completed a bowling innings.
    """
    if runs_conceded is None:
        return Sentinel.NO_FIGURES
    return f"{wickets}/{runs_conceded}"


def format_stat(value: StatValue | int | str | None) -> str:
    """Render a statistic for display (floats to two decimals)."""
    if value is None:
        return "-"
    if isinstance(value, Sentinel):
        return str(value)
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)
