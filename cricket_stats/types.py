"""Type definitions shared across the cricket stats engine.

This module defines the id aliases, the sentinel tokens used by rate
statistics, small structured results and the exception hierarchy.

Example:
    >>> from cricket_stats.types import Sentinel
    >>> str(Sentinel.INFINITE)
    '∞'
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Union

# =============================================================================
# Type Aliases
# =============================================================================

PlayerId = int
MatchId = int
TournamentId = int


# =============================================================================
# Sentinels
# =============================================================================


class Sentinel(str, Enum):
    """Renderable placeholders for rates whose denominator is zero.

    Members compare unequal to every number, so callers can tell "no data"
    apart from a genuine zero.
    """

    INFINITE = "∞"  # batting average with no dismissals
    UNDEFINED = "–"  # bowling average/strike rate with no wickets
    NO_FIGURES = "-"  # best bowling with no bowling innings

    def __str__(self) -> str:
        return self.value


# A rounded rate or the sentinel standing in for it
StatValue = Union[float, Sentinel]


# =============================================================================
# Structured Results
# =============================================================================


class ProgressionPoint(NamedTuple):
    """Cumulative averages after the player's N-th career match."""

    match_number: int
    batting_average: StatValue
    bowling_average: StatValue


# =============================================================================
# Exceptions
# =============================================================================


class CricketStatsError(Exception):
    """Base exception for cricket stats errors."""


class SnapshotError(CricketStatsError):
    """Record Store snapshot could not be read or is malformed."""


class PlayerNotFoundError(CricketStatsError):
    """Requested player is not in the snapshot."""
