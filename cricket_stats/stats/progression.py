"""Career progression series.

Replays a player's batting and bowling accumulation one match at a time and
records the cumulative batting and bowling averages after each match. The
series always covers exactly the performances supplied; callers wanting the
full career pass unfiltered performances.

Example:
    >>> stats = compute_stats(7, matches, tournaments)
    >>> points = calculate_career_progression(stats.performances, matches)
    >>> points[0]
    ProgressionPoint(match_number=1, batting_average=45.0, bowling_average=<Sentinel.UNDEFINED: '–'>)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from cricket_stats.data.models import Match, Performance
from cricket_stats.logging import get_logger
from cricket_stats.stats import derived
from cricket_stats.stats.aggregator import StatsAccumulator
from cricket_stats.stats.filters import chronological_key
from cricket_stats.types import MatchId, ProgressionPoint

logger = get_logger(__name__)


def calculate_career_progression(
    performances: Sequence[Performance],
    matches: Iterable[Match],
) -> list[ProgressionPoint]:
    """Build the cumulative averages series, one point per match.

    Args:
        performances: One player's performances (any order).
        matches: Matches used to date the performances. Performances whose
            match is unknown are left out.

    Returns:
        Points ordered by match date ascending; equal dates keep the order
        in which the matches first appear in ``performances``. Point k
        reflects exactly the first k matches.
    """
    by_match: dict[MatchId, list[Performance]] = {}
    for performance in performances:
        by_match.setdefault(performance.match_id, []).append(performance)

    matches_by_id = {m.id: m for m in matches}
    ordered = [matches_by_id[mid] for mid in by_match if mid in matches_by_id]
    ordered.sort(key=lambda m: chronological_key(m.date))

    skipped = len(by_match) - len(ordered)
    if skipped:
        logger.debug(f"Progression skipped {skipped} performances with unknown matches")

    accumulator = StatsAccumulator()
    progression: list[ProgressionPoint] = []
    for number, match in enumerate(ordered, start=1):
        for performance in by_match[match.id]:
            accumulator.add_batting(performance)
            accumulator.add_bowling(performance)
        progression.append(
            ProgressionPoint(
                match_number=number,
                batting_average=derived.batting_average(
                    accumulator.runs, accumulator.times_out
                ),
                bowling_average=derived.bowling_average(
                    accumulator.runs_conceded, accumulator.wickets
                ),
            )
        )
    return progression
