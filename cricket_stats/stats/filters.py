"""Performance selection by format, year and tournament.

Statistics are always computed over one player's performances, optionally
narrowed by match format, calendar year and tournament name. Each selected
performance is annotated with its owning match's context so later stages
never need to look the match up again.

Example:
    >>> from cricket_stats.stats.filters import StatsFilter, filter_performances
    >>> selected = filter_performances(7, matches, tournaments,
    ...                                StatsFilter(format="T20", year=2024))
    >>> [p.match_date.year for p in selected]
    [2024, 2024]
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields
from datetime import date

from cricket_stats.data.models import Match, Performance, Tournament
from cricket_stats.logging import get_logger
from cricket_stats.types import PlayerId, TournamentId

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnnotatedPerformance(Performance):
    """A performance carrying its owning match's context.

    Attributes:
        match_date: Date of the owning match, None if unknown.
        match_format: Format label of the owning match.
        tournament_id: Tournament the match belongs to, if any.
        motm_player_id: Man-of-the-match of the owning match, if any.
    """

    match_date: date | None = None
    match_format: str = ""
    tournament_id: TournamentId | None = None
    motm_player_id: PlayerId | None = None

    @classmethod
    def from_match(cls, performance: Performance, match: Match) -> AnnotatedPerformance:
        base = {f.name: getattr(performance, f.name) for f in fields(Performance)}
        return cls(
            **base,
            match_date=match.date,
            match_format=match.format,
            tournament_id=match.tournament_id,
            motm_player_id=match.motm_player_id,
        )


@dataclass(frozen=True)
class StatsFilter:
    """Optional narrowing of a player's performances.

    Empty strings are treated as "no filter", matching what a cleared
    drop-down submits.

    Attributes:
        format: Exact match format label, e.g. "T20".
        year: Calendar year of the match date.
        tournament: Tournament name (resolved to an id via the tournament list).
    """

    format: str | None = None
    year: int | str | None = None
    tournament: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.format or self.year or self.tournament)

    def matches_year(self, match_date: date | None) -> bool:
        if self.year is None or self.year == "":
            return True
        if match_date is None:
            return False
        try:
            return match_date.year == int(self.year)
        except (TypeError, ValueError):
            return False


def chronological_key(match_date: date | None) -> tuple[bool, date]:
    """Sort key placing undated matches after every dated one."""
    return (match_date is None, match_date or date.min)


def resolve_tournament_id(
    name: str, tournaments: Iterable[Tournament]
) -> TournamentId | None:
    """Return the id of the first tournament called ``name``."""
    return next((t.id for t in tournaments if t.name == name), None)


def filter_performances(
    player_id: PlayerId,
    matches: Iterable[Match],
    tournaments: Iterable[Tournament],
    stats_filter: StatsFilter | None = None,
) -> list[AnnotatedPerformance]:
    """Select one player's performances under a filter, oldest first.

    Args:
        player_id: Player whose performances are selected.
        matches: All matches in the snapshot.
        tournaments: All tournaments (used to resolve the tournament name).
        stats_filter: Filter to apply; None selects the full career.

    Returns:
        Annotated performances sorted by match date ascending. Equal dates
        keep snapshot order. An unknown tournament name selects nothing.
    """
    stats_filter = stats_filter or StatsFilter()

    tournament_id: TournamentId | None = None
    if stats_filter.tournament:
        tournament_id = resolve_tournament_id(stats_filter.tournament, tournaments)
        if tournament_id is None:
            logger.debug(f"Tournament {stats_filter.tournament!r} not found")
            return []

    selected = [
        AnnotatedPerformance.from_match(p, match)
        for match in matches
        if (not stats_filter.format or match.format == stats_filter.format)
        and stats_filter.matches_year(match.date)
        and (tournament_id is None or match.tournament_id == tournament_id)
        for p in match.performances
        if p.player_id == player_id
    ]
    selected.sort(key=lambda p: chronological_key(p.match_date))
    return selected
