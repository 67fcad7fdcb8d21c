"""Career statistics aggregation.

A single forward pass over a player's chronologically sorted performances
folds batting, bowling, fielding and award contributions into one local
accumulator, which is then frozen into a ``CalculatedStats`` value together
with the derived rates.

Counting rules:
    - Matches are counted by distinct match id; every other counter sums
      all performances, so a duplicated performance in one match counts
      twice everywhere except ``matches``.
    - Milestones are exclusive: an innings of 120 is one hundred, never
      also a fifty or a twenty-five. Likewise a five-wicket haul is never
      also a three-wicket haul.
    - Recent-form windows hold the last five matches most-recent-first,
      with None where the player did not bat (or bowl) in that match.

Example:
    >>> from cricket_stats.stats.aggregator import compute_stats
    >>> stats = compute_stats(7, snapshot.matches, snapshot.tournaments)
    >>> stats.runs, stats.batting_average
    (412, 34.33)
"""

from __future__ import annotations

import math
from collections import Counter, deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from cricket_stats.data.models import Match, Performance, Tournament
from cricket_stats.logging import get_logger
from cricket_stats.stats import derived
from cricket_stats.stats.filters import (
    AnnotatedPerformance,
    StatsFilter,
    filter_performances,
)
from cricket_stats.stats.parsing import parse_overs_to_balls
from cricket_stats.types import MatchId, PlayerId, Sentinel, StatValue

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

RECENT_FORM_WINDOW: int = 5

HUNDRED: int = 100
FIFTY: int = 50
TWENTY_FIVE: int = 25

FIVE_WICKET_HAUL: int = 5
THREE_WICKET_HAUL: int = 3

DEFAULT_DISMISSAL_TYPE: str = "other"
CAUGHT: str = "caught"


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class CalculatedStats:
    """Statistics for one player under one filter.

    Raw counters come straight from the aggregation pass; rate fields are
    rounded floats or ``Sentinel`` members (see ``cricket_stats.stats.derived``).

    Attributes:
        matches: Distinct matches played.
        innings_batted: Innings in which the player batted.
        not_outs: Batting innings finished not out.
        runs: Runs scored.
        highest_score: Highest single-innings score.
        balls_faced: Balls faced.
        twenty_fives: Innings of 25-49.
        fifties: Innings of 50-99.
        hundreds: Innings of 100+.
        fours: Boundaries hit for four.
        sixes: Boundaries hit for six.
        ducks: Dismissals for zero.
        innings_bowled: Innings in which the player bowled.
        balls_bowled: Legal balls bowled.
        runs_conceded: Runs conceded.
        wickets: Wickets taken.
        best_bowling_wickets: Wickets in the best bowling innings.
        best_bowling_runs: Runs in the best bowling innings, None if never bowled.
        three_wicket_hauls: Innings with 3-4 wickets.
        five_wicket_hauls: Innings with 5+ wickets.
        hat_tricks: Innings flagged as containing a hat-trick.
        catches: Catches taken.
        stumpings: Stumpings made.
        run_outs: Run-outs effected.
        motm: Man-of-the-match awards.
        performances: Contributing performances, oldest first.
        last5_batting_scores: Recent scores, most recent first.
        last5_bowling_figures: Recent "wickets/runs" figures, most recent first.
        dismissal_types: Dismissal kind -> count.
        dismissed_by_bowlers: Bowler name -> dismissals credited.
        caught_by_fielders: Fielder name -> catches credited.
        times_out: Dismissals (innings batted minus not-outs).
        batting_average: Runs per dismissal.
        batting_strike_rate: Runs per 100 balls.
        overs: Balls bowled in "whole.balls" notation.
        bowling_average: Runs conceded per wicket.
        economy: Runs conceded per over.
        bowling_strike_rate: Balls per wicket.
        best_bowling: Best figures as "wickets/runs".
    """

    # Batting
    matches: int = 0
    innings_batted: int = 0
    not_outs: int = 0
    runs: int = 0
    highest_score: int = 0
    balls_faced: int = 0
    twenty_fives: int = 0
    fifties: int = 0
    hundreds: int = 0
    fours: int = 0
    sixes: int = 0
    ducks: int = 0

    # Bowling
    innings_bowled: int = 0
    balls_bowled: int = 0
    runs_conceded: int = 0
    wickets: int = 0
    best_bowling_wickets: int = 0
    best_bowling_runs: int | None = None
    three_wicket_hauls: int = 0
    five_wicket_hauls: int = 0
    hat_tricks: int = 0

    # Fielding and awards
    catches: int = 0
    stumpings: int = 0
    run_outs: int = 0
    motm: int = 0

    # Detail
    performances: tuple[Performance, ...] = ()
    last5_batting_scores: tuple[int | None, ...] = ()
    last5_bowling_figures: tuple[str | None, ...] = ()
    dismissal_types: dict[str, int] = field(default_factory=dict)
    dismissed_by_bowlers: dict[str, int] = field(default_factory=dict)
    caught_by_fielders: dict[str, int] = field(default_factory=dict)

    # Derived
    times_out: int = 0
    batting_average: StatValue = Sentinel.INFINITE
    batting_strike_rate: float = 0.0
    overs: str = "0.0"
    bowling_average: StatValue = Sentinel.UNDEFINED
    economy: float = 0.0
    bowling_strike_rate: StatValue = Sentinel.UNDEFINED
    best_bowling: str = Sentinel.NO_FIGURES

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to a flat dictionary (performances excluded).

        Sentinels are rendered to their display tokens.
        """
        data: dict[str, Any] = {}
        for name in self.__dataclass_fields__:
            if name == "performances":
                continue
            value = getattr(self, name)
            if isinstance(value, Sentinel):
                value = str(value)
            elif isinstance(value, dict):
                value = dict(value)
            elif isinstance(value, tuple):
                value = list(value)
            data[name] = value
        return data


@dataclass
class StatsAccumulator:
    """Running counters for one aggregation pass.

    Instances are local to a single call; ``freeze`` produces the immutable
    result. ``add`` may also be used on plain performances (no man-of-the-
    match credit is possible without the match annotation).
    """

    player_id: PlayerId | None = None
    match_ids: set[MatchId] = field(default_factory=set)
    performances: list[Performance] = field(default_factory=list)

    innings_batted: int = 0
    not_outs: int = 0
    runs: int = 0
    highest_score: int = 0
    balls_faced: int = 0
    twenty_fives: int = 0
    fifties: int = 0
    hundreds: int = 0
    fours: int = 0
    sixes: int = 0
    ducks: int = 0

    innings_bowled: int = 0
    balls_bowled: int = 0
    runs_conceded: int = 0
    wickets: int = 0
    best_bowling_wickets: int = 0
    best_bowling_runs: float = math.inf
    three_wicket_hauls: int = 0
    five_wicket_hauls: int = 0
    hat_tricks: int = 0

    catches: int = 0
    stumpings: int = 0
    run_outs: int = 0
    motm: int = 0

    recent_batting: deque[int | None] = field(
        default_factory=lambda: deque(maxlen=RECENT_FORM_WINDOW)
    )
    recent_bowling: deque[str | None] = field(
        default_factory=lambda: deque(maxlen=RECENT_FORM_WINDOW)
    )
    dismissal_types: Counter[str] = field(default_factory=Counter)
    dismissed_by_bowlers: Counter[str] = field(default_factory=Counter)
    caught_by_fielders: Counter[str] = field(default_factory=Counter)

    @property
    def times_out(self) -> int:
        return derived.times_out(self.innings_batted, self.not_outs)

    def add(self, performance: Performance) -> None:
        """Fold one performance into the running counters."""
        self.match_ids.add(performance.match_id)
        self.performances.append(performance)

        self.add_batting(performance)
        self.add_bowling(performance)

        self.catches += performance.catches
        self.stumpings += performance.stumpings
        self.run_outs += performance.run_outs

        if (
            isinstance(performance, AnnotatedPerformance)
            and self.player_id is not None
            and performance.motm_player_id == self.player_id
        ):
            self.motm += 1

    def add_batting(self, p: Performance) -> None:
        if p.did_not_bat:
            self.recent_batting.appendleft(None)
            return

        self.innings_batted += 1
        if not p.dismissed:
            self.not_outs += 1
        self.runs += p.runs
        self.balls_faced += p.balls
        self.fours += p.fours
        self.sixes += p.sixes
        if p.runs > self.highest_score:
            self.highest_score = p.runs

        if p.runs >= HUNDRED:
            self.hundreds += 1
        elif p.runs >= FIFTY:
            self.fifties += 1
        elif p.runs >= TWENTY_FIVE:
            self.twenty_fives += 1
        self.recent_batting.appendleft(p.runs)

        if p.dismissed:
            self.dismissal_types[p.dismissal_type or DEFAULT_DISMISSAL_TYPE] += 1
            if p.bowler_name:
                self.dismissed_by_bowlers[p.bowler_name] += 1
            if p.dismissal_type == CAUGHT and p.fielder_name:
                self.caught_by_fielders[p.fielder_name] += 1
            if p.runs == 0:
                self.ducks += 1

    def add_bowling(self, p: Performance) -> None:
        if p.did_not_bowl or not p.overs:
            self.recent_bowling.appendleft(None)
            return

        runs_conceded = p.runs_conceded or 0
        self.innings_bowled += 1
        self.balls_bowled += parse_overs_to_balls(p.overs)
        self.runs_conceded += runs_conceded
        self.wickets += p.wickets

        if p.wickets > self.best_bowling_wickets or (
            p.wickets == self.best_bowling_wickets
            and runs_conceded < self.best_bowling_runs
        ):
            self.best_bowling_wickets = p.wickets
            self.best_bowling_runs = runs_conceded

        if p.wickets >= FIVE_WICKET_HAUL:
            self.five_wicket_hauls += 1
        elif p.wickets >= THREE_WICKET_HAUL:
            self.three_wicket_hauls += 1
        if p.hat_trick:
            self.hat_tricks += 1

        runs_text = "-" if p.runs_conceded is None else str(p.runs_conceded)
        self.recent_bowling.appendleft(f"{p.wickets}/{runs_text}")

    def freeze(self) -> CalculatedStats:
        """Produce the immutable result, including derived rates."""
        best_runs = None if math.isinf(self.best_bowling_runs) else int(self.best_bowling_runs)
        return CalculatedStats(
            matches=len(self.match_ids),
            innings_batted=self.innings_batted,
            not_outs=self.not_outs,
            runs=self.runs,
            highest_score=self.highest_score,
            balls_faced=self.balls_faced,
            twenty_fives=self.twenty_fives,
            fifties=self.fifties,
            hundreds=self.hundreds,
            fours=self.fours,
            sixes=self.sixes,
            ducks=self.ducks,
            innings_bowled=self.innings_bowled,
            balls_bowled=self.balls_bowled,
            runs_conceded=self.runs_conceded,
            wickets=self.wickets,
            best_bowling_wickets=self.best_bowling_wickets,
            best_bowling_runs=best_runs,
            three_wicket_hauls=self.three_wicket_hauls,
            five_wicket_hauls=self.five_wicket_hauls,
            hat_tricks=self.hat_tricks,
            catches=self.catches,
            stumpings=self.stumpings,
            run_outs=self.run_outs,
            motm=self.motm,
            performances=tuple(self.performances),
            last5_batting_scores=tuple(self.recent_batting),
            last5_bowling_figures=tuple(self.recent_bowling),
            dismissal_types=dict(self.dismissal_types),
            dismissed_by_bowlers=dict(self.dismissed_by_bowlers),
            caught_by_fielders=dict(self.caught_by_fielders),
            times_out=self.times_out,
            batting_average=derived.batting_average(self.runs, self.times_out),
            batting_strike_rate=derived.batting_strike_rate(self.runs, self.balls_faced),
            overs=derived.balls_to_overs(self.balls_bowled),
            bowling_average=derived.bowling_average(self.runs_conceded, self.wickets),
            economy=derived.economy_rate(self.runs_conceded, self.balls_bowled),
            bowling_strike_rate=derived.bowling_strike_rate(self.balls_bowled, self.wickets),
            best_bowling=derived.best_bowling_figures(self.best_bowling_wickets, best_runs),
        )


# =============================================================================
# Entry Points
# =============================================================================


def aggregate(
    player_id: PlayerId, performances: Iterable[Performance]
) -> CalculatedStats:
    """Aggregate performances that are already filtered and sorted.

    Args:
        player_id: Player the performances belong to (for MOTM credit).
        performances: Performances in chronological order.

    Returns:
        CalculatedStats for the supplied performances.
    """
    accumulator = StatsAccumulator(player_id=player_id)
    for performance in performances:
        accumulator.add(performance)
    return accumulator.freeze()


def compute_stats(
    player_id: PlayerId,
    matches: Iterable[Match],
    tournaments: Iterable[Tournament],
    stats_filter: StatsFilter | None = None,
) -> CalculatedStats:
    """Compute one player's statistics under an optional filter.

    Never raises on sparse or malformed performance data.

    Args:
        player_id: Player to compute statistics for.
        matches: All matches in the snapshot.
        tournaments: All tournaments in the snapshot.
        stats_filter: Format/year/tournament filter; None for full career.

    Returns:
        CalculatedStats for the selected performances.
    """
    performances = filter_performances(player_id, matches, tournaments, stats_filter)
    stats = aggregate(player_id, performances)
    get_logger(__name__, player_id=player_id).debug(
        f"Computed stats for player {player_id}: "
        f"{len(performances)} performances, {stats.matches} matches"
    )
    return stats
