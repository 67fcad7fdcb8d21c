"""Achievement rules evaluated against computed statistics.

Achievements are a fixed, ordered table of named predicates over
``(player, stats)``. Evaluation is pure and stateless: nothing is persisted,
and the same inputs always unlock the same achievements.

The engine does not decide the scope of the statistics it is given.
``evaluate_achievements`` judges whatever stats object it receives (a full
career or a filtered season); ``career_achievements`` is the explicit
full-career path.

Example:
    >>> stats = compute_stats(player.id, matches, tournaments)
    >>> sorted(evaluate_achievements(player, stats))
    ['centurion', 'duck', 'half-centurion']
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from cricket_stats.data.models import Match, Player, Tournament
from cricket_stats.stats.aggregator import CalculatedStats, compute_stats
from cricket_stats.stats.parsing import BALLS_PER_OVER, parse_overs_to_balls
from cricket_stats.types import MatchId

# =============================================================================
# Thresholds
# =============================================================================

WALL_INNINGS: int = 3
WALL_MIN_RUNS: int = 25

FINISHER_MIN_RUNS: int = 20
FINISHER_MIN_STRIKE_RATE: float = 200.0

ALL_ROUNDER_MIN_RUNS: int = 25
ALL_ROUNDER_MIN_WICKETS: int = 2

MISER_MIN_BALLS: int = 12  # two overs
MISER_MAX_ECONOMY: float = 3.0

SAFE_HANDS_MIN_CATCHES: int = 3


@dataclass(frozen=True)
class Achievement:
    """A named rule unlocked when ``condition(player, stats)`` holds.

    Attributes:
        id: Stable identifier stored on ``Player.achievements``.
        name: Display name.
        description: Human-readable unlock condition.
        condition: Pure predicate over a player and their statistics.
    """

    id: str
    name: str
    description: str
    condition: Callable[[Player, CalculatedStats], bool]

    def is_unlocked(self, player: Player, stats: CalculatedStats) -> bool:
        return bool(self.condition(player, stats))


# =============================================================================
# Predicates
# =============================================================================


def _is_wall(player: Player, stats: CalculatedStats) -> bool:
    recent = stats.last5_batting_scores[:WALL_INNINGS]
    return len(recent) == WALL_INNINGS and all(
        score is not None and score >= WALL_MIN_RUNS for score in recent
    )


def _is_finisher(player: Player, stats: CalculatedStats) -> bool:
    return any(
        not p.did_not_bat
        and p.runs >= FINISHER_MIN_RUNS
        and p.balls > 0
        and p.runs / p.balls * 100 >= FINISHER_MIN_STRIKE_RATE
        for p in stats.performances
    )


def _is_all_rounder(player: Player, stats: CalculatedStats) -> bool:
    totals: dict[MatchId, list[int]] = defaultdict(lambda: [0, 0])
    for p in stats.performances:
        totals[p.match_id][0] += p.runs
        totals[p.match_id][1] += p.wickets
    return any(
        runs >= ALL_ROUNDER_MIN_RUNS and wickets >= ALL_ROUNDER_MIN_WICKETS
        for runs, wickets in totals.values()
    )


def _is_miser(player: Player, stats: CalculatedStats) -> bool:
    for p in stats.performances:
        if p.did_not_bowl or not p.overs or p.runs_conceded is None:
            continue
        balls = parse_overs_to_balls(p.overs)
        if (
            balls >= MISER_MIN_BALLS
            and p.runs_conceded / (balls / BALLS_PER_OVER) < MISER_MAX_ECONOMY
        ):
            return True
    return False


def _has_safe_hands(player: Player, stats: CalculatedStats) -> bool:
    catches: dict[MatchId, int] = defaultdict(int)
    for p in stats.performances:
        catches[p.match_id] += p.catches
    return any(total >= SAFE_HANDS_MIN_CATCHES for total in catches.values())


# =============================================================================
# Rule Table
# =============================================================================

ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        "centurion", "Centurion", "Score a century (100+ runs)",
        lambda player, stats: stats.hundreds > 0,
    ),
    Achievement(
        "half-centurion", "Half-Centurion", "Score a half-century (50+ runs)",
        lambda player, stats: stats.fifties > 0,
    ),
    Achievement(
        "the-wall", "The Wall", "3 consecutive scores of 25+ runs",
        _is_wall,
    ),
    Achievement(
        "finisher", "Finisher", "Score 20+ runs with SR 200+",
        _is_finisher,
    ),
    Achievement(
        "hat-trick", "Hat-trick Hero", "Take a hat-trick (3 wickets in 3 balls)",
        lambda player, stats: any(p.hat_trick for p in stats.performances),
    ),
    Achievement(
        "five-fer", "Five-fer", "Take 5 wickets in an innings",
        lambda player, stats: stats.five_wicket_hauls > 0,
    ),
    Achievement(
        "three-fer", "Three-fer", "Take 3 wickets in an innings",
        lambda player, stats: stats.three_wicket_hauls > 0,
    ),
    Achievement(
        "all-rounder", "All-Rounder", "Score 25+ runs and take 2+ wickets in same match",
        _is_all_rounder,
    ),
    Achievement(
        "miser", "Miser", "Economy rate under 3 in an innings (min 2 overs)",
        _is_miser,
    ),
    Achievement(
        "safe-hands", "Safe Hands", "Take 3 catches in a match",
        _has_safe_hands,
    ),
    Achievement(
        "duck", "Duck", "Get out for 0 runs",
        lambda player, stats: stats.ducks > 0,
    ),
)

_BY_ID: dict[str, Achievement] = {a.id: a for a in ACHIEVEMENTS}


# =============================================================================
# Evaluation
# =============================================================================


def get_achievement(achievement_id: str) -> Achievement | None:
    return _BY_ID.get(achievement_id)


def unlocked_achievements(player: Player, stats: CalculatedStats) -> list[Achievement]:
    """Return the unlocked achievements in table order."""
    return [a for a in ACHIEVEMENTS if a.is_unlocked(player, stats)]


def evaluate_achievements(player: Player, stats: CalculatedStats) -> frozenset[str]:
    """Return the ids of every achievement ``stats`` unlocks."""
    return frozenset(a.id for a in unlocked_achievements(player, stats))


def career_achievements(
    player: Player,
    matches: Iterable[Match],
    tournaments: Iterable[Tournament],
) -> frozenset[str]:
    """Evaluate achievements against the player's unfiltered career."""
    return evaluate_achievements(player, compute_stats(player.id, matches, tournaments))


def new_achievements(player: Player, stats: CalculatedStats) -> frozenset[str]:
    """Return unlocked ids not yet recorded on ``player.achievements``."""
    return evaluate_achievements(player, stats) - frozenset(player.achievements)
