"""Record Store entities for players, matches, performances and tournaments.

The Record Store persists a JSON document with camelCase keys. These frozen
dataclasses read that shape tolerantly: absent or malformed optional fields
fall back to zero, False, None or empty, and nothing here raises on bad
values. ``to_dict`` writes the same shape back.

Example:
    >>> from cricket_stats.data.models import Match
    >>> match = Match.from_dict({"id": 1, "date": "2024-05-04", "format": "T20",
    ...                          "performances": [{"playerId": 7, "runs": 45}]})
    >>> match.performances[0].match_id
    1
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from cricket_stats.types import MatchId, PlayerId, TournamentId

_LEADING_NUMBER = re.compile(r"\s*(\d+)")


# =============================================================================
# Field Coercion
# =============================================================================


def _to_int(value: Any, default: int = 0) -> int:
    """Coerce a JSON value to a non-negative int, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0)
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match:
            return int(match.group(1))
    return default


def _to_optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, str) and not _LEADING_NUMBER.match(value):
        return None
    return _to_int(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y"}
    return bool(value)


def _to_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_date(value: Any) -> date | None:
    """Parse an ISO date (optionally with a time part), or return None."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _to_id_tuple(value: Any) -> tuple[int, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(_to_int(v) for v in value)


def _date_str(value: date | None) -> str | None:
    return value.isoformat() if value else None


# =============================================================================
# Entities
# =============================================================================


@dataclass(frozen=True)
class Player:
    """A tracked individual.

    Attributes:
        id: Unique, never reused player id.
        name: Display name.
        dob: Date of birth, if known.
        role: Free-form role label (e.g. "Batter").
        batting_style: Free-form batting style label.
        bowling_style: Free-form bowling style label.
        avatar_url: Avatar image URL or data URI.
        achievements: Ids of achievements recorded as unlocked.
    """

    id: PlayerId
    name: str
    dob: date | None = None
    role: str | None = None
    batting_style: str | None = None
    bowling_style: str | None = None
    avatar_url: str | None = None
    achievements: tuple[str, ...] = ()

    def age(self, on: date | None = None) -> int | None:
        """Return age in whole years on ``on`` (default today), or None."""
        if self.dob is None:
            return None
        today = on or date.today()
        years = today.year - self.dob.year
        if (today.month, today.day) < (self.dob.month, self.dob.day):
            years -= 1
        return abs(years)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        achievements = data.get("achievements")
        return cls(
            id=_to_int(data.get("id")),
            name=str(data.get("name") or ""),
            dob=_to_date(data.get("dob")),
            role=_to_optional_str(data.get("role")),
            batting_style=_to_optional_str(data.get("battingStyle")),
            bowling_style=_to_optional_str(data.get("bowlingStyle")),
            avatar_url=_to_optional_str(data.get("avatarUrl")),
            achievements=(
                tuple(str(a) for a in achievements)
                if isinstance(achievements, list)
                else ()
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dob": _date_str(self.dob),
            "role": self.role,
            "battingStyle": self.batting_style,
            "bowlingStyle": self.bowling_style,
            "avatarUrl": self.avatar_url,
            "achievements": list(self.achievements),
        }


@dataclass(frozen=True)
class Performance:
    """One player's contribution to one match.

    Batting fields are ignored when ``did_not_bat`` is set and bowling fields
    when ``did_not_bowl`` is set or ``overs`` is empty. ``overs`` keeps the
    scorer's "whole.balls" notation (e.g. "3.4"); it is parsed only when
    statistics are computed. ``runs_conceded`` stays None when the scorer
    left it blank so recent figures can show "W/-".
    """

    player_id: PlayerId
    match_id: MatchId
    # Batting
    did_not_bat: bool = False
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    dismissed: bool = False
    dismissal_type: str | None = None
    bowler_name: str | None = None
    fielder_name: str | None = None
    # Bowling
    did_not_bowl: bool = False
    overs: str | None = None
    runs_conceded: int | None = None
    wickets: int = 0
    hat_trick: bool = False
    # Fielding
    catches: int = 0
    stumpings: int = 0
    run_outs: int = 0

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], match_id: MatchId | None = None
    ) -> Performance:
        """Build a performance from Record Store JSON.

        Args:
            data: Performance object with camelCase keys.
            match_id: Owning match id; overrides ``data["matchId"]``.
        """
        overs = data.get("overs")
        if isinstance(overs, (int, float)) and not isinstance(overs, bool):
            overs = str(overs)
        return cls(
            player_id=_to_int(data.get("playerId")),
            match_id=match_id if match_id is not None else _to_int(data.get("matchId")),
            did_not_bat=_to_bool(data.get("dnbBat")),
            runs=_to_int(data.get("runs")),
            balls=_to_int(data.get("balls")),
            fours=_to_int(data.get("fours")),
            sixes=_to_int(data.get("sixes")),
            dismissed=str(data.get("out") or "").strip().lower() == "yes",
            dismissal_type=_to_optional_str(data.get("dismissalType")),
            bowler_name=_to_optional_str(data.get("bowlerName")),
            fielder_name=_to_optional_str(data.get("fielderName")),
            did_not_bowl=_to_bool(data.get("dnbBowl")),
            overs=_to_optional_str(overs),
            runs_conceded=_to_optional_int(data.get("runsCon")),
            wickets=_to_int(data.get("wkts")),
            hat_trick=_to_bool(data.get("hatTrick")),
            catches=_to_int(data.get("catches")),
            stumpings=_to_int(data.get("stumpings")),
            run_outs=_to_int(data.get("runOuts")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "matchId": self.match_id,
            "dnbBat": self.did_not_bat,
            "runs": self.runs,
            "balls": self.balls,
            "fours": self.fours,
            "sixes": self.sixes,
            "out": "yes" if self.dismissed else "no",
            "dismissalType": self.dismissal_type,
            "bowlerName": self.bowler_name,
            "fielderName": self.fielder_name,
            "dnbBowl": self.did_not_bowl,
            "overs": self.overs,
            "runsCon": self.runs_conceded,
            "wkts": self.wickets,
            "hatTrick": self.hat_trick,
            "catches": self.catches,
            "stumpings": self.stumpings,
            "runOuts": self.run_outs,
        }


@dataclass(frozen=True)
class Match:
    """One played fixture and the performances logged for it."""

    id: MatchId
    date: date | None
    format: str
    tournament_id: TournamentId | None = None
    motm_player_id: PlayerId | None = None
    performances: tuple[Performance, ...] = ()

    @property
    def year(self) -> int | None:
        return self.date.year if self.date else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Match:
        match_id = _to_int(data.get("id"))
        performances = data.get("performances")
        return cls(
            id=match_id,
            date=_to_date(data.get("date")),
            format=str(data.get("format") or ""),
            tournament_id=_to_optional_int(data.get("tournamentId")),
            motm_player_id=_to_optional_int(data.get("motmPlayerId")),
            performances=tuple(
                Performance.from_dict(p, match_id=match_id)
                for p in (performances if isinstance(performances, list) else [])
                if isinstance(p, dict)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": _date_str(self.date),
            "format": self.format,
            "tournamentId": self.tournament_id,
            "motmPlayerId": self.motm_player_id,
            "performances": [p.to_dict() for p in self.performances],
        }


@dataclass(frozen=True)
class Team:
    """A fixed roster inside a two-team tournament."""

    id: int
    players: tuple[PlayerId, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Team:
        return cls(id=_to_int(data.get("id")), players=_to_id_tuple(data.get("players")))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "players": list(self.players)}


@dataclass(frozen=True)
class Tournament:
    """A named grouping of matches.

    ``type`` is "solo" for an individual roster (``participants``) or "team"
    for two fixed rosters (``teams``). Statistics filters join on ``name``.
    """

    id: TournamentId
    name: str
    type: str = "solo"
    start_date: date | None = None
    end_date: date | None = None
    participants: tuple[PlayerId, ...] = ()
    teams: tuple[Team, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tournament:
        teams = data.get("teams")
        return cls(
            id=_to_int(data.get("id")),
            name=str(data.get("name") or ""),
            type="team" if data.get("type") == "team" else "solo",
            start_date=_to_date(data.get("startDate")),
            end_date=_to_date(data.get("endDate")),
            participants=_to_id_tuple(data.get("participants")),
            teams=tuple(
                Team.from_dict(t)
                for t in (teams if isinstance(teams, list) else [])
                if isinstance(t, dict)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "startDate": _date_str(self.start_date),
            "endDate": _date_str(self.end_date),
            "participants": list(self.participants),
            "teams": [t.to_dict() for t in self.teams],
        }


ENTITY_TYPES: dict[str, type[Player] | type[Match] | type[Tournament]] = {
    "player": Player,
    "match": Match,
    "tournament": Tournament,
}


@dataclass(frozen=True)
class ArchiveItem:
    """A soft-deleted entity kept in the Record Store's trash."""

    type: str
    data: Player | Match | Tournament
    deleted_on: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArchiveItem:
        """Build an archive item.

        Raises:
            ValueError: If the item type is not player, match or tournament.
        """
        item_type = data.get("type")
        if item_type not in ENTITY_TYPES:
            raise ValueError(f"Unknown archive item type: {item_type!r}")
        payload = data.get("data") if isinstance(data.get("data"), dict) else {}
        return cls(
            type=item_type,
            data=ENTITY_TYPES[item_type].from_dict(payload),
            deleted_on=str(data.get("deletedOn") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "data": self.data.to_dict(), "deletedOn": self.deleted_on}
