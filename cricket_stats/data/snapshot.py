"""In-memory snapshot of the Record Store and its JSON file format.

The Record Store keeps four arrays in one JSON document: ``players``,
``matches``, ``tournaments`` and ``trash``. Missing arrays read as empty and
players without an ``achievements`` list read as having none. The archive
helpers never mutate a snapshot; they return a new one.

Example:
    >>> from cricket_stats.data.snapshot import load_snapshot
    >>> snapshot = load_snapshot("data/cricket_stats.json")
    >>> player = snapshot.get_player(1700000000000)
    >>> archived = snapshot.delete_to_archive("player", player.id)
"""
from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Any

from cricket_stats.data.models import ArchiveItem, Match, Player, Tournament
from cricket_stats.logging import get_logger
from cricket_stats.types import (
    PlayerId,
    PlayerNotFoundError,
    SnapshotError,
    TournamentId,
)

logger = get_logger(__name__)

# Archive item type -> Snapshot attribute holding that entity
_COLLECTIONS = {
    "player": "players",
    "match": "matches",
    "tournament": "tournaments",
}


def _records(payload: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = payload.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of every record the statistics engine reads.

    Attributes:
        players: Active players.
        matches: Active matches, each owning its performances.
        tournaments: Active tournaments.
        trash: Soft-deleted entities, most recently deleted first.
    """

    players: tuple[Player, ...] = ()
    matches: tuple[Match, ...] = ()
    tournaments: tuple[Tournament, ...] = ()
    trash: tuple[ArchiveItem, ...] = ()

    @classmethod
    def from_dict(cls, payload: dict[str, Any], strict: bool = False) -> Snapshot:
        """Build a snapshot from a Record Store document.

        Args:
            payload: Parsed JSON document.
            strict: Require ``players`` and ``matches`` to be arrays, as the
                import screen does before overwriting local data.

        Returns:
            Snapshot instance.

        Raises:
            SnapshotError: If the payload is not an object, or ``strict`` is
                set and the required arrays are missing.
        """
        if not isinstance(payload, dict):
            raise SnapshotError("Snapshot must be a JSON object")
        if strict and not (
            isinstance(payload.get("players"), list)
            and isinstance(payload.get("matches"), list)
        ):
            raise SnapshotError("Invalid data file format: players and matches are required")

        trash: list[ArchiveItem] = []
        for item in _records(payload, "trash"):
            try:
                trash.append(ArchiveItem.from_dict(item))
            except ValueError as e:
                logger.warning(f"Skipping archive item: {e}")

        return cls(
            players=tuple(Player.from_dict(p) for p in _records(payload, "players")),
            matches=tuple(Match.from_dict(m) for m in _records(payload, "matches")),
            tournaments=tuple(
                Tournament.from_dict(t) for t in _records(payload, "tournaments")
            ),
            trash=tuple(trash),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert snapshot to the Record Store document shape."""
        return {
            "players": [p.to_dict() for p in self.players],
            "matches": [m.to_dict() for m in self.matches],
            "tournaments": [t.to_dict() for t in self.tournaments],
            "trash": [item.to_dict() for item in self.trash],
        }

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_player(self, player_id: PlayerId) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def get_player(self, player_id: PlayerId) -> Player:
        """Return the player with ``player_id``.

        Raises:
            PlayerNotFoundError: If no active player has that id.
        """
        player = self.find_player(player_id)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found")
        return player

    def get_tournament_by_name(self, name: str) -> Tournament | None:
        return next((t for t in self.tournaments if t.name == name), None)

    # -------------------------------------------------------------------------
    # Archive
    # -------------------------------------------------------------------------

    def delete_to_archive(
        self,
        item_type: str,
        item_id: int,
        deleted_on: datetime | None = None,
    ) -> Snapshot:
        """Move an entity to the front of the trash.

        Unknown types or ids leave the snapshot unchanged.
        """
        collection = _COLLECTIONS.get(item_type)
        if collection is None:
            logger.warning(f"Cannot archive unknown item type {item_type!r}")
            return self

        items: tuple[Any, ...] = getattr(self, collection)
        target = next((item for item in items if item.id == item_id), None)
        if target is None:
            logger.debug(f"No {item_type} {item_id} to archive")
            return self

        archived = ArchiveItem(
            type=item_type,
            data=target,
            deleted_on=(deleted_on or datetime.now()).isoformat(),
        )
        logger.info(f"Archived {item_type} {item_id}")
        return replace(
            self,
            **{collection: tuple(item for item in items if item.id != item_id)},
            trash=(archived, *self.trash),
        )

    def restore_from_archive(self, archived: ArchiveItem) -> Snapshot:
        """Put an archived entity back and drop it from the trash."""
        collection = _COLLECTIONS[archived.type]
        restored = replace(
            self,
            **{collection: (*getattr(self, collection), archived.data)},
        )
        return restored.delete_permanently(archived)

    def delete_permanently(self, archived: ArchiveItem) -> Snapshot:
        """Drop an entity from the trash."""
        return replace(
            self,
            trash=tuple(
                item
                for item in self.trash
                if item.type != archived.type or item.data.id != archived.data.id
            ),
        )

    def delete_tournament(self, tournament_id: TournamentId) -> Snapshot:
        """Remove a tournament outright, detaching its matches."""
        return replace(
            self,
            matches=tuple(
                replace(m, tournament_id=None) if m.tournament_id == tournament_id else m
                for m in self.matches
            ),
            tournaments=tuple(t for t in self.tournaments if t.id != tournament_id),
        )


def load_snapshot(path: str | Path, strict: bool = False) -> Snapshot:
    """Read a Record Store JSON file.

    Args:
        path: Path to the JSON document.
        strict: See ``Snapshot.from_dict``.

    Returns:
        Snapshot instance.

    Raises:
        SnapshotError: If the file is missing, unreadable, not UTF-8 or not
            valid JSON.
    """
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"Snapshot file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse snapshot {path}: {e}")
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        logger.error(f"Failed to decode snapshot {path}: {e}")
        raise SnapshotError(f"Snapshot {path} is not UTF-8 text: {e}") from e
    except OSError as e:
        logger.error(f"Failed to read snapshot {path}: {e}")
        raise SnapshotError(f"Snapshot {path} could not be read: {e}") from e

    snapshot = Snapshot.from_dict(payload, strict=strict)
    logger.info(
        f"Loaded snapshot {path}: {len(snapshot.players)} players, "
        f"{len(snapshot.matches)} matches, {len(snapshot.tournaments)} tournaments"
    )
    return snapshot


def save_snapshot(snapshot: Snapshot, path: str | Path) -> None:
    """Write a snapshot as an indented Record Store JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(snapshot.to_dict(), f, indent=2, ensure_ascii=False)
        logger.debug(f"Saved snapshot to {path}")
    except OSError as e:
        logger.error(f"Failed to save snapshot: {e}")
        raise
