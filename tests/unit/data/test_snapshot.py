"""Tests for the Record Store snapshot.

Tests document parsing, lookups, archive helpers and JSON file I/O.
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from cricket_stats.data.snapshot import Snapshot, load_snapshot, save_snapshot
from cricket_stats.types import PlayerNotFoundError, SnapshotError


class TestSnapshotFromDict:
    """Tests for Snapshot.from_dict."""

    def test_reads_all_collections(self, sample_snapshot: Snapshot) -> None:
        """Should read players, matches and tournaments."""
        assert [p.name for p in sample_snapshot.players] == ["Asha", "Ben", "Cara"]
        assert [m.id for m in sample_snapshot.matches] == [10, 11, 12]
        assert [t.name for t in sample_snapshot.tournaments] == ["Summer Cup"]
        assert sample_snapshot.trash == ()

    def test_missing_arrays_read_as_empty(self) -> None:
        """A document without arrays should give an empty snapshot."""
        snapshot = Snapshot.from_dict({})

        assert snapshot.players == ()
        assert snapshot.matches == ()
        assert snapshot.tournaments == ()

    def test_rejects_non_object(self) -> None:
        """A JSON array is not a snapshot."""
        with pytest.raises(SnapshotError, match="JSON object"):
            Snapshot.from_dict([])  # type: ignore[arg-type]

    def test_strict_requires_players_and_matches(self) -> None:
        """Strict mode should reject documents missing required arrays."""
        with pytest.raises(SnapshotError, match="players and matches"):
            Snapshot.from_dict({"players": []}, strict=True)

    def test_strict_accepts_minimal_document(self) -> None:
        """Strict mode should accept empty players and matches arrays."""
        snapshot = Snapshot.from_dict({"players": [], "matches": []}, strict=True)

        assert snapshot.players == ()

    def test_skips_unknown_trash_items(self) -> None:
        """Trash entries of unknown type should be dropped."""
        snapshot = Snapshot.from_dict(
            {
                "trash": [
                    {"type": "umpire", "data": {}, "deletedOn": "2024-01-01"},
                    {"type": "player", "data": {"id": 9, "name": "Old"}, "deletedOn": "2024-01-02"},
                ]
            }
        )

        assert len(snapshot.trash) == 1
        assert snapshot.trash[0].data.name == "Old"


class TestSnapshotLookups:
    """Tests for player and tournament lookups."""

    def test_get_player(self, sample_snapshot: Snapshot) -> None:
        """Should return the player with the given id."""
        assert sample_snapshot.get_player(2).name == "Ben"

    def test_get_player_unknown_raises(self, sample_snapshot: Snapshot) -> None:
        """Unknown ids should raise PlayerNotFoundError."""
        with pytest.raises(PlayerNotFoundError, match="Player 42 not found"):
            sample_snapshot.get_player(42)

    def test_find_player_unknown_returns_none(self, sample_snapshot: Snapshot) -> None:
        """find_player should return None for unknown ids."""
        assert sample_snapshot.find_player(42) is None

    def test_get_tournament_by_name(self, sample_snapshot: Snapshot) -> None:
        """Tournaments should be found by exact name."""
        assert sample_snapshot.get_tournament_by_name("Summer Cup").id == 100
        assert sample_snapshot.get_tournament_by_name("summer cup") is None


class TestSnapshotArchive:
    """Tests for soft delete and restore."""

    def test_delete_to_archive_moves_player(self, sample_snapshot: Snapshot) -> None:
        """Archiving should move the entity to the front of the trash."""
        when = datetime(2024, 7, 1, 12, 0)
        archived = sample_snapshot.delete_to_archive("player", 3, deleted_on=when)

        assert [p.id for p in archived.players] == [1, 2]
        assert archived.trash[0].type == "player"
        assert archived.trash[0].data.id == 3
        assert archived.trash[0].deleted_on == "2024-07-01T12:00:00"
        # Source snapshot untouched
        assert len(sample_snapshot.players) == 3

    def test_most_recent_deletion_first(self, sample_snapshot: Snapshot) -> None:
        """Later deletions should be placed before earlier ones."""
        archived = sample_snapshot.delete_to_archive("player", 3).delete_to_archive(
            "match", 12
        )

        assert [item.type for item in archived.trash] == ["match", "player"]

    def test_delete_unknown_is_noop(self, sample_snapshot: Snapshot) -> None:
        """Unknown types or ids should leave the snapshot unchanged."""
        assert sample_snapshot.delete_to_archive("umpire", 1) is sample_snapshot
        assert sample_snapshot.delete_to_archive("player", 42) is sample_snapshot

    def test_restore_from_archive(self, sample_snapshot: Snapshot) -> None:
        """Restoring should put the entity back and empty its trash slot."""
        archived = sample_snapshot.delete_to_archive("match", 11)
        restored = archived.restore_from_archive(archived.trash[0])

        assert sorted(m.id for m in restored.matches) == [10, 11, 12]
        assert restored.trash == ()

    def test_delete_permanently(self, sample_snapshot: Snapshot) -> None:
        """Permanent deletion should only drop the trash entry."""
        archived = sample_snapshot.delete_to_archive("player", 3)
        purged = archived.delete_permanently(archived.trash[0])

        assert purged.trash == ()
        assert [p.id for p in purged.players] == [1, 2]

    def test_delete_tournament_detaches_matches(self, sample_snapshot: Snapshot) -> None:
        """Deleting a tournament should keep its matches, unlinked."""
        result = sample_snapshot.delete_tournament(100)

        assert result.tournaments == ()
        assert [m.id for m in result.matches] == [10, 11, 12]
        assert all(m.tournament_id is None for m in result.matches)


class TestSnapshotFiles:
    """Tests for load_snapshot and save_snapshot."""

    def test_load_snapshot(self, snapshot_file: Path) -> None:
        """Should load a snapshot from a JSON file."""
        snapshot = load_snapshot(snapshot_file)

        assert len(snapshot.players) == 3
        assert len(snapshot.matches) == 3

    def test_load_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file should raise SnapshotError."""
        with pytest.raises(SnapshotError, match="not found"):
            load_snapshot(tmp_path / "missing.json")

    def test_load_invalid_json_raises(self, tmp_path: Path) -> None:
        """Invalid JSON should raise SnapshotError."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotError, match="not valid JSON"):
            load_snapshot(path)

    def test_load_non_utf8_raises(self, tmp_path: Path) -> None:
        """Bytes that are not UTF-8 should raise SnapshotError."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"players": ["\xff\xfe"]}')

        with pytest.raises(SnapshotError, match="not UTF-8"):
            load_snapshot(path)

    def test_load_unreadable_path_raises(self, tmp_path: Path) -> None:
        """A path that cannot be opened as a file should raise SnapshotError."""
        directory = tmp_path / "store.json"
        directory.mkdir()

        with pytest.raises(SnapshotError, match="could not be read"):
            load_snapshot(directory)

    def test_save_then_load_preserves_records(
        self, tmp_path: Path, sample_snapshot: Snapshot
    ) -> None:
        """A saved snapshot should load back equal."""
        path = tmp_path / "nested" / "out.json"
        save_snapshot(sample_snapshot, path)

        assert load_snapshot(path) == sample_snapshot

    def test_saved_document_uses_record_store_keys(
        self, tmp_path: Path, sample_snapshot: Snapshot
    ) -> None:
        """The saved JSON should keep the camelCase shape."""
        path = tmp_path / "out.json"
        save_snapshot(sample_snapshot, path)
        payload: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))

        assert set(payload) == {"players", "matches", "tournaments", "trash"}
        assert payload["matches"][0]["motmPlayerId"] == 1
        assert payload["matches"][0]["performances"][0]["runsCon"] == 12
