"""Integration tests for the statistics pipeline.

Tests the path from a Record Store JSON file through filtering,
aggregation, progression, achievements and leaderboards, including
archive edits saved back to disk.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from cricket_stats.data.snapshot import load_snapshot, save_snapshot
from cricket_stats.stats import (
    StatsFilter,
    build_leaderboard,
    calculate_career_progression,
    career_achievements,
    compute_stats,
    evaluate_achievements,
    new_achievements,
)
from cricket_stats.types import Sentinel


@pytest.mark.integration
class TestStatsPipeline:
    """End-to-end tests over a snapshot file."""

    def test_file_to_career_summary(self, snapshot_file: Path) -> None:
        """Stats, progression and achievements should agree with each other."""
        snapshot = load_snapshot(snapshot_file)
        player = snapshot.get_player(1)

        stats = compute_stats(player.id, snapshot.matches, snapshot.tournaments)
        points = calculate_career_progression(stats.performances, snapshot.matches)
        unlocked = evaluate_achievements(player, stats)

        assert len(points) == stats.matches
        assert points[-1].batting_average == stats.batting_average
        assert points[-1].bowling_average == stats.bowling_average
        assert unlocked == career_achievements(player, snapshot.matches, snapshot.tournaments)
        assert new_achievements(player, stats) == {"half-centurion"}

    def test_every_filter_combination_is_total(self, snapshot_file: Path) -> None:
        """No filter combination raises or leaks NaN for any player."""
        snapshot = load_snapshot(snapshot_file)
        filters = [
            StatsFilter(format=f, year=y, tournament=t)
            for f in (None, "T20", "ODI", "Test")
            for y in (None, 2023, 2024, 1999)
            for t in (None, "Summer Cup", "Winter Shield")
        ]

        for player in snapshot.players:
            for stats_filter in filters:
                stats = compute_stats(
                    player.id, snapshot.matches, snapshot.tournaments, stats_filter
                )
                for value in (
                    stats.batting_average,
                    stats.batting_strike_rate,
                    stats.bowling_average,
                    stats.economy,
                    stats.bowling_strike_rate,
                ):
                    assert isinstance(value, (float, Sentinel))
                    assert value == value  # NaN never equals itself
                assert len(stats.last5_batting_scores) <= 5
                assert stats.times_out == stats.innings_batted - stats.not_outs

    def test_archived_match_drops_out_of_stats(
        self, snapshot_file: Path, tmp_path: Path
    ) -> None:
        """Archiving a match and saving should change the reloaded stats."""
        snapshot = load_snapshot(snapshot_file)
        edited = snapshot.delete_to_archive("match", 12)
        out_path = tmp_path / "edited.json"
        save_snapshot(edited, out_path)

        reloaded = load_snapshot(out_path)
        stats = compute_stats(2, reloaded.matches, reloaded.tournaments)

        assert [item.type for item in reloaded.trash] == ["match"]
        assert stats.matches == 2
        assert stats.five_wicket_hauls == 0
        assert "five-fer" not in career_achievements(
            reloaded.get_player(2), reloaded.matches, reloaded.tournaments
        )

        restored = reloaded.restore_from_archive(reloaded.trash[0])
        assert compute_stats(2, restored.matches, restored.tournaments).five_wicket_hauls == 1

    def test_deleted_tournament_filter_selects_nothing(self, snapshot_file: Path) -> None:
        """Once a tournament is gone its name no longer resolves."""
        snapshot = load_snapshot(snapshot_file).delete_tournament(100)

        board = build_leaderboard(
            snapshot.players,
            snapshot.matches,
            snapshot.tournaments,
            StatsFilter(tournament="Summer Cup"),
        )
        career = compute_stats(1, snapshot.matches, snapshot.tournaments)

        assert board.empty
        assert career.matches == 3

    def test_sparse_import_is_tolerated(self, tmp_path: Path) -> None:
        """Malformed fields fall back to defaults instead of failing."""
        payload: dict[str, Any] = {
            "players": [{"id": "7", "name": "Dee"}],
            "matches": [
                {
                    "id": 1,
                    "date": "not a date",
                    "format": "T20",
                    "performances": [
                        {"playerId": 7, "runs": "31abc", "balls": None, "out": "yes",
                         "overs": "two", "runsCon": "", "wkts": "1"},
                    ],
                }
            ],
        }
        path = tmp_path / "sparse.json"
        path.write_text(json.dumps(payload), encoding="utf-8")

        snapshot = load_snapshot(path, strict=True)
        stats = compute_stats(7, snapshot.matches, snapshot.tournaments)

        assert stats.runs == 31
        assert stats.batting_strike_rate == 0.0
        assert stats.batting_average == 31.0
        assert stats.innings_bowled == 1
        assert stats.balls_bowled == 0
        assert stats.economy == 0.0
        assert stats.last5_bowling_figures == ("1/-",)
        undated = compute_stats(
            7, snapshot.matches, snapshot.tournaments, StatsFilter(year=2024)
        )
        assert undated.matches == 0
