"""Shared pytest fixtures for cricket stats tests.

This module contains fixtures used across multiple test modules:
- Configuration fixtures (test settings)
- Sample data fixtures (Record Store document, snapshot, snapshot file)
- Time fixtures

The sample Record Store holds three players (Asha, Ben and Cara, who has
never played), one tournament ("Summer Cup") and three matches:

- match 12, 2023-08-20, ODI: Asha 0 (out, caught), 1/10 off 2.0.
  Ben did not bat, 5/25 off 5.0 with a hat-trick and 3 catches.
- match 10, 2024-03-01, T20, Summer Cup, Asha MOTM: Asha 45* off 30,
  0/12 off 4.0. Ben 12 off 10 (caught), 3/30 off 3.0, 1 catch.
- match 11, 2024-06-15, T20: Asha 60 off 40 (bowled), did not bowl.
  Ben 0 off 2 (lbw), 3/20 off 4.0.

Example:
    def test_something(sample_snapshot):
        # sample_snapshot is a Snapshot built from sample_snapshot_data
        pass
"""
from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path
from typing import Any, Generator

import pytest

from cricket_stats.config import Settings, reset_settings
from cricket_stats.data.snapshot import Snapshot


# =============================================================================
# Paths
# =============================================================================


@pytest.fixture
def tmp_data_dir(tmp_path: Path) -> Path:
    """Create and return temporary data directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture
def test_settings(tmp_data_dir: Path) -> Generator[Settings, None, None]:
    """Provide test settings with temporary directories.

    Automatically resets settings singleton after test.
    """
    os.environ["CRICKET_DATA_PATH"] = str(tmp_data_dir / "cricket_stats.json")
    os.environ["LOG_DIR"] = str(tmp_data_dir / "logs")
    os.environ["LOG_LEVEL"] = "DEBUG"

    reset_settings()
    from cricket_stats.config import get_settings

    yield get_settings()

    # Cleanup
    reset_settings()
    for key in ["CRICKET_DATA_PATH", "LOG_DIR", "LOG_LEVEL"]:
        os.environ.pop(key, None)


# =============================================================================
# Sample Data
# =============================================================================


@pytest.fixture
def sample_snapshot_data() -> dict[str, Any]:
    """Return a small Record Store document in its camelCase JSON shape."""
    return {
        "players": [
            {
                "id": 1,
                "name": "Asha",
                "dob": "1995-07-10",
                "role": "Batter",
                "battingStyle": "Right-hand bat",
                "bowlingStyle": "Right-arm medium",
                "achievements": ["duck"],
            },
            {"id": 2, "name": "Ben", "role": "Bowler"},
            {"id": 3, "name": "Cara", "achievements": []},
        ],
        "tournaments": [
            {
                "id": 100,
                "name": "Summer Cup",
                "type": "solo",
                "startDate": "2024-03-01",
                "endDate": "2024-03-31",
                "participants": [1, 2],
            }
        ],
        "matches": [
            {
                "id": 10,
                "date": "2024-03-01",
                "format": "T20",
                "tournamentId": 100,
                "motmPlayerId": 1,
                "performances": [
                    {
                        "playerId": 1,
                        "runs": 45,
                        "balls": 30,
                        "fours": 4,
                        "sixes": 2,
                        "out": "no",
                        "overs": "4.0",
                        "runsCon": 12,
                        "wkts": 0,
                    },
                    {
                        "playerId": 2,
                        "runs": 12,
                        "balls": 10,
                        "out": "yes",
                        "dismissalType": "caught",
                        "bowlerName": "Dev",
                        "fielderName": "Eli",
                        "overs": "3.0",
                        "runsCon": 30,
                        "wkts": 3,
                        "catches": 1,
                    },
                ],
            },
            {
                "id": 11,
                "date": "2024-06-15",
                "format": "T20",
                "performances": [
                    {
                        "playerId": 1,
                        "runs": 60,
                        "balls": 40,
                        "fours": 6,
                        "sixes": 1,
                        "out": "yes",
                        "dismissalType": "bowled",
                        "bowlerName": "Zed",
                        "dnbBowl": True,
                    },
                    {
                        "playerId": 2,
                        "runs": 0,
                        "balls": 2,
                        "out": "yes",
                        "dismissalType": "lbw",
                        "bowlerName": "Zed",
                        "overs": "4.0",
                        "runsCon": 20,
                        "wkts": 3,
                    },
                ],
            },
            {
                "id": 12,
                "date": "2023-08-20",
                "format": "ODI",
                "performances": [
                    {
                        "playerId": 1,
                        "runs": 0,
                        "balls": 3,
                        "out": "yes",
                        "dismissalType": "caught",
                        "bowlerName": "Dev",
                        "fielderName": "Eli",
                        "overs": "2.0",
                        "runsCon": 10,
                        "wkts": 1,
                    },
                    {
                        "playerId": 2,
                        "dnbBat": True,
                        "overs": "5.0",
                        "runsCon": 25,
                        "wkts": 5,
                        "hatTrick": True,
                        "catches": 3,
                    },
                ],
            },
        ],
        "trash": [],
    }


@pytest.fixture
def sample_snapshot(sample_snapshot_data: dict[str, Any]) -> Snapshot:
    """Return the sample Record Store as a Snapshot."""
    return Snapshot.from_dict(sample_snapshot_data)


@pytest.fixture
def snapshot_file(tmp_data_dir: Path, sample_snapshot_data: dict[str, Any]) -> Path:
    """Write the sample Record Store to a JSON file and return its path."""
    path = tmp_data_dir / "cricket_stats.json"
    path.write_text(json.dumps(sample_snapshot_data), encoding="utf-8")
    return path


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def frozen_today() -> date:
    """Return a fixed date for deterministic tests."""
    return date(2024, 7, 1)


# =============================================================================
# Marker Helpers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
