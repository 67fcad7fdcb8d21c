"""Record Store layer for the cricket stats engine.

This module provides the entity dataclasses read from the Record Store's JSON
document and the immutable snapshot the statistics engine works on.

Submodules:
    models: Player, Match, Performance, Tournament and archive entities
    snapshot: Snapshot container, JSON file I/O and archive helpers

Example:
    >>> from cricket_stats.data import load_snapshot
    >>> snapshot = load_snapshot("data/cricket_stats.json")
    >>> len(snapshot.matches)
    12
"""
from __future__ import annotations

from cricket_stats.data.models import (
    ArchiveItem,
    Match,
    Performance,
    Player,
    Team,
    Tournament,
)
from cricket_stats.data.snapshot import Snapshot, load_snapshot, save_snapshot

__all__ = [
    "ArchiveItem",
    "Match",
    "Performance",
    "Player",
    "Snapshot",
    "Team",
    "Tournament",
    "load_snapshot",
    "save_snapshot",
]
