"""Amateur Cricket Statistics Engine.

A Python library and CLI that turns a raw per-match performance log into
career, season and tournament statistics, career progression series and
unlocked achievements.

Example:
    >>> from cricket_stats.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.data_path)
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Cricket Stats Team"

# Public API exports
from cricket_stats.config import Settings, get_settings

__all__ = [
    "Settings",
    "__author__",
    "__version__",
    "get_settings",
]
