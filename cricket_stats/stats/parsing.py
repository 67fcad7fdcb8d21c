"""Overs notation parsing.

Scorers record overs as "whole.balls", where the part after the dot counts
legal balls of an unfinished over (0-5), so "3.4" is 22 balls, not 3.4
overs. Parsing never raises: a part that does not start with digits reads
as 0.

Example:
    >>> parse_overs_to_balls("3.4")
    22
    >>> balls_to_overs(22)
    '3.4'
"""

from __future__ import annotations

import re

BALLS_PER_OVER: int = 6

# Leading digits of one dot-separated part ("4", "4abc" -> 4)
OVERS_PART = re.compile(r"\s*(\d+)")


def _parse_part(part: str) -> int:
    match = OVERS_PART.match(part)
    return int(match.group(1)) if match else 0


def parse_overs_to_balls(overs: str | None) -> int:
    """Convert an overs string to a legal ball count.

    Args:
        overs: Overs in "whole.balls" notation, e.g. "4.0" or "2.3".

    Returns:
        Total legal balls; 0 for None, empty or unparsable input.
    """
    if not isinstance(overs, str) or not overs:
        return 0
    parts = overs.split(".")
    whole = _parse_part(parts[0])
    partial = _parse_part(parts[1]) if len(parts) > 1 else 0
    return whole * BALLS_PER_OVER + partial


def balls_to_overs(balls: int) -> str:
    """Convert a legal ball count to "whole.balls" notation.

    Returns:
        Overs string; "0.0" when no balls were bowled.
    """
    if not balls:
        return "0.0"
    return f"{balls // BALLS_PER_OVER}.{balls % BALLS_PER_OVER}"
