"""Tests for overs notation parsing."""
from __future__ import annotations

import pytest

from cricket_stats.stats.parsing import BALLS_PER_OVER, balls_to_overs, parse_overs_to_balls


class TestParseOversToBalls:
    """Tests for parse_overs_to_balls."""

    @pytest.mark.parametrize(
        ("overs", "expected"),
        [
            ("4.0", 24),
            ("4", 24),
            ("3.4", 22),
            ("0.5", 5),
            ("10.2", 62),
        ],
    )
    def test_valid_notation(self, overs: str, expected: int) -> None:
        """The part after the dot counts balls, not tenths of an over."""
        assert parse_overs_to_balls(overs) == expected

    @pytest.mark.parametrize("overs", ["", None, "abc", "."])
    def test_unparsable_is_zero(self, overs: str | None) -> None:
        """Empty or unparsable input should read as zero balls."""
        assert parse_overs_to_balls(overs) == 0

    def test_garbage_part_reads_as_zero(self) -> None:
        """A non-numeric part should count as zero without raising."""
        assert parse_overs_to_balls("2.x") == 12
        assert parse_overs_to_balls("x.3") == 3

    def test_balls_per_over(self) -> None:
        """An over has six legal balls."""
        assert BALLS_PER_OVER == 6


class TestBallsToOvers:
    """Tests for balls_to_overs."""

    @pytest.mark.parametrize(
        ("balls", "expected"),
        [(0, "0.0"), (5, "0.5"), (22, "3.4"), (24, "4.0"), (72, "12.0")],
    )
    def test_notation(self, balls: int, expected: str) -> None:
        """Balls should render as whole overs and remaining balls."""
        assert balls_to_overs(balls) == expected
