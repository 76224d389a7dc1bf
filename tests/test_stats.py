"""Tests for wordlemini.core.stats – summary figures."""

from __future__ import annotations

import pytest

from wordlemini.core.progress import GameResult
from wordlemini.core.stats import average_attempts, format_time, win_rate


def _game(won: bool, row: int = 0) -> GameResult:
    return GameResult(level=1, won=won, attempts_used=row, completion_time=1000,
                      score=100 - row * 10 if won else 0)


class TestWinRate:
    def test_empty(self):
        assert win_rate([]) == 0

    def test_all_won(self):
        assert win_rate([_game(True), _game(True)]) == 100

    def test_rounds_half_up(self):
        history = [_game(True)] + [_game(False)] * 7
        assert win_rate(history) == 13

    def test_two_thirds(self):
        assert win_rate([_game(True), _game(True), _game(False)]) == 67


class TestAverageAttempts:
    def test_no_wins(self):
        assert average_attempts([_game(False)]) == 0.0

    def test_counts_guesses_from_one(self):
        assert average_attempts([_game(True, 0), _game(True, 2)]) == 2.0

    def test_losses_ignored(self):
        assert average_attempts([_game(True, 3), _game(False, 5)]) == 4.0

    def test_one_decimal(self):
        assert average_attempts([_game(True, 0), _game(True, 0), _game(True, 1)]) == 1.3


class TestFormatTime:
    @pytest.mark.parametrize(
        "ms,text",
        [(None, "N/A"), (0, "N/A"), (999, "0:00"), (5000, "0:05"), (65000, "1:05"), (600000, "10:00")],
    )
    def test_format(self, ms, text):
        assert format_time(ms) == text
