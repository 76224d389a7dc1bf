"""Summary figures shown on the stats screen."""

from __future__ import annotations

from typing import Optional, Sequence

from wordlemini.core.progress import GameResult


def win_rate(history: Sequence[GameResult]) -> int:
    """Percentage of recorded games that were won, rounded."""
    if not history:
        return 0
    wins = sum(1 for game in history if game.won)
    # half rounds up, not to even
    return int(wins * 100 / len(history) + 0.5)


def average_attempts(history: Sequence[GameResult]) -> float:
    """Mean number of guesses (1-based) over won games, to one decimal."""
    won = [game for game in history if game.won]
    if not won:
        return 0.0
    total = sum(game.attempts_used + 1 for game in won)
    return round(total / len(won), 1)


def format_time(time_ms: Optional[int]) -> str:
    """Render milliseconds as ``m:ss``; no time at all shows as ``N/A``."""
    if not time_ms:
        return "N/A"
    seconds = time_ms // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"
