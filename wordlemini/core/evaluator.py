from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import List, Sequence

WORD_LENGTH = 5


class LetterStatus(str, Enum):
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


_PRECEDENCE = {
    LetterStatus.UNKNOWN: 0,
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


def evaluate(guess: str, target: str) -> List[LetterStatus]:
    """Score ``guess`` against ``target``, one status per position.

    Exact matches are claimed first so that a repeated letter is only
    reported as present while the target still has unclaimed copies of it:
    ``evaluate("ERASE", "SPEED")`` marks the first E present and the last E
    present, never a third one.
    """
    if len(guess) != len(target):
        raise ValueError(f"guess and target differ in length: {guess!r} vs {target!r}")

    result = [LetterStatus.ABSENT] * len(guess)
    remaining = Counter(target)

    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            result[i] = LetterStatus.CORRECT
            remaining[g] -= 1

    for i, g in enumerate(guess):
        if result[i] is LetterStatus.CORRECT:
            continue
        if remaining[g] > 0:
            result[i] = LetterStatus.PRESENT
            remaining[g] -= 1

    return result


def strongest(current: LetterStatus, new: LetterStatus) -> LetterStatus:
    """Return whichever status carries more information for the keyboard."""
    return new if _PRECEDENCE[new] > _PRECEDENCE[current] else current


def is_win(statuses: Sequence[LetterStatus]) -> bool:
    return bool(statuses) and all(s is LetterStatus.CORRECT for s in statuses)
