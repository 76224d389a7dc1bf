from __future__ import annotations

import logging
import random
import string
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from wordlemini.core.economy import Economy
from wordlemini.core.errors import InsufficientFunds, NoAvailablePosition
from wordlemini.core.evaluator import WORD_LENGTH, LetterStatus
from wordlemini.core.session import Session, SessionStatus

logger = logging.getLogger(__name__)


class BoosterKind(str, Enum):
    DART = "dart"
    HINT = "hint"
    SKIP = "skip"


@dataclass(frozen=True)
class BoosterInfo:
    """What the confirmation dialog shows before a booster is bought."""

    kind: BoosterKind
    cost: int
    title: str
    description: str


def booster_info(kind: BoosterKind, economy: Economy) -> BoosterInfo:
    if kind is BoosterKind.DART:
        return BoosterInfo(kind, economy.dart_cost, "Use Dart?",
                           f"Remove up to {economy.dart_letters} incorrect letters from the keyboard.")
    if kind is BoosterKind.HINT:
        return BoosterInfo(kind, economy.hint_cost, "Use Hint?",
                           "Reveal and lock one correct letter position.")
    if kind is BoosterKind.SKIP:
        return BoosterInfo(kind, economy.skip_cost, "Skip Level?",
                           "Skip current level and advance to the next one.")
    raise ValueError(f"Unknown booster: {kind!r}")


class BoosterResolver:
    """Applies paid boosters to a session.

    Every operation checks all of its preconditions before touching the
    session, so either the effect and the deduction both happen or neither
    does. Sessions are updated in place and returned with the new balance.
    """

    def __init__(self, rng: Optional[random.Random] = None, dart_letters: int = 3) -> None:
        self._rng = rng or random.Random()
        self._dart_letters = dart_letters

    def apply_dart(self, session: Session, coins: int, cost: int) -> Tuple[Session, int]:
        _require_funds(coins, cost)
        candidates = [
            letter
            for letter in string.ascii_uppercase
            if letter not in session.target and letter not in session.disabled_letters
        ]
        picked = self._rng.sample(candidates, min(self._dart_letters, len(candidates)))
        session.disabled_letters.update(picked)
        logger.info("Dart disabled letters: %s", ", ".join(sorted(picked)) or "none left")
        return session, coins - cost

    def apply_hint(self, session: Session, coins: int, cost: int) -> Tuple[Session, int]:
        _require_funds(coins, cost)
        available = [i for i in range(WORD_LENGTH) if i not in session.locked_positions]
        if not available:
            raise NoAvailablePosition()
        index = self._rng.choice(available)
        session.lock_position(index)
        logger.info("Hint locked position %d", index)
        return session, coins - cost

    def apply_skip(
        self, session: Session, coins: int, cost: int, now: Optional[float] = None
    ) -> Tuple[Session, int]:
        _require_funds(coins, cost)
        target = session.target
        session.record_attempt(target)
        session.update_keyboard(target, [LetterStatus.CORRECT] * WORD_LENGTH)
        session.skipped = True
        session.finish(SessionStatus.WON, time.time() if now is None else now)
        logger.info("Level %d skipped on row %d", session.level, len(session.attempts) - 1)
        return session, coins - cost


def _require_funds(coins: int, cost: int) -> None:
    if coins < cost:
        raise InsufficientFunds(cost, coins)
