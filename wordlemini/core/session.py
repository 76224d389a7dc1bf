from __future__ import annotations

import time
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set

from wordlemini.core.evaluator import WORD_LENGTH, LetterStatus, strongest

MAX_ATTEMPTS = 6


class SessionStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class Session:
    """Mutable state of one level. Only ``SessionController`` and the booster
    resolver change it; the UI reads the public attributes.

    The guess buffer holds one slot per position. Locked positions (revealed
    by a hint) are always pre-filled with the target letter and are skipped by
    typing and backspace.
    """

    def __init__(self, target: str, level: int, started_at: Optional[float] = None) -> None:
        if len(target) != WORD_LENGTH:
            raise ValueError(f"target must have {WORD_LENGTH} letters: {target!r}")
        self._target = target.upper()
        self.level = level
        self.attempts: List[str] = []
        self.status = SessionStatus.PLAYING
        self.locked_positions: Set[int] = set()
        self.disabled_letters: Set[str] = set()
        self.keyboard_status: Dict[str, LetterStatus] = {}
        self.started_at = time.time() if started_at is None else started_at
        self.finished_at: Optional[float] = None
        self.skipped = False
        self.revealing = False
        self.guess_buffer: List[Optional[str]] = [None] * WORD_LENGTH

    @property
    def target(self) -> str:
        """The hidden word, upper case."""
        return self._target

    @property
    def is_playing(self) -> bool:
        """True until the level is won or lost."""
        return self.status is SessionStatus.PLAYING

    @property
    def accepts_input(self) -> bool:
        """True while the player may type, guess or use a booster."""
        return self.status is SessionStatus.PLAYING and not self.revealing

    @property
    def current_row(self) -> int:
        """Index of the row the next guess goes into."""
        return len(self.attempts)

    def letter_status(self, letter: str) -> LetterStatus:
        """Keyboard colour of ``letter``; untouched letters are unknown."""
        return self.keyboard_status.get(letter.upper(), LetterStatus.UNKNOWN)

    def current_guess(self) -> str:
        """Letters typed so far, in order, stopping at the first empty slot."""
        letters = []
        for slot in self.guess_buffer:
            if slot is None:
                break
            letters.append(slot)
        return "".join(letters)

    def type_letter(self, letter: str) -> bool:
        """Put ``letter`` in the first empty slot. Returns False when the row is full."""
        for i, slot in enumerate(self.guess_buffer):
            if slot is None:
                self.guess_buffer[i] = letter
                return True
        return False

    def delete_letter(self) -> bool:
        """Clear the last filled slot that is not locked by a hint."""
        for i in reversed(range(WORD_LENGTH)):
            if i in self.locked_positions:
                continue
            if self.guess_buffer[i] is not None:
                self.guess_buffer[i] = None
                return True
        return False

    def reset_buffer(self) -> None:
        """Empty the row, keeping hinted letters in place."""
        self.guess_buffer = [
            self._target[i] if i in self.locked_positions else None for i in range(WORD_LENGTH)
        ]

    def lock_position(self, index: int) -> None:
        """Reveal the target letter at ``index`` and keep it there."""
        self.locked_positions.add(index)
        self.guess_buffer[index] = self._target[index]

    def record_attempt(self, guess: str) -> None:
        """Append a completed guess. A level never holds more than six."""
        if len(self.attempts) >= MAX_ATTEMPTS:
            raise ValueError(f"a level allows at most {MAX_ATTEMPTS} attempts")
        self.attempts.append(guess)

    def update_keyboard(self, guess: str, statuses: Sequence[LetterStatus]) -> None:
        """Merge a scored guess into the keyboard without downgrading any letter."""
        for letter, status in zip(guess, statuses):
            current = self.keyboard_status.get(letter, LetterStatus.UNKNOWN)
            self.keyboard_status[letter] = strongest(current, status)

    def finish(self, status: SessionStatus, now: float) -> None:
        """Move to a terminal status at time ``now``."""
        self.status = status
        self.finished_at = now
        self.revealing = False

    def elapsed_ms(self, now: Optional[float] = None) -> int:
        """Milliseconds from start to finish, or to ``now`` while still running."""
        end = self.finished_at if now is None else now
        if end is None:
            end = time.time()
        return max(0, int(round((end - self.started_at) * 1000)))

    def reset_for_retry(self) -> None:
        """Clear the board but keep the target, keyboard, locks and disabled letters."""
        self.attempts = []
        self.status = SessionStatus.PLAYING
        self.finished_at = None
        self.skipped = False
        self.revealing = False
        self.reset_buffer()
