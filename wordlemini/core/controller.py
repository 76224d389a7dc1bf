from __future__ import annotations

import logging
import random
import time
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, Signal

from wordlemini.core.boosters import BoosterInfo, BoosterKind, BoosterResolver, booster_info
from wordlemini.core.economy import Economy
from wordlemini.core.errors import (
    GameError,
    InsufficientFunds,
    InvalidGuess,
    InvalidGuessReason,
    SessionNotPlaying,
    SessionNotTerminal,
)
from wordlemini.core.evaluator import WORD_LENGTH, LetterStatus, evaluate
from wordlemini.core.progress import GameResult, ProgressionStore
from wordlemini.core.session import Session, SessionStatus
from wordlemini.core.words import WordService, normalize

logger = logging.getLogger(__name__)


def score_for(attempts_used: int) -> int:
    """Points for a win on the zero-based row ``attempts_used``."""
    return max(0, 100 - attempts_used * 10)


class SessionController(QObject):
    """Runs one level at a time: input, guesses, boosters, retry.

    The UI calls the methods below and listens to the signals; it never
    changes the session or profile itself. Finished levels are handed to the
    progression store as a ``GameResult``.

    With ``reveal_phase`` enabled a submitted guess is recorded and announced
    through ``reveal_started`` but the keyboard update and the win/loss check
    wait for ``finish_reveal()``, giving the UI time to flip the tiles. Input
    and boosters are refused in the meantime.
    """

    session_started = Signal(int)
    reveal_started = Signal(int, object)
    guess_evaluated = Signal(int, object)
    status_changed = Signal(str)
    booster_applied = Signal(str)
    session_finished = Signal(object)

    def __init__(
        self,
        words: WordService,
        store: ProgressionStore,
        economy: Optional[Economy] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
        reveal_phase: bool = False,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._words = words
        self._store = store
        self._economy = economy or store.economy
        self._resolver = BoosterResolver(rng, dart_letters=self._economy.dart_letters)
        self._clock = clock
        self._reveal_phase = reveal_phase
        self._session: Optional[Session] = None
        self._pending: Optional[List[LetterStatus]] = None
        self._offer: Optional[BoosterInfo] = None
        self.last_result: Optional[GameResult] = None

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def store(self) -> ProgressionStore:
        return self._store

    @property
    def coins(self) -> int:
        return self._store.profile.coins

    @property
    def pending_offer(self) -> Optional[BoosterInfo]:
        return self._offer

    # ------------------------------------------------------------------
    # Level lifecycle
    # ------------------------------------------------------------------

    def start(self, level: Optional[int] = None) -> Session:
        if level is None:
            level = self._store.profile.current_level
        target = normalize(self._words.get_random_word())
        self._session = Session(target, level, started_at=self._clock())
        self._pending = None
        self._offer = None
        self.last_result = None
        logger.info("Level %d started", level)
        self.session_started.emit(level)
        return self._session

    def next_level(self) -> Session:
        session = self._session
        if session is not None and session.status is SessionStatus.PLAYING:
            raise SessionNotTerminal("Finish this level before moving on.")
        return self.start()

    def retry(self) -> Session:
        session = self._require_session()
        if session.status is not SessionStatus.LOST:
            raise SessionNotTerminal()
        cost = self._economy.retry_cost
        coins = self._store.profile.coins
        if coins < cost:
            raise InsufficientFunds(cost, coins, action="retry this level")
        self._store.update_coins(coins - cost)
        session.reset_for_retry()
        self.last_result = None
        logger.info("Level %d retried for %d coins", session.level, cost)
        self.status_changed.emit(session.status.value)
        return session

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def type_letter(self, letter: str) -> bool:
        session = self._require_input()
        letter = letter.upper()
        if len(letter) != 1 or not ("A" <= letter <= "Z"):
            return False
        if letter in session.disabled_letters:
            return False
        return session.type_letter(letter)

    def delete_letter(self) -> bool:
        return self._require_input().delete_letter()

    def submit_guess(self, letters: Optional[str] = None) -> List[LetterStatus]:
        session = self._require_input()
        guess = session.current_guess() if letters is None else normalize(letters)
        if len(guess) < WORD_LENGTH:
            raise InvalidGuess(InvalidGuessReason.TOO_SHORT)
        if len(guess) > WORD_LENGTH:
            raise InvalidGuess(InvalidGuessReason.TOO_LONG)
        if not self._words.is_valid_word(guess):
            raise InvalidGuess(InvalidGuessReason.NOT_IN_DICTIONARY)
        if any(guess[i] != session.target[i] for i in session.locked_positions):
            raise InvalidGuess(InvalidGuessReason.CONFLICTS_WITH_HINT)
        if session.disabled_letters.intersection(guess):
            raise InvalidGuess(InvalidGuessReason.DISABLED_LETTER)

        statuses = evaluate(guess, session.target)
        session.record_attempt(guess)
        row = len(session.attempts) - 1
        if self._reveal_phase:
            session.revealing = True
            self._pending = statuses
            self.reveal_started.emit(row, list(statuses))
        else:
            self._pending = statuses
            self.finish_reveal()
        return statuses

    def finish_reveal(self) -> None:
        """Apply the outcome of the guess whose tiles were being revealed."""
        session = self._require_session()
        statuses = self._pending
        if statuses is None:
            return
        self._pending = None
        session.revealing = False

        guess = session.attempts[-1]
        row = len(session.attempts) - 1
        session.update_keyboard(guess, statuses)
        self.guess_evaluated.emit(row, list(statuses))

        if guess == session.target:
            self._finish(SessionStatus.WON)
        elif len(session.attempts) >= self._economy.max_attempts:
            self._finish(SessionStatus.LOST)
        else:
            session.reset_buffer()

    # ------------------------------------------------------------------
    # Boosters
    # ------------------------------------------------------------------

    def offer_booster(self, kind: BoosterKind) -> BoosterInfo:
        """Price a booster for confirmation. Nothing is spent yet."""
        self._require_input()
        info = booster_info(BoosterKind(kind), self._economy)
        coins = self._store.profile.coins
        if coins < info.cost:
            raise InsufficientFunds(info.cost, coins)
        self._offer = info
        return info

    def cancel_booster(self) -> None:
        self._offer = None

    def confirm_booster(self) -> Session:
        offer = self._offer
        if offer is None:
            raise GameError("No booster is waiting for confirmation.")
        self._offer = None
        return self.use_booster(offer.kind)

    def use_booster(self, kind: BoosterKind) -> Session:
        kind = BoosterKind(kind)
        if kind is BoosterKind.DART:
            return self.use_dart()
        if kind is BoosterKind.HINT:
            return self.use_hint()
        return self.use_skip()

    def use_dart(self) -> Session:
        session = self._require_input()
        session, coins = self._resolver.apply_dart(session, self.coins, self._economy.dart_cost)
        self._store.update_coins(coins)
        self.booster_applied.emit(BoosterKind.DART.value)
        return session

    def use_hint(self) -> Session:
        session = self._require_input()
        session, coins = self._resolver.apply_hint(session, self.coins, self._economy.hint_cost)
        self._store.update_coins(coins)
        self.booster_applied.emit(BoosterKind.HINT.value)
        return session

    def use_skip(self) -> Session:
        session = self._require_input()
        session, coins = self._resolver.apply_skip(
            session, self.coins, self._economy.skip_cost, now=self._clock()
        )
        # coins and the finished level go to disk in one write
        self.booster_applied.emit(BoosterKind.SKIP.value)
        self._record_result(session, cost=self.coins - coins)
        return session

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _finish(self, status: SessionStatus) -> None:
        session = self._require_session()
        session.finish(status, self._clock())
        self._record_result(session)

    def _record_result(self, session: Session, cost: int = 0) -> None:
        won = session.status is SessionStatus.WON
        attempts_used = len(session.attempts) - 1
        result = GameResult(
            level=session.level,
            won=won,
            attempts_used=attempts_used,
            completion_time=session.elapsed_ms(),
            score=score_for(attempts_used) if won else 0,
            skipped=session.skipped,
        )
        self.last_result = result
        self.status_changed.emit(session.status.value)
        self._store.finalize_and_persist(session, result, cost=cost)
        self.session_finished.emit(result)

    def _require_session(self) -> Session:
        if self._session is None:
            raise SessionNotPlaying("No level has been started.")
        return self._session

    def _require_input(self) -> Session:
        session = self._require_session()
        if not session.accepts_input:
            raise SessionNotPlaying()
        return session
