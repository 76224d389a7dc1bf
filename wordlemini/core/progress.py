from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from PySide6.QtCore import QIODevice, QMutex, QObject, QSaveFile, Signal

from wordlemini.core.economy import Economy
from wordlemini.core.errors import InsufficientFunds, PersistenceFailure
from wordlemini.core.session import Session

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_PATH = Path.home() / ".wordlemini" / "profile.json"


@dataclass
class GameResult:
    level: int
    won: bool
    attempts_used: int
    completion_time: int
    score: int
    skipped: bool = False

    def to_record(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "isWon": self.won,
            "attempts": self.attempts_used,
            "completionTime": self.completion_time,
            "score": self.score,
            "skipped": self.skipped,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "GameResult":
        return cls(
            level=int(record["level"]),
            won=bool(record["isWon"]),
            attempts_used=int(record["attempts"]),
            completion_time=int(record["completionTime"]),
            score=int(record["score"]),
            skipped=bool(record.get("skipped", False)),
        )


@dataclass
class Profile:
    current_level: int = 1
    coins: int = 100
    max_level: int = 1
    max_score: int = 0
    max_time: Optional[int] = None
    history: List[GameResult] = field(default_factory=list)

    @classmethod
    def default(cls, economy: Optional[Economy] = None) -> "Profile":
        economy = economy or Economy()
        return cls(coins=economy.starting_coins)

    def to_record(self) -> Dict[str, Any]:
        return {
            "currentLevel": self.current_level,
            "coins": self.coins,
            "maxLevel": self.max_level,
            "maxScore": self.max_score,
            "maxTime": self.max_time,
            "gameHistory": [r.to_record() for r in self.history],
        }

    @classmethod
    def from_record(
        cls, record: Dict[str, Any], history_limit: int = 50, starting_coins: int = 100
    ) -> "Profile":
        """Build a profile from saved data. Missing fields take their fresh-profile values."""
        history: List[GameResult] = []
        raw_history = record.get("gameHistory", [])
        if isinstance(raw_history, list):
            for entry in raw_history:
                try:
                    history.append(GameResult.from_record(entry))
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning("Dropping malformed history entry %r: %s", entry, e)
        max_time = record.get("maxTime")
        return cls(
            current_level=max(1, int(record.get("currentLevel", 1))),
            coins=max(0, int(record.get("coins", starting_coins))),
            max_level=max(1, int(record.get("maxLevel", 1))),
            max_score=max(0, int(record.get("maxScore", 0))),
            max_time=None if max_time is None else int(max_time),
            history=history[:history_limit],
        )


class JsonProfileBackend:
    """Reads and writes the profile as JSON.

    Writes go through ``QSaveFile``: the data lands in a temporary file that
    replaces the target only once it is complete, so a crash mid-write leaves
    the previous profile in place.
    """

    def __init__(
        self, path: Optional[Path] = None, history_limit: int = 50, starting_coins: int = 100
    ) -> None:
        self._file_path = path or DEFAULT_PROFILE_PATH
        self._history_limit = history_limit
        self._starting_coins = starting_coins

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> Optional[Profile]:
        if not self._file_path.exists():
            return None
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load profile from %s: %s", self._file_path, e)
            return None
        if not isinstance(payload, dict):
            logger.warning("Could not load profile from %s: expected an object", self._file_path)
            return None
        try:
            return Profile.from_record(payload, self._history_limit, self._starting_coins)
        except (TypeError, ValueError) as e:
            logger.warning("Could not load profile from %s: %s", self._file_path, e)
            return None

    def save(self, profile: Profile) -> None:
        data = json.dumps(profile.to_record(), indent=2).encode("utf-8")
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceFailure(str(e)) from e

        save_file = QSaveFile(str(self._file_path))
        if not save_file.open(QIODevice.OpenModeFlag.WriteOnly):
            raise PersistenceFailure(save_file.errorString())
        if save_file.write(data) != len(data):
            message = save_file.errorString()
            save_file.cancelWriting()
            save_file.commit()
            raise PersistenceFailure(message or "short write")
        if not save_file.commit():
            raise PersistenceFailure(save_file.errorString())


class ProgressionStore(QObject):
    """Owns the player profile. Every change goes through here and is saved.

    A failed save never undoes the in-memory change: the store logs it, keeps
    ``pending_write`` set and writes the whole profile again on the next
    mutation. Saves are serialized so two writers never interleave.
    """

    profile_changed = Signal()
    persistence_failed = Signal(str)

    def __init__(
        self,
        backend: Optional[JsonProfileBackend] = None,
        economy: Optional[Economy] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._economy = economy or Economy()
        self._backend = backend or JsonProfileBackend(
            history_limit=self._economy.history_limit,
            starting_coins=self._economy.starting_coins,
        )
        self._write_lock = QMutex()
        self.last_error: Optional[PersistenceFailure] = None
        self.pending_write = False
        self._profile = self.load()

    @property
    def profile(self) -> Profile:
        return self._profile

    @property
    def economy(self) -> Economy:
        return self._economy

    def load(self) -> Profile:
        profile = self._backend.load()
        if profile is None:
            return Profile.default(self._economy)
        return profile

    def save(self, profile: Optional[Profile] = None) -> bool:
        """Persist ``profile`` (default: the current one). Returns True on success."""
        if profile is not None:
            self._profile = profile
        return self._persist()

    def update_coins(self, coins: int) -> bool:
        if coins < 0:
            raise InsufficientFunds(self._profile.coins - coins, self._profile.coins)
        self._profile.coins = coins
        return self._commit()

    def finalize_and_persist(self, session: Session, result: GameResult, cost: int = 0) -> bool:
        """Fold a finished level into the profile and save it.

        ``cost`` is charged in the same write, so a paid finish (a Skip) never
        leaves the coins saved without the level, or the other way round.
        """
        profile = self._profile
        if cost > profile.coins:
            raise InsufficientFunds(cost, profile.coins)
        profile.coins -= cost
        profile.history = ([result] + profile.history)[: self._economy.history_limit]

        if result.won and not result.skipped:
            profile.coins += self._economy.reward_for(result.score)
            profile.max_level = max(profile.max_level, session.level)
            profile.max_score = max(profile.max_score, result.score)
            if profile.max_time is None:
                profile.max_time = result.completion_time
            else:
                profile.max_time = min(profile.max_time, result.completion_time)
            profile.current_level = session.level + 1
        elif result.won:
            # skip-completions advance the level but earn nothing
            profile.current_level = session.level + 1

        logger.info(
            "Level %d finished: won=%s skipped=%s score=%d coins=%d",
            result.level, result.won, result.skipped, result.score, profile.coins,
        )
        return self._commit()

    def reset(self) -> bool:
        """Start over with a fresh profile."""
        self._profile = Profile.default(self._economy)
        return self._commit()

    def _commit(self) -> bool:
        self.profile_changed.emit()
        return self._persist()

    def _persist(self) -> bool:
        error: Optional[PersistenceFailure] = None
        self._write_lock.lock()
        try:
            self._backend.save(self._profile)
        except PersistenceFailure as e:
            error = e
        finally:
            self._write_lock.unlock()

        if error is not None:
            logger.warning("Could not save profile: %s", error.reason)
            self.last_error = error
            self.pending_write = True
            self.persistence_failed.emit(error.user_message)
            return False
        self.last_error = None
        self.pending_write = False
        return True
