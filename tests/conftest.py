"""Shared fixtures: a fixed word service, a fake clock and temp-backed stores."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Iterable, List

import pytest

from wordlemini.core.controller import SessionController
from wordlemini.core.economy import Economy
from wordlemini.core.progress import JsonProfileBackend, ProgressionStore


class FixedWords:
    """Word service that hands out targets in order and accepts a fixed dictionary."""

    def __init__(self, targets: Iterable[str], valid: Iterable[str] = ()) -> None:
        self.targets: List[str] = list(targets)
        self.valid = {w.upper() for w in valid} | {w.upper() for w in self.targets}
        self.calls = 0

    def get_random_word(self) -> str:
        word = self.targets[min(self.calls, len(self.targets) - 1)]
        self.calls += 1
        return word

    def is_valid_word(self, candidate: str) -> bool:
        return candidate.upper() in self.valid


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


GUESSES = ["CRANE", "SLATE", "TRACE", "AUDIO", "PIANO", "GHOST", "ERASE", "LEVEL"]


@pytest.fixture()
def economy() -> Economy:
    return Economy()


@pytest.fixture()
def profile_path(tmp_path: Path) -> Path:
    return tmp_path / "profile" / "profile.json"


@pytest.fixture()
def store(profile_path: Path, economy: Economy) -> ProgressionStore:
    return ProgressionStore(JsonProfileBackend(profile_path), economy)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def words() -> FixedWords:
    return FixedWords(["SPEED", "WATER", "HOUSE"], valid=GUESSES)


@pytest.fixture()
def controller(words: FixedWords, store: ProgressionStore, economy: Economy, clock: FakeClock) -> SessionController:
    return SessionController(words, store, economy, rng=random.Random(7), clock=clock)
