from __future__ import annotations

import random
import re
from pathlib import Path
from typing import FrozenSet, List, Optional, Protocol, Tuple

import yaml

from wordlemini.core.evaluator import WORD_LENGTH

DEFAULT_WORDS_PATH = Path(__file__).resolve().parent.parent / "data" / "words.yaml"

_WORD_RE = re.compile(rf"^[A-Z]{{{WORD_LENGTH}}}$")


class WordService(Protocol):
    def get_random_word(self) -> str: ...

    def is_valid_word(self, candidate: str) -> bool: ...


def normalize(word: str) -> str:
    return word.strip().upper()


class WordRepository:
    """Target words and the guess dictionary, read from ``data/words.yaml``.

    ``answers`` are the words a level may pick; ``allowed`` lists extra words
    accepted as guesses. Every answer is also a valid guess.
    """

    def __init__(self, path: Optional[Path] = None, rng: Optional[random.Random] = None) -> None:
        self._path = path or DEFAULT_WORDS_PATH
        self._rng = rng or random.Random()
        self._answers, self._valid = self._load_words()

    @property
    def answers(self) -> List[str]:
        return list(self._answers)

    def get_random_word(self) -> str:
        return self._rng.choice(self._answers)

    def is_valid_word(self, candidate: str) -> bool:
        return normalize(candidate) in self._valid

    def _load_words(self) -> Tuple[List[str], FrozenSet[str]]:
        if not self._path.exists():
            raise FileNotFoundError(f"Word list not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._path.name}: expected YAML with 'answers' and 'allowed'")

        answers = self._read_section(raw, "answers")
        if not answers:
            raise ValueError(f"{self._path.name}: 'answers' has no words")
        allowed = self._read_section(raw, "allowed") if raw.get("allowed") is not None else []

        # keep first-seen order so seeded draws are reproducible
        answers = list(dict.fromkeys(answers))
        return answers, frozenset(answers) | frozenset(allowed)

    def _read_section(self, raw: dict, key: str) -> List[str]:
        content = raw.get(key)
        if content is None:
            raise ValueError(f"{self._path.name}: missing '{key}'")
        if isinstance(content, list):
            words = [normalize(str(item)) for item in content if str(item).strip()]
        else:
            # allow a whitespace separated block
            words = [normalize(w) for w in str(content).split()]
        bad = [w for w in words if not _WORD_RE.match(w)]
        if bad:
            raise ValueError(f"{self._path.name}: '{key}' has invalid words: {', '.join(bad[:5])}")
        return words
