from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from wordlemini.core.session import MAX_ATTEMPTS

logger = logging.getLogger(__name__)

DEFAULT_ECONOMY_PATH = Path(__file__).resolve().parent.parent / "data" / "economy.yaml"


@dataclass(frozen=True)
class Economy:
    """Prices, rewards and limits of the game. Loaded from ``data/economy.yaml``.

    ``max_attempts`` may lower the six-row board but never raise it.
    """

    dart_cost: int = 10
    hint_cost: int = 15
    skip_cost: int = 25
    retry_cost: int = 35
    starting_coins: int = 100
    reward_high: int = 20
    reward_low: int = 10
    reward_threshold: int = 50
    history_limit: int = 50
    max_attempts: int = MAX_ATTEMPTS
    dart_letters: int = 3

    def __post_init__(self) -> None:
        if not 1 <= self.max_attempts <= MAX_ATTEMPTS:
            raise ValueError(f"'max_attempts' must be between 1 and {MAX_ATTEMPTS}")
        if self.history_limit < 1:
            raise ValueError("'history_limit' must be at least 1")

    def reward_for(self, score: int) -> int:
        return self.reward_high if score >= self.reward_threshold else self.reward_low


def load_economy(path: Optional[Path] = None) -> Economy:
    path = path or DEFAULT_ECONOMY_PATH
    if not path.exists():
        raise FileNotFoundError(f"Economy file not found: {path}")

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return Economy()
    if not isinstance(raw, dict):
        raise ValueError(f"{path.name}: expected a mapping of settings")

    known = {f.name for f in fields(Economy)}
    values = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("%s: ignoring unknown setting %r", path.name, key)
            continue
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"{path.name}: {key!r} must be a non-negative integer")
        values[key] = value

    try:
        return Economy(**values)
    except ValueError as e:
        raise ValueError(f"{path.name}: {e}") from e
