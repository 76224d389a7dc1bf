"""Application setup: logging and wiring of the game components."""

import logging
import random
from pathlib import Path
from typing import Optional

from wordlemini.core.controller import SessionController
from wordlemini.core.economy import load_economy
from wordlemini.core.progress import JsonProfileBackend, ProgressionStore
from wordlemini.core.words import WordRepository


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_controller(
    profile_path: Optional[Path] = None,
    words_path: Optional[Path] = None,
    economy_path: Optional[Path] = None,
    seed: Optional[int] = None,
    reveal_phase: bool = False,
) -> SessionController:
    """Load configuration, word list and profile, and return a ready controller.

    A ``seed`` makes target, dart and hint choices reproducible.
    """
    economy = load_economy(economy_path)
    rng = random.Random(seed)
    words = WordRepository(words_path, rng=rng)
    backend = JsonProfileBackend(
        profile_path, history_limit=economy.history_limit, starting_coins=economy.starting_coins
    )
    store = ProgressionStore(backend, economy)

    profile = store.profile
    logging.info(
        "Loaded profile from %s: level %d, %d coins",
        backend.path, profile.current_level, profile.coins,
    )
    return SessionController(words, store, economy, rng=rng, reveal_phase=reveal_phase)
