"""Recoverable game errors. Each carries a short message suitable for display."""

from __future__ import annotations

from enum import Enum


class GameError(Exception):
    """Base class for every error the game reports back to the player."""

    title = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.user_message = message


class InsufficientFunds(GameError):
    title = "Not Enough Coins"

    def __init__(self, cost: int, coins: int, action: str = "use this booster") -> None:
        super().__init__(f"You need {cost} coins to {action}.")
        self.cost = cost
        self.coins = coins


class InvalidGuessReason(str, Enum):
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    NOT_IN_DICTIONARY = "not_in_dictionary"
    CONFLICTS_WITH_HINT = "conflicts_with_hint"
    DISABLED_LETTER = "disabled_letter"


_GUESS_MESSAGES = {
    InvalidGuessReason.TOO_SHORT: "Not enough letters.",
    InvalidGuessReason.TOO_LONG: "Too many letters.",
    InvalidGuessReason.NOT_IN_DICTIONARY: "Not in word list.",
    InvalidGuessReason.CONFLICTS_WITH_HINT: "Keep the hinted letters in place.",
    InvalidGuessReason.DISABLED_LETTER: "That word uses a letter the Dart removed.",
}


class InvalidGuess(GameError):
    title = "Invalid Guess"

    def __init__(self, reason: InvalidGuessReason) -> None:
        super().__init__(_GUESS_MESSAGES[reason])
        self.reason = reason


class NoAvailablePosition(GameError):
    title = "No Hints Left"

    def __init__(self) -> None:
        super().__init__("Every letter is already revealed.")


class SessionNotPlaying(GameError):
    title = "Level Over"

    def __init__(self, message: str = "This level is not accepting moves right now.") -> None:
        super().__init__(message)


class SessionNotTerminal(GameError):
    title = "Still Playing"

    def __init__(self, message: str = "Only a lost level can be retried.") -> None:
        super().__init__(message)


class PersistenceFailure(GameError):
    title = "Save Failed"

    def __init__(self, message: str) -> None:
        super().__init__(f"Progress could not be saved: {message}")
        self.reason = message
