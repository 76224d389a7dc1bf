"""Tests for wordlemini.core.boosters – Dart, Hint and Skip."""

from __future__ import annotations

import random
import string

import pytest

from wordlemini.core.boosters import BoosterInfo, BoosterKind, BoosterResolver, booster_info
from wordlemini.core.economy import Economy
from wordlemini.core.errors import InsufficientFunds, NoAvailablePosition
from wordlemini.core.evaluator import LetterStatus
from wordlemini.core.session import Session, SessionStatus


@pytest.fixture()
def session() -> Session:
    return Session("SPEED", level=3, started_at=100.0)


@pytest.fixture()
def resolver() -> BoosterResolver:
    return BoosterResolver(random.Random(1))


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

class TestBoosterInfo:
    def test_default_costs(self):
        economy = Economy()
        assert booster_info(BoosterKind.DART, economy).cost == 10
        assert booster_info(BoosterKind.HINT, economy).cost == 15
        assert booster_info(BoosterKind.SKIP, economy).cost == 25

    def test_costs_follow_economy(self):
        info = booster_info(BoosterKind.HINT, Economy(hint_cost=3))
        assert info == BoosterInfo(BoosterKind.HINT, 3, "Use Hint?",
                                   "Reveal and lock one correct letter position.")

    def test_kind_from_string(self):
        assert BoosterKind("skip") is BoosterKind.SKIP


# ---------------------------------------------------------------------------
# Dart
# ---------------------------------------------------------------------------

class TestDart:
    def test_disables_three_absent_letters(self, resolver, session):
        session, coins = resolver.apply_dart(session, 100, 10)
        assert coins == 90
        assert len(session.disabled_letters) == 3
        assert not session.disabled_letters & set("SPEED")

    def test_repeated_darts_pick_new_letters(self, resolver, session):
        resolver.apply_dart(session, 100, 10)
        first = set(session.disabled_letters)
        resolver.apply_dart(session, 90, 10)
        assert first < session.disabled_letters
        assert len(session.disabled_letters) == 6

    def test_fewer_than_three_left(self, resolver, session):
        absent = [c for c in string.ascii_uppercase if c not in "SPED"]
        session.disabled_letters.update(absent[:-2])
        session, coins = resolver.apply_dart(session, 10, 10)
        assert coins == 0
        assert session.disabled_letters == set(absent)

    def test_nothing_left_still_charges(self, resolver, session):
        absent = {c for c in string.ascii_uppercase if c not in "SPED"}
        session.disabled_letters.update(absent)
        session, coins = resolver.apply_dart(session, 10, 10)
        assert coins == 0
        assert session.disabled_letters == absent

    def test_insufficient_funds_no_mutation(self, resolver, session):
        with pytest.raises(InsufficientFunds) as exc:
            resolver.apply_dart(session, 9, 10)
        assert exc.value.cost == 10
        assert exc.value.coins == 9
        assert session.disabled_letters == set()

    def test_seeded_choice_is_reproducible(self):
        a = Session("SPEED", level=1)
        b = Session("SPEED", level=1)
        BoosterResolver(random.Random(42)).apply_dart(a, 50, 10)
        BoosterResolver(random.Random(42)).apply_dart(b, 50, 10)
        assert a.disabled_letters == b.disabled_letters

    def test_dart_letter_count_configurable(self, session):
        session, _ = BoosterResolver(random.Random(0), dart_letters=5).apply_dart(session, 10, 10)
        assert len(session.disabled_letters) == 5


# ---------------------------------------------------------------------------
# Hint
# ---------------------------------------------------------------------------

class TestHint:
    def test_locks_and_prefills(self, resolver, session):
        session, coins = resolver.apply_hint(session, 15, 15)
        assert coins == 0
        assert len(session.locked_positions) == 1
        (index,) = session.locked_positions
        assert session.guess_buffer[index] == "SPEED"[index]

    def test_five_hints_lock_everything(self, resolver, session):
        coins = 100
        for _ in range(5):
            session, coins = resolver.apply_hint(session, coins, 15)
        assert session.locked_positions == {0, 1, 2, 3, 4}
        assert session.current_guess() == "SPEED"
        assert coins == 25

    def test_sixth_hint_fails_without_mutation(self, resolver, session):
        coins = 100
        for _ in range(5):
            session, coins = resolver.apply_hint(session, coins, 15)
        with pytest.raises(NoAvailablePosition):
            resolver.apply_hint(session, coins, 15)
        assert coins == 25
        assert session.locked_positions == {0, 1, 2, 3, 4}

    def test_insufficient_funds_checked_first(self, resolver, session):
        with pytest.raises(InsufficientFunds):
            resolver.apply_hint(session, 14, 15)
        assert session.locked_positions == set()
        assert session.guess_buffer == [None] * 5

    def test_overwrites_typed_letter(self, session):
        for letter in "ABCDE":
            session.type_letter(letter)
        resolver = BoosterResolver(random.Random(3))
        resolver.apply_hint(session, 15, 15)
        (index,) = session.locked_positions
        assert session.guess_buffer[index] == session.target[index]


# ---------------------------------------------------------------------------
# Skip
# ---------------------------------------------------------------------------

class TestSkip:
    def test_wins_and_marks_skipped(self, resolver, session):
        session.record_attempt("CRANE")
        session, coins = resolver.apply_skip(session, 30, 25, now=110.0)
        assert coins == 5
        assert session.status is SessionStatus.WON
        assert session.skipped
        assert session.attempts == ["CRANE", "SPEED"]
        assert session.finished_at == 110.0

    def test_keyboard_shows_target(self, resolver, session):
        resolver.apply_skip(session, 25, 25, now=101.0)
        for letter in "SPED":
            assert session.letter_status(letter) is LetterStatus.CORRECT

    def test_insufficient_funds_no_mutation(self, resolver, session):
        with pytest.raises(InsufficientFunds):
            resolver.apply_skip(session, 24, 25)
        assert session.status is SessionStatus.PLAYING
        assert session.attempts == []
        assert not session.skipped
