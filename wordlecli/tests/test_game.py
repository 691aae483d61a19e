"""
Tests for guess evaluation and the session state machine.
"""

import itertools
from collections import Counter

import pytest

from ..errors import LengthMismatch, SessionTerminated
from ..game import (
    UNLIMITED_GUESSES,
    GameConfig,
    LetterClassification,
    Lost,
    SessionController,
    SessionRecord,
    SessionState,
    Won,
    evaluate,
)
from .conftest import WORDS

C = LetterClassification.CORRECT
P = LetterClassification.PRESENT
A = LetterClassification.ABSENT


class TestEvaluate:
    """Tests for evaluate()."""

    def test_exact_and_shifted_letters(self):
        assert evaluate("WORLD", "WORDS") == [C, C, C, P, A]

    def test_duplicate_guess_letters_use_up_target_letters(self):
        """Both E's of SPEED are spent; the third E in ERASE is not counted."""
        assert evaluate("SPEED", "ERASE") == [P, A, A, P, P]

    def test_correct_match_takes_priority_over_earlier_present(self):
        """The last E is correct, so the earlier E's have nothing left to match."""
        assert evaluate("CRANE", "EERIE") == [A, A, P, A, C]

    def test_target_equals_guess_is_all_correct(self):
        for word in WORDS:
            assert evaluate(word, word) == [C] * len(word)

    def test_no_shared_letters(self):
        assert evaluate("ABC", "XYZ") == [A, A, A]

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatch) as exc_info:
            evaluate("WORLD", "WORD")
        assert exc_info.value.target_length == 5
        assert exc_info.value.guess_length == 4

    def test_length_mismatch_is_a_value_error(self):
        with pytest.raises(ValueError):
            evaluate("AB", "ABC")

    def test_is_pure(self):
        first = evaluate("SPEED", "ERASE")
        second = evaluate("SPEED", "ERASE")
        assert first == second
        assert first is not second

    def test_never_over_counts_a_letter(self):
        """Correct + present for any letter never exceeds its count in the target."""
        upper = [w.upper() for w in WORDS]
        for target, guess in itertools.product(upper, repeat=2):
            row = evaluate(target, guess)
            assert len(row) == len(target)
            target_counts = Counter(target)
            matched = Counter(g for g, f in zip(guess, row) if f is not A)
            for letter, count in matched.items():
                assert count <= target_counts[letter], (target, guess, row)

    def test_tags_are_symbolic(self):
        assert [f.value for f in evaluate("WORLD", "WORDS")] == [
            "correct", "correct", "correct", "present", "absent",
        ]


class TestGameConfig:
    """Tests for GameConfig validation."""

    def test_defaults(self):
        config = GameConfig()
        assert config.word_length == 5
        assert config.max_guesses == 6

    @pytest.mark.parametrize("kwargs", [{"word_length": 0}, {"max_guesses": 0}])
    def test_rejects_non_positive_values(self, kwargs):
        with pytest.raises(ValueError):
            GameConfig(**kwargs)


class TestSessionController:
    """Tests for SessionController."""

    def test_starts_initialized_without_target(self):
        session = SessionController(GameConfig())
        assert session.state is SessionState.INITIALIZED
        assert session.target_word is None

    def test_binding_target_awaits_guess(self):
        session = SessionController(GameConfig())
        session.bind_target("world")
        assert session.state is SessionState.AWAITING_GUESS
        assert session.target_word == "WORLD"

    def test_target_cannot_be_rebound(self, session):
        with pytest.raises(RuntimeError):
            session.bind_target("WORDS")

    @pytest.mark.parametrize("target", ["WORD", "WORLDS", "W0RLD"])
    def test_rejects_bad_target(self, target):
        with pytest.raises(ValueError):
            SessionController(GameConfig(), target)

    def test_submit_before_target_fails(self):
        session = SessionController(GameConfig())
        with pytest.raises(RuntimeError):
            session.submit_guess("WORLD")

    def test_wrong_guess_continues(self, session):
        feedback, state = session.submit_guess("WORDS")
        assert feedback == [C, C, C, P, A]
        assert state is SessionState.AWAITING_GUESS
        assert session.guesses_used == 1
        assert session.remaining_guesses == 5
        assert session.outcome is None
        assert session.record is None

    def test_won_on_sixth_guess(self, session):
        for _ in range(5):
            _, state = session.submit_guess("SPEED")
            assert state is SessionState.AWAITING_GUESS
        _, state = session.submit_guess("WORLD")
        assert state is SessionState.WON
        assert session.outcome == Won(6)
        assert session.record == SessionRecord(word_length=5, guesses_used=6, outcome=Won(6))

    def test_lost_after_six_wrong_guesses(self, session):
        for _ in range(6):
            _, state = session.submit_guess("SPEED")
        assert state is SessionState.LOST
        assert session.outcome == Lost("WORLD")
        assert not session.record.won

    def test_submit_after_terminal_state_fails(self, session):
        session.submit_guess("WORLD")
        with pytest.raises(SessionTerminated):
            session.submit_guess("WORDS")
        assert session.guesses_used == 1

    def test_wrong_length_guess_changes_nothing(self, session):
        with pytest.raises(LengthMismatch):
            session.submit_guess("WORD")
        assert session.guesses_used == 0
        assert session.state is SessionState.AWAITING_GUESS
        assert session.guesses == []

    def test_guess_is_upper_cased(self, session):
        _, state = session.submit_guess("world")
        assert state is SessionState.WON

    def test_returned_row_is_owned_by_caller(self, session):
        feedback, _ = session.submit_guess("WORDS")
        feedback[0] = A
        assert session.feedbacks[0][0] is C

    def test_single_guess_session(self):
        session = SessionController(GameConfig(word_length=3, max_guesses=1), "CAT")
        _, state = session.submit_guess("DOG")
        assert state is SessionState.LOST

    def test_unlimited_guesses_keeps_going(self):
        session = SessionController(GameConfig(max_guesses=UNLIMITED_GUESSES), "WORLD")
        for _ in range(20):
            session.submit_guess("SPEED")
        assert session.state is SessionState.AWAITING_GUESS

    def test_letter_states(self, session):
        session.submit_guess("WORDS")
        states = session.letter_states()
        assert states["W"] == "correct"
        assert states["D"] == "present"
        assert states["S"] == "absent"
        assert states["Z"] == "unused"

    def test_letter_state_promotes_surplus_copies(self):
        session = SessionController(GameConfig(), "CRANE")
        session.submit_guess("EERIE")
        states = session.letter_states()
        # the first two E's were absent, the last one is correct
        assert states["E"] == "correct"
        assert states["R"] == "present"
        assert states["I"] == "absent"
