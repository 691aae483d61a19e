import string
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .errors import LengthMismatch, SessionTerminated

DEFAULT_WORD_LENGTH = 5
DEFAULT_MAX_GUESSES = 6
UNLIMITED_GUESSES = 999999


class LetterClassification(str, Enum):
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


FeedbackRow = List[LetterClassification]


class SessionState(Enum):
    INITIALIZED = "initialized"
    AWAITING_GUESS = "awaiting_guess"
    WON = "won"
    LOST = "lost"


TERMINAL_STATES = (SessionState.WON, SessionState.LOST)


@dataclass(frozen=True)
class GameConfig:
    word_length: int = DEFAULT_WORD_LENGTH
    max_guesses: int = DEFAULT_MAX_GUESSES

    def __post_init__(self):
        if self.word_length < 1:
            raise ValueError("word_length must be at least 1")
        if self.max_guesses < 1:
            raise ValueError("max_guesses must be at least 1")


@dataclass(frozen=True)
class Won:
    guesses_used: int


@dataclass(frozen=True)
class Lost:
    target_word: str


Outcome = Union[Won, Lost]


@dataclass(frozen=True)
class SessionRecord:
    word_length: int
    guesses_used: int
    outcome: Outcome

    @property
    def won(self) -> bool:
        return isinstance(self.outcome, Won)


def evaluate(target: str, guess: str) -> FeedbackRow:
    """
    Classifies every letter of a guess against the target word.

    Exact matches are granted first, so a letter that is also correct elsewhere
    never reports as present more times than the target actually holds it.

    Args:
        target (str): The secret word.
        guess (str): A word of the same length.

    Returns:
        FeedbackRow: One LetterClassification per position.

    Raises:
        LengthMismatch: If the two words differ in length.
    """
    if len(guess) != len(target):
        raise LengthMismatch(len(target), len(guess))

    # default all letters to absent
    states = [LetterClassification.ABSENT] * len(target)

    # make a mapping from letters in the target word to their count
    letter_count = Counter(target)

    # exact matches use up their letter before anything can be present
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            states[i] = LetterClassification.CORRECT
            letter_count[g] -= 1

    # leftover letters, left to right, only as many as the target still has
    for i, g in enumerate(guess):
        if states[i] is LetterClassification.ABSENT and letter_count[g] > 0:
            states[i] = LetterClassification.PRESENT
            letter_count[g] -= 1
    return states


class SessionController:
    """One game: a target word, the turn counter and the session state."""

    def __init__(self, config: Optional[GameConfig] = None, target_word: Optional[str] = None):
        self.config = config or GameConfig()
        self.state = SessionState.INITIALIZED
        self._target_word: Optional[str] = None

        # game state vars tracked throughout the game
        self.guesses: List[str] = []
        self.feedbacks: List[FeedbackRow] = []

        if target_word is not None:
            self.bind_target(target_word)

    def bind_target(self, target_word: str) -> None:
        if self.state is not SessionState.INITIALIZED:
            raise RuntimeError("A target word is already bound to this session.")
        target = target_word.upper()
        if len(target) != self.config.word_length:
            raise ValueError(f"Target word must be {self.config.word_length} letters long.")
        if not all(c in string.ascii_uppercase for c in target):
            raise ValueError("Target word must contain only letters A-Z.")
        self._target_word = target
        self.state = SessionState.AWAITING_GUESS

    @property
    def target_word(self) -> Optional[str]:
        return self._target_word

    @property
    def guesses_used(self) -> int:
        return len(self.guesses)

    @property
    def remaining_guesses(self) -> int:
        return self.config.max_guesses - self.guesses_used

    @property
    def is_over(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def won(self) -> bool:
        return self.state is SessionState.WON

    def submit_guess(self, guess: str) -> Tuple[FeedbackRow, SessionState]:
        """
        Plays one turn with a guess that has already passed shape and
        dictionary validation.

        Raises:
            SessionTerminated: If the session is already won or lost.
            LengthMismatch: If the guess has the wrong length. The turn counter
                and state are left untouched.
        """
        if self.is_over:
            raise SessionTerminated(f"Session already ended ({self.state.value}).")
        if self.state is SessionState.INITIALIZED:
            raise RuntimeError("bind_target() must be called before submit_guess().")

        guess_word = guess.upper()
        feedback = evaluate(self._target_word, guess_word)

        self.guesses.append(guess_word)
        self.feedbacks.append(feedback)

        if guess_word == self._target_word:
            self.state = SessionState.WON
        elif self.guesses_used >= self.config.max_guesses:
            self.state = SessionState.LOST

        return list(feedback), self.state

    @property
    def outcome(self) -> Optional[Outcome]:
        if self.state is SessionState.WON:
            return Won(self.guesses_used)
        if self.state is SessionState.LOST:
            return Lost(self._target_word)
        return None

    @property
    def record(self) -> Optional[SessionRecord]:
        outcome = self.outcome
        if outcome is None:
            return None
        return SessionRecord(self.config.word_length, self.guesses_used, outcome)

    def letter_states(self) -> Dict[str, str]:
        """
        Returns a mapping from letters to their best known state
        (correct, present, absent, unused).
        """
        # three levels of presence, promotion goes absent -> present -> correct
        correct, present, absent = set(), set(), set()

        for guess, feedback in zip(self.guesses, self.feedbacks):
            for letter, state in zip(guess, feedback):
                if state is LetterClassification.CORRECT:
                    correct.add(letter)
                    present.discard(letter)
                elif state is LetterClassification.PRESENT and letter not in correct:
                    present.add(letter)
                elif letter not in correct and letter not in present:
                    absent.add(letter)

        # a letter marked absent by a surplus copy can still be present/correct
        absent -= correct | present

        return {
            letter: (
                "correct" if letter in correct else
                "present" if letter in present else
                "absent" if letter in absent else
                "unused"
            ) for letter in string.ascii_uppercase
        }
