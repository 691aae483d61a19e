class WordleError(Exception):
    """Base class for every error raised by wordlecli."""


class LengthMismatch(WordleError, ValueError):
    """A guess was evaluated against a target of a different length."""

    def __init__(self, target_length: int, guess_length: int):
        super().__init__(f"Guess has {guess_length} letters, target has {target_length}.")
        self.target_length = target_length
        self.guess_length = guess_length


class SessionTerminated(WordleError, RuntimeError):
    """A guess was submitted to a session that is already won or lost."""


class InvalidGuess(WordleError, ValueError):
    """Raw input rejected before it reaches a session (shape or dictionary)."""


class EmptyWordList(WordleError, ValueError):
    """No candidate words are left to pick a target from."""
