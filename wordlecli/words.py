import logging
import random
import string
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional, Sequence

from .errors import EmptyWordList, InvalidGuess

logger = logging.getLogger(__name__)

DEFAULT_DICT_PATH = Path('/usr/share/dict/words')


def _is_letters(word: str) -> bool:
    return bool(word) and all(c in string.ascii_uppercase for c in word)


class WordList:
    """The dictionary of guessable words for one word length."""

    def __init__(self, words: Iterable[str], word_length: int):
        self.word_length = word_length
        # string matching nicer with uppercase :)
        candidates = (w.strip().upper() for w in words)
        self.words: FrozenSet[str] = frozenset(
            w for w in candidates if len(w) == word_length and _is_letters(w)
        )

    @classmethod
    def from_file(cls, path: Path, word_length: int) -> 'WordList':
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Error: Word list not found at '{path}'")
        logger.debug("Initializing word list from %s (length: %d)", path, word_length)
        with open(path, 'r', errors='ignore') as f:
            word_list = cls(f, word_length)
        logger.debug("Loaded %d words from dictionary", len(word_list))
        return word_list

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self.words

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.words))

    def add(self, word: str) -> None:
        """Makes sure a fixed target word can always be guessed."""
        word = word.strip().upper()
        if len(word) == self.word_length and _is_letters(word):
            self.words = self.words | {word}

    def validate_guess(self, raw: str) -> str:
        """
        Normalizes raw input and checks it is a word that may be played.

        Returns:
            str: The upper-cased guess.

        Raises:
            InvalidGuess: With a message suitable for showing to the player.
        """
        guess = raw.strip().upper()
        if len(guess) != self.word_length:
            raise InvalidGuess(f"Guess must be {self.word_length} letters long.")
        if not _is_letters(guess):
            raise InvalidGuess("Guess must contain only letters A-Z.")
        if guess not in self.words:
            raise InvalidGuess(f"'{guess}' is not in word list.")
        return guess


def select_target(words: Iterable[str], rng: Optional[random.Random] = None) -> str:
    """Picks a random target word; fails if there is nothing to pick from."""
    pool: Sequence[str] = sorted(words)
    if not pool:
        raise EmptyWordList("Word list is empty. Cannot select target word.")
    target = (rng or random).choice(pool)
    logger.debug("Selected target word: %s", target)
    return target
