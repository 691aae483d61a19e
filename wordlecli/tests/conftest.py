"""
Pytest fixtures for wordlecli tests.
"""

import logging
import random

import pytest

from ..config import Settings
from ..env import WordleEnv
from ..game import GameConfig, SessionController
from ..logs import LOGGER_NAME
from ..words import WordList

WORDS = [
    "world", "words", "speed", "erase", "crane", "slate", "eerie", "abbey",
    "geese", "those", "other", "apple", "paper", "robot", "sword", "lords",
]


@pytest.fixture(autouse=True)
def reset_logging():
    """main() installs its own handler; hand records back to caplog afterwards."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def word_list() -> WordList:
    """A small five-letter dictionary."""
    return WordList(WORDS, 5)


@pytest.fixture
def dict_file(tmp_path):
    """The same dictionary written to disk, with noise lines the loader must drop."""
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS + ["cat", "it's", "Zebra", "toolong", "ZEBRA", ""]) + "\n")
    return path


@pytest.fixture
def session() -> SessionController:
    """A default 5x6 session playing WORLD."""
    return SessionController(GameConfig(), "WORLD")


@pytest.fixture
def env(word_list) -> WordleEnv:
    """An environment with a fixed target and a seeded rng."""
    return WordleEnv(Settings(), word_list=word_list, target_word="world", rng=random.Random(0))
