__version__ = "2.0.0"

from .errors import WordleError, LengthMismatch, SessionTerminated, InvalidGuess, EmptyWordList
from .game import (
    GameConfig,
    LetterClassification,
    Lost,
    SessionController,
    SessionRecord,
    SessionState,
    Won,
    evaluate,
)
from .stats import AggregateStats, StatsAggregator
from .words import WordList, select_target
from .env import WordleEnv
from .render import TextUI

__all__ = [
    "WordleError", "LengthMismatch", "SessionTerminated", "InvalidGuess", "EmptyWordList",
    "GameConfig", "LetterClassification", "Lost", "SessionController", "SessionRecord",
    "SessionState", "Won", "evaluate",
    "AggregateStats", "StatsAggregator",
    "WordList", "select_target",
    "WordleEnv", "TextUI",
]
