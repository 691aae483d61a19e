"""
Game settings: built-in defaults, overridden by a KEY=VALUE config file,
overridden in turn by command line options.

Example .wordle.conf:

    WORD_LENGTH=6
    MAX_GUESSES=8
    THEME=colorblind
    SHOW_STATS=yes
"""
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from .game import DEFAULT_MAX_GUESSES, DEFAULT_WORD_LENGTH, GameConfig
from .words import DEFAULT_DICT_PATH

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = '.wordle.conf'
MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 10
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_THEME = 'classic'

TRUTHY = ('true', '1', 'yes')


def default_config_path() -> Path:
    return Path.cwd() / CONFIG_FILE_NAME


@dataclass
class Settings:
    word_length: int = DEFAULT_WORD_LENGTH
    max_guesses: int = DEFAULT_MAX_GUESSES
    dict_path: Path = DEFAULT_DICT_PATH
    word_list: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL
    theme: str = DEFAULT_THEME
    verbose: bool = False
    debug: bool = False
    show_stats: bool = False
    show_timing: bool = False
    quiet: bool = False
    practice: bool = False

    def game_config(self) -> GameConfig:
        return GameConfig(word_length=self.word_length, max_guesses=self.max_guesses)

    @property
    def words_path(self) -> Path:
        # a custom word list wins over the system dictionary
        return self.word_list or self.dict_path


def _parse_int(value: str, minimum: int, maximum: Optional[int] = None) -> Optional[int]:
    if not value.isdigit():
        return None
    number = int(value)
    if number < minimum or (maximum is not None and number > maximum):
        return None
    return number


def load_settings(path: Optional[Path] = None, settings: Optional[Settings] = None) -> Settings:
    """
    Applies a config file on top of the given settings (or the defaults).

    Invalid values and unknown keys are logged and skipped; a missing file is
    not an error.

    Args:
        path (Path): The config file. Defaults to .wordle.conf in the working directory.
        settings (Settings): Settings to start from.

    Returns:
        Settings: A new settings object.
    """
    path = Path(path) if path else default_config_path()
    settings = replace(settings) if settings else Settings()

    if not path.is_file():
        logger.debug("Configuration file not found: %s (using defaults)", path)
        return settings

    logger.debug("Loading configuration from: %s", path)
    for key, value in dotenv_values(path).items():
        key = key.strip()
        value = (value or '').strip()

        if key == 'WORD_LENGTH':
            number = _parse_int(value, MIN_WORD_LENGTH, MAX_WORD_LENGTH)
            if number is None:
                logger.warning("Invalid WORD_LENGTH in config: %s (using default: %d)", value, DEFAULT_WORD_LENGTH)
            else:
                settings.word_length = number
        elif key == 'MAX_GUESSES':
            number = _parse_int(value, 1)
            if number is None:
                logger.warning("Invalid MAX_GUESSES in config: %s (using default: %d)", value, DEFAULT_MAX_GUESSES)
            else:
                settings.max_guesses = number
        elif key == 'DICT_PATH':
            if Path(value).is_file():
                settings.dict_path = Path(value)
            else:
                logger.warning("Dictionary file not found: %s (using default: %s)", value, DEFAULT_DICT_PATH)
        elif key == 'LOG_LEVEL':
            settings.log_level = value.upper()
        elif key == 'THEME':
            settings.theme = value
        elif key == 'VERBOSE':
            settings.verbose = settings.verbose or value.lower() in TRUTHY
        elif key == 'DEBUG_MODE':
            settings.debug = settings.debug or value.lower() in TRUTHY
        elif key == 'SHOW_STATS':
            settings.show_stats = settings.show_stats or value.lower() in TRUTHY
        elif key == 'QUIET_MODE':
            settings.quiet = settings.quiet or value.lower() in TRUTHY
        else:
            logger.warning("Unknown configuration option: %s", key)

    logger.info("Configuration loaded successfully")
    return settings
