import logging
import sys
from typing import Optional

from .render import DIM, RESET, Theme, get_theme

LOGGER_NAME = "wordlecli"


class ColorFormatter(logging.Formatter):
    """Colors each record with the active theme's style for its level."""

    def __init__(self, fmt: str, theme: Optional[Theme] = None, color: bool = True):
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")
        self.theme = theme or get_theme(None)
        self.color = color
        self.level_styles = {
            logging.ERROR: self.theme.error,
            logging.WARNING: self.theme.warn,
            logging.INFO: self.theme.info,
            logging.DEBUG: DIM,
        }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.color:
            return message
        style = self.level_styles.get(record.levelno, self.theme.error)
        return f"{style}{message}{RESET}"


def setup_logging(level: str = "INFO", verbose: bool = False, debug: bool = False,
                  color: bool = True, stream=None, theme: Optional[Theme] = None) -> logging.Logger:
    if debug:
        fmt, level = "[%(asctime)s] %(levelname)s: %(message)s", "DEBUG"
    elif verbose:
        fmt = "%(levelname)s: %(message)s"
    else:
        fmt = "%(message)s"

    # plain messages are part of the game output, decorated ones are diagnostics
    if stream is None:
        stream = sys.stderr if (verbose or debug) else sys.stdout

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(fmt, theme=theme, color=color))

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(_level_number(level))
    logger.propagate = False
    return logger


def _level_number(level: Optional[str]) -> int:
    name = (level or "INFO").upper()
    if name == "WARN":
        name = "WARNING"
    value = logging.getLevelName(name)
    # unknown names behave like INFO
    return value if isinstance(value, int) else logging.INFO
