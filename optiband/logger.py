"""
Logging utilities for optiband.

A single colorized logger is shared by every stage of the synthesis pipeline
so that stage progress and parameter warnings end up in one stream.
"""

import logging
import sys
from typing import Union


class ColorFormatter(logging.Formatter):
    """
    Formatter that wraps each record in the ANSI color of its level.

    One plain formatter per level is built up front; records of an unknown
    level are left uncolored.
    """

    CYAN = "\x1b[36;20m"
    GREEN = "\x1b[32;20m"
    YELLOW = "\x1b[33;20m"
    RED = "\x1b[31;20m"
    BOLD_RED = "\x1b[31;1m"
    RESET = "\x1b[0m"
    FORMAT = "%(asctime)s [%(levelname)s] [%(name)s.%(module)s] %(message)s"
    DATEFMT = "%H:%M:%S"

    LEVEL_COLORS = {
        logging.DEBUG: CYAN,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def __init__(self):
        super().__init__(self.FORMAT, datefmt=self.DATEFMT)
        self._colored = {
            level: logging.Formatter(
                f"{color}{self.FORMAT}{self.RESET}", datefmt=self.DATEFMT
            )
            for level, color in self.LEVEL_COLORS.items()
        }

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._colored.get(record.levelno)
        if formatter is None:
            return super().format(record)
        return formatter.format(record)


def get_logger(name: str = "optiband") -> logging.Logger:
    """Returns the named logger, attaching the colorized handler on first use."""
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColorFormatter())
        logger.addHandler(handler)

    return logger


logger = get_logger()


def set_log_level(level: Union[int, str]):
    """
    Sets the log level of the optiband logger.

    Args:
        level: A logging level such as logging.DEBUG, or its name ("debug",
            "WARNING", ...).

    Raises:
        ValueError: If a level name is not one of the standard ones.
    """
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = value
    logger.setLevel(level)
