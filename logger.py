#!/usr/bin/env python3
"""
Logging setup for mdsaad
Console records go through Rich, session records are appended to session.log
"""

import datetime
import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "mdsaad"
SESSION_LOG_NAME = "session.log"

_session_log_file: Optional[Path] = None


class SessionFormatter(logging.Formatter):
    """Format records as ``[YYYY-MM-DD HH:MM:SS] LEVEL name: message``."""

    def __init__(self):
        super().__init__("[%(asctime)s] %(levelname)s %(name)s: %(message)s",
                         datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: Union[str, int] = "WARNING",
                  log_dir: Optional[Union[str, Path]] = None,
                  console: Optional[Console] = None) -> logging.Logger:
    """Configure the ``mdsaad`` logger hierarchy.

    Safe to call more than once: previously installed handlers are replaced.
    """
    global _session_log_file

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    rich_handler.setLevel(level)
    logger.addHandler(rich_handler)

    _session_log_file = None
    if log_dir is not None:
        try:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            _session_log_file = log_path / SESSION_LOG_NAME
            file_handler = logging.FileHandler(_session_log_file, encoding="utf-8")
            file_handler.setLevel(min(level, logging.INFO))
            file_handler.setFormatter(SessionFormatter())
            logger.addHandler(file_handler)
        except OSError as e:
            _session_log_file = None
            logger.warning("Session log disabled: %s", e)

    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Return a child of the ``mdsaad`` logger."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_session(message: str):
    """Append a plain session line to session.log."""
    if _session_log_file is None:
        return
    try:
        with open(_session_log_file, "a", encoding="utf-8") as f:
            timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            f.write(f"[{timestamp}] {message}\n")
    except OSError:
        pass  # session log is best effort
