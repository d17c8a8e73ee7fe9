"""Logging setup for the pokedex catalog engine.

All package loggers hang under the "pokedex" root, so one `setup_logger` call
configures every module. Modules ask for `get_logger(__name__)`.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "pokedex"

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    level: int | str = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure the package root logger and return it.

    Idempotent: if handlers are already attached only the level is updated.

    Args:
        level: Logging level, as an int or a name such as "DEBUG".
        log_file: Optional path to log file. If None, logs to stderr only.
    """
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(level)
    if log.handlers:
        return log

    fmt = logging.Formatter(_FORMAT, datefmt=_DATEFMT)

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Return the package logger, or a child of it.

    `get_logger()` is the root; `get_logger(__name__)` inside the package
    returns that module's logger; any other name becomes "pokedex.<name>".
    """
    if not name or name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    if name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
