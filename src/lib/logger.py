"""Scan diagnostics.

TIER 1: May import from core only.

Every module logs through a child of the ``stackscout`` logger. The parent
owns the single stderr handler, so skipped files and broken manifests show
up once no matter how many analyzers report them. Nothing below WARNING is
printed unless ``STACKSCOUT_LOG_LEVEL`` asks for it.
"""

import logging
import os
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

ROOT_LOGGER = "stackscout"
LEVEL_ENV_VAR = "STACKSCOUT_LOG_LEVEL"
LINE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
TIME_FORMAT = "%H:%M:%S"


def _env_level() -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _scan_root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LINE_FORMAT, datefmt=TIME_FORMAT))
        root.addHandler(handler)
        root.propagate = False
    return root


def get_logger(name: str, level: LogLevel | None = None) -> logging.Logger:
    """Logger for one stackscout component, e.g. ``get_logger("walker")``.

    ``level`` pins this component; otherwise it follows the environment.
    """
    _scan_root_logger()
    logger = logging.getLogger(f"{ROOT_LOGGER}.{name}")
    logger.setLevel(getattr(logging, level) if level else _env_level())
    return logger
