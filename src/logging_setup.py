"""Logging configuration for the command line entry points."""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LEVEL_ENV = 'TASKBOARD_LOG_LEVEL'


def resolve_level(verbose: bool = False, env_value: Optional[str] = None) -> int:
    """--verbose wins, then TASKBOARD_LOG_LEVEL, then WARNING."""
    if verbose:
        return logging.DEBUG
    raw = (env_value if env_value is not None else os.environ.get(LEVEL_ENV, '')).strip().upper()
    level = logging.getLevelName(raw) if raw else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def logging_requested(verbose: bool = False) -> bool:
    """True when --verbose or TASKBOARD_LOG_LEVEL asks for log output."""
    return verbose or bool(os.environ.get(LEVEL_ENV, '').strip())


def setup_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Install a single stderr handler on the root logger.

    Call this ONCE, before the first log call.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)
