"""Logging setup shared by KarmAnk entry points."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["configure_logging", "LEVEL_ENV_VARS", "CLIENT_LOGGERS"]

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Checked in order; the first one set wins.
LEVEL_ENV_VARS = ("KARMANK_LOG_LEVEL", "LOG_LEVEL")

# HTTP chatter from the narrative backend; only shown at DEBUG.
CLIENT_LOGGERS = ("openai", "httpx", "httpcore")


def _coerce_level(value: str | int | None) -> int:
    """Translate a level name or number; unknown values mean INFO."""

    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value

    text = value.strip()
    if not text:
        return logging.INFO
    if text.isdigit():
        return int(text)

    named = logging.getLevelName(text.upper())
    return named if isinstance(named, int) else logging.INFO


def _requested_level(level: str | int | None, verbosity: int) -> str | int | None:
    if level is not None:
        return level
    if verbosity > 0:
        return logging.DEBUG if verbosity > 1 else logging.INFO
    for name in LEVEL_ENV_VARS:
        value = os.environ.get(name)
        if value is not None:
            return value
    return None


def configure_logging(
    *, level: str | int | None = None, verbosity: int = 0, **kwargs: Any
) -> int:
    """Configure the root logger and return the level applied.

    An explicit ``level`` wins; otherwise ``verbosity`` (the count of ``-v``
    flags) selects INFO or DEBUG, and without either the first of
    :data:`LEVEL_ENV_VARS` that is set is used. Loggers of the HTTP client
    stack stay at WARNING unless DEBUG is in effect. Remaining keyword
    arguments go to :func:`logging.basicConfig`.
    """

    effective = _coerce_level(_requested_level(level, verbosity))

    kwargs.setdefault("format", LOG_FORMAT)
    kwargs.setdefault("datefmt", LOG_DATEFMT)
    kwargs.setdefault("force", True)
    logging.basicConfig(level=effective, **kwargs)

    client_level = logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    for name in CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)
    return effective
