"""Helpers shared by CLI subcommands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..config.settings import Settings, load_settings
from ..errors import KarmAnkError

__all__ = ["settings_from_args", "report_error"]


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Return settings from ``--config`` when given, else defaults."""

    path = getattr(args, "config", None)
    settings = load_settings(Path(path)) if path else Settings()
    language = getattr(args, "language", None)
    if language:
        settings = settings.model_copy(
            update={"numerology": settings.numerology.model_copy(update={"language": language})}
        )
    return settings


def report_error(exc: KarmAnkError) -> int:
    print(f"error: {exc}", file=sys.stderr)
    return 2
