"""Exception taxonomy shared across KarmAnk modules."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

__all__ = [
    "KarmAnkError",
    "InvalidDateFormat",
    "IncompleteInput",
    "CatalogValidationError",
    "ExternalGenerationFailure",
]


class KarmAnkError(Exception):
    """Base class for all KarmAnk errors."""


class InvalidDateFormat(KarmAnkError, ValueError):
    """Raised when a date-of-birth string matches none of the accepted layouts."""

    def __init__(self, value: object, message: str | None = None) -> None:
        self.value = value
        super().__init__(message or f"unrecognised date format: {value!r}")


class IncompleteInput(KarmAnkError, ValueError):
    """Raised when required report inputs are missing."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__("missing required input: " + ", ".join(self.missing))


class CatalogValidationError(KarmAnkError):
    """Raised when a yoga or recurrence catalog cannot be parsed."""

    def __init__(self, message: str, *, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ExternalGenerationFailure(KarmAnkError):
    """Raised when the text-generation collaborator fails or is unavailable."""
