"""Resolution of multilingual catalog text values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Literal, Union

__all__ = ["Language", "LANGUAGES", "TextValue", "get_text"]

Language = Literal["en", "hi", "en-hi"]
LANGUAGES: tuple[str, ...] = ("en", "hi", "en-hi")

TextValue = Union[str, int, float, Mapping[str, object], Sequence[object], None]

_FALLBACK_ORDER = ("en", "en-hi", "hi")


def get_text(value: TextValue, language: str = "en") -> str:
    """Return a plain string for ``value`` in ``language``.

    Strings and numbers are returned as-is, sequences are resolved item by
    item and joined with ``", "``, and language mappings fall back through
    ``en`` → ``en-hi`` → ``hi``.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping):
        for key in (language, *_FALLBACK_ORDER):
            picked = value.get(key)
            if picked is not None:
                return str(picked)
        return ""
    if isinstance(value, Sequence):
        parts = (get_text(item, language) for item in value)
        return ", ".join(part for part in parts if part)
    return str(value)
