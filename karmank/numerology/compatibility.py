"""Two-person compatibility from a pair of Destiny numbers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from .core import core_numbers
from .dates import BirthDate
from .text import TextValue, get_text

__all__ = [
    "CompatibilityInsight",
    "CompatibilityResult",
    "DEFAULT_SUMMARY",
    "combination_key",
    "find_insight",
    "compatibility",
]

DEFAULT_SUMMARY: Mapping[str, str] = {
    "en": "Numbers {first} and {second} require awareness to create a balanced relationship.",
    "hi": "संख्या {first} और {second} का मेल एक संतुलित संबंध बनाने के लिए जागरूकता माँगता है।",
    "en-hi": "Numbers {first} aur {second} ka combo balanced relationship ke liye awareness maangta hai.",
}


@dataclass(frozen=True)
class CompatibilityInsight:
    """Catalog entry for one ``a-b`` Destiny pairing."""

    summary: TextValue = None
    strengths: tuple[TextValue, ...] = ()
    frictions: tuple[TextValue, ...] = ()
    remedies: tuple[TextValue, ...] = ()


@dataclass(frozen=True)
class CompatibilityResult:
    first: int
    second: int
    matched_key: str | None
    summary: str
    strengths: tuple[str, ...] = ()
    frictions: tuple[str, ...] = ()
    remedies: tuple[str, ...] = ()

    @property
    def combination_key(self) -> str:
        return combination_key(self.first, self.second)

    def to_dict(self) -> dict[str, object]:
        return {
            "first": self.first,
            "second": self.second,
            "combination_key": self.combination_key,
            "matched_key": self.matched_key,
            "summary": self.summary,
            "strengths": list(self.strengths),
            "frictions": list(self.frictions),
            "remedies": list(self.remedies),
        }


def combination_key(first: int, second: int) -> str:
    return f"{first}-{second}"


def find_insight(
    catalog: Mapping[str, CompatibilityInsight], first: int, second: int
) -> tuple[str | None, CompatibilityInsight | None]:
    """Look up ``first-second``, then ``second-first``."""

    for key in (combination_key(first, second), combination_key(second, first)):
        insight = catalog.get(key)
        if insight is not None:
            return key, insight
    return None, None


def _texts(values: tuple[TextValue, ...], language: str) -> tuple[str, ...]:
    resolved = (get_text(value, language) for value in values)
    return tuple(text for text in resolved if text)


def compatibility(
    first: BirthDate | date | str,
    second: BirthDate | date | str,
    catalog: Mapping[str, CompatibilityInsight],
    language: str = "en",
) -> CompatibilityResult:
    """Compare two birth dates by their reduced Destiny numbers.

    When neither pairing is catalogued, or the entry has no summary text,
    a generic sentence naming both numbers is used.
    """

    a = core_numbers(first).destiny_root
    b = core_numbers(second).destiny_root
    matched, insight = find_insight(catalog, a, b)

    summary = get_text(insight.summary, language) if insight is not None else ""
    if not summary:
        template = DEFAULT_SUMMARY.get(language, DEFAULT_SUMMARY["en"])
        summary = template.format(first=a, second=b)

    if insight is None:
        return CompatibilityResult(a, b, matched, summary)
    return CompatibilityResult(
        a,
        b,
        matched,
        summary,
        strengths=_texts(insight.strengths, language),
        frictions=_texts(insight.frictions, language),
        remedies=_texts(insight.remedies, language),
    )
