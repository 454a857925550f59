"""Yoga evaluation against a digit histogram."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .rules import BasicDestinyGate, DigitRule
from .text import TextValue, get_text

__all__ = ["YogaEntry", "evaluate_yogas"]


@dataclass(frozen=True)
class YogaEntry:
    """Single catalog yoga with its normalized activation rule.

    An entry whose ``rule`` is ``None`` never matches.
    """

    id: str | None
    name: TextValue
    description: TextValue = None
    traits: tuple[TextValue, ...] = ()
    rule: DigitRule | None = None
    gate: BasicDestinyGate | None = None
    category: str | None = None

    def rule_matches(self, histogram: Mapping[int, int]) -> bool:
        """Return ``True`` when the histogram alone satisfies the activation rule."""

        return self.rule is not None and self.rule.matches(histogram)

    def matches(
        self,
        histogram: Mapping[int, int],
        basic: int | None = None,
        destiny: int | None = None,
    ) -> bool:
        if not self.rule_matches(histogram):
            return False
        return self.gate is None or self.gate.allows(basic, destiny)

    def to_payload(self, language: str = "en") -> dict[str, object]:
        traits = [get_text(trait, language) for trait in self.traits]
        return {
            "id": self.id,
            "name": get_text(self.name, language) or "Yoga",
            "description": get_text(self.description, language),
            "traits": [trait for trait in traits if trait],
            "category": self.category,
        }


def evaluate_yogas(
    catalog: Iterable[YogaEntry],
    histogram: Mapping[int, int],
    basic: int | None = None,
    destiny: int | None = None,
) -> list[YogaEntry]:
    """Return catalog entries matching ``histogram`` in catalog order.

    Overlapping entries are all reported; nothing is deduplicated.
    """

    return [entry for entry in catalog if entry.matches(histogram, basic, destiny)]
