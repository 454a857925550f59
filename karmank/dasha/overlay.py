"""Overlay of active period numbers onto the foundational grid."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from ..numerology.grid import DigitHistogram
from ..numerology.recurrence import RecurrenceFinding, RecurrenceTable, analyze_recurrences
from ..numerology.yogas import YogaEntry
from .models import ActiveLayers

__all__ = [
    "compose",
    "DynamicYoga",
    "DynamicReading",
    "dynamic_yogas",
    "dynamic_recurrences",
    "dynamic_reading",
]


def compose(
    foundational: DigitHistogram, layers: Mapping[str, int] | Iterable[int]
) -> DigitHistogram:
    """Add one occurrence per active layer number to ``foundational``."""

    numbers = layers.values() if isinstance(layers, Mapping) else layers
    return foundational.with_added(*numbers)


@dataclass(frozen=True)
class DynamicYoga:
    """A yoga that forms only once period numbers are overlaid."""

    entry: YogaEntry
    formed_by: tuple[str, ...]

    def to_payload(self, language: str = "en") -> dict[str, object]:
        payload = self.entry.to_payload(language)
        payload["formed_by"] = list(self.formed_by)
        return payload


def dynamic_yogas(
    catalog: Iterable[YogaEntry],
    foundational: DigitHistogram,
    layers: Mapping[str, int],
    basic: int | None = None,
    destiny: int | None = None,
) -> list[DynamicYoga]:
    """Return yogas matching the overlay but not the foundational grid.

    ``formed_by`` names each layer whose removal breaks the match.
    """

    dynamic = compose(foundational, layers)
    found: list[DynamicYoga] = []
    for entry in catalog:
        if not entry.matches(dynamic, basic, destiny):
            continue
        if entry.matches(foundational, basic, destiny):
            continue
        formed_by = tuple(
            level
            for level in layers
            if not entry.matches(
                compose(foundational, [n for other, n in layers.items() if other != level]),
                basic,
                destiny,
            )
        )
        found.append(DynamicYoga(entry=entry, formed_by=formed_by))
    return found


def dynamic_recurrences(
    foundational: DigitHistogram,
    layers: Mapping[str, int],
    destiny: int,
    table: RecurrenceTable,
    *,
    basic: int | None = None,
    language: str = "en",
    min_repeat: int = 2,
) -> list[RecurrenceFinding]:
    """Return recurrences the overlay introduces or changes, ordered by digit.

    A finding is kept when its digit did not recur before, recurs more often
    now, or resolves to a different influence text.
    """

    options = {"basic": basic, "language": language, "min_repeat": min_repeat}
    before = {
        finding.digit: finding
        for finding in analyze_recurrences(foundational, destiny, table, **options)
    }
    after = analyze_recurrences(compose(foundational, layers), destiny, table, **options)

    changed = []
    for finding in after:
        previous = before.get(finding.digit)
        if (
            previous is None
            or finding.occurrences > previous.occurrences
            or finding.influence != previous.influence
        ):
            changed.append(finding)
    return sorted(changed, key=lambda finding: finding.digit)


@dataclass(frozen=True)
class DynamicReading:
    """Overlay results for one date and view."""

    view: str
    layers: ActiveLayers
    numbers: Mapping[str, int]
    histogram: DigitHistogram
    yogas: tuple[DynamicYoga, ...]
    recurrences: tuple[RecurrenceFinding, ...]
    language: str = "en"

    def dominant_number(self) -> int | None:
        """Most frequent active layer number, lowest number on ties."""

        values = list(self.numbers.values())
        if not values:
            return None
        return max(sorted(set(values)), key=values.count)

    def to_dict(self) -> dict[str, object]:
        return {
            "view": self.view,
            "layers": self.layers.to_dict(),
            "numbers": dict(self.numbers),
            "histogram": self.histogram.to_dict(),
            "yogas": [yoga.to_payload(self.language) for yoga in self.yogas],
            "recurrences": [finding.to_dict() for finding in self.recurrences],
            "dominant_number": self.dominant_number(),
        }


def dynamic_reading(
    foundational: DigitHistogram,
    layers: ActiveLayers,
    view: str,
    catalog: Sequence[YogaEntry],
    table: RecurrenceTable,
    *,
    basic: int,
    destiny: int,
    language: str = "en",
    min_repeat: int = 2,
) -> DynamicReading:
    numbers = layers.numbers(view)
    return DynamicReading(
        view=view,
        layers=layers,
        numbers=numbers,
        histogram=compose(foundational, numbers),
        yogas=tuple(dynamic_yogas(catalog, foundational, numbers, basic, destiny)),
        recurrences=tuple(
            dynamic_recurrences(
                foundational,
                numbers,
                destiny,
                table,
                basic=basic,
                language=language,
                min_repeat=min_repeat,
            )
        ),
        language=language,
    )
