"""Recurring-digit influence analysis."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from .rules import BasicDestinyGate, DigitRule
from .text import TextValue, get_text

LOG = logging.getLogger(__name__)

__all__ = [
    "CountSelector",
    "RecurrenceRule",
    "RecurrenceBucket",
    "RecurrenceTable",
    "RecurrenceFinding",
    "parse_selector",
    "analyze_recurrences",
]

_RANGE = re.compile(r"^(\d+)-(\d+)$")
_THRESHOLD = re.compile(r"^(\d+)\+$")


@dataclass(frozen=True)
class CountSelector:
    """Occurrence-count bucket key: ``"3"``, ``"2-4"``, ``"5+"`` or ``"default"``."""

    kind: str
    low: int = 0
    high: int | None = None
    key: str = ""

    def accepts(self, occurrences: int) -> bool:
        if self.kind == "exact":
            return occurrences == self.low
        if self.kind == "range":
            return self.low <= occurrences <= (self.high if self.high is not None else self.low)
        if self.kind == "threshold":
            return occurrences >= self.low
        return self.kind == "default"


def parse_selector(key: object) -> CountSelector:
    text = str(key).strip()
    if text == "default":
        return CountSelector(kind="default", key=text)
    if text.isdigit():
        return CountSelector(kind="exact", low=int(text), key=text)
    match = _RANGE.match(text)
    if match:
        return CountSelector(kind="range", low=int(match[1]), high=int(match[2]), key=text)
    match = _THRESHOLD.match(text)
    if match:
        return CountSelector(kind="threshold", low=int(match[1]), key=text)
    raise ValueError(f"unrecognised occurrence selector: {key!r}")


@dataclass(frozen=True)
class RecurrenceRule:
    """Resolved bucket entry.

    Plain-text entries carry only ``text``; structured entries also carry
    ``conditions`` and an optional Basic/Destiny ``gate`` which must all pass
    for the entry to produce output.
    """

    text: TextValue = None
    conditions: DigitRule | None = None
    gate: BasicDestinyGate | None = None
    structured: bool = False

    def accepts(
        self, histogram: Mapping[int, int], basic: int | None, destiny: int | None
    ) -> bool:
        if self.conditions is not None and not self.conditions.matches(histogram):
            return False
        return self.gate is None or self.gate.allows(basic, destiny)

    def influence(self, digit: int, occurrences: int, language: str) -> str:
        text = get_text(self.text, language)
        if text or not self.structured:
            return text
        return f"When {digit} repeats {occurrences} times, its influence intensifies."


@dataclass(frozen=True)
class RecurrenceBucket:
    """Ordered selector → rule entries for one digit."""

    entries: tuple[tuple[CountSelector, RecurrenceRule], ...] = ()

    def resolve(self, occurrences: int) -> RecurrenceRule | None:
        """Pick the entry for ``occurrences``.

        Precedence: exact count, then the first matching range, then the
        highest satisfied threshold, then ``default``.
        """

        for selector, rule in self.entries:
            if selector.kind == "exact" and selector.accepts(occurrences):
                return rule
        for selector, rule in self.entries:
            if selector.kind == "range" and selector.accepts(occurrences):
                return rule
        best: tuple[CountSelector, RecurrenceRule] | None = None
        for selector, rule in self.entries:
            if selector.kind == "threshold" and selector.accepts(occurrences):
                if best is None or selector.low > best[0].low:
                    best = (selector, rule)
        if best is not None:
            return best[1]
        for selector, rule in self.entries:
            if selector.kind == "default":
                return rule
        return None


@dataclass(frozen=True)
class RecurrenceTable:
    """Recurrence buckets keyed by digit plus optional per-number details."""

    buckets: Mapping[int, RecurrenceBucket] = field(default_factory=dict)
    details: Mapping[int, TextValue] = field(default_factory=dict)

    def bucket(self, digit: int) -> RecurrenceBucket | None:
        return self.buckets.get(digit)


@dataclass(frozen=True)
class RecurrenceFinding:
    digit: int
    occurrences: int
    influence: str

    def to_dict(self) -> dict[str, object]:
        return {"digit": self.digit, "occurrences": self.occurrences, "influence": self.influence}


def _sort_key(finding: RecurrenceFinding) -> tuple[int, int]:
    return (-finding.occurrences, finding.digit)


def analyze_recurrences(
    histogram: Mapping[int, int],
    destiny: int,
    table: RecurrenceTable,
    *,
    basic: int | None = None,
    language: str = "en",
    min_repeat: int = 2,
    destiny_fallback: bool = False,
) -> list[RecurrenceFinding]:
    """Return influences for digits occurring at least ``min_repeat`` times.

    Results are ordered by occurrences (descending) then digit. Digits with
    no bucket, no matching selector or a failing structured rule are
    skipped. With ``destiny_fallback`` and no qualifying digit, a single
    entry describing the Destiny number is returned instead.
    """

    findings: list[RecurrenceFinding] = []
    for digit in range(1, 10):
        occurrences = histogram.get(digit, 0)
        if occurrences < min_repeat:
            continue
        bucket = table.bucket(digit)
        rule = bucket.resolve(occurrences) if bucket is not None else None
        if rule is None:
            LOG.debug("no recurrence entry for digit %s x%s", digit, occurrences)
            continue
        if not rule.accepts(histogram, basic, destiny):
            continue
        influence = rule.influence(digit, occurrences, language)
        if influence:
            findings.append(RecurrenceFinding(digit, occurrences, influence))

    if not findings and destiny_fallback and 1 <= destiny <= 9:
        detail = get_text(table.details.get(destiny), language)
        influence = detail or f"Destiny number {destiny} sets the overall tone for this chart."
        findings.append(RecurrenceFinding(destiny, 1, influence))

    return sorted(findings, key=_sort_key)
