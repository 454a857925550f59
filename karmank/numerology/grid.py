"""Digit-occurrence grid and plane analysis."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .core import CoreNumbers, core_numbers
from .dates import BirthDate, coerce_birth_date

__all__ = [
    "DIGITS",
    "GRID_LAYOUT",
    "PLANES",
    "DigitHistogram",
    "GridResult",
    "PlaneStatus",
    "PlaneReading",
    "build_grid",
    "plane_status",
    "plane_report",
]

DIGITS: tuple[int, ...] = tuple(range(1, 10))

# Display order of the 3x3 grid, row by row.
GRID_LAYOUT: tuple[tuple[int, int, int], ...] = (
    (3, 1, 9),
    (6, 7, 5),
    (2, 8, 4),
)

PLANES: Mapping[str, tuple[int, int, int]] = {
    "physical": (1, 4, 7),
    "mental": (3, 6, 9),
    "emotional": (2, 5, 8),
}


class PlaneStatus(str, Enum):
    MISSING = "missing"
    WEAK = "weak"
    BALANCED = "balanced"
    STRONG = "strong"


_STATUS_BY_PRESENCE = (
    PlaneStatus.MISSING,
    PlaneStatus.WEAK,
    PlaneStatus.BALANCED,
    PlaneStatus.STRONG,
)


@dataclass(frozen=True)
class DigitHistogram(Mapping[int, int]):
    """Immutable occurrence counts for digits 1-9."""

    counts: tuple[int, ...] = (0,) * 9

    def __post_init__(self) -> None:
        if len(self.counts) != 9:
            raise ValueError("a digit histogram holds exactly nine counts")
        if any(value < 0 for value in self.counts):
            raise ValueError("digit counts must be non-negative")

    @classmethod
    def from_digits(cls, digits: Iterable[int | str]) -> DigitHistogram:
        """Count every digit 1-9 in ``digits``; zeros and other values are ignored."""

        counts = [0] * 9
        for item in digits:
            digit = int(item)
            if 1 <= digit <= 9:
                counts[digit - 1] += 1
        return cls(tuple(counts))

    @classmethod
    def from_mapping(cls, mapping: Mapping[int | str, int]) -> DigitHistogram:
        counts = [0] * 9
        for key, value in mapping.items():
            digit = int(key)
            if 1 <= digit <= 9:
                counts[digit - 1] = int(value)
        return cls(tuple(counts))

    def __getitem__(self, digit: int) -> int:
        if digit not in DIGITS:
            raise KeyError(digit)
        return self.counts[digit - 1]

    def __iter__(self) -> Iterator[int]:
        return iter(DIGITS)

    def __len__(self) -> int:
        return 9

    def count(self, digit: int) -> int:
        """Return the count for ``digit``; anything outside 1-9 counts as zero."""

        if digit in DIGITS:
            return self.counts[digit - 1]
        return 0

    def total(self) -> int:
        return sum(self.counts)

    def with_added(self, *digits: int) -> DigitHistogram:
        """Return a new histogram with one extra occurrence per digit in 1-9."""

        counts = list(self.counts)
        for digit in digits:
            if digit in DIGITS:
                counts[digit - 1] += 1
        return DigitHistogram(tuple(counts))

    def present(self) -> tuple[int, ...]:
        return tuple(digit for digit in DIGITS if self.count(digit) > 0)

    def missing(self) -> tuple[int, ...]:
        return tuple(digit for digit in DIGITS if self.count(digit) == 0)

    def dominant(self, threshold: int = 2) -> tuple[int, ...]:
        """Digits occurring at least ``threshold`` times."""

        return tuple(digit for digit in DIGITS if self.count(digit) >= threshold)

    def as_matrix(self) -> tuple[tuple[int, ...], ...]:
        """Counts arranged in :data:`GRID_LAYOUT` order."""

        return tuple(tuple(self.count(digit) for digit in row) for row in GRID_LAYOUT)

    def to_dict(self) -> dict[int, int]:
        return {digit: self.count(digit) for digit in DIGITS}


@dataclass(frozen=True)
class PlaneReading:
    name: str
    numbers: tuple[int, int, int]
    status: PlaneStatus

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "numbers": list(self.numbers), "status": self.status.value}


@dataclass(frozen=True)
class GridResult:
    """Foundational grid for a birth date."""

    birth: BirthDate
    base: DigitHistogram
    histogram: DigitHistogram
    core: CoreNumbers

    @property
    def basic(self) -> int:
        return self.core.basic

    @property
    def destiny(self) -> int:
        return self.core.destiny

    def planes(self) -> dict[str, PlaneReading]:
        return plane_report(self.histogram)

    def to_dict(self) -> dict[str, object]:
        return {
            "birth": self.birth.to_dict(),
            "base": self.base.to_dict(),
            "histogram": self.histogram.to_dict(),
            "basic": self.basic,
            "destiny": self.destiny,
            "planes": {name: reading.to_dict() for name, reading in self.planes().items()},
        }


def _injects_basic(day: int) -> bool:
    # Single-digit days and the round days 10/20/30 do not reinforce Basic.
    return day > 9 and day % 10 != 0


def build_grid(
    birth: BirthDate | date | str, *, preserve_master_numbers: bool = False
) -> GridResult:
    """Build the foundational histogram for ``birth``.

    Digits of the zero-padded day, zero-padded month and full year are
    counted (zeros dropped), then Destiny receives one extra occurrence and
    Basic receives one when the day is above 9 and not a multiple of 10.
    """

    parsed = coerce_birth_date(birth)
    core = core_numbers(parsed, preserve_master_numbers=preserve_master_numbers)
    base = DigitHistogram.from_digits(parsed.digit_string().replace("0", ""))

    injections = [core.destiny_root]
    if _injects_basic(parsed.day):
        injections.append(core.basic_root)
    return GridResult(
        birth=parsed,
        base=base,
        histogram=base.with_added(*injections),
        core=core,
    )


def plane_status(histogram: Mapping[int, int], triad: Iterable[int]) -> PlaneStatus:
    """Classify a triad by how many of its digits are present."""

    present = sum(1 for digit in triad if histogram.get(digit, 0) > 0)
    return _STATUS_BY_PRESENCE[min(present, 3)]


def plane_report(histogram: Mapping[int, int]) -> dict[str, PlaneReading]:
    return {
        name: PlaneReading(name=name, numbers=numbers, status=plane_status(histogram, numbers))
        for name, numbers in PLANES.items()
    }
