"""Basic and Destiny number calculation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .dates import BirthDate, coerce_birth_date
from .reduction import reduce_number

__all__ = ["CoreNumbers", "basic_number", "destiny_number", "core_numbers"]


@dataclass(frozen=True)
class CoreNumbers:
    """Basic (day) and Destiny (full date) numbers for a birth date."""

    basic: int
    destiny: int

    @property
    def basic_root(self) -> int:
        """Basic number reduced to 1-9 even when a master number was preserved."""

        return reduce_number(self.basic)

    @property
    def destiny_root(self) -> int:
        """Destiny number reduced to 1-9 even when a master number was preserved."""

        return reduce_number(self.destiny)

    def to_dict(self) -> dict[str, int]:
        return {"basic": self.basic, "destiny": self.destiny}


def basic_number(
    birth: BirthDate | date | str, *, preserve_master_numbers: bool = False
) -> int:
    """Return the Basic number: the reduced day of month."""

    parsed = coerce_birth_date(birth)
    return reduce_number(parsed.day, preserve_master_numbers=preserve_master_numbers)


def destiny_number(
    birth: BirthDate | date | str, *, preserve_master_numbers: bool = False
) -> int:
    """Return the Destiny number: ``day + month + year`` reduced."""

    parsed = coerce_birth_date(birth)
    total = parsed.day + parsed.month + parsed.year
    return reduce_number(total, preserve_master_numbers=preserve_master_numbers)


def core_numbers(
    birth: BirthDate | date | str, *, preserve_master_numbers: bool = False
) -> CoreNumbers:
    parsed = coerce_birth_date(birth)
    return CoreNumbers(
        basic=basic_number(parsed, preserve_master_numbers=preserve_master_numbers),
        destiny=destiny_number(parsed, preserve_master_numbers=preserve_master_numbers),
    )
