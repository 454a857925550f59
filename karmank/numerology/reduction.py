"""Digit reduction and the cyclic period sequence."""

from __future__ import annotations

__all__ = ["MASTER_NUMBERS", "digit_sum", "reduce_number", "next_number"]

MASTER_NUMBERS = frozenset({11, 22, 33})


def digit_sum(value: int) -> int:
    """Return the sum of the decimal digits of ``abs(value)``."""

    return sum(int(ch) for ch in str(abs(int(value))))


def reduce_number(value: int, *, preserve_master_numbers: bool = False) -> int:
    """Reduce ``value`` to a single digit 1-9 by repeated digit sums.

    ``0`` stays ``0``. With ``preserve_master_numbers`` the reduction halts as
    soon as it reaches 11, 22 or 33.
    """

    number = abs(int(value))
    while number > 9:
        if preserve_master_numbers and number in MASTER_NUMBERS:
            break
        number = digit_sum(number)
    return number


def next_number(number: int) -> int:
    """Advance ``number`` through the 1..9 cycle (9 wraps to 1)."""

    if not 1 <= number <= 9:
        raise ValueError(f"period numbers must lie in 1..9, got {number}")
    return 1 if number == 9 else number + 1
