import pytest

from karmank.numerology.core import CoreNumbers, basic_number, core_numbers, destiny_number
from karmank.numerology.reduction import digit_sum, next_number, reduce_number


def test_reduce_number_examples() -> None:
    assert reduce_number(2013) == 6
    assert reduce_number(22) == 4
    assert reduce_number(9) == 9
    assert reduce_number(0) == 0
    assert reduce_number(-38) == 2
    assert digit_sum(1987) == 25


def test_master_numbers_only_kept_when_requested() -> None:
    assert reduce_number(29) == 2
    assert reduce_number(29, preserve_master_numbers=True) == 11
    assert reduce_number(22, preserve_master_numbers=True) == 22
    assert reduce_number(2013, preserve_master_numbers=True) == 6


def test_next_number_cycles() -> None:
    assert [next_number(n) for n in range(1, 10)] == [2, 3, 4, 5, 6, 7, 8, 9, 1]
    with pytest.raises(ValueError):
        next_number(0)
    with pytest.raises(ValueError):
        next_number(10)


def test_core_numbers_for_known_dates() -> None:
    assert core_numbers("22/04/1987") == CoreNumbers(basic=4, destiny=6)
    assert basic_number("05/05/2005") == 5
    assert destiny_number("05/05/2005") == 8


def test_core_numbers_with_master_flag_keep_roots() -> None:
    numbers = core_numbers("29/02/2000", preserve_master_numbers=True)
    assert numbers.basic == 11
    assert numbers.basic_root == 2
    assert numbers.destiny == 6
    assert numbers.to_dict() == {"basic": 11, "destiny": 6}
