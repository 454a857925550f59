from __future__ import annotations

import pytest

from karmank.numerology.catalog import default_recurrence_table, default_yoga_catalog
from karmank.numerology.dates import BirthDate


@pytest.fixture
def birth() -> BirthDate:
    return BirthDate(day=22, month=4, year=1987)


@pytest.fixture
def yoga_catalog():
    return default_yoga_catalog()


@pytest.fixture
def recurrence_table():
    return default_recurrence_table()


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KARMANK_HOME", str(tmp_path / "home"))
