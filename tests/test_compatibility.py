import json

import pytest
import yaml

from karmank.cli.__main__ import main
from karmank.config.settings import CatalogCfg, Settings
from karmank.errors import CatalogValidationError
from karmank.numerology.catalog import (
    compatibility_catalog_from_data,
    default_compatibility_catalog,
)
from karmank.numerology.compatibility import compatibility, find_insight
from karmank.numerology.report import compatibility_catalog_for


@pytest.fixture
def catalog():
    return default_compatibility_catalog()


def test_reverse_pair_is_used_when_direct_key_missing(catalog) -> None:
    # Destiny 6 (22/04/1987) with destiny 8 (05/05/2005); only "8-6" is catalogued.
    result = compatibility("22/04/1987", "05/05/2005", catalog)
    assert (result.first, result.second) == (6, 8)
    assert result.combination_key == "6-8"
    assert result.matched_key == "8-6"
    assert result.summary.startswith("Saturn and Venus")
    assert result.strengths == ("Stability paired with comfort", "Loyalty in difficult times")
    assert result.remedies == ("Wear light colours on Fridays.",)


def test_direct_pair_wins_and_texts_follow_language(catalog) -> None:
    result = compatibility("01/01/1998", "22/04/1987", catalog, "hi")
    assert result.matched_key == "2-6"
    assert result.summary == "चंद्र और शुक्र एक कोमल, घर-प्रेमी बंधन बनाते हैं।"
    assert result.strengths == ("भावनात्मक गर्मजोशी", "Shared love of comfort")
    assert result.frictions == ("Mood swings and over-indulgence",)


@pytest.mark.parametrize(
    ("language", "expected"),
    [
        ("en", "Numbers 6 and 4 require awareness to create a balanced relationship."),
        ("en-hi", "Numbers 6 aur 4 ka combo balanced relationship ke liye awareness maangta hai."),
    ],
)
def test_uncatalogued_pair_gets_generic_summary(catalog, language, expected) -> None:
    result = compatibility("22/04/1987", "01/01/2000", catalog, language)
    assert result.matched_key is None
    assert result.summary == expected
    assert result.strengths == result.frictions == result.remedies == ()


def test_entry_without_summary_keeps_lists() -> None:
    catalog = compatibility_catalog_from_data({"4-6": {"strengths": ["Practical care"]}})
    result = compatibility("22/04/1987", "01/01/2000", catalog)
    assert result.matched_key == "4-6"
    assert result.summary.startswith("Numbers 6 and 4")
    assert result.strengths == ("Practical care",)


def test_bare_text_entries_and_key_normalisation() -> None:
    catalog = compatibility_catalog_from_data({"combinations": {" 3 - 4 ": "Easy going."}})
    assert list(catalog) == ["3-4"]
    assert find_insight(catalog, 4, 3)[0] == "3-4"
    assert find_insight(catalog, 4, 5) == (None, None)


def test_invalid_pair_keys_are_collected() -> None:
    with pytest.raises(CatalogValidationError) as excinfo:
        compatibility_catalog_from_data({"1-10": "x", "ab": "y", "2-2": "ok"}, source="pairs.yaml")
    assert "pairs.yaml" in str(excinfo.value)
    assert [error["path"] for error in excinfo.value.errors] == [
        ["combinations", "1-10"],
        ["combinations", "ab"],
    ]


def test_catalog_path_from_settings(tmp_path) -> None:
    path = tmp_path / "pairs.yaml"
    path.write_text(yaml.safe_dump({"6-4": {"summary": "Custom pairing."}}), encoding="utf-8")
    settings = Settings(catalogs=CatalogCfg(compatibility_path=str(path)))
    result = compatibility("22/04/1987", "01/01/2000", compatibility_catalog_for(settings))
    assert result.summary == "Custom pairing."


def test_match_cli_json(capsys: pytest.CaptureFixture[str]) -> None:
    argv = ["match", "--dob", "22/04/1987", "--partner-dob", "05/05/2005", "--json"]
    assert main(argv) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["combination_key"] == "6-8"
    assert payload["matched_key"] == "8-6"
    assert len(payload["strengths"]) == 2


def test_match_cli_text_and_bad_date(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["match", "--dob", "22/04/1987", "--partner-dob", "01/01/2000"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Destiny 6 with 4")
    assert main(["match", "--dob", "22/04/1987", "--partner-dob", "2000/01/01"]) == 2
    assert "unrecognised date format" in capsys.readouterr().err
