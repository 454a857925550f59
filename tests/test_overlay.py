from datetime import date

from karmank.dasha.lookup import DashaCalculator
from karmank.dasha.overlay import compose, dynamic_reading, dynamic_recurrences, dynamic_yogas
from karmank.numerology.catalog import yoga_catalog_from_data
from karmank.numerology.grid import DigitHistogram, build_grid

_CATALOG = yoga_catalog_from_data(
    {
        "third_eye": {"name": "Third Eye", "activation_rules": {"requires_presence": [3]}},
        "triple_ketu": {"name": "Triple Ketu", "activation_rules": {"minCount": {7: 3}}},
        "already_there": {"name": "Already There", "activation_rules": {"allOf": [1]}},
        "gated": {
            "name": "Gated",
            "activation_rules": {"allOf": [3]},
            "comboBD": {"destiny": [1]},
        },
    }
)

_LAYERS = {"maha": 9, "yearly": 7, "monthly": 7, "daily": 3}


def test_compose_adds_one_occurrence_per_layer() -> None:
    base = DigitHistogram.from_mapping({1: 1})
    assert compose(base, _LAYERS).to_dict()[7] == 2
    assert compose(base, [1, 1]).to_dict()[1] == 3
    assert base[1] == 1


def test_dynamic_yogas_report_only_new_matches_with_attribution() -> None:
    foundational = build_grid("22/04/1987").histogram
    found = dynamic_yogas(_CATALOG, foundational, _LAYERS, basic=4, destiny=6)
    assert [(yoga.entry.id, yoga.formed_by) for yoga in found] == [
        ("third_eye", ("daily",)),
        ("triple_ketu", ("yearly", "monthly")),
    ]


def test_dynamic_yogas_without_layers_is_empty() -> None:
    foundational = build_grid("22/04/1987").histogram
    assert dynamic_yogas(_CATALOG, foundational, {}, basic=4, destiny=6) == []


def test_dynamic_recurrences_keep_only_changes(recurrence_table) -> None:
    foundational = build_grid("22/04/1987").histogram
    findings = dynamic_recurrences(foundational, _LAYERS, 6, recurrence_table, basic=4)
    assert [(f.digit, f.occurrences) for f in findings] == [(9, 2)]


def test_dynamic_recurrences_detect_higher_counts(recurrence_table) -> None:
    foundational = DigitHistogram.from_mapping({1: 2})
    findings = dynamic_recurrences(foundational, {"maha": 1}, 1, recurrence_table)
    assert [(f.digit, f.occurrences) for f in findings] == [(1, 3)]


def test_dynamic_reading_for_view(birth, yoga_catalog, recurrence_table) -> None:
    grid = build_grid(birth)
    layers = DashaCalculator(birth).active_layers(date(2024, 5, 1))
    reading = dynamic_reading(
        grid.histogram,
        layers,
        "yearly",
        yoga_catalog,
        recurrence_table,
        basic=4,
        destiny=6,
    )
    assert dict(reading.numbers) == {"maha": 9, "yearly": 7}
    assert reading.histogram[9] == 2
    assert reading.dominant_number() == 7
    payload = reading.to_dict()
    assert payload["view"] == "yearly"
    assert payload["dominant_number"] == 7
