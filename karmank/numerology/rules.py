"""Normalized digit rules shared by yoga and recurrence evaluation.

Catalog data arrives in several historical shapes:

* legacy activation rules ``{allOf, anyOf, noneOf, minCount}``
* strict activation rules ``{requires_presence, requires_absence, requires_counts}``
* recurrence rules ``{require, avoid, minCounts, maxCounts}``
* Basic/Destiny gates stored under ``comboBD``, ``combo`` or ``basicDestiny``

Each is mapped once, at load time, onto :class:`DigitRule` and
:class:`BasicDestinyGate`; evaluators never inspect the raw shapes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "DigitRule",
    "BasicDestinyGate",
    "normalize_activation_rules",
    "normalize_recurrence_conditions",
    "normalize_gate",
]

_GATE_KEYS = ("comboBD", "combo", "basicDestiny")


@dataclass(frozen=True)
class DigitRule:
    """Conditions evaluated against a digit histogram.

    ``presence`` digits need a count above zero, at least one ``any_of`` digit
    must be present when the tuple is non-empty, ``absence`` digits need a
    count of zero and ``min_counts``/``max_counts`` bound individual counts.
    """

    presence: tuple[int, ...] = ()
    any_of: tuple[int, ...] = ()
    absence: tuple[int, ...] = ()
    min_counts: Mapping[int, int] = field(default_factory=dict)
    max_counts: Mapping[int, int] = field(default_factory=dict)

    def matches(self, histogram: Mapping[int, int]) -> bool:
        def count(digit: int) -> int:
            return histogram.get(digit, 0)

        if any(count(digit) <= 0 for digit in self.presence):
            return False
        if self.any_of and not any(count(digit) > 0 for digit in self.any_of):
            return False
        if any(count(digit) > 0 for digit in self.absence):
            return False
        if any(count(digit) < need for digit, need in self.min_counts.items()):
            return False
        if any(count(digit) > cap for digit, cap in self.max_counts.items()):
            return False
        return True

    def to_dict(self) -> dict[str, object]:
        return {
            "presence": list(self.presence),
            "any_of": list(self.any_of),
            "absence": list(self.absence),
            "min_counts": dict(self.min_counts),
            "max_counts": dict(self.max_counts),
        }


@dataclass(frozen=True)
class BasicDestinyGate:
    """Optional restriction of a rule to particular Basic/Destiny values.

    ``None`` on either side accepts any value.
    """

    basic: frozenset[int] | None = None
    destiny: frozenset[int] | None = None

    def allows(self, basic: int | None, destiny: int | None) -> bool:
        if self.basic is not None and basic is not None and basic not in self.basic:
            return False
        if self.destiny is not None and destiny is not None and destiny not in self.destiny:
            return False
        return True

    def to_dict(self) -> dict[str, object]:
        return {
            "basic": sorted(self.basic) if self.basic is not None else None,
            "destiny": sorted(self.destiny) if self.destiny is not None else None,
        }


def _digits(value: Any, *, name: str) -> tuple[int, ...]:
    if value is None:
        return ()
    if isinstance(value, (int, str)):
        value = [value]
    if not isinstance(value, Iterable):
        raise ValueError(f"{name} must be a list of digits")
    try:
        return tuple(int(item) for item in value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} entries must be integers") from exc


def _count_map(value: Any, *, name: str) -> dict[int, int]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a mapping of digit to count")
    try:
        return {int(key): int(count) for key, count in value.items()}
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} keys and values must be integers") from exc


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def normalize_activation_rules(payload: Mapping[str, Any]) -> DigitRule:
    """Map a legacy or strict yoga activation block onto :class:`DigitRule`.

    Legacy keys take precedence when both spellings are present.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("activation rules must be a mapping")
    return DigitRule(
        presence=_digits(_first(payload, "allOf", "requires_presence"), name="allOf"),
        any_of=_digits(payload.get("anyOf"), name="anyOf"),
        absence=_digits(_first(payload, "noneOf", "requires_absence"), name="noneOf"),
        min_counts=_count_map(_first(payload, "minCount", "requires_counts"), name="minCount"),
    )


def normalize_recurrence_conditions(payload: Mapping[str, Any]) -> DigitRule:
    """Map a structured recurrence rule onto :class:`DigitRule`."""

    return DigitRule(
        presence=_digits(payload.get("require"), name="require"),
        absence=_digits(payload.get("avoid"), name="avoid"),
        min_counts=_count_map(_first(payload, "minCounts", "min_counts"), name="minCounts"),
        max_counts=_count_map(_first(payload, "maxCounts", "max_counts"), name="maxCounts"),
    )


def _gate_values(value: Any, *, name: str) -> frozenset[int] | None:
    if value is None:
        return None
    return frozenset(_digits(value, name=name))


def normalize_gate(payload: Mapping[str, Any], *, nested: bool = True) -> BasicDestinyGate | None:
    """Return the Basic/Destiny gate carried by ``payload``.

    With ``nested`` the gate lives under one of ``comboBD``, ``combo`` or
    ``basicDestiny`` (first one present wins); otherwise ``basic`` and
    ``destiny`` are read from ``payload`` itself.
    """

    if nested:
        source = _first(payload, *_GATE_KEYS)
        if source is None:
            return None
        if not isinstance(source, Mapping):
            raise ValueError("basic/destiny gate must be a mapping")
    else:
        source = payload
    basic = _gate_values(source.get("basic"), name="basic")
    destiny = _gate_values(source.get("destiny"), name="destiny")
    if basic is None and destiny is None:
        return None
    return BasicDestinyGate(basic=basic, destiny=destiny)
