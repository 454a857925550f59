"""Deterministic summary text and prompts for the text-generation backend."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import TYPE_CHECKING

from ..numerology.text import get_text

if TYPE_CHECKING:  # pragma: no cover
    from ..dasha.overlay import DynamicReading
    from ..numerology.report import NumerologyReport

__all__ = [
    "REPHRASE_INSTRUCTIONS",
    "join_list",
    "format_day",
    "dasha_summary",
    "foundational_prompt",
    "rephrase_prompt",
]

REPHRASE_INSTRUCTIONS = """\
You are a helpful editor. Rephrase the given text in simple, human, layman language.
- Keep it friendly and concise (2-5 sentences).
- Avoid jargon and numerology slang; explain plainly.
- Keep the meaning intact.
- Output plain text only.
"""

_FOUNDATIONAL_INTRO = (
    "You are a Vedic numerologist. Based on the following foundational chart analysis, "
    "write a 2-4 sentence summary of the person's key strengths and challenges.\n\n"
)


def join_list(items: Sequence[str], conjunction: str = "and") -> str:
    """Join ``items`` as English prose with a serial comma."""

    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} {conjunction} {items[1]}"
    return f"{', '.join(items[:-1])}, {conjunction} {items[-1]}"


def format_day(day: date) -> str:
    return day.strftime("%d %b %Y")


def dasha_summary(reading: DynamicReading, *, max_yogas: int = 4, max_recurrences: int = 3) -> str:
    """Summarize an overlay reading in a few plain sentences."""

    language = reading.language
    layers = [f"{level.capitalize()} {number}" for level, number in reading.numbers.items()]
    parts = [
        f"For {format_day(reading.layers.moment)}, your active layers are "
        f"{join_list(layers) if layers else 'none'}."
    ]

    if reading.yogas:
        items = []
        for yoga in reading.yogas[:max_yogas]:
            label = get_text(yoga.entry.name, language) or "Yoga"
            if yoga.formed_by:
                label += f" (via {join_list(list(yoga.formed_by))})"
            items.append(label)
        parts.append(f"Newly formed yogas: {join_list(items)}.")
    else:
        parts.append("No new yogas arise solely from today’s overlays.")

    if reading.recurrences:
        items = [
            f"#{finding.digit} appears {finding.occurrences}× — {finding.influence}"
            for finding in reading.recurrences[:max_recurrences]
        ]
        parts.append(f"Recurring numbers influenced by dasha: {' | '.join(items)}")

    dominant = reading.dominant_number()
    if dominant is not None:
        parts.append(
            f"Overall tone today leans toward number {dominant}. "
            "Align plans with its qualities where possible."
        )
    return " ".join(parts)


def foundational_prompt(
    report: NumerologyReport, insights: Iterable[tuple[str, str]] = ()
) -> str:
    """Build the foundational-summary prompt; empty when there is nothing to say.

    ``insights`` are optional ``(title, text)`` pairs appended after the
    recurring-number section.
    """

    insights = list(insights)
    if not report.yogas and not report.recurrences and not insights:
        return ""

    language = report.language
    lines = [_FOUNDATIONAL_INTRO.rstrip("\n"), ""]
    if report.yogas:
        lines.append("Foundational Yogas Present:")
        for entry in report.yogas:
            payload = entry.to_payload(language)
            lines.append(f"- {payload['name']}: {payload['description']}")
    else:
        lines.append("No significant foundational yogas are present.")

    if report.recurrences:
        lines.extend(["", "Influence of Recurring Numbers:"])
        for finding in report.recurrences:
            lines.append(
                f"- Number {finding.digit} (appears {finding.occurrences} times): "
                f"{finding.influence}"
            )

    if insights:
        lines.extend(["", "Special Foundational Insights:"])
        lines.extend(f"- {title}: {text}" for title, text in insights)

    lines.append("")
    lines.append(f"User’s Basic Number: {report.basic}, Destiny Number: {report.destiny}.")
    lines.append(
        "Summarize the most important takeaways for the user in a gentle and empowering tone."
    )
    return "\n".join(lines)


def rephrase_prompt(text: str, locale: str = "en") -> str:
    return f"{REPHRASE_INSTRUCTIONS}\n\nLocale: {locale}\n\nOriginal:\n{text}\n\nLayman version:"
