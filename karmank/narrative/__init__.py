"""Narrative text: deterministic summaries and optional rephrasing."""

from __future__ import annotations

from .gpt_api import GPTNarrativeClient, PromptSlot, narrate, rephrase
from .prompts import (
    REPHRASE_INSTRUCTIONS,
    dasha_summary,
    format_day,
    foundational_prompt,
    join_list,
    rephrase_prompt,
)

__all__ = [
    "GPTNarrativeClient",
    "PromptSlot",
    "narrate",
    "rephrase",
    "REPHRASE_INSTRUCTIONS",
    "dasha_summary",
    "format_day",
    "foundational_prompt",
    "join_list",
    "rephrase_prompt",
]
