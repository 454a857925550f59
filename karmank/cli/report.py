"""``report`` subcommand: the foundational numerology report."""

from __future__ import annotations

import argparse
import json

from ..errors import KarmAnkError
from ..narrative.gpt_api import GPTNarrativeClient, narrate
from ..narrative.prompts import foundational_prompt
from ..numerology.grid import GRID_LAYOUT
from ..numerology.report import NumerologyReport, build_report
from .options import report_error, settings_from_args


def add_subparser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register the ``report`` subcommand."""

    parser = sub.add_parser(
        "report",
        help="Foundational numbers, grid, yogas and recurring numbers",
        description="Compute the foundational numerology report for a name and date of birth.",
    )
    parser.add_argument("--name", required=True, help="Name of the person")
    parser.add_argument("--dob", required=True, help="DD/MM/YYYY, DD-MM-YYYY or YYYY-MM-DD")
    parser.add_argument("--language", choices=("en", "hi", "en-hi"), help="Catalog text language")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Print the summary prompt for the text-generation backend",
    )
    parser.add_argument(
        "--narrate",
        action="store_true",
        help="Send the prompt to the text-generation backend and print its reply",
    )
    parser.set_defaults(func=run)


def _format_text(report: NumerologyReport) -> str:
    histogram = report.grid.histogram
    lines = [
        f"{report.name}, born {report.birth.isoformat()}",
        f"Basic number: {report.basic}",
        f"Destiny number: {report.destiny}",
        "",
        "Grid:",
    ]
    for row in GRID_LAYOUT:
        cells = [str(digit) * histogram[digit] if histogram[digit] else "-" for digit in row]
        lines.append("  " + " | ".join(f"{cell:^5}" for cell in cells))
    lines.append("")
    lines.append("Planes:")
    for reading in report.planes.values():
        lines.append(f"  {reading.name:9} {reading.status.value}")
    lines.append("")
    lines.append("Yogas:" if report.yogas else "Yogas: none")
    for entry in report.yogas:
        payload = entry.to_payload(report.language)
        lines.append(f"  {payload['name']}: {payload['description']}")
    lines.append("Recurring numbers:" if report.recurrences else "Recurring numbers: none")
    for finding in report.recurrences:
        lines.append(f"  {finding.digit} x{finding.occurrences}: {finding.influence}")
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """Execute the report subcommand."""

    try:
        settings = settings_from_args(args)
        report = build_report(args.name, args.dob, settings=settings)
    except KarmAnkError as exc:
        return report_error(exc)

    want_narrative = args.narrate or settings.narrative.enabled
    prompt = foundational_prompt(report) if (args.prompt or want_narrative) else ""
    narrative = ""
    if want_narrative and prompt:
        client = GPTNarrativeClient.from_settings(settings.narrative)
        narrative = narrate(client, prompt, temperature=settings.narrative.temperature)

    if args.json:
        payload = report.to_dict()
        if args.prompt:
            payload["prompt"] = prompt
        if want_narrative:
            payload["narrative"] = narrative
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    print(_format_text(report))
    if args.prompt and prompt:
        print("\nPrompt:\n" + prompt)
    if narrative:
        print("\nNarrative:\n" + narrative)
    return 0
