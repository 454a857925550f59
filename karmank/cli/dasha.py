"""``dasha`` subcommand: active periods and overlay results for a date."""

from __future__ import annotations

import argparse
import json
from datetime import date

from ..dasha.models import VIEWS
from ..dasha.overlay import DynamicReading
from ..errors import KarmAnkError
from ..narrative.gpt_api import GPTNarrativeClient, rephrase
from ..narrative.prompts import dasha_summary, format_day
from ..session import ReportSession
from .options import report_error, settings_from_args


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def add_subparser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register the ``dasha`` subcommand."""

    parser = sub.add_parser(
        "dasha",
        help="Active Maha/yearly/monthly/daily periods for a date",
        description=(
            "Resolve the dasha periods active on a date and report yogas and "
            "recurring numbers formed by overlaying them on the birth grid."
        ),
    )
    parser.add_argument("--dob", required=True, help="DD/MM/YYYY, DD-MM-YYYY or YYYY-MM-DD")
    parser.add_argument("--name", default="Native", help="Name shown in the report")
    parser.add_argument(
        "--date",
        type=_iso_date,
        default=None,
        help="Target date as YYYY-MM-DD (defaults to today)",
    )
    parser.add_argument("--view", choices=VIEWS, default="daily", help="Deepest layer to include")
    parser.add_argument("--language", choices=("en", "hi", "en-hi"), help="Catalog text language")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.add_argument(
        "--rephrase",
        action="store_true",
        help="Rephrase the summary through the text-generation backend",
    )
    parser.set_defaults(func=run)


def _format_text(reading: DynamicReading, summary: str) -> str:
    lines = [f"Dasha for {format_day(reading.layers.moment)} ({reading.view} view)"]
    for span in reading.layers.spans(reading.view):
        lines.append(
            f"  {span.level:8} {span.period_number}  "
            f"{span.start.isoformat()} .. {span.end.isoformat()}"
        )
    if reading.yogas:
        lines.append("New yogas:")
        for yoga in reading.yogas:
            payload = yoga.to_payload(reading.language)
            via = ", ".join(yoga.formed_by) or "combined layers"
            lines.append(f"  {payload['name']} (via {via})")
    if reading.recurrences:
        lines.append("Recurring numbers:")
        for finding in reading.recurrences:
            lines.append(f"  {finding.digit} x{finding.occurrences}: {finding.influence}")
    lines.append("")
    lines.append(summary)
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """Execute the dasha subcommand."""

    target = args.date or date.today()
    try:
        settings = settings_from_args(args)
        session = ReportSession(settings)
        session.submit(args.name, args.dob)
        reading = session.dynamic(target, args.view)
    except KarmAnkError as exc:
        return report_error(exc)

    summary = dasha_summary(reading)
    if args.rephrase:
        client = GPTNarrativeClient.from_settings(settings.narrative)
        summary = rephrase(
            client, summary, reading.language, temperature=settings.narrative.temperature
        )

    if args.json:
        payload = reading.to_dict()
        payload["summary"] = summary
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(_format_text(reading, summary))
    return 0
