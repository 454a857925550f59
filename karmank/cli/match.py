"""``match`` subcommand: Destiny-number compatibility of two birth dates."""

from __future__ import annotations

import argparse
import json

from ..errors import KarmAnkError
from ..numerology.compatibility import CompatibilityResult, compatibility
from ..numerology.report import compatibility_catalog_for
from .options import report_error, settings_from_args


def add_subparser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Register the ``match`` subcommand."""

    parser = sub.add_parser(
        "match",
        help="Compatibility of two people from their Destiny numbers",
        description="Compare two dates of birth using the compatibility catalog.",
    )
    parser.add_argument("--dob", required=True, help="First date of birth")
    parser.add_argument("--partner-dob", required=True, help="Second date of birth")
    parser.add_argument("--language", choices=("en", "hi", "en-hi"), help="Catalog text language")
    parser.add_argument("--json", action="store_true", help="Emit JSON output")
    parser.set_defaults(func=run)


def _format_text(result: CompatibilityResult) -> str:
    lines = [f"Destiny {result.first} with {result.second}", result.summary]
    for title, items in (
        ("Strengths", result.strengths),
        ("Frictions", result.frictions),
        ("Remedies", result.remedies),
    ):
        if items:
            lines.append(f"{title}:")
            lines.extend(f"  - {item}" for item in items)
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    try:
        settings = settings_from_args(args)
        result = compatibility(
            args.dob,
            args.partner_dob,
            compatibility_catalog_for(settings),
            settings.numerology.language,
        )
    except KarmAnkError as exc:
        return report_error(exc)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(_format_text(result))
    return 0
