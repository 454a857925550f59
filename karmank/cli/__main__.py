"""Entry point for the KarmAnk CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from ..boot.logging import configure_logging
from . import dasha, match, report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="karmank", description="KarmAnk numerology CLI")
    parser.add_argument("--config", metavar="PATH", help="Settings YAML file to load")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (repeat for debug output)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    report.add_subparser(sub)
    dasha.add_subparser(sub)
    match.add_subparser(sub)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(verbosity=args.verbose)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
