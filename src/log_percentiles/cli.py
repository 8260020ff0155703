from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from log_percentiles.core.errors import InputAcquisitionError, PatternCompileError
from log_percentiles.core.models import EmphasisMode, RunConfig, SortOrder
from log_percentiles.core.pipeline import run
from log_percentiles.core.report import RunSummary

LOG_LEVEL_ENV = "LOG_PERCENTILES_LOG_LEVEL"


def _configure_logging() -> None:
    level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _use_color(choice: str, out: TextIO) -> bool:
    if choice == "always":
        return True
    if choice == "never":
        return False
    if os.getenv("NO_COLOR", "").strip():
        return False
    return bool(getattr(out, "isatty", lambda: False)())


def _print_summary(summary: RunSummary | None, err: TextIO) -> None:
    if summary is None:
        print("Found 0 samples", file=err)
        return
    print(f"Found {summary.count} samples", file=err)
    print(f"p50: {summary.p50}", file=err)
    print(f"p90: {summary.p90}", file=err)
    print(f"p99: {summary.p99}", file=err)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="log-percentiles",
        description="Highlight numbers captured from log lines by percentile band (p50/p90/p99).",
    )
    p.add_argument("pattern", help="Regex; group 1 (or the whole match) must be an unsigned integer")
    p.add_argument("-f", "--file", dest="input_path", default=None, help="Read this file instead of stdin (.gz ok)")

    emphasis = p.add_mutually_exclusive_group()
    emphasis.add_argument(
        "-b", "--bold", dest="emphasis", action="store_const", const=EmphasisMode.BOLD,
        help="Make every match bold, ignoring percentiles",
    )
    emphasis.add_argument(
        "--highlight", dest="emphasis", action="store_const", const=EmphasisMode.HIGHLIGHT,
        help="Highlight every match in one color, ignoring percentiles",
    )
    p.set_defaults(emphasis=EmphasisMode.PERCENTILE)

    order = p.add_mutually_exclusive_group()
    order.add_argument(
        "--sorting", type=SortOrder, choices=[SortOrder.ASC, SortOrder.DESC], default=SortOrder.NONE,
        metavar="{asc,desc}", help="Sort matching lines by captured number (drops non-matching lines)",
    )
    order.add_argument("--matching", action="store_true", help="Only print matching lines, in input order")

    p.add_argument("--color", choices=["auto", "always", "never"], default="auto", help="Default: auto (TTY only)")
    p.add_argument("--encoding", default="utf-8", help="Input encoding (undecodable bytes are replaced)")
    p.add_argument("--summary", action="store_true", help="Print sample count and percentiles to stderr")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    _configure_logging()

    try:
        config = RunConfig(
            pattern=args.pattern,
            emphasis=args.emphasis,
            sorting=args.sorting,
            matching_only=args.matching,
            color=_use_color(args.color, sys.stdout),
        )
        result = asyncio.run(run(config, input_path=args.input_path, encoding=args.encoding))
    except (PatternCompileError, InputAcquisitionError, LookupError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    if args.summary:
        _print_summary(result.summary, sys.stderr)


if __name__ == "__main__":
    main()
