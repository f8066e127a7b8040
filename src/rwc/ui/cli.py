"""Command line entry point: print counts of various things in files."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Optional, TextIO

from rwc import __version__
from rwc.common.config import DEFAULT_PROFILE, load_runtime_config
from rwc.common.errors import BackendError
from rwc.common.logging_setup import setup_logging
from rwc.common.models import CountOptions, OutputFormat
from rwc.core import Aggregator, resolve_sources
from .render import Labels, write_report

PROG = "rwc"
EXIT_OK = 0
EXIT_FAILURE = 1
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Print counts of various things in <files>.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-b", "--bytes", action="store_true", help="Print byte counts.")
    parser.add_argument("-c", "--chars", action="store_true", help="Print utf-8 character counts.")
    parser.add_argument(
        "-w",
        "--words",
        action="store_true",
        help=(
            "Print word counts. A word is a non-zero-length sequence of non-whitespace "
            "characters delimited by ascii whitespace."
        ),
    )
    parser.add_argument("-l", "--lines", action="store_true", help="Print newline counts.")
    parser.add_argument(
        "--show-totals",
        action="store_true",
        help="Include an extra row showing count totals.",
    )
    parser.add_argument(
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output format (default taken from the config profile, normally 'table').",
    )
    parser.add_argument(
        "--files0-from",
        metavar="F",
        help=(
            "Read input from the files specified by null separated paths in F. "
            "If F is - then read \\n separated paths from standard input."
        ),
    )
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE,
        help="Config profile controlling read sizes (default: %(default)s).",
    )
    parser.add_argument("--config", help="Alternate configuration JSON file.")
    parser.add_argument(
        "--progress-log",
        help="Optional JSONL file receiving one record per counted source.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostics level written to stderr (default from config, normally WARNING).",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Files to read. If no paths are provided then read standard input.",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> CountOptions:
    return CountOptions.from_flags(
        bytes=args.bytes,
        chars=args.chars,
        words=args.words,
        lines=args.lines,
        show_totals=args.show_totals,
    )


def command_count(args: argparse.Namespace, stdin: BinaryIO, stdout: TextIO) -> int:
    runtime = load_runtime_config(
        profile=args.profile,
        config_path=Path(args.config) if args.config else None,
    )
    setup_logging(args.log_level or runtime.global_settings.log_level)

    options = options_from_args(args)
    fmt = OutputFormat.parse(args.format or runtime.global_settings.default_format)
    sources = resolve_sources(args.files, args.files0_from, stdin)
    logger.debug("counting %d source(s) with profile '%s'", len(sources), args.profile)

    aggregator = Aggregator.from_config(
        runtime,
        progress_log=Path(args.progress_log) if args.progress_log else None,
    )
    result = aggregator.run(sources, compute_totals=options.show_totals)
    labels = Labels(
        stdin=runtime.global_settings.stdin_label,
        totals=runtime.global_settings.totals_label,
    )
    write_report(fmt, result, options, stdout, labels)
    return EXIT_FAILURE if result.has_failures else EXIT_OK


def main(
    argv: Optional[list[str]] = None,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return command_count(
            args,
            stdin if stdin is not None else sys.stdin.buffer,
            stdout if stdout is not None else sys.stdout,
        )
    except BackendError as exc:
        print(f"{PROG}: {exc.message}", file=sys.stderr)
        return EXIT_FAILURE


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
