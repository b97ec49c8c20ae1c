#!/usr/bin/env python3
"""
methodbench CLI -- check and time a single callable from the shell.

Usage:
  methodbench demo
  methodbench check TARGET [--arg LITERAL ...] --expect LITERAL
  methodbench time TARGET [--arg LITERAL ...] [--times N] [--coarse] [--verbose]

TARGET looks like ``package.module:Class.method`` or ``package.module:function``.
Arguments and expected values are Python literals (``42``, ``'text'``, ``[1, 2]``).
"""

from __future__ import annotations

import argparse
import ast
import logging
import sys
from pathlib import Path
from typing import Any

from methodbench.config import Settings, load_settings
from methodbench.demo import run_demo
from methodbench.domain.errors import MethodBenchError, VerdictFailure
from methodbench.domain.models import Resolution, expect
from methodbench.handle import resolve_path
from methodbench.presenter import get_presenter
from methodbench.tester import InvocationTester
from methodbench.timer import Timer

logger = logging.getLogger("methodbench")

EXIT_OK = 0
EXIT_VERDICT_FAILED = 1
EXIT_ERROR = 2


def _setup_logging(log_file: Path, level: str) -> None:
    """Configure file logging for the methodbench logger tree."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))

    for old in list(logger.handlers):
        if isinstance(old, logging.FileHandler):
            logger.removeHandler(old)
            old.close()
    logger.setLevel(level)
    logger.addHandler(handler)


def _literal(text: str) -> Any:
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError) as exc:
        msg = f"not a Python literal: {text!r} (quote strings, e.g. \"'abc'\")"
        raise argparse.ArgumentTypeError(msg) from exc


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_demo(args: argparse.Namespace, settings: Settings) -> int:
    """Run the sample fixture."""
    presenter = get_presenter(settings.presenter)
    run_demo(presenter, times=settings.times, resolution=settings.resolution)
    return EXIT_OK


def cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    """Run one value trial against TARGET."""
    handle = resolve_path(args.target)
    tester = InvocationTester(handle, get_presenter(settings.presenter))
    tester.print_header()
    verdict = tester.single_test(args.arg, expect(args.expect))
    if verdict.passed:
        return EXIT_OK
    logger.warning("check %s failed: %s", args.target, verdict.message)
    return EXIT_VERDICT_FAILED


def cmd_time(args: argparse.Namespace, settings: Settings) -> int:
    """Report the mean duration of TARGET."""
    handle = resolve_path(args.target)
    resolution = Resolution.COARSE if args.coarse else settings.resolution
    times = args.times if args.times is not None else settings.times
    timer = Timer(
        handle,
        get_presenter(settings.presenter),
        verbose=args.verbose or settings.verbose,
        summary=settings.summary,
    )
    timer.mean_time(args.arg, times, resolution)
    return EXIT_OK


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="methodbench",
        description="methodbench -- check and time a single callable",
    )
    parser.add_argument("--config", type=Path, default=None, help="Settings file (default: ./methodbench.yaml)")
    sub = parser.add_subparsers(dest="command")

    # methodbench demo
    sub.add_parser("demo", help="Run the bundled sample checks and timing")

    # methodbench check
    check_p = sub.add_parser("check", help="Check that TARGET returns a value")
    check_p.add_argument("target", help="module:Owner.operation")
    check_p.add_argument("--arg", type=_literal, action="append", default=[], help="Positional argument (repeatable)")
    check_p.add_argument("--expect", type=_literal, required=True, help="Expected return value")

    # methodbench time
    time_p = sub.add_parser("time", help="Measure the mean duration of TARGET")
    time_p.add_argument("target", help="module:Owner.operation")
    time_p.add_argument("--arg", type=_literal, action="append", default=[], help="Positional argument (repeatable)")
    time_p.add_argument("--times", type=int, default=None, help="Number of runs (default: from settings)")
    time_p.add_argument("--coarse", action="store_true", help="Millisecond wall clock instead of nanoseconds")
    time_p.add_argument("--verbose", action="store_true", help="Print every run")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {"demo": cmd_demo, "check": cmd_check, "time": cmd_time}
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        settings = load_settings(args.config)
        if settings.log_file is not None:
            _setup_logging(settings.log_file, settings.log_level)
        return command(args, settings)
    except VerdictFailure as exc:
        logger.warning("%s failed: %s", args.command, exc)
        return EXIT_VERDICT_FAILED
    except MethodBenchError as exc:
        logger.error("%s: %s", args.command, exc)
        print(f"methodbench: error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
