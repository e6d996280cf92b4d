from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler

from .app import run_reformat, run_search
from .core import settings
from .core.errors import ConfigurationError
from .core.models import SearchConfig
from .data.roster_loader import load_names
from .ui.renderers import FORMATS, infer_format


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-s", "--students", type=int, default=None, metavar="COUNT", help="Number of students")
    p.add_argument(
        "-n",
        "--names",
        type=str,
        default=None,
        metavar="FILE",
        help="File containing names, one per line (overrides --students)",
    )
    p.add_argument("-r", "--rounds", type=int, default=None, metavar="ROUNDS", help="Number of rounds to perform")
    # If omitted, runs with a random seed. Pass an int to reproduce worker streams.
    p.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    p.add_argument("--workers", type=int, default=None, help="Concurrent search workers (default 4)")
    p.add_argument(
        "--duration",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Stop searching after this many seconds (default: run until interrupted)",
    )


def _add_output_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-o", "--output", type=str, default=None, metavar="FILE", help="File to output to (defaults to stdout)")
    p.add_argument("-f", "--format", type=str, default=None, choices=FORMATS, help="Format to output data")
    p.add_argument("-i", "--input", type=str, default=None, metavar="FILE", help="Re-format a JSON session file")
    p.add_argument("--no-color", action="store_true", help="Disable colored diagnostics")
    p.add_argument("--log-level", type=str, default=None, help="Log level (default INFO)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seat-rotation",
        description="Rotate students through groups of 3-4 while spreading out repeat pairings",
    )
    _add_search_args(parser)
    _add_output_args(parser)
    return parser


def _configure_logging(level: str, no_color: bool) -> None:
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"unknown log level '{level}'")
    console = Console(stderr=True, color_system=None if no_color else "auto")
    handler = RichHandler(console=console, show_path=False, log_time_format="[%X]")
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def _search_config(args: argparse.Namespace, names: list[str] | None) -> SearchConfig:
    participants = len(names) if names is not None else args.students
    if participants is None:
        raise ConfigurationError("either --students or --names is required")
    if args.rounds is None:
        raise ConfigurationError("--rounds is required when searching")
    if args.duration is not None and args.duration <= 0:
        raise ConfigurationError("--duration must be positive")
    workers = args.workers if args.workers is not None else settings.worker_count()
    return SearchConfig(participants=participants, rounds=args.rounds, workers=workers, seed=args.seed)


def run(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv`` and run; returns the process exit code."""

    args = build_parser().parse_args(argv)
    try:
        _configure_logging((args.log_level or settings.log_level()).upper(), args.no_color)
        fmt = infer_format(args.format, args.output)
        names = load_names(args.names) if args.names else None
        if args.input:
            run_reformat(args.input, names=names, fmt=fmt, output=args.output)
            return 0
        config = _search_config(args, names)
        best = run_search(
            config,
            names=names,
            fmt=fmt,
            output=args.output,
            duration=args.duration,
            no_color=args.no_color,
        )
    except ConfigurationError as exc:
        raise SystemExit(f"error: {exc}") from exc
    return 1 if best.is_empty else 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
