"""Command line entry point."""

from __future__ import annotations

import argparse
from enum import Enum
from typing import Optional, Sequence

from plotmon.app import run
from plotmon.filter import FilterOpts
from plotmon.logs import Logs


class Mode(str, Enum):
    """Display mode."""

    TUI = "tui"
    GUI = "gui"


def names_from_arg(arg: Optional[str]) -> Optional[list[str]]:
    """Split a comma separated list of names."""
    return None if arg is None else arg.split(",")


def _non_negative_int(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise argparse.ArgumentTypeError(f"invalid non-negative integer: {text!r}")
    return int(digits)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the command."""
    parser = argparse.ArgumentParser(
        prog="plotmon", description="Simple TUI to monitor logs from JSONL files"
    )
    parser.add_argument("path", help="path to the JSONL file")
    parser.add_argument(
        "-m",
        "--mode",
        choices=[mode.value for mode in Mode],
        default=Mode.TUI.value,
        help="display mode (default: %(default)s)",
    )
    parser.add_argument(
        "-e",
        "--except",
        dest="exclude",
        help="filter out entries from the logs (comma separated)",
    )
    parser.add_argument(
        "-o", "--only", help="only include log entries with these names (comma separated)"
    )
    parser.add_argument("--min-epoch", type=_non_negative_int, help="minimum epoch to display")
    parser.add_argument("--max-epoch", type=_non_negative_int, help="maximum epoch to display")
    parser.add_argument(
        "--max", type=float, help="maximum value on the y axis (default: from the data)"
    )
    parser.add_argument(
        "--min", type=float, help="minimum value on the y axis (default: from the data)"
    )
    parser.add_argument(
        "--span",
        type=_non_negative_int,
        help="maximum span to display from the end of the logs",
    )
    parser.add_argument("-V", "--version", action="version", version="%(prog)s 0.1.0")
    return parser


def _as_float(value: Optional[int]) -> Optional[float]:
    return None if value is None else float(value)


def filter_from_args(args: argparse.Namespace) -> FilterOpts:
    """Build the filter parameters from parsed arguments."""
    return FilterOpts(
        only=names_from_arg(args.only),
        exclude=names_from_arg(args.exclude),
        min_x=_as_float(args.min_epoch),
        max_x=_as_float(args.max_epoch),
        max_y=args.max,
        min_y=args.min,
        span=_as_float(args.span),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command with ``argv`` (the process arguments by default)."""
    parser = build_parser()
    args = parser.parse_args(argv)
    opts = filter_from_args(args)
    mode = Mode(args.mode)
    if mode is Mode.GUI:
        parser.error("gui mode is not supported")
    try:
        logs = Logs(args.path, opts)
    except ValueError as err:
        parser.error(str(err))
    with logs:
        run(logs)
    return 0