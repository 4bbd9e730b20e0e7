"""Argument parsing for ``docchat-cli``; handlers live in ``cli_actions``."""

from __future__ import annotations

import argparse
from pathlib import Path

from ...config.defaults import CLI_PROG

_TRUE_WORDS = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"0", "false", "f", "no", "n", "off"})


def _flag_value(raw: str | None) -> bool:
    """Parse the optional value of ``--stream``; a bare flag means true."""
    if raw is None:
        return True
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {raw!r}")


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """``--stream [BOOL]`` and ``--no-stream``; unset leaves the configured default."""
    toggle = parser.add_mutually_exclusive_group()
    toggle.add_argument("--stream", nargs="?", const=True, type=_flag_value, default=None)
    toggle.add_argument("--no-stream", dest="stream", action="store_false")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=CLI_PROG,
        description="Send an annotated document to a chat backend. Without --execute only the request is printed.",
    )
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    commands = parser.add_subparsers(dest="cmd")

    run = commands.add_parser("run", parents=[shared], help="Show or execute the request for a document (default)")
    run.add_argument("path", type=Path)
    run.add_argument("--bounds", type=Path, default=None, help="bounds sidecar (default PATH.bounds.json)")
    run.add_argument("--cursor", type=int, default=None)
    run.add_argument("--backend", default=None)
    run.add_argument("--model", default=None)
    add_stream_flags(run)
    run.add_argument("--temperature", type=float, default=None)
    run.add_argument("--max-tokens", type=int, default=None)
    run.add_argument("--max-entries", type=int, default=None)
    run.add_argument("--execute", action="store_true", help="send the request and print the reply")
    run.add_argument("--json", action="store_true", help="print a JSON result instead of streaming text")

    listing = commands.add_parser("backends", parents=[shared], help="List registered backends")
    listing.add_argument("--json", action="store_true")
    return parser


__all__ = ["build_parser", "add_stream_flags"]
