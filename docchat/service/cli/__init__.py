"""docchat command line interface (package entrypoint).

Wires argument parsing to the handlers in ``cli_actions``; performs no
conversation logic itself.
"""

from __future__ import annotations

import sys
from typing import Optional

from ...base.logging import configure_logger, get_logger
from .cli_actions import handle_backends, handle_run, plan_run
from .cli_parser import build_parser

_COMMANDS = {"run", "backends"}


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint; returns the process exit code."""
    p = build_parser()
    argv_list = list(sys.argv[1:] if argv is None else argv)
    # "run" is the default subcommand
    if not argv_list or (argv_list[0] not in _COMMANDS and argv_list[0] not in {"-h", "--help"}):
        argv_list = ["run"] + argv_list
    args = p.parse_args(argv_list)
    # Binds the shared handler to the current stderr
    get_logger("docchat.cli")
    if args.log_level:
        configure_logger(level=args.log_level)

    if args.cmd == "backends":
        return handle_backends(args)
    return handle_run(args)


__all__ = ["main", "plan_run"]
