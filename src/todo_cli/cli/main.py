# src/todo_cli/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, parses the command line and runs
exactly one subcommand. Returns the process exit status.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console

from .. import __version__
from ..cli.bootstrap import create_initial_state
from ..cli.commands import UsageError, cmd_list, registry
from ..config import get_settings
from ..logging_setup import setup_logging
from ..tasks.task_models import TaskStoreError

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    # argparse exits with status 2 on bad input; we report usage errors as 1.
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(f"{self.prog}: error: {message}", usage=self.format_usage())


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="todo",
        usage="todo [sub command] [args]",
        description="Keep a short list of TODOs in a text file in your home directory.",
        epilog=registry.build_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-a", "--all", action="store_true", help="Show all TODOs")
    # Bare `todo` lists.
    parser.set_defaults(handler=cmd_list)
    registry.add_subparsers(parser)
    return parser


def main(argv: list[str] | None = None, *, settings=None, console: Console | None = None) -> int:
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(console_level=console_level, log_file=getattr(settings, "log_file", None))

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        state = create_initial_state(settings=settings, console=console)
        logger.debug("Running command=%s", args.command or "list")
        args.handler(state, args)
    except SystemExit as e:
        # --help / --version
        return e.code if isinstance(e.code, int) else 0
    except UsageError as e:
        if e.usage:
            print(e.usage, end="", file=sys.stderr)
        print(e, file=sys.stderr)
        return 1
    except TaskStoreError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        print(f"todo: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
