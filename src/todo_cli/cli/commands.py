# src/todo_cli/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.state import AppState
from .render import print_list

CommandHandler = Callable[[AppState, argparse.Namespace], None]
ParserSetup = Callable[[argparse.ArgumentParser], None]

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Bad command line. `usage` (if set) is printed before the message."""

    def __init__(self, message: str, usage: str | None = None) -> None:
        super().__init__(message)
        self.usage = usage


@dataclass(slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    aliases: list[str] = field(default_factory=list)
    setup: ParserSetup | None = None


class CommandRegistry:
    """Subcommand registry: names, aliases and handlers, turned into argparse subparsers."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._aliases: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        setup: ParserSetup | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._commands[key] = Command(key, handler, help_text, [a.lower() for a in aliases], setup)
        self._aliases[key] = key
        for alias in aliases:
            self._aliases[alias.lower()] = key

    def resolve(self, name: str) -> Command | None:
        key = self._aliases.get(name.lower())
        return self._commands.get(key) if key else None

    def commands(self) -> list[Command]:
        return list(self._commands.values())

    def add_subparsers(self, parser: argparse.ArgumentParser) -> None:
        sub = parser.add_subparsers(dest="command", metavar="<command>")
        for cmd in self.commands():
            p = sub.add_parser(
                cmd.name,
                aliases=cmd.aliases,
                help=cmd.help_text,
                description=cmd.help_text,
            )
            if cmd.setup is not None:
                cmd.setup(p)
            p.set_defaults(handler=cmd.handler)

    def build_help(self) -> str:
        lines = ["Commands:"]
        for cmd in self.commands():
            names = ", ".join([cmd.name, *cmd.aliases])
            lines.append(f"  {names:<16} {cmd.help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _single_id(raw_ids: list[str]) -> int:
    if len(raw_ids) != 1:
        raise UsageError("Please specify one ID")
    raw = raw_ids[0].strip()
    if not (raw.isascii() and raw.isdigit()):
        raise UsageError(f"Invalid ID: {raw_ids[0]!r}")
    return int(raw)


def cmd_list(state: AppState, args: argparse.Namespace) -> None:
    task_list = state.task_store.read()
    print_list(state.console, task_list, show_all=bool(getattr(args, "all", False)))


def cmd_add(state: AppState, args: argparse.Namespace) -> None:
    words = list(getattr(args, "text", None) or [])
    if not words:
        raise UsageError("Please enter a title")
    title = " ".join(words)

    task_list = state.task_store.read()
    task = task_list.add(title, date=args.date or "", url=args.url or "")
    state.task_store.save(task_list, truncate=False)
    logger.info("Added task id=%s", task.id)
    print_list(state.console, task_list)


def cmd_delete(state: AppState, args: argparse.Namespace) -> None:
    task_id = _single_id(args.ids)
    task_list = state.task_store.read()
    task_list.delete(task_id)
    state.task_store.save(task_list, truncate=True)
    logger.info("Deleted task id=%s", task_id)
    print_list(state.console, task_list)


def cmd_done(state: AppState, args: argparse.Namespace) -> None:
    task_id = _single_id(args.ids)
    task_list = state.task_store.read()
    task_list.done(task_id)
    state.task_store.save(task_list, truncate=False)
    logger.info("Completed task id=%s", task_id)
    print_list(state.console, task_list)


def cmd_clear(state: AppState, args: argparse.Namespace) -> None:
    task_list = state.task_store.read()
    n = task_list.clear()
    state.task_store.save(task_list, truncate=True)
    logger.info("Cleared %d tasks", n)
    print_list(state.console, task_list)


def _setup_list(p: argparse.ArgumentParser) -> None:
    p.add_argument("-a", "--all", action="store_true", help="Show all TODOs")


def _setup_add(p: argparse.ArgumentParser) -> None:
    p.add_argument("text", nargs="*", help="Title of the TODO")
    p.add_argument("-d", "--date", default="", help="Date")
    p.add_argument("-u", "--url", default="", help="URL")


def _setup_id(p: argparse.ArgumentParser) -> None:
    p.add_argument("ids", nargs="*", metavar="id", help="TODO id")


registry.register(
    "list", cmd_list, help_text="Show all TODOs", aliases=["ls", "l"], setup=_setup_list
)
registry.register("add", cmd_add, help_text="Add a TODO", aliases=["a"], setup=_setup_add)
registry.register(
    "delete",
    cmd_delete,
    help_text="Delete a TODO with a specified ID",
    aliases=["del"],
    setup=_setup_id,
)
registry.register(
    "done",
    cmd_done,
    help_text="Complete the TODO for the specified ID",
    aliases=["d"],
    setup=_setup_id,
)
registry.register("clear", cmd_clear, help_text="Delete all TODOs", aliases=["cl"])
