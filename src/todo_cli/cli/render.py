# src/todo_cli/cli/render.py

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..tasks.task_models import TaskList

_CENTERED = {"id", "date", "done"}


def build_table(task_list: TaskList, *, show_all: bool) -> Table:
    """Aligned table of the list; completed tasks only appear with show_all."""
    table = Table(show_header=True, header_style="bold")
    for h in task_list.headers:
        table.add_column(h.upper(), justify="center" if h in _CENTERED else "left")

    for task in task_list.visible(show_all=show_all):
        # Text() keeps user input literal; plain strings would be parsed as rich markup.
        table.add_row(*(Text(v) for v in task.to_fields(task_list.fmt)))
    return table


def print_list(console: Console, task_list: TaskList, *, show_all: bool = False) -> None:
    console.print(build_table(task_list, show_all=show_all))
