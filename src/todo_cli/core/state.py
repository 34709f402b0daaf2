# src/todo_cli/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (config.Settings, or any namespace with the same fields in tests).
    settings: object

    task_store: TaskStore
    console: Console
