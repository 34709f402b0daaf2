# src/todo_cli/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings (loaded once by the caller, or lazily here),
- wires the task store and the output console into AppState.
"""

from __future__ import annotations

import logging

from rich.console import Console

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, console: Console | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    task_store = TaskStore(
        settings.todo_file,
        default_format=settings.default_format,
        atomic_writes=settings.atomic_writes,
    )
    logger.debug("TaskStore ready path=%s atomic=%s", task_store.path, settings.atomic_writes)

    return AppState(
        settings=settings,
        task_store=task_store,
        console=console if console is not None else Console(),
    )
