# tests/conftest.py

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from todo_cli.config import Settings
from todo_cli.tasks.task_models import TaskFormat
from todo_cli.tasks.task_store import TaskStore


@pytest.fixture()
def todo_file(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".todo"


@pytest.fixture()
def settings(todo_file: Path) -> Settings:
    """
    Real Settings pointed at a tmp file.

    Built directly instead of via from_env() so tests never depend on the
    developer's environment or ~/.todo.
    """
    return Settings(
        todo_file=todo_file,
        default_format=TaskFormat.FULL,
        atomic_writes=True,
        log_level="WARNING",
        log_file=None,
    )


@pytest.fixture()
def store(todo_file: Path) -> TaskStore:
    return TaskStore(todo_file)


@pytest.fixture()
def console() -> Console:
    """Wide, colorless console writing into a buffer (read it via console.file.getvalue())."""
    return Console(file=io.StringIO(), width=120, color_system=None, force_terminal=False)
