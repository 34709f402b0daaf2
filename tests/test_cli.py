# tests/test_cli.py

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from todo_cli.cli.main import main
from todo_cli.config import Settings
from todo_cli.tasks.task_models import DONE_MARK
from todo_cli.tasks.task_store import TaskStore


def _run(settings: Settings, console: Console, *argv: str) -> int:
    return main(list(argv), settings=settings, console=console)


def _output(console: Console) -> str:
    return console.file.getvalue()


def _records(todo_file: Path) -> list[tuple[int, str, bool]]:
    return [(t.id, t.title, t.done) for t in TaskStore(todo_file).read().records]


def test_walkthrough(settings: Settings, console: Console, todo_file: Path) -> None:
    assert _run(settings, console, "add", "buy", "milk") == 0
    assert _records(todo_file) == [(1, "buy milk", False)]

    assert _run(settings, console, "add", "call mom") == 0
    assert _records(todo_file) == [(1, "buy milk", False), (2, "call mom", False)]

    assert _run(settings, console, "done", "1") == 0
    assert _records(todo_file) == [(1, "buy milk", True), (2, "call mom", False)]

    assert _run(settings, console, "delete", "2") == 0
    assert _records(todo_file) == [(1, "buy milk", True)]

    assert _run(settings, console, "clear") == 0
    assert _records(todo_file) == []


@pytest.mark.parametrize(
    "argv",
    [
        ["a", "x"],
        ["add", "x"],
    ],
)
def test_add_aliases(settings: Settings, console: Console, todo_file: Path, argv) -> None:
    assert _run(settings, console, *argv) == 0
    assert _records(todo_file) == [(1, "x", False)]


def test_add_with_date_and_url(settings: Settings, console: Console, todo_file: Path) -> None:
    assert _run(settings, console, "add", "read", "paper", "-d", "2024-05-01", "--url", "https://x.y") == 0

    task = TaskStore(todo_file).read().find(1)
    assert (task.title, task.date, task.url) == ("read paper", "2024-05-01", "https://x.y")
    assert "read paper" in _output(console)


def test_short_aliases_for_done_delete_clear(settings: Settings, console: Console, todo_file: Path) -> None:
    for title in ("a", "b", "c"):
        _run(settings, console, "add", title)

    assert _run(settings, console, "d", "1") == 0
    assert _run(settings, console, "del", "2") == 0
    assert _records(todo_file) == [(1, "a", True), (3, "c", False)]

    assert _run(settings, console, "cl") == 0
    assert _records(todo_file) == []


def test_list_hides_done_unless_all(settings: Settings, todo_file: Path) -> None:
    seed = Console(file=io.StringIO())
    _run(settings, seed, "add", "finished thing")
    _run(settings, seed, "add", "open thing")
    _run(settings, seed, "done", "1")

    for argv in (["list"], ["ls"], ["l"], []):
        console = Console(file=io.StringIO(), width=120)
        assert _run(settings, console, *argv) == 0
        out = _output(console)
        assert "open thing" in out
        assert "finished thing" not in out

    for argv in (["list", "--all"], ["ls", "-a"], ["-a"]):
        console = Console(file=io.StringIO(), width=120)
        assert _run(settings, console, *argv) == 0
        out = _output(console)
        assert "finished thing" in out
        assert DONE_MARK in out


def test_table_has_upper_case_headers(settings: Settings, console: Console) -> None:
    assert _run(settings, console, "list") == 0
    out = _output(console)
    for header in ("ID", "DATE", "TITLE", "URL", "DONE"):
        assert header in out


def test_titles_are_not_treated_as_markup(settings: Settings, console: Console) -> None:
    assert _run(settings, console, "add", "[bold]literal[/bold]") == 0
    assert "[bold]literal[/bold]" in _output(console)


def test_add_without_title_is_usage_error(settings: Settings, console: Console, todo_file: Path, capsys) -> None:
    assert _run(settings, console, "add") == 1
    assert "Please enter a title" in capsys.readouterr().err
    assert not todo_file.exists() or _records(todo_file) == []


def test_add_with_comma_is_rejected(settings: Settings, console: Console, todo_file: Path, capsys) -> None:
    assert _run(settings, console, "add", "milk,", "eggs") == 1
    assert "commas" in capsys.readouterr().err
    assert _records(todo_file) == []


@pytest.mark.parametrize("argv", [["done"], ["done", "1", "2"], ["delete"], ["del", "1", "2"]])
def test_wrong_id_count_is_usage_error(settings: Settings, console: Console, capsys, argv) -> None:
    assert _run(settings, console, *argv) == 1
    assert "Please specify one ID" in capsys.readouterr().err


@pytest.mark.parametrize("raw_id", ["abc", "²", "-1"])
def test_non_numeric_id_is_usage_error(settings: Settings, console: Console, capsys, raw_id) -> None:
    assert _run(settings, console, "done", raw_id) == 1
    assert "Invalid ID" in capsys.readouterr().err


def test_unknown_id_fails_without_saving(settings: Settings, console: Console, todo_file: Path, capsys) -> None:
    _run(settings, console, "add", "a")
    before = todo_file.read_text(encoding="utf-8")

    assert _run(settings, console, "delete", "9") == 1
    assert _run(settings, console, "done", "9") == 1
    assert "The specified ID does not exist" in capsys.readouterr().err
    assert todo_file.read_text(encoding="utf-8") == before


def test_unknown_command_exits_1(settings: Settings, console: Console, capsys) -> None:
    assert _run(settings, console, "frobnicate") == 1
    err = capsys.readouterr().err
    assert "usage: todo" in err
    assert "invalid choice" in err


def test_corrupt_file_exits_1(settings: Settings, console: Console, todo_file: Path, capsys) -> None:
    todo_file.parent.mkdir(parents=True, exist_ok=True)
    todo_file.write_text("id,date,title,url,done\n1,a,b\n", encoding="utf-8")

    assert _run(settings, console, "add", "x") == 1
    assert "expected 5 fields, got 3" in capsys.readouterr().err
    assert todo_file.read_text(encoding="utf-8") == "id,date,title,url,done\n1,a,b\n"


def test_io_error_exits_1(settings: Settings, console: Console, todo_file: Path, capsys) -> None:
    # A directory where the file should be makes open() fail.
    todo_file.mkdir(parents=True)

    assert _run(settings, console, "list") == 1
    assert capsys.readouterr().err.startswith("todo: ")


def test_version(settings: Settings, console: Console, capsys) -> None:
    assert _run(settings, console, "--version") == 0
    assert capsys.readouterr().out.startswith("todo ")


@pytest.mark.parametrize("title", ["a\u2028b", "page\x0cbreak"])
def test_add_with_line_boundary_is_rejected(
    settings: Settings, console: Console, todo_file: Path, capsys, title: str
) -> None:
    assert _run(settings, console, "add", title) == 1
    assert "line breaks" in capsys.readouterr().err

    assert _run(settings, console, "list") == 0
    assert _records(todo_file) == []
