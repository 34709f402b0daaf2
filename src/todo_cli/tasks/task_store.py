# src/todo_cli/tasks/task_store.py

from __future__ import annotations

import logging
import os
from pathlib import Path

from .task_models import DELIMITER, Task, TaskFormat, TaskList, TaskParseError

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Flat-file task store.

    The file is plain comma-delimited text:
    - first line: header naming the columns (id,date,title,url,done or id,title,done)
    - every other line: one task, fields in header order
    - no quoting or escaping

    Every call opens and closes the file itself; nothing is kept open
    between read() and save(). There is no locking, so two processes
    saving at the same time means the last writer wins.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        default_format: TaskFormat = TaskFormat.FULL,
        atomic_writes: bool = True,
    ) -> None:
        self._path = Path(path)
        self._default_format = default_format
        self._atomic_writes = atomic_writes
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    # ---- parsing / serialization ----

    def _error(self, lineno: int, message: str) -> TaskParseError:
        return TaskParseError(f"{self._path}:{lineno}: {message}")

    def parse(self, text: str) -> TaskList:
        # Records end at "\n" only; other Unicode line boundaries are plain text here.
        lines = [line.removesuffix("\r") for line in text.split("\n")]
        numbered = [(n, line) for n, line in enumerate(lines, start=1) if line.strip()]
        if not numbered:
            return TaskList(fmt=self._default_format)

        header_lineno, header_line = numbered[0]
        headers = [h.strip() for h in header_line.split(DELIMITER)]
        fmt = TaskFormat.from_headers(headers)
        if fmt is None:
            raise self._error(header_lineno, f"unrecognized header {header_line!r}")

        records: list[Task] = []
        seen: set[int] = set()
        for lineno, line in numbered[1:]:
            fields = line.split(DELIMITER)
            if len(fields) != len(headers):
                raise self._error(
                    lineno, f"expected {len(headers)} fields, got {len(fields)}"
                )
            row = dict(zip(headers, fields))

            raw_id = row["id"].strip()
            if not (raw_id.isascii() and raw_id.isdigit()) or int(raw_id) < 1:
                raise self._error(lineno, f"invalid id {raw_id!r}")
            task_id = int(raw_id)
            if task_id in seen:
                raise self._error(lineno, f"duplicate id {task_id}")
            seen.add(task_id)

            records.append(
                Task(
                    id=task_id,
                    title=row["title"],
                    done=bool(row["done"].strip()),
                    date=row.get("date", ""),
                    url=row.get("url", ""),
                )
            )

        return TaskList(fmt=fmt, records=records)

    @staticmethod
    def dump(task_list: TaskList) -> str:
        header = DELIMITER.join(task_list.headers)
        body = "\n".join(t.to_csv(task_list.fmt) for t in task_list.records)
        return f"{header}\n{body}"

    # ---- public API ----

    def read(self) -> TaskList:
        """Load the whole file, creating an empty one if it does not exist yet."""
        if not self._path.exists():
            self._path.touch()
            logger.info("Created task file %s", self._path)

        with open(self._path, encoding="utf-8") as f:
            text = f.read()

        task_list = self.parse(text)
        logger.debug(
            "Loaded %d tasks from %s (format=%s)", len(task_list), self._path, task_list.fmt
        )
        return task_list

    def save(self, task_list: TaskList, *, truncate: bool = True) -> None:
        """
        Rewrite the file with the whole list.

        With atomic writes the content goes to a sibling temp file which then
        replaces the task file. Otherwise the file is overwritten in place;
        truncate=False leaves any old bytes past the new end, which is only
        safe when the content did not shrink (add, done).
        """
        content = self.dump(task_list)

        if self._atomic_writes:
            tmp = self._path.with_name(self._path.name + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        else:
            mode = "w" if truncate or not self._path.exists() else "r+"
            with open(self._path, mode, encoding="utf-8") as f:
                f.write(content)
                f.flush()

        logger.debug(
            "Saved %d tasks to %s (atomic=%s truncate=%s)",
            len(task_list),
            self._path,
            self._atomic_writes,
            truncate,
        )
