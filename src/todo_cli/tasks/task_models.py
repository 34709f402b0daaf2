# src/todo_cli/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

logger = logging.getLogger(__name__)

DELIMITER = ","
DONE_MARK = "✓"

# Everything str.splitlines() treats as a line boundary.
LINE_BREAKS = frozenset("\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029")


class TaskStoreError(Exception):
    """Base class for everything the task store refuses to do."""


class TaskParseError(TaskStoreError):
    pass


class TaskValidationError(TaskStoreError):
    pass


class TaskNotFoundError(TaskStoreError):
    def __init__(self, task_id: int) -> None:
        super().__init__("The specified ID does not exist")
        self.task_id = task_id


class TaskFormat(StrEnum):
    """
    On-disk layout of a task file.

    Notes:
    - "full" is what fresh files get by default (id,date,title,url,done)
    - "simple" is the older three-column layout (id,title,done)
    """

    FULL = "full"
    SIMPLE = "simple"

    @property
    def headers(self) -> list[str]:
        if self is TaskFormat.SIMPLE:
            return ["id", "title", "done"]
        return ["id", "date", "title", "url", "done"]

    @classmethod
    def from_headers(cls, headers: list[str]) -> TaskFormat | None:
        for fmt in cls:
            if headers == fmt.headers:
                return fmt
        return None

    @classmethod
    def from_env(cls, raw: str | None) -> TaskFormat:
        if not raw:
            return cls.FULL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            logger.warning("Unknown task format %r; using %s", raw, cls.FULL.value)
            return cls.FULL


@dataclass(slots=True)
class Task:
    id: int
    title: str
    done: bool = False

    date: str = ""
    url: str = ""

    @property
    def done_mark(self) -> str:
        return DONE_MARK if self.done else ""

    def to_fields(self, fmt: TaskFormat) -> list[str]:
        values = {
            "id": str(self.id),
            "date": self.date,
            "title": self.title,
            "url": self.url,
            "done": self.done_mark,
        }
        return [values[h] for h in fmt.headers]

    def to_csv(self, fmt: TaskFormat) -> str:
        return DELIMITER.join(self.to_fields(fmt))


def _check_field(name: str, value: str) -> None:
    if DELIMITER in value or any(c in LINE_BREAKS for c in value):
        raise TaskValidationError(f"The {name} must not contain commas or line breaks")


@dataclass(slots=True)
class TaskList:
    """
    Every task in one file, in file order, plus the format its header names.

    Ids are unique. New ids are max(existing) + 1, so deleting the
    highest-id task and adding another hands that id out again.
    """

    fmt: TaskFormat = TaskFormat.FULL
    records: list[Task] = field(default_factory=list)

    @property
    def headers(self) -> list[str]:
        return self.fmt.headers

    def __len__(self) -> int:
        return len(self.records)

    def next_id(self) -> int:
        return max((t.id for t in self.records), default=0) + 1

    def find(self, task_id: int) -> Task | None:
        for t in self.records:
            if t.id == task_id:
                return t
        return None

    def visible(self, *, show_all: bool) -> list[Task]:
        if show_all:
            return list(self.records)
        return [t for t in self.records if not t.done]

    # ---- mutations ----

    def add(self, title: str, date: str = "", url: str = "") -> Task:
        if not title or not title.strip():
            raise TaskValidationError("Please enter a title")
        _check_field("title", title)
        _check_field("date", date)
        _check_field("url", url)
        if self.fmt is TaskFormat.SIMPLE and (date or url):
            raise TaskValidationError("This task file has no date/url columns")

        task = Task(id=self.next_id(), title=title, date=date, url=url)
        self.records.append(task)
        logger.debug("Task added id=%s title=%r", task.id, task.title)
        return task

    def delete(self, task_id: int) -> Task:
        for i, t in enumerate(self.records):
            if t.id == task_id:
                del self.records[i]
                logger.debug("Task deleted id=%s", task_id)
                return t
        raise TaskNotFoundError(task_id)

    def done(self, task_id: int) -> Task:
        task = self.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        task.done = True
        logger.debug("Task done id=%s", task_id)
        return task

    def clear(self) -> int:
        n = len(self.records)
        self.records = []
        logger.debug("Tasks cleared n=%s", n)
        return n
