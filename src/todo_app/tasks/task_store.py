# src/todo_app/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterator
from datetime import date
from pathlib import Path

from ..errors import ArgumentError, NotFoundError, ReadError, WriteError
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

SORT_KEYS = ("priority", "due")


class TaskStore:
    """
    Ordered in-memory task collection backed by a JSON file.

    The file is a flat array of task objects; insertion order is the array order.

    Id policy:
    - next id = max(high-water mark, max existing id) + 1
    - the high-water mark never decreases while this object lives, so a removed
      id is not handed out again by the same store
    - the file does not carry the mark, so a fresh load recomputes it from the
      ids present (an empty file starts at 1 again)
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._last_id = max((t.id for t in self._tasks), default=0)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    # ---- persistence ----

    @classmethod
    def load(cls, path: str | Path) -> TaskStore:
        """Read the whole file. A missing file is an empty store; anything unparsable is ReadError."""
        path = Path(path)
        if not path.exists():
            logger.debug("Task file %s does not exist; starting empty.", path)
            return cls()

        try:
            raw = path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(path, "Cannot read task file") from e

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError is a ValueError; oversized ints and deep nesting are not.
            raise ReadError(path, f"Task file is not valid JSON ({getattr(e, 'msg', e)})") from e

        if not isinstance(data, list):
            raise ReadError(path, "Task file must contain a JSON array")

        tasks: list[Task] = []
        seen: set[int] = set()
        for i, entry in enumerate(data):
            try:
                task = Task.from_dict(entry)
            except ValueError as e:
                raise ReadError(path, f"Bad task entry #{i} ({e})") from e
            if task.id in seen:
                raise ReadError(path, f"Duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)

        logger.info("Loaded %d tasks from %s", len(tasks), path)
        return cls(tasks)

    def save(self, path: str | Path) -> None:
        """Overwrite the file with the full collection (temp file + os.replace)."""
        path = Path(path)
        payload = json.dumps([t.to_dict() for t in self._tasks], ensure_ascii=False, indent=2)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise WriteError(path, "Cannot write task file") from e
        logger.info("Saved %d tasks to %s", len(self._tasks), path)

    # ---- mutation ----

    def next_id(self) -> int:
        return max(self._last_id, max((t.id for t in self._tasks), default=0)) + 1

    def add(
        self,
        title: str,
        description: str | None = None,
        priority: Priority = Priority.MEDIUM,
        due_date: date | None = None,
    ) -> int:
        if not title or not title.strip():
            raise ArgumentError("Title is required.")

        task_id = self.next_id()
        self._tasks.append(
            Task(
                id=task_id,
                title=title.strip(),
                priority=priority,
                description=description,
                due_date=due_date,
            )
        )
        self._last_id = task_id
        logger.debug("Task added id=%s priority=%s due=%s", task_id, priority.value, due_date)
        return task_id

    def find(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise NotFoundError(task_id)

    def mark_done(self, task_id: int) -> Task:
        task = self.find(task_id)
        task.done = True
        logger.debug("Task %s marked done", task_id)
        return task

    def remove(self, task_id: int) -> Task:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[i]
                logger.debug("Task %s removed", task_id)
                return task
        raise NotFoundError(task_id)

    def set_priority(self, task_id: int, priority: Priority) -> Task:
        task = self.find(task_id)
        task.priority = priority
        logger.debug("Task %s priority -> %s", task_id, priority.value)
        return task

    # ---- queries ----

    def sorted_tasks(self, key: str | None = None) -> list[Task]:
        """
        Tasks in display order.

        key=None       -> store order
        key="priority" -> high first
        key="due"      -> earliest first, undated last
        Ties keep store order (sorted() is stable).
        """
        if key is None:
            return list(self._tasks)
        if key == "priority":
            return sorted(self._tasks, key=lambda t: -t.priority.rank)
        if key == "due":
            return sorted(self._tasks, key=lambda t: (t.due_date is None, t.due_date or date.min))
        raise ArgumentError(f"Unknown sort key {key!r} (expected {'|'.join(SORT_KEYS)}).")
