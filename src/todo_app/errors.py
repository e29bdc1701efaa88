# src/todo_app/errors.py

"""Exception taxonomy shared by the store and the command dispatcher."""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """Base class for every error the app reports to the user."""


class ArgumentError(TodoError):
    """Bad or missing CLI/prompt input. Nothing is mutated."""


class NotFoundError(TodoError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"No task with id {task_id}.")
        self.task_id = task_id


class StorageError(TodoError):
    """File I/O failure on the task file (fatal)."""

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


class ReadError(StorageError):
    pass


class WriteError(StorageError):
    pass
