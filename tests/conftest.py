# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_app.cli.commands import CommandContext
from todo_app.tasks.task_models import Priority
from todo_app.tasks.task_store import TaskStore

from .fakes import Output, ScriptedPrompt


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with cli.main.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="todo",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path / "data",
        data_file=tmp_path / "tasks.json",
        date_format="%d-%m-%Y",
    )


@pytest.fixture()
def store() -> TaskStore:
    """Two tasks: id=1 Low, id=2 High."""
    s = TaskStore()
    s.add("Buy milk", priority=Priority.LOW)
    s.add("Write report", priority=Priority.HIGH)
    return s


@pytest.fixture()
def output() -> Output:
    return Output()


@pytest.fixture()
def make_ctx(output: Output):
    def _make(store: TaskStore, answers=()) -> CommandContext:
        return CommandContext(store=store, prompt=ScriptedPrompt(answers), out=output)

    return _make
