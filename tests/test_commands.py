# tests/test_commands.py

from __future__ import annotations

from datetime import date

import pytest

from todo_app.cli.commands import (
    AddCommand,
    CommandRegistry,
    DoneCommand,
    HelpCommand,
    ListCommand,
    PriorityCommand,
    RemoveCommand,
    registry,
)
from todo_app.errors import ArgumentError, NotFoundError
from todo_app.tasks.task_models import Priority
from todo_app.tasks.task_store import TaskStore


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        (["add"], AddCommand()),
        (["list"], ListCommand()),
        (["ls", "Priority"], ListCommand(sort_by="priority")),
        (["list", "due"], ListCommand(sort_by="due")),
        (["done", "3"], DoneCommand(task_id=3)),
        (["DONE", "3"], DoneCommand(task_id=3)),
        (["remove", "12"], RemoveCommand(task_id=12)),
        (["rm", "1"], RemoveCommand(task_id=1)),
        (["priority", "1", "High"], PriorityCommand(task_id=1, priority=Priority.HIGH)),
        (["help"], HelpCommand()),
        (["--help"], HelpCommand()),
    ],
)
def test_parse_valid_commands(argv: list[str], expected) -> None:
    assert registry.parse(argv) == expected


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["frobnicate"],
        ["done"],
        ["done", "abc"],
        ["done", "0"],
        ["done", "-1"],
        ["done", "1", "2"],
        ["remove"],
        ["priority", "1"],
        ["priority", "x", "high"],
        ["priority", "1", "urgent"],
        ["list", "title"],
        ["add", "Buy milk"],
    ],
)
def test_parse_bad_input_falls_back_to_help_with_error(argv: list[str]) -> None:
    command = registry.parse(argv)
    assert isinstance(command, HelpCommand)
    assert command.error


def test_usage_lists_every_command() -> None:
    usage = registry.build_usage("todo")
    assert usage.startswith("Usage: todo <command>")
    for name in ("add", "list", "done", "remove", "priority", "help"):
        assert f"  {name}" in usage
    assert "aliases: rm" in usage


def test_registry_without_handler_rejects_command() -> None:
    reg = CommandRegistry()
    reg.register("noop", lambda args: ListCommand(), help_text="noop")
    with pytest.raises(ArgumentError):
        reg.execute(None, reg.parse(["noop"]))


def test_add_prompts_for_every_field(make_ctx, output) -> None:
    store = TaskStore()
    ctx = make_ctx(store, ["Write report", "Q3 numbers", "high", "22-12-2024"])

    assert registry.execute(ctx, AddCommand()) is True

    task = store.find(1)
    assert task.title == "Write report"
    assert task.description == "Q3 numbers"
    assert task.priority is Priority.HIGH
    assert task.due_date == date(2024, 12, 22)
    assert task.done is False
    assert output.lines[-1] == "Task 1 added."


def test_add_blank_optionals_and_default_priority(make_ctx) -> None:
    store = TaskStore()
    ctx = make_ctx(store, ["Buy milk", "", "", ""])
    registry.execute(ctx, AddCommand())

    task = store.find(1)
    assert task.description is None
    assert task.priority is Priority.MEDIUM
    assert task.due_date is None


def test_add_reprompts_on_invalid_input(make_ctx, output) -> None:
    store = TaskStore()
    ctx = make_ctx(store, ["", "Buy milk", "", "urgent", "low", "2024-12-22", "01-02-2025"])
    registry.execute(ctx, AddCommand())

    task = store.find(1)
    assert task.title == "Buy milk"
    assert task.priority is Priority.LOW
    assert task.due_date == date(2025, 2, 1)
    assert "Title required." in output.lines
    assert any("Invalid priority" in line for line in output.lines)
    assert any("Invalid date" in line for line in output.lines)


def test_add_aborts_without_mutation_when_input_ends(make_ctx) -> None:
    store = TaskStore()
    ctx = make_ctx(store, ["Buy milk"])
    with pytest.raises(ArgumentError):
        registry.execute(ctx, AddCommand())
    assert len(store) == 0


def test_list_empty_store_prints_no_task_lines(make_ctx, output) -> None:
    assert registry.execute(make_ctx(TaskStore()), ListCommand()) is False
    assert output.lines == ["No tasks."]


def test_list_shows_fields_in_store_order(make_ctx, output) -> None:
    store = TaskStore()
    store.add("Buy milk", priority=Priority.LOW)
    store.add("Write report", description="Q3 numbers", priority=Priority.HIGH, due_date=date(2024, 12, 22))
    store.mark_done(1)

    registry.execute(make_ctx(store), ListCommand())

    assert len(output.lines) == 2
    first, second = output.lines
    assert first.startswith("  1. [x] Buy milk")
    assert "priority: low" in first and "due: -" in first and "done" in first
    assert second.startswith("  2. [ ] Write report")
    assert "priority: high" in second and "due: 22-12-2024" in second and "open" in second
    assert second.endswith("Q3 numbers")


def test_list_sorted_by_priority(make_ctx, output, store) -> None:
    registry.execute(make_ctx(store), ListCommand(sort_by="priority"))
    assert "Write report" in output.lines[0]
    assert "Buy milk" in output.lines[1]


def test_done_remove_priority_report_success(make_ctx, output, store) -> None:
    ctx = make_ctx(store)

    assert registry.execute(ctx, DoneCommand(task_id=1)) is True
    assert registry.execute(ctx, DoneCommand(task_id=1)) is False
    assert registry.execute(ctx, PriorityCommand(task_id=1, priority=Priority.HIGH)) is True
    assert registry.execute(ctx, RemoveCommand(task_id=2)) is True

    assert output.lines == [
        "Task 1 marked as done.",
        "Task 1 is already done.",
        "Task 1 priority set to high.",
        "Task 2 removed.",
    ]
    assert [t.id for t in store] == [1]


@pytest.mark.parametrize(
    "command",
    [DoneCommand(task_id=9), RemoveCommand(task_id=9), PriorityCommand(task_id=9, priority=Priority.LOW)],
)
def test_handlers_raise_not_found_for_unknown_id(make_ctx, store, command) -> None:
    with pytest.raises(NotFoundError, match="No task with id 9"):
        registry.execute(make_ctx(store), command)
    assert len(store) == 2
