# src/todo_app/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import cast
from datetime import date

from ..errors import ArgumentError
from ..tasks.task_models import DEFAULT_DATE_FORMAT, Priority, Task, format_due_date, parse_due_date
from ..tasks.task_store import SORT_KEYS, TaskStore

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Emitter = Callable[[str], None]


# ---- parsed commands ----


@dataclass(frozen=True, slots=True)
class AddCommand:
    pass


@dataclass(frozen=True, slots=True)
class ListCommand:
    sort_by: str | None = None


@dataclass(frozen=True, slots=True)
class DoneCommand:
    task_id: int


@dataclass(frozen=True, slots=True)
class RemoveCommand:
    task_id: int


@dataclass(frozen=True, slots=True)
class PriorityCommand:
    task_id: int
    priority: Priority


@dataclass(frozen=True, slots=True)
class HelpCommand:
    # None for an explicit `help`; otherwise why the input was rejected.
    error: str | None = None


Command = AddCommand | ListCommand | DoneCommand | RemoveCommand | PriorityCommand | HelpCommand
CommandParser = Callable[[list[str]], Command]


@dataclass(slots=True)
class CommandContext:
    """Everything a handler may touch. The store is the only mutable piece."""

    store: TaskStore
    prompt: Prompt = input
    out: Emitter = print
    date_format: str = DEFAULT_DATE_FORMAT


CommandHandler = Callable[[CommandContext, Command], bool]


@dataclass(slots=True)
class _Entry:
    name: str
    parser: CommandParser
    usage: str
    help_text: str
    aliases: list[str] = field(default_factory=list)


class CommandRegistry:
    """
    Sub-command registry: argv -> Command -> handler.

    Parsing never raises: bad input becomes HelpCommand(error=...), so callers can
    print usage and exit without touching the store.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._by_name: dict[str, _Entry] = {}
        self._handlers: dict[type, CommandHandler] = {}

    def register(
        self,
        name: str,
        parser: CommandParser,
        help_text: str,
        *,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        entry = _Entry(name=name.lower(), parser=parser, usage=usage, help_text=help_text, aliases=aliases)
        self._entries[entry.name] = entry
        self._by_name[entry.name] = entry
        for alias in aliases:
            self._by_name[alias.lower()] = entry

    def handles(self, command_type: type, handler: CommandHandler) -> None:
        self._handlers[command_type] = handler

    def parse(self, argv: list[str]) -> Command:
        if not argv:
            return HelpCommand(error="No command given.")

        name = argv[0].lower()
        entry = self._by_name.get(name)
        if entry is None:
            return HelpCommand(error=f"Unknown command: {argv[0]}")

        try:
            return entry.parser(list(argv[1:]))
        except ArgumentError as e:
            logger.debug("Rejected argv=%s: %s", argv, e)
            return HelpCommand(error=f"{entry.name}: {e}")

    def execute(self, ctx: CommandContext, command: Command) -> bool:
        """Run the handler for `command`. Returns True if the store was changed."""
        handler = self._handlers.get(type(command))
        if handler is None:
            raise ArgumentError(f"No handler for {type(command).__name__}")
        return handler(ctx, command)

    def build_usage(self, prog: str = "todo") -> str:
        lines = [f"Usage: {prog} <command> [id] [priority]", "", "Commands:"]
        rows = [(f"{e.name} {e.usage}".strip(), e) for e in self._entries.values()]
        width = max((len(left) for left, _ in rows), default=0)
        for left, e in rows:
            alias_str = f" (aliases: {', '.join(e.aliases)})" if e.aliases else ""
            lines.append(f"  {left.ljust(width)}  {e.help_text}{alias_str}")
        return "\n".join(lines)


# ---- argument parsers ----


def _parse_id(raw: str) -> int:
    token = raw.strip()
    if not token.isdecimal() or int(token) < 1:
        raise ArgumentError(f"Invalid id {raw!r} (expected a positive number).")
    return int(token)


def _expect(args: list[str], count: int, usage: str) -> None:
    if len(args) < count:
        raise ArgumentError(f"missing argument (usage: {usage})")
    if len(args) > count:
        raise ArgumentError(f"too many arguments (usage: {usage})")


def parse_add(args: list[str]) -> Command:
    # Fields are prompted for interactively.
    _expect(args, 0, "add")
    return AddCommand()


def parse_list(args: list[str]) -> Command:
    if len(args) > 1:
        raise ArgumentError("too many arguments (usage: list [priority|due])")
    if not args:
        return ListCommand()
    key = args[0].lower()
    if key not in SORT_KEYS:
        raise ArgumentError(f"Unknown sort key {args[0]!r} (expected {'|'.join(SORT_KEYS)}).")
    return ListCommand(sort_by=key)


def parse_done(args: list[str]) -> Command:
    _expect(args, 1, "done <id>")
    return DoneCommand(task_id=_parse_id(args[0]))


def parse_remove(args: list[str]) -> Command:
    _expect(args, 1, "remove <id>")
    return RemoveCommand(task_id=_parse_id(args[0]))


def parse_priority(args: list[str]) -> Command:
    _expect(args, 2, "priority <id> <low|medium|high>")
    return PriorityCommand(task_id=_parse_id(args[0]), priority=Priority.parse(args[1]))


def parse_help(args: list[str]) -> Command:
    return HelpCommand()


# ---- interactive input ----


def _ask(ctx: CommandContext, prompt: str) -> str:
    try:
        return ctx.prompt(prompt).strip()
    except EOFError:
        raise ArgumentError("Input ended before the task was complete.") from None


def _ask_title(ctx: CommandContext) -> str:
    while True:
        title = _ask(ctx, "Task title: ")
        if title:
            return title
        ctx.out("Title required.")


def _ask_priority(ctx: CommandContext) -> Priority:
    while True:
        raw = _ask(ctx, "Priority (low/medium/high) [medium]: ")
        if not raw:
            return Priority.MEDIUM
        try:
            return Priority.parse(raw)
        except ArgumentError as e:
            ctx.out(str(e))


def _ask_due_date(ctx: CommandContext) -> date | None:
    # Blank means "no due date"; a malformed date re-prompts rather than defaulting.
    example = date(2024, 12, 22).strftime(ctx.date_format)
    while True:
        raw = _ask(ctx, f"Due date (e.g. {example}, blank for none): ")
        if not raw:
            return None
        try:
            return parse_due_date(raw, ctx.date_format)
        except ArgumentError as e:
            ctx.out(str(e))


# ---- handlers ----


def cmd_add(ctx: CommandContext, command: Command) -> bool:
    title = _ask_title(ctx)
    description = _ask(ctx, "Description (optional): ") or None
    priority = _ask_priority(ctx)
    due_date = _ask_due_date(ctx)

    task_id = ctx.store.add(title, description=description, priority=priority, due_date=due_date)
    ctx.out(f"Task {task_id} added.")
    return True


def format_task(task: Task, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    mark = "x" if task.done else " "
    line = (
        f"{task.id:>3}. [{mark}] {task.title}"
        f"  (priority: {task.priority.value}, due: {format_due_date(task.due_date, date_format)},"
        f" {'done' if task.done else 'open'})"
    )
    if task.description:
        line += f"\n       {task.description}"
    return line


def cmd_list(ctx: CommandContext, command: Command) -> bool:
    command = cast(ListCommand, command)
    tasks = ctx.store.sorted_tasks(command.sort_by)
    if not tasks:
        ctx.out("No tasks.")
        return False
    for task in tasks:
        ctx.out(format_task(task, ctx.date_format))
    return False


def cmd_done(ctx: CommandContext, command: Command) -> bool:
    command = cast(DoneCommand, command)
    task = ctx.store.find(command.task_id)
    if task.done:
        ctx.out(f"Task {task.id} is already done.")
        return False
    ctx.store.mark_done(task.id)
    ctx.out(f"Task {task.id} marked as done.")
    return True


def cmd_remove(ctx: CommandContext, command: Command) -> bool:
    command = cast(RemoveCommand, command)
    task = ctx.store.remove(command.task_id)
    ctx.out(f"Task {task.id} removed.")
    return True


def cmd_priority(ctx: CommandContext, command: Command) -> bool:
    command = cast(PriorityCommand, command)
    task = ctx.store.set_priority(command.task_id, command.priority)
    ctx.out(f"Task {task.id} priority set to {task.priority.value}.")
    return True


registry = CommandRegistry()

registry.register("add", parse_add, help_text="Add a task (prompts for title, description, priority, due date).")
registry.register(
    "list",
    parse_list,
    usage="[priority|due]",
    help_text="List tasks in stored order, or sorted by priority/due date.",
    aliases=["ls"],
)
registry.register("done", parse_done, usage="<id>", help_text="Mark a task as done.")
registry.register("remove", parse_remove, usage="<id>", help_text="Remove a task.", aliases=["rm"])
registry.register(
    "priority",
    parse_priority,
    usage="<id> <low|medium|high>",
    help_text="Change a task's priority.",
)
registry.register("help", parse_help, help_text="Show this help.", aliases=["h", "-h", "--help"])

registry.handles(AddCommand, cmd_add)
registry.handles(ListCommand, cmd_list)
registry.handles(DoneCommand, cmd_done)
registry.handles(RemoveCommand, cmd_remove)
registry.handles(PriorityCommand, cmd_priority)
