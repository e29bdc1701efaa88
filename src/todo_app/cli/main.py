# src/todo_app/cli/main.py

"""
CLI entrypoint.

One invocation = one command:
parse argv -> load task file -> run command -> save (only if changed) -> exit code.

Exit codes:
- 0: success (also "no task with that id", which is reported but not fatal)
- 1: task file could not be read or written
- 2: bad arguments (usage printed to stderr, task file untouched)
"""

from __future__ import annotations

import logging
import sys

from ..cli.commands import CommandContext, HelpCommand, Prompt, registry
from ..config import Settings, get_settings
from ..errors import ArgumentError, NotFoundError, ReadError, WriteError
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _err(text: str) -> None:
    print(text, file=sys.stderr)


def main(
    argv: list[str] | None = None,
    *,
    settings: Settings | None = None,
    prompt: Prompt = input,
) -> int:
    if settings is None:
        settings = get_settings()

    console_level = getattr(logging, str(settings.log_level).upper(), logging.WARNING)
    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    args = sys.argv[1:] if argv is None else list(argv)
    command = registry.parse(args)
    logger.debug("argv=%s command=%s", args, command)

    if isinstance(command, HelpCommand):
        usage = registry.build_usage(settings.app_name)
        if command.error is None:
            print(usage)
            return EXIT_OK
        logger.info("Usage error: %s", command.error)
        _err(f"error: {command.error}\n\n{usage}")
        return EXIT_USAGE

    try:
        store = TaskStore.load(settings.data_file)
    except ReadError as e:
        logger.exception("Failed to load tasks from %s", settings.data_file)
        _err(f"error: {e}")
        return EXIT_FAILURE

    ctx = CommandContext(store=store, prompt=prompt, date_format=settings.date_format)
    try:
        changed = registry.execute(ctx, command)
    except NotFoundError as e:
        logger.info("%s", e)
        print(str(e))
        return EXIT_OK
    except ArgumentError as e:
        logger.info("Command rejected: %s", e)
        _err(f"error: {e}")
        return EXIT_USAGE

    if not changed:
        return EXIT_OK

    try:
        store.save(settings.data_file)
    except WriteError as e:
        logger.exception("Failed to save tasks to %s", settings.data_file)
        _err(f"error: {e}. The change may not have persisted.")
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
