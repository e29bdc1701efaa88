# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "Program name shown in usage text (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING).",
    "TODO_LOG_TO_FILE": "Also write a debug log to <data_dir>/todo.log (true/false, default: true).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for logs (default: .local/todo).",
    "TODO_DATA_FILE": "Task list JSON file (default: tasks.json in the current directory).",
    # Input / display
    "TODO_DATE_FORMAT": "strftime format for entering/showing due dates (default: %d-%m-%Y).",
}
