"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority) + input parsers
- task_store.py: JSON-file-backed ordered store + mutation helpers
"""

from .task_models import Priority, Task
from .task_store import TaskStore

__all__ = ["Priority", "Task", "TaskStore"]
