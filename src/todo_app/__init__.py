"""Personal task tracker: a small JSON-backed to-do list driven from the command line."""

__version__ = "0.1.0"
