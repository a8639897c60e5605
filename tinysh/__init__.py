"""A small interactive shell with history, background jobs and built-in commands."""

__version__ = "0.1.0"
__all__ = ["builtins", "escapes", "history", "jobs", "shell"]