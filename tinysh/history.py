"""Persistent command history kept in a plain text file."""

from __future__ import annotations

import os
from collections import deque
from pathlib import Path

__all__ = ["HISTORY_FILENAME", "MAX_HISTORY_LINES", "History"]

HISTORY_FILENAME = ".421sh"
MAX_HISTORY_LINES = 10


class History:
    """A command history file, one command per line."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def append(self, command: str) -> None:
        """Append ``command`` to the file, creating the file if needed."""
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{command}\n")

    def clear(self) -> None:
        """Empty the history file."""
        with self.path.open("w", encoding="utf-8"):
            pass

    def recent(self, limit: int = MAX_HISTORY_LINES) -> list[str]:
        """Return the last ``limit`` commands, oldest first."""
        with self.path.open("r", encoding="utf-8") as handle:
            lines = deque(handle, maxlen=limit)
        return [line.removesuffix("\n") for line in lines]