"""Tracking of background processes started by the shell."""

from __future__ import annotations

import os
from typing import Iterator

__all__ = ["JobError", "JobTable"]


class JobError(LookupError):
    """Raised when a process id is not tracked by a job table."""


class JobTable:
    """Background process ids, kept in slot order.

    A freed slot is reused by the next process added, so listing order
    follows slot positions rather than start order.
    """

    def __init__(self) -> None:
        self._slots: list[int | None] = []

    def add(self, pid: int) -> None:
        """Track ``pid``; non-positive ids are ignored."""
        if pid <= 0:
            return
        try:
            free = self._slots.index(None)
        except ValueError:
            self._slots.append(pid)
        else:
            self._slots[free] = pid

    def remove(self, pid: int) -> None:
        """Stop tracking ``pid``; raise JobError if it is not tracked."""
        if pid is None or pid not in self._slots:
            raise JobError(f"process {pid} is not a background process")
        self._slots[self._slots.index(pid)] = None

    def reap(self) -> list[int]:
        """Drop processes that have finished and return their ids."""
        finished = []
        for index, pid in enumerate(self._slots):
            if pid is None:
                continue
            try:
                done_pid, _ = os.waitpid(pid, os.WNOHANG)
            except ChildProcessError:
                done_pid = -1
            if done_pid != 0:
                self._slots[index] = None
                finished.append(pid)
        return finished

    def clear(self) -> None:
        """Forget every tracked process."""
        self._slots.clear()

    def __contains__(self, pid: object) -> bool:
        return pid is not None and pid in self._slots

    def __len__(self) -> int:
        return sum(1 for pid in self._slots if pid is not None)

    def __iter__(self) -> Iterator[int]:
        return (pid for pid in self._slots if pid is not None)