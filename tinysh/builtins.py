"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
from typing import TextIO, Sequence

from tinysh.history import MAX_HISTORY_LINES, History
from tinysh.jobs import JobError, JobTable

__all__ = [
    "HOME_ENV",
    "BuiltinError",
    "change_directory",
    "change_prompt",
    "show_proc_file",
    "foreground_process",
    "list_jobs",
    "print_history",
]

HOME_ENV = "HOME"


class BuiltinError(RuntimeError):
    """Raised when a built-in command cannot do its work."""


def change_directory(args: Sequence[str]) -> None:
    """Change the working directory to ``args[1]``, or to $HOME if not given."""
    if len(args) > 2:
        raise BuiltinError("Usage: cd [directory]\tToo many arguments.")
    if len(args) == 2:
        destination = args[1]
    else:
        destination = os.environ.get(HOME_ENV)
        if destination is None:
            raise BuiltinError(f"cd: {HOME_ENV} is not set")
    try:
        os.chdir(destination)
    except OSError as exc:
        raise BuiltinError(f"chdir error: {exc}") from exc


def change_prompt(args: Sequence[str]) -> str:
    """Return the new prompt given as the single argument in ``args``."""
    if len(args) < 2:
        raise BuiltinError("Usage: prompt [prompt]\tToo few arguments.")
    if len(args) > 2:
        raise BuiltinError("Usage: prompt [prompt]\tToo many arguments.")
    return args[1]


def show_proc_file(path: str | os.PathLike[str], out: TextIO) -> None:
    """Copy the contents of the file at ``path`` to ``out``."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            for line in handle:
                out.write(line)
    except OSError as exc:
        raise BuiltinError(f"cannot read {os.fspath(path)}: {exc}") from exc


def foreground_process(jobs: JobTable, pid: int) -> int | None:
    """Stop tracking background process ``pid`` and wait for it to finish.

    Returns the process's exit code, or ``None`` if it could not be waited on.
    """
    if pid <= 0:
        raise BuiltinError(f"Invalid process id {pid}. Enter an id greater than 0.")
    if pid not in jobs:
        raise BuiltinError(f"Process with id {pid} does not exist.")
    try:
        jobs.remove(pid)
    except JobError as exc:
        raise BuiltinError(
            f"Error removing process {pid} from background processes."
        ) from exc
    try:
        _, status = os.waitpid(pid, 0)
    except ChildProcessError:
        return None
    return os.waitstatus_to_exitcode(status)


def list_jobs(jobs: JobTable, out: TextIO) -> None:
    """Write the tracked background processes to ``out``, numbered from 1."""
    if not len(jobs):
        out.write("No active background processes.\n")
        return
    for number, pid in enumerate(jobs, start=1):
        out.write(f"[{number}]\t{pid}\n")


def print_history(history: History, out: TextIO) -> None:
    """Write the most recent commands in ``history`` to ``out``, numbered from 1."""
    try:
        commands = history.recent(MAX_HISTORY_LINES)
    except OSError as exc:
        raise BuiltinError(f"cannot read history: {exc}") from exc
    for number, command in enumerate(commands, start=1):
        out.write(f"[{number}]\t{command}\n")