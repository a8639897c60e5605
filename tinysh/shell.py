"""The interactive shell: command-line parsing, dispatch and the prompt loop."""

from __future__ import annotations

import os
import re
import signal
import subprocess
import sys
import threading
from pathlib import Path
from typing import Sequence, TextIO

from tinysh.builtins import (
    BuiltinError,
    change_directory,
    change_prompt,
    foreground_process,
    list_jobs,
    print_history,
    show_proc_file,
)
from tinysh.escapes import EscapeError, first_unquoted_space, unescape
from tinysh.history import HISTORY_FILENAME, History
from tinysh.jobs import JobTable

__all__ = ["DEFAULT_PROMPT", "Shell", "parse_command", "main"]

DEFAULT_PROMPT = "$"
AMPERSAND = "&"
PROC_PREFIX = "/proc/"
PROC_DIR = "/proc"

_WHITESPACE = " \t\n\v\f\r"
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


def parse_command(line: str) -> list[str] | None:
    """Split ``line`` into unescaped arguments.

    Returns ``None`` for a line that holds no command. Arguments are split
    at white space outside quotes and escapes; each white-space character
    ends an argument, so adjacent separators yield empty arguments.
    Raises EscapeError for a malformed escape sequence or quote.
    """
    trimmed = line.rstrip(_WHITESPACE)
    start = len(line) - len(line.lstrip(_WHITESPACE))
    end = len(trimmed) - 1
    if not line or start >= end:
        return None

    raw: list[str] = []
    while start < len(trimmed):
        space = first_unquoted_space(trimmed[start:])
        if space is None:
            raw.append(trimmed[start:])
            break
        raw.append(trimmed[start:start + space])
        start += space + 1
    return [unescape(argument) for argument in raw]


def _fileno(stream: TextIO) -> int | None:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class Shell:
    """A small interactive shell with a handful of built-in commands."""

    def __init__(
        self,
        directory: str | os.PathLike[str] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.directory = Path(directory) if directory is not None else Path.cwd()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.prompt = DEFAULT_PROMPT
        self.history = History(self.directory / HISTORY_FILENAME)
        self.jobs = JobTable()
        self._background: dict[int, subprocess.Popen] = {}

    def _error(self, message: str) -> None:
        self.stderr.write(f"{message}\n")

    def prompt_text(self) -> str:
        """Return the prompt: the working directory in blue, then the prompt string."""
        try:
            cwd = os.getcwd()
        except OSError as exc:
            self._error(f"getcwd error: {exc}")
            return f"{self.prompt} "
        return f"\033[0;34m{cwd}\033[0m{self.prompt} "

    def run_line(self, line: str) -> bool:
        """Run one command line; return False when the shell should exit."""
        try:
            args = parse_command(line)
        except EscapeError as exc:
            self._error(str(exc))
            return True
        if args is None:
            return True

        command = args[0]
        builtin = True
        if command == "exit":
            if len(args) > 1:
                self._error("Usage: exit\tAdditional arguments are not supported.")
            else:
                return False
        elif command.startswith(PROC_PREFIX):
            if len(args) > 1:
                self._error(
                    "Usage: /proc/[filepath]\tAdditional arguments are not supported."
                )
            else:
                self._show_proc(command)
        elif command == PROC_DIR and len(args) > 1:
            if args[1].startswith("/"):
                if len(args) == 2:
                    self._show_proc(command + args[1])
                else:
                    self._error(
                        "Usage: /proc/[filepath]\tAdditional arguments are not supported."
                    )
        elif command == "history":
            if len(args) > 1:
                self._error("Usage: history\tAdditional arguments are not supported.")
            else:
                self._builtin(
                    lambda: print_history(self.history, self.stdout),
                    "Error printing command history.",
                )
        elif command == "cd":
            self._builtin(lambda: change_directory(args), "Error changing directory.")
        elif command == "prompt":
            self._builtin(self._set_prompt(args), "Error changing shell prompt.")
        elif command == "jobs":
            if len(args) > 1:
                self._error("Usage: bg\tAdditional arguments are not supported")
            else:
                self.jobs.reap()
                list_jobs(self.jobs, self.stdout)
        elif command == "fg":
            if len(args) < 2:
                self._error("Usage: fg [pid]\tToo few arguments.")
            elif len(args) > 2:
                self._error("Usage: fg [pid]\tToo many arguments.")
            else:
                self._builtin(
                    lambda: foreground_process(self.jobs, _atoi(args[1])),
                    "Error foregrounding process.",
                )
        else:
            builtin = False

        if not builtin:
            try:
                self.execute_command(args)
            except OSError as exc:
                self._error(str(exc))
                self._error("Error executing command.")

        try:
            self.history.append(line.rstrip(_WHITESPACE))
        except OSError as exc:
            self._error(str(exc))
            self._error("Error appending to history file")

        self._background = {
            pid: proc for pid, proc in self._background.items() if pid in self.jobs
        }
        return True

    def _set_prompt(self, args: Sequence[str]):
        def apply() -> None:
            self.prompt = change_prompt(args)

        return apply

    def _builtin(self, action, failure: str) -> None:
        try:
            action()
        except BuiltinError as exc:
            self._error(str(exc))
            self._error(failure)

    def _show_proc(self, path: str) -> None:
        self._builtin(
            lambda: show_proc_file(path, self.stdout),
            "Error executing /proc command.",
        )

    def execute_command(self, args: Sequence[str]) -> int | None:
        """Start a program; wait for it unless the last argument is ``&``.

        Returns the program's exit code, or ``None`` for a background start.
        A program that cannot be started counts as one that exited with 1.
        """
        argv = list(args)
        background = bool(argv) and argv[-1] == AMPERSAND
        if background:
            argv.pop()
        if not argv:
            return 1

        self.stdout.flush()
        self.stderr.flush()
        in_fd = _fileno(self.stdin)
        out_fd = _fileno(self.stdout)
        err_fd = _fileno(self.stderr)

        if background:
            try:
                proc = subprocess.Popen(argv, stdin=in_fd, stdout=out_fd, stderr=err_fd)
            except (FileNotFoundError, PermissionError, NotADirectoryError):
                return None
            self._background[proc.pid] = proc
            self.jobs.add(proc.pid)
            self.stdout.write(f"Started background process {proc.pid}\n")
            return None

        try:
            completed = subprocess.run(
                argv,
                stdin=in_fd,
                stdout=out_fd if out_fd is not None else subprocess.PIPE,
                stderr=err_fd if err_fd is not None else subprocess.PIPE,
                check=False,
            )
        except (FileNotFoundError, PermissionError, NotADirectoryError):
            return 1
        if completed.stdout:
            self.stdout.write(completed.stdout.decode(errors="replace"))
        if completed.stderr:
            self.stderr.write(completed.stderr.decode(errors="replace"))
        return completed.returncode

    def _on_interrupt(self, signum, frame) -> None:
        self.stdout.write("\nInterrupt ignored. Type `exit` to quit.\n")
        self.stdout.write(self.prompt_text())
        self.stdout.flush()

    def loop(self) -> int:
        """Read and run commands until ``exit`` or end of input; return the exit status."""
        previous = None
        in_main = threading.current_thread() is threading.main_thread()
        if in_main:
            previous = signal.signal(signal.SIGINT, self._on_interrupt)
        try:
            while True:
                self.stdout.write(self.prompt_text())
                self.stdout.flush()
                line = self.stdin.readline()
                if not line:
                    break
                if not self.run_line(line.removesuffix("\n")):
                    break
        finally:
            if in_main:
                signal.signal(signal.SIGINT, previous)
        return self.close()

    def close(self) -> int:
        """Clear the history file and forget background jobs; return the exit status."""
        try:
            self.history.clear()
        except OSError as exc:
            self._error(str(exc))
            self._error("Error clearing history file.")
            return 1
        self.jobs.clear()
        self._background.clear()
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Start the shell; command-line arguments are rejected."""
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        sys.stderr.write(
            "Usage: tinysh\tCommand line arguments are not supported.\n"
        )
        return 1
    return Shell().loop()


if __name__ == "__main__":
    sys.exit(main())