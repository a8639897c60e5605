# tinysh

tinysh is a small interactive shell for POSIX systems. It runs programs from
your `PATH` and has a handful of built-in commands. It keeps a command history
file for each session and tracks programs started in the background.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
tinysh
```

The shell takes no command-line arguments. If you give any, it prints a usage
message and exits with status 1.

The prompt shows the current working directory in blue, followed by the prompt
string. The default prompt string is `$`. Pressing Ctrl+C does not quit the
shell. It prints a reminder and shows the prompt again. The shell stops when you
type `exit` or when input ends.

### Built-in commands

| Command            | What it does                                               |
|--------------------|------------------------------------------------------------|
| `exit`             | Leaves the shell. Extra arguments are rejected.            |
| `cd [directory]`   | Changes directory. With no argument it goes to `$HOME`.    |
| `prompt <text>`    | Replaces the prompt string. It takes exactly one argument. |
| `history`          | Shows the ten most recent commands, numbered from 1.       |
| `jobs`             | Drops finished background processes, then lists the rest. |
| `fg <pid>`         | Stops tracking a background process and waits for it.      |
| `/proc/<path>`     | Prints the contents of that file.                          |
| `/proc /<path>`    | The same, with the path given as a second argument.        |

Any other line runs as an external program, and the shell waits for it to
finish. If the last argument is `&`, the program starts in the background. The
shell then prints `Started background process <pid>` and adds the program to
its job list. A program that cannot be found or started produces no output.

### Quoting and escapes

Arguments are separated by whitespace that is not inside quotes and is not
escaped. Each whitespace character ends an argument, so two spaces in a row
give an empty argument. Single and double quotes group words together and are
removed from the argument.

Outside quotes, a backslash starts a C-style escape. The escapes are `\n`,
`\t`, `\r`, `\a`, `\b`, `\f`, `\v`, `\\` and `\ `. Three-digit octal such as
`\101` and two-digit hex such as `\x41` also work. Any other escaped character
stands for itself. Inside quotes, a backslash only escapes the matching quote
character.

The shell reports an error for an unterminated quote, a trailing backslash, or
a malformed octal or hex escape. It then skips that line.

### History

Every line that holds a command is appended to a `.421sh` file in the
directory where the shell was started. The file is emptied when the shell
stops, whether through `exit` or at the end of input.

## Using it from Python

```python
import sys
from tinysh.shell import Shell, parse_command

print(parse_command('echo "hello world" \\x41'))
# ['echo', 'hello world', 'A']

shell = Shell(".", sys.stdin, sys.stdout, sys.stderr)
shell.run_line("echo hi")   # returns False only for a valid `exit`
shell.close()               # empties the history file, returns 0 on success
```

The package has these modules:

- `tinysh.shell`: `Shell` (with `run_line`, `execute_command`, `prompt_text`,
  `loop`, `close`), `parse_command` and `main`.
- `tinysh.builtins`: the built-in commands. Each one raises `BuiltinError` when
  it fails.
- `tinysh.escapes`: `unescape`, `first_unquoted_space`, `count_spaces`,
  `flush_input` and `EscapeError`.
- `tinysh.jobs`: `JobTable`, which tracks background process ids, and
  `JobError`.
- `tinysh.history`: `History`, which manages the history file.

## What it does not do

tinysh has no pipes, no input or output redirection, no variable or glob
expansion, and no scripting. `fg` does not give a process the terminal or
resume a stopped one. It only waits for the process to exit. There is no way to
send a running foreground program to the background.

## Running the tests

```
pip install .[test]
pytest
```