# minishell

A small interactive command shell. It reads one line at a time, splits it into
words and pipes, expands variables, and runs builtins or external programs.

## Installing

```
pip install .
```

## Running

```
minishell
```

The prompt is `minishell » `. Ctrl-C abandons the current line and gives a
fresh prompt. End input with Ctrl-D, and the shell prints `exit` before it
quits with status 0.

## What it understands

- Words separated by spaces. Text inside `'single'` or `"double"` quotes stays
  one word, and the quotes themselves are removed. A line with a quote that is
  never closed is rejected with `Erreur de quotes` on standard error.
- Lines made only of spaces are ignored.
- Pipes: `ls | grep py | wc -l`. Each external command in a pipeline runs as
  its own process, and the status is that of the last command. A pipe with no
  command after it prints `error` and runs nothing.
- Variables: `$NAME` becomes the value of `NAME`, or nothing when `NAME` is not
  set. `$?` becomes the exit status of the last command. No expansion happens
  inside single quotes. A `$` not followed by a letter, `_` or `?` stays as it is.
- External commands are looked up on `PATH`. A name that contains `/` is run
  as given. An unknown command prints `minishell: <name> command not found`
  and sets the status to 127. A command killed by signal N gives status
  128 + N; for status 131 the shell prints `Quit: 3`.

## Builtins

| Command  | Effect |
|----------|--------|
| `echo`   | prints its arguments separated by spaces; leading `-n` (or `-nnn`) flags drop the newline |
| `pwd`    | prints the working directory |
| `export` | `export NAME=value ...` sets variables; with no arguments it lists them as `declare -x NAME = value` |
| `unset`  | removes the named variables |
| `env`    | lists the environment as `NAME = value` |
| `exit`   | `exit [n]` prints `exit` and leaves the shell with status `n` modulo 256 |

`export` stops at the first argument that has no `=`. An invalid name (one
that does not start with a letter or `_`, or holds other than letters, digits
and `_`) prints `Export Error` and sets the status to 2.

`exit` with more than one argument prints `exit : too many args`; with a
non-numeric argument it prints `exit : non numeric arg`. In both cases the
shell keeps running.

A builtin on its own changes the shell's environment. Inside a pipeline it
works on a copy, so `export` or `unset` there has no lasting effect, and
`exit` there does not end the shell.

## Using it from Python

```python
from minishell.shell import Shell

shell = Shell({"HOME": "/tmp", "PATH": "/usr/bin:/bin"})
shell.run_line("export GREETING=hello")
shell.run_line("echo $GREETING world")
```

`Shell.run_line` returns the status the line leaves; the `exit` builtin raises
`minishell.builtins.ShellExit`. `Shell.loop` takes any iterable of lines,
runs each one in turn and returns the shell's final status.

The stages are available on their own as well:

- `minishell.quotes.check_quotes` and `strip_quotes`
- `minishell.lexer.tokenize`, `expand` and `expand_all`
- `minishell.tree.build_tree`, `insert`, `is_valid` and `format_tree`
- `minishell.environment.Environment`
- `minishell.executor.Executor`, `find_executable` and `exit_status`

## What it does not do

- There is no `cd` builtin; the working directory cannot be changed from the
  shell.
- `<`, `>`, `&` and their kin are split out as separate words but have no
  meaning: there are no redirections, here-documents, background jobs or
  `&&`/`||` lists. They are passed to commands as ordinary arguments.
- There are no scripts, no command-line options, no history file and no
  job control.