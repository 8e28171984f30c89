"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import string
from collections.abc import Sequence
from typing import TextIO

from minishell.environment import Environment

EXPORT_ERROR = "\033[91mExport Error\033[0m\n"
TOO_MANY_ARGS = "exit : too many args\n"
NON_NUMERIC_ARG = "exit : non numeric arg\n"

_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_ATOI_SPACE = frozenset("\t\n\v\f\r ")

_BUILTIN_NAMES = frozenset({"echo", "pwd", "export", "unset", "env", "exit"})


class ShellExit(Exception):
    """Raised by the ``exit`` builtin to end the shell with ``code``."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


def _is_n_flag(arg: str) -> bool:
    return len(arg) >= 2 and arg[0] == "-" and set(arg[1:]) == {"n"}


def echo(args: Sequence[str], out: TextIO) -> int:
    """Print ``args`` separated by spaces; leading ``-n`` flags drop the newline."""
    words = list(args)
    newline = True
    while words and _is_n_flag(words[0]):
        newline = False
        words.pop(0)
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def _valid_name(name: str) -> bool:
    return bool(name) and name[0] in _NAME_START and all(c in _NAME_CHARS for c in name)


def export(env: Environment, args: Sequence[str], out: TextIO) -> int:
    """Define ``NAME=value`` arguments in ``env``; with none, list the variables.

    Processing stops silently at the first argument without ``=``. An invalid
    name prints an error, stops processing and gives status 2.
    """
    if not args:
        out.write(env.format_export())
        return 0
    for arg in args:
        name, equal, value = arg.partition("=")
        if not equal:
            return 0
        if not _valid_name(name):
            out.write(EXPORT_ERROR)
            return 2
        env.set(name, value)
    return 0


def unset(env: Environment, args: Sequence[str]) -> int:
    """Remove each named variable from ``env``."""
    for name in args:
        env.unset(name)
    return 0


def pwd(out: TextIO) -> int:
    """Print the current working directory; print nothing if it cannot be read."""
    try:
        cwd = os.getcwd()
    except OSError:
        return 0
    out.write(f"{cwd}\n")
    return 0


def env_builtin(env: Environment, out: TextIO) -> int:
    """Print every variable of ``env``."""
    out.write(env.format_env())
    return 0


def _looks_numeric(text: str) -> bool:
    digits = text[1:] if text.startswith("-") else text
    return all(c in string.digits for c in digits)


def parse_exit_code(text: str) -> int:
    """Turn the argument of ``exit`` into a process status between 0 and 255.

    The argument may carry one leading ``-`` followed by digits only; an empty
    argument counts as 0. Anything else raises ValueError.
    """
    if not _looks_numeric(text):
        raise ValueError(f"non numeric exit argument: {text!r}")
    stripped = text.lstrip("".join(_ATOI_SPACE))
    negative = stripped.startswith("-")
    digits = stripped[1:] if negative else stripped
    value = int(digits) if digits else 0
    return (-value if negative else value) & 0xFF


def exit_builtin(args: Sequence[str], out: TextIO, err: TextIO) -> int:
    """End the shell by raising ShellExit, unless the arguments are wrong.

    More than one argument, or a non-numeric one, prints an error and returns.
    """
    if len(args) > 1:
        err.write(TOO_MANY_ARGS)
        return 0
    code = 0
    if args:
        try:
            code = parse_exit_code(args[0])
        except ValueError:
            err.write(NON_NUMERIC_ARG)
            return 0
    out.write("exit\n")
    raise ShellExit(code)


def is_builtin(name: str) -> bool:
    """Tell whether ``name`` is a command the shell runs itself."""
    return name in _BUILTIN_NAMES


def run_builtin(
    name: str,
    args: Sequence[str],
    env: Environment,
    out: TextIO,
    err: TextIO,
) -> int:
    """Run builtin ``name`` with ``args`` and return its exit status."""
    if name == "echo":
        return echo(args, out)
    if name == "pwd":
        return pwd(out)
    if name == "export":
        return export(env, args, out)
    if name == "unset":
        return unset(env, args)
    if name == "env":
        return env_builtin(env, out)
    if name == "exit":
        return exit_builtin(args, out, err)
    raise ValueError(f"not a builtin: {name!r}")