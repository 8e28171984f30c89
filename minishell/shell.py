"""The interactive loop: read a line, split, expand, build the tree and run it."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator, Mapping
from typing import TextIO

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.executor import Executor
from minishell.lexer import expand_all, tokenize
from minishell.quotes import QuoteError, check_quotes
from minishell.tree import build_tree, is_valid

PROMPT = "minishell » "
TREE_ERROR = "\033[91merror\033[0m\n"
EXIT_MESSAGE = "exit\n"

_INTERRUPTED_STATUS = 130


def is_blank(line: str) -> bool:
    """Tell whether ``line`` holds nothing but spaces."""
    return all(char == " " for char in line)


class Shell:
    """A shell session: its environment, its output streams and the last exit status."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.env = Environment(dict(os.environ if environ is None else environ))
        self.stdout = sys.stdout if stdout is None else stdout
        self.stderr = sys.stderr if stderr is None else stderr
        self.exit_code = 0
        self._executor = Executor(self.env, self.stdout, self.stderr)

    def run_line(self, line: str) -> int:
        """Run one command line and return the exit status it leaves.

        Blank lines, quote errors and malformed pipes leave the status unchanged.
        The ``exit`` builtin raises ShellExit.
        """
        if is_blank(line):
            return self.exit_code
        try:
            check_quotes(line)
            words = expand_all(tokenize(line), self.env, self.exit_code)
        except QuoteError as exc:
            self.stderr.write(f"{exc}\n")
            return self.exit_code
        root = build_tree(words)
        if not is_valid(root):
            self.stdout.write(TREE_ERROR)
            return self.exit_code
        self.exit_code = self._executor.run(root)
        return self.exit_code

    def loop(self, lines: Iterable[str]) -> int:
        """Run ``lines`` one after another and return the shell's final status.

        When the lines run out the shell prints ``exit`` and returns 0; the
        ``exit`` builtin ends it early with its own status.
        """
        for line in lines:
            try:
                self.run_line(line)
            except ShellExit as exc:
                return exc.code
            except KeyboardInterrupt:
                self.exit_code = _INTERRUPTED_STATUS
        self.stdout.write(EXIT_MESSAGE)
        return 0


def _prompt_lines(prompt: str) -> Iterator[str]:
    """Read lines from the terminal until end of input; Ctrl-C starts a fresh prompt."""
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return
        except KeyboardInterrupt:
            sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    """Start an interactive session; command-line arguments are ignored."""
    if sys.stdin.isatty():
        try:
            import readline  # noqa: F401  (line editing and history for input())
        except ImportError:
            pass
    shell = Shell(os.environ, sys.stdout, sys.stderr)
    return shell.loop(_prompt_lines(PROMPT))


if __name__ == "__main__":
    sys.exit(main())