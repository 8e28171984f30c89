"""Running a command tree: builtins inside the shell, other commands as child processes."""

from __future__ import annotations

import contextlib
import io
import os
import subprocess
import tempfile
import threading
from collections.abc import Iterator, Sequence
from typing import IO, TextIO, Union

from minishell.builtins import ShellExit, is_builtin, run_builtin
from minishell.environment import Environment
from minishell.tree import Node, NodeType, is_valid

NOT_FOUND_STATUS = 127
QUIT_MESSAGE = "Quit: 3\n"

_SIGNAL_BASE = 128
_QUIT_STATUS = 131

_Feed = Union[bytes, IO[bytes], None]


def exit_status(returncode: int) -> int:
    """Turn a child's return code into a shell status; a signal N gives 128 + N."""
    if returncode < 0:
        return _SIGNAL_BASE - returncode
    return returncode


def find_executable(name: str, path: str | None) -> str | None:
    """Find ``name`` in the ``:``-separated directories of ``path``.

    Returns the first ``directory/name`` that is executable, or None.
    Empty entries of ``path`` are skipped.
    """
    if path is None:
        return None
    for directory in (entry for entry in path.split(":") if entry):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def _commands(node: Node) -> Iterator[list[str]]:
    """Yield the word lists of a tree's commands in the order they run."""
    if node.kind is NodeType.PIPE:
        if node.right is None or node.left is None:
            raise ValueError("pipe without a command on each side")
        yield from _commands(node.right)
        yield from _commands(node.left)
    else:
        yield node.words()


def _close(feed: _Feed) -> None:
    if feed is not None and not isinstance(feed, bytes):
        feed.close()


def _write_all(pipe: IO[bytes], data: bytes) -> None:
    try:
        pipe.write(data)
    except OSError:
        pass
    finally:
        with contextlib.suppress(OSError):
            pipe.close()


def _drain(spool: IO[bytes] | None, stream: TextIO) -> None:
    if spool is None:
        return
    spool.seek(0)
    data = spool.read()
    if data:
        stream.write(data.decode(errors="replace"))


class Executor:
    """Runs command trees against an environment and a pair of output streams."""

    def __init__(self, env: Environment, stdout: TextIO, stderr: TextIO) -> None:
        self.env = env
        self.stdout = stdout
        self.stderr = stderr

    def run(self, root: Node | None) -> int:
        """Run the tree at ``root`` and return its exit status.

        A lone builtin runs in the shell itself and may change the environment
        or raise ShellExit; inside a pipeline it works on a copy.
        """
        if root is None:
            return 0
        if not is_valid(root):
            raise ValueError("pipe without a command on its left")
        if root.kind is NodeType.WORD:
            words = root.words()
            if is_builtin(words[0]):
                return run_builtin(words[0], words[1:], self.env, self.stdout, self.stderr)
        status = self._run_pipeline(list(_commands(root)))
        if status == _QUIT_STATUS:
            self.stdout.write(QUIT_MESSAGE)
        return status

    def _sink(self, stream: TextIO, stack: contextlib.ExitStack) -> tuple[int | IO[bytes], IO[bytes] | None]:
        """Where children write for ``stream``: its descriptor, or a spool file to copy later."""
        try:
            fd = stream.fileno()
        except (AttributeError, OSError, ValueError):
            spool = stack.enter_context(tempfile.TemporaryFile())
            return spool, spool
        stream.flush()
        return fd, None

    def _child_env(self) -> dict[str, str]:
        return dict(entry.split("=", 1) for entry in self.env.to_strings())

    def _not_found(self, name: str) -> None:
        self.stderr.write(f"minishell: {name} command not found\n")
        self.stderr.flush()

    def _program(self, name: str) -> str | None:
        """Resolve the program to start for ``name``; None if there is none."""
        if "/" in name:
            return name
        path = self.env.get("PATH")
        if path is None:
            return None
        found = find_executable(name, path) if name else None
        if found is None:
            self._not_found(name)
        return found

    def _child_builtin(self, words: Sequence[str]) -> tuple[str, int]:
        """Run a builtin as one stage of a pipeline, on a copy of the environment."""
        out = io.StringIO()
        env = Environment.from_strings(self.env.to_strings())
        try:
            status = run_builtin(words[0], words[1:], env, out, self.stderr)
        except ShellExit as exc:
            status = exc.code
        return out.getvalue(), status

    def _start(
        self,
        words: Sequence[str],
        feed: _Feed,
        stdout: int | IO[bytes],
        stderr: int | IO[bytes],
        writers: list[threading.Thread],
    ) -> subprocess.Popen[bytes] | None:
        program = self._program(words[0])
        if program is None:
            return None
        stdin = subprocess.PIPE if isinstance(feed, bytes) else feed
        try:
            process = subprocess.Popen(
                list(words),
                executable=program,
                stdin=stdin,
                stdout=stdout,
                stderr=stderr,
                env=self._child_env(),
            )
        except OSError:
            self._not_found(words[0])
            return None
        if isinstance(feed, bytes) and process.stdin is not None:
            writer = threading.Thread(target=_write_all, args=(process.stdin, feed), daemon=True)
            writer.start()
            writers.append(writer)
        return process

    def _run_pipeline(self, commands: list[list[str]]) -> int:
        """Run ``commands`` with each one's output feeding the next; return the last status."""
        with contextlib.ExitStack() as stack:
            out_target, out_spool = self._sink(self.stdout, stack)
            err_target, err_spool = self._sink(self.stderr, stack)
            feed: _Feed = None
            processes: list[subprocess.Popen[bytes]] = []
            writers: list[threading.Thread] = []
            last_process: subprocess.Popen[bytes] | None = None
            last_status = 0
            for position, words in enumerate(commands, start=1):
                last = position == len(commands)
                if is_builtin(words[0]):
                    _close(feed)
                    output, last_status = self._child_builtin(words)
                    if last:
                        self.stdout.write(output)
                    feed = output.encode()
                    last_process = None
                    continue
                target = out_target if last else subprocess.PIPE
                process = self._start(words, feed, target, err_target, writers)
                _close(feed)
                if process is None:
                    last_status = NOT_FOUND_STATUS
                    feed = b""
                    last_process = None
                    continue
                processes.append(process)
                feed = process.stdout
                last_process = process
            _close(feed)
            for writer in writers:
                writer.join()
            for process in processes:
                status = exit_status(process.wait())
                if process is last_process:
                    last_status = status
            _drain(out_spool, self.stdout)
            _drain(err_spool, self.stderr)
        return last_status