"""Splitting a command line into tokens and expanding variables in them."""

from __future__ import annotations

import string
from collections.abc import Iterable
from enum import IntEnum

from minishell.environment import Environment
from minishell.quotes import QuoteError

METACHARS = " \t\n|&<>"

_QUOTES = ("'", '"')
_ASCII_ALPHA = frozenset(string.ascii_letters)
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_NAME_START = _ASCII_ALPHA | {"_", "?"}


class QuoteState(IntEnum):
    """Which kind of quote the scanner is currently inside."""

    NOTHING = 0
    SIMPLE_Q = 1
    DOUBLE_Q = 2


def tokenize(line: str) -> list[str]:
    """Split ``line`` into tokens.

    Spaces separate tokens; every other metacharacter forms a token of its own.
    Metacharacters inside single or double quotes belong to the word that holds
    them, and the quotes are kept in the token.
    """
    tokens: list[str] = []
    length = len(line)
    pos = 0
    while pos < length:
        while pos < length and line[pos] == " ":
            pos += 1
        if pos >= length:
            break
        if line[pos] in METACHARS:
            tokens.append(line[pos])
            pos += 1
            continue
        end = pos
        while True:
            char = line[end]
            if char in _QUOTES:
                closing = line.find(char, end + 1)
                if closing < 0:
                    raise QuoteError()
                end = closing
            if end + 1 >= length or line[end + 1] in METACHARS:
                break
            end += 1
        tokens.append(line[pos:end + 1])
        pos = end + 1
    return tokens


def _next_state(state: QuoteState, char: str) -> QuoteState | None:
    """Return the new state if ``char`` opens or closes a quote, else None."""
    if char == '"' and state is QuoteState.DOUBLE_Q:
        return QuoteState.NOTHING
    if char == "'" and state is QuoteState.NOTHING:
        return QuoteState.SIMPLE_Q
    if char == '"' and state is QuoteState.NOTHING:
        return QuoteState.DOUBLE_Q
    if char == "'" and state is QuoteState.SIMPLE_Q:
        return QuoteState.NOTHING
    return None


def _variable(token: str, start: int, env: Environment, exit_code: int) -> tuple[str, int]:
    """Expand the variable whose ``$`` is at ``start``; return its value and end index."""
    if token[start + 1] == "?":
        return str(exit_code), start + 2
    end = start + 1
    while end < len(token) and token[end] in _NAME_CHARS:
        end += 1
    value = env.get(token[start + 1:end])
    return (value if value is not None else ""), end


def expand(token: str, env: Environment, exit_code: int) -> str:
    """Remove quotes from ``token`` and replace ``$NAME`` and ``$?`` outside single quotes.

    Unknown variables expand to an empty string. A ``$`` not followed by a
    letter, an underscore or ``?`` is kept as it is.
    """
    state = QuoteState.NOTHING
    pieces: list[str] = []
    pos = 0
    length = len(token)
    while pos < length:
        char = token[pos]
        new_state = _next_state(state, char)
        if new_state is not None:
            state = new_state
            pos += 1
            continue
        if (
            char == "$"
            and state is not QuoteState.SIMPLE_Q
            and pos + 1 < length
            and token[pos + 1] in _NAME_START
        ):
            value, pos = _variable(token, pos, env, exit_code)
            pieces.append(value)
        else:
            pieces.append(char)
            pos += 1
    return "".join(pieces)


def expand_all(tokens: Iterable[str], env: Environment, exit_code: int) -> list[str]:
    """Expand every token in ``tokens``."""
    return [expand(token, env, exit_code) for token in tokens]