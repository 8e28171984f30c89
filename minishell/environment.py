"""Ordered store of environment variables for the shell."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

_ENV_COLOUR = "\033[0;34m"
_RESET = "\033[0m"


class Environment:
    """Environment variables kept in the order they were first defined."""

    def __init__(self, variables: dict[str, str] | None = None) -> None:
        self._vars: dict[str, str] = dict(variables or {})

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> "Environment":
        """Build an environment from ``NAME=value`` strings.

        The name ends at the first ``=``; an entry without one gets an empty value.
        """
        env = cls()
        for entry in entries:
            name, _, value = entry.partition("=")
            env.set(name, value)
        return env

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None if it is not defined."""
        return self._vars.get(name)

    def set(self, name: str, value: str) -> None:
        """Define ``name``; an existing variable keeps its place in the order."""
        self._vars[name] = value

    def unset(self, name: str) -> None:
        """Remove ``name`` if it is defined."""
        self._vars.pop(name, None)

    def to_strings(self) -> list[str]:
        """Return the variables as ``NAME=value`` strings, in order."""
        return [f"{name}={value}" for name, value in self._vars.items()]

    def format_env(self) -> str:
        """Text printed by the ``env`` builtin."""
        return "".join(
            f"{_ENV_COLOUR}{name} {_RESET}= {value}\n"
            for name, value in self._vars.items()
        )

    def format_export(self) -> str:
        """Text printed by ``export`` when given no arguments."""
        return "".join(
            f"declare -x {name} = {value}\n" for name, value in self._vars.items()
        )

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"