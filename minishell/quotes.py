"""Quote validation and removal for command lines and tokens."""

from __future__ import annotations

QUOTE_ERROR_MESSAGE = "Erreur de quotes"

_QUOTES = ("'", '"')


class QuoteError(ValueError):
    """Raised when a line or token holds an unclosed quote."""

    def __init__(self, message: str = QUOTE_ERROR_MESSAGE) -> None:
        super().__init__(message)


def _balanced(line: str, quote: str, other: str) -> bool:
    """Check that every ``quote`` outside ``other`` quotes has a closing partner."""
    inside_other = False
    chars = iter(line)
    for char in chars:
        if char == other:
            inside_other = not inside_other
        if char == quote and not inside_other:
            for closing in chars:
                if closing == quote:
                    break
            else:
                return False
    return True


def check_quotes(line: str) -> None:
    """Raise QuoteError if single or double quotes in ``line`` are not closed."""
    if not _balanced(line, "'", '"') or not _balanced(line, '"', "'"):
        raise QuoteError()


def strip_quotes(token: str, quote: str) -> str:
    """Remove each pair of ``quote`` characters from ``token``, keeping what they enclose."""
    if quote not in _QUOTES:
        raise ValueError(f"not a quote character: {quote!r}")
    parts = token.split(quote)
    if len(parts) % 2 == 0:
        raise QuoteError()
    return "".join(parts)