"""Errors raised while parsing or running a query."""

from __future__ import annotations

_SIMPLE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _quote(text: str) -> str:
    """Quote a message the way error reports show it."""
    parts = []
    for ch in text:
        if ch in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ch == "\x7f":
            parts.append(f"\\u{{{ord(ch):x}}}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


class QueryError(Exception):
    """Base class of every query failure."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{type(self).__name__}({_quote(self.message)})"


class ParsingError(QueryError):
    """The query text could not be parsed."""


class EmptyQuery(QueryError):
    """The query finished without returning a value."""

    def __init__(self) -> None:
        super().__init__("")

    def __str__(self) -> str:
        return type(self).__name__


class VariableNotDefined(QueryError):
    """A variable or function name was used before being defined."""


class MathError(QueryError):
    """An arithmetic operation failed, such as division by zero."""


class InvalidType(QueryError):
    """An operation was applied to a value of the wrong type."""


class InvalidFunctionParameters(QueryError):
    """A query function got arguments it cannot use."""


class TimeIntervalError(QueryError):
    """The time interval of the query is missing or malformed."""


class BucketQueryError(QueryError):
    """Looking up buckets or their events failed."""


class RegexCompileError(QueryError):
    """A regular expression given to the query did not compile."""