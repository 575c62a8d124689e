"""Built-in functions available to every query."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from awkit.datatype import (
    Event,
    QueryFunction,
    as_count,
    as_events,
    describe,
    values_equal,
)
from awkit.errors import InvalidFunctionParameters

logger = logging.getLogger(__name__)


def args_length(args: list[Any], length: int) -> None:
    """Raise unless exactly ``length`` arguments were given."""
    if len(args) != length:
        raise InvalidFunctionParameters(
            f"Expected {length} parameters in function, got {len(args)}"
        )


def query_print(args: list[Any], env: dict[str, Any]) -> None:
    """Log every argument and return nothing."""
    for arg in args:
        logger.info("%s", describe(arg))
    return None


def query_contains(args: list[Any], env: dict[str, Any]) -> bool:
    """Tell whether a list holds a value, or a dict holds a key."""
    args_length(args, 2)
    container, needle = args
    if isinstance(container, list):
        return any(values_equal(item, needle) for item in container)
    if isinstance(container, dict):
        if not isinstance(needle, str):
            raise InvalidFunctionParameters(
                f"function contains got second argument {describe(container)}, "
                "expected type String"
            )
        return needle in container
    raise InvalidFunctionParameters(
        f"function contains got first argument {describe(container)}, "
        "expected type List or Dict"
    )


def query_limit_events(args: list[Any], env: dict[str, Any]) -> list[Event]:
    """Return at most the given number of events from the front of a list."""
    args_length(args, 2)
    events = as_events(args[0])
    limit = as_count(args[1])
    return events[:limit]


def query_sum_durations(args: list[Any], env: dict[str, Any]) -> float:
    """Return the total duration of the events in seconds, at millisecond precision."""
    args_length(args, 1)
    total = sum((event.duration for event in as_events(args[0])), timedelta(0))
    micros = total // timedelta(microseconds=1)
    millis = abs(micros) // 1000
    if micros < 0:
        millis = -millis
    return millis / 1000.0


def query_concat(args: list[Any], env: dict[str, Any]) -> list[Event]:
    """Join any number of event lists into one."""
    return [event for arg in args for event in as_events(arg)]


_BUILTINS = {
    "print": query_print,
    "contains": query_contains,
    "limit_events": query_limit_events,
    "sum_durations": query_sum_durations,
    "concat": query_concat,
}


def fill_env(env: dict[str, Any]) -> None:
    """Bind every built-in function by name in ``env``."""
    for name, func in _BUILTINS.items():
        env[name] = QueryFunction(name, func)