"""Values handled by the query interpreter and conversions between them.

Query values are plain Python objects: ``None``, ``bool``, ``float``, ``str``,
:class:`Event`, ``list``, ``dict`` and :class:`QueryFunction`.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from awkit.errors import InvalidFunctionParameters, InvalidType


@dataclass
class Event:
    """A timestamped stretch of activity with arbitrary data attached."""

    timestamp: datetime
    duration: timedelta = timedelta(0)
    data: dict[str, Any] = field(default_factory=dict)
    id: int | None = None

    def to_json(self) -> dict[str, Any]:
        """Return the event as a JSON-ready mapping."""
        return {
            "id": self.id,
            "timestamp": _format_timestamp(self.timestamp),
            "duration": self.duration.total_seconds(),
            "data": self.data,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> Event:
        """Build an event from its JSON mapping."""
        if "timestamp" not in data:
            raise ValueError("event is missing the 'timestamp' field")
        raw_ts = data["timestamp"]
        if not isinstance(raw_ts, str):
            raise ValueError("event timestamp must be a string")
        timestamp = datetime.fromisoformat(raw_ts)
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        timestamp = timestamp.astimezone(timezone.utc)

        raw_duration = data.get("duration", 0.0)
        if isinstance(raw_duration, bool) or not isinstance(raw_duration, (int, float)):
            raise ValueError("event duration must be a number of seconds")
        event_data = data.get("data", {})
        if not isinstance(event_data, dict):
            raise ValueError("event data must be an object")
        event_id = data.get("id")
        if event_id is not None and (isinstance(event_id, bool) or not isinstance(event_id, int)):
            raise ValueError("event id must be an integer")
        return cls(
            timestamp=timestamp,
            duration=timedelta(seconds=raw_duration),
            data=dict(event_data),
            id=event_id,
        )


def _format_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    base = ts.strftime("%Y-%m-%dT%H:%M:%S")
    micro = ts.microsecond
    if micro == 0:
        frac = ""
    elif micro % 1000 == 0:
        frac = f".{micro // 1000:03d}"
    else:
        frac = f".{micro:06d}"
    return f"{base}{frac}Z"


@dataclass(frozen=True)
class QueryFunction:
    """A built-in function callable from a query."""

    name: str
    func: Callable[[list[Any], dict[str, Any]], Any] = field(compare=False, repr=False)

    def __call__(self, args: list[Any], env: dict[str, Any]) -> Any:
        return self.func(args, env)


def _kind(value: Any) -> str:
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Event):
        return "event"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "dict"
    if isinstance(value, QueryFunction):
        return "function"
    raise TypeError(f"not a query value: {value!r}")


def _format_number(n: float) -> str:
    n = float(n)
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    if n == 0:
        return "-0" if math.copysign(1.0, n) < 0 else "0"
    if n.is_integer():
        return str(int(n))
    return format(Decimal(repr(n)), "f")


def _quote_key(key: str) -> str:
    return '"' + key.replace("\\", "\\\\").replace('"', '\\"') + '"'


def describe(value: Any) -> str:
    """Return a short, typed description of a query value for messages."""
    match _kind(value):
        case "none":
            return "None()"
        case "bool":
            return f"Bool({'true' if value else 'false'})"
        case "number":
            return f"Number({_format_number(value)})"
        case "string":
            return f"String({value})"
        case "event":
            return f"Event({value!r})"
        case "list":
            return "List([" + ", ".join(describe(v) for v in value) + "])"
        case "dict":
            inner = ", ".join(f"{_quote_key(k)}: {describe(v)}" for k, v in value.items())
            return "Dict({" + inner + "})"
        case _:
            return f"Function({value.name})"


def values_equal(left: Any, right: Any) -> bool:
    """Structural equality; values of different types are never equal."""
    kind = _kind(left)
    if kind != _kind(right):
        return False
    match kind:
        case "none":
            return True
        case "function":
            return False
        case "list":
            return len(left) == len(right) and all(
                values_equal(a, b) for a, b in zip(left, right)
            )
        case "dict":
            return left.keys() == right.keys() and all(
                values_equal(v, right[k]) for k, v in left.items()
            )
        case "number":
            return float(left) == float(right)
        case _:
            return left == right


def query_eq(left: Any, right: Any) -> bool:
    """Compare two values as the ``==`` operator does.

    Comparing values of different types, or functions, raises InvalidType.
    Two ``None`` values compare as false.
    """
    kind = _kind(left)
    if kind != _kind(right) or kind == "function":
        raise InvalidType(
            f"Cannot compare values of different types {describe(left)} and {describe(right)}"
        )
    if kind == "none":
        return False
    return values_equal(left, right)


def as_list(value: Any) -> list[Any]:
    """Return a copy of a list argument."""
    if isinstance(value, list):
        return list(value)
    raise InvalidFunctionParameters(
        f"Expected function parameter of type List, got {describe(value)}"
    )


def as_string(value: Any) -> str:
    """Return a string argument."""
    if isinstance(value, str):
        return value
    raise InvalidFunctionParameters(
        f"Expected function parameter of type String, list contains {describe(value)}"
    )


def as_string_list(value: Any) -> list[str]:
    """Return a list argument whose items must all be strings."""
    return [as_string(item) for item in as_list(value)]


def as_events(value: Any) -> list[Event]:
    """Return a list argument whose items must all be events."""
    events = []
    for item in as_list(value):
        if not isinstance(item, Event):
            raise InvalidFunctionParameters(
                "Expected function parameter of type List of Events, "
                f"list contains {describe(item)}"
            )
        events.append(item)
    return events


def as_number(value: Any) -> float:
    """Return a numeric argument as a float."""
    if _kind(value) == "number":
        return float(value)
    raise InvalidFunctionParameters(
        f"Expected function parameter of type Number, got {describe(value)}"
    )


def as_count(value: Any) -> int:
    """Return a numeric argument as a non-negative count, truncating fractions."""
    number = as_number(value)
    if math.isnan(number) or number <= 0:
        return 0
    if math.isinf(number):
        return sys.maxsize
    return int(number)


def to_json_value(value: Any) -> Any:
    """Convert a plain query value (none, bool, number, string, list) to JSON data."""
    match _kind(value):
        case "none":
            return None
        case "bool":
            return value
        case "number":
            number = float(value)
            if not math.isfinite(number):
                raise ValueError(f"cannot represent {_format_number(number)} in JSON")
            return number
        case "string":
            return value
        case "list":
            return [to_json_value(item) for item in value]
        case _:
            raise InvalidFunctionParameters(
                "Query2 support for parsing values is limited, "
                f"does not support parsing {describe(value)}"
            )


def to_json_values(value: Any) -> list[Any]:
    """Convert a list argument to a list of JSON data."""
    return [to_json_value(item) for item in as_list(value)]