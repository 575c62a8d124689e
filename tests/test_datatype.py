import json
from datetime import datetime, timedelta, timezone

import pytest

from awkit.datatype import (
    Event,
    QueryFunction,
    as_count,
    as_events,
    as_list,
    as_number,
    as_string,
    as_string_list,
    describe,
    query_eq,
    to_json_value,
    to_json_values,
    values_equal,
)
from awkit.errors import InvalidFunctionParameters, InvalidType


def _event(seconds=0, data=None):
    return Event(
        timestamp=datetime(2018, 1, 1, 1, 1, 1, tzinfo=timezone.utc),
        duration=timedelta(seconds=seconds),
        data=data or {},
    )


def _noop(args, env):
    return None


def test_event_json_matches_wire_format():
    event = Event(
        timestamp=datetime(2018, 1, 1, 1, 1, 1, tzinfo=timezone.utc),
        duration=timedelta(seconds=1),
        data={},
        id=1,
    )
    text = json.dumps(event.to_json(), separators=(",", ":"))
    assert text == '{"id":1,"timestamp":"2018-01-01T01:01:01Z","duration":1.0,"data":{}}'


def test_event_json_round_trip():
    event = Event(
        timestamp=datetime(2018, 1, 1, 1, 1, 1, 250000, tzinfo=timezone.utc),
        duration=timedelta(seconds=2.5),
        data={"key": "value"},
        id=7,
    )
    assert Event.from_json(event.to_json()) == event


def test_event_from_json_parses_source_example():
    event = Event.from_json(
        {"timestamp": "2018-01-01T01:01:02Z", "duration": 1.0, "data": {}}
    )
    assert event.timestamp == datetime(2018, 1, 1, 1, 1, 2, tzinfo=timezone.utc)
    assert event.duration == timedelta(seconds=1)
    assert event.id is None
    assert event.data == {}


def test_event_from_json_requires_timestamp():
    with pytest.raises(ValueError):
        Event.from_json({"duration": 1.0})


def test_describe_scalars():
    assert describe(None) == "None()"
    assert describe(True) == "Bool(true)"
    assert describe(1.0) == "Number(1)"
    assert describe(1.1) == "Number(1.1)"
    assert describe("abc") == "String(abc)"


def test_describe_containers_and_functions():
    assert describe([1.0, "a"]) == "List([Number(1), String(a)])"
    assert describe({"a": 1.0}) == 'Dict({"a": Number(1)})'
    assert describe(QueryFunction("print", _noop)) == "Function(print)"


def test_query_eq_same_types():
    assert query_eq(1.0, 1.0) is True
    assert query_eq(2.0, 1.0) is False
    assert query_eq("a", "a") is True
    assert query_eq(True, False) is False
    assert query_eq([1.0, "x"], [1.0, "x"]) is True


def test_query_eq_none_is_false():
    assert query_eq(None, None) is False


def test_query_eq_different_types_raises():
    with pytest.raises(InvalidType):
        query_eq(True, 1.0)


def test_query_eq_functions_raise():
    fn = QueryFunction("print", _noop)
    with pytest.raises(InvalidType):
        query_eq(fn, fn)


def test_values_equal_does_not_mix_bool_and_number():
    assert values_equal([True], [1.0]) is False
    assert values_equal({"a": [True]}, {"a": [True]}) is True
    assert values_equal(None, None) is True
    assert values_equal(_event(1), _event(1)) is True
    assert values_equal(_event(1), _event(2)) is False


def test_as_list_returns_copy():
    original = [1.0]
    copy = as_list(original)
    copy.append(2.0)
    assert original == [1.0]


def test_as_list_rejects_non_list():
    with pytest.raises(InvalidFunctionParameters) as info:
        as_list("x")
    assert info.value.message == "Expected function parameter of type List, got String(x)"


def test_as_string_and_string_list():
    assert as_string("key") == "key"
    assert as_string_list(["a", "b"]) == ["a", "b"]
    with pytest.raises(InvalidFunctionParameters):
        as_string_list(["a", 1.0])


def test_as_events():
    events = [_event(1), _event(2)]
    assert as_events(events) == events
    with pytest.raises(InvalidFunctionParameters):
        as_events([_event(1), "not an event"])


def test_as_number_and_count():
    assert as_number(2.5) == 2.5
    assert as_count(3.9) == 3
    assert as_count(-1.0) == 0
    with pytest.raises(InvalidFunctionParameters):
        as_number(True)


def test_to_json_value_converts_nested_lists():
    assert to_json_value([None, True, 1.0, "s", [2.0]]) == [None, True, 1.0, "s", [2.0]]
    assert to_json_values(["a", "b"]) == ["a", "b"]


def test_to_json_value_rejects_dicts_and_events():
    with pytest.raises(InvalidFunctionParameters):
        to_json_value({"a": 1.0})
    with pytest.raises(InvalidFunctionParameters):
        to_json_values([_event()])


def test_query_function_calls_through():
    fn = QueryFunction("echo", lambda args, env: args[0])
    assert fn(["hello"], {}) == "hello"
    assert fn.name == "echo"