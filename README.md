# awkit

`awkit` is a toolkit for activity-tracking data. It has two parts:

* a small **query language** for timestamped events, with a lexer, a parser
  and an interpreter;
* **support pieces for an activity server**: configuration files, per-user
  directories, a persistent device identifier, log setup, CORS rules,
  Host-header checks, JSON error bodies and lookup of web UI files.

## The query language

A query is a sequence of statements that end in semicolons. The value given to
`return` (or assigned to the variable `RETURN`) is the result of the query.

```python
from awkit.interpret import query

interval = "1980-01-01T00:00:00Z/2080-01-02T00:00:00Z"

query("return 1 + 1;", interval)                            # 2.0
query('return "a" + "b";', interval)                        # "ab"
query("return [1] + [2];", interval)                        # [1.0, 2.0]
query('a = {"a": 1}; return contains(a, "a");', interval)   # True
query("n = 1; if False { n = 2; } else { n = 3; } return n;", interval)  # 3.0
```

The time interval is bound, as a string, to the variable `TIMEINTERVAL`.

What the language has:

* numbers (always floats), strings with `\"` escapes, `true`/`false` (also
  `True`/`False`), lists `[...]` and dicts `{"key": value}`;
* `+` on numbers, lists and strings; `-`, `*`, `/` and `%` on numbers;
  division by zero raises `MathError`;
* `==`, which raises `InvalidType` when the two sides have different types;
* all binary operators share one precedence level and group from the left, so
  `1 + 2 * 3` is `9`; use parentheses to group otherwise;
* variables, assignment, and `if` / `elif` / `else` blocks in braces;
* `#` comments to the end of the line.

Built-in functions:

| function | does |
| --- | --- |
| `print(...)` | logs each argument through the `awkit.functions` logger, returns nothing |
| `contains(list_or_dict, value)` | whether a list holds the value, or a dict holds the string key |
| `limit_events(events, n)` | the first `n` events of a list |
| `sum_durations(events)` | total duration in seconds, at millisecond precision |
| `concat(events, ...)` | all event lists joined into one |

Every error is a subclass of `awkit.errors.QueryError`: `ParsingError`,
`EmptyQuery` (nothing was returned), `VariableNotDefined`, `MathError`,
`InvalidType`, `InvalidFunctionParameters`, `TimeIntervalError`,
`BucketQueryError` and `RegexCompileError`.

```python
from awkit.errors import MathError, VariableNotDefined

try:
    query("return 1/0;", interval)
except MathError as err:
    print(err)   # MathError("Tried to divide by zero!")

try:
    query("return no_such_function(1);", interval)
except VariableNotDefined as err:
    print(err.message)   # no_such_function
```

### Using the stages separately

`awkit.lexer.tokenize` yields `Token`s, `awkit.parser.parse` builds a
`Program` of nodes from `awkit.syntax`, and `awkit.interpret.interpret_program`
runs it. To give a query events of your own, build an environment with
`init_env` and evaluate statements in it:

```python
from datetime import datetime, timedelta, timezone

from awkit.datatype import Event
from awkit.interpret import evaluate, init_env
from awkit.parser import parse

env = init_env(interval)
env["events"] = [
    Event(datetime(2020, 1, 1, tzinfo=timezone.utc), timedelta(seconds=5)),
    Event(datetime(2020, 1, 2, tzinfo=timezone.utc), timedelta(seconds=7)),
]
for stmt in parse("return sum_durations(events);").stmts:
    evaluate(stmt, env)
env["RETURN"]   # 12.0
```

Query values are plain Python objects: `None`, `bool`, `float`, `str`,
`Event`, `list`, `dict` and `QueryFunction`. `Event.to_json()` and
`Event.from_json(...)` convert events to and from their JSON form, and
`awkit.datatype` has the conversions the built-ins use (`as_events`,
`as_string`, `to_json_value` and so on).

## Server support

```python
from awkit.config import AWConfig
from awkit.cors import cors_policy
from awkit.hostcheck import HostCheck

config = AWConfig.defaults(testing=False)        # address 127.0.0.1, port 5600
policy = cors_policy(config)
policy.allows_origin("http://localhost:5600")    # True
policy.allows_method("PUT")                      # False

check = HostCheck(config)
check.is_allowed("127.0.0.1:5600")               # True
check.is_allowed("192.168.0.1:1234")             # False
```

* `awkit.config`: `AWConfig` with `defaults`, `from_toml` and `to_toml`;
  `create_config` reads `config.toml` (or `config-testing.toml` in testing
  mode, default port 5666) and first writes a commented-out file of defaults
  if there is none; `apply_custom_static` adds `name=/path,...` entries and
  drops those whose path does not exist.
* `awkit.dirs`: the config, data, cache and log directories, created on
  demand, and `db_path` for the database file.
* `awkit.device_id.get_device_id`: a UUID stored in the data directory.
* `awkit.logsetup.setup_logger`: logs to stdout with coloured levels and to a
  timestamped file in the log directory; the `LOG_LEVEL` environment variable
  (`trace`, `debug`, `info`, `warn`, `error`) overrides the level.
* `awkit.httperrors`: `HttpError` with a status and a message, whose
  `to_json()` gives the `{"message": ...}` body; `parse_setting_key` and
  `strip_setting_prefix` for setting keys; `export_content_disposition` for
  export downloads.
* `awkit.assets.AssetResolver`: finds web UI files in a directory or a given
  mapping of bundled files, with `content_type_for` picking the content type.

## What awkit does not do

* It stores nothing: there is no event database and no buckets. The query
  language therefore has no functions that read buckets or events from
  storage, and none that categorize, tag, flood, sort, merge or filter events;
  events reach a query only through an environment you fill yourself.
* It has no HTTP server and no command to start one. The server support
  modules are building blocks that a server would call.