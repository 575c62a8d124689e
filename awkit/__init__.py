"""Query language interpreter for activity events, with server support helpers."""

__version__ = "0.1.0"

__all__ = [
    "assets",
    "config",
    "cors",
    "datatype",
    "device_id",
    "dirs",
    "errors",
    "functions",
    "hostcheck",
    "httperrors",
    "interpret",
    "lexer",
    "logsetup",
    "parser",
    "syntax",
]