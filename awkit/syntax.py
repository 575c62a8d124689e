"""Syntax tree of the query language."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from awkit.lexer import Span


class BinOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EQUAL = "=="


@dataclass
class Expr:
    """Base of all expressions; the span takes no part in equality."""

    span: Span | None = field(default=None, compare=False, repr=False, kw_only=True)


@dataclass
class BinaryExpr(Expr):
    op: BinOp
    left: Expr
    right: Expr


@dataclass
class Var(Expr):
    name: str


@dataclass
class Assign(Expr):
    name: str
    value: Expr


@dataclass
class Call(Expr):
    name: str
    args: list[Expr]


@dataclass
class If(Expr):
    """A chain of conditions; the first true one runs its block."""

    branches: list[tuple[Expr, list[Expr]]]


@dataclass
class Return(Expr):
    value: Expr


@dataclass
class Literal(Expr):
    value: bool | float | str


@dataclass
class ListExpr(Expr):
    items: list[Expr]


@dataclass
class DictExpr(Expr):
    entries: dict[str, Expr]


@dataclass
class Program:
    stmts: list[Expr] = field(default_factory=list)