"""Evaluation of parsed queries."""

from __future__ import annotations

import logging
import math
from typing import Any

from awkit.datatype import QueryFunction, query_eq
from awkit.errors import EmptyQuery, InvalidType, MathError, ParsingError, VariableNotDefined
from awkit.functions import fill_env
from awkit.parser import parse
from awkit.syntax import (
    Assign,
    BinaryExpr,
    BinOp,
    Call,
    DictExpr,
    Expr,
    If,
    ListExpr,
    Literal,
    Program,
    Return,
    Var,
)

logger = logging.getLogger(__name__)

_RETURN = "RETURN"
_NOT_A_NUMBER = "Cannot sub something that is not a number!"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def init_env(timeinterval: Any) -> dict[str, Any]:
    """Return a fresh environment with the time interval and all built-ins bound."""
    env: dict[str, Any] = {"TIMEINTERVAL": str(timeinterval)}
    fill_env(env)
    return env


def interpret_program(program: Program, timeinterval: Any) -> Any:
    """Run every statement of ``program`` and return the value it returned."""
    env = init_env(timeinterval)
    for stmt in program.stmts:
        evaluate(stmt, env)
    if _RETURN not in env:
        raise EmptyQuery()
    return env.pop(_RETURN)


def _add(left: Any, right: Any) -> Any:
    if _is_number(left):
        if _is_number(right):
            return float(left) + float(right)
        raise InvalidType("Cannot use + on something that is not a number with a number!")
    if isinstance(left, list):
        if isinstance(right, list):
            return left + right
        raise InvalidType("Cannot use + on something that is not a list with a list!")
    if isinstance(left, str):
        if isinstance(right, str):
            return left + right
        raise InvalidType("Cannot use + on something that is not a list with a list!")
    raise InvalidType("Cannot use + on something that is not a number, list or string!")


def _numbers(left: Any, right: Any) -> tuple[float, float]:
    if not _is_number(left) or not _is_number(right):
        raise InvalidType(_NOT_A_NUMBER)
    return float(left), float(right)


def _fmod(a: float, b: float) -> float:
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


def _binary(op: BinOp, left: Any, right: Any) -> Any:
    match op:
        case BinOp.ADD:
            return _add(left, right)
        case BinOp.EQUAL:
            return query_eq(left, right)
    a, b = _numbers(left, right)
    match op:
        case BinOp.SUB:
            return a - b
        case BinOp.MUL:
            return a * b
        case BinOp.DIV:
            if b == 0.0:
                raise MathError("Tried to divide by zero!")
            return a / b
        case _:
            return _fmod(a, b)


def evaluate(expr: Expr, env: dict[str, Any]) -> Any:
    """Evaluate one expression in ``env``, which assignments update in place."""
    match expr:
        case BinaryExpr(op=op, left=left, right=right):
            left_value = evaluate(left, env)
            right_value = evaluate(right, env)
            return _binary(op, left_value, right_value)
        case Assign(name=name, value=value):
            env[name] = evaluate(value, env)
            return None
        case Var(name=name):
            if name not in env:
                raise VariableNotDefined(name)
            return env[name]
        case Literal(value=value):
            return value
        case Return(value=value):
            env[_RETURN] = evaluate(value, env)
            return None
        case If(branches=branches):
            for cond, block in branches:
                if query_eq(evaluate(cond, env), True):
                    for stmt in block:
                        evaluate(stmt, env)
                    break
            return None
        case Call(name=name, args=args):
            values = [evaluate(arg, env) for arg in args]
            if name not in env:
                raise VariableNotDefined(name)
            func = env[name]
            if not isinstance(func, QueryFunction):
                raise InvalidType(name)
            return func(values, env)
        case ListExpr(items=items):
            return [evaluate(item, env) for item in items]
        case DictExpr(entries=entries):
            return {key: evaluate(value, env) for key, value in entries.items()}
    raise TypeError(f"not an expression: {expr!r}")


def query(code: str, timeinterval: Any) -> Any:
    """Parse and run query source text over the given time interval."""
    try:
        program = parse(code)
    except ParsingError as err:
        logger.warning("ParsingError: %s", err.message)
        raise
    return interpret_program(program, timeinterval)