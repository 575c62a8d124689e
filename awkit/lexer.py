"""Tokenizer for the query language."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    IDENT = auto()
    IF = auto()
    ELIF = auto()
    ELSE = auto()
    RETURN = auto()
    BOOL = auto()
    NUMBER = auto()
    STRING = auto()
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    EQUALS = auto()
    ASSIGN = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()
    COMMA = auto()
    COLON = auto()
    SEMI = auto()


@dataclass(frozen=True)
class Span:
    """Character offsets of a piece of source and the line it starts on."""

    lo: int
    hi: int
    line: int


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str | float | bool | None
    span: Span


_WHITESPACE = "whitespace"
_NEWLINE = "newline"
_COMMENT = "comment"

# Order matters: on equally long matches the earlier rule wins.
_RULES = tuple(
    (re.compile(pattern), kind)
    for pattern, kind in (
        (r"[ \t\r]+", _WHITESPACE),
        (r"\n", _NEWLINE),
        (r"#[^\n]*", _COMMENT),
        (r"if", TokenKind.IF),
        (r"elif", TokenKind.ELIF),
        (r"else", TokenKind.ELSE),
        (r"return", TokenKind.RETURN),
        (r"true", TokenKind.BOOL),
        (r"false", TokenKind.BOOL),
        (r"True", TokenKind.BOOL),
        (r"False", TokenKind.BOOL),
        (r'"(?:\\"|[^"])*"', TokenKind.STRING),
        (r"[0-9]+\.?[0-9]*", TokenKind.NUMBER),
        (r"[a-zA-Z_][a-zA-Z0-9_]*", TokenKind.IDENT),
        (r"==", TokenKind.EQUALS),
        (r"=", TokenKind.ASSIGN),
        (r"\+", TokenKind.PLUS),
        (r"-", TokenKind.MINUS),
        (r"\*", TokenKind.STAR),
        (r"/", TokenKind.SLASH),
        (r"%", TokenKind.PERCENT),
        (r"\(", TokenKind.LPAREN),
        (r"\)", TokenKind.RPAREN),
        (r"\[", TokenKind.LBRACKET),
        (r"\]", TokenKind.RBRACKET),
        (r"\{", TokenKind.LBRACE),
        (r"\}", TokenKind.RBRACE),
        (r",", TokenKind.COMMA),
        (r":", TokenKind.COLON),
        (r";", TokenKind.SEMI),
    )
)


def _value_of(kind: TokenKind, lexeme: str) -> str | float | bool | None:
    match kind:
        case TokenKind.IDENT:
            return lexeme
        case TokenKind.BOOL:
            return lexeme in ("true", "True")
        case TokenKind.NUMBER:
            return float(lexeme)
        case TokenKind.STRING:
            return lexeme[1:-1].replace('\\"', '"')
        case _:
            return None


def tokenize(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text``.

    Whitespace and ``#`` comments are skipped. Scanning stops quietly at the
    first character that starts no token.
    """
    pos = 0
    line = 1
    while pos < len(text):
        best_len = 0
        best_kind = None
        for pattern, kind in _RULES:
            match = pattern.match(text, pos)
            if match is not None and match.end() - pos > best_len:
                best_len = match.end() - pos
                best_kind = kind
        if best_kind is None:
            return
        start, pos = pos, pos + best_len
        if best_kind is _NEWLINE:
            line += 1
            continue
        if best_kind is _WHITESPACE or best_kind is _COMMENT:
            continue
        lexeme = text[start:pos]
        yield Token(best_kind, _value_of(best_kind, lexeme), Span(start, pos, line))