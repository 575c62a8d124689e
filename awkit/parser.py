"""Recursive-descent parser for the query language."""

from __future__ import annotations

from collections.abc import Iterable

from awkit.errors import ParsingError
from awkit.lexer import Span, Token, TokenKind, tokenize
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

_BINOPS = {
    TokenKind.PLUS: BinOp.ADD,
    TokenKind.MINUS: BinOp.SUB,
    TokenKind.STAR: BinOp.MUL,
    TokenKind.SLASH: BinOp.DIV,
    TokenKind.PERCENT: BinOp.MOD,
    TokenKind.EQUALS: BinOp.EQUAL,
}

_LITERALS = (TokenKind.BOOL, TokenKind.NUMBER, TokenKind.STRING)


def _join(start: Span, end: Span) -> Span:
    return Span(start.lo, end.hi, start.line)


class Parser:
    """Builds a Program from a sequence of tokens.

    All binary operators share one precedence level and associate to the left.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._pos = 0
        self._previous: Token | None = None

    def parse_program(self) -> Program:
        stmts = self._statements()
        token = self._peek()
        if token is not None:
            raise self._unexpected(token, "a statement")
        return Program(stmts)

    # -- token helpers -------------------------------------------------

    def _peek(self, offset: int = 0) -> Token | None:
        index = self._pos + offset
        return self._tokens[index] if index < len(self._tokens) else None

    def _check(self, kind: TokenKind, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.kind is kind

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        self._previous = token
        return token

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        token = self._peek()
        if token is None or token.kind is not kind:
            raise self._unexpected(token, expected)
        return self._advance()

    def _since(self, start: Token) -> Span:
        assert self._previous is not None
        return _join(start.span, self._previous.span)

    @staticmethod
    def _unexpected(token: Token | None, expected: str) -> ParsingError:
        if token is None:
            return ParsingError(f"unexpected end of input, expected {expected}")
        span = token.span
        return ParsingError(
            f"unexpected {token.kind.name} at line {span.line} "
            f"(offset {span.lo}..{span.hi}), expected {expected}"
        )

    # -- statements ----------------------------------------------------

    def _statements(self) -> list[Expr]:
        stmts: list[Expr] = []
        while (token := self._peek()) is not None and token.kind is not TokenKind.RBRACE:
            if token.kind is TokenKind.SEMI:
                self._advance()
                continue
            stmts.append(self._statement())
        return stmts

    def _statement(self) -> Expr:
        if self._check(TokenKind.IF):
            return self._if_chain()
        expr = self._ret()
        self._expect(TokenKind.SEMI, "';'")
        return expr

    def _block(self) -> list[Expr]:
        self._expect(TokenKind.LBRACE, "'{'")
        stmts = self._statements()
        self._expect(TokenKind.RBRACE, "'}'")
        return stmts

    def _cond_block(self) -> tuple[Expr, list[Expr]]:
        cond = self._binop()
        return cond, self._block()

    def _if_chain(self) -> Expr:
        start = self._advance()
        branches = [self._cond_block()]
        while self._check(TokenKind.ELIF):
            self._advance()
            branches.append(self._cond_block())
        if self._check(TokenKind.ELSE):
            else_token = self._advance()
            block = self._block()
            branches.append((Literal(True, span=self._since(else_token)), block))
        return If(branches, span=self._since(start))

    def _ret(self) -> Expr:
        if self._check(TokenKind.RETURN):
            start = self._advance()
            value = self._assign()
            return Return(value, span=self._since(start))
        return self._assign()

    def _assign(self) -> Expr:
        if self._check(TokenKind.IDENT) and self._check(TokenKind.ASSIGN, 1):
            name_token = self._advance()
            self._advance()
            value = self._binop()
            return Assign(name_token.value, value, span=self._since(name_token))
        return self._binop()

    # -- expressions ---------------------------------------------------

    def _binop(self) -> Expr:
        left = self._func()
        while (token := self._peek()) is not None and token.kind in _BINOPS:
            self._advance()
            right = self._func()
            left = BinaryExpr(_BINOPS[token.kind], left, right, span=_join(left.span, right.span))
        return left

    def _func(self) -> Expr:
        if self._check(TokenKind.IDENT) and self._check(TokenKind.LPAREN, 1):
            name_token = self._advance()
            self._advance()
            if self._check(TokenKind.RPAREN):
                args: list[Expr] = []
            else:
                args = self._inner_list()
            self._expect(TokenKind.RPAREN, "')'")
            return Call(name_token.value, args, span=self._since(name_token))
        return self._object()

    def _object(self) -> Expr:
        if not self._check(TokenKind.LBRACE):
            return self._list()
        start = self._advance()
        entries: dict[str, Expr] = {}
        if not self._check(TokenKind.RBRACE):
            while True:
                key = self._expect(TokenKind.STRING, "a string key")
                self._expect(TokenKind.COLON, "':'")
                entries[key.value] = self._binop()
                if not self._check(TokenKind.COMMA):
                    break
                self._advance()
        self._expect(TokenKind.RBRACE, "'}'")
        return DictExpr(entries, span=self._since(start))

    def _list(self) -> Expr:
        if not self._check(TokenKind.LBRACKET):
            return self._atom()
        start = self._advance()
        items = [] if self._check(TokenKind.RBRACKET) else self._inner_list()
        self._expect(TokenKind.RBRACKET, "']'")
        return ListExpr(items, span=self._since(start))

    def _inner_list(self) -> list[Expr]:
        items = [self._binop()]
        while self._check(TokenKind.COMMA):
            self._advance()
            items.append(self._binop())
        return items

    def _atom(self) -> Expr:
        token = self._peek()
        if token is None:
            raise self._unexpected(None, "an expression")
        if token.kind is TokenKind.IDENT:
            self._advance()
            return Var(token.value, span=token.span)
        if token.kind in _LITERALS:
            self._advance()
            return Literal(token.value, span=token.span)
        if token.kind is TokenKind.LPAREN:
            self._advance()
            expr = self._binop()
            self._expect(TokenKind.RPAREN, "')'")
            return expr
        raise self._unexpected(token, "an expression")


def parse(text: str) -> Program:
    """Parse query source text into a Program."""
    return Parser(tokenize(text)).parse_program()