"""
  Lisp Reader

Single-pass recursive-descent reader over the lexer's tokens. No
backtracking, one token of lookahead.

    - nil -> None
    - true / false -> True / False
    - numbers -> int / float
    - strings -> str
    - symbols -> Symbol
    - :name -> Keyword
    - (a b) -> Python list
    - [a b] -> Vector
    - {a b} -> Tuple
    - 'x `x ~x ~@x -> Quote / Quasiquote / Unquote / UnquoteSplicing
    - ~{name} -> Interpolate
"""

from __future__ import annotations

from typing import Iterable, Optional

from eta import SExpression
from eta.errors import ParseError
from eta.reader.lexer import Token, TokenType, tokenize
from eta.types.forms import (
    Interpolate,
    Quasiquote,
    Quote,
    Tuple,
    Unquote,
    UnquoteSplicing,
    Vector,
)
from eta.types.symbol import Keyword, Symbol


PREFIX_FORMS = {
    TokenType.QUOTE: Quote,
    TokenType.QUASIQUOTE: Quasiquote,
    TokenType.UNQUOTE: Unquote,
    TokenType.UNQUOTE_SPLICING: UnquoteSplicing,
}

# opening token -> (closing token, node constructor, name used in errors)
COLLECTIONS = {
    TokenType.LPAREN: (TokenType.RPAREN, list, "list - missing )"),
    TokenType.LBRACKET: (TokenType.RBRACKET, Vector, "vector - missing ]"),
    TokenType.LBRACE: (TokenType.RBRACE, Tuple, "tuple - missing }"),
}

CLOSERS = frozenset(closer for closer, _, _ in COLLECTIONS.values())


class TokenStream:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: list[Token] = list(tokens)
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Optional[Token]:
        tok = self.peek()
        if tok is not None:
            self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def parse_expr(self) -> SExpression:
        tok = self.advance()
        if tok is None:
            raise ParseError("Unexpected end of input")

        kind = tok.type

        if kind in COLLECTIONS:
            closer, build, what = COLLECTIONS[kind]
            items = []
            while True:
                nxt = self.peek()
                if nxt is None:
                    raise ParseError(f"Unclosed {what}")
                if nxt.type == closer:
                    self.advance()
                    break
                items.append(self.parse_expr())
            return items if build is list else build(items)

        # Quote forms wrap exactly one expression
        if kind in PREFIX_FORMS:
            if self.at_end():
                raise ParseError(f"Unexpected end of input after {kind.value!r}")
            return PREFIX_FORMS[kind](self.parse_expr())

        if kind == TokenType.INTERPOLATE:
            return Interpolate(tok.value)

        if kind == TokenType.SYMBOL:
            return Symbol(tok.value)
        if kind == TokenType.KEYWORD:
            return Keyword(tok.value)
        if kind in (TokenType.NUMBER, TokenType.STRING, TokenType.BOOLEAN):
            return tok.value
        if kind == TokenType.NIL:
            return None

        raise ParseError(f"Unexpected token: {tok!r}")

    def parse_all(self) -> list[SExpression]:
        forms = []
        while not self.at_end():
            if self.peek().type in CLOSERS:
                remaining = self.tokens[self.pos:]
                raise ParseError(f"Unexpected tokens remaining: {remaining!r}")
            forms.append(self.parse_expr())
        return forms


def parse_all(tokens: Iterable[Token]) -> list[SExpression]:
    """Parse every top-level form; always returns a list."""
    return TokenStream(tokens).parse_all()


def parse(tokens: Iterable[Token]) -> SExpression | list[SExpression]:
    """Parse tokens, unwrapping a lone top-level form.

    No forms gives [], one form gives that form, several give the list of them.
    Callers that must not care about the difference use `parse_all`.
    """
    forms = parse_all(tokens)
    if len(forms) == 1:
        return forms[0]
    return forms


def read(source: str) -> list[SExpression]:
    """Tokenize and parse `source` into its list of top-level forms."""
    return parse_all(tokenize(source))
