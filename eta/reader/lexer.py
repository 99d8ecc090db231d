"""
  Lisp Lexer

Turns source text into a flat list of tokens. The lexer keeps no state
between calls and always terminates: every loop iteration either consumes
at least one character or raises LexError.

- whitespace: space, tab, CR, LF
- comments: ; to end of line
- delimiters: ( ) [ ] { }
- reader prefixes: ' ` ~ ~@ ~{name}
- strings: "..." with \\" \\n \\t \\r \\\\ escapes
- numbers: 42, -7, 3.14, -2.5
- keywords: :name
- symbols: everything else built from SYMBOL_CHARS, with true/false/nil
  read as literals
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from eta.errors import LexError


class TokenType(Enum):
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    LBRACE = "{"
    RBRACE = "}"
    QUOTE = "'"
    QUASIQUOTE = "`"
    UNQUOTE = "~"
    UNQUOTE_SPLICING = "~@"
    INTERPOLATE = "~{"
    SYMBOL = "symbol"
    NUMBER = "number"
    STRING = "string"
    KEYWORD = "keyword"
    BOOLEAN = "boolean"
    NIL = "nil"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any = None

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type.name})"
        return f"Token({self.type.name}, {self.value!r})"


WHITESPACE = frozenset(" \t\r\n")

PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "'": TokenType.QUOTE,
    "`": TokenType.QUASIQUOTE,
}

SYMBOL_PUNCTUATION = frozenset("_+-*/<>=!?.|")

LITERALS: dict[str, Token] = {
    "true": Token(TokenType.BOOLEAN, True),
    "false": Token(TokenType.BOOLEAN, False),
    "nil": Token(TokenType.NIL),
}

DIGITS = frozenset("0123456789")

NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]*)?")

STRING_ESCAPES: dict[str, str] = {
    '"': '"',
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
}


def is_symbol_char(ch: str) -> bool:
    return ch.isalnum() or ch in SYMBOL_PUNCTUATION


def tokenize(source: str) -> list[Token]:
    """Tokenize `source` into a list of tokens."""
    return list(lex(source))


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token records left to right."""
    pos = 0
    n = len(source)

    while pos < n:
        ch = source[pos]

        if ch in WHITESPACE:
            pos += 1
            continue

        if ch == ";":
            newline = source.find("\n", pos)
            pos = n if newline < 0 else newline
            continue

        if ch in PUNCTUATION:
            yield Token(PUNCTUATION[ch])
            pos += 1
            continue

        # ----------------------
        # ~@ before ~{ before bare ~
        # ----------------------
        if ch == "~":
            if source.startswith("~@", pos):
                yield Token(TokenType.UNQUOTE_SPLICING)
                pos += 2
            elif source.startswith("~{", pos):
                close = source.find("}", pos + 2)
                if close < 0:
                    raise LexError(f"Unterminated interpolation at {pos}: missing '}}'", pos)
                name = source[pos + 2:close].strip()
                if not name:
                    raise LexError(f"Empty interpolation at {pos}", pos)
                yield Token(TokenType.INTERPOLATE, name)
                pos = close + 1
            else:
                yield Token(TokenType.UNQUOTE)
                pos += 1
            continue

        if ch == '"':
            text, pos = _read_string(source, pos)
            yield Token(TokenType.STRING, text)
            continue

        # A '-' only starts a number when a digit follows; otherwise it is a symbol.
        if ch in DIGITS or (ch == "-" and pos + 1 < n and source[pos + 1] in DIGITS):
            m = NUMBER_RE.match(source, pos)
            literal = m.group(0)
            value = float(literal) if "." in literal else int(literal)
            yield Token(TokenType.NUMBER, value)
            pos = m.end()
            continue

        if ch == ":":
            end = _symbol_end(source, pos + 1)
            if end == pos + 1:
                raise LexError(f"Empty keyword at {pos}", pos)
            yield Token(TokenType.KEYWORD, source[pos + 1:end])
            pos = end
            continue

        if is_symbol_char(ch):
            end = _symbol_end(source, pos)
            name = source[pos:end]
            yield LITERALS.get(name) or Token(TokenType.SYMBOL, name)
            pos = end
            continue

        raise LexError(f"Unexpected character at {pos}: {ch!r}", pos)


def _symbol_end(source: str, pos: int) -> int:
    n = len(source)
    while pos < n and is_symbol_char(source[pos]):
        pos += 1
    return pos


def _read_string(source: str, start: int) -> tuple[str, int]:
    """Read a string literal starting at the opening quote; return (text, next_pos)."""
    chars: list[str] = []
    pos = start + 1
    n = len(source)
    while pos < n:
        ch = source[pos]
        if ch == '"':
            return "".join(chars), pos + 1
        if ch == "\\" and pos + 1 < n and source[pos + 1] in STRING_ESCAPES:
            chars.append(STRING_ESCAPES[source[pos + 1]])
            pos += 2
            continue
        chars.append(ch)
        pos += 1
    raise LexError(f"Unterminated string starting at {start}", start)
