"""Structural matching used by case and by fn forms with destructuring arguments.

Patterns built by the transformer:

    Var("x")                 binds the matched value
    Var(None)                wildcard
    Lit(value)               equality (bool and numbers are kept apart)
    Seq(list, [p...], rest)  exact-type sequence, optional rest Var

`case` patterns are literal data (lists, tuples, Symbols, numbers...) where
the symbol `_` matches anything; `match_literal` handles those.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from eta.errors import CaseClauseError, FunctionClauseError
from eta.types.symbol import Symbol

WILDCARD = Symbol("_")


@dataclass(frozen=True)
class Var:
    name: Optional[str] = None


@dataclass(frozen=True)
class Lit:
    value: Any = None


@dataclass(frozen=True)
class Seq:
    kind: type = list
    items: tuple = field(default_factory=tuple)
    rest: Optional[Var] = None


def _same_literal(pattern, value) -> bool:
    if isinstance(pattern, bool) or isinstance(value, bool):
        return type(pattern) is type(value) and pattern == value
    return pattern == value


def bind(pattern, value, out: list) -> bool:
    """Match `value` against `pattern`, appending bound values to `out` in order."""
    if isinstance(pattern, Var):
        if pattern.name is not None:
            out.append(value)
        return True
    if isinstance(pattern, Lit):
        return _same_literal(pattern.value, value)
    if isinstance(pattern, Seq):
        if not isinstance(value, pattern.kind):
            return False
        n = len(pattern.items)
        if pattern.rest is None:
            if len(value) != n:
                return False
        elif len(value) < n:
            return False
        for sub, item in zip(pattern.items, value):
            if not bind(sub, item, out):
                return False
        if pattern.rest is not None and pattern.rest.name is not None:
            out.append(list(value[n:]))
        return True
    raise TypeError(f"Not a pattern: {pattern!r}")


def destructure(name: str, patterns: tuple, args: tuple) -> list:
    """Bind positional `args` against `patterns`; raise FunctionClauseError on mismatch."""
    out: list = []
    if len(patterns) != len(args):
        raise FunctionClauseError(name, args)
    for pattern, arg in zip(patterns, args):
        if not bind(pattern, arg, out):
            raise FunctionClauseError(name, args)
    return out


def match_literal(pattern, value) -> bool:
    if pattern == WILDCARD:
        return True
    if isinstance(pattern, (list, tuple)):
        if type(pattern) is not type(value) or len(pattern) != len(value):
            return False
        return all(match_literal(p, v) for p, v in zip(pattern, value))
    return _same_literal(pattern, value)


def select(value, clauses: tuple[tuple[Any, Callable], ...]):
    """Run the body of the first (pattern, thunk) clause whose pattern matches."""
    for pattern, thunk in clauses:
        if match_literal(pattern, value):
            return thunk()
    raise CaseClauseError(value)
