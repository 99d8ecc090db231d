"""Compound reader forms.

Lists are plain Python lists. Everything else that is not a literal gets a
small frozen node so the transformer can tell `[a b]` from `(a b)` and
`'x` from `(quote x)`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from eta import SExpression


@dataclass(frozen=True)
class Vector:
    items: list[SExpression] = field(default_factory=list)

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)


@dataclass(frozen=True)
class Tuple:
    items: list[SExpression] = field(default_factory=list)

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)


@dataclass(frozen=True)
class Quote:
    expr: SExpression


@dataclass(frozen=True)
class Quasiquote:
    expr: SExpression


@dataclass(frozen=True)
class Unquote:
    expr: SExpression


@dataclass(frozen=True)
class UnquoteSplicing:
    expr: SExpression


@dataclass(frozen=True)
class Interpolate:
    name: str


QUOTE_FORMS = (Quote, Quasiquote, Unquote, UnquoteSplicing)
