"""Lexical scope used while transforming.

A Scope only records which names a binding form introduced; it never holds
values. Scopes are immutable: `extend` returns a child that links back to
its parent, so sibling branches never see each other's bindings.
"""

from __future__ import annotations

from typing import Iterable, Optional

from eta.types.symbol import Symbol


class Scope:
    """Chain of frozen name sets, innermost first."""

    __slots__ = ("names", "outer")

    def __init__(self, names: Iterable[str] = (), outer: Optional[Scope] = None):
        self.names: frozenset[str] = frozenset(names)
        self.outer: Scope | None = outer

    def extend(self, *names: Symbol | str) -> Scope:
        """Return a new scope with `names` bound on top of this one."""
        if not names:
            return self
        return Scope((str(n) for n in names), self)

    def is_bound(self, name: Symbol | str) -> bool:
        key = str(name)
        scope: Optional[Scope] = self
        while scope is not None:
            if key in scope.names:
                return True
            scope = scope.outer
        return False

    def __contains__(self, name: Symbol | str) -> bool:
        return self.is_bound(name)

    def __repr__(self) -> str:
        chain = []
        scope: Optional[Scope] = self
        while scope is not None:
            chain.append(sorted(scope.names))
            scope = scope.outer
        return f"Scope({chain})"


EMPTY_SCOPE = Scope()
