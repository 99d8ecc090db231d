from __future__ import annotations
import sys


class Symbol:
    """A reader atom such as car or my-var. Names are interned and compared by text."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    def __eq__(self, other: Symbol) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


class Keyword:
    """A reader keyword such as :name. Distinct from a Symbol of the same name."""

    __slots__ = ("id",)

    def __init__(self, name: str):
        self.id = sys.intern(name)

    def __eq__(self, other: Keyword) -> bool:
        return isinstance(other, Keyword) and self.id == other.id

    def __hash__(self) -> int:
        return hash((":", self.id))

    def __repr__(self):
        return f"Keyword({self.id!r})"

    def __str__(self):
        return ":" + self.id
