"""Mapping of Lisp symbol names onto Python identifiers.

    foo-bar  -> foo_bar
    empty?   -> empty_p
    reset!   -> reset_bang
    lambda   -> lambda_
    +        -> _x2b_

The mapping is not injective: foo-bar and foo_bar, or empty? and empty_p,
name the same Python identifier and so the same binding.
"""

from __future__ import annotations

import keyword

from eta.errors import TransformError


def mangle(name: str) -> str:
    if not name:
        raise TransformError("Empty name")
    if name.isidentifier() and not keyword.iskeyword(name):
        return name

    out = []
    for i, ch in enumerate(name):
        if ch == "-":
            out.append("_")
        elif ch == "?" and i == len(name) - 1:
            out.append("_p")
        elif ch == "!" and i == len(name) - 1:
            out.append("_bang")
        elif ch == "_" or ch.isalnum():
            out.append(ch)
        else:
            out.append(f"_x{ord(ch):x}_")
    ident = "".join(out)
    if not ident.isidentifier():
        ident = "_" + ident
    if keyword.iskeyword(ident):
        ident += "_"
    return ident


def split_dotted(name: str) -> list[str]:
    """Split `ns.member.attr` into its parts; every part must be non-empty."""
    parts = name.split(".")
    if len(parts) < 2 or not all(parts):
        raise TransformError(f"Malformed qualified name: {name}")
    return parts
