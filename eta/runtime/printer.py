"""Display conversion used by str, print and println."""

from __future__ import annotations

from eta.types.symbol import Symbol


def to_str(value) -> str:
    """Render a runtime value for display; strings come out unquoted."""
    if isinstance(value, str):
        return value
    return to_repr(value)


def to_repr(value) -> str:
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, Symbol):
        return value.id
    if isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    if isinstance(value, list):
        return "(" + " ".join(to_repr(v) for v in value) + ")"
    if isinstance(value, tuple):
        return "{" + " ".join(to_repr(v) for v in value) + "}"
    return str(value)
