from __future__ import annotations

import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.types.environment import Scope


def try_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """
    (try expr) yields the value of expr, or {:error exception} when it raises.
    """
    if len(tail) != 1:
        raise TransformError(f"try expects exactly 1 argument, got {len(tail)}")
    return nodes.call(nodes.runtime("attempt"), nodes.thunk(tf.transform_expr(tail[0], env)))
