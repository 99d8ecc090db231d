from __future__ import annotations

import ast

from eta import SExpression
from eta.transform import nodes
from eta.types.environment import Scope


def str_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """(str a b ...) concatenates the printed forms of its arguments."""
    return nodes.call(nodes.runtime("concat"), *(tf.transform_expr(x, env) for x in tail))


def print_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    return nodes.call(nodes.runtime("write"), *(tf.transform_expr(x, env) for x in tail))


def println_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    return nodes.call(nodes.runtime("writeln"), *(tf.transform_expr(x, env) for x in tail))
