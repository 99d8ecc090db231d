from __future__ import annotations

import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.types.environment import Scope


def _arity(form: str, tail: list[SExpression], n: int) -> None:
    if len(tail) != n:
        plural = "argument" if n == 1 else "arguments"
        raise TransformError(f"{form} expects exactly {n} {plural}, got {len(tail)}")


def car_form(form: str, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """car, head and first: first element, nil when empty."""
    _arity(form, tail, 1)
    return nodes.call(nodes.runtime("car"), tf.transform_expr(tail[0], env))


def cdr_form(form: str, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """cdr, tail and rest: everything after the first element."""
    _arity(form, tail, 1)
    return nodes.call(nodes.runtime("cdr"), tf.transform_expr(tail[0], env))


def cons_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    _arity("cons", tail, 2)
    elem, seq = (tf.transform_expr(x, env) for x in tail)
    return nodes.call(nodes.runtime("cons"), elem, seq)


def list_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    return nodes.list_([tf.transform_expr(x, env) for x in tail])


def predicate_form(form: str, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    _arity(form, tail, 1)
    value = tf.transform_expr(tail[0], env)
    match form:
        case "nil?":
            return ast.Compare(left=value, ops=[ast.Is()], comparators=[nodes.const(None)])
        case "empty?":
            return nodes.call(nodes.runtime("empty_p"), value)
        case "list?":
            return nodes.call(nodes.runtime("list_p"), value)
        case "atom?":
            return nodes.call(nodes.runtime("atom_p"), value)
        case "number?":
            return nodes.call(nodes.runtime("number_p"), value)
        case "string?":
            return nodes.call(nodes.runtime("string_p"), value)
    raise TransformError(f"Unknown predicate: {form}")
