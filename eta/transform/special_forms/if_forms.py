from __future__ import annotations

import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.transform.special_forms.quote_forms import quote_data
from eta.types.environment import Scope
from eta.types.forms import Vector
from eta.types.symbol import Keyword, Symbol

# cond tests that always hold
DEFAULT_TESTS = (Keyword("else"), Symbol("else"), True)


def if_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """(if test then [else]); a missing else is nil."""
    if len(tail) not in (2, 3):
        raise TransformError(f"if expects 2 or 3 arguments, got {len(tail)}")
    test = tf.transform_expr(tail[0], env)
    then = tf.transform_expr(tail[1], env)
    orelse = tf.transform_expr(tail[2], env) if len(tail) == 3 else nodes.const(None)
    return ast.IfExp(test=test, body=then, orelse=orelse)


def _pair(clause: SExpression, form: str) -> tuple[SExpression, SExpression]:
    items = clause.items if isinstance(clause, Vector) else clause
    if not isinstance(items, list) or len(items) != 2:
        raise TransformError(f"{form} clause must be a (test expr) pair, got: {clause!r}")
    return items[0], items[1]


def _is_default(test: SExpression) -> bool:
    return any(test == d and type(test) is type(d) for d in DEFAULT_TESTS)


def cond_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """
    (cond (test expr) ... (:else expr)) -> nested conditional expressions.

    With no default clause and no true test, evaluation raises
    CondClauseError.
    """
    pairs = [_pair(c, "cond") for c in tail]
    for i, (test, _) in enumerate(pairs):
        if _is_default(test) and i != len(pairs) - 1:
            raise TransformError("cond default clause must be the last clause")

    if pairs and _is_default(pairs[-1][0]):
        result = tf.transform_expr(pairs[-1][1], env)
        pairs = pairs[:-1]
    else:
        result = nodes.call(nodes.runtime("no_clause"), nodes.const("cond"))

    for test, expr in reversed(pairs):
        result = ast.IfExp(
            test=tf.transform_expr(test, env),
            body=tf.transform_expr(expr, env),
            orelse=result,
        )
    return result


def case_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """
    (case expr (pattern body) ...) with literal patterns; _ matches anything.

    __eta__.select(value, ((pattern, lambda: body), ...))
    """
    if not tail:
        raise TransformError("case expects a value to match on")
    subject = tf.transform_expr(tail[0], env)
    arms = []
    for clause in tail[1:]:
        pattern, body = _pair(clause, "case")
        arms.append(nodes.tuple_([quote_data(pattern), nodes.thunk(tf.transform_expr(body, env))]))
    return nodes.call(nodes.runtime("select"), subject, nodes.tuple_(arms))
