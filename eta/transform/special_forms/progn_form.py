from __future__ import annotations

import ast

from eta import SExpression
from eta.transform import nodes
from eta.types.environment import Scope
from eta.types.symbol import Symbol


def defined_name(form: SExpression) -> Symbol | None:
    """Name introduced by a (def name value) form, if `form` is one."""
    if isinstance(form, list) and len(form) == 3 and form[0] == Symbol("def") and isinstance(form[1], Symbol):
        return form[1]
    return None


def do_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """(do a b c) evaluates in order and yields c; (do) is nil."""
    if not tail:
        return nodes.const(None)
    exprs = []
    for form in tail:
        exprs.append(tf.transform_expr(form, env))
        name = defined_name(form)
        if name is not None:
            env = env.extend(name)
    if len(exprs) == 1:
        return exprs[0]
    return nodes.last_of(exprs)
