from __future__ import annotations

import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.transform.names import mangle
from eta.transform.patterns import RuntimePatterns, is_plain_param
from eta.transform.special_forms.define_forms import ARGS_NAME, param_list
from eta.types.environment import Scope


def lambda_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """
    Handle (lambda [args] body...) and (fn [args] body...).

    Plain names give a plain lambda. Patterns are checked at call time:

        lambda *_eta_args: (lambda a, t: body)(*__eta__.destructure('fn', pats, _eta_args))
    """
    if len(tail) < 2:
        raise TransformError("fn expects an argument list and a body")
    params = param_list(tail[0], "fn")
    body_forms = tail[1:]

    names = [p.id for p in params if is_plain_param(p)]
    if len(names) == len(params) and len(set(names)) == len(names):
        body = tf.transform_body(body_forms, env.extend(*names))
        return nodes.lambda_([mangle(n) for n in names], body)

    patterns = RuntimePatterns(tf, env)
    pattern_tuple = patterns.params(params)
    bound = [mangle(n) for n in patterns.names]
    body = tf.transform_body(body_forms, patterns.bound_env())
    guard = patterns.guard_expr()
    if guard is not None:
        failure = nodes.call(nodes.runtime("no_function_clause"), nodes.const("fn"), nodes.name(ARGS_NAME))
        body = ast.IfExp(test=guard, body=body, orelse=failure)

    values = nodes.call(nodes.runtime("destructure"), nodes.const("fn"), pattern_tuple, nodes.name(ARGS_NAME))
    inner = ast.Call(
        func=nodes.lambda_(bound, body),
        args=[ast.Starred(value=values, ctx=nodes.LOAD)],
        keywords=[],
    )
    return nodes.lambda_((), inner, vararg=ARGS_NAME)
