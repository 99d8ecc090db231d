"""let with sequential bindings.

    (let [x 1 y (+ x 1)] body...)
    (let ((x 1) (y 2)) body...)

Each binding becomes an immediately applied one-argument lambda, so later
values see earlier names:

    (lambda x: (lambda y: body)(x + 1))(1)
"""

from __future__ import annotations

import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.transform.names import mangle
from eta.types.environment import Scope
from eta.types.forms import Vector
from eta.types.symbol import Symbol


def binding_pairs(bindings: SExpression) -> list[tuple[Symbol, SExpression]]:
    if isinstance(bindings, Vector):
        items = list(bindings.items)
    elif isinstance(bindings, list):
        items = bindings
    else:
        raise TransformError(f"let bindings must be a vector or list, got: {bindings!r}")

    if items and all(isinstance(i, (list, Vector)) for i in items):
        pairs = [list(i) for i in items]
    else:
        if len(items) % 2:
            raise TransformError("let bindings need an even number of forms")
        pairs = [items[i:i + 2] for i in range(0, len(items), 2)]

    out = []
    for pair in pairs:
        if len(pair) != 2 or not isinstance(pair[0], Symbol):
            raise TransformError(f"Invalid let binding: {pair!r}")
        out.append((pair[0], pair[1]))
    return out


def let_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    if len(tail) < 2:
        raise TransformError("let expects bindings and a body")
    pairs = binding_pairs(tail[0])

    values = []
    scope = env
    for name, value in pairs:
        values.append(tf.transform_expr(value, scope))
        scope = scope.extend(name)
    result = tf.transform_body(tail[1:], scope)

    for (name, _), value in zip(reversed(pairs), reversed(values)):
        result = nodes.call(nodes.lambda_([mangle(name.id)], result), value)
    return result
