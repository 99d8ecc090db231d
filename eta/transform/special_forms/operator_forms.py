"""Arithmetic, comparison and boolean operators.

Arithmetic folds left over two or more operands, so (- 10 3 2) is
(10 - 3) - 2. rem, mod and the comparisons take exactly two operands.
"""

from __future__ import annotations

import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.types.environment import Scope

ARITHMETIC: dict[str, type[ast.operator]] = {
    "+": ast.Add,
    "-": ast.Sub,
    "*": ast.Mult,
    "/": ast.Div,
}

COMPARISONS: dict[str, type[ast.cmpop]] = {
    "<": ast.Lt,
    ">": ast.Gt,
    "<=": ast.LtE,
    ">=": ast.GtE,
    "==": ast.Eq,
    "=": ast.Eq,
    "!=": ast.NotEq,
}


def arithmetic_form(op: str, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    args = [tf.transform_expr(x, env) for x in tail]
    if op == "-" and len(args) == 1:
        return ast.UnaryOp(op=ast.USub(), operand=args[0])
    if len(args) < 2:
        raise TransformError(f"{op} expects at least 2 arguments, got {len(args)}")
    result = args[0]
    for arg in args[1:]:
        result = ast.BinOp(left=result, op=ARITHMETIC[op](), right=arg)
    return result


def remainder_form(op: str, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """rem truncates toward zero, mod floors like Python %."""
    if len(tail) != 2:
        raise TransformError(f"{op} expects exactly 2 arguments, got {len(tail)}")
    left, right = (tf.transform_expr(x, env) for x in tail)
    if op == "mod":
        return ast.BinOp(left=left, op=ast.Mod(), right=right)
    return nodes.call(nodes.runtime("rem"), left, right)


def comparison_form(op: str, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    if len(tail) != 2:
        raise TransformError(f"{op} expects exactly 2 arguments, got {len(tail)}")
    left, right = (tf.transform_expr(x, env) for x in tail)
    return ast.Compare(left=left, ops=[COMPARISONS[op]()], comparators=[right])


def boolean_form(op: str, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """(and a b c) is ((a and b) and c); the same shape for or."""
    if len(tail) < 2:
        raise TransformError(f"{op} expects at least 2 arguments, got {len(tail)}")
    bool_op = ast.And if op == "and" else ast.Or
    args = [tf.transform_expr(x, env) for x in tail]
    result = args[0]
    for arg in args[1:]:
        result = ast.BoolOp(op=bool_op(), values=[result, arg])
    return result


def not_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    if len(tail) != 1:
        raise TransformError(f"not expects exactly 1 argument, got {len(tail)}")
    return ast.UnaryOp(op=ast.Not(), operand=tf.transform_expr(tail[0], env))
