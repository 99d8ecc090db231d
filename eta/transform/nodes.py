"""Small constructors for the `ast` nodes the transformer emits."""

from __future__ import annotations

import ast
import sys
from typing import Sequence

from eta.config import RUNTIME_ALIAS

LOAD = ast.Load()
STORE = ast.Store()


def name(ident: str) -> ast.Name:
    return ast.Name(id=ident, ctx=LOAD)


def store(ident: str) -> ast.Name:
    return ast.Name(id=ident, ctx=STORE)


def const(value) -> ast.Constant:
    return ast.Constant(value=value)


def attr(value: ast.expr, *attrs: str) -> ast.expr:
    for a in attrs:
        value = ast.Attribute(value=value, attr=a, ctx=LOAD)
    return value


def runtime(member: str) -> ast.expr:
    """Reference a helper in eta.runtime.core, e.g. __eta__.car."""
    return attr(name(RUNTIME_ALIAS), member)


def call(func: ast.expr, *args: ast.expr) -> ast.Call:
    return ast.Call(func=func, args=list(args), keywords=[])


def symbol(ident: str) -> ast.Call:
    return call(runtime("Symbol"), const(ident))


def arguments(params: Sequence[str] = (), vararg: str | None = None) -> ast.arguments:
    return ast.arguments(
        posonlyargs=[],
        args=[ast.arg(arg=p) for p in params],
        vararg=ast.arg(arg=vararg) if vararg else None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=[],
    )


def lambda_(params: Sequence[str], body: ast.expr, vararg: str | None = None) -> ast.Lambda:
    return ast.Lambda(args=arguments(params, vararg), body=body)


def thunk(body: ast.expr) -> ast.Lambda:
    return lambda_((), body)


def list_(elts: Sequence[ast.expr]) -> ast.List:
    return ast.List(elts=list(elts), ctx=LOAD)


def tuple_(elts: Sequence[ast.expr]) -> ast.Tuple:
    return ast.Tuple(elts=list(elts), ctx=LOAD)


def last_of(exprs: Sequence[ast.expr]) -> ast.expr:
    """(a, b, c)[-1]: evaluate in order, keep the final value."""
    return ast.Subscript(value=tuple_(exprs), slice=const(-1), ctx=LOAD)


def function_def(ident: str, args: ast.arguments, body: list[ast.stmt]) -> ast.FunctionDef:
    fields = dict(name=ident, args=args, body=body, decorator_list=[], returns=None)
    if sys.version_info >= (3, 12):
        fields["type_params"] = []
    return ast.FunctionDef(**fields)
