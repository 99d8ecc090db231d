import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.transform.names import mangle
from eta.types.environment import Scope
from eta.types.forms import Interpolate, Quasiquote, Quote, Tuple, Unquote, UnquoteSplicing, Vector
from eta.types.symbol import Keyword, Symbol

# Reader prefix -> symbol used when a quote form is itself quoted
PREFIX_NAMES = {
    Quote: "quote",
    Quasiquote: "quasiquote",
    Unquote: "unquote",
    UnquoteSplicing: "unquote-splicing",
}


def quote_data(expr: SExpression) -> ast.expr:
    """Build the literal data for a quoted form. Nothing inside is evaluated,
    except ~{name} which reads the variable `name`."""
    match expr:
        case None | bool() | int() | float() | str():
            return nodes.const(expr)
        case Symbol() | Keyword():
            return nodes.symbol(expr.id)
        case Interpolate(name=var):
            return nodes.name(mangle(var))
        case list() | Vector():
            return nodes.list_([quote_data(x) for x in expr])
        case Tuple():
            return nodes.tuple_([quote_data(x) for x in expr])
        case Quote() | Quasiquote() | Unquote() | UnquoteSplicing():
            return nodes.list_([nodes.symbol(PREFIX_NAMES[type(expr)]), quote_data(expr.expr)])
    raise TransformError(f"Cannot quote: {expr!r}")


def quasiquote_data(expr: SExpression, env: Scope, tf, depth: int = 1) -> ast.expr:
    """Like quote_data, except ~x and ~@x at depth 1 are evaluated."""
    match expr:
        case Unquote(expr=inner):
            if depth == 1:
                return tf.transform_expr(inner, env)
            return nodes.list_([nodes.symbol("unquote"), quasiquote_data(inner, env, tf, depth - 1)])
        case UnquoteSplicing(expr=inner):
            if depth == 1:
                raise TransformError(f"Unquote-splicing outside of a sequence: ~@{inner!r}")
            return nodes.list_([nodes.symbol("unquote-splicing"), quasiquote_data(inner, env, tf, depth - 1)])
        case Quasiquote(expr=inner):
            return nodes.list_([nodes.symbol("quasiquote"), quasiquote_data(inner, env, tf, depth + 1)])
        case list() | Vector():
            return nodes.list_(_quasi_items(expr, env, tf, depth))
        case Tuple():
            return nodes.tuple_(_quasi_items(expr, env, tf, depth))
    return quote_data(expr)


def _quasi_items(items, env: Scope, tf, depth: int) -> list[ast.expr]:
    out = []
    for item in items:
        if isinstance(item, UnquoteSplicing) and depth == 1:
            # Spliced flat into the enclosing sequence
            out.append(ast.Starred(value=tf.transform_expr(item.expr, env), ctx=nodes.LOAD))
        else:
            out.append(quasiquote_data(item, env, tf, depth))
    return out


def quote_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    if len(tail) != 1:
        raise TransformError("quote expects exactly 1 argument")
    return quote_data(tail[0])


def quasiquote_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    if len(tail) != 1:
        raise TransformError("quasiquote expects exactly 1 argument")
    return quasiquote_data(tail[0], env, tf)


def unquote_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    raise TransformError("unquote not valid outside of quasiquote")


def unquote_splice_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    raise TransformError("unquote-splicing not valid outside of quasiquote")
