"""S-expression to Python syntax tree transformer.

Walks reader output and builds nodes from the standard library `ast`
module. Lists whose head names a SpecialForm go through `dispatch` to the
matching handler; any other list becomes a call.

Names are resolved against a Scope that records what the enclosing binding
forms introduced. A bound name is always a variable reference. A free name
may instead be an operator used as a value (`(reduce + 0 xs)`) or a dotted
reference into a Python namespace (`(math.sqrt 2)`).
"""

from __future__ import annotations

import ast
import logging

from eta import SExpression, TargetNode
from eta.errors import TransformError
from eta.transform import nodes
from eta.transform.names import mangle, split_dotted
from eta.transform.special_forms import dispatch, special_form
from eta.transform.special_forms.define_forms import (
    Definition, def_statement, function_def, parse_definition,
)
from eta.transform.special_forms.progn_form import defined_name, do_form
from eta.transform.special_forms.quote_forms import quasiquote_data, quote_data
from eta.runtime.core import OPERATORS
from eta.types.environment import EMPTY_SCOPE, Scope
from eta.types.forms import Interpolate, Quasiquote, Quote, Tuple, Unquote, UnquoteSplicing, Vector
from eta.types.symbol import Keyword, Symbol

logger = logging.getLogger(__name__)

DEFINE_HEADS = (Symbol("defn"), Symbol("defp"))
DEF = Symbol("def")
DO = Symbol("do")


def _head(form: SExpression) -> SExpression:
    return form[0] if isinstance(form, list) and form else None


class Transformer:
    """
    Builds Python syntax trees from forms.

    A Transformer collects, across the forms it has seen, the Python
    namespaces referenced through dotted names (`namespaces`) and the names
    defined by defn/def (`public`) and defp (`private`).
    """

    def __init__(self):
        self.namespaces: set[tuple[str, ...]] = set()
        self.public: list[str] = []
        self.private: list[str] = []

    # -------------------------------
    # Forms
    # -------------------------------
    def transform(self, form: SExpression, env: Scope = EMPTY_SCOPE) -> TargetNode:
        """
        Transform one top-level form.

        defn and defp give an `ast.FunctionDef`, def gives an `ast.Assign`,
        everything else an expression node.
        """
        head = _head(form)
        if head in DEFINE_HEADS:
            return self.define(parse_definition(head.id, form[1:]), env)
        if head == DEF:
            node = def_statement(form[1:], env, self)
            self._record("def", form[1].id)
            return node
        return self.transform_expr(form, env)

    def transform_expr(self, form: SExpression, env: Scope) -> ast.expr:
        match form:
            case None | bool() | int() | float() | str():
                return nodes.const(form)
            case Keyword():
                return nodes.symbol(form.id)
            case Symbol():
                return self.reference(form, env)
            case Interpolate(name=var):
                return nodes.name(mangle(var))
            case Vector(items=items):
                return nodes.list_([self.transform_expr(x, env) for x in items])
            case Tuple(items=items):
                return nodes.tuple_([self.transform_expr(x, env) for x in items])
            case Quote(expr=inner):
                return quote_data(inner)
            case Quasiquote(expr=inner):
                return quasiquote_data(inner, env, self)
            case Unquote():
                raise TransformError("unquote not valid outside of quasiquote")
            case UnquoteSplicing():
                raise TransformError("unquote-splicing not valid outside of quasiquote")
            case []:
                return nodes.list_([])
            case [head, *tail]:
                return self.transform_call(head, tail, env)
        raise TransformError(f"Cannot transform: {form!r}")

    def transform_call(self, head: SExpression, tail: list[SExpression], env: Scope) -> ast.expr:
        match head:
            case Symbol() if (form := special_form(head)) is not None:
                return dispatch(form, tail, env, self)
            case Keyword():
                # (:name obj) and (:name obj default)
                if len(tail) not in (1, 2):
                    raise TransformError(f"Keyword access :{head.id} expects 1 or 2 arguments")
                args = [self.transform_expr(x, env) for x in tail]
                return nodes.call(nodes.runtime("lookup"), args[0], nodes.symbol(head.id), *args[1:])
            case Symbol():
                func = self.reference(head, env)
            case list() if head:
                func = self.transform_expr(head, env)
            case _:
                raise TransformError(f"Cannot call: {head!r}")
        return nodes.call(func, *(self.transform_expr(x, env) for x in tail))

    def reference(self, sym: Symbol, env: Scope) -> ast.expr:
        name = sym.id
        if "." in name and name != ".":
            parts = split_dotted(name)
            if not env.is_bound(parts[0]):
                self.namespaces.add(tuple(parts[:-1]))
            return nodes.attr(nodes.name(mangle(parts[0])), *(mangle(p) for p in parts[1:]))
        if not env.is_bound(name) and name in OPERATORS:
            return ast.Subscript(value=nodes.runtime("OPERATORS"), slice=nodes.const(name), ctx=nodes.LOAD)
        return nodes.name(mangle(name))

    def quote(self, form: SExpression, env: Scope) -> ast.expr:
        return quote_data(form)

    def transform_body(self, forms: list[SExpression], env: Scope) -> ast.expr:
        """Several body forms evaluate in order like an implicit do."""
        return do_form(forms, env, self)

    # -------------------------------
    # Definitions
    # -------------------------------
    def define(self, definition: Definition, env: Scope) -> ast.FunctionDef:
        node = function_def(definition, env, self)
        self._record(definition.kind, definition.name.id)
        logger.debug("defined %s %s with %d clause(s)", definition.kind, node.name, len(definition.clauses))
        return node

    def _record(self, kind: str, lisp_name: str) -> None:
        ident = mangle(lisp_name)
        target, other = (self.private, self.public) if kind == "defp" else (self.public, self.private)
        if ident in other:
            other.remove(ident)
        if ident not in target:
            target.append(ident)

    # -------------------------------
    # Modules
    # -------------------------------
    def transform_stmts(self, forms: list[SExpression], env: Scope = EMPTY_SCOPE) -> list[ast.stmt]:
        """
        Transform top-level forms into statements.

        A top-level (do ...) is spliced into the statement list. Adjacent
        defn (or defp) forms with the same name become one function with
        the clauses in source order.
        """
        flat = []
        self._flatten(forms, flat)

        statements: list[ast.stmt] = []
        pending: Definition | None = None
        for form in flat:
            head = _head(form)
            if head in DEFINE_HEADS:
                definition = parse_definition(head.id, form[1:])
                if pending is not None and pending.extends(definition):
                    pending.clauses.extend(definition.clauses)
                    continue
                if pending is not None:
                    statements.append(self.define(pending, env))
                pending = definition
                env = env.extend(definition.name)
                continue
            if pending is not None:
                statements.append(self.define(pending, env))
                pending = None
            node = self.transform(form, env)
            name = defined_name(form)
            if name is not None:
                env = env.extend(name)
            statements.append(node if isinstance(node, ast.stmt) else ast.Expr(value=node))
        if pending is not None:
            statements.append(self.define(pending, env))
        return statements

    def _flatten(self, forms: list[SExpression], out: list[SExpression]) -> None:
        for form in forms:
            if _head(form) == DO:
                self._flatten(form[1:], out)
            else:
                out.append(form)

    def compile_module(self, forms: list[SExpression], env: Scope = EMPTY_SCOPE) -> ast.Module:
        module = ast.Module(body=self.transform_stmts(forms, env), type_ignores=[])
        return ast.fix_missing_locations(module)
