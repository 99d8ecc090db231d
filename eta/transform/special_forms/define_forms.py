"""defn, defp and def.

    (defn name [args] body...)
    (defn name [args] :when guard body...)
    (defn name ([args] body) ([args] guard body) ...)

A definition whose clauses all take plain names and carry no guard becomes
an ordinary `def name(a, b): return body`. Anything else becomes

    def name(*_eta_args):
        match _eta_args:
            case [pattern, ...] if guard:
                return body
            ...
        __eta__.no_function_clause('name', _eta_args)
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.transform.names import mangle
from eta.transform.patterns import HostPatterns, is_plain_param
from eta.types.environment import Scope
from eta.types.forms import Vector
from eta.types.symbol import Keyword, Symbol

ARGS_NAME = "_eta_args"
WHEN = Keyword("when")


@dataclass
class Clause:
    params: list[SExpression]
    guards: list[SExpression]
    body: list[SExpression]


@dataclass
class Definition:
    kind: str
    name: Symbol
    clauses: list[Clause] = field(default_factory=list)

    def extends(self, other: Definition) -> bool:
        return self.kind == other.kind and self.name == other.name


def param_list(args: SExpression, form: str) -> list[SExpression]:
    """Argument lists are a bracketed vector or a plain list."""
    if isinstance(args, Vector):
        return list(args.items)
    if isinstance(args, list):
        return args
    raise TransformError(f"Invalid arguments in {form}: {args!r}")


def parse_signature(items: list[SExpression], form: str) -> Clause:
    """[args] [:when guard] body... -> Clause."""
    if not items:
        raise TransformError(f"{form} requires an argument list")
    params = param_list(items[0], form)
    rest = items[1:]
    guards = []
    if rest and rest[0] == WHEN:
        if len(rest) < 2:
            raise TransformError(f"{form}: :when requires a guard expression")
        guards.append(rest[1])
        rest = rest[2:]
    if not rest:
        raise TransformError(f"{form} requires a body")
    return Clause(params, guards, rest)


def parse_clause(clause: SExpression, form: str) -> Clause:
    items = clause.items if isinstance(clause, Vector) else clause
    if not isinstance(items, list):
        raise TransformError(f"Invalid {form} clause: {clause!r}")
    if len(items) == 2:
        return Clause(param_list(items[0], form), [], [items[1]])
    if len(items) == 3 and items[1] != WHEN:
        return Clause(param_list(items[0], form), [items[1]], [items[2]])
    if len(items) == 4 and items[1] == WHEN:
        return Clause(param_list(items[0], form), [items[2]], [items[3]])
    raise TransformError(f"Invalid {form} clause: {clause!r}")


def _is_clause(item: SExpression) -> bool:
    items = item.items if isinstance(item, Vector) else item
    return isinstance(items, list) and bool(items) and isinstance(items[0], (list, Vector))


def parse_definition(kind: str, tail: list[SExpression]) -> Definition:
    if not tail or not isinstance(tail[0], Symbol):
        raise TransformError(f"{kind} requires a symbol name, got: {tail[:1]!r}")
    name, rest = tail[0], tail[1:]
    if not rest:
        raise TransformError(f"{kind} {name} has no clauses")
    # (defn f [x] body) is one clause; (defn f ([x] body) ...) lists clauses
    single = isinstance(rest[0], Vector) or not all(_is_clause(c) for c in rest)
    if single:
        return Definition(kind, name, [parse_signature(rest, f"{kind} {name}")])
    return Definition(kind, name, [parse_clause(c, f"{kind} {name}") for c in rest])


def _simple_params(definition: Definition) -> list[str] | None:
    if len(definition.clauses) != 1:
        return None
    clause = definition.clauses[0]
    if clause.guards or not all(is_plain_param(p) for p in clause.params):
        return None
    names = [p.id for p in clause.params]
    if len(set(names)) != len(names):
        return None
    return names


def function_def(definition: Definition, env: Scope, tf) -> ast.FunctionDef:
    ident = mangle(definition.name.id)
    names = _simple_params(definition)
    if names is not None:
        body = tf.transform_body(definition.clauses[0].body, env.extend(*names))
        return nodes.function_def(ident, nodes.arguments([mangle(n) for n in names]), [ast.Return(value=body)])

    cases = []
    for clause in definition.clauses:
        patterns = HostPatterns(tf, env)
        pattern = patterns.params(clause.params)
        patterns.guards.extend(clause.guards)
        guard = patterns.guard_expr()
        body = tf.transform_body(clause.body, patterns.bound_env())
        cases.append(ast.match_case(pattern=pattern, guard=guard, body=[ast.Return(value=body)]))

    fallthrough = ast.Expr(
        value=nodes.call(nodes.runtime("no_function_clause"), nodes.const(definition.name.id), nodes.name(ARGS_NAME))
    )
    match_stmt = ast.Match(subject=nodes.name(ARGS_NAME), cases=cases)
    return nodes.function_def(ident, nodes.arguments(vararg=ARGS_NAME), [match_stmt, fallthrough])


def def_target(tail: list[SExpression]) -> tuple[Symbol, SExpression]:
    if len(tail) != 2 or not isinstance(tail[0], Symbol):
        raise TransformError(f"def expects a symbol and a value, got: {tail!r}")
    return tail[0], tail[1]


def def_statement(tail: list[SExpression], env: Scope, tf) -> ast.Assign:
    name, value = def_target(tail)
    return ast.Assign(targets=[nodes.store(mangle(name.id))], value=tf.transform_expr(value, env))


def def_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    """(def name value) below the top level binds with `:=`."""
    name, value = def_target(tail)
    return ast.NamedExpr(target=nodes.store(mangle(name.id)), value=tf.transform_expr(value, env))


def defn_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    raise TransformError("defn is only allowed at the top level or in a top-level do")


def defp_form(tail: list[SExpression], env: Scope, tf) -> ast.expr:
    raise TransformError("defp is only allowed at the top level or in a top-level do")
