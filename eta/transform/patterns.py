"""Argument patterns for defn, defp and fn.

An argument list is a vector or list of patterns:

    x              bind x
    _              ignore
    42 "s" nil     literal
    :ok 'sym       tag literal
    [a b]          list of exactly two
    [a b | t]      list of two or more, t gets the rest
    h|t  (| h t)   non-empty list, head and tail
    {:ok v}  (a b) tuple
    (when p g)     p, with g as an extra guard

defn clauses compile to Python `match` patterns (HostPatterns). fn cannot
hold a match statement, so pattern fns compile to runtime pattern values
checked by eta.runtime.patterns (RuntimePatterns).
"""

from __future__ import annotations

import ast

from eta import SExpression
from eta.errors import TransformError
from eta.transform import nodes
from eta.transform.names import mangle
from eta.types.forms import Quote, Tuple, Vector
from eta.types.symbol import Keyword, Symbol

WILDCARD = "_"
REST = "|"


def is_plain_param(pattern: SExpression) -> bool:
    return (
        isinstance(pattern, Symbol)
        and pattern.id != WILDCARD
        and REST not in pattern.id
    )


def split_rest_symbol(sym: Symbol) -> tuple[Symbol, Symbol]:
    head, _, tail = sym.id.partition(REST)
    if not head or not tail or REST in tail:
        raise TransformError(f"Malformed rest pattern: {sym}")
    return Symbol(head), Symbol(tail)


def split_vector_rest(items: list[SExpression]) -> tuple[list[SExpression], SExpression | None]:
    """[a b | t] -> ([a, b], t)."""
    bars = [i for i, item in enumerate(items) if item == Symbol(REST)]
    if not bars:
        return items, None
    i = bars[0]
    if len(bars) > 1 or i != len(items) - 2 or not isinstance(items[-1], Symbol):
        raise TransformError(f"Malformed rest pattern: {items!r}")
    return items[:i], items[-1]


class PatternCollector:
    """Shared walk over a clause's patterns.

    Subclasses build a node per pattern kind. The collector records bound
    names in order, the extra equality checks needed for values Python
    patterns cannot express, and the guards found in (when p g) forms.
    """

    def __init__(self, tf, env):
        self.tf = tf
        self.env = env
        self.names: list[str] = []
        self.checks: list[ast.expr] = []
        self.guards: list[SExpression] = []

    def build(self, pattern: SExpression):
        match pattern:
            case None | bool():
                return self.singleton(pattern)
            case int() | float() | str():
                return self.literal(pattern)
            case Keyword():
                return self.tag(nodes.symbol(pattern.id))
            case Quote(expr=inner):
                return self.tag(self.tf.quote(inner, self.env))
            case Symbol(id="_"):
                return self.wildcard()
            case Symbol() if pattern.id != REST and REST in pattern.id:
                head, tail = split_rest_symbol(pattern)
                return self.sequence(list, [head], tail)
            case Symbol() if pattern.id != REST:
                return self.bind(pattern.id)
            case Vector(items=items):
                fixed, rest = split_vector_rest(items)
                return self.sequence(list, fixed, rest)
            case Tuple(items=items):
                return self.sequence(tuple, items, None)
            case [Symbol(id="|"), head, Symbol() as tail]:
                return self.sequence(list, [head], tail)
            case [Symbol(id="when"), inner, guard]:
                node = self.build(inner)
                self.guards.append(guard)
                return node
            case list():
                return self.sequence(tuple, pattern, None)
        raise TransformError(f"Invalid argument pattern: {pattern!r}")

    def bound_env(self):
        return self.env.extend(*self.names)

    def guard_expr(self) -> ast.expr | None:
        """Literal checks first, then user guards in the order written."""
        env = self.bound_env()
        tests = list(self.checks) + [self.tf.transform_expr(g, env) for g in self.guards]
        if not tests:
            return None
        result = tests[0]
        for test in tests[1:]:
            result = ast.BoolOp(op=ast.And(), values=[result, test])
        return result

    # Overridden per target
    def singleton(self, value): raise NotImplementedError
    def literal(self, value): raise NotImplementedError
    def tag(self, value_node: ast.expr): raise NotImplementedError
    def wildcard(self): raise NotImplementedError
    def bind(self, lisp_name: str): raise NotImplementedError
    def sequence(self, kind: type, items, rest): raise NotImplementedError


class HostPatterns(PatternCollector):
    """Python structural pattern matching (`match`/`case`) patterns."""

    def __init__(self, tf, env):
        super().__init__(tf, env)
        self._temps = 0

    def _temp(self) -> str:
        self._temps += 1
        return f"_eta_v{self._temps}"

    def singleton(self, value):
        return ast.MatchSingleton(value=value)

    def literal(self, value):
        return ast.MatchValue(value=nodes.const(value))

    def tag(self, value_node):
        temp = self._temp()
        self.checks.append(
            ast.Compare(left=nodes.name(temp), ops=[ast.Eq()], comparators=[value_node])
        )
        return ast.MatchAs(pattern=None, name=temp)

    def wildcard(self):
        return ast.MatchAs(pattern=None, name=None)

    def bind(self, lisp_name):
        ident = mangle(lisp_name)
        if lisp_name in self.names:
            # A repeated name must match the value bound first
            temp = self._temp()
            self.checks.append(
                ast.Compare(left=nodes.name(temp), ops=[ast.Eq()], comparators=[nodes.name(ident)])
            )
            return ast.MatchAs(pattern=None, name=temp)
        self.names.append(lisp_name)
        return ast.MatchAs(pattern=None, name=ident)

    def sequence(self, kind, items, rest):
        patterns = [self.build(item) for item in items]
        if rest is not None:
            if rest.id == WILDCARD:
                patterns.append(ast.MatchStar(name=None))
            else:
                if rest.id in self.names:
                    raise TransformError(f"Duplicate rest name in pattern: {rest.id}")
                self.names.append(rest.id)
                patterns.append(ast.MatchStar(name=mangle(rest.id)))
        return ast.MatchClass(
            cls=nodes.runtime(f"{kind.__name__}_type"),
            patterns=[ast.MatchSequence(patterns=patterns)],
            kwd_attrs=[],
            kwd_patterns=[],
        )

    def params(self, params: list[SExpression]) -> ast.pattern:
        """Pattern over the whole positional-argument tuple."""
        return ast.MatchSequence(patterns=[self.build(p) for p in params])


class RuntimePatterns(PatternCollector):
    """Calls that build eta.runtime.patterns values (Var, Lit, Seq)."""

    def singleton(self, value):
        return nodes.call(nodes.runtime("Lit"), nodes.const(value))

    literal = singleton

    def tag(self, value_node):
        return nodes.call(nodes.runtime("Lit"), value_node)

    def wildcard(self):
        return nodes.call(nodes.runtime("Var"))

    def bind(self, lisp_name):
        if lisp_name in self.names:
            raise TransformError(f"Duplicate argument name in fn: {lisp_name}")
        self.names.append(lisp_name)
        return nodes.call(nodes.runtime("Var"), nodes.const(lisp_name))

    def sequence(self, kind, items, rest):
        patterns = [self.build(item) for item in items]
        rest_node = nodes.const(None)
        if rest is not None:
            rest_node = self.wildcard() if rest.id == WILDCARD else self.bind(rest.id)
        return nodes.call(
            nodes.runtime("Seq"), nodes.runtime(f"{kind.__name__}_type"), nodes.tuple_(patterns), rest_node
        )

    def params(self, params: list[SExpression]) -> ast.Tuple:
        return nodes.tuple_([self.build(p) for p in params])
