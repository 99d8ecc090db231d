"""Runtime library for code produced by the Eta transformer.

Generated code reaches this module through the `__eta__` alias. Its public
functions are also what a plain call such as (map inc xs) resolves to, so
their names are the mangled forms of the Lisp names: `even?` is `even_p`,
`str-length` is `str_length`.
"""

from __future__ import annotations

import functools
import math
import operator
import sys
from collections.abc import Mapping
from typing import Callable, Iterable

from eta.errors import CondClauseError, FunctionClauseError
from eta.types.symbol import Symbol
from eta.runtime.patterns import Lit, Seq, Var, destructure, select
from eta.runtime.printer import to_str

__all__ = [
    # list operations
    "car", "cdr", "cons", "first", "rest", "head", "tail", "second", "third",
    "nth", "take", "drop", "last", "reverse", "append", "length",
    # higher-order functions
    "map", "filter", "reduce", "foldl", "foldr", "apply_fn", "compose", "partial",
    # predicates
    "nil_p", "empty_p", "list_p", "atom_p", "number_p", "string_p", "function_p",
    "even_p", "odd_p", "zero_p", "positive_p", "negative_p",
    # math
    "abs", "max", "min", "sum", "product", "inc", "dec", "square", "cube",
    "pow", "sqrt", "gcd", "rem",
    # strings
    "str_concat", "str_length", "to_string", "to_atom", "to_integer", "to_float",
    # utilities
    "identity", "constantly", "tap", "range", "repeat", "zip", "unzip", "flatten",
    "distinct", "sort", "all_p", "any_p", "find", "partition", "interleave",
    "thread_first", "thread_last",
]

_builtin_abs = abs
_builtin_max = max
_builtin_min = min
_builtin_range = range
_builtin_zip = zip

ERROR_TAG = Symbol("error")

# Classes named by generated match patterns, out of reach of user bindings
list_type = list
tuple_type = tuple

OPERATORS: dict[str, Callable] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "mod": operator.mod,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
    "==": operator.eq,
    "=": operator.eq,
    "!=": operator.ne,
    "not": operator.not_,
}


# -------------------------------
# List operations
# -------------------------------
def car(seq):
    """First element, or nil for an empty sequence."""
    if not seq:
        return None
    return seq[0]

def cdr(seq):
    if not seq:
        return []
    return list(seq[1:])

def cons(elem, seq):
    if seq is None:
        return [elem]
    return [elem, *seq]

first = car
rest = cdr
head = car
tail = cdr

def second(seq):
    return car(cdr(seq))

def third(seq):
    return car(cdr(cdr(seq)))

def nth(seq, n: int):
    if n < 0 or n >= len(seq):
        return None
    return seq[n]

def take(seq, n: int):
    return list(seq[:_builtin_max(n, 0)])

def drop(seq, n: int):
    return list(seq[_builtin_max(n, 0):])

def last(seq):
    if not seq:
        return None
    return seq[-1]

def reverse(seq):
    return list(seq)[::-1]

def append(seq1, seq2):
    return [*seq1, *seq2]

def length(seq) -> int:
    return len(seq)


# -------------------------------
# Higher-order functions
# -------------------------------
def map(func: Callable, seq: Iterable) -> list:
    return [func(x) for x in seq]

def filter(pred: Callable, seq: Iterable) -> list:
    return [x for x in seq if pred(x)]

def reduce(func: Callable, acc, seq: Iterable):
    """Fold left; `func` receives (element, accumulator) like Enum.reduce."""
    for x in seq:
        acc = func(x, acc)
    return acc

foldl = reduce

def foldr(func: Callable, acc, seq):
    for x in reversed(list(seq)):
        acc = func(x, acc)
    return acc

def apply_fn(func: Callable, args):
    return func(*args)

def compose(f: Callable, g: Callable) -> Callable:
    return lambda x: f(g(x))

def partial(func: Callable, *args) -> Callable:
    return functools.partial(func, *args)


# -------------------------------
# Predicates
# -------------------------------
def nil_p(value) -> bool:
    return value is None

def empty_p(value) -> bool:
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False

def list_p(value) -> bool:
    return isinstance(value, list)

def atom_p(value) -> bool:
    return isinstance(value, Symbol)

def number_p(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def string_p(value) -> bool:
    return isinstance(value, str)

def function_p(value) -> bool:
    return callable(value)

def even_p(n: int) -> bool:
    return n % 2 == 0

def odd_p(n: int) -> bool:
    return n % 2 != 0

def zero_p(n) -> bool:
    return n == 0

def positive_p(n) -> bool:
    return n > 0

def negative_p(n) -> bool:
    return n < 0


# -------------------------------
# Math
# -------------------------------
def abs(n):
    return _builtin_abs(n)

def max(a, b):
    return _builtin_max(a, b)

def min(a, b):
    return _builtin_min(a, b)

def sum(seq):
    total = 0
    for x in seq:
        total += x
    return total

def product(seq):
    return math.prod(seq)

def inc(n):
    return n + 1

def dec(n):
    return n - 1

def square(n):
    return n * n

def cube(n):
    return n * n * n

def pow(base, exp):
    return base ** exp

def sqrt(n):
    return math.sqrt(n)

def gcd(a: int, b: int) -> int:
    return math.gcd(a, b)

def rem(a, b):
    """Remainder truncated toward zero, sign follows the dividend."""
    if isinstance(a, int) and isinstance(b, int):
        r = _builtin_abs(a) % _builtin_abs(b)
        return -r if a < 0 else r
    return math.fmod(a, b)


# -------------------------------
# Strings and conversions
# -------------------------------
def str_concat(strings) -> str:
    return "".join(to_str(s) for s in strings)

def str_length(s: str) -> int:
    return len(s)

def to_string(value) -> str:
    return to_str(value)

def to_atom(s: str) -> Symbol:
    return Symbol(s)

def to_integer(value) -> int:
    return int(value)

def to_float(value) -> float:
    return float(value)


# -------------------------------
# Utilities
# -------------------------------
def identity(x):
    return x

def constantly(value) -> Callable:
    return lambda *_: value

def tap(value, func: Callable | None = None):
    (func or print)(value)
    return value

def range(start: int, stop: int) -> list:
    """Inclusive integer range, counting down when stop < start."""
    step = 1 if stop >= start else -1
    return list(_builtin_range(start, stop + step, step))

def repeat(value, n: int) -> list:
    return [value] * n

def zip(seq1, seq2) -> list:
    return list(_builtin_zip(seq1, seq2))

def unzip(pairs) -> tuple:
    firsts = [p[0] for p in pairs]
    seconds = [p[1] for p in pairs]
    return firsts, seconds

def flatten(seq) -> list:
    out = []
    for x in seq:
        if isinstance(x, list):
            out.extend(flatten(x))
        else:
            out.append(x)
    return out

def distinct(seq) -> list:
    seen = []
    for x in seq:
        if x not in seen:
            seen.append(x)
    return seen

def sort(seq) -> list:
    return sorted(seq)

def all_p(pred: Callable, seq) -> bool:
    return all(pred(x) for x in seq)

def any_p(pred: Callable, seq) -> bool:
    return any(pred(x) for x in seq)

def find(pred: Callable, seq):
    for x in seq:
        if pred(x):
            return x
    return None

def partition(pred: Callable, seq) -> tuple:
    yes = [x for x in seq if pred(x)]
    no = [x for x in seq if not pred(x)]
    return yes, no

def interleave(seq1, seq2) -> list:
    """Alternate elements; the longer sequence's leftovers are appended."""
    out = []
    for a, b in _builtin_zip(seq1, seq2):
        out.extend((a, b))
    shortest = _builtin_min(len(seq1), len(seq2))
    out.extend(seq1[shortest:])
    out.extend(seq2[shortest:])
    return out

def thread_first(value, functions):
    for func in functions:
        value = func(value)
    return value

def thread_last(value, functions):
    return thread_first(value, functions)


# -------------------------------
# Support for special forms
# -------------------------------
def lookup(obj, key: Symbol, default=None):
    """Field access for (:name obj): mapping keys first, then attributes."""
    if isinstance(obj, Mapping):
        if key in obj:
            return obj[key]
        return obj.get(key.id, default)
    return getattr(obj, key.id, default)

def attempt(thunk: Callable):
    """Run `thunk`; any exception becomes the tuple (:error, exception)."""
    try:
        return thunk()
    except Exception as e:
        return ERROR_TAG, e

def no_clause(form: str):
    raise CondClauseError(f"no {form} clause evaluated to a truthy value")

def no_function_clause(name: str, args):
    raise FunctionClauseError(name, args)

def concat(*values) -> str:
    return "".join(to_str(v) for v in values)

def write(*values) -> None:
    sys.stdout.write(" ".join(to_str(v) for v in values))

def writeln(*values) -> None:
    sys.stdout.write(" ".join(to_str(v) for v in values) + "\n")
