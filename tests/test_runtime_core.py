import pytest

from eta.errors import CaseClauseError, CondClauseError, FunctionClauseError
from eta.runtime import core
from eta.runtime.patterns import Lit, Seq, Var, destructure, match_literal, select
from eta.types.symbol import Symbol


@pytest.mark.parametrize(
    "func,args,expected",
    [
        (core.car, ([1, 2],), 1),
        (core.car, ([],), None),
        (core.cdr, ([1, 2, 3],), [2, 3]),
        (core.cdr, (None,), []),
        (core.cons, (0, [1]), [0, 1]),
        (core.second, ([1, 2, 3],), 2),
        (core.third, ([1, 2],), None),
        (core.nth, ([1, 2], 1), 2),
        (core.nth, ([1, 2], 5), None),
        (core.take, ([1, 2, 3], 2), [1, 2]),
        (core.drop, ([1, 2, 3], 2), [3]),
        (core.last, ([1, 2, 3],), 3),
        (core.reverse, ([1, 2, 3],), [3, 2, 1]),
        (core.append, ([1], [2, 3]), [1, 2, 3]),
        (core.length, ([1, 2],), 2),
        (core.range, (1, 4), [1, 2, 3, 4]),
        (core.range, (3, 1), [3, 2, 1]),
        (core.repeat, ("a", 3), ["a", "a", "a"]),
        (core.zip, ([1, 2], ["a", "b"]), [(1, "a"), (2, "b")]),
        (core.unzip, ([(1, "a"), (2, "b")],), ([1, 2], ["a", "b"])),
        (core.flatten, ([1, [2, [3]], 4],), [1, 2, 3, 4]),
        (core.distinct, ([1, 2, 1, 3, 2],), [1, 2, 3]),
        (core.sort, ([3, 1, 2],), [1, 2, 3]),
        (core.interleave, ([1, 2, 3], ["a"]), [1, "a", 2, 3]),
        (core.sum, ([1, 2, 3],), 6),
        (core.product, ([2, 3, 4],), 24),
        (core.max, (1, 2), 2),
        (core.min, (1, 2), 1),
        (core.abs, (-3,), 3),
        (core.gcd, (12, 18), 6),
        (core.pow, (2, 10), 1024),
        (core.sqrt, (16,), 4.0),
        (core.square, (5,), 25),
        (core.cube, (3,), 27),
        (core.inc, (1,), 2),
        (core.dec, (1,), 0),
        (core.rem, (-7, 3), -1),
        (core.rem, (7, -3), 1),
        (core.str_concat, (["a", 1, Symbol("b"), None],), "a1bnil"),
        (core.str_length, ("abc",), 3),
        (core.to_string, (Symbol("x"),), "x"),
        (core.to_atom, ("ok",), Symbol("ok")),
        (core.to_integer, ("42",), 42),
        (core.to_float, ("1.5",), 1.5),
        (core.identity, (7,), 7),
    ]
)
def test_core_functions(func, args, expected):
    assert func(*args) == expected


@pytest.mark.parametrize(
    "func,value,expected",
    [
        (core.nil_p, None, True),
        (core.nil_p, 0, False),
        (core.empty_p, [], True),
        (core.empty_p, None, True),
        (core.empty_p, 5, False),
        (core.list_p, [], True),
        (core.atom_p, Symbol("a"), True),
        (core.atom_p, "a", False),
        (core.number_p, 1, True),
        (core.number_p, False, False),
        (core.string_p, "s", True),
        (core.function_p, len, True),
        (core.even_p, 4, True),
        (core.odd_p, 4, False),
        (core.zero_p, 0, True),
        (core.positive_p, -1, False),
        (core.negative_p, -1, True),
    ]
)
def test_core_predicates(func, value, expected):
    assert func(value) is expected


def test_higher_order_functions():
    assert core.map(core.inc, [1, 2]) == [2, 3]
    assert core.filter(core.odd_p, [1, 2, 3]) == [1, 3]
    assert core.reduce(lambda x, acc: acc + [x], [], [1, 2, 3]) == [1, 2, 3]
    assert core.foldl(lambda x, acc: x - acc, 0, [1, 2, 3]) == 2
    assert core.foldr(core.cons, [], [1, 2, 3]) == [1, 2, 3]
    assert core.apply_fn(core.max, [1, 9]) == 9
    assert core.compose(core.inc, core.square)(3) == 10
    assert core.partial(core.pow, 2)(3) == 8
    assert core.constantly(1)("ignored") == 1
    assert core.all_p(core.even_p, [2, 4]) is True
    assert core.any_p(core.even_p, [1, 3]) is False
    assert core.find(core.even_p, [1, 4, 6]) == 4
    assert core.find(core.even_p, [1]) is None
    assert core.partition(core.even_p, [1, 2, 3, 4]) == ([2, 4], [1, 3])
    assert core.thread_first(2, [core.inc, core.square]) == 9


def test_tap_passes_value_through():
    seen = []
    assert core.tap(5, seen.append) == 5
    assert seen == [5]


def test_operators_table():
    assert core.OPERATORS["+"](2, 3) == 5
    assert core.OPERATORS["mod"](-7, 3) == 2
    assert core.OPERATORS["="](1, 1) is True
    assert core.OPERATORS["not"](0) is True


class Point:
    x = 3


@pytest.mark.parametrize(
    "obj,key,default,expected",
    [
        ({Symbol("a"): 1}, Symbol("a"), None, 1),
        ({"a": 2}, Symbol("a"), None, 2),
        ({}, Symbol("a"), 0, 0),
        (Point(), Symbol("x"), None, 3),
        (Point(), Symbol("y"), "none", "none"),
    ]
)
def test_lookup(obj, key, default, expected):
    assert core.lookup(obj, key, default) == expected


def test_attempt():
    assert core.attempt(lambda: 1) == 1
    tag, error = core.attempt(lambda: [][0])
    assert tag == core.ERROR_TAG == Symbol("error")
    assert isinstance(error, IndexError)


def test_clause_errors():
    with pytest.raises(CondClauseError):
        core.no_clause("cond")
    with pytest.raises(FunctionClauseError) as exc:
        core.no_function_clause("f", (1, 2))
    assert "f/2" in str(exc.value)


def test_concat_and_output(capsys):
    assert core.concat("a", 1, None) == "a1nil"
    core.write("a", Symbol("b"))
    core.writeln(1, [2, "c"])
    assert capsys.readouterr().out == 'a b1 (2 "c")\n'


# ------------------ patterns ------------------

def test_destructure_binds_in_order():
    patterns = (Seq(list, (Var("h"),), Var("t")), Var("x"), Var())
    assert destructure("f", patterns, ([1, 2, 3], "x", "ignored")) == [1, [2, 3], "x"]


@pytest.mark.parametrize(
    "patterns,args",
    [
        ((Var("x"),), ()),
        ((Lit(1),), (2,)),
        ((Lit(True),), (1,)),
        ((Lit(1),), (True,)),
        ((Seq(list, (Var("a"),), None),), ((1,),)),
        ((Seq(list, (Var("a"), Var("b")), Var("r")),), ([1],)),
    ]
)
def test_destructure_mismatch(patterns, args):
    with pytest.raises(FunctionClauseError):
        destructure("f", patterns, args)


@pytest.mark.parametrize(
    "pattern,value,expected",
    [
        (Symbol("_"), [1, 2], True),
        (1, 1, True),
        (1, True, False),
        ([1, Symbol("_")], [1, "x"], True),
        ([1, Symbol("_")], (1, "x"), False),
        ((Symbol("ok"), Symbol("_")), (Symbol("ok"), 5), True),
        ([1, 2], [1, 2, 3], False),
    ]
)
def test_match_literal(pattern, value, expected):
    assert match_literal(pattern, value) is expected


def test_select_runs_first_matching_body():
    calls = []
    clauses = ((1, lambda: calls.append("one") or "one"), (Symbol("_"), lambda: "any"))
    assert select(1, clauses) == "one"
    assert select(2, clauses) == "any"
    assert calls == ["one"]


def test_select_without_match():
    with pytest.raises(CaseClauseError) as exc:
        select(3, ((1, lambda: None),))
    assert exc.value.value == 3
