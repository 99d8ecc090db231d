import pytest
from hypothesis import given, strategies as st

from eta.debug_utils.pprint import (
    DEFAULT_OPTIONS,
    format_sexpr,
    load_options_from_json,
    pprint_expr,
)
from eta.interpreter import pp
from eta.reader.parser import read
from eta.runtime.printer import to_repr, to_str
from eta.types.forms import Quasiquote, Quote, Tuple, Vector
from eta.types.symbol import Keyword, Symbol


@pytest.mark.parametrize(
    "form,expected",
    [
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (-2.5, "-2.5"),
        ("hi", '"hi"'),
        ('a "b"\n', '"a \\"b\\"\\n"'),
        (Symbol("x"), "x"),
        (Keyword("ok"), ":ok"),
        ([], "()"),
        ([Symbol("+"), 1, 2], "(+ 1 2)"),
        (Vector([1, 2, 3]), "[1 2 3]"),
        (Tuple([Keyword("ok"), 1]), "{:ok 1}"),
        (Quote(Symbol("a")), "'a"),
        (Quasiquote([Symbol("a")]), "`(a)"),
    ]
)
def test_format_atoms_and_short_lists(form, expected):
    assert format_sexpr(form) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.00001, "0.00001"),
        (1e23, "100000000000000000000000.0"),
        (1.5, "1.5"),
        (-0.25, "-0.25"),
    ]
)
def test_float_prints_positionally(value, expected):
    assert format_sexpr(value) == expected
    assert read(format_sexpr(value)) == [value]


def test_large_float_reads_back_unchanged():
    [value] = read("123456789012345678901234.5")
    text = format_sexpr(value)
    assert "e" not in text
    assert read(text) == [value]


def test_long_list_is_indented_one_child_per_line():
    form = [Symbol("+"), 1, 2, 3]
    assert format_sexpr(form) == "(\n  +\n  1\n  2\n  3\n)"


def test_nested_list_is_indented():
    form = [Symbol("if"), [Symbol("<"), Symbol("x"), 0], 1]
    assert format_sexpr(form) == "(\n  if\n  (< x 0)\n  1\n)"


def test_nested_indentation_grows():
    inner = [Symbol("do"), 1, 2, 3]
    assert format_sexpr([Symbol("f"), inner]) == "(\n  f\n  (\n    do\n    1\n    2\n    3\n  )\n)"


def test_short_list_over_width_is_broken():
    options = load_options_from_json('{"max_line_length": 10}')
    assert format_sexpr([Symbol("concat"), "abcdef", "ghijkl"], options=options) == (
        '(\n  concat\n  "abcdef"\n  "ghijkl"\n)'
    )


def test_colors_can_be_switched_on():
    options = load_options_from_json('{"color_symbols": true}')
    assert "\033[94mx\033[0m" == format_sexpr(Symbol("x"), options=options)


def test_load_options_merges_with_defaults():
    options = load_options_from_json('{"max_line_length": 50}')
    assert options["max_line_length"] == 50
    assert options["color_symbols"] == DEFAULT_OPTIONS["color_symbols"]


def test_load_options_invalid_json_gives_defaults():
    assert load_options_from_json("{not json") == DEFAULT_OPTIONS


def test_pprint_returns_form(capsys):
    form = [Symbol("a"), 1]
    assert pprint_expr(form) is form
    assert capsys.readouterr().out == "(a 1)\n"


def test_pp_prints_and_returns(capsys):
    form = read("(defn add [a b] (+ a b))")[0]
    assert pp(form) is form
    assert capsys.readouterr().out.startswith("(\n  defn\n  add\n  [a b]\n")


@pytest.mark.parametrize(
    "value,shown,printed",
    [
        (None, "nil", "nil"),
        (True, "true", "true"),
        ("s", '"s"', "s"),
        (Symbol("ok"), "ok", "ok"),
        ([1, "a", [Symbol("b")]], '(1 "a" (b))', '(1 "a" (b))'),
        ((Symbol("error"), 1), "{error 1}", "{error 1}"),
        (3.5, "3.5", "3.5"),
    ]
)
def test_runtime_printer(value, shown, printed):
    assert to_repr(value) == shown
    assert to_str(value) == printed


# -------------------------------
# Round trip
# -------------------------------
symbol_strat = st.from_regex(r"[a-z][a-z0-9?!*+<>=-]{0,8}", fullmatch=True).filter(
    lambda s: s not in ("true", "false", "nil")
)

atom_strat = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-10_000, max_value=10_000),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=12),
    symbol_strat.map(Symbol),
    symbol_strat.map(Keyword),
)

sexpr_strat = st.recursive(
    atom_strat,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.lists(children, max_size=4).map(Vector),
        st.lists(children, max_size=4).map(Tuple),
        children.map(Quote),
        children.map(Quasiquote),
    ),
    max_leaves=20,
)


@given(sexpr_strat)
def test_format_round_trip(form):
    assert read(format_sexpr(form)) == [form]
