import pytest

from eta.errors import CaseClauseError, CondClauseError, TransformError
from eta.interpreter import evaluate
from eta.types.symbol import Symbol


# ------------------ let ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(let [x 10 y 20] (+ x y))", 30),
        ("(let [x 10 y (* x 2) z (+ x y)] (* z 3))", 90),
        ("(let ((x 1) (y 2)) (list x y))", [1, 2]),
        ("(let [x 1] (let [x 2] x))", 2),
        ("(let [x 1] (let [y 2] (+ x y)))", 3),
        ("(let [] 5)", 5),
    ]
)
def test_let(source, expected):
    assert evaluate(source) == expected


def test_let_body_is_an_implicit_do(capsys):
    assert evaluate('(let [x 1] (print "side") (+ x 1))') == 2
    assert capsys.readouterr().out == "side"


def test_let_inner_binding_does_not_leak():
    assert evaluate("(let [x 1] (+ (let [x 5] x) x))") == 6


@pytest.mark.parametrize("source", ["(let [x] x)", "(let [1 2] 3)", "(let x 1)", "(let [x 1])"])
def test_let_errors(source):
    with pytest.raises(TransformError):
        evaluate(source)


# ------------------ if / cond / case ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if true 1 2)", 1),
        ("(if false 1 2)", 2),
        ("(if nil 1 2)", 2),
        ("(if (< 1 2) :yes :no)", Symbol("yes")),
        ("(if false 1)", None),
    ]
)
def test_if(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize("source", ["(if true)", "(if true 1 2 3)"])
def test_if_arity(source):
    with pytest.raises(TransformError):
        evaluate(source)


COND = """
(defn sign [n]
  (cond
    ((< n 0) :negative)
    ((== n 0) :zero)
    (:else :positive)))
"""


@pytest.mark.parametrize("n,expected", [(-3, "negative"), (0, "zero"), (9, "positive")])
def test_cond(interp, n, expected):
    interp.eval(COND)
    assert interp.eval(f"(sign {n})") == Symbol(expected)


@pytest.mark.parametrize("default", [":else", "else", "true"])
def test_cond_default_markers(default):
    assert evaluate(f"(cond (false 1) ({default} 2))") == 2


def test_cond_first_true_test_wins():
    assert evaluate("(cond ((> 2 1) :first) ((> 3 1) :second))") == Symbol("first")


def test_cond_without_match_raises():
    with pytest.raises(CondClauseError):
        evaluate("(cond (false 1) (nil 2))")


def test_cond_default_must_be_last():
    with pytest.raises(TransformError):
        evaluate("(cond (:else 1) (true 2))")


def test_cond_clauses_are_pairs():
    with pytest.raises(TransformError):
        evaluate("(cond (true 1 2))")


CASE = """
(defn describe [x]
  (case x
    (0 "zero")
    (:ok "ok")
    ("s" "string")
    ((1 _) "starts with one")
    ({:error _} "an error")
    (_ "other")))
"""


@pytest.mark.parametrize(
    "arg,expected",
    [
        ("0", "zero"),
        (":ok", "ok"),
        ('"s"', "string"),
        ("(list 1 2)", "starts with one"),
        ("(list 1 2 3)", "other"),
        ("{:error 5}", "an error"),
        ("42", "other"),
    ]
)
def test_case(interp, arg, expected):
    interp.eval(CASE)
    assert interp.eval(f"(describe {arg})") == expected


def test_case_without_match_raises():
    with pytest.raises(CaseClauseError):
        evaluate("(case 3 (1 :one) (2 :two))")


def test_case_scrutinee_evaluated_once(capsys):
    assert evaluate('(case (do (print "x") 2) (1 :one) (2 :two))') == Symbol("two")
    assert capsys.readouterr().out == "x"


# ------------------ do / try ------------------

def test_do_returns_last(capsys):
    assert evaluate('(do (print "a") (print "b") 3)') == 3
    assert capsys.readouterr().out == "ab"


def test_empty_do_is_nil():
    assert evaluate("(do)") is None


def test_nested_do_with_def():
    assert evaluate("(let [a 1] (do (def b 2) (+ a b)))") == 3


def test_try_returns_value():
    assert evaluate("(try (+ 1 2))") == 3


def test_try_catches_any_error():
    tag, error = evaluate("(try (/ 1 0))")
    assert tag == Symbol("error")
    assert isinstance(error, ZeroDivisionError)


def test_try_arity():
    with pytest.raises(TransformError):
        evaluate("(try)")


# ------------------ lists and predicates ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(car (list))", None),
        ("(car nil)", None),
        ("(head [1 2])", 1),
        ("(first '(a b))", Symbol("a")),
        ("(cdr (list 1 2 3))", [2, 3]),
        ("(tail (list))", []),
        ("(rest [1])", []),
        ("(cons 1 (list 2 3))", [1, 2, 3]),
        ("(cons 1 nil)", [1]),
        ("(list 1 (+ 1 1) 3)", [1, 2, 3]),
        ("(list)", []),
        ("[1 (+ 1 1)]", [1, 2]),
        ("{1 :two}", (1, Symbol("two"))),
    ]
)
def test_list_operations(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(nil? nil)", True),
        ("(nil? 0)", False),
        ("(empty? (list))", True),
        ("(empty? \"\")", True),
        ("(empty? [1])", False),
        ("(list? [1])", True),
        ("(list? 1)", False),
        ("(atom? :a)", True),
        ("(atom? 'a)", True),
        ("(atom? \"a\")", False),
        ("(number? 1.5)", True),
        ("(number? true)", False),
        ("(string? \"s\")", True),
        ("(string? 's)", False),
    ]
)
def test_predicates(source, expected):
    assert evaluate(source) is expected


@pytest.mark.parametrize(
    "source",
    [
        "(let [str \"x\"] (string? str))",
        "((fn [list] (list? list)) [1])",
        "(do (def list 3) (list? [list]))",
    ]
)
def test_predicates_ignore_local_names_of_builtins(source):
    assert evaluate(source) is True


@pytest.mark.parametrize("source", ["(car)", "(car 1 2)", "(cons 1)", "(nil? 1 2)", "(empty?)"])
def test_list_form_arity(source):
    with pytest.raises(TransformError):
        evaluate(source)


# ------------------ strings and output ------------------

def test_str_concatenates():
    assert evaluate('(str "a" 1 :b nil)') == "a1bnil"


def test_print_and_println(capsys):
    evaluate('(print "a" 1)')
    evaluate('(println "b" :c)')
    assert capsys.readouterr().out == "a 1b c\n"


# ------------------ calls ------------------

def test_call_result_of_expression():
    assert evaluate("((fn [x] (fn [y] (+ x y))) 1)") is not None
    assert evaluate("(((fn [x] (fn [y] (+ x y))) 1) 2)") == 3


def test_keyword_lookup():
    assert evaluate("(:a ~{m})", {"m": {Symbol("a"): 1}}) == 1
    assert evaluate("(:b ~{m} 0)", {"m": {"a": 1}}) == 0
    assert evaluate("(:a ~{m})", {"m": {"a": 2}}) == 2


def test_global_core_functions():
    assert evaluate("(map inc [1 2 3])") == [2, 3, 4]
    assert evaluate("(filter even? (range 1 5))") == [2, 4]
