"""Special forms of the Eta transformer.

SpecialForm enumerates every head symbol with its own translation rule.
`dispatch` maps each member onto its handler; a list whose head is not a
member is an ordinary call and never reaches this module. Every handler is
called as handler(tail, env, tf) with the untransformed argument forms.
"""

from __future__ import annotations

import ast
from enum import Enum
from typing import Optional

from eta import SExpression
from eta.types.environment import Scope
from eta.types.symbol import Symbol
from eta.transform.special_forms.define_forms import def_form, defn_form, defp_form
from eta.transform.special_forms.lambda_form import lambda_form
from eta.transform.special_forms.let_form import let_form
from eta.transform.special_forms.if_forms import if_form, cond_form, case_form
from eta.transform.special_forms.progn_form import do_form
from eta.transform.special_forms.quote_forms import quote_form, quasiquote_form, unquote_form, unquote_splice_form
from eta.transform.special_forms.try_form import try_form
from eta.transform.special_forms.operator_forms import (
    arithmetic_form, remainder_form, comparison_form, boolean_form, not_form,
)
from eta.transform.special_forms.list_forms import car_form, cdr_form, cons_form, list_form, predicate_form
from eta.transform.special_forms.io_forms import str_form, print_form, println_form


class SpecialForm(str, Enum):
    DEFN = "defn"
    DEFP = "defp"
    DEF = "def"
    LET = "let"
    IF = "if"
    COND = "cond"
    CASE = "case"
    LAMBDA = "lambda"
    FN = "fn"
    DO = "do"
    QUOTE = "quote"
    QUASIQUOTE = "quasiquote"
    UNQUOTE = "unquote"
    UNQUOTE_SPLICING = "unquote-splicing"
    TRY = "try"
    # arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    REM = "rem"
    MOD = "mod"
    # comparison
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    EQ = "=="
    EQUALS = "="
    NE = "!="
    # boolean
    AND = "and"
    OR = "or"
    NOT = "not"
    # lists
    CAR = "car"
    HEAD = "head"
    FIRST = "first"
    CDR = "cdr"
    TAIL = "tail"
    REST = "rest"
    CONS = "cons"
    LIST = "list"
    # predicates
    NIL_P = "nil?"
    EMPTY_P = "empty?"
    LIST_P = "list?"
    ATOM_P = "atom?"
    NUMBER_P = "number?"
    STRING_P = "string?"
    # strings and output
    STR = "str"
    PRINT = "print"
    PRINTLN = "println"


def special_form(head: SExpression) -> Optional[SpecialForm]:
    """The SpecialForm named by `head`, or None for an ordinary call head."""
    if not isinstance(head, Symbol):
        return None
    try:
        return SpecialForm(head.id)
    except ValueError:
        return None


def dispatch(form: SpecialForm, tail: list[SExpression], env: Scope, tf) -> ast.expr:
    match form:
        case SpecialForm.DEFN:
            return defn_form(tail, env, tf)
        case SpecialForm.DEFP:
            return defp_form(tail, env, tf)
        case SpecialForm.DEF:
            return def_form(tail, env, tf)
        case SpecialForm.LET:
            return let_form(tail, env, tf)
        case SpecialForm.IF:
            return if_form(tail, env, tf)
        case SpecialForm.COND:
            return cond_form(tail, env, tf)
        case SpecialForm.CASE:
            return case_form(tail, env, tf)
        case SpecialForm.LAMBDA | SpecialForm.FN:
            return lambda_form(tail, env, tf)
        case SpecialForm.DO:
            return do_form(tail, env, tf)
        case SpecialForm.QUOTE:
            return quote_form(tail, env, tf)
        case SpecialForm.QUASIQUOTE:
            return quasiquote_form(tail, env, tf)
        case SpecialForm.UNQUOTE:
            return unquote_form(tail, env, tf)
        case SpecialForm.UNQUOTE_SPLICING:
            return unquote_splice_form(tail, env, tf)
        case SpecialForm.TRY:
            return try_form(tail, env, tf)
        case SpecialForm.ADD | SpecialForm.SUB | SpecialForm.MUL | SpecialForm.DIV:
            return arithmetic_form(form.value, tail, env, tf)
        case SpecialForm.REM | SpecialForm.MOD:
            return remainder_form(form.value, tail, env, tf)
        case (SpecialForm.LT | SpecialForm.GT | SpecialForm.LE | SpecialForm.GE
              | SpecialForm.EQ | SpecialForm.EQUALS | SpecialForm.NE):
            return comparison_form(form.value, tail, env, tf)
        case SpecialForm.AND | SpecialForm.OR:
            return boolean_form(form.value, tail, env, tf)
        case SpecialForm.NOT:
            return not_form(tail, env, tf)
        case SpecialForm.CAR | SpecialForm.HEAD | SpecialForm.FIRST:
            return car_form(form.value, tail, env, tf)
        case SpecialForm.CDR | SpecialForm.TAIL | SpecialForm.REST:
            return cdr_form(form.value, tail, env, tf)
        case SpecialForm.CONS:
            return cons_form(tail, env, tf)
        case SpecialForm.LIST:
            return list_form(tail, env, tf)
        case (SpecialForm.NIL_P | SpecialForm.EMPTY_P | SpecialForm.LIST_P
              | SpecialForm.ATOM_P | SpecialForm.NUMBER_P | SpecialForm.STRING_P):
            return predicate_form(form.value, tail, env, tf)
        case SpecialForm.STR:
            return str_form(tail, env, tf)
        case SpecialForm.PRINT:
            return print_form(tail, env, tf)
        case SpecialForm.PRINTLN:
            return println_form(tail, env, tf)
    raise AssertionError(f"unhandled special form: {form}")
