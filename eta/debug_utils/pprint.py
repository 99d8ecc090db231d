import json
import math
from decimal import Decimal

from eta.config import get_pprint_width
from eta.transform.special_forms import SpecialForm
from eta.types.forms import Interpolate, Quasiquote, Quote, Tuple, Unquote, UnquoteSplicing, Vector
from eta.types.symbol import Keyword, Symbol

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_KEYWORD = "\033[95m"
COLOR_STRING = "\033[92m"
COLOR_QUOTE = "\033[96m"
COLOR_UNQUOTE = "\033[91m"
COLOR_SPECIAL_FORM = "\033[90m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": get_pprint_width(),
    "color_symbols": False,
    "color_keywords": False,
    "color_strings": False,
    "color_quote": False,
    "color_unquote": False,
    "color_special_forms": False,
}

SPECIAL_FORMS = {form.value for form in SpecialForm}

PREFIXES = {
    Quote: "'",
    Quasiquote: "`",
    Unquote: "~",
    UnquoteSplicing: "~@",
}

STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


# ----------------- Colorize utility -----------------
def colorize(text: str, color: str, flag: str, options: dict) -> str:
    if options.get(flag, False):
        return f"{color}{text}{RESET}"
    return text


def format_atom(expr, options: dict = DEFAULT_OPTIONS) -> str:
    if expr is None:
        return "nil"
    if expr is True:
        return "true"
    if expr is False:
        return "false"
    if isinstance(expr, Symbol):
        if expr.id in SPECIAL_FORMS:
            return colorize(expr.id, COLOR_SPECIAL_FORM, "color_special_forms", options)
        return colorize(expr.id, COLOR_SYMBOL, "color_symbols", options)
    if isinstance(expr, Keyword):
        return colorize(str(expr), COLOR_KEYWORD, "color_keywords", options)
    if isinstance(expr, str):
        text = '"' + "".join(STRING_ESCAPES.get(ch, ch) for ch in expr) + '"'
        return colorize(text, COLOR_STRING, "color_strings", options)
    if isinstance(expr, float):
        return format_float(expr)
    if isinstance(expr, Interpolate):
        return colorize("~{" + expr.name + "}", COLOR_UNQUOTE, "color_unquote", options)
    return repr(expr)


def format_float(value: float) -> str:
    """Positional notation, so 1e-05 prints as 0.00001 and reads back as a float."""
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    return text if "." in text else text + ".0"


def is_simple(items: list) -> bool:
    """At most three elements, none of them a list."""
    return len(items) <= 3 and not any(isinstance(x, list) for x in items)


# ----------------- Pretty printer -----------------
def format_sexpr(expr, indent: int = 0, options: dict = DEFAULT_OPTIONS) -> str:
    """
    Render `expr` as source text that reads back to an equal form.

    A list of at most three non-list elements goes on one line; any other
    list opens on its own line with one indented child per line.
    """
    pad = "  " * indent

    if isinstance(expr, (Quote, Quasiquote)):
        color_flag = "color_quote"
        prefix = colorize(PREFIXES[type(expr)], COLOR_QUOTE, color_flag, options)
        return prefix + format_sexpr(expr.expr, indent, options)
    if isinstance(expr, (Unquote, UnquoteSplicing)):
        prefix = colorize(PREFIXES[type(expr)], COLOR_UNQUOTE, "color_unquote", options)
        return prefix + format_sexpr(expr.expr, indent, options)

    if isinstance(expr, Vector):
        return "[" + " ".join(format_sexpr(x, indent, options) for x in expr) + "]"
    if isinstance(expr, Tuple):
        return "{" + " ".join(format_sexpr(x, indent, options) for x in expr) + "}"

    if isinstance(expr, list):
        if not expr:
            return "()"
        if is_simple(expr):
            single_line = "(" + " ".join(format_sexpr(x, 0, options) for x in expr) + ")"
            if len(single_line) + indent * 2 <= options.get("max_line_length", 80):
                return single_line
        children = "\n".join(pad + "  " + format_sexpr(x, indent + 1, options) for x in expr)
        return "(\n" + children + "\n" + pad + ")"

    return format_atom(expr, options)


def pprint_expr(expr, options: dict = DEFAULT_OPTIONS):
    """Print `expr` formatted and hand it back unchanged."""
    print(format_sexpr(expr, options=options))
    return expr


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError:
        return DEFAULT_OPTIONS
    return {**DEFAULT_OPTIONS, **user_opts}
