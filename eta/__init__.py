# Core type aliases for Eta's data model.
# The reader emits plain Python values where it can (int, float, str, bool,
# None, list) and small frozen node types for everything else (Symbol,
# Keyword, Vector, Tuple and the quote family). The transformer turns those
# forms into nodes from the standard library `ast` module.
#
# Naming guidance:
# - SExpression: forms produced by the reader (code-as-data).
# - TargetNode:  what the transformer hands back (an `ast.expr` or `ast.stmt`).

import ast
from typing import Any, Union

SExpression = Any

TargetNode = Union[ast.expr, ast.stmt]
