"""Embedding layer: run Lisp source from Python.

    >>> from eta.interpreter import evaluate
    >>> evaluate("(let [x 10 y 20] (+ x y))")
    30

Generated code reaches its runtime helpers through the `__eta__` name and
sees every public helper of eta.runtime.core (`map`, `even_p`, ...) as a
global. Dotted names such as `math.sqrt` import their module on first use
unless ETA_AUTO_IMPORT is switched off.
"""

from __future__ import annotations

import ast
import importlib
import logging
import types
from typing import Any, Iterable, Mapping, Optional

from eta import SExpression, TargetNode
from eta.config import RUNTIME_ALIAS, get_auto_import
from eta.debug_utils.pprint import pprint_expr
from eta.reader.parser import read
from eta.runtime import core
from eta.transform.names import mangle
from eta.transform.transformer import Transformer
from eta.types.environment import EMPTY_SCOPE, Scope

logger = logging.getLogger(__name__)

FILENAME = "<eta>"


def parse(source: str) -> list[SExpression]:
    """Read `source` without transforming it; the forms come back as data."""
    return read(source)


def to_ast(form: SExpression, env: Scope = EMPTY_SCOPE) -> TargetNode:
    return ast.fix_missing_locations(Transformer().transform(form, env))


def compile_module(forms: list[SExpression]) -> ast.Module:
    return Transformer().compile_module(forms)


def to_python(source: str) -> str:
    """Readable Python source for the Lisp `source`."""
    return ast.unparse(compile_module(parse(source)))


def pp(form: SExpression) -> SExpression:
    return pprint_expr(form)


def base_namespace() -> dict[str, Any]:
    namespace = {name: getattr(core, name) for name in core.__all__}
    namespace[RUNTIME_ALIAS] = core
    return namespace


def import_namespaces(namespaces: Iterable[tuple[str, ...]], namespace: dict[str, Any]) -> None:
    """
    Bind the root module of each dotted reference, like `import os.path`.

    For (datetime.datetime.now) the longest importable prefix is tried
    first. Roots already bound in `namespace` are left alone, and names
    that never import stay unbound.
    """
    for parts in sorted(namespaces):
        root = parts[0]
        if root in namespace:
            continue
        for i in range(len(parts), 0, -1):
            module_name = ".".join(parts[:i])
            try:
                importlib.import_module(module_name)
            except ModuleNotFoundError:
                continue
            namespace[root] = importlib.import_module(root)
            logger.debug("auto-imported %s", module_name)
            break


def run(tree: ast.Module, namespace: dict[str, Any], filename: str = FILENAME) -> Any:
    """
    Execute `tree` in `namespace` and return the value of its last statement.

    A trailing function definition or assignment yields the value it bound.
    """
    if not tree.body:
        return None
    *statements, last = tree.body
    if statements:
        exec(compile(ast.Module(body=statements, type_ignores=[]), filename, "exec"), namespace)
    if isinstance(last, ast.Expr):
        return eval(compile(ast.Expression(body=last.value), filename, "eval"), namespace)
    exec(compile(ast.Module(body=[last], type_ignores=[]), filename, "exec"), namespace)
    if isinstance(last, ast.FunctionDef):
        return namespace[last.name]
    if isinstance(last, ast.Assign):
        return namespace[last.targets[0].id]
    return None


class Interpreter:
    """
    Evaluates Lisp source against one persistent namespace.

    Definitions made by one `eval` call stay visible to the next:

        interp = Interpreter()
        interp.eval("(defn square [x] (* x x))")
        interp.eval("(square 7)")  # 49
    """

    def __init__(self, bindings: Optional[Mapping[str, Any]] = None, prelude: str | None = None):
        self.namespace = base_namespace()
        if bindings:
            for name, value in bindings.items():
                self.define(name, value)
        if prelude:
            self.eval(prelude)

    def define(self, name: str, value: Any) -> None:
        """Bind the Lisp name `name`, visible to code and to ~{name}."""
        self.namespace[mangle(name)] = value

    def lookup(self, name: str) -> Any:
        return self.namespace[mangle(name)]

    def compile(self, source: str) -> tuple[ast.Module, Transformer]:
        tf = Transformer()
        tree = tf.compile_module(parse(source))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("generated Python:\n%s", ast.unparse(tree))
        return tree, tf

    def eval(self, source: str) -> Any:
        """Evaluate every form in `source`; the value of the last one is returned."""
        tree, tf = self.compile(source)
        if get_auto_import():
            import_namespaces(tf.namespaces, self.namespace)
        return run(tree, self.namespace)


def evaluate(source: str, bindings: Optional[Mapping[str, Any]] = None) -> Any:
    """Evaluate `source` in a fresh namespace; `bindings` supply ~{name} values."""
    return Interpreter(bindings).eval(source)


def load_module(name: str, source: str) -> types.ModuleType:
    """
    Build a Python module from Lisp source.

    defn and def names make up the module's `__all__`; defp functions are
    still attributes of the module but are not exported.
    """
    tf = Transformer()
    tree = tf.compile_module(parse(source))
    module = types.ModuleType(name)
    module.__dict__.update(base_namespace())
    if get_auto_import():
        import_namespaces(tf.namespaces, module.__dict__)
    exec(compile(tree, f"<eta:{name}>", "exec"), module.__dict__)
    module.__all__ = list(tf.public)
    logger.debug("loaded module %s exporting %s", name, module.__all__)
    return module
