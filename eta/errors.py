
class EtaError(Exception):
    """ Base class for all Eta errors"""
    pass

class LexError(EtaError):
    """ Raised when the source text cannot be tokenized"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.position = position

class ParseError(EtaError):
    """ Raised when the token stream does not form valid expressions"""

class TransformError(EtaError):
    """ Raised when a form has no translation into a Python syntax tree"""

# Raised at run time by generated code

class CondClauseError(EtaError):
    """ Raised when no clause of a cond expression matches"""

class CaseClauseError(EtaError):
    """ Raised when no clause of a case expression matches the value"""

    def __init__(self, value):
        super().__init__(f"no case clause matching: {value!r}")
        self.value = value

class FunctionClauseError(EtaError):
    """ Raised when no clause of a function matches the arguments"""

    def __init__(self, name: str, args):
        super().__init__(f"no function clause matching in {name}/{len(args)}: {list(args)!r}")
        self.name = name
        self.args_given = tuple(args)
