# Core type aliases for Lisper's data model.
# Plain Python types represent both code (forms) and runtime values:
# int for numbers, bool for booleans, str for strings, Symbol for names and
# list for S-expression lists. Closures are Lambda objects; builtins are
# Python callables taking (env, args).
#
# Naming guidance:
# - SExpression: reader/parser code, denotes syntactic forms.
# - LispValue:  evaluator/runtime code, denotes evaluated values.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value alias
LispValue = Any
# Forms alias (used interchangeably with LispValue)
SExpression = LispValue

# Evaluator function type handed to special forms
EvaluatorFn = Callable[..., LispValue]
