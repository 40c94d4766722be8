from lisper import EvaluatorFn
from lisper import SExpression, LispValue
from lisper.errors import LisperArityError, LisperInvalidSymbol
from lisper.types.environment import Environment
from lisper.types.symbol import Symbol
from lisper.evaluation.special_forms.lambda_form import lambda_form


def _is_lambda_expr(expr: SExpression) -> bool:
    return isinstance(expr, list) and bool(expr) and expr[0] == Symbol("lambda")


def defun_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (defun name (lambda (params) body))
    (defun name (params) body...)

    The closure captures `env` by reference and is then bound in `env`, so
    the body resolves its own name when called.
    """
    if len(tail) < 2:
        raise LisperArityError("defun requires a name and a function")

    name, *rest = tail
    if not isinstance(name, Symbol):
        raise LisperInvalidSymbol(f"defun name must be a symbol, got {name!r}")

    if len(rest) == 1 and _is_lambda_expr(rest[0]):
        fn = lambda_form(rest[0][1:], env, evaluate_fn)
    else:
        fn = lambda_form(rest, env, evaluate_fn)
    fn.name = name

    env.define(name, fn)
    return name
