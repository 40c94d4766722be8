from lisper import EvaluatorFn
from lisper import SExpression, LispValue
from lisper.errors import LisperArityError, LisperInvalidSymbol
from lisper.types.environment import Environment
from lisper.types.lambda_fn import Lambda
from lisper.types.symbol import Symbol


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (def name value)
    Binds in the current scope only and returns the name.
    """
    if len(tail) != 2:
        raise LisperArityError("def requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise LisperInvalidSymbol(f"def name must be a symbol, got {name!r}")
    value = evaluate_fn(val_expr, env)
    if isinstance(value, Lambda) and value.name is None:
        value.name = name
    env.define(name, value)
    return name
