from lisper import EvaluatorFn
from lisper import SExpression, LispValue
from lisper.errors import LisperInvalidSymbol, LisperArityError
from lisper.types.symbol import Symbol
from lisper.types.environment import Environment


def set_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) != 2:
        raise LisperArityError("set! requires exactly 2 arguments: (set! var value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise LisperInvalidSymbol(f"set! first argument must be a Symbol, got {var_sym!r}")
    value = evaluate_fn(val_expr, env)
    env.set(var_sym, value)

    return value
