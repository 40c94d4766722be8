from lisper import EvaluatorFn
from lisper import SExpression, LispValue
from lisper.errors import LisperArityError
from lisper.types.environment import Environment


def quote_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) != 1:
        raise LisperArityError("quote expects exactly one argument")
    return tail[0]
