from lisper import EvaluatorFn
from lisper import SExpression, LispValue
from lisper.errors import LisperArityError
from lisper.types.environment import Environment


def is_truthy(value: LispValue) -> bool:
    # Only false and the empty list are false; 0 is true
    return not (value is False or value == [])


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise LisperArityError("if requires a condition, a then-expression and an optional else-expression")

    cond = evaluate_fn(tail[0], env)

    if is_truthy(cond):
        return evaluate_fn(tail[1], env)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env)
    else:
        return False  # no else branch
