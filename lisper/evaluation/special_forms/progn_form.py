from lisper import EvaluatorFn
from lisper import SExpression, LispValue
from lisper.types.environment import Environment


def progn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    result: LispValue = []
    for e in tail:
        result = evaluate_fn(e, env)
    return result
