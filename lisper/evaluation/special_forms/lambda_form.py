import logging

from lisper import EvaluatorFn
from lisper import SExpression, LispValue
from lisper.errors import LisperArityError, LisperTypeError
from lisper.types.environment import Environment
from lisper.types.lambda_fn import Lambda
from lisper.types.symbol import Symbol

logger = logging.getLogger(__name__)


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (lambda (params) body...)
    Several body forms are an implicit progn. The body is not evaluated here.
    """
    if len(tail) < 2:
        raise LisperArityError("lambda requires a parameter list and a body")

    params, *body_forms = tail
    if not isinstance(params, list):
        raise LisperTypeError("lambda parameters must be a list of symbols")
    for p in params:
        if not isinstance(p, Symbol):
            raise LisperTypeError(f"lambda parameter must be a symbol, got {p!r}")
    if len(set(params)) != len(params):
        raise LisperTypeError("lambda parameters must be distinct")

    if len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = [Symbol("progn"), *body_forms]

    logger.debug("closure created: params=(%s)", " ".join(str(p) for p in params))
    return Lambda(list(params), body, env)
