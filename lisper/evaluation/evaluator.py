"""Core evaluator for the Lisper interpreter.

A plain recursive tree walker: special forms are dispatched by head symbol,
everything else is ordinary application with arguments evaluated left to
right. The host call stack is the evaluation stack.
"""

from __future__ import annotations

import logging

from lisper import SExpression, LispValue
from lisper.errors import LisperNotCallable, LisperResourceError
from lisper.printer import to_lisp_str
from lisper.types.environment import Environment
from lisper.types.symbol import Symbol
from lisper.evaluation.apply import apply, is_procedure
from lisper.evaluation.special_forms import SPECIAL_FORMS

logger = logging.getLogger(__name__)


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Evaluate one top-level expression.

    Host stack exhaustion from runaway recursion is reported as
    LisperResourceError.
    """
    try:
        return evaluate0(expr, env)
    except RecursionError:
        logger.debug("recursion limit hit, aborting top-level expression")
        raise LisperResourceError("Maximum recursion depth exceeded") from None


def evaluate0(expr: SExpression, env: Environment) -> LispValue:
    """
    Core evaluator: reduce `expr` in `env` to a value.
    """
    match expr:
        case Symbol():
            return env.lookup(expr)

        case []:
            return []

        case [head, *tail_args]:
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](tail_args, env, evaluate0)

            fn = evaluate0(head, env)
            if not is_procedure(fn):
                raise LisperNotCallable(
                    f"Cannot apply non-function {to_lisp_str(fn, readable=True)}"
                )
            args = [evaluate0(arg, env) for arg in tail_args]
            return apply(fn, args, env, evaluate0)

    # --- Atoms return as-is ---
    return expr
