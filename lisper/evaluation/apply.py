"""Application engine for Lisper.

Centralizes function application for the interpreter:
- Closures (Lambda) get a fresh scope chained to their captured environment,
  with exact arity enforced by Lambda.extend_env.
- Builtins are Python callables invoked as fn(env, args).
"""

from typing import Callable

from lisper import LispValue, EvaluatorFn
from lisper.errors import LisperNotCallable
from lisper.printer import to_lisp_str
from lisper.types.environment import Environment
from lisper.types.lambda_fn import Lambda


def is_procedure(value: LispValue) -> bool:
    return isinstance(value, Lambda) or callable(value)


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply a Lisp Lambda to already-evaluated argument values.

    The body runs in a new Environment whose parent is the closure's captured
    environment, never the caller's. Each call is a host-level recursion,
    there is no tail-call elimination.
    """
    new_env = fn.extend_env(list(args))
    return evaluate_fn(fn.body, new_env)


def apply(
    head: Lambda | Callable[[Environment, list[LispValue]], LispValue] | object,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Python callable.

    - For Lambda, defer to apply_lambda.
    - For Python callables (builtins), invoke with the runtime env and list of args.
    - Otherwise, raise LisperNotCallable.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn)
    elif callable(head):
        return head(env, args)
    else:
        raise LisperNotCallable(f"Cannot apply non-function {to_lisp_str(head, readable=True)}")
