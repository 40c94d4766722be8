"""Built-in procedures for the Lisper runtime environment.

This module defines integer arithmetic, comparison, boolean logic, list
helpers and print, plus the registration utility that installs them into a
global Environment. Every builtin takes (env, args) with args already
evaluated left to right.
"""
from __future__ import annotations

from typing import Callable

from lisper import LispValue
from lisper.errors import LisperArithmeticError, LisperArityError, LisperTypeError
from lisper.printer import to_lisp_str
from lisper.types.environment import Environment
from lisper.types.symbol import Symbol

Builtin = Callable[[Environment, list[LispValue]], LispValue]

BUILTINS: dict[Symbol, Builtin] = {}


def builtin(name: str) -> Callable[[Builtin], Builtin]:
    """Register a Python function as the builtin procedure `name`."""
    def decorator(fn: Builtin) -> Builtin:
        fn.lisp_name = name
        BUILTINS[Symbol(name)] = fn
        return fn
    return decorator


def is_number(x: LispValue) -> bool:
    # bool is an int subclass but never a number here
    return isinstance(x, int) and not isinstance(x, bool)


def _require_numbers(name: str, args: list[LispValue]) -> None:
    for a in args:
        if not is_number(a):
            raise LisperTypeError(
                f"All arguments to {name} must be numbers, got {to_lisp_str(a, readable=True)}"
            )


def _require_booleans(name: str, args: list[LispValue]) -> None:
    for a in args:
        if not isinstance(a, bool):
            raise LisperTypeError(
                f"All arguments to {name} must be booleans, got {to_lisp_str(a, readable=True)}"
            )


def _require_at_least(name: str, args: list[LispValue], n: int) -> None:
    if len(args) < n:
        raise LisperArityError(f"{name} requires at least {n} argument(s)")


def _require_exactly(name: str, args: list[LispValue], n: int) -> None:
    if len(args) != n:
        raise LisperArityError(f"{name} requires exactly {n} argument(s), got {len(args)}")


def is_equal(a: LispValue, b: LispValue) -> bool:
    """Deep equality for Lisp values, with element-wise comparison for lists."""
    if a is b:
        return True
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if type(a) != type(b):
        return False
    return a == b


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    if b == 0:
        raise LisperArithmeticError("Division by zero")
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


# -------------------------------
# Arithmetic
# -------------------------------
@builtin("+")
def add(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the sum of all arguments."""
    _require_at_least("+", args, 1)
    _require_numbers("+", args)
    return sum(args)


@builtin("-")
def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; (- x) is x."""
    _require_at_least("-", args, 1)
    _require_numbers("-", args)
    result = args[0]
    for x in args[1:]:
        result -= x
    return result


@builtin("*")
def mul(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the product of all arguments."""
    _require_at_least("*", args, 1)
    _require_numbers("*", args)
    result = 1
    for x in args:
        result *= x
    return result


@builtin("/")
def div(env: Environment, args: list[LispValue]) -> LispValue:
    """Divide left-to-right, truncating toward zero."""
    _require_at_least("/", args, 1)
    _require_numbers("/", args)
    result = args[0]
    for x in args[1:]:
        result = trunc_div(result, x)
    return result


@builtin("mod")
def mod(env: Environment, args: list[LispValue]) -> LispValue:
    """(mod n d): remainder matching `/`, so it takes the sign of n."""
    _require_exactly("mod", args, 2)
    _require_numbers("mod", args)
    n, d = args
    if d == 0:
        raise LisperArithmeticError("Modulo by zero")
    return n - d * trunc_div(n, d)


# -------------------------------
# Comparison
# -------------------------------
@builtin("=")
def equals(env: Environment, args: list[LispValue]) -> bool:
    """True if all arguments are equal (or there are fewer than two)."""
    return all(is_equal(a, b) for a, b in zip(args, args[1:]))


@builtin("!=")
def not_equals(env: Environment, args: list[LispValue]) -> bool:
    return not equals(env, args)


def _chain(name: str, args: list[LispValue], predicate: Callable[[int, int], bool]) -> bool:
    _require_numbers(name, args)
    return all(predicate(a, b) for a, b in zip(args, args[1:]))


@builtin("<")
def lt(env: Environment, args: list[LispValue]) -> bool:
    return _chain("<", args, lambda a, b: a < b)


@builtin("<=")
def lte(env: Environment, args: list[LispValue]) -> bool:
    return _chain("<=", args, lambda a, b: a <= b)


@builtin(">")
def gt(env: Environment, args: list[LispValue]) -> bool:
    return _chain(">", args, lambda a, b: a > b)


@builtin(">=")
def gte(env: Environment, args: list[LispValue]) -> bool:
    return _chain(">=", args, lambda a, b: a >= b)


# -------------------------------
# Logic
# -------------------------------
@builtin("and")
def logical_and(env: Environment, args: list[LispValue]) -> bool:
    _require_at_least("and", args, 1)
    _require_booleans("and", args)
    return all(args)


@builtin("or")
def logical_or(env: Environment, args: list[LispValue]) -> bool:
    _require_at_least("or", args, 1)
    _require_booleans("or", args)
    return any(args)


@builtin("not")
def logical_not(env: Environment, args: list[LispValue]) -> bool:
    _require_exactly("not", args, 1)
    _require_booleans("not", args)
    return not args[0]


# -------------------------------
# Lists
# -------------------------------
@builtin("list")
def list_builtin(env: Environment, args: list[LispValue]) -> list[LispValue]:
    return list(args)


def _require_list(name: str, x: LispValue) -> list[LispValue]:
    if not isinstance(x, list):
        raise LisperTypeError(f"{name} expects a list, got {to_lisp_str(x, readable=True)}")
    return x


@builtin("cons")
def cons(env: Environment, args: list[LispValue]) -> list[LispValue]:
    """(cons x xs): new list with x prepended; xs is left untouched."""
    _require_exactly("cons", args, 2)
    head, tail = args
    return [head] + _require_list("cons", tail)


@builtin("car")
def car(env: Environment, args: list[LispValue]) -> LispValue:
    _require_exactly("car", args, 1)
    xs = _require_list("car", args[0])
    if not xs:
        raise LisperTypeError("car of empty list")
    return xs[0]


@builtin("cdr")
def cdr(env: Environment, args: list[LispValue]) -> list[LispValue]:
    _require_exactly("cdr", args, 1)
    xs = _require_list("cdr", args[0])
    if not xs:
        raise LisperTypeError("cdr of empty list")
    return xs[1:]


@builtin("null?")
def null(env: Environment, args: list[LispValue]) -> bool:
    _require_exactly("null?", args, 1)
    return isinstance(args[0], list) and not args[0]


@builtin("len")
def length(env: Environment, args: list[LispValue]) -> int:
    """Length of a list or string."""
    _require_exactly("len", args, 1)
    x = args[0]
    if not isinstance(x, (list, str)):
        raise LisperTypeError(f"len expects a list or string, got {to_lisp_str(x, readable=True)}")
    return len(x)


@builtin("concat")
def concat(env: Environment, args: list[LispValue]) -> LispValue:
    """Concatenate lists, or strings; mixing the two is an error."""
    _require_at_least("concat", args, 1)
    if all(isinstance(a, str) for a in args):
        return "".join(args)
    result: list[LispValue] = []
    for item in args:
        if not isinstance(item, list):
            raise LisperTypeError(
                f"concat expects all lists or all strings, got {to_lisp_str(item, readable=True)}"
            )
        result.extend(item)
    return result


# -------------------------------
# Output
# -------------------------------
@builtin("print")
def print_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """Print the value followed by a newline; returns the printed value."""
    _require_exactly("print", args, 1)
    print(to_lisp_str(args[0]))
    return args[0]


def register(env: Environment) -> None:
    """Register all builtin procedures into the given environment."""
    env.update(BUILTINS)
