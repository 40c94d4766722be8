"""Render Lisp values back to source text."""

from __future__ import annotations

from lisper import LispValue
from lisper.errors import LisperResourceError
from lisper.types.lambda_fn import Lambda
from lisper.types.symbol import Symbol

STRING_ESCAPES_OUT: dict[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
}


def _quote_string(s: str) -> str:
    return '"' + "".join(STRING_ESCAPES_OUT.get(ch, ch) for ch in s) + '"'


def to_lisp_str(x: LispValue, readable: bool = False) -> str:
    """Convert a Lisp value to its printable form.

    With `readable` set, strings are quoted and escaped so the output can be
    read back; otherwise they are written raw, as `print` does.
    """
    try:
        return _to_lisp_str(x, readable)
    except RecursionError:
        raise LisperResourceError("Value nested too deeply to print") from None


def _to_lisp_str(x: LispValue, readable: bool) -> str:
    # bool before int: bool is an int subclass
    if isinstance(x, bool):
        return "true" if x else "false"
    if isinstance(x, int):
        try:
            return str(x)
        except ValueError:
            # host cap on int -> str digits
            raise LisperResourceError("Integer too large to print") from None
    if isinstance(x, str):
        return _quote_string(x) if readable else x
    if isinstance(x, Symbol):
        return x.id
    if isinstance(x, list):
        return "(" + " ".join(_to_lisp_str(e, readable) for e in x) + ")"
    if isinstance(x, Lambda):
        return str(x)
    if callable(x):
        return f"<builtin {getattr(x, 'lisp_name', getattr(x, '__name__', '?'))}>"
    return str(x)
