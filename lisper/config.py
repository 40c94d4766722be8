from __future__ import annotations
import os
from typing import Optional


_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_PROMPT = '> '


def int_from_env(var: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_recursion_limit() -> Optional[int]:
    # None leaves the interpreter's own limit untouched
    return int_from_env('LISPER_RECURSION_LIMIT')


def get_log_level() -> str:
    return os.environ.get('LISPER_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_prompt() -> str:
    return os.environ.get('LISPER_PROMPT', _DEFAULT_PROMPT)
