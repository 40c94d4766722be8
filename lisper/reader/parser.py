"""
  Lisp Reader, Lexer and Parser

- Streaming, lazy lexing; one top-level expression parsed at a time
- Emits Python primitives instead of Cons cells:

    - lists -> Python list
    - symbols -> Symbol
    - true / false -> bool
    - integers -> int
    - strings -> str
"""

from __future__ import annotations

import re
from typing import Iterator, Iterable, NamedTuple, Optional

from lisper import SExpression
from lisper.errors import (
    LisperLexError,
    LisperResourceError,
    LisperUnexpectedEOF,
    LisperUnexpectedToken,
)
from lisper.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>")'  # opening quote, body scanned by hand
    r'|(?P<atom>[^\s()";]+)'  # symbols and numbers
)

NUMBER_START_RE = re.compile(r"[+-]?\d")
INTEGER_RE = re.compile(r"[+-]?\d+")

STRING_ESCAPES: dict[str, str] = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
}

BOOLEANS: dict[str, bool] = {"true": True, "false": False}


class Token(NamedTuple):
    kind: Optional[str]  # lparen | rparen | symbol | number | string; None at EOF
    value: Optional[str]
    offset: int


def _read_string(source: str, start: int) -> tuple[str, int]:
    """Decode the string literal opening at `start`; return (text, end offset)."""
    pos = start + 1
    n = len(source)
    chars: list[str] = []
    while pos < n:
        ch = source[pos]
        if ch == '"':
            return "".join(chars), pos + 1
        if ch == "\\":
            if pos + 1 >= n:
                break
            esc = source[pos + 1]
            if esc not in STRING_ESCAPES:
                raise LisperLexError(f"Unknown escape sequence \\{esc} at {pos}", pos)
            chars.append(STRING_ESCAPES[esc])
            pos += 2
            continue
        chars.append(ch)
        pos += 1
    raise LisperLexError(f"Unterminated string literal starting at {start}", start)


def lex(source: str) -> Iterator[Token]:
    """Token generator. Calling it again restarts from the beginning of `source`."""
    pos = 0
    n = len(source)

    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue

        m = TOKEN_RE.match(source, pos)
        if m is None:
            # unreachable for str input, every char matches some alternative
            raise LisperLexError(f"Unexpected char at {pos}: {source[pos]!r}", pos)

        kind = m.lastgroup
        if kind == "comment":
            pos = m.end()
        elif kind == "string":
            text, end = _read_string(source, pos)
            yield Token("string", text, pos)
            pos = end
        elif kind == "atom":
            word = m.group(kind)
            yield Token("number" if NUMBER_START_RE.match(word) else "symbol", word, pos)
            pos = m.end()
        else:
            yield Token(kind, m.group(kind), pos)
            pos = m.end()


class TokenStream:
    def __init__(self, token_iter: Iterable[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.last_offset = 0

    def peek(self) -> Token:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return Token(None, None, self.last_offset)
        return self.buffer[0]

    def advance(self) -> Token:
        tok = self.buffer.pop(0) if self.buffer else next(self.tokens, None)
        if tok is None:
            return Token(None, None, self.last_offset)
        self.last_offset = tok.offset
        return tok

    def parse_expr(self) -> SExpression:
        """Parse one expression; returns None once the input is exhausted."""
        try:
            return self._parse_expr()
        except RecursionError:
            raise LisperResourceError("Expression nested too deeply") from None

    def _parse_expr(self) -> SExpression:
        tok_type, tok_val, offset = self.peek()
        if tok_type is None:
            return None

        if tok_type == "lparen":
            self.advance()
            items = []
            while True:
                kind = self.peek().kind
                if kind is None:
                    raise LisperUnexpectedEOF(f"Unmatched '(' at {offset}", offset)
                if kind == "rparen":
                    self.advance()
                    return items
                items.append(self._parse_expr())

        if tok_type == "rparen":
            raise LisperUnexpectedToken(f"Unexpected ')' at {offset}", offset)

        self.advance()

        if tok_type == "number":
            if not INTEGER_RE.fullmatch(tok_val):
                raise LisperUnexpectedToken(
                    f"Malformed number literal {tok_val!r} at {offset}", offset
                )
            try:
                return int(tok_val)
            except ValueError:
                # host cap on str -> int digits
                raise LisperResourceError(
                    f"Integer literal too long at {offset}"
                ) from None

        if tok_type == "string":
            return tok_val

        if tok_type == "symbol":
            if tok_val in BOOLEANS:
                return BOOLEANS[tok_val]
            return Symbol(tok_val)

        raise LisperUnexpectedToken(f"Unknown token: {tok_type} {tok_val}", offset)

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type = self.peek().kind
            if tok_type is None:
                break
            yield self.parse_expr()


def parse(source: str) -> list[SExpression]:
    """Parse every top-level expression in `source`."""
    return list(TokenStream(lex(source)).parse_all())
