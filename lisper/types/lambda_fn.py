"""Lambda closure representation and argument binding for Lisper."""

from __future__ import annotations

from io import StringIO

from lisper import SExpression, LispValue
from lisper.types.environment import Environment
from lisper.types.symbol import Symbol
from lisper.errors import LisperArityError


class Lambda:
    """A first-class closure: formal parameters, body and the defining env."""

    __slots__ = ("formals", "body", "env", "name")

    def __init__(
        self,
        formals: list[Symbol],
        body: SExpression,
        env: Environment,
        name: Symbol | None = None,
    ):
        self.formals: list[Symbol] = formals
        self.body: SExpression = body
        # Shared with the defining scope, never copied
        self.env: Environment = env
        self.name: Symbol | None = name

    @property
    def arity(self) -> int:
        return len(self.formals)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<lambda")
            if self.name is not None:
                buffer.write(f" {self.name}")
            buffer.write(" (")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(")>")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def extend_env(self, args: list[LispValue]) -> Environment:
        """
        Bind the argument values to this lambda's formals in a fresh scope
        whose parent is the captured environment.
        """
        if len(args) != len(self.formals):
            who = self.name if self.name is not None else "lambda"
            raise LisperArityError(
                f"{who} expects {len(self.formals)} argument(s), got {len(args)}"
            )
        new_env = self.env.child()
        for formal, value in zip(self.formals, args):
            new_env.define(formal, value)
        return new_env
