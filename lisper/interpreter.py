import logging
import sys
from pathlib import Path
from typing import Iterator

from lisper import LispValue, SExpression
from lisper.config import get_recursion_limit
from lisper.reader.parser import lex, parse, TokenStream
from lisper.evaluation.evaluator import evaluate
from lisper.types.environment import Environment
from lisper.builtin.env_builtin import register

logger = logging.getLogger(__name__)


def make_global_env() -> Environment:
    """A fresh global Environment populated only with builtins."""
    env = Environment()
    register(env)
    return env


class Interpreter:
    """
    A streaming interpreter for Lisper expressions.
    Definitions persist in one global environment for the life of the session.
    """
    def __init__(self, recursion_limit: int | None = None):
        self.env = make_global_env()
        # integers are unbounded, so is their decimal text
        sys.set_int_max_str_digits(0)

        limit = recursion_limit if recursion_limit is not None else get_recursion_limit()
        if limit is not None:
            logger.debug("raising recursion limit from %d to %d", sys.getrecursionlimit(), limit)
            sys.setrecursionlimit(limit)

    def iter_eval(self, code: str) -> Iterator[tuple[SExpression, LispValue]]:
        """Parse and evaluate `code` one top-level expression at a time.

        Each (expression, value) pair is yielded as soon as it is evaluated, so
        side effects of earlier expressions happen before later ones are parsed.
        """
        stream = TokenStream(lex(code))
        while True:
            expr = stream.parse_expr()
            if expr is None:
                break
            yield expr, evaluate(expr, self.env)

    def eval(self, code: str) -> LispValue:
        """Evaluate every expression in `code`; return the last value ('()' if none)."""
        result: LispValue = []
        for _, value in self.iter_eval(code):
            result = value
        return result

    def eval_expr(self, expr: SExpression) -> LispValue:
        return evaluate(expr, self.env)

    def run_source(self, source: str) -> LispValue:
        """Run a whole program: everything is parsed before anything is evaluated."""
        result: LispValue = []
        for expr in parse(source):
            result = evaluate(expr, self.env)
        return result

    def run_file(self, path: str | Path) -> LispValue:
        path = Path(path)
        logger.debug("running %s", path)
        return self.run_source(path.read_text(encoding="utf-8"))
