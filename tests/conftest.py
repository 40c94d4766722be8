import pytest

from lisper.builtin.env_builtin import register
from lisper.evaluation.evaluator import evaluate
from lisper.interpreter import Interpreter
from lisper.reader.parser import parse
from lisper.types.environment import Environment


@pytest.fixture
def env():
    """Fresh environment with builtins loaded."""
    e = Environment()
    register(e)
    return e


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def run(env):
    """Evaluate every expression of a source string in `env`; return the last value."""
    def _run(source: str):
        result = None
        for expr in parse(source):
            result = evaluate(expr, env)
        return result
    return _run
