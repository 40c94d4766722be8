import sys

import pytest
from hypothesis import given, strategies as st

from lisper import errors
from lisper.builtin.env_builtin import BUILTINS
from lisper.interpreter import Interpreter
from lisper.printer import to_lisp_str
from lisper.reader.parser import parse
from lisper.types.environment import Environment
from lisper.types.lambda_fn import Lambda
from lisper.types.symbol import Symbol


@pytest.mark.parametrize(
    "value,expected",
    [
        (42, "42"),
        (-7, "-7"),
        (True, "true"),
        (False, "false"),
        (Symbol("foo"), "foo"),
        ([], "()"),
        ([1, [2, 3], Symbol("x")], "(1 (2 3) x)"),
        ([True, False], "(true false)"),
    ],
)
def test_to_lisp_str(value, expected):
    assert to_lisp_str(value) == expected
    assert to_lisp_str(value, readable=True) == expected


def test_strings_raw_and_readable():
    assert to_lisp_str('say "hi"\n') == 'say "hi"\n'
    assert to_lisp_str('say "hi"\n', readable=True) == '"say \\"hi\\"\\n"'
    assert to_lisp_str(["a", 1], readable=True) == '("a" 1)'


def test_procedures():
    env = Environment()
    fn = Lambda([Symbol("x"), Symbol("y")], Symbol("x"), env)
    assert to_lisp_str(fn) == "<lambda (x y)>"
    fn.name = Symbol("first")
    assert to_lisp_str(fn) == "<lambda first (x y)>"
    assert to_lisp_str(BUILTINS[Symbol("+")]) == "<builtin +>"


def test_print_writes_and_returns_value(run, capsys):
    assert run("(print 42)") == 42
    assert run('(print "hello")') == "hello"
    assert run("(print (list 1 2 (list 3)))") == [1, 2, [3]]
    assert run("(print (= 1 1))") is True
    assert capsys.readouterr().out == "42\nhello\n(1 2 (3))\ntrue\n"


def test_print_is_usable_as_a_subexpression(run, capsys):
    assert run("(+ 1 (print 2))") == 3
    assert capsys.readouterr().out == "2\n"


def test_print_procedure(run, capsys):
    run("(defun id (lambda (x) x))")
    run("(print id)")
    run("(print car)")
    assert capsys.readouterr().out == "<lambda id (x)>\n<builtin car>\n"


@given(st.integers(min_value=-10**18, max_value=10**18))
def test_integers_read_back(n):
    assert parse(to_lisp_str(n)) == [n]


@given(st.booleans())
def test_booleans_read_back(b):
    [value] = parse(to_lisp_str(b))
    assert value is b


@given(st.text(max_size=40))
def test_readable_strings_read_back(s):
    assert parse(to_lisp_str(s, readable=True)) == [s]


@given(st.recursive(
    st.integers(min_value=-1000, max_value=1000) | st.booleans(),
    lambda children: st.lists(children, max_size=4),
    max_leaves=20,
))
def test_nested_lists_read_back(value):
    text = to_lisp_str(value)
    [parsed] = parse(text)
    assert to_lisp_str(parsed) == text


@pytest.fixture
def host_digit_cap():
    """Restore CPython's default cap on int <-> str conversion for one test."""
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield
    sys.set_int_max_str_digits(previous)


def test_oversized_integers_raise_lisper_errors(host_digit_cap):
    with pytest.raises(errors.LisperResourceError):
        to_lisp_str(10**5000)
    with pytest.raises(errors.LisperResourceError):
        parse("(print " + "1" * 5000 + ")")


def test_session_prints_and_reads_huge_integers(capsys):
    interp = Interpreter()
    assert interp.eval("(print " + "7" * 5000 + ")") == int("7" * 5000)
    assert capsys.readouterr().out == "7" * 5000 + "\n"
    assert to_lisp_str(10**5000) == "1" + "0" * 5000


def test_deeply_nested_value_is_a_resource_error():
    value = []
    for _ in range(5000):
        value = [value]
    with pytest.raises(errors.LisperResourceError):
        to_lisp_str(value)
