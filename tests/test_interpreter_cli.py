import io
import sys

import pytest

from lisper import __version__, errors
from lisper.__main__ import EXIT_ERROR, EXIT_NO_FILE, EXIT_OK, build_parser, main
from lisper.config import get_log_level, get_prompt, get_recursion_limit
from lisper.interpreter import Interpreter
from lisper.repl import Repl, format_error
from lisper.types.symbol import Symbol


# -----------------------------------------------------
# Interpreter session
# -----------------------------------------------------

def test_definitions_persist_across_calls(interp):
    interp.eval("(def x 10)")
    interp.eval("(defun inc (lambda (n) (+ n 1)))")
    assert interp.eval("(inc x)") == 11


def test_eval_returns_last_value(interp):
    assert interp.eval("1 2 3") == 3
    assert interp.eval("") == []
    assert interp.eval("; only a comment") == []


def test_iter_eval_runs_expressions_before_parsing_the_rest(interp, capsys):
    results = interp.iter_eval("(print 1) (+ 1")
    expr, value = next(results)
    assert expr == [Symbol("print"), 1]
    assert value == 1
    assert capsys.readouterr().out == "1\n"
    with pytest.raises(errors.LisperUnexpectedEOF):
        next(results)


def test_run_source_parses_everything_first(interp, capsys):
    with pytest.raises(errors.LisperUnexpectedEOF):
        interp.run_source("(print 1)\n(+ 1")
    assert capsys.readouterr().out == ""


def test_run_file(interp, tmp_path):
    path = tmp_path / "prog.lisp"
    path.write_text("(defun sq (lambda (x) (* x x)))\n(sq 12)\n", encoding="utf-8")
    assert interp.run_file(path) == 144


def test_eval_error_leaves_session_usable(interp):
    with pytest.raises(errors.LisperUnboundSymbol):
        interp.eval("(+ 1 missing)")
    assert interp.eval("(+ 1 1)") == 2


def test_sessions_are_isolated():
    a, b = Interpreter(), Interpreter()
    a.eval("(def only-in-a 1)")
    with pytest.raises(errors.LisperUnboundSymbol):
        b.eval("only-in-a")


def test_recursion_limit_is_applied():
    previous = sys.getrecursionlimit()
    try:
        Interpreter(recursion_limit=previous + 500)
        assert sys.getrecursionlimit() == previous + 500
    finally:
        sys.setrecursionlimit(previous)


# -----------------------------------------------------
# Configuration
# -----------------------------------------------------

def test_config_defaults(monkeypatch):
    for var in ("LISPER_RECURSION_LIMIT", "LISPER_LOG_LEVEL", "LISPER_PROMPT"):
        monkeypatch.delenv(var, raising=False)
    assert get_recursion_limit() is None
    assert get_log_level() == "WARNING"
    assert get_prompt() == "> "


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("LISPER_RECURSION_LIMIT", " 4000 ")
    monkeypatch.setenv("LISPER_LOG_LEVEL", "debug")
    monkeypatch.setenv("LISPER_PROMPT", "lisper> ")
    assert get_recursion_limit() == 4000
    assert get_log_level() == "DEBUG"
    assert get_prompt() == "lisper> "


def test_bad_recursion_limit(monkeypatch):
    monkeypatch.setenv("LISPER_RECURSION_LIMIT", "lots")
    with pytest.raises(ValueError, match="LISPER_RECURSION_LIMIT"):
        get_recursion_limit()


# -----------------------------------------------------
# Command line
# -----------------------------------------------------

def test_main_runs_file(tmp_path, capsys):
    path = tmp_path / "ok.lisp"
    path.write_text("(print (+ 1 2))\n(print \"done\")\n", encoding="utf-8")
    assert main([str(path)]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out == "3\ndone\n"
    assert captured.err == ""


def test_main_reports_eval_error(tmp_path, capsys):
    path = tmp_path / "bad.lisp"
    path.write_text("(print 1)\n(car (list))\n(print 2)\n", encoding="utf-8")
    assert main([str(path)]) == EXIT_ERROR
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert "EVAL ERROR" in captured.err


def test_main_reports_parse_error_before_running(tmp_path, capsys):
    path = tmp_path / "unclosed.lisp"
    path.write_text("(print 1)\n(print (+ 1 2)\n", encoding="utf-8")
    assert main([str(path)]) == EXIT_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "PARSE ERROR" in captured.err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.lisp")]) == EXIT_NO_FILE
    assert "READ FILE ERROR" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_main_starts_repl_without_file(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("(+ 1 2)\nexit\n"))
    assert main([]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Lisper v" in out
    assert "3\n" in out


# -----------------------------------------------------
# REPL
# -----------------------------------------------------

@pytest.fixture
def repl():
    out = io.StringIO()
    shell = Repl(Interpreter(), stdout=out)
    return shell, out


def test_repl_prints_readable_results(repl):
    shell, out = repl
    shell.onecmd('(def greeting "hi")')
    shell.onecmd("greeting")
    shell.onecmd("(list 1 true)")
    assert out.getvalue() == 'greeting\n"hi"\n(1 true)\n'


def test_repl_several_expressions_on_one_line(repl):
    shell, out = repl
    shell.onecmd("(def a 2) (* a 21)")
    assert out.getvalue() == "a\n42\n"


def test_repl_continues_open_lists(repl, monkeypatch):
    shell, out = repl
    primary = shell.prompt
    shell.onecmd("(defun add (lambda (a b)")
    assert shell.prompt == Repl.secondary_prompt
    shell.onecmd("  (+ a b)))")
    assert shell.prompt == primary
    shell.onecmd("(add 2 3)")
    assert out.getvalue() == "add\n5\n"


def test_repl_continuation_ignores_commands(repl):
    shell, out = repl
    shell.onecmd("(list 1")
    assert shell.onecmd("exit") is False
    shell.onecmd(")")
    assert "Cannot lookup unbound symbol exit" in out.getvalue()


def test_repl_reports_errors_and_keeps_going(repl):
    shell, out = repl
    shell.onecmd("(car (list))")
    shell.onecmd(")")
    shell.onecmd("(+ 1 1)")
    lines = out.getvalue().splitlines()
    assert lines[0].startswith("EVAL ERROR:")
    assert lines[1].startswith("PARSE ERROR:")
    assert lines[2] == "2"


def test_repl_exit_and_empty_line(repl):
    shell, out = repl
    assert shell.onecmd("") is False
    assert shell.onecmd("exit") is True
    assert shell.onecmd("EOF") is True
    assert out.getvalue() == "\n"


def test_repl_prompt_from_environment(monkeypatch):
    monkeypatch.setenv("LISPER_PROMPT", "lisper> ")
    assert Repl(Interpreter(), stdout=io.StringIO()).prompt == "lisper> "


def test_format_error():
    assert format_error(errors.LisperLexError("bad")) == "PARSE ERROR: bad"
    assert format_error(errors.LisperUnexpectedToken("bad")) == "PARSE ERROR: bad"
    assert format_error(errors.LisperArityError("bad")) == "EVAL ERROR: bad"


def test_repl_survives_values_too_deep_to_echo(repl):
    shell, out = repl
    shell.onecmd("(quote " + "(" * 600 + ")" * 600 + ")")
    shell.onecmd("(+ 1 1)")
    lines = out.getvalue().splitlines()
    assert lines[0].startswith("EVAL ERROR:")
    assert lines[1] == "2"


def test_repl_echoes_huge_integers(repl):
    shell, out = repl
    shell.onecmd("(def a 1000000000000000000000000000000)")
    shell.onecmd("(defun sq (lambda (x) (* x x)))")
    shell.onecmd("(def a (sq (sq (sq (sq (sq (sq (sq (sq (sq a))))))))))")
    shell.onecmd("a")
    shell.onecmd("(+ 1 1)")
    lines = out.getvalue().splitlines()
    assert lines[3] == "1" + "0" * (30 * 512)
    assert lines[4] == "2"


def test_main_runs_file_with_long_integer_literal(tmp_path, capsys):
    digits = "1" * 5000
    path = tmp_path / "big.lisp"
    path.write_text(f"(print {digits})\n", encoding="utf-8")
    assert main([str(path)]) == EXIT_OK
    assert capsys.readouterr().out == digits + "\n"


def test_main_rejects_undecodable_file(tmp_path, capsys):
    path = tmp_path / "latin.lisp"
    path.write_bytes(b"(print 1)\n\xff\xfe\n")
    assert main([str(path)]) == EXIT_NO_FILE
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "READ FILE ERROR" in captured.err
