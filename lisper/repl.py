"""Interactive read-evaluate-print loop for Lisper. Uses cmd as backend."""

import cmd

from lisper import __version__
from lisper.config import get_prompt
from lisper.errors import LisperError, LisperLexError, LisperParseError, LisperUnexpectedEOF
from lisper.interpreter import Interpreter
from lisper.printer import to_lisp_str
from lisper.reader.parser import parse


def format_error(err: LisperError) -> str:
    kind = "PARSE ERROR" if isinstance(err, (LisperLexError, LisperParseError)) else "EVAL ERROR"
    return f"{kind}: {err}"


class Repl(cmd.Cmd):
    """Lisper interpreter shell."""
    intro = (
        f"==========  Lisper v{__version__}  ==========\n"
        "To exit the REPL, type `exit`."
    )
    secondary_prompt = ". "  # used while a list is still open

    def __init__(self, interpreter: Interpreter | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interp = interpreter if interpreter is not None else Interpreter()
        self.prompt = get_prompt()
        self._primary_prompt = self.prompt
        self._pending = ""

    def onecmd(self, line):
        # continuation lines never dispatch to do_* commands
        if self._pending:
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Parse and evaluate every expression on the line, printing each result."""
        source = self._pending + line + "\n"
        try:
            exprs = parse(source)
        except LisperUnexpectedEOF:
            self._pending = source
            self.prompt = self.secondary_prompt
            return False
        except LisperError as err:
            self._reset()
            print(format_error(err), file=self.stdout)
            return False

        self._reset()
        for expr in exprs:
            try:
                value = self.interp.eval_expr(expr)
                text = to_lisp_str(value, readable=True)
            except LisperError as err:
                print(format_error(err), file=self.stdout)
                return False
            print(text, file=self.stdout)
        return False

    def _reset(self):
        self._pending = ""
        self.prompt = self._primary_prompt

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)
