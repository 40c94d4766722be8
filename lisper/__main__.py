"""Runs the Lisper interpreter: a file when a path is given, otherwise the REPL."""

import argparse
import logging
import sys
from pathlib import Path

from lisper import __version__
from lisper.config import get_log_level
from lisper.errors import LisperError
from lisper.interpreter import Interpreter
from lisper.repl import Repl, format_error

logger = logging.getLogger("lisper")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_FILE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lisper", description="Lisper interpreter")
    parser.add_argument(
        "file", nargs="?",
        help="file to interpret and run (if empty, starts the interactive REPL)",
    )
    parser.add_argument(
        "--log-level", default=get_log_level(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="logging level for interpreter diagnostics (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_file(path: str) -> int:
    """Run a program file in a fresh global environment; returns the exit code."""
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        print(f"READ FILE ERROR: {err}", file=sys.stderr)
        return EXIT_NO_FILE

    try:
        Interpreter().run_source(source)
    except LisperError as err:
        logger.debug("aborting %s", path, exc_info=True)
        print(format_error(err), file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.file is not None:
        return run_file(args.file)

    try:
        Repl().cmdloop()
    except KeyboardInterrupt:
        print()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
