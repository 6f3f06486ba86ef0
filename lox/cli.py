"""
Lox command line: one subcommand per pipeline stage.

    lox tokenize FILE   # one line per token
    lox parse FILE      # parenthesized form of a single expression
    lox evaluate FILE   # value of a single expression
    lox run FILE        # execute a program
    lox dbg FILE        # tokens, then the (possibly partial) tree

Exit codes are stable so scripts can branch on the failing stage.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, Sequence

from lox.config import get_log_level, get_source_encoding
from lox.debug_utils.pprint import format_expr, pprint_stmt
from lox.diagnostics import Reporter
from lox.errors import LoxParseFailure, LoxRuntimeError, LoxScanFailure
from lox.evaluation.operators import stringify
from lox.evaluation.resolver import resolve
from lox.interpreter import Interpreter
from lox.reader.parser import Parser
from lox.reader.scanner import scan

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_SCAN_ERROR = 65
EXIT_PARSE_ERROR = 66
EXIT_RUNTIME_ERROR = 70
EXIT_IO_ERROR = 74


class LoxArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def create_arg_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = LoxArgumentParser(
        prog="lox",
        description="Lox tree-walk interpreter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0   success
  64  usage error
  65  scan error (malformed lexeme)
  66  parse error
  70  runtime error
  74  source file could not be read
        """,
    )
    parser.add_argument("command", choices=sorted(COMMANDS), help="pipeline stage to run")
    parser.add_argument("filename", help="Lox source file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log pipeline stages to stderr"
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def read_source(path: str) -> str:
    """Read the whole file; the handle is closed before scanning starts."""
    with open(path, encoding=get_source_encoding()) as handle:
        return handle.read()


def guarded(reporter: Reporter, action: Callable[[], None]) -> int:
    """Run `action`, mapping each failure class to its exit code."""
    try:
        action()
    except LoxScanFailure as failure:
        reporter.errors(failure.errors)
        return EXIT_SCAN_ERROR
    except LoxParseFailure as failure:
        reporter.errors(failure.errors)
        return EXIT_PARSE_ERROR
    except LoxRuntimeError as err:
        sys.stdout.flush()
        reporter.error(err)
        return EXIT_RUNTIME_ERROR
    except RecursionError:
        sys.stdout.flush()
        reporter.message("Stack overflow.")
        return EXIT_RUNTIME_ERROR
    return EXIT_OK


# ----------------- Commands -----------------
def cmd_tokenize(source: str, reporter: Reporter) -> int:
    result = scan(source)
    for token in result.tokens:
        print(token)
    sys.stdout.flush()
    reporter.errors(result.errors)
    return EXIT_OK if result.ok else EXIT_SCAN_ERROR


def cmd_parse(source: str, reporter: Reporter) -> int:
    interp = Interpreter()
    return guarded(reporter, lambda: print(format_expr(interp.parse_expression(source))))


def cmd_evaluate(source: str, reporter: Reporter) -> int:
    interp = Interpreter()
    return guarded(reporter, lambda: print(stringify(interp.evaluate(source))))


def cmd_run(source: str, reporter: Reporter) -> int:
    interp = Interpreter()
    return guarded(reporter, lambda: interp.run(source))


def cmd_dbg(source: str, reporter: Reporter) -> int:
    scanned = scan(source)
    for token in scanned.tokens:
        print(token)

    # A file holding exactly one expression is shown as that expression.
    expr_parser = Parser(scanned.tokens)
    expr = expr_parser.parse_expression()
    if not expr_parser.errors and expr_parser.is_at_end():
        print(format_expr(expr))
        parse_errors, static_errors = [], []
    else:
        parser = Parser(scanned.tokens)
        statements = parser.parse_program()
        for stmt in statements:
            print(pprint_stmt(stmt))
        parse_errors = parser.errors
        static_errors = [] if parse_errors else resolve(statements)

    sys.stdout.flush()
    reporter.errors(scanned.errors)
    reporter.errors(parse_errors)
    reporter.errors(static_errors)
    if scanned.errors:
        return EXIT_SCAN_ERROR
    if parse_errors or static_errors:
        return EXIT_PARSE_ERROR
    return EXIT_OK


COMMANDS: dict[str, Callable[[str, Reporter], int]] = {
    "tokenize": cmd_tokenize,
    "parse": cmd_parse,
    "evaluate": cmd_evaluate,
    "run": cmd_run,
    "dbg": cmd_dbg,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    configure_logging(args.verbose)
    reporter = Reporter()

    try:
        source = read_source(args.filename)
    except (OSError, UnicodeDecodeError) as err:
        reporter.message(f"Failed to read file {args.filename}: {err}")
        return EXIT_IO_ERROR

    logger.debug("%s %s (%d chars)", args.command, args.filename, len(source))
    return COMMANDS[args.command](source, reporter)
