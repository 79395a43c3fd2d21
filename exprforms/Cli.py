import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional, TextIO

from .Config import Config
from .Errors import ExpressionError
from .Grammar import parse
from .Render import render_all
from .Token import show_tokens, tokenize
from .Tree import dump_tree

logger = logging.getLogger(__name__)

BANNER = """
Please enter an arithmetic expression in infix form. The expression may
contain integer numbers, variable names, parentheses, and the operators
^ (exponentiation), * (multiplication), / (division), + (addition), and
- (subtraction). Variable names may contain lower-case letters and
upper-case letters, but may not contain any other type of character. The
expression must not contain any spaces.

Example:
   (a+3)+var^(b+282*c)
"""

HEADERS = (
    "The fully-parenthesized form of the expression:",
    "The expression with postfix binary operators:",
    "The expression with prefix binary operators:",
)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprforms",
        description="Show an infix expression in fully-parenthesized, postfix and prefix form.",
    )
    parser.add_argument("expression", nargs="?",
                        help="expression to convert; read from stdin when omitted")
    parser.add_argument("--debug", action="store_true", help="log lexer and parser activity")
    parser.add_argument("--tree", action="store_true", help="also print the parse tree")
    parser.add_argument("--max-chars", type=int, default=None,
                        help="longest accepted expression (default: 1000)")
    return parser


def strip_newline(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def main(argv: Optional[List[str]] = None,
         stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None,
         stderr: Optional[TextIO] = None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_arg_parser().parse_args(argv)
    try:
        config = Config.from_env()
        if args.debug:
            config = replace(config, log_level="DEBUG")
        if args.tree:
            config = replace(config, show_tree=True)
        if args.max_chars is not None:
            config = replace(config, max_chars=args.max_chars)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=stderr)
        return 2

    logging.basicConfig(level=config.log_level, format="%(levelname)s:%(name)s:%(message)s")

    if args.expression is None:
        print(BANNER, file=stdout)
        print(">> ", end="", file=stdout)
        stdout.flush()
        line = stdin.readline()
        if not line:
            print("Error receiving input!", file=stderr)
            return 1
        text = strip_newline(line)
    else:
        text = args.expression

    if len(text) > config.max_chars:
        print(f"Invalid input: expression is longer than {config.max_chars} characters", file=stderr)
        return 1

    try:
        tokens = tokenize(text)
        logger.debug("tokens: %s", show_tokens(tokens))
        tree = parse(tokens)
    except ExpressionError as e:
        logger.debug("rejected %r: %s", text, e.kind.name)
        print(f"Invalid input: {e}", file=stderr)
        return 1

    if config.show_tree:
        print("\nThe parse tree of the expression:", file=stdout)
        for row in dump_tree(tree).splitlines():
            print(f"     {row}", file=stdout)

    for header, form in zip(HEADERS, render_all(tree)):
        print(f"\n{header}", file=stdout)
        print(f"     {form}", file=stdout)
    print(file=stdout)
    return 0
