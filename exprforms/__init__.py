# Core
from .Parsec import Parsec, State, SourcePos
from .Prim import run_parser, pure, fail, try_parse, look_ahead, lazy, generate, token, many

# Errors
from .Errors import ErrorKind, ExpressionError, LexError, ParseError

# Lexer
from .Token import Token, TokenKind, tokenize

# Parse tree
from .Tree import Expr, AddSubChain, MulDivChain, PowChain, Paren, Leaf, dump_tree
from .Grammar import parse

# Renderers
from .Render import Forms, fully_parenthesized, postfix, prefix, render_all


def convert(text: str, source_name: str = "") -> Forms:
    """Tokenize, parse and render one line of input in a single call."""
    return render_all(parse(tokenize(text, source_name), source_name))
