import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Tuple

from .Char import digit, letter, one_of
from .Combinators import choice, eof, many1
from .Errors import ErrorKind, LexError
from .Parsec import Parsec, SourcePos, initial_pos
from .Prim import get_position, many, run_parser

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    CARET = "^"
    STAR = "*"
    SLASH = "/"
    PLUS = "+"
    MINUS = "-"
    ATOM = "atom"

    def describe(self) -> str:
        return "atom" if self is TokenKind.ATOM else f"'{self.value}'"


SYMBOLS = {kind.value: kind for kind in TokenKind if kind is not TokenKind.ATOM}


@dataclass(frozen=True)
class Token:
    """A lexeme tagged with its kind. `pos` is where the lexeme starts."""
    kind: TokenKind
    lexeme: str
    pos: SourcePos = field(default_factory=initial_pos, compare=False)

    def __str__(self) -> str:
        return self.lexeme


def next_token_pos(pos: SourcePos, tok: Token) -> SourcePos:
    """Position just after a token, counted in characters of the source line."""
    return SourcePos(pos.line, pos.column + len(tok.lexeme), pos.name)


def _make_token_parser() -> Parsec[Token]:
    # Maximal munch: a run of letters or a run of digits, never mixed
    word = many1(letter()).map("".join)
    number = many1(digit()).map("".join)
    atom = (word | number).map(lambda text: (TokenKind.ATOM, text))
    symbol = one_of(SYMBOLS).map(lambda c: (SYMBOLS[c], c))

    lexeme = choice([atom, symbol]).label("letter, digit, operator or parenthesis")
    return get_position().bind(lambda pos: lexeme.map(lambda kl: Token(kl[0], kl[1], pos)))


_token = _make_token_parser()
_tokens = many(_token) < eof(repr)


def tokenize(text: str, source_name: str = "") -> Tuple[Token, ...]:
    """
    Split one line of input into tokens.

    Raises LexError(INVALID_CHARACTER) on the first character that is not a
    letter, a digit, or one of ``()^*/+-``. Empty input gives an empty tuple.
    """
    tokens, err = run_parser(_tokens, text, source_name=source_name)
    if err is not None:
        index = err.pos.column - 1
        found = text[index] if index < len(text) else None
        logger.debug("lexing failed at %s on %r", err.pos, found)
        raise LexError(ErrorKind.INVALID_CHARACTER, err.pos, found)

    logger.debug("lexed %d tokens from %d characters", len(tokens), len(text))
    return tuple(tokens)


def show_tokens(tokens: Sequence[Token]) -> str:
    return " ".join(f"{t.kind.name}({t.lexeme})" for t in tokens)
