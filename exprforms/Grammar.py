import logging
from typing import Optional, Sequence

from .Combinators import eof, scan_chain
from .Errors import ErrorKind, ParseError
from .Parsec import MessageType, Parsec, ParseError as ParsecError, ParseResult, SourcePos, State, initial_pos
from .Prim import generate, run_parser, token
from .Token import Token, TokenKind, next_token_pos
from .Tree import Expr, Leaf, MulDivChain, Paren, PowChain

logger = logging.getLogger(__name__)


def kind(*kinds: TokenKind) -> Parsec[Token]:
    """Accept one token of any of the given kinds."""
    expected = " or ".join(k.describe() for k in kinds)
    return token(
        show_tok=lambda t: repr(t.lexeme),
        test_tok=lambda t: t if t.kind in kinds else None,
        next_pos=next_token_pos,
    ).label(expected)


def token_after_primary() -> Parsec[Optional[TokenKind]]:
    """
    Peek at the kind of the token that follows the Primary starting here,
    skipping a balanced parenthesised run. Never consumes input; returns None
    at end of input or when the parentheses never balance.
    """
    def parse(state: State) -> ParseResult[Optional[TokenKind]]:
        tokens = state.input
        end = 1
        if tokens and tokens[0].kind is TokenKind.LEFT_PAREN:
            depth = 0
            end = len(tokens)
            for i, tok in enumerate(tokens):
                if tok.kind is TokenKind.LEFT_PAREN:
                    depth += 1
                elif tok.kind is TokenKind.RIGHT_PAREN:
                    depth -= 1
                    if depth == 0:
                        end = i + 1
                        break
        following = tokens[end].kind if end < len(tokens) else None
        return ParseResult.ok_empty(following, state, ParsecError.new_unknown(state.pos))
    return Parsec(parse)


def _make_expression_parser() -> Parsec[Expr]:
    # Recursion only goes through generated parsers, which share one explicit
    # stack however deeply the input nests
    atom = kind(TokenKind.ATOM).map(lambda t: Leaf(t.lexeme))
    lparen = kind(TokenKind.LEFT_PAREN)
    rparen = kind(TokenKind.RIGHT_PAREN)
    caret = kind(TokenKind.CARET)
    mul_div = kind(TokenKind.STAR, TokenKind.SLASH).map(lambda t: t.lexeme)
    add_sub = kind(TokenKind.PLUS, TokenKind.MINUS).map(lambda t: t.lexeme)

    primary_start = (atom | lparen).label("atom or '('")
    peek = token_after_primary()

    @generate
    def primary():
        start = yield primary_start
        if isinstance(start, Leaf):
            return start
        inner = yield expr
        yield rparen
        return Paren(inner)

    @generate
    def pow_chain():
        following = yield peek
        base = yield primary
        if following is not TokenKind.CARET:
            return PowChain(base)
        yield caret
        return PowChain(base, (yield pow_chain))

    mul_div_terms = scan_chain(pow_chain, mul_div)

    @generate
    def mul_div_chain():
        first, rest = yield mul_div_terms
        return MulDivChain(first, tuple(rest))

    add_sub_terms = scan_chain(mul_div_chain, add_sub)

    @generate
    def expr():
        first, rest = yield add_sub_terms
        return Expr(first, tuple(rest))

    return expr


def _token_at(tokens: Sequence[Token], pos: SourcePos, source_name: str) -> Optional[Token]:
    # Replays the positions the parser assigned; None means past the last token
    current = initial_pos(source_name)
    for tok in tokens:
        if current == pos:
            return tok
        current = next_token_pos(current, tok)
    return None


expression = _make_expression_parser()
_whole_input = expression < eof(lambda t: repr(t.lexeme))


def parse(tokens: Sequence[Token], source_name: str = "") -> Expr:
    """
    Build the parse tree for a complete token sequence.

    Raises ParseError with kind UNEXPECTED_END when the tokens run out while
    a production still needs one (including empty input), and
    UNEXPECTED_TOKEN when a token does not fit, trailing tokens included.
    """
    tokens = tuple(tokens)
    logger.debug("parsing %d tokens", len(tokens))
    tree, err = run_parser(_whole_input, tokens, source_name=source_name)
    if err is None:
        return tree

    found = _token_at(tokens, err.pos, source_name)
    error_kind = ErrorKind.UNEXPECTED_END if found is None else ErrorKind.UNEXPECTED_TOKEN
    expected = [e for e in err.texts(MessageType.EXPECT) if e]
    logger.debug("parse failed: %s at %s", error_kind.value, err.pos)
    raise ParseError(error_kind, err.pos, found, expected)
