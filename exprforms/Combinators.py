from typing import Any, Callable, List, Optional, Tuple

from .Parsec import MessageType, Parsec, ParseError, ParseResult, State, T, U
from .Prim import fail, generate, look_ahead, many, pure, token, try_parse


# 1. choice: Tries parsers in order until one succeeds
def choice(parsers: List[Parsec[T]]) -> Parsec[T]:
    """
    Applies a list of parsers in order until one succeeds.
    Returns the value of the succeeding parser, or fails if none succeed.
    """
    if not parsers:
        return fail("no alternatives")
    result = parsers[0]
    for p in parsers[1:]:
        result = result | p
    return result


# 2. many1: Applies a parser one or more times
def many1(p: Parsec[T]) -> Parsec[List[T]]:
    """
    Applies parser p one or more times, returning a list of results.
    """
    return p.bind(lambda x: many(p).map(lambda xs: [x] + xs))


# 3. between: Parses an opening parser, a main parser, and a closing parser
def between(open: Parsec[Any], close: Parsec[Any], p: Parsec[T]) -> Parsec[T]:
    """
    Parses 'open', then 'p', then 'close', returning the result of 'p'.
    """
    return open.bind(lambda _: p.bind(lambda x: close.map(lambda _: x)))


# 4. optionMaybe: Tries a parser, returning Optional[T]
def option_maybe(p: Parsec[T]) -> Parsec[Optional[T]]:
    """
    Tries parser p; returns the value if successful, else None if it fails without consuming input.
    """
    return p | pure(None)


# 5. anyToken: Accepts any single token
def any_token(show: Callable[[Any], str] = str) -> Parsec[Any]:
    """
    Accepts any single item from the input (a character or a token object), returning it.
    """
    return token(show, lambda t: t)


# 6. notFollowedBy: Succeeds if a parser fails without consuming input
def not_followed_by(p: Parsec[Any], show: Callable[[Any], str] = str) -> Parsec[None]:
    def parse(state: State) -> ParseResult[None]:
        res = try_parse(look_ahead(p))(state)
        if res.is_error:
            return ParseResult.ok_empty(None, state, ParseError.new_unknown(state.pos))
        return ParseResult.error_empty(state, ParseError.new_message(state.pos, MessageType.UNEXPECT, show(res.value)))
    return Parsec(parse)


# 7. eof: Succeeds only at the end of input
def eof(show: Callable[[Any], str] = str) -> Parsec[None]:
    """
    Succeeds only if no input remains, labeled as 'end of input'.
    """
    return not_followed_by(any_token(show), show).label("end of input")


# 8. scan_chain: the flattened form of chainl1
def scan_chain(term_parser: Parsec[T], op_parser: Parsec[U]) -> Parsec[Tuple[T, List[Tuple[U, T]]]]:
    """
    Parses `term (op term)*` iteratively and returns the first term together
    with the ordered list of (op, term) continuations, leaving it to the
    caller to decide how the operators associate.
    Fails if the first term fails, or if an op is not followed by a term.
    """
    more = option_maybe(op_parser)

    @generate
    def chain():
        first = yield term_parser
        rest: List[Tuple[U, T]] = []
        while True:
            # An empty op failure ends the chain; its expectation is kept for error reports
            op = yield more
            if op is None:
                return first, rest
            # An operator commits the chain to another term
            rest.append((op, (yield term_parser)))

    return chain
