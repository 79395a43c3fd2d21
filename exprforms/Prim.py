from typing import Any, Callable, Generator, List, Optional, Sequence, Tuple, TypeVar

from .Parsec import (
    Error, MessageType, Ok, Parsec, ParseError, ParseResult, SourcePos, State, T,
    initial_pos, update_pos_char,
)

ItemType = TypeVar('ItemType')
AccType = TypeVar('AccType')


def pure(value: T) -> Parsec[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: State) -> ParseResult[T]:
        return ParseResult.ok_empty(value, state, ParseError.new_unknown(state.pos))
    return Parsec(parse)


def fail(msg: str) -> Parsec[Any]:
    """A parser that always fails with a message."""
    def parse(state: State) -> ParseResult[Any]:
        return ParseResult.error_empty(state, ParseError.new_message(state.pos, MessageType.MESSAGE, msg))
    return Parsec(parse)


def get_position() -> Parsec[SourcePos]:
    """Return the current source position without consuming input."""
    def parse(state: State) -> ParseResult[SourcePos]:
        return ParseResult.ok_empty(state.pos, state, ParseError.new_unknown(state.pos))
    return Parsec(parse)


def token(show_tok: Callable[[Any], str],
          test_tok: Callable[[Any], Optional[T]],
          next_pos: Optional[Callable[[SourcePos, Any], SourcePos]] = None) -> Parsec[T]:
    """
    Parse a single token for which test_tok returns a value.
    Tokens may be characters or arbitrary objects; next_pos computes the
    position after an accepted token (defaults to character counting).
    """
    advance = next_pos or update_pos_char

    def parse(state: State) -> ParseResult[T]:
        if not state.input:
            # EOF: empty error with an empty "unexpected" text
            return ParseResult.error_empty(state, ParseError.new_message(state.pos, MessageType.SYS_UNEXPECT, ""))

        tok = state.input[0]
        result_val = test_tok(tok)
        if result_val is None:
            return ParseResult.error_empty(state, ParseError.new_message(state.pos, MessageType.SYS_UNEXPECT, show_tok(tok)))

        new_pos = advance(state.pos, tok)
        new_state = State(state.input[1:], new_pos, state.user)
        return ParseResult.ok_consumed(result_val, new_state, ParseError.new_unknown(new_pos))
    return Parsec(parse)


def try_parse(parser: Parsec[T]) -> Parsec[T]:
    """Try a parser, converting a consumed error into an empty error."""
    def parse(state: State) -> ParseResult[T]:
        res = parser(state)
        if res.is_error and res.consumed:
            return ParseResult.error_empty(state, res.error)
        return res
    return Parsec(parse)


def look_ahead(parser: Parsec[T]) -> Parsec[T]:
    """Parse without consuming input."""
    def parse(state: State) -> ParseResult[T]:
        res = parser(state)
        if res.is_error:
            return ParseResult.error_empty(state, res.error)
        # Success is reported from the original state as an empty success
        return ParseResult.ok_empty(res.value, state, ParseError.new_unknown(state.pos))
    return Parsec(parse)


def lazy(thunk: Callable[[], Parsec[T]]) -> Parsec[T]:
    """Defer building a parser until it first runs, so grammars can recurse."""
    cache: List[Parsec[T]] = []

    def parse(state: State) -> ParseResult[T]:
        if not cache:
            cache.append(thunk())
        return cache[0](state)
    return Parsec(parse)


class Generated(Parsec[T]):
    """A parser whose steps come from a generator function; see `generate`."""
    def __init__(self, body: Callable[[], Generator[Parsec[Any], Any, T]]):
        self.body = body
        super().__init__(lambda state: _run_generated(body, state))


def generate(body: Callable[[], Generator[Parsec[Any], Any, T]]) -> Parsec[T]:
    """
    Build a parser from a generator function, in sequence like a chain of binds.

    Each yielded parser runs on the remaining input and its value is sent back
    into the generator; the generator's return value is the result. The first
    failure ends the whole parser. Generated parsers yielded from another
    generator are run on an explicit stack rather than by a nested call, so a
    grammar whose recursion goes through them can nest arbitrarily deep.

        @generate
        def pair():
            first = yield letter()
            yield char('=')
            return first, (yield digit())
    """
    return Generated(body)


def _run_generated(body: Callable[[], Generator[Parsec[Any], Any, T]], state: State) -> ParseResult[T]:
    stack = [body()]
    sent: Any = None
    consumed = False
    error = ParseError.new_unknown(state.pos)

    while stack:
        try:
            step = stack[-1].send(sent)
        except StopIteration as done:
            stack.pop()
            sent = done.value
            continue

        if isinstance(step, Generated):
            stack.append(step.body())
            sent = None
            continue

        res = step(state)
        # Same error bookkeeping as bind: an empty step still sees earlier expectations
        error = res.error if res.consumed else ParseError.merge(error, res.error)
        consumed = consumed or res.consumed
        if res.is_error:
            for pending in reversed(stack):
                pending.close()
            return ParseResult(Error(error, res.state), consumed)
        state = res.reply.state
        sent = res.value

    return ParseResult(Ok(sent, state, error), consumed)


def _many_accum(
    acc_func: Callable[[ItemType, AccType], AccType],
    p: Parsec[ItemType],
    empty_acc_value: Callable[[], AccType]
) -> Parsec[AccType]:
    def parse_accum(state_outer: State) -> ParseResult[AccType]:
        current_acc = empty_acc_value()
        accum_state = state_outer
        consumed_overall = False
        last_error = ParseError.new_unknown(state_outer.pos)

        while True:
            res_p = p(accum_state)

            if res_p.is_error:
                if res_p.consumed:
                    # Failed after consuming input: the whole repetition fails
                    return res_p
                # Empty failure ends the repetition; its expectations stay visible
                error = ParseError.merge(last_error, res_p.error)
                return ParseResult(Ok(current_acc, accum_state, error), consumed_overall)

            if not res_p.consumed:
                # Succeeding without consuming would loop forever
                return ParseResult.error_consumed(
                    accum_state,
                    ParseError.new_message(
                        accum_state.pos,
                        MessageType.MESSAGE,
                        "many: applied parser succeeded without consuming input."
                    )
                )

            current_acc = acc_func(res_p.value, current_acc)
            accum_state = res_p.reply.state
            last_error = res_p.error
            consumed_overall = True
    return Parsec(parse_accum)


def many(p: Parsec[T]) -> Parsec[List[T]]:
    """Parse zero or more occurrences of `p`."""
    def append(item: T, items: List[T]) -> List[T]:
        items.append(item)
        return items
    return _many_accum(append, p, list)


def skip_many(parser: Parsec[Any]) -> Parsec[None]:
    """Skips zero or more occurrences of `parser`."""
    return _many_accum(lambda item, acc: None, parser, lambda: None)


def run_parser(parser: Parsec[T],
               input_data: Sequence[Any],
               user_state: Any = None,
               source_name: str = "") -> Tuple[Optional[T], Optional[ParseError]]:
    initial_state = State(input_data, initial_pos(source_name), user_state)
    result = parser(initial_state)
    if result.is_error:
        return None, result.error
    return result.value, None
