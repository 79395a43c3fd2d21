from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')


@dataclass(frozen=True, order=True)
class SourcePos:
    """Represents the current position in the input stream."""
    line: int = 1
    column: int = 1
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        prefix = f'"{self.name}" ' if self.name else ""
        return f"{prefix}(line {self.line}, column {self.column})"


def initial_pos(name: str = "") -> SourcePos:
    return SourcePos(1, 1, name)


def update_pos_char(pos: SourcePos, c: Any) -> SourcePos:
    """Advance a position over one character. Newlines start a new line."""
    if c == '\n' or c == 10:
        return SourcePos(pos.line + 1, 1, pos.name)
    return SourcePos(pos.line, pos.column + 1, pos.name)


def update_pos_string(pos: SourcePos, s: Union[str, bytes]) -> SourcePos:
    """Advance a position over a whole string without stepping char by char."""
    newline = b'\n' if isinstance(s, bytes) else '\n'
    lines = s.count(newline)
    if lines == 0:
        return SourcePos(pos.line, pos.column + len(s), pos.name)
    tail = len(s) - s.rindex(newline) - 1
    return SourcePos(pos.line + lines, tail + 1, pos.name)


@dataclass(frozen=True)
class State(Generic[T]):
    """Parser state: remaining input, position, and user state."""
    input: Sequence[Any]  # str, bytes, or any sequence of token objects
    pos: SourcePos
    user: Any = None


class MessageType(IntEnum):
    SYS_UNEXPECT = 0  # produced by primitives: the token actually found ("" at EOF)
    UNEXPECT = 1      # produced by user code, e.g. not_followed_by
    EXPECT = 2        # produced by label
    MESSAGE = 3       # free-form, e.g. fail


@dataclass(frozen=True)
class Message:
    type: MessageType
    text: str


@dataclass
class ParseError:
    """A parse error: a position plus every message collected at that position."""
    pos: SourcePos
    messages: List[Message] = field(default_factory=list)

    @staticmethod
    def new_unknown(pos: SourcePos) -> 'ParseError':
        return ParseError(pos, [])

    @staticmethod
    def new_message(pos: SourcePos, msg_type: MessageType, text: str) -> 'ParseError':
        return ParseError(pos, [Message(msg_type, text)])

    def is_unknown(self) -> bool:
        return not self.messages

    def set_expect(self, text: str) -> 'ParseError':
        """Replace every EXPECT message with a single one (used by label)."""
        kept = [m for m in self.messages if m.type != MessageType.EXPECT]
        return ParseError(self.pos, kept + [Message(MessageType.EXPECT, text)])

    def texts(self, msg_type: MessageType) -> List[str]:
        seen: List[str] = []
        for m in self.messages:
            if m.type == msg_type and m.text not in seen:
                seen.append(m.text)
        return seen

    @staticmethod
    def merge(e1: Optional['ParseError'], e2: Optional['ParseError']) -> Optional['ParseError']:
        # Unknown errors never hide a known one; otherwise the furthest error wins
        # and errors at the same position pool their messages.
        if e1 is None:
            return e2
        if e2 is None:
            return e1
        if e2.is_unknown() and not e1.is_unknown():
            return e1
        if e1.is_unknown() and not e2.is_unknown():
            return e2
        if e1.pos > e2.pos:
            return e1
        if e2.pos > e1.pos:
            return e2
        return ParseError(e1.pos, e1.messages + e2.messages)

    def __str__(self) -> str:
        lines = [f"{self.pos}:"]
        sys_unexpect = self.texts(MessageType.SYS_UNEXPECT)
        unexpect = self.texts(MessageType.UNEXPECT)
        expect = [t for t in self.texts(MessageType.EXPECT) if t]
        messages = self.texts(MessageType.MESSAGE)

        if unexpect:
            lines.extend(f"unexpected {t}" for t in unexpect)
        elif sys_unexpect:
            found = sys_unexpect[0]
            lines.append(f"unexpected {found}" if found else "unexpected end of input")
        if expect:
            if len(expect) == 1:
                lines.append(f"expecting {expect[0]}")
            else:
                lines.append(f"expecting {', '.join(expect[:-1])} or {expect[-1]}")
        lines.extend(messages)
        if len(lines) == 1:
            lines.append("unknown parse error")
        return "\n".join(lines)


@dataclass
class Ok(Generic[T]):
    value: T
    state: State
    error: ParseError


@dataclass
class Error:
    error: ParseError
    state: Optional[State] = None


Reply = Union[Ok, Error]


@dataclass
class ParseResult(Generic[T]):
    """A reply plus whether any input was consumed producing it."""
    reply: Reply
    consumed: bool

    @property
    def is_error(self) -> bool:
        return isinstance(self.reply, Error)

    @property
    def value(self) -> Optional[T]:
        return self.reply.value if isinstance(self.reply, Ok) else None

    @property
    def state(self) -> Optional[State]:
        return self.reply.state

    @property
    def error(self) -> Optional[ParseError]:
        return self.reply.error

    @staticmethod
    def ok_consumed(value: T, state: State, error: ParseError) -> 'ParseResult[T]':
        return ParseResult(Ok(value, state, error), True)

    @staticmethod
    def ok_empty(value: T, state: State, error: ParseError) -> 'ParseResult[T]':
        return ParseResult(Ok(value, state, error), False)

    @staticmethod
    def error_consumed(state: Optional[State], error: ParseError) -> 'ParseResult[Any]':
        return ParseResult(Error(error, state), True)

    @staticmethod
    def error_empty(state: Optional[State], error: ParseError) -> 'ParseResult[Any]':
        return ParseResult(Error(error, state), False)


class Parsec(Generic[T]):
    """A parser combinator that processes input and returns a ParseResult."""
    def __init__(self, parse_fn: Callable[[State], ParseResult[T]]):
        self.parse_fn = parse_fn

    def __call__(self, state: State) -> ParseResult[T]:
        return self.parse_fn(state)

    # Monadic bind (>>=)
    def bind(self, f: Callable[[T], 'Parsec[U]']) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult[U]:
            res = self(state)
            if res.is_error:
                return res

            next_res = f(res.value)(res.reply.state)
            if next_res.consumed:
                return next_res
            # Second half was empty: it still sees the expectations left by the first.
            consumed = res.consumed
            merged = ParseError.merge(res.error, next_res.error)
            if next_res.is_error:
                return ParseResult(Error(merged, next_res.state), consumed)
            return ParseResult(Ok(next_res.value, next_res.state, merged), consumed)
        return Parsec(parse)

    # Functor map (<$>)
    def map(self, f: Callable[[T], U]) -> 'Parsec[U]':
        def parse(state: State) -> ParseResult[U]:
            res = self(state)
            if res.is_error:
                return res
            return ParseResult(Ok(f(res.value), res.reply.state, res.error), res.consumed)
        return Parsec(parse)

    # Alternative (<|>)
    def __or__(self, other: 'Parsec[T]') -> 'Parsec[T]':
        def parse(state: State) -> ParseResult[T]:
            res = self(state)
            # Only try other if the first parser failed without consuming input
            if not res.is_error or res.consumed:
                return res
            res_other = other(state)
            if res_other.consumed:
                return res_other
            merged = ParseError.merge(res.error, res_other.error)
            if res_other.is_error:
                return ParseResult.error_empty(state, merged)
            return ParseResult.ok_empty(res_other.value, res_other.state, merged)
        return Parsec(parse)

    # Sequence, pairing both results
    def __and__(self, other: 'Parsec[U]') -> 'Parsec[Tuple[T, U]]':
        return self.bind(lambda x: other.map(lambda y: (x, y)))

    # Sequence (*>)
    def __gt__(self, other: 'Parsec[U]') -> 'Parsec[U]':
        return self.bind(lambda _: other)

    # Sequence (<*)
    def __lt__(self, other: 'Parsec[U]') -> 'Parsec[T]':
        return self.bind(lambda x: other.map(lambda _: x))

    # `p >> f` binds when f is a function and sequences when f is a parser
    def __rshift__(self, other: Union['Parsec[U]', Callable[[T], 'Parsec[U]']]) -> 'Parsec[U]':
        if isinstance(other, Parsec):
            return self > other
        return self.bind(other)

    # Label (<?>)
    def label(self, msg: str) -> 'Parsec[T]':
        def parse(state: State) -> ParseResult[T]:
            res = self(state)
            if res.consumed:
                return res
            if res.is_error:
                return ParseResult.error_empty(res.state, res.error.set_expect(msg))
            # Empty success: relabel only expectations that were collected here.
            if res.error is not None and not res.error.is_unknown():
                return ParseResult.ok_empty(res.value, res.state, res.error.set_expect(msg))
            return res
        return Parsec(parse)

    def __repr__(self) -> str:
        return f"<Parsec {getattr(self.parse_fn, '__qualname__', self.parse_fn)!s}>"
