import string as _string
from typing import Callable, Iterable

from .Parsec import Parsec
from .Prim import token

ASCII_LETTERS = frozenset(_string.ascii_letters)
ASCII_DIGITS = frozenset(_string.digits)


def _show_char(c: str) -> str:
    return repr(c)


# Core function: Succeeds if the character satisfies a predicate
def satisfy(f: Callable[[str], bool]) -> Parsec[str]:
    """Succeeds for any character where f returns True. Returns the parsed character."""
    return token(_show_char, lambda c: c if f(c) else None)


# Parses a single character
def char(c: str) -> Parsec[str]:
    """Parses a single character c and returns it."""
    return satisfy(lambda x: x == c).label(repr(c))


def one_of(cs: Iterable[str]) -> Parsec[str]:
    """Succeeds if the current character is in cs. Returns the parsed character."""
    allowed = frozenset(cs)
    return satisfy(lambda c: c in allowed).label(f"one of {''.join(sorted(allowed))!r}")


def letter() -> Parsec[str]:
    """Parses an ASCII letter and returns it."""
    return satisfy(lambda c: c in ASCII_LETTERS).label("letter")


def digit() -> Parsec[str]:
    """Parses an ASCII digit and returns it."""
    return satisfy(lambda c: c in ASCII_DIGITS).label("digit")


def any_char() -> Parsec[str]:
    """Parses any character and returns it."""
    return satisfy(lambda _: True)
