from enum import Enum
from typing import Any, List, Optional

from .Parsec import SourcePos


class ErrorKind(Enum):
    INVALID_CHARACTER = "invalid character"
    UNEXPECTED_TOKEN = "unexpected token"
    UNEXPECTED_END = "unexpected end of input"


class ExpressionError(Exception):
    """
    Raised when an expression cannot be tokenized or parsed.

    `found` is the offending character or token, or None when the input ran
    out. `expected` lists what the parser would have accepted instead.
    """

    def __init__(self, kind: ErrorKind, pos: SourcePos, found: Any = None,
                 expected: Optional[List[str]] = None):
        self.kind = kind
        self.pos = pos
        self.found = found
        self.expected = list(expected or [])
        super().__init__(self._describe())

    def _describe(self) -> str:
        msg = f"{self.kind.value}"
        if self.found is not None:
            msg += f" {str(self.found)!r}"
        msg += f" at column {self.pos.column}"
        if self.expected:
            msg += f" (expecting {', '.join(self.expected)})"
        return msg


class LexError(ExpressionError):
    pass


class ParseError(ExpressionError):
    pass
