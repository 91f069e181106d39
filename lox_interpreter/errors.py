from enum import Enum
from typing import Optional

from . tokens import Token, TokenType


class ErrorCode(Enum):
    """Stable identifiers attached to every diagnostic."""
    # Scanning
    UNTERMINATED_STRING = "E0001"
    UNEXPECTED_CHARACTER = "E0002"
    INVALID_NUMBER = "E0003"
    UNTERMINATED_COMMENT = "E0005"

    # Parsing
    EXPECTED_TOKEN = "E0100"
    EXPECTED_EXPRESSION = "E0101"
    INVALID_ASSIGNMENT_TARGET = "E0105"
    RETURN_OUTSIDE_FUNCTION = "E0110"
    BREAK_OUTSIDE_LOOP = "E0111"
    CONTINUE_OUTSIDE_LOOP = "E0112"
    TOO_MANY_ARGUMENTS = "E0113"

    # Resolution
    DUPLICATE_DECLARATION = "E0202"
    SELF_REFERENCING_INITIALIZER = "E0210"

    # Runtime
    UNDEFINED_VARIABLE = "E0200"
    NOT_CALLABLE = "E0205"
    WRONG_NUMBER_OF_ARGUMENTS = "E0206"
    TYPE_ERROR = "E0207"
    DIVISION_BY_ZERO = "E0208"
    UNHANDLED_SIGNAL = "E0209"


class ParseError(Exception):
    """
    A static error, found before the program runs.

    The parser records every ParseError it builds and raises it to unwind to
    the nearest declaration, where it synchronizes and carries on. `found` is
    the offending lexeme, or None when the error is at the end of input.
    """
    def __init__(self, line: int, message: str,
                 expected: Optional[TokenType] = None,
                 found: Optional[str] = None,
                 code: ErrorCode = ErrorCode.EXPECTED_TOKEN):
        self.line = line
        self.message = message
        self.expected = expected
        self.found = found
        self.code = code
        super().__init__(str(self))

    @classmethod
    def at_token(cls, token: Token, message: str,
                 expected: Optional[TokenType] = None,
                 code: ErrorCode = ErrorCode.EXPECTED_TOKEN,
                 line: Optional[int] = None) -> 'ParseError':
        found = None if token.token_type == TokenType.EOF else token.lexeme
        return cls(token.line if line is None else line, message, expected, found, code)

    def __str__(self) -> str:
        if self.found is None:
            return f"[Line {self.line}] Error at end: {self.message}"
        if self.found == "":
            return f"[Line {self.line}] Error: {self.message}"
        return f"[Line {self.line}] Error at '{self.found}': {self.message}"


class LoxRuntimeError(RuntimeError):
    """Custom exception for reporting runtime errors."""
    def __init__(self, token: Token, message: str, code: ErrorCode = ErrorCode.TYPE_ERROR):
        self.token = token
        self.message = message
        self.code = code
        super().__init__(self.message)

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        return f"[Line {self.line}] RuntimeError: {self.message}"
