from typing import List, Any, Dict, Optional, Tuple

from . tokens import Token, TokenType, keywords
from . errors import ErrorCode, ParseError


SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# char -> (type when followed by '=', type on its own)
EQUAL_SUFFIX_TOKENS: Dict[str, Tuple[TokenType, TokenType]] = {
    '!': (TokenType.BANG_EQUAL, TokenType.BANG),
    '=': (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '<': (TokenType.LESS_EQUAL, TokenType.LESS),
    '>': (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

WHITESPACE = (' ', '\r', '\t')


class Lexer:
    """
    Turns source text into a token list ending in a single EOF token.

    Scan errors are collected in `errors` and scanning carries on, so one
    pass reports every bad character. A token's line is the line it starts on.
    """
    def __init__(self, source: str):
        self.source: str = source
        self.tokens: List[Token] = []
        self.errors: List[ParseError] = []
        self.start: int = 0
        self.current: int = 0
        self.line: int = 1
        self.start_line: int = 1

    def scan_tokens(self) -> List[Token]:
        while not self._is_at_end():
            self.start = self.current
            self.start_line = self.line
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def _scan_token(self):
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif char in EQUAL_SUFFIX_TOKENS:
            with_equal, alone = EQUAL_SUFFIX_TOKENS[char]
            self._add_token(with_equal if self._match('=') else alone)
        elif char == '/':
            self._slash()
        elif char in WHITESPACE:
            pass
        elif char == '\n':
            self.line += 1
        elif char == '"':
            self._string()
        elif _is_digit(char):
            self._number()
        elif _is_alpha(char):
            self._identifier()
        else:
            self._error("Unexpected character.", ErrorCode.UNEXPECTED_CHARACTER, found=char)

    # --- Token Shapes ---

    def _slash(self):
        if self._match('/'):
            while self._peek() != '\n' and not self._is_at_end():
                self._advance()
        elif self._match('*'):
            self._block_comment()
        else:
            self._add_token(TokenType.SLASH)

    def _block_comment(self):
        """Skips a /* ... */ comment. Comments do not nest."""
        while not self._is_at_end():
            if self._peek() == '*' and self._peek_next() == '/':
                self.current += 2
                return
            if self._advance() == '\n':
                self.line += 1
        self._error("Unterminated block comment.", ErrorCode.UNTERMINATED_COMMENT, line=self.start_line)

    def _string(self):
        while self._peek() != '"' and not self._is_at_end():
            if self._advance() == '\n':
                self.line += 1

        if self._is_at_end():
            # Reported where the string opened, not where the input ran out.
            self._error("Unterminated string.", ErrorCode.UNTERMINATED_STRING, line=self.start_line)
            return

        self._advance()
        self._add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def _number(self):
        self._digits()

        if self._peek() == '.':
            self._advance()
            if not _is_digit(self._peek()):
                self._invalid_number("Expect digit after '.' in number.")
                return
            self._digits()

        # "12abc" is one bad token, not a number followed by a name.
        if _is_alpha(self._peek()):
            while _is_alpha_numeric(self._peek()):
                self._advance()
            self._invalid_number("Invalid number.")
            return

        self._add_token(TokenType.NUMBER, float(self._lexeme()))

    def _invalid_number(self, message: str):
        self._error(message, ErrorCode.INVALID_NUMBER, found=self._lexeme())

    def _identifier(self):
        while _is_alpha_numeric(self._peek()):
            self._advance()
        self._add_token(keywords.get(self._lexeme(), TokenType.IDENTIFIER))

    # --- Cursor ---

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        char = self.source[self.current]
        self.current += 1
        return char

    def _match(self, expected: str) -> bool:
        if self._peek() != expected:
            return False
        self.current += 1
        return True

    def _peek(self) -> str:
        return self.source[self.current] if self.current < len(self.source) else '\0'

    def _peek_next(self) -> str:
        return self.source[self.current + 1] if self.current + 1 < len(self.source) else '\0'

    def _digits(self):
        while _is_digit(self._peek()):
            self._advance()

    def _lexeme(self) -> str:
        return self.source[self.start:self.current]

    def _add_token(self, token_type: TokenType, literal: Any = None):
        self.tokens.append(Token(token_type, self._lexeme(), literal, self.start_line))

    def _error(self, message: str, code: ErrorCode, found: str = "", line: Optional[int] = None):
        self.errors.append(ParseError(self.line if line is None else line, message, found=found, code=code))


def _is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def _is_alpha(char: str) -> bool:
    return ('a' <= char <= 'z') or ('A' <= char <= 'Z') or char == '_'


def _is_alpha_numeric(char: str) -> bool:
    return _is_alpha(char) or _is_digit(char)
