from . tokens import Token, TokenType
from . lexer import Lexer
from . parser import Parser
from . resolver import Resolver
from . interpreter import Interpreter
from . environment import Environment
from . errors import ErrorCode, LoxRuntimeError, ParseError
from . lox import Lox

__all__ = [
    "Environment",
    "ErrorCode",
    "Interpreter",
    "Lexer",
    "Lox",
    "LoxRuntimeError",
    "ParseError",
    "Parser",
    "Resolver",
    "Token",
    "TokenType",
]
