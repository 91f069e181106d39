from abc import ABC, abstractmethod
from typing import Callable, List, Any, TYPE_CHECKING

from . import ast_nodes as ast
from . environment import Environment
from . errors import ErrorCode, LoxRuntimeError
from . signals import BreakSignal, ContinueSignal, ReturnSignal

# This is a common pattern to break circular import cycles.
# The import is only done for static type checking, not at runtime.
if TYPE_CHECKING:
    from . interpreter import Interpreter


class LoxCallable(ABC):
    """
    An abstract base class for all objects that can be called like a function.
    """
    @abstractmethod
    def arity(self) -> int:
        """Returns the number of arguments the callable expects."""
        raise NotImplementedError

    @abstractmethod
    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        """Executes the callable's logic."""
        raise NotImplementedError

    def __str__(self) -> str:
        return "<native fn>"


class LoxFunction(LoxCallable):
    """
    Represents a user-defined function.
    """
    def __init__(self, declaration: ast.Function, closure: Environment):
        self.declaration = declaration
        self.closure = closure # The environment where the function was declared.

    def arity(self) -> int:
        """The number of parameters the function declares."""
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        """
        Executes the function. This involves creating a new environment for the
        function's scope, binding arguments to parameters, and then executing
        the function's body.
        """
        # It encloses the function's closure, not the caller's environment.
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        signal = interpreter.execute_block(self.declaration.body, environment)

        if isinstance(signal, ReturnSignal):
            return signal.value
        if isinstance(signal, (BreakSignal, ContinueSignal)):
            raise LoxRuntimeError(
                signal.keyword,
                f"Can't use '{signal.keyword.lexeme}' outside of a loop.",
                ErrorCode.UNHANDLED_SIGNAL,
            )

        # If no 'return' is encountered, functions implicitly return nil.
        return None

    def __str__(self) -> str:
        return f"<fn {self.declaration.name.lexeme}>"


class LoxNativeFunction(LoxCallable):
    """A wrapper for native Python functions exposed to scripts."""
    def __init__(self, name: str, arity: int, func: Callable[..., Any]):
        self.name = name
        self._arity = arity
        self.func = func

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        return self.func(*arguments)
