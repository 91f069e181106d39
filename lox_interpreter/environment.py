from typing import Dict, Any, Optional

from . tokens import Token
from . errors import ErrorCode, LoxRuntimeError


class Environment:
    """
    One scope of bindings plus a link to the scope that encloses it.

    Locals are reached by distance: the number of hops outward that the
    resolver counted when it bound the name. Globals are never resolved, so
    the interpreter reaches them by name with `get` and `assign`, which walk
    the chain from this scope outward.

    Closures hold a reference to the environment they were declared in, so
    an environment lives as long as the longest-lived function that captured it.
    """
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.values: Dict[str, Any] = {}
        self.enclosing: Optional['Environment'] = enclosing

    def define(self, name: str, value: Any):
        """Binds a name in this scope. Redefining a name here overwrites it."""
        self.values[name] = value

    def ancestor(self, distance: int) -> 'Environment':
        """Returns the scope `distance` hops out; 0 is this scope, 1 its parent."""
        environment = self
        for _ in range(distance):
            environment = environment.enclosing
        return environment

    def get_at(self, distance: int, name: Token) -> Any:
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise _undefined(name)
        return values[name.lexeme]

    def assign_at(self, distance: int, name: Token, value: Any):
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise _undefined(name)
        values[name.lexeme] = value

    def get(self, name: Token) -> Any:
        return self._owner(name).values[name.lexeme]

    def assign(self, name: Token, value: Any):
        """Rebinds the nearest existing binding. Assignment never creates one."""
        self._owner(name).values[name.lexeme] = value

    def _owner(self, name: Token) -> 'Environment':
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment
            environment = environment.enclosing
        raise _undefined(name)


def _undefined(name: Token) -> LoxRuntimeError:
    return LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.", ErrorCode.UNDEFINED_VARIABLE)
