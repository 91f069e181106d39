"""
Control-flow signals.

Statement execution returns one of these (or None for normal completion)
instead of raising. Every routine that executes nested statements must hand
a signal back to its caller untouched unless it is the boundary that owns
it: loops own Break/Continue, function calls own Return.
"""
from dataclasses import dataclass
from typing import Any, Union

from . tokens import Token


@dataclass(frozen=True)
class ReturnSignal:
    keyword: Token
    value: Any


@dataclass(frozen=True)
class BreakSignal:
    keyword: Token


@dataclass(frozen=True)
class ContinueSignal:
    keyword: Token


Signal = Union[ReturnSignal, BreakSignal, ContinueSignal]
