"""
AST node definitions.

Expressions and statements are two disjoint families of frozen dataclasses.
The set of variants is closed: consumers dispatch over it with `match`
rather than through visitor methods on the nodes.
"""
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from . tokens import Token


# --- Base Classes for AST Nodes ---

class Expr:
    """A node that produces a value."""
    __slots__ = ()


class Stmt:
    """A node that is executed for its effect."""
    __slots__ = ()


# --- Concrete Expression Nodes ---

@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Literal(Expr):
    value: Any


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


# Variable and Assign compare by identity: resolved scope depths are keyed
# on the node, and two reads of the same name on one line are still distinct.
@dataclass(frozen=True, eq=False)
class Variable(Expr):
    name: Token


@dataclass(frozen=True, eq=False)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: Tuple[Expr, ...]


# --- Concrete Statement Nodes ---

@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt
    # Runs after every pass through the body, including passes cut short by
    # 'continue'.
    increment: Optional[Expr] = None


@dataclass(frozen=True)
class Function(Stmt):
    name: Token
    params: Tuple[Token, ...]
    body: Tuple[Stmt, ...]


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]


@dataclass(frozen=True)
class Break(Stmt):
    keyword: Token


@dataclass(frozen=True)
class Continue(Stmt):
    keyword: Token
