from typing import List, Dict

from . import ast_nodes as ast
from . tokens import Token
from . errors import ErrorCode, ParseError
# The resolver hands its results back to the caller instead of writing into
# the interpreter, so neither module imports the other.

class Resolver:
    """
    The Resolver is a static pass between parsing and execution.

    It walks the tree once, opening a scope wherever the interpreter will
    create an environment, and records how many scopes out each local
    variable read or assignment finds its binding. Names that are not in any
    local scope are left out of `locals` and are looked up as globals.
    A program with any recorded error must not be executed.
    """
    def __init__(self):
        # Each scope maps var name -> whether its initializer has finished.
        self.scopes: List[Dict[str, bool]] = []
        self.locals: Dict[ast.Expr, int] = {}
        self.errors: List[ParseError] = []

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def resolve(self, statements: List[ast.Stmt]) -> Dict[ast.Expr, int]:
        """Resolves a whole program and returns the expression -> depth table."""
        self._resolve_statements(statements)
        return self.locals

    def _resolve_statements(self, statements):
        for statement in statements:
            self._resolve_stmt(statement)

    # --- Scope Management ---

    def _begin_scope(self):
        self.scopes.append({})

    def _end_scope(self):
        self.scopes.pop()

    def _declare(self, name: Token):
        if not self.scopes: return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self._error(name, "Already a variable with this name in this scope.", ErrorCode.DUPLICATE_DECLARATION)
        scope[name.lexeme] = False

    def _define(self, name: Token):
        if not self.scopes: return
        self.scopes[-1][name.lexeme] = True

    def _resolve_local(self, expr: ast.Expr, name: Token):
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.locals[expr] = depth
                return

    def _resolve_function(self, function: ast.Function):
        self._begin_scope()
        for param in function.params:
            self._declare(param)
            self._define(param)
        # Parameters and body share one scope, matching the call environment.
        self._resolve_statements(function.body)
        self._end_scope()

    def _error(self, token: Token, message: str, code: ErrorCode):
        self.errors.append(ParseError.at_token(token, message, code=code))

    # --- Tree Walk ---

    def _resolve_stmt(self, stmt: ast.Stmt):
        match stmt:
            case ast.Block():
                self._begin_scope()
                self._resolve_statements(stmt.statements)
                self._end_scope()

            case ast.Var():
                self._declare(stmt.name)
                if stmt.initializer is not None:
                    self._resolve_expr(stmt.initializer)
                self._define(stmt.name)

            case ast.Function():
                # Defined before the body so the function can call itself.
                self._declare(stmt.name)
                self._define(stmt.name)
                self._resolve_function(stmt)

            case ast.Expression() | ast.Print():
                self._resolve_expr(stmt.expression)

            case ast.If():
                self._resolve_expr(stmt.condition)
                self._resolve_stmt(stmt.then_branch)
                if stmt.else_branch is not None:
                    self._resolve_stmt(stmt.else_branch)

            case ast.While():
                self._resolve_expr(stmt.condition)
                self._resolve_stmt(stmt.body)
                if stmt.increment is not None:
                    self._resolve_expr(stmt.increment)

            case ast.Return():
                if stmt.value is not None:
                    self._resolve_expr(stmt.value)

            case ast.Break() | ast.Continue():
                pass

            case _:
                raise TypeError(f"Unknown statement node: {stmt!r}")

    def _resolve_expr(self, expr: ast.Expr):
        match expr:
            case ast.Variable():
                if self.scopes and self.scopes[-1].get(expr.name.lexeme) is False:
                    self._error(expr.name, "Can't read local variable in its own initializer.",
                                ErrorCode.SELF_REFERENCING_INITIALIZER)
                self._resolve_local(expr, expr.name)

            case ast.Assign():
                self._resolve_expr(expr.value)
                self._resolve_local(expr, expr.name)

            case ast.Binary() | ast.Logical():
                self._resolve_expr(expr.left)
                self._resolve_expr(expr.right)

            case ast.Unary():
                self._resolve_expr(expr.right)

            case ast.Grouping():
                self._resolve_expr(expr.expression)

            case ast.Call():
                self._resolve_expr(expr.callee)
                for argument in expr.arguments:
                    self._resolve_expr(argument)

            case ast.Literal():
                pass

            case _:
                raise TypeError(f"Unknown expression node: {expr!r}")
