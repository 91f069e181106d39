import sys
import time
from typing import List, Dict, Any, Optional, Sequence, TextIO

from . import ast_nodes as ast
from . tokens import Token, TokenType
from . errors import ErrorCode, LoxRuntimeError
from . environment import Environment
from . callables import LoxCallable, LoxFunction, LoxNativeFunction
from . signals import BreakSignal, ContinueSignal, ReturnSignal, Signal


class Interpreter:
    """
    The Interpreter walks the AST and executes the code.

    Statement execution returns a control-flow signal (or None) which each
    caller either handles or passes straight back up. Runtime errors are
    raised as LoxRuntimeError and abort the current `interpret` call.
    """
    def __init__(self, out: Optional[TextIO] = None):
        self.out = out
        self.globals = Environment()
        self.environment = self.globals
        # Scope depth of every resolved local read or assignment, keyed on the node.
        self.locals: Dict[ast.Expr, int] = {}

        self.globals.define("clock", LoxNativeFunction("clock", 0, lambda: time.time()))

    def interpret(self, statements: List[ast.Stmt],
                  resolved: Optional[Dict[ast.Expr, int]] = None) -> Optional[LoxRuntimeError]:
        """
        The main entry point for the interpreter. Returns the runtime error
        that stopped execution, or None. Globals defined before the error
        are kept, so the same interpreter can run the next program.

        `resolved` is the table a Resolver built for these statements. A
        variable missing from it is treated as a global.
        """
        if resolved:
            self.locals.update(resolved)
        try:
            for statement in statements:
                signal = self._execute(statement)
                if signal is not None:
                    raise LoxRuntimeError(
                        signal.keyword,
                        f"Can't use '{signal.keyword.lexeme}' at top level.",
                        ErrorCode.UNHANDLED_SIGNAL,
                    )
        except LoxRuntimeError as error:
            return error
        finally:
            self.environment = self.globals

        return None

    # --- STATEMENTS ---

    def _execute(self, stmt: ast.Stmt) -> Optional[Signal]:
        """Executes a single statement, returning any pending control-flow signal."""
        match stmt:
            case ast.Expression():
                self._evaluate(stmt.expression)
                return None

            case ast.Print():
                value = self._evaluate(stmt.expression)
                print(self.stringify(value), file=self.out or sys.stdout)
                return None

            case ast.Var():
                value = None
                if stmt.initializer is not None:
                    value = self._evaluate(stmt.initializer)
                self.environment.define(stmt.name.lexeme, value)
                return None

            case ast.Block():
                return self.execute_block(stmt.statements, Environment(self.environment))

            case ast.If():
                if self._is_truthy(self._evaluate(stmt.condition)):
                    return self._execute(stmt.then_branch)
                if stmt.else_branch is not None:
                    return self._execute(stmt.else_branch)
                return None

            case ast.While():
                return self._execute_while(stmt)

            case ast.Function():
                function = LoxFunction(stmt, self.environment)
                self.environment.define(stmt.name.lexeme, function)
                return None

            case ast.Return():
                value = None
                if stmt.value is not None:
                    value = self._evaluate(stmt.value)
                return ReturnSignal(stmt.keyword, value)

            case ast.Break():
                return BreakSignal(stmt.keyword)

            case ast.Continue():
                return ContinueSignal(stmt.keyword)

        raise TypeError(f"Unknown statement node: {stmt!r}")

    def _execute_while(self, stmt: ast.While) -> Optional[Signal]:
        while self._is_truthy(self._evaluate(stmt.condition)):
            signal = self._execute(stmt.body)
            if isinstance(signal, BreakSignal):
                break
            if isinstance(signal, ReturnSignal):
                return signal
            if stmt.increment is not None:
                self._evaluate(stmt.increment)
        return None

    def execute_block(self, statements: Sequence[ast.Stmt], environment: Environment) -> Optional[Signal]:
        """Runs statements in `environment`, restoring the previous environment on every exit path."""
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                signal = self._execute(statement)
                if signal is not None:
                    return signal
        finally:
            self.environment = previous
        return None

    # --- HELPER METHODS FOR RUNTIME CHECKS ---

    def _is_truthy(self, obj: Any) -> bool:
        """False and nil are falsey; everything else, including 0 and "", is truthy."""
        if obj is None: return False
        if isinstance(obj, bool): return obj
        return True

    def _is_equal(self, a: Any, b: Any) -> bool:
        """Values of different dynamic types are never equal."""
        if type(a) is not type(b): return False
        return a == b

    def _check_number_operand(self, operator: Token, operand: Any):
        if _is_number(operand): return
        raise LoxRuntimeError(operator, "Operand must be a number.")

    def _check_number_operands(self, operator: Token, left: Any, right: Any):
        if _is_number(left) and _is_number(right): return
        raise LoxRuntimeError(operator, "Operands must be numbers.")

    def stringify(self, obj: Any) -> str:
        if obj is None: return "nil"
        if isinstance(obj, bool): return "true" if obj else "false"
        if isinstance(obj, float):
            if obj.is_integer():
                return str(int(obj))
            return repr(obj)
        return str(obj)

    # --- EXPRESSIONS ---

    def _evaluate(self, expr: ast.Expr) -> Any:
        match expr:
            case ast.Literal():
                return expr.value

            case ast.Grouping():
                return self._evaluate(expr.expression)

            case ast.Unary():
                return self._evaluate_unary(expr)

            case ast.Binary():
                return self._evaluate_binary(expr)

            case ast.Logical():
                left = self._evaluate(expr.left)
                if expr.operator.token_type == TokenType.OR:
                    if self._is_truthy(left):
                        return left
                else: # AND
                    if not self._is_truthy(left):
                        return left
                return self._evaluate(expr.right)

            case ast.Variable():
                return self._look_up_variable(expr.name, expr)

            case ast.Assign():
                value = self._evaluate(expr.value)
                distance = self.locals.get(expr)
                if distance is not None:
                    self.environment.assign_at(distance, expr.name, value)
                else:
                    self.globals.assign(expr.name, value)
                return value

            case ast.Call():
                return self._evaluate_call(expr)

        raise TypeError(f"Unknown expression node: {expr!r}")

    def _look_up_variable(self, name: Token, expr: ast.Expr) -> Any:
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name)
        return self.globals.get(name)

    def _evaluate_unary(self, expr: ast.Unary) -> Any:
        right = self._evaluate(expr.right)
        if expr.operator.token_type == TokenType.MINUS:
            self._check_number_operand(expr.operator, right)
            return -right
        # BANG
        return not self._is_truthy(right)

    def _evaluate_binary(self, expr: ast.Binary) -> Any:
        left = self._evaluate(expr.left)
        right = self._evaluate(expr.right)
        op_type = expr.operator.token_type

        if op_type == TokenType.MINUS:
            self._check_number_operands(expr.operator, left, right)
            return left - right
        if op_type == TokenType.SLASH:
            self._check_number_operands(expr.operator, left, right)
            if right == 0.0:
                raise LoxRuntimeError(expr.operator, "Division by zero.", ErrorCode.DIVISION_BY_ZERO)
            return left / right
        if op_type == TokenType.STAR:
            self._check_number_operands(expr.operator, left, right)
            return left * right
        if op_type == TokenType.PLUS:
            if _is_number(left) and _is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(expr.operator, "Operands must be two numbers or two strings.")

        if op_type == TokenType.GREATER:
            self._check_number_operands(expr.operator, left, right)
            return left > right
        if op_type == TokenType.GREATER_EQUAL:
            self._check_number_operands(expr.operator, left, right)
            return left >= right
        if op_type == TokenType.LESS:
            self._check_number_operands(expr.operator, left, right)
            return left < right
        if op_type == TokenType.LESS_EQUAL:
            self._check_number_operands(expr.operator, left, right)
            return left <= right

        if op_type == TokenType.EQUAL_EQUAL:
            return self._is_equal(left, right)
        if op_type == TokenType.BANG_EQUAL:
            return not self._is_equal(left, right)

        raise TypeError(f"Unknown binary operator: {expr.operator.lexeme}")

    def _evaluate_call(self, expr: ast.Call) -> Any:
        callee = self._evaluate(expr.callee)

        arguments = []
        for argument in expr.arguments:
            arguments.append(self._evaluate(argument))

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(expr.paren, "Can only call functions.", ErrorCode.NOT_CALLABLE)

        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                expr.paren,
                f"Expected {callee.arity()} arguments but got {len(arguments)}.",
                ErrorCode.WRONG_NUMBER_OF_ARGUMENTS,
            )

        return callee.call(self, arguments)


def _is_number(value: Any) -> bool:
    # Scanned number literals are always floats; bool never counts.
    return isinstance(value, float)
