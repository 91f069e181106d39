from typing import List

from . import ast_nodes as ast


class AstPrinter:
    """
    A utility class to print the AST in a readable Lisp-like format.
    This is extremely useful for debugging the parser.
    """
    def print_program(self, statements: List[ast.Stmt]) -> str:
        lines = []
        for stmt in statements:
            lines.append(self.print_stmt(stmt))
        return "\n".join(lines)

    def print_stmt(self, stmt: ast.Stmt) -> str:
        match stmt:
            case ast.Expression():
                return self._parenthesize("expr_stmt", stmt.expression)
            case ast.Print():
                return self._parenthesize("print", stmt.expression)
            case ast.Var():
                if stmt.initializer is not None:
                    return self._parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)
                return f"(var {stmt.name.lexeme})"
            case ast.Block():
                return self._parenthesize("block", *stmt.statements)
            case ast.If():
                if stmt.else_branch is not None:
                    return self._parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)
                return self._parenthesize("if", stmt.condition, stmt.then_branch)
            case ast.While():
                if stmt.increment is not None:
                    return self._parenthesize("while", stmt.condition, stmt.body, stmt.increment)
                return self._parenthesize("while", stmt.condition, stmt.body)
            case ast.Function():
                param_str = " ".join(p.lexeme for p in stmt.params)
                return self._parenthesize(f"fun {stmt.name.lexeme}({param_str})", *stmt.body)
            case ast.Return():
                if stmt.value is not None:
                    return self._parenthesize("return", stmt.value)
                return "(return)"
            case ast.Break():
                return "(break)"
            case ast.Continue():
                return "(continue)"
        raise TypeError(f"Unknown statement node: {stmt!r}")

    def print_expr(self, expr: ast.Expr) -> str:
        match expr:
            case ast.Binary() | ast.Logical():
                return self._parenthesize(expr.operator.lexeme, expr.left, expr.right)
            case ast.Grouping():
                return self._parenthesize("group", expr.expression)
            case ast.Literal():
                if expr.value is None: return "nil"
                if isinstance(expr.value, str): return f'"{expr.value}"'
                if isinstance(expr.value, bool): return str(expr.value).lower()
                if isinstance(expr.value, float) and expr.value.is_integer():
                    return str(int(expr.value))
                return str(expr.value)
            case ast.Unary():
                return self._parenthesize(expr.operator.lexeme, expr.right)
            case ast.Variable():
                return expr.name.lexeme
            case ast.Assign():
                return self._parenthesize(f"assign {expr.name.lexeme}", expr.value)
            case ast.Call():
                return self._parenthesize("call", expr.callee, *expr.arguments)
        raise TypeError(f"Unknown expression node: {expr!r}")

    # --- Helper Method ---

    def _parenthesize(self, name: str, *parts) -> str:
        """Helper to format a node and its children."""
        result = [f"({name}"]
        for part in parts:
            if isinstance(part, ast.Stmt):
                result.append(f" {self.print_stmt(part)}")
            else:
                result.append(f" {self.print_expr(part)}")
        result.append(")")
        return "".join(result)
