"""Alternate notations for syntax trees, used for debugging (lox --ast, the shell's ast command)."""

from lox.core.evaluator import stringify
from lox.core.tree import ExprVisitor, StmtVisitor


class AstPrinter(ExprVisitor, StmtVisitor):
    """Fully parenthesized prefix notation, ex: 1 + 2 * 3 -> (+ 1 (* 2 3))."""

    def print(self, node):
        return node.accept(self)

    def parenthesize(self, name, *nodes):
        parts = [name] + [node.accept(self) for node in nodes]
        return f"({' '.join(parts)})"

    # ---------- statements ----------

    def visit_expression_stmt(self, stmt):
        return self.parenthesize(";", stmt.expression)

    def visit_print_stmt(self, stmt):
        return self.parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt):
        return self.parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)

    def visit_block_stmt(self, stmt):
        return self.parenthesize("block", *stmt.statements)

    def visit_if_stmt(self, stmt):
        if stmt.else_branch is None:
            return self.parenthesize("if", stmt.condition, stmt.then_branch)
        return self.parenthesize("if", stmt.condition, stmt.then_branch, stmt.else_branch)

    def visit_while_stmt(self, stmt):
        return self.parenthesize("while", stmt.condition, stmt.body)

    # ---------- expressions ----------

    def visit_literal(self, expr):
        if isinstance(expr.value, str):
            return f"\"{expr.value}\""
        return stringify(expr.value)

    def visit_variable(self, expr):
        return expr.name.lexeme

    def visit_assign(self, expr):
        return self.parenthesize(f"= {expr.name.lexeme}", expr.value)

    def visit_unary(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_binary(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_logical(self, expr):
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping(self, expr):
        return self.parenthesize("group", expr.expression)


class RpnPrinter(ExprVisitor):
    """Reverse Polish notation for arithmetic, ex: (1 + 2) * 3 -> 1 2 + 3 *. Anything that isn't arithmetic over number
    literals renders as "", and so does every expression containing it.
    """

    def print(self, expr):
        return expr.accept(self)

    def visit_literal(self, expr):
        if isinstance(expr.value, float):
            return stringify(expr.value)
        return ""

    def visit_variable(self, expr):
        return ""

    def visit_assign(self, expr):
        return ""

    def visit_logical(self, expr):
        return ""

    def visit_unary(self, expr):
        right = expr.right.accept(self)
        if not right:
            return ""
        return f"{right} {expr.operator.lexeme}"

    def visit_binary(self, expr):
        left = expr.left.accept(self)
        right = expr.right.accept(self)
        if not left or not right:
            return ""
        return f"{left} {right} {expr.operator.lexeme}"

    def visit_grouping(self, expr):
        return expr.expression.accept(self)
