"""Tree-walking evaluator for lox.

Runtime values are plain Python objects: None (nil), bool, float (number) and str. Numbers are always floats, so
bool (a subclass of int) never passes for a number.
"""

import math
from decimal import Decimal

from lox.core.environment import Environment
from lox.core.token import TokenType
from lox.core.tree import ExprVisitor, StmtVisitor
from lox.lang.error import InvalidOperand


def is_truthy(value):
    """nil and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Values of different types are never equal, and comparing them never fails."""
    return type(left) is type(right) and left == right


def is_number(value):
    return isinstance(value, float)


def stringify(value):
    """Textual form used by print."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        # shortest round-trip digits, written out in plain decimal (1e-05 -> 0.00001, 3.0 -> 3)
        return format(Decimal(repr(value)).normalize(), "f")
    return value


def divide(left, right):
    """IEEE-754 division: x / 0 is +-inf, 0 / 0 is NaN."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


ARITHMETIC = {
    TokenType.MINUS: lambda left, right: left - right,
    TokenType.STAR: lambda left, right: left * right,
    TokenType.SLASH: divide,
}

COMPARISON = {
    TokenType.GREATER: lambda left, right: left > right,
    TokenType.GREATER_EQUAL: lambda left, right: left >= right,
    TokenType.LESS: lambda left, right: left < right,
    TokenType.LESS_EQUAL: lambda left, right: left <= right,
}


class Interpreter(ExprVisitor, StmtVisitor):
    """Executes statements against one scope chain that lives as long as the Interpreter, so that state persists
    across interpret calls (ex: REPL lines).
    """

    def __init__(self, out=None):
        self.out = out  # output sink for print, defaults to sys.stdout at write time
        self.globals = Environment()
        self.environment = self.globals

    def interpret(self, statements):
        """Runs statements in order. The first LoxRuntimeError stops the run and is raised to the caller."""
        for stmt in statements:
            self.execute(stmt)

    def execute(self, stmt):
        stmt.accept(self)

    def evaluate(self, expr):
        return expr.accept(self)

    def execute_block(self, statements, environment):
        """Runs statements in environment, restoring the current scope afterwards even if a statement fails."""
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # ---------- statements ----------

    def visit_expression_stmt(self, stmt):
        self.evaluate(stmt.expression)

    def visit_print_stmt(self, stmt):
        value = self.evaluate(stmt.expression)
        print(stringify(value), file=self.out)

    def visit_var_stmt(self, stmt):
        value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def visit_block_stmt(self, stmt):
        self.execute_block(stmt.statements, Environment(self.environment))

    def visit_if_stmt(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    def visit_while_stmt(self, stmt):
        while is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.body)

    # ---------- expressions ----------

    def visit_literal(self, expr):
        return expr.value

    def visit_variable(self, expr):
        return self.environment.get(expr.name)

    def visit_assign(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def visit_grouping(self, expr):
        return self.evaluate(expr.expression)

    def visit_logical(self, expr):
        left = self.evaluate(expr.left)

        if expr.operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def visit_unary(self, expr):
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.type is TokenType.BANG:
            return not is_truthy(right)

        # TokenType.MINUS
        if not is_number(right):
            raise InvalidOperand(operator, "Operand must be a number.")
        return -right

    def visit_binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator

        if operator.type is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if operator.type is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if operator.type is TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise InvalidOperand(operator, "Operands must be two numbers or two strings.")

        if not (is_number(left) and is_number(right)):
            raise InvalidOperand(operator, "Operands must be numbers.")

        if operator.type in ARITHMETIC:
            return ARITHMETIC[operator.type](left, right)
        return COMPARISON[operator.type](left, right)
