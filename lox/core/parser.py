"""Recursive-descent parser for lox: a complete token list in, a complete statement list out. See tree.py for the
grammar.

Each grammar rule is a method. A rule that cannot match raises a LoxSyntaxError; parse catches it at the statement
level, records it, and resynchronizes at the next probable statement boundary so that one malformed statement does not
hide errors in the rest of the program. No tree is produced for a statement that failed.
"""

from lox.core.token import TokenType
from lox.core.tree import (
    Assign, Binary, Block, Expression, Grouping, If, Literal, Logical, Print, Unary, Var, Variable, While,
)
from lox.lang.error import ExpectedToken, InvalidAssignment, LoxSyntaxError, UnmatchedToken


# tokens after which/at which a new statement probably starts
STATEMENT_STARTS = frozenset((
    TokenType.CLASS,
    TokenType.FOR,
    TokenType.FUN,
    TokenType.IF,
    TokenType.PRINT,
    TokenType.RETURN,
    TokenType.VAR,
    TokenType.WHILE,
))


class Parser:
    """One token of lookahead over tokens, which must end with an EOF token. Never moves past EOF."""

    def __init__(self, tokens, report=None):
        self.tokens = tokens
        self.current = 0

        self.report = report  # called with each LoxSyntaxError as it is found
        self.errors = []

    # ---------- top level ----------

    def parse(self):
        """Returns (statements, errors)."""
        statements = []
        while not self.at_end():
            try:
                statements.append(self.declaration())
            except LoxSyntaxError as error:
                self.errors.append(error)
                if self.report is not None:
                    self.report(error)
                self.synchronize()

        return statements, self.errors

    def synchronize(self):
        """Discards tokens until just after a ";" or just before a statement keyword (or EOF)."""
        self.advance()
        while not self.at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()

    # ---------- statements ----------

    def declaration(self):
        if self.match(TokenType.VAR):
            return self.var_declaration()
        return self.statement()

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self):
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def for_statement(self):
        """Desugars "for (init; cond; incr) body" into "{ init; while (cond) { body; incr; } }"."""
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = Block([body, Expression(increment)])
        if condition is None:
            condition = Literal(True)
        body = While(condition, body)
        if initializer is not None:
            body = Block([initializer, body])

        return body

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()

        return If(condition, then_branch, else_branch)

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def while_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return While(condition, self.statement())

    def block(self):
        """Assumes "{" was already consumed."""
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.at_end():
            statements.append(self.declaration())

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # ---------- expressions ----------

    def expression(self):
        # comma operator: earlier operands are parsed, then dropped from the tree
        expr = self.assignment()
        while self.match(TokenType.COMMA):
            expr = self.assignment()
        return expr

    def assignment(self):
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()  # right-associative

            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise InvalidAssignment(equals)

        return expr

    def logic_or(self):
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            expr = Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self):
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            expr = Logical(expr, operator, self.equality())
        return expr

    def equality(self):
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        return self._binary(
            self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def term(self):
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def _binary(self, operand, *operators):
        """Left-associative binary level: operand ( operator operand )*."""
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            expr = Binary(expr, operator, operand())
        return expr

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise UnmatchedToken(self.peek(), "Expect expression.")

    # ---------- token helpers ----------

    def consume(self, token_type, message):
        if self.check(token_type):
            return self.advance()
        raise ExpectedToken(token_type, self.peek(), message)

    def match(self, *token_types):
        for token_type in token_types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def check(self, token_type):
        if self.at_end():
            return False
        return self.peek().type is token_type

    def advance(self):
        if not self.at_end():
            self.current += 1
        return self.previous()

    def at_end(self):
        return self.peek().type is TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]


def parse(tokens, report=None):
    """Parses tokens, returning (statements, errors)."""
    return Parser(tokens, report).parse()
