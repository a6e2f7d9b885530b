"""Lexical analysis for lox. Converts source text into a complete list of Tokens in a single left-to-right pass.

Scanning never aborts: unrecognized characters and unterminated strings are collected as LexErrors and the pass goes
on, so that every lexical error in the input can be reported at once. Exactly one EOF token is always appended.
"""

import string

from lox.core.token import KEYWORDS, Token, TokenType
from lox.lang.error import UnrecognizedSymbol, UnterminatedString


SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char: (type if followed by "=", type otherwise)
DOUBLE = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

DIGITS = frozenset(string.digits)
ALPHA = frozenset(string.ascii_letters + "_")
ALPHANUMERIC = ALPHA | DIGITS


class Scanner:
    """Governs one scanning pass over source. Cursors: start of current lexeme, current position, current line."""

    def __init__(self, source):
        self.source = source
        self.tokens = []
        self.errors = []

        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self):
        """Returns (tokens, errors). Can be called once per Scanner."""
        while not self.at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens, self.errors

    def scan_token(self):
        char = self.advance()

        if char in SINGLE:
            self.add_token(SINGLE[char])

        elif char in DOUBLE:
            matched, single = DOUBLE[char]
            self.add_token(matched if self.match("=") else single)

        elif char == "/":
            if self.match("/"):
                self.line_comment()
            elif self.match("*"):
                self.block_comment()
            else:
                self.add_token(TokenType.SLASH)

        elif char in " \r\t":
            pass

        elif char == "\n":
            self.line += 1

        elif char == "\"":
            self.string()

        elif char in DIGITS:
            self.number()

        elif char in ALPHA:
            self.identifier()

        else:
            self.errors.append(UnrecognizedSymbol(self.line, char))

    # ---------- lexemes ----------

    def line_comment(self):
        # the newline itself is left for scan_token to count
        while self.peek() != "\n" and not self.at_end():
            self.advance()

    def block_comment(self):
        # an unterminated block comment silently runs to the end of input
        while not self.at_end():
            if self.peek() == "*" and self.peek_next() == "/":
                self.advance()
                self.advance()
                return
            if self.advance() == "\n":
                self.line += 1

    def string(self):
        start_line = self.line
        while self.peek() != "\"" and not self.at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.at_end():
            self.errors.append(UnterminatedString(start_line))
            return

        self.advance()  # closing quote
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while self.peek() in DIGITS:
            self.advance()

        # fractional part needs digits on both sides of the dot
        if self.peek() == "." and self.peek_next() in DIGITS:
            self.advance()
            while self.peek() in DIGITS:
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while self.peek() in ALPHANUMERIC:
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    # ---------- cursor helpers ----------

    def advance(self):
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected):
        if self.at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        """Returns "" at end of input (which is in no character class)."""
        if self.at_end():
            return ""
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return ""
        return self.source[self.current + 1]

    def at_end(self):
        return self.current >= len(self.source)

    def add_token(self, token_type, literal=None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, lexeme, literal, self.line))


def scan(source):
    """Scans source, returning (tokens, errors)."""
    return Scanner(source).scan_tokens()
