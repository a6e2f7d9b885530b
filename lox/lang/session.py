"""Session control for lox. Runs source through scan -> parse -> interpret, either for a whole file or for one
command-line input at a time.
"""

from lox.core.evaluator import Interpreter
from lox.core.parser import parse
from lox.core.printer import AstPrinter, RpnPrinter
from lox.core.scanner import scan
from lox.core.token import TokenType
from lox.core.tree import Expression, Print
from lox.lang.error import ErrorHandler, ReservedFilename


class Session:
    """Governs a lox session: one Interpreter, and therefore one global scope, for its whole lifetime."""
    SH_FILE = "<stdin>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False, out=None):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.out = out

        self.interpreter = Interpreter(out)

        if self.cmd_line:
            self.error_handler.fatal = False

        elif path == Session.SH_FILE:
            raise ReservedFilename(path)

    @staticmethod
    def needs_continuation(source):
        """Whether source has unclosed braces, ie the command line should keep reading before running it."""
        tokens, __ = scan(source)
        opened = sum(1 for token in tokens if token.type is TokenType.LEFT_BRACE)
        closed = sum(1 for token in tokens if token.type is TokenType.RIGHT_BRACE)
        return opened > closed

    def compile(self, source):
        """Scans and parses source, reporting every lexical/syntax error. Returns the statements, or None if there was
        any error.
        """
        tokens, lex_errors = scan(source)
        for error in lex_errors:
            self.error_handler.report(error)

        statements, syntax_errors = parse(tokens, report=self.error_handler.report)

        if lex_errors or syntax_errors:
            return None
        return statements

    def run(self, source):
        """Runs source against this session's interpreter. Nothing is run if source has a lexical/syntax error.
        A LoxRuntimeError is raised to the caller, bindings made before it stay in place.
        """
        statements = self.compile(source)
        if statements is not None:
            self.interpreter.interpret(statements)

    def read_file(self):
        """Returns the contents of the file at self.path. Exits if it can't be read."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                return file.read()
        except (OSError, UnicodeDecodeError):
            self.error_handler.internal(f"'{self.path}' could not be opened")
            raise SystemExit(ErrorHandler.EX_NOINPUT)

    def run_file(self):
        """Runs the whole file at self.path."""
        self.run(self.read_file())

    def ast(self, source):
        """Returns the parenthesized form of every statement in source, or None if it doesn't parse."""
        statements = self.compile(source)
        if statements is None:
            return None

        printer = AstPrinter()
        return "\n".join(printer.print(stmt) for stmt in statements)

    def rpn(self, source):
        """Returns the reverse Polish form of every expression/print statement in source (one line each), or None if
        source doesn't parse. Declarations and control flow have no such form and are skipped.
        """
        statements = self.compile(source)
        if statements is None:
            return None

        printer = RpnPrinter()
        return "\n".join(printer.print(stmt.expression) for stmt in statements if isinstance(stmt, (Expression, Print)))
