"""Error handling for the lox language. Only LoxExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Two families of errors are kept apart:
    1. static errors (LexError, LoxSyntaxError): collected by the scanner/parser, reported, and the offending input is
       not run
    2. runtime errors (LoxRuntimeError): raised by the evaluator, abort the rest of the current input
"""

import sys

from termcolor import colored


class LoxException(Exception):
    """Templates an error message so that it can be reported as a (line, where, message) triple."""

    def __init__(self, line, message, where=""):
        super().__init__(message)
        self.line = line
        self.where = where      # location hint, ex: " at 'foo'" or " at end"
        self.message = message

    @property
    def triple(self):
        return self.line, self.where, self.message

    @staticmethod
    def locate(token):
        """Returns the location hint for token."""
        if token.is_eof():
            return " at end"
        return f" at '{token.lexeme}'"

    def __repr__(self):
        return f"{type(self).__name__}(line={self.line}, where={self.where!r}, message={self.message!r})"

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.triple == other.triple

    def __hash__(self):
        return hash(self.triple)


class ReservedFilename(LoxException):
    """Not tied to any source line."""

    def __init__(self, path):
        super().__init__(None, f"'{path}' is a reserved filename")


# ---------- lexical ----------

class LexError(LoxException):
    """Raised (well, collected) by the scanner."""


class UnrecognizedSymbol(LexError):
    def __init__(self, line, char):
        super().__init__(line, f"Unexpected character: {char}")
        self.char = char


class UnterminatedString(LexError):
    def __init__(self, line):
        super().__init__(line, "Unterminated string.")


# ---------- syntax ----------

class LoxSyntaxError(LoxException):
    """Raised inside the parser when a production cannot match. Carries the offending token."""

    def __init__(self, token, message):
        super().__init__(token.line, message, LoxException.locate(token))
        self.token = token


class UnmatchedToken(LoxSyntaxError):
    """token didn't match any grammar rule."""


class ExpectedToken(LoxSyntaxError):
    def __init__(self, expected, token, message):
        super().__init__(token, message)
        self.expected = expected


class InvalidAssignment(LoxSyntaxError):
    def __init__(self, token):
        super().__init__(token, "Invalid assignment target.")


# ---------- runtime ----------

class LoxRuntimeError(LoxException):
    def __init__(self, token, message):
        super().__init__(token.line, message, LoxException.locate(token))
        self.token = token


class UndefinedVariable(LoxRuntimeError):
    def __init__(self, token):
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")


class InvalidOperand(LoxRuntimeError):
    """An operator was applied to value(s) of the wrong type."""

    def __init__(self, token, detail):
        super().__init__(token, detail)
        self.detail = detail


class ErrorHandler:
    """Context manager that reports lox errors and suppresses them, unless fatal. Python errors that are not lox errors
    are reported as internal and propagate.
    """
    ERROR = "red"

    EX_DATAERR = 65   # lexical/syntax errors in input
    EX_NOINPUT = 66   # input file could not be read
    EX_SOFTWARE = 70  # runtime error

    def __init__(self, fatal=True, color=True, stream=None):
        self.fatal = fatal
        self.color = color
        self.stream = stream  # defaults to sys.stderr at write time

        self.had_error = False
        self.had_runtime_error = False

    def _colored(self, text, color=None, attrs=None):
        if not self.color:
            return text
        return colored(text, color, attrs=attrs)

    def _write(self, label, error):
        line, where, message = error.triple

        msg = self._colored(f"[line {line}] ", attrs=["bold"]) if line is not None else ""
        msg += self._colored(label, ErrorHandler.ERROR, attrs=["bold"])
        msg += f"{where}: {message}"

        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def report(self, error):
        """Prints a lexical/syntax error. Does not stop anything: callers decide to skip interpretation."""
        self._write("Error", error)
        self.had_error = True

    def throw(self, error):
        """Prints a runtime error and exits if fatal."""
        self._write("RuntimeError", error)
        self.had_runtime_error = True

        if self.fatal:
            sys.exit(ErrorHandler.EX_SOFTWARE)

    def internal(self, message):
        """Prints an error that isn't tied to a source line."""
        msg = self._colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        msg += self._colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + message
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def reset(self):
        """Called by the shell after every input line."""
        self.had_error = False
        self.had_runtime_error = False

    def exit_status(self):
        if self.had_error:
            return ErrorHandler.EX_DATAERR
        if self.had_runtime_error:
            return ErrorHandler.EX_SOFTWARE
        return 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if issubclass(exc_type, LoxRuntimeError):
            self.throw(exc_val)
            return True
        if issubclass(exc_type, LoxException):
            self.report(exc_val)
            return True

        if exc_type is KeyboardInterrupt:
            self.internal("keyboard interrupt")
        elif exc_type is RecursionError:
            self.internal("maximum recursion depth exceeded (input is nested too deeply)")
        else:
            self.internal(f"unknown error: '{exc_type.__name__}: {exc_val}'")
            return False

        self.had_runtime_error = True
        if self.fatal:
            sys.exit(ErrorHandler.EX_SOFTWARE)
        return True
