"""Scope chain for lox variables."""

from lox.lang.error import UndefinedVariable


class Environment:
    """Maps variable names to values, with an optional enclosing (parent) scope. Lookups and assignments search this
    scope, then the enclosing ones outward to the root.

    A block gets a fresh child Environment that is simply dropped when the block ends: nothing is copied in or out of
    the parent, so shadowed outer bindings reappear untouched.
    """

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """Creates or overwrites a binding in this scope. Never fails."""
        self.values[name] = value

    def get(self, name):
        """name is an IDENTIFIER token."""
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise UndefinedVariable(name)

    def assign(self, name, value):
        """Overwrites the nearest existing binding. Never creates one."""
        env = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise UndefinedVariable(name)

    def __repr__(self):
        return f"Environment({self.values!r}, enclosing={self.enclosing!r})"
