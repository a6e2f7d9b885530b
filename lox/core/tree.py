"""Syntax tree for lox.

Formally, the grammar handled by the parser is

```
<program>     ::= <declaration>* EOF
<declaration> ::= "var" IDENTIFIER ( "=" <expression> )? ";"
                | <statement>
<statement>   ::= <expression> ";"
                | "print" <expression> ";"
                | "{" <declaration>* "}"
                | "if" "(" <expression> ")" <statement> ( "else" <statement> )?
                | "while" "(" <expression> ")" <statement>
                | "for" "(" ( <var_decl> | <expr_stmt> | ";" ) <expression>? ";" <expression>? ")" <statement>
                                                ; desugared to Block/While, there is no For node

<expression>  ::= <assignment> ( "," <assignment> )*  ; only the last operand is kept
<assignment>  ::= IDENTIFIER "=" <assignment> | <logic_or>
<logic_or>    ::= <logic_and> ( "or" <logic_and> )*
<logic_and>   ::= <equality> ( "and" <equality> )*
<equality>    ::= <comparison> ( ( "!=" | "==" ) <comparison> )*
<comparison>  ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>        ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>      ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>       ::= ( "!" | "-" ) <unary> | <primary>
<primary>     ::= NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" <expression> ")"
```

Every node owns its children exclusively: the parser never shares a subtree between two parents, so the tree has no
cycles and recursive walks always terminate.

Tree walking: each node class names the visitor method that handles it, and ExprVisitor/StmtVisitor declare one
abstract method per node class. A visitor that forgets a node class cannot be instantiated.
"""

from abc import ABC, abstractmethod


class SyntaxNode(ABC):
    """Superclass for every expression and statement node. _fields lists the children/attributes, in order."""
    _fields = ()
    _visit = None

    def accept(self, visitor):
        return getattr(visitor, self._visit)(self)

    def _values(self):
        # type is included so that Literal(1.0) != Literal(True)
        return tuple((type(getattr(self, f)), getattr(self, f)) for f in self._fields)

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(
            <field>=<Node>(...),
            <field>=<value>,
        )
        """
        pad = "    " * (indents + 1)
        result = f"{'    ' * indents}{type(self).__name__}("
        for field in self._fields:
            value = getattr(self, field)
            if isinstance(value, SyntaxNode):
                value = value.display(indents + 1).lstrip()
            elif isinstance(value, list):
                inner = "".join(f"\n{node.display(indents + 2)}," for node in value)
                value = f"[{inner}\n{pad}]" if value else "[]"
            else:
                value = repr(value)
            result += f"\n{pad}{field}={value},"
        return result + (f"\n{'    ' * indents})" if self._fields else ")")

    def __repr__(self):
        args = ", ".join(repr(getattr(self, f)) for f in self._fields)
        return f"{type(self).__name__}({args})"

    def __eq__(self, other):
        return type(self) is type(other) and self._values() == other._values()

    __hash__ = None


# ---------- expressions ----------

class Expr(SyntaxNode):
    pass


class Literal(Expr):
    """value is one of None (nil), bool, float or str."""
    _fields = ("value",)
    _visit = "visit_literal"

    def __init__(self, value):
        self.value = value


class Variable(Expr):
    _fields = ("name",)
    _visit = "visit_variable"

    def __init__(self, name):
        self.name = name  # IDENTIFIER token


class Assign(Expr):
    _fields = ("name", "value")
    _visit = "visit_assign"

    def __init__(self, name, value):
        self.name = name
        self.value = value


class Unary(Expr):
    _fields = ("operator", "right")
    _visit = "visit_unary"

    def __init__(self, operator, right):
        self.operator = operator
        self.right = right


class Binary(Expr):
    _fields = ("left", "operator", "right")
    _visit = "visit_binary"

    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right


class Logical(Expr):
    """Like Binary, but operator is "and"/"or" and the right operand may not be evaluated."""
    _fields = ("left", "operator", "right")
    _visit = "visit_logical"

    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right


class Grouping(Expr):
    _fields = ("expression",)
    _visit = "visit_grouping"

    def __init__(self, expression):
        self.expression = expression


# ---------- statements ----------

class Stmt(SyntaxNode):
    pass


class Expression(Stmt):
    _fields = ("expression",)
    _visit = "visit_expression_stmt"

    def __init__(self, expression):
        self.expression = expression


class Print(Stmt):
    _fields = ("expression",)
    _visit = "visit_print_stmt"

    def __init__(self, expression):
        self.expression = expression


class Var(Stmt):
    _fields = ("name", "initializer")
    _visit = "visit_var_stmt"

    def __init__(self, name, initializer=None):
        self.name = name
        self.initializer = initializer if initializer is not None else Literal(None)


class Block(Stmt):
    _fields = ("statements",)
    _visit = "visit_block_stmt"

    def __init__(self, statements):
        self.statements = statements


class If(Stmt):
    _fields = ("condition", "then_branch", "else_branch")
    _visit = "visit_if_stmt"

    def __init__(self, condition, then_branch, else_branch=None):
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch


class While(Stmt):
    _fields = ("condition", "body")
    _visit = "visit_while_stmt"

    def __init__(self, condition, body):
        self.condition = condition
        self.body = body


# ---------- visitors ----------

class ExprVisitor(ABC):

    @abstractmethod
    def visit_literal(self, expr):
        pass

    @abstractmethod
    def visit_variable(self, expr):
        pass

    @abstractmethod
    def visit_assign(self, expr):
        pass

    @abstractmethod
    def visit_unary(self, expr):
        pass

    @abstractmethod
    def visit_binary(self, expr):
        pass

    @abstractmethod
    def visit_logical(self, expr):
        pass

    @abstractmethod
    def visit_grouping(self, expr):
        pass


class StmtVisitor(ABC):

    @abstractmethod
    def visit_expression_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_print_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_var_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_block_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_if_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_while_stmt(self, stmt):
        pass
