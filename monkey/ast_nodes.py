"""
Monkey AST
==========
Node types produced by the Parser and walked by the Evaluator.

Nodes are frozen dataclasses: once parsed, a program is never mutated.
Every node exposes:
  - token_literal(): the literal text of the token that started the node
  - description():   the canonical, fully parenthesized re-rendering

The canonical rendering can be fed back to the parser and yields the
same string again.
"""
from dataclasses import dataclass
from typing import ClassVar, Sequence

from .lexer import Token


class Node:
    """Base class for all AST nodes."""
    node_type: ClassVar[str] = "node"

    def token_literal(self) -> str:
        return self.token.literal

    def description(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.description()


class Statement(Node):
    """A node that appears in a statement sequence."""


class Expression(Node):
    """A node that produces a value."""


def join_statements(statements: Sequence[Statement]) -> str:
    """Render a statement sequence so it parses back to the same statements.

    Statements that already end in ';' (let, return) are followed by a space;
    bare expression statements need an explicit '; ' separator.
    """
    parts = []
    for i, stmt in enumerate(statements):
        text = stmt.description()
        if i < len(statements) - 1:
            text += " " if text.endswith(";") else "; "
        parts.append(text)
    return "".join(parts)


# ─────────────────────────────────────────────────────────────
#  Statements
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Program(Statement):
    """Root node containing all top-level statements."""
    statements: tuple[Statement, ...] = ()
    node_type: ClassVar[str] = "program"

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def description(self) -> str:
        return join_statements(self.statements)


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str
    node_type: ClassVar[str] = "identifier"

    def description(self) -> str:
        return self.value


@dataclass(frozen=True)
class LetStatement(Statement):
    """let <name> = <value>;"""
    token: Token
    name: Identifier
    value: Expression
    node_type: ClassVar[str] = "let_statement"

    def description(self) -> str:
        return f"{self.token_literal()} {self.name.description()} = {self.value.description()};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """return <value>;"""
    token: Token
    value: Expression
    node_type: ClassVar[str] = "return_statement"

    def description(self) -> str:
        return f"{self.token_literal()} {self.value.description()};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """A bare expression used as a statement: `x + 10;`."""
    token: Token
    expression: Expression
    node_type: ClassVar[str] = "expression_statement"

    def description(self) -> str:
        return self.expression.description()


@dataclass(frozen=True)
class BlockStatement(Statement):
    """A brace-delimited statement sequence: `{ ... }`."""
    token: Token
    statements: tuple[Statement, ...] = ()
    node_type: ClassVar[str] = "block_statement"

    def description(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + join_statements(self.statements) + " }"


# ─────────────────────────────────────────────────────────────
#  Literals
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int
    node_type: ClassVar[str] = "integer_literal"

    def description(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class Boolean(Expression):
    token: Token
    value: bool
    node_type: ClassVar[str] = "boolean"

    def description(self) -> str:
        return self.token.literal


@dataclass(frozen=True)
class StringLiteral(Expression):
    token: Token
    value: str
    node_type: ClassVar[str] = "string_literal"

    def description(self) -> str:
        return f'"{self.value}"'


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    """[a, b, c]"""
    token: Token
    elements: tuple[Expression, ...] = ()
    node_type: ClassVar[str] = "array_literal"

    def description(self) -> str:
        return "[" + ", ".join(el.description() for el in self.elements) + "]"


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    """fn(<parameters>) <body>"""
    token: Token
    parameters: tuple[Identifier, ...]
    body: BlockStatement
    node_type: ClassVar[str] = "function_literal"

    def description(self) -> str:
        params = ", ".join(p.description() for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body.description()}"


# ─────────────────────────────────────────────────────────────
#  Operators, conditionals, calls
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PrefixExpression(Expression):
    """<operator><right>: `-5`, `!ok`."""
    token: Token
    operator: str
    right: Expression
    node_type: ClassVar[str] = "prefix_expression"

    def description(self) -> str:
        return f"({self.operator}{self.right.description()})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    """<left> <operator> <right>: `5 * 5`."""
    token: Token
    left: Expression
    operator: str
    right: Expression
    node_type: ClassVar[str] = "infix_expression"

    def description(self) -> str:
        return f"({self.left.description()} {self.operator} {self.right.description()})"


@dataclass(frozen=True)
class IfExpression(Expression):
    """if (<condition>) <consequence> else <alternative>"""
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None
    node_type: ClassVar[str] = "if_expression"

    def description(self) -> str:
        text = f"if ({self.condition.description()}) {self.consequence.description()}"
        if self.alternative is not None:
            text += f" else {self.alternative.description()}"
        return text


@dataclass(frozen=True)
class CallExpression(Expression):
    """<function>(<arguments>)"""
    token: Token  # the '(' token
    function: Expression
    arguments: tuple[Expression, ...] = ()
    node_type: ClassVar[str] = "call_expression"

    def description(self) -> str:
        args = ", ".join(a.description() for a in self.arguments)
        return f"{self.function.description()}({args})"


@dataclass(frozen=True)
class IndexExpression(Expression):
    """<left>[<index>]"""
    token: Token  # the '[' token
    left: Expression
    index: Expression
    node_type: ClassVar[str] = "index_expression"

    def description(self) -> str:
        return f"({self.left.description()}[{self.index.description()}])"
