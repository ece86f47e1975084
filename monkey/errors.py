"""
Monkey Errors
=============
The two error channels of the interpreter:

  - ParseError:     the first structural problem found by the parser
  - EvaluatorError: a typed runtime error raised by the evaluator

Both derive from MonkeyError so a driver can catch either with one clause.
Evaluator errors carry structured data (operand types, operator text,
offending value) and compare equal on that data.
"""
from enum import Enum, auto
from typing import Any


class MonkeyError(Exception):
    """Base class for every error the interpreter raises on purpose."""


class ParseError(MonkeyError):
    """The token stream could not be reduced to a program."""

    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.message = message
        self.line = line
        self.col = col
        super().__init__(f"L{line}:{col}: {message}" if line else message)


class ErrorKind(Enum):
    TYPE_MISMATCH        = auto()
    UNKNOWN_OPERATOR     = auto()
    UNKNOWN_NODE         = auto()
    UNSUPPORTED_ARGUMENT = auto()
    WRONG_ARGUMENT_COUNT = auto()
    NOT_A_FUNCTION       = auto()
    DIVISION_BY_ZERO     = auto()


class EvaluatorError(MonkeyError):
    """Runtime error during Monkey evaluation."""
    kind: ErrorKind

    def _fields(self) -> tuple[Any, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvaluatorError):
            return NotImplemented
        return self.kind == other.kind and self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash((self.kind, self._fields()))


class TypeMismatchError(EvaluatorError):
    """An infix operator was applied to operands of different types."""
    kind = ErrorKind.TYPE_MISMATCH

    def __init__(self, left, operator: str, right):
        self.left = left
        self.operator = operator
        self.right = right
        super().__init__(f"type mismatch: {left.value} {operator} {right.value}")

    def _fields(self):
        return (self.left, self.operator, self.right)


class UnknownOperatorError(EvaluatorError):
    """The operator is not defined for the operand type(s).

    `left` is None for prefix operators.
    """
    kind = ErrorKind.UNKNOWN_OPERATOR

    def __init__(self, left, operator: str, right):
        self.left = left
        self.operator = operator
        self.right = right
        if left is None:
            message = f"unknown operator: {operator}{right.value}"
        else:
            message = f"unknown operator: {left.value} {operator} {right.value}"
        super().__init__(message)

    def _fields(self):
        return (self.left, self.operator, self.right)


class UnknownNodeError(EvaluatorError):
    """A node has no evaluation rule, or an identifier is not bound anywhere."""
    kind = ErrorKind.UNKNOWN_NODE

    def __init__(self, node, name: str | None = None):
        self.node = node
        self.name = name
        if name is not None:
            message = f"identifier not found: {name}"
        else:
            message = f"unknown node: {type(node).__name__}"
        super().__init__(message)

    def _fields(self):
        # identifier errors compare by name, so tests need not rebuild the node
        if self.name is not None:
            return (self.name,)
        return (type(self.node).__name__,)


class UnsupportedArgumentError(EvaluatorError):
    """A built-in received an argument of a type it does not accept."""
    kind = ErrorKind.UNSUPPORTED_ARGUMENT

    def __init__(self, name: str, value):
        self.name = name
        self.value = value
        super().__init__(f"argument to `{name}` not supported, got {value.type.value}")

    def _fields(self):
        return (self.name, self.value)


class WrongArgumentCountError(EvaluatorError):
    """A function received other than its required argument count."""
    kind = ErrorKind.WRONG_ARGUMENT_COUNT

    def __init__(self, got: int, want: int):
        self.got = got
        self.want = want
        super().__init__(f"wrong number of arguments. got={got}, want={want}")

    def _fields(self):
        return (self.got, self.want)


class NotAFunctionError(EvaluatorError):
    """A call expression's callee evaluated to a non-callable value."""
    kind = ErrorKind.NOT_A_FUNCTION

    def __init__(self, value):
        self.value = value
        super().__init__(f"not a function: {value.type.value}")

    def _fields(self):
        return (self.value,)


class DivisionByZeroError(EvaluatorError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, left: int):
        self.left = left
        super().__init__(f"division by zero: {left} / 0")

    def _fields(self):
        return (self.left,)
