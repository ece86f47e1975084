"""
Monkey Evaluator
================
Tree-walking evaluator for Monkey programs.

Walks the AST against an Environment and returns a runtime Object. Any
semantic error raises an EvaluatorError subclass and aborts the rest of the
evaluation; there are no partial results.

`return` is carried upward as a ReturnSignal through nested blocks and any
enclosing expression (operands, arguments, `let` values), and is unwrapped
at the nearest function-call boundary (or at the program root).
"""
import logging
from typing import Callable, Sequence

from . import ast_nodes as ast
from .builtins import lookup as lookup_builtin
from .environment import Environment
from .errors import (
    TypeMismatchError, UnknownOperatorError, UnknownNodeError,
    WrongArgumentCountError, NotAFunctionError, DivisionByZeroError,
)
from .objects import (
    Object, ObjectType, Integer, String, Array, Function, Builtin,
    ReturnSignal, NULL, native_bool, is_truthy,
)

logger = logging.getLogger(__name__)


def wrap_int64(value: int) -> int:
    """Reduce an unbounded int to signed 64-bit two's complement."""
    return ((value + 2**63) % 2**64) - 2**63


def _truncating_div(left: int, right: int) -> int:
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


INTEGER_OPERATORS: dict[str, Callable[[int, int], object]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _truncating_div,
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
}


class Evaluator:
    """
    Tree-walking evaluator for Monkey programs.

    Usage:
        evaluator = Evaluator()
        result = evaluator.evaluate(program, Environment())
    """

    def __init__(self, output_fn: Callable[[str], None] | None = None):
        self.output_fn = output_fn or print

    def evaluate(self, node: ast.Node, env: Environment) -> Object:
        """Evaluate `node` in `env`. Never returns a ReturnSignal."""
        result = self._eval(node, env)
        if isinstance(result, ReturnSignal):
            return result.value
        return result

    def _eval(self, node: ast.Node, env: Environment) -> Object:
        method = f"_eval_{node.node_type}"
        evaluator = getattr(self, method, None)
        if evaluator is None:
            raise UnknownNodeError(node)
        return evaluator(node, env)

    # ─────────────────────────────────────────────────────────
    #  Program & Statements
    # ─────────────────────────────────────────────────────────

    def _eval_program(self, node: ast.Program, env: Environment) -> Object:
        result: Object = NULL
        for stmt in node.statements:
            result = self._eval(stmt, env)
            if isinstance(result, ReturnSignal):
                return result.value
        return result

    def _eval_block_statement(self, node: ast.BlockStatement, env: Environment) -> Object:
        """Evaluate statements in order. A ReturnSignal skips the rest, still wrapped."""
        result: Object = NULL
        for stmt in node.statements:
            result = self._eval(stmt, env)
            if isinstance(result, ReturnSignal):
                return result
        return result

    def _eval_expression_statement(self, node: ast.ExpressionStatement, env: Environment) -> Object:
        return self._eval(node.expression, env)

    def _eval_return_statement(self, node: ast.ReturnStatement, env: Environment) -> Object:
        value = self._eval(node.value, env)
        if isinstance(value, ReturnSignal):
            return value
        return ReturnSignal(value)

    def _eval_let_statement(self, node: ast.LetStatement, env: Environment) -> Object:
        value = self._eval(node.value, env)
        if isinstance(value, ReturnSignal):
            return value
        env.set(node.name.value, value)
        return NULL

    # ─────────────────────────────────────────────────────────
    #  Literals & Identifiers
    # ─────────────────────────────────────────────────────────

    def _eval_integer_literal(self, node: ast.IntegerLiteral, env: Environment) -> Object:
        return Integer(node.value)

    def _eval_boolean(self, node: ast.Boolean, env: Environment) -> Object:
        return native_bool(node.value)

    def _eval_string_literal(self, node: ast.StringLiteral, env: Environment) -> Object:
        return String(node.value)

    def _eval_array_literal(self, node: ast.ArrayLiteral, env: Environment) -> Object:
        elements = self._eval_expressions(node.elements, env)
        if isinstance(elements, ReturnSignal):
            return elements
        return Array(tuple(elements))

    def _eval_identifier(self, node: ast.Identifier, env: Environment) -> Object:
        value = env.get(node.value)
        if value is not None:
            return value
        builtin = lookup_builtin(node.value)
        if builtin is not None:
            return builtin
        raise UnknownNodeError(node, name=node.value)

    def _eval_function_literal(self, node: ast.FunctionLiteral, env: Environment) -> Object:
        # Capture env by reference: sibling closures see later bindings in it
        return Function(parameters=node.parameters, body=node.body, env=env)

    def _eval_expressions(self, nodes: Sequence[ast.Expression],
                          env: Environment) -> list[Object] | ReturnSignal:
        """Evaluate left to right. A ReturnSignal from any element is returned as is."""
        values = []
        for n in nodes:
            value = self._eval(n, env)
            if isinstance(value, ReturnSignal):
                return value
            values.append(value)
        return values

    # ─────────────────────────────────────────────────────────
    #  Operators
    # ─────────────────────────────────────────────────────────

    def _eval_prefix_expression(self, node: ast.PrefixExpression, env: Environment) -> Object:
        right = self._eval(node.right, env)
        if isinstance(right, ReturnSignal):
            return right

        match node.operator:
            case "!":
                return native_bool(not is_truthy(right))
            case "-":
                if not isinstance(right, Integer):
                    raise UnknownOperatorError(None, "-", right.type)
                return Integer(wrap_int64(-right.value))
            case _:
                raise UnknownOperatorError(None, node.operator, right.type)

    def _eval_infix_expression(self, node: ast.InfixExpression, env: Environment) -> Object:
        left = self._eval(node.left, env)
        if isinstance(left, ReturnSignal):
            return left
        right = self._eval(node.right, env)
        if isinstance(right, ReturnSignal):
            return right
        return self._apply_infix(node.operator, left, right)

    def _apply_infix(self, operator: str, left: Object, right: Object) -> Object:
        if left.type != right.type:
            raise TypeMismatchError(left.type, operator, right.type)

        match left.type:
            case ObjectType.INTEGER:
                return self._integer_infix(operator, left, right)
            case ObjectType.BOOLEAN if operator == "==":
                return native_bool(left.value == right.value)
            case ObjectType.BOOLEAN if operator == "!=":
                return native_bool(left.value != right.value)
            case ObjectType.STRING if operator == "+":
                return String(left.value + right.value)
            case _:
                raise UnknownOperatorError(left.type, operator, right.type)

    def _integer_infix(self, operator: str, left: Integer, right: Integer) -> Object:
        op = INTEGER_OPERATORS.get(operator)
        if op is None:
            raise UnknownOperatorError(left.type, operator, right.type)
        if operator == "/" and right.value == 0:
            raise DivisionByZeroError(left.value)

        result = op(left.value, right.value)
        if isinstance(result, bool):
            return native_bool(result)
        return Integer(wrap_int64(result))

    # ─────────────────────────────────────────────────────────
    #  Conditionals
    # ─────────────────────────────────────────────────────────

    def _eval_if_expression(self, node: ast.IfExpression, env: Environment) -> Object:
        condition = self._eval(node.condition, env)
        if isinstance(condition, ReturnSignal):
            return condition
        if is_truthy(condition):
            return self._eval(node.consequence, env)
        if node.alternative is not None:
            return self._eval(node.alternative, env)
        return NULL

    # ─────────────────────────────────────────────────────────
    #  Calls & Indexing
    # ─────────────────────────────────────────────────────────

    def _eval_call_expression(self, node: ast.CallExpression, env: Environment) -> Object:
        function = self._eval(node.function, env)
        if isinstance(function, ReturnSignal):
            return function
        args = self._eval_expressions(node.arguments, env)
        if isinstance(args, ReturnSignal):
            return args
        return self.apply_function(function, args)

    def apply_function(self, function: Object, args: Sequence[Object]) -> Object:
        """Call a Function or Builtin with already-evaluated arguments."""
        if isinstance(function, Function):
            if len(args) != len(function.parameters):
                raise WrongArgumentCountError(len(args), len(function.parameters))
            logger.debug("call fn/%d", len(args))

            call_env = Environment.enclosed(function.env)
            for param, arg in zip(function.parameters, args):
                call_env.set(param.value, arg)

            result = self._eval(function.body, call_env)
            if isinstance(result, ReturnSignal):
                return result.value
            return result

        if isinstance(function, Builtin):
            if function.arity is not None and len(args) != function.arity:
                raise WrongArgumentCountError(len(args), function.arity)
            logger.debug("call builtin %s/%d", function.name, len(args))
            return function.fn(args, self.output_fn)

        raise NotAFunctionError(function)

    def _eval_index_expression(self, node: ast.IndexExpression, env: Environment) -> Object:
        left = self._eval(node.left, env)
        if isinstance(left, ReturnSignal):
            return left
        index = self._eval(node.index, env)
        if isinstance(index, ReturnSignal):
            return index

        if not isinstance(left, Array) or not isinstance(index, Integer):
            raise UnknownOperatorError(left.type, "[]", index.type)

        if 0 <= index.value < len(left.elements):
            return left.elements[index.value]
        return NULL


def evaluate(program: ast.Program, env: Environment | None = None,
             output_fn: Callable[[str], None] | None = None) -> Object:
    """Evaluate a parsed program. Raises EvaluatorError on semantic errors."""
    if env is None:
        env = Environment()
    return Evaluator(output_fn=output_fn).evaluate(program, env)
