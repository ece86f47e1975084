"""
Monkey: a tree-walking interpreter for a small, dynamically-typed language.

    source → Lexer → tokens → Parser → Program → Evaluator → Object

Quick start:
    from monkey import parse, evaluate, Environment
    env = Environment()
    evaluate(parse("let add = fn(a, b) { a + b };"), env)
    evaluate(parse("add(2, 3)"), env).inspect()   # '5'
"""
from .lexer import Lexer, Token, TokenType
from .ast_nodes import Node, Statement, Expression, Program
from .parser import Parser, parse
from .environment import Environment
from .objects import Object, ObjectType, TRUE, FALSE, NULL
from .builtins import BUILTINS
from .errors import (
    MonkeyError, ParseError, EvaluatorError, ErrorKind,
    TypeMismatchError, UnknownOperatorError, UnknownNodeError,
    UnsupportedArgumentError, WrongArgumentCountError,
    NotAFunctionError, DivisionByZeroError,
)
from .evaluator import Evaluator, evaluate

__version__ = "0.1.0"
__all__ = [
    "Lexer", "Token", "TokenType",
    "Node", "Statement", "Expression", "Program",
    "Parser", "parse",
    "Environment",
    "Object", "ObjectType", "TRUE", "FALSE", "NULL",
    "BUILTINS",
    "MonkeyError", "ParseError", "EvaluatorError", "ErrorKind",
    "TypeMismatchError", "UnknownOperatorError", "UnknownNodeError",
    "UnsupportedArgumentError", "WrongArgumentCountError",
    "NotAFunctionError", "DivisionByZeroError",
    "Evaluator", "evaluate",
]
