"""
Monkey Parser
=============
Recursive-descent statement parser with Pratt-style (operator-precedence)
expression parsing. Builds a Program AST from the tokens produced by the Lexer.

Supports:
  - let / return / expression statements
  - prefix (!, -) and infix (+ - * / < > == !=) operators
  - grouped expressions, if/else, function literals, calls
  - array literals and index expressions

Parsing is fail-fast: the first structural problem raises ParseError and no
partial program is returned.
"""
import logging
from enum import IntEnum
from typing import Callable

from .ast_nodes import (
    Program, Statement, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Expression, Identifier, IntegerLiteral, Boolean,
    StringLiteral, ArrayLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression, IndexExpression,
)
from .errors import ParseError
from .lexer import Lexer, Token, TokenType

logger = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    LOWEST      = 1
    EQUALS      = 2   # ==
    LESSGREATER = 3   # > or <
    SUM         = 4   # +
    PRODUCT     = 5   # *
    PREFIX      = 6   # -X or !X
    CALL        = 7   # myFunction(X), array[X]


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.CALL,
}

PrefixParseFn = Callable[[], Expression]
InfixParseFn = Callable[[Expression], Expression]


class Parser:
    """
    Pratt parser for Monkey source.

    Usage:
        parser = Parser(Lexer(source))
        program = parser.parse()
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self._parse_identifier,
            TokenType.INT: self._parse_integer_literal,
            TokenType.STRING: self._parse_string_literal,
            TokenType.TRUE: self._parse_boolean,
            TokenType.FALSE: self._parse_boolean,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.LBRACKET: self._parse_array_literal,
            TokenType.IF: self._parse_if_expression,
            TokenType.FUNCTION: self._parse_function_literal,
        }
        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {
            TokenType.PLUS: self._parse_infix_expression,
            TokenType.MINUS: self._parse_infix_expression,
            TokenType.ASTERISK: self._parse_infix_expression,
            TokenType.SLASH: self._parse_infix_expression,
            TokenType.EQ: self._parse_infix_expression,
            TokenType.NOT_EQ: self._parse_infix_expression,
            TokenType.LT: self._parse_infix_expression,
            TokenType.GT: self._parse_infix_expression,
            TokenType.LPAREN: self._parse_call_expression,
            TokenType.LBRACKET: self._parse_index_expression,
        }

        # Read two tokens so _current and _peek are both set
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    # ─────────────────────────────────────────────────────────
    #  Token Cursor
    # ─────────────────────────────────────────────────────────

    def _advance(self) -> Token:
        token = self.cur_token
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()
        return token

    def _current_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type == token_type

    def _peek_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type == token_type

    def _expect_peek(self, token_type: TokenType):
        """Advance onto the next token if it has the expected type, else fail."""
        if not self._peek_is(token_type):
            token = self.peek_token
            raise ParseError(
                f"expected next token to be {token_type.name}, "
                f"got {token.type.name} instead",
                token.line, token.col,
            )
        self._advance()

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # ─────────────────────────────────────────────────────────
    #  Top-Level Parsing
    # ─────────────────────────────────────────────────────────

    def parse(self) -> Program:
        """Parse the token stream into a Program."""
        statements = []
        while not self._current_is(TokenType.EOF):
            statements.append(self._parse_statement())
            self._advance()

        logger.debug("parsed %d statement(s)", len(statements))
        return Program(statements=tuple(statements))

    def _parse_statement(self) -> Statement:
        if self._current_is(TokenType.LET):
            return self._parse_let_statement()
        if self._current_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _skip_semicolon(self):
        if self._peek_is(TokenType.SEMICOLON):
            self._advance()

    def _parse_let_statement(self) -> LetStatement:
        """Parse: let <identifier> = <expression>;"""
        token = self.cur_token

        self._expect_peek(TokenType.IDENT)
        name = Identifier(token=self.cur_token, value=self.cur_token.literal)

        self._expect_peek(TokenType.ASSIGN)
        self._advance()

        value = self._parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return LetStatement(token=token, name=name, value=value)

    def _parse_return_statement(self) -> ReturnStatement:
        """Parse: return <expression>;"""
        token = self._advance()
        value = self._parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return ReturnStatement(token=token, value=value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self._parse_expression(Precedence.LOWEST)
        self._skip_semicolon()
        return ExpressionStatement(token=token, expression=expression)

    def _parse_block_statement(self) -> BlockStatement:
        """Parse: { <statements> }. Starts on '{', ends on '}'."""
        token = self._advance()  # consume {
        statements = []

        while not self._current_is(TokenType.RBRACE):
            if self._current_is(TokenType.EOF):
                raise ParseError(
                    "expected next token to be RBRACE, got EOF instead",
                    self.cur_token.line, self.cur_token.col,
                )
            statements.append(self._parse_statement())
            self._advance()

        return BlockStatement(token=token, statements=tuple(statements))

    # ─────────────────────────────────────────────────────────
    #  Expressions (Pratt)
    # ─────────────────────────────────────────────────────────

    def _parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            token = self.cur_token
            raise ParseError(
                f"no prefix parse function for {token.type.name} found",
                token.line, token.col,
            )
        left = prefix()

        while (not self._peek_is(TokenType.SEMICOLON)
               and precedence < self._peek_precedence()):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self._advance()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Identifier:
        return Identifier(token=self.cur_token, value=self.cur_token.literal)

    def _parse_integer_literal(self) -> IntegerLiteral:
        token = self.cur_token
        value = int(token.literal)
        if value > INT64_MAX:
            raise ParseError(
                f"could not parse {token.literal} as integer", token.line, token.col,
            )
        return IntegerLiteral(token=token, value=value)

    def _parse_string_literal(self) -> StringLiteral:
        return StringLiteral(token=self.cur_token, value=self.cur_token.literal)

    def _parse_boolean(self) -> Boolean:
        return Boolean(token=self.cur_token, value=self._current_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> PrefixExpression:
        token = self._advance()
        right = self._parse_expression(Precedence.PREFIX)
        return PrefixExpression(token=token, operator=token.literal, right=right)

    def _parse_infix_expression(self, left: Expression) -> InfixExpression:
        token = self.cur_token
        precedence = self._current_precedence()
        self._advance()
        right = self._parse_expression(precedence)
        return InfixExpression(token=token, left=left, operator=token.literal, right=right)

    def _parse_grouped_expression(self) -> Expression:
        """Parse a parenthesized expression."""
        self._advance()  # consume (
        inner = self._parse_expression(Precedence.LOWEST)
        self._expect_peek(TokenType.RPAREN)
        return inner

    def _parse_if_expression(self) -> IfExpression:
        """Parse: if (<condition>) { ... } else { ... }"""
        token = self.cur_token

        self._expect_peek(TokenType.LPAREN)
        self._advance()
        condition = self._parse_expression(Precedence.LOWEST)
        self._expect_peek(TokenType.RPAREN)

        self._expect_peek(TokenType.LBRACE)
        consequence = self._parse_block_statement()

        alternative = None
        if self._peek_is(TokenType.ELSE):
            self._advance()
            self._expect_peek(TokenType.LBRACE)
            alternative = self._parse_block_statement()

        return IfExpression(
            token=token, condition=condition,
            consequence=consequence, alternative=alternative,
        )

    def _parse_function_literal(self) -> FunctionLiteral:
        """Parse: fn(<identifier>, ...) { ... }"""
        token = self.cur_token
        self._expect_peek(TokenType.LPAREN)
        parameters = self._parse_function_parameters()
        self._expect_peek(TokenType.LBRACE)
        body = self._parse_block_statement()
        return FunctionLiteral(token=token, parameters=parameters, body=body)

    def _parse_function_parameters(self) -> tuple[Identifier, ...]:
        """Parse a comma-separated identifier list. Starts on '(', ends on ')'."""
        parameters = []

        if self._peek_is(TokenType.RPAREN):
            self._advance()
            return ()

        self._expect_peek(TokenType.IDENT)
        parameters.append(Identifier(token=self.cur_token, value=self.cur_token.literal))

        while self._peek_is(TokenType.COMMA):
            self._advance()
            self._expect_peek(TokenType.IDENT)
            parameters.append(Identifier(token=self.cur_token, value=self.cur_token.literal))

        self._expect_peek(TokenType.RPAREN)
        return tuple(parameters)

    def _parse_expression_list(self, end: TokenType) -> tuple[Expression, ...]:
        """Parse comma-separated expressions up to `end`. Starts on the opener."""
        items = []

        if self._peek_is(end):
            self._advance()
            return ()

        self._advance()
        items.append(self._parse_expression(Precedence.LOWEST))

        while self._peek_is(TokenType.COMMA):
            self._advance()
            self._advance()
            items.append(self._parse_expression(Precedence.LOWEST))

        self._expect_peek(end)
        return tuple(items)

    def _parse_call_expression(self, function: Expression) -> CallExpression:
        token = self.cur_token
        arguments = self._parse_expression_list(TokenType.RPAREN)
        return CallExpression(token=token, function=function, arguments=arguments)

    def _parse_array_literal(self) -> ArrayLiteral:
        token = self.cur_token
        elements = self._parse_expression_list(TokenType.RBRACKET)
        return ArrayLiteral(token=token, elements=elements)

    def _parse_index_expression(self, left: Expression) -> IndexExpression:
        token = self.cur_token
        self._advance()
        index = self._parse_expression(Precedence.LOWEST)
        self._expect_peek(TokenType.RBRACKET)
        return IndexExpression(token=token, left=left, index=index)


def parse(source: str) -> Program:
    """Lex and parse `source` into a Program. Raises ParseError."""
    return Parser(Lexer(source)).parse()
