"""
Monkey Lexer
============
Tokenizes Monkey source code into a stream of typed tokens.
Handles operators, delimiters, integer/string literals, identifiers and keywords.

The lexer never raises: anything it cannot classify becomes an ILLEGAL token
and is left for the parser to reject.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class TokenType(Enum):
    """All token types in the Monkey language."""
    ILLEGAL     = "ILLEGAL"
    EOF         = "EOF"

    # Identifiers + literals
    IDENT       = "IDENT"      # add, foobar, x, y
    INT         = "INT"        # 1343456
    STRING      = "STRING"     # "foo bar"

    # Operators
    ASSIGN      = "="
    PLUS        = "+"
    MINUS       = "-"
    BANG        = "!"
    ASTERISK    = "*"
    SLASH       = "/"
    LT          = "<"
    GT          = ">"
    EQ          = "=="
    NOT_EQ      = "!="

    # Delimiters
    COMMA       = ","
    SEMICOLON   = ";"
    LPAREN      = "("
    RPAREN      = ")"
    LBRACE      = "{"
    RBRACE      = "}"
    LBRACKET    = "["
    RBRACKET    = "]"

    # Keywords
    FUNCTION    = "FUNCTION"
    LET         = "LET"
    TRUE        = "TRUE"
    FALSE       = "FALSE"
    IF          = "IF"
    ELSE        = "ELSE"
    RETURN      = "RETURN"


@dataclass(frozen=True)
class Token:
    """A single token from the Monkey source. Equality ignores position."""
    type: TokenType
    literal: str
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r}, L{self.line}:{self.col})"


SINGLE_CHAR_TOKENS = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.BANG,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

# Operators whose meaning changes when followed by "="
TWO_CHAR_TOKENS = {
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
}

KEYWORDS = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

WHITESPACE = (" ", "\t", "\r", "\n")


def lookup_ident(word: str) -> TokenType:
    """Classify a word as a keyword or a plain identifier."""
    return KEYWORDS.get(word, TokenType.IDENT)


def _is_letter(ch: str | None) -> bool:
    return ch is not None and (ch.isalpha() or ch == "_")


def _is_digit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


class Lexer:
    """
    Tokenizes Monkey source code.

    Usage:
        lexer = Lexer(source_code)
        token = lexer.next_token()      # one at a time, EOF forever at the end
        tokens = lexer.tokenize()       # or all at once, EOF included
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def _current(self) -> str | None:
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> str | None:
        idx = self.pos + offset
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos] in WHITESPACE:
            self._advance()

    def _read_string(self) -> Token:
        """Read a double-quoted string literal. No escape sequences."""
        start_line, start_col = self.line, self.col
        self._advance()  # consume opening "
        chars = []
        while self.pos < len(self.source):
            ch = self._advance()
            if ch == '"':
                return Token(TokenType.STRING, "".join(chars), start_line, start_col)
            chars.append(ch)
        # Ran off the end: hand the fragment to the parser as ILLEGAL
        return Token(TokenType.ILLEGAL, '"' + "".join(chars), start_line, start_col)

    def _read_number(self) -> Token:
        start_line, start_col = self.line, self.col
        chars = []
        while _is_digit(self._current()):
            chars.append(self._advance())
        return Token(TokenType.INT, "".join(chars), start_line, start_col)

    def _read_identifier(self) -> Token:
        """Read an identifier or keyword."""
        start_line, start_col = self.line, self.col
        chars = []
        while _is_letter(self._current()) or _is_digit(self._current()):
            chars.append(self._advance())
        word = "".join(chars)
        return Token(lookup_ident(word), word, start_line, start_col)

    def next_token(self) -> Token:
        """Return the next token. Returns EOF once the source is exhausted."""
        self._skip_whitespace()

        ch = self._current()
        if ch is None:
            return Token(TokenType.EOF, "", self.line, self.col)

        line, col = self.line, self.col

        pair = ch + (self._peek() or "")
        if pair in TWO_CHAR_TOKENS:
            self._advance()
            self._advance()
            return Token(TWO_CHAR_TOKENS[pair], pair, line, col)

        if ch in SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, col)

        if ch == '"':
            return self._read_string()

        if _is_letter(ch):
            return self._read_identifier()

        if _is_digit(ch):
            return self._read_number()

        self._advance()
        return Token(TokenType.ILLEGAL, ch, line, col)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire remaining source, EOF token included."""
        tokens = list(self)
        tokens.append(Token(TokenType.EOF, "", self.line, self.col))
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens one at a time, stopping before EOF."""
        while True:
            token = self.next_token()
            if token.type == TokenType.EOF:
                return
            yield token
