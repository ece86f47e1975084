"""
Monkey Lexer Tests
==================
Uses Python's built-in unittest; run with pytest or unittest.

Usage:
    python -m pytest tests/test_lexer.py -v
    python -m unittest tests.test_lexer -v
"""
import sys
import os
import unittest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from monkey.lexer import Lexer, Token, TokenType, lookup_ident


def _pairs(source: str) -> list[tuple[TokenType, str]]:
    return [(t.type, t.literal) for t in Lexer(source).tokenize()]


class TestLexer(unittest.TestCase):

    def test_single_char_tokens(self):
        self.assertEqual(_pairs("=+(){},;[]"), [
            (TokenType.ASSIGN, "="),
            (TokenType.PLUS, "+"),
            (TokenType.LPAREN, "("),
            (TokenType.RPAREN, ")"),
            (TokenType.LBRACE, "{"),
            (TokenType.RBRACE, "}"),
            (TokenType.COMMA, ","),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LBRACKET, "["),
            (TokenType.RBRACKET, "]"),
            (TokenType.EOF, ""),
        ])

    def test_program_tokens(self):
        source = (
            "let five = 5;\n"
            "let add = fn(x, y) {\n"
            "  x + y;\n"
            "};\n"
            "!-/*5;\n"
            "5 < 10 > 5;\n"
        )
        self.assertEqual(_pairs(source), [
            (TokenType.LET, "let"),
            (TokenType.IDENT, "five"),
            (TokenType.ASSIGN, "="),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.LET, "let"),
            (TokenType.IDENT, "add"),
            (TokenType.ASSIGN, "="),
            (TokenType.FUNCTION, "fn"),
            (TokenType.LPAREN, "("),
            (TokenType.IDENT, "x"),
            (TokenType.COMMA, ","),
            (TokenType.IDENT, "y"),
            (TokenType.RPAREN, ")"),
            (TokenType.LBRACE, "{"),
            (TokenType.IDENT, "x"),
            (TokenType.PLUS, "+"),
            (TokenType.IDENT, "y"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.RBRACE, "}"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.BANG, "!"),
            (TokenType.MINUS, "-"),
            (TokenType.SLASH, "/"),
            (TokenType.ASTERISK, "*"),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "5"),
            (TokenType.LT, "<"),
            (TokenType.INT, "10"),
            (TokenType.GT, ">"),
            (TokenType.INT, "5"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.EOF, ""),
        ])

    def test_keywords(self):
        tokens = _pairs("if else return true false fn let")
        self.assertEqual([t for t, _ in tokens], [
            TokenType.IF, TokenType.ELSE, TokenType.RETURN,
            TokenType.TRUE, TokenType.FALSE, TokenType.FUNCTION,
            TokenType.LET, TokenType.EOF,
        ])

    def test_identifier_not_keyword(self):
        self.assertEqual(lookup_ident("lettuce"), TokenType.IDENT)
        self.assertEqual(_pairs("fnord")[0], (TokenType.IDENT, "fnord"))

    def test_snake_case_identifier_with_digits(self):
        self.assertEqual(_pairs("_my_var2")[0], (TokenType.IDENT, "_my_var2"))

    def test_two_char_operators(self):
        self.assertEqual(_pairs("10 == 10; 10 != 9;")[:7], [
            (TokenType.INT, "10"),
            (TokenType.EQ, "=="),
            (TokenType.INT, "10"),
            (TokenType.SEMICOLON, ";"),
            (TokenType.INT, "10"),
            (TokenType.NOT_EQ, "!="),
            (TokenType.INT, "9"),
        ])

    def test_bang_and_assign_alone(self):
        self.assertEqual(_pairs("! =")[:2], [
            (TokenType.BANG, "!"),
            (TokenType.ASSIGN, "="),
        ])

    def test_string_literals(self):
        self.assertEqual(_pairs('"foobar" "foo bar"')[:2], [
            (TokenType.STRING, "foobar"),
            (TokenType.STRING, "foo bar"),
        ])

    def test_string_has_no_escapes(self):
        self.assertEqual(_pairs(r'"a\nb"')[0], (TokenType.STRING, r"a\nb"))

    def test_unterminated_string_is_illegal(self):
        self.assertEqual(_pairs('"oops')[0], (TokenType.ILLEGAL, '"oops'))

    def test_unknown_character_is_illegal(self):
        tokens = _pairs("5 @ 5")
        self.assertEqual(tokens[1], (TokenType.ILLEGAL, "@"))
        self.assertEqual(tokens[2], (TokenType.INT, "5"))

    def test_eof_repeats(self):
        lexer = Lexer("x")
        self.assertEqual(lexer.next_token().type, TokenType.IDENT)
        self.assertEqual(lexer.next_token().type, TokenType.EOF)
        self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_positions(self):
        tokens = Lexer("let x = 5;\n  x").tokenize()
        self.assertEqual((tokens[0].line, tokens[0].col), (1, 1))
        self.assertEqual((tokens[3].line, tokens[3].col), (1, 9))
        self.assertEqual((tokens[5].line, tokens[5].col), (2, 3))

    def test_iteration_excludes_eof(self):
        tokens = list(Lexer("1 + 2"))
        self.assertEqual(len(tokens), 3)
        self.assertNotIn(TokenType.EOF, [t.type for t in tokens])

    def test_token_equality_ignores_position(self):
        self.assertEqual(Token(TokenType.IDENT, "x", 1, 1), Token(TokenType.IDENT, "x", 3, 7))
        self.assertNotEqual(Token(TokenType.IDENT, "x"), Token(TokenType.IDENT, "y"))
        self.assertEqual(Lexer("let").next_token(), Token(TokenType.LET, "let"))

    def test_tokens_are_immutable_values(self):
        self.assertEqual(Token(TokenType.INT, "5", 1, 1), Token(TokenType.INT, "5", 1, 1))
        with self.assertRaises(AttributeError):
            Token(TokenType.INT, "5").literal = "6"


if __name__ == "__main__":
    unittest.main(verbosity=2)
