"""
Test suite for the Wi lexer.

Tests cover:
- Keywords, identifiers, numbers, strings and single characters
- Comment and whitespace skipping
- Lexical errors and scanning after them
- Source locations

Author: xwest
"""

import io
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from wic.lexer import Lexer, CharSource, Token, TokenType, LexerError, tokenize_string
from wic.lexer.errors import ERROR_CODES


def scan(source: str):
    """All tokens of `source`, EOF included."""
    return list(Lexer(source, "test.wi"))


def kinds(source: str):
    return [token.type for token in scan(source)]


class TestBasicTokens(unittest.TestCase):
    """Token kinds and payloads."""

    def test_empty_input(self):
        tokens = scan("")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.EOF)

    def test_eof_repeats(self):
        lexer = Lexer("x")
        self.assertEqual(lexer.next_token().type, TokenType.IDENTIFIER)
        for _ in range(3):
            self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_keywords(self):
        self.assertEqual(kinds("fn export"), [TokenType.FN, TokenType.EXPORT, TokenType.EOF])

    def test_keyword_prefixes_are_identifiers(self):
        for text in ["fnx", "f", "exports", "Export", "FN", "exp0rt"]:
            with self.subTest(text=text):
                token = scan(text)[0]
                self.assertEqual(token.type, TokenType.IDENTIFIER)
                self.assertEqual(token.value, text)

    def test_identifiers(self):
        for text in ["x", "foo", "add2", "abc123def"]:
            with self.subTest(text=text):
                tokens = scan(text)
                self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)
                self.assertEqual(tokens[0].value, text)
                self.assertEqual(tokens[1].type, TokenType.EOF)

    def test_identifier_stops_at_underscore(self):
        tokens = scan("a_b")
        self.assertEqual([t.type for t in tokens],
                         [TokenType.IDENTIFIER, TokenType.CHAR, TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(tokens[1].value, "_")

    def test_numbers(self):
        for text in ["0", "42", "3.14", ".5", "1.", "007", "123456789.25"]:
            with self.subTest(text=text):
                token = scan(text)[0]
                self.assertEqual(token.type, TokenType.NUMBER)
                self.assertEqual(token.value, float(text))
                self.assertEqual(token.lexeme, text)

    def test_number_followed_by_identifier(self):
        tokens = scan("2x")
        self.assertEqual(tokens[0].type, TokenType.NUMBER)
        self.assertEqual(tokens[0].value, 2.0)
        self.assertEqual(tokens[1].value, "x")

    def test_string(self):
        token = scan('"hello world"')[0]
        self.assertEqual(token.type, TokenType.STRING)
        self.assertEqual(token.value, "hello world")
        self.assertEqual(token.lexeme, '"hello world"')

    def test_string_has_no_escapes(self):
        token = scan(r'"a\nb"')[0]
        self.assertEqual(token.value, "a\\nb")

    def test_string_may_span_lines(self):
        token = scan('"a\nb"')[0]
        self.assertEqual(token.value, "a\nb")

    def test_empty_string(self):
        token = scan('""')[0]
        self.assertEqual(token.type, TokenType.STRING)
        self.assertEqual(token.value, "")

    def test_single_characters(self):
        tokens = scan("+-*<>(),;")
        self.assertTrue(all(t.type == TokenType.CHAR for t in tokens[:-1]))
        self.assertEqual([t.value for t in tokens[:-1]], list("+-*<>(),;"))

    def test_slash_is_an_operator(self):
        tokens = scan("a / b")
        self.assertTrue(tokens[1].is_char("/"))
        self.assertEqual(tokens[2].value, "b")

    def test_slash_directly_before_token(self):
        tokens = scan("a/b")
        self.assertEqual([t.lexeme for t in tokens[:-1]], ["a", "/", "b"])

    def test_slash_at_end_of_input(self):
        self.assertEqual(kinds("/"), [TokenType.CHAR, TokenType.EOF])

    def test_mixed(self):
        tokens = scan("fn add(a b) a+b")
        self.assertEqual(
            [t.lexeme for t in tokens],
            ["fn", "add", "(", "a", "b", ")", "a", "+", "b", ""]
        )


class TestCommentsAndWhitespace(unittest.TestCase):
    """Comments and whitespace never produce tokens."""

    def test_line_comment(self):
        self.assertEqual(kinds("// nothing here\nx"), [TokenType.IDENTIFIER, TokenType.EOF])

    def test_line_comment_at_end_of_input(self):
        self.assertEqual(kinds("x // trailing"), [TokenType.IDENTIFIER, TokenType.EOF])

    def test_block_comment(self):
        self.assertEqual(kinds("/* a\n b */ 1"), [TokenType.NUMBER, TokenType.EOF])

    def test_block_comment_with_stars(self):
        self.assertEqual(kinds("/** x **/ y"), [TokenType.IDENTIFIER, TokenType.EOF])

    def test_block_comment_slash_star_slash_is_open(self):
        with self.assertRaises(LexerError):
            scan("/*/ x")

    def test_comment_after_whitespace(self):
        self.assertEqual(kinds("   // c\n  /* d */  z"), [TokenType.IDENTIFIER, TokenType.EOF])

    def test_comment_between_tokens(self):
        with_comment = [(t.type, t.value) for t in scan("fn /* c */ id()")]
        without = [(t.type, t.value) for t in scan("fn id()")]
        self.assertEqual(with_comment, without)

    def test_consecutive_comments(self):
        self.assertEqual(kinds("//a\n//b\n/*c*//*d*/"), [TokenType.EOF])

    def test_whitespace_kinds(self):
        self.assertEqual(kinds(" \t\r\n\f\v x \n"), [TokenType.IDENTIFIER, TokenType.EOF])


class TestLexerErrors(unittest.TestCase):
    """Lexical errors and recovery."""

    def test_unterminated_string(self):
        with self.assertRaises(LexerError) as cm:
            scan('"never closed')
        self.assertEqual(cm.exception.diagnostic.code, "L001")
        self.assertEqual(cm.exception.location.column, 1)

    def test_unterminated_block_comment(self):
        with self.assertRaises(LexerError) as cm:
            scan("x /* never closed")
        self.assertEqual(cm.exception.diagnostic.code, "L003")
        self.assertEqual(cm.exception.location.column, 3)

    def test_multiple_dots(self):
        with self.assertRaises(LexerError) as cm:
            scan("1.2.3")
        self.assertEqual(cm.exception.diagnostic.code, "L002")
        self.assertEqual(cm.exception.message, ERROR_CODES["L002"].format(lexeme="1.2.3"))
        # Points at the second dot
        self.assertEqual(cm.exception.location.column, 4)

    def test_lone_dot(self):
        with self.assertRaises(LexerError) as cm:
            scan(". x")
        self.assertEqual(cm.exception.diagnostic.code, "L002")

    def test_number_out_of_range(self):
        with self.assertRaises(LexerError) as cm:
            scan("x + 1" + "0" * 400)
        self.assertEqual(cm.exception.diagnostic.code, "L002")
        self.assertIn("out of range", cm.exception.diagnostic.help_text)
        self.assertEqual(cm.exception.location.column, 5)

    def test_largest_double_is_accepted(self):
        literal = str(int(1.7976931348623157e308))
        self.assertEqual(scan(literal)[0].value, 1.7976931348623157e308)

    def test_scanning_resumes_after_bad_number(self):
        lexer = Lexer("1.2.3 foo")
        with self.assertRaises(LexerError):
            lexer.next_token()
        token = lexer.next_token()
        self.assertEqual(token.type, TokenType.IDENTIFIER)
        self.assertEqual(token.value, "foo")

    def test_tokenize_collects_errors(self):
        lexer = Lexer('1..2 x "open')
        tokens = lexer.tokenize()
        self.assertTrue(lexer.has_errors())
        self.assertEqual([e.diagnostic.code for e in lexer.errors], ["L002", "L001"])
        self.assertEqual([t.type for t in tokens], [TokenType.IDENTIFIER, TokenType.EOF])

    def test_tokenize_string_raises_first_error(self):
        with self.assertRaises(LexerError):
            tokenize_string("a 1.2.3")

    def test_error_message_includes_location(self):
        with self.assertRaises(LexerError) as cm:
            scan('\n  "abc')
        self.assertIn("test.wi:2:3", str(cm.exception))


class TestSourceLocations(unittest.TestCase):
    """Tokens know where they start."""

    def test_line_and_column(self):
        tokens = scan("fn f()\n  x + 1")
        locations = [(t.location.line, t.location.column) for t in tokens]
        self.assertEqual(locations[:4], [(1, 1), (1, 4), (1, 5), (1, 6)])
        self.assertEqual(locations[4:7], [(2, 3), (2, 5), (2, 7)])

    def test_offset(self):
        tokens = scan("ab  cd")
        self.assertEqual(tokens[1].location.offset, 4)

    def test_slash_location(self):
        tokens = scan("a /b")
        self.assertEqual(tokens[1].location.column, 3)
        self.assertEqual(tokens[2].location.column, 4)

    def test_filename(self):
        self.assertEqual(scan("x")[0].location.filename, "test.wi")


class TestCharSource(unittest.TestCase):
    """Character sources over strings and streams."""

    def test_stream_source(self):
        lexer = Lexer(io.StringIO("fn f(x) x*2"), "stream.wi")
        tokens = lexer.tokenize()
        self.assertEqual(len(tokens), 9)
        self.assertEqual(tokens[-2].value, 2.0)
        self.assertEqual(tokens[0].location.filename, "stream.wi")

    def test_read_until_exhausted(self):
        source = CharSource("ab")
        self.assertEqual([source.read() for _ in range(4)], ["a", "b", "", ""])
        self.assertEqual(source.location().offset, 2)

    def test_location_tracks_newlines(self):
        source = CharSource("a\nb")
        source.read()
        source.read()
        location = source.location()
        self.assertEqual((location.line, location.column, location.offset), (2, 1, 2))

    def test_lexer_accepts_char_source(self):
        lexer = Lexer(CharSource("x", "given.wi"))
        self.assertEqual(lexer.filename, "given.wi")
        self.assertEqual(lexer.next_token().value, "x")


class TestToken(unittest.TestCase):
    """Token helpers."""

    def test_is_char(self):
        token = scan("(")[0]
        self.assertTrue(token.is_char("("))
        self.assertFalse(token.is_char(")"))

    def test_keyword_and_literal_flags(self):
        fn, name, number = scan("fn f 1")[:3]
        self.assertTrue(fn.is_keyword)
        self.assertTrue(name.is_identifier)
        self.assertTrue(number.is_literal)
        self.assertFalse(name.is_keyword)

    def test_tokens_are_immutable(self):
        token = scan("x")[0]
        self.assertIsInstance(token, Token)
        with self.assertRaises(Exception):
            token.value = "y"


if __name__ == '__main__':
    unittest.main()
