"""
Wi Lexer - turns characters into tokens, one token per call

Pull based: the parser asks for a token, the lexer asks its CharSource for
characters. Between calls the only state kept is the lookahead character
that has been read but not classified yet.

xwest
"""

import logging
import math
from typing import Iterator, List, TextIO, Union

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .source import CharSource
from .errors import (
    LexerError, create_unterminated_string_error,
    create_invalid_number_error, create_unterminated_comment_error
)

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


class Lexer:
    """
    Wi lexical analyzer.

    Call `next_token()` repeatedly; once input is exhausted every call
    returns an EOF token.
    """

    def __init__(self, source: Union[str, TextIO, CharSource], filename: str = "<stdin>"):
        """
        Initialize the lexer.

        Args:
            source: Source text, a readable text stream, or a CharSource
            filename: Name of source file for error reporting
        """
        if isinstance(source, CharSource):
            self.source = source
        else:
            self.source = CharSource(source, filename)
        self.filename = self.source.filename
        self.errors: List[LexerError] = []

        # Lookahead starts as a blank so the first call reads real input.
        self._last_char = ' '
        self._last_location = self.source.location()

    def _read(self):
        """Replace the lookahead with the next character from the source."""
        self._last_location = self.source.location()
        self._last_char = self.source.read()

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Raises:
            LexerError: For an unterminated string or block comment, or a
                malformed number. The offending text is consumed first, so
                the next call resumes after it.
        """
        while True:
            while self._last_char and self._last_char.isspace():
                self._read()

            if self._last_char != '/':
                break

            slash_location = self._last_location
            self._read()

            if self._last_char == '/':
                logger.debug("[Lexer] Skipping line comment at %s", slash_location)
                self._skip_line_comment()
                continue

            if self._last_char == '*':
                logger.debug("[Lexer] Skipping block comment at %s", slash_location)
                self._skip_block_comment(slash_location)
                continue

            # A lone slash is the division operator; the character after it
            # is already sitting in the lookahead.
            return Token(TokenType.CHAR, '/', '/', slash_location)

        start = self._last_location

        if _is_alpha(self._last_char):
            return self._tokenize_identifier_or_keyword(start)

        if self._last_char in DIGITS or self._last_char == '.':
            return self._tokenize_number(start)

        if self._last_char == '"':
            return self._tokenize_string(start)

        if not self._last_char:
            logger.debug("[Lexer] Reading EOF")
            return Token(TokenType.EOF, "", None, start)

        char = self._last_char
        self._read()
        logger.debug("[Lexer] Falling back to character %r", char)
        return Token(TokenType.CHAR, char, char, start)

    def _skip_line_comment(self):
        while self._last_char and self._last_char != '\n':
            self._read()

    def _skip_block_comment(self, start: SourceLocation):
        self._read()  # Skip the '*' of the opening marker
        while True:
            if not self._last_char:
                raise create_unterminated_comment_error(start)
            if self._last_char == '*':
                self._read()
                if self._last_char == '/':
                    self._read()
                    return
                continue
            self._read()

    def _tokenize_identifier_or_keyword(self, start: SourceLocation) -> Token:
        """Tokenize an identifier or one of the keywords."""
        chars = [self._last_char]
        self._read()
        while _is_alnum(self._last_char):
            chars.append(self._last_char)
            self._read()

        lexeme = ''.join(chars)
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None

        logger.debug("[Lexer] Reading identifier %r -> %s", lexeme, token_type.name)
        return Token(token_type, lexeme, value, start)

    def _tokenize_number(self, start: SourceLocation) -> Token:
        """
        Tokenize a numeric literal.

        The whole run of digits and dots is consumed before it is checked,
        so `1.2.3` is reported once and scanning carries on after it.
        """
        chars = []
        second_dot = None
        dots = 0
        while self._last_char in DIGITS or self._last_char == '.':
            if self._last_char == '.':
                dots += 1
                if dots == 2:
                    second_dot = self._last_location
            chars.append(self._last_char)
            self._read()

        lexeme = ''.join(chars)

        if dots > 1:
            raise create_invalid_number_error(
                lexeme, second_dot,
                "A numeric literal may contain at most one '.'"
            )
        if lexeme == '.':
            raise create_invalid_number_error(
                lexeme, start,
                "A numeric literal needs at least one digit"
            )

        value = float(lexeme)
        if math.isinf(value):
            raise create_invalid_number_error(
                lexeme, start,
                "Numeric literal out of range for a double"
            )

        logger.debug("[Lexer] Reading number %r", lexeme)
        return Token(TokenType.NUMBER, lexeme, value, start)

    def _tokenize_string(self, start: SourceLocation) -> Token:
        """Tokenize a string literal. There are no escape sequences."""
        self._read()  # Skip opening quote

        value_parts = []
        while self._last_char != '"':
            if not self._last_char:
                raise create_unterminated_string_error(start)
            value_parts.append(self._last_char)
            self._read()

        self._read()  # Skip closing quote

        value = ''.join(value_parts)
        logger.debug("[Lexer] Reading string %r", value)
        return Token(TokenType.STRING, f'"{value}"', value, start)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF. Lexer errors propagate."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def tokenize(self) -> List[Token]:
        """
        Tokenize the remaining input.

        Lexer errors are collected in `self.errors` and scanning continues
        after the offending text.

        Returns:
            List of tokens ending with the EOF token
        """
        tokens = []
        while True:
            try:
                token = self.next_token()
            except LexerError as e:
                self.errors.append(e)
                continue
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def has_errors(self) -> bool:
        """Check if tokenize() encountered any errors."""
        return len(self.errors) > 0


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath)
