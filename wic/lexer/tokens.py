"""
Token definitions for the Wi lexer.

Wi has a deliberately tiny token vocabulary:
- End of input
- The two keywords `fn` and `export`
- Literals (identifiers, strings, numbers)
- Any other single character, carried as itself (operators, punctuation)

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """Enumeration of all token types in Wi."""

    # Meta
    EOF = auto()                    # End of input

    # Commands
    FN = auto()                     # fn (function definition)
    EXPORT = auto()                 # export (external declaration)

    # Literals
    IDENTIFIER = auto()             # add, x1, foo
    STRING = auto()                 # "hello"
    NUMBER = auto()                 # 42, 3.14, .5

    # Everything else: + - * / < > ( ) , ; ...
    CHAR = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Line and column are 1-based, offset is the 0-based character offset.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Wi language.

    The literal payload (identifier text, string contents, numeric value or
    the character itself for CHAR tokens) lives in `value`, so it stays
    valid no matter how many tokens are scanned afterwards.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # Payload, None for EOF and keywords
    location: SourceLocation

    def __str__(self) -> str:
        if self.type == TokenType.EOF:
            return "EOF"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    def is_char(self, char: str) -> bool:
        """Check if this is the single-character token `char`."""
        return self.type == TokenType.CHAR and self.value == char

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in {TokenType.STRING, TokenType.NUMBER}

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type in KEYWORDS.values()

    @property
    def is_identifier(self) -> bool:
        """Check if this token is an identifier."""
        return self.type == TokenType.IDENTIFIER


KEYWORDS = {
    "fn": TokenType.FN,
    "export": TokenType.EXPORT,
}
