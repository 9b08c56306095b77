"""
Wi Lexer Package

Implements a pull-based lexical analyzer for the Wi language: one token per
call, a single character of lookahead, and no buffering beyond that.

Key Features:
- Line (`//`) and block (`/* */`) comments
- `fn` / `export` keywords, identifiers, numbers and string literals
- Every other character passed through as its own token
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation
from .source import CharSource
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "CharSource",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
