"""
Error handling for the Wi lexer.

Lexical errors carry a Diagnostic with the source location of the offending
lexeme so the driver can print it and keep going.

Author: xwest
"""

from typing import Optional
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """A single error report with its location."""
    message: str
    location: SourceLocation
    severity: str = "error"  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}"

        if self.help_text:
            result += f"\n  help: {self.help_text}"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer cannot produce a token.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text
        )

    def __str__(self) -> str:
        return str(self.diagnostic)


# Code -> message template
ERROR_CODES = {
    "L001": "Unterminated string literal",
    "L002": "Malformed numeric literal: '{lexeme}'",
    "L003": "Unterminated block comment",
}


def _create_error(code: str, location: SourceLocation, help_text: str, **details) -> LexerError:
    return LexerError(
        message=ERROR_CODES[code].format(**details),
        location=location,
        code=code,
        help_text=help_text
    )


def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    """Create an error for a string literal that runs into end of input."""
    return _create_error(
        "L001", location,
        'String literals must be closed with a matching " quote.'
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation, reason: str) -> LexerError:
    """Create an error for a malformed numeric literal."""
    return _create_error("L002", location, reason, lexeme=lexeme)


def create_unterminated_comment_error(location: SourceLocation) -> LexerError:
    """Create an error for a block comment that is never closed."""
    return _create_error(
        "L003", location,
        "Block comments must be closed with '*/'."
    )
