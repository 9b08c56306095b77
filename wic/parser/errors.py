"""
Error handling for the Wi parser.

Syntax errors carry the offending token and a Diagnostic so callers can
print them and decide how to recover.

Author: xwest
"""

from typing import Optional

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
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
        self.token = token

    def __str__(self) -> str:
        return str(self.diagnostic)


# Code -> message template; `found` is filled in by describe_token()
PARSER_ERROR_CODES = {
    "P001": "Unexpected token {found} in expression",
    "P002": "Expected ')', found {found}",
    "P003": "Expected ')' or ',' in argument list, found {found}",
    "P004": "Expected {expected} in prototype, found {found}",
    "P005": "Expression nested more than {limit} levels deep, found {found}",
}


def describe_token(token: Token) -> str:
    """Human readable name of a token for error messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type == TokenType.CHAR:
        return f"'{token.value}'"
    return f"{token.type.name.lower()} '{token.lexeme}'"


def _create_error(code: str, found: Token, help_text: str, **details) -> ParseError:
    return ParseError(
        message=PARSER_ERROR_CODES[code].format(found=describe_token(found), **details),
        location=found.location,
        token=found,
        code=code,
        help_text=help_text
    )


def create_unexpected_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return _create_error(
        "P001", found,
        "An expression starts with a number, a string, an identifier or '('."
    )


def create_missing_paren_error(found: Token) -> ParseError:
    """Create an error for a parenthesized expression without its ')'."""
    return _create_error("P002", found, "Add a closing parenthesis ')'")


def create_argument_list_error(found: Token) -> ParseError:
    """Create an error for a call argument not followed by ',' or ')'."""
    return _create_error("P003", found, "Separate call arguments with ','")


def create_prototype_error(expected: str, found: Token) -> ParseError:
    """Create an error for a malformed function prototype."""
    return _create_error(
        "P004", found,
        "A prototype looks like: name(param1 param2)",
        expected=expected
    )


def create_nesting_error(limit: int, found: Token) -> ParseError:
    """Create an error for parentheses or calls nested past the parser's limit."""
    return _create_error(
        "P005", found,
        "Split the expression up or raise the parser's max_depth.",
        limit=limit
    )
