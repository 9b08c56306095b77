"""
Wi Parser Implementation

Recursive descent for primary expressions and precedence climbing for
binary operators. Tokens are pulled from the lexer one at a time; the only
state kept is the current (first unconsumed) token.

Author: xwest
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional, Union
from dataclasses import dataclass

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from ..lexer.errors import LexerError
from .ast_nodes import (
    Node, Numerical, StringLiteral, Variable, Binary, Call,
    Prototype, Function, anonymous_function
)
from .errors import (
    ParseError, create_unexpected_token_error, create_missing_paren_error,
    create_argument_list_error, create_prototype_error, create_nesting_error
)

logger = logging.getLogger(__name__)


# Higher binds tighter. Characters not listed here are not binary operators.
DEFAULT_BINOP_PRECEDENCE: Dict[str, int] = {
    '<': 10,
    '>': 10,
    '+': 20,
    '-': 20,
    '*': 40,
    '/': 40,
}

# Each level of parentheses or call arguments costs three Python frames.
DEFAULT_MAX_DEPTH = 200


@dataclass
class ParseResult:
    """Outcome of parsing one top-level construct."""
    kind: str  # "definition", "export", "expression"
    value: Optional[Union[Function, Prototype]] = None
    error: Optional[Union[LexerError, ParseError]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def has_errors(self) -> bool:
        """Check if parsing failed."""
        return self.error is not None

    def unwrap(self) -> Union[Function, Prototype]:
        """Return the parsed value, or raise the error that stopped parsing."""
        if self.error is not None:
            raise self.error
        return self.value


class Parser:
    """
    Wi parser.

    The public `parse_*` methods never raise for bad input: they return a
    ParseResult holding either the parsed construct or the LexerError /
    ParseError that aborted it. The parser does not resynchronize after a
    failure; that is left to the caller.
    """

    def __init__(self, lexer: Lexer, binop_precedence: Optional[Mapping[str, int]] = None,
                 max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize parser over a lexer.

        Args:
            lexer: Token supply, read one token at a time
            binop_precedence: Operator character -> precedence, replacing
                the default table
            max_depth: How deeply parentheses and calls may nest before
                the construct fails with a ParseError
        """
        self.lexer = lexer
        self.current_token: Optional[Token] = None

        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth
        self._depth = 0

        if binop_precedence is None:
            binop_precedence = DEFAULT_BINOP_PRECEDENCE
        for operator, precedence in binop_precedence.items():
            if len(operator) != 1:
                raise ValueError(f"Binary operators are single characters, got {operator!r}")
            if precedence < 0:
                raise ValueError(f"Precedence of {operator!r} must not be negative")
        self.precedences: Dict[str, int] = dict(binop_precedence)

    def advance(self) -> Token:
        """
        Read the next token into `current_token` and return it.

        If the lexer fails, `current_token` is cleared before the error
        propagates: the old token is consumed and nothing replaced it.
        """
        try:
            self.current_token = self.lexer.next_token()
        except LexerError:
            self.current_token = None
            raise
        logger.debug("[Parser] Current token: %s", self.current_token)
        return self.current_token

    # Public entry points, one per top-level construct

    def parse_definition(self) -> ParseResult:
        """Parse `name(params) body`; the `fn` keyword is already consumed."""
        return self._run("definition", self._parse_definition)

    def parse_export(self) -> ParseResult:
        """Parse `name(params)`; the `export` keyword is already consumed."""
        return self._run("export", self._parse_prototype)

    def parse_top_level_expression(self) -> ParseResult:
        """Parse a bare expression wrapped in an anonymous Function."""
        return self._run("expression", self._parse_top_level_expression)

    def _run(self, kind: str, parse: Callable[[], Union[Function, Prototype]]) -> ParseResult:
        self._depth = 0
        try:
            if self.current_token is None:
                self.advance()
            value = parse()
        except (LexerError, ParseError) as e:
            logger.debug("[Parser] Failed to parse %s: %s", kind, e.message)
            return ParseResult(kind, error=e)
        return ParseResult(kind, value=value)

    # Top-level constructs

    def _parse_definition(self) -> Function:
        prototype = self._parse_prototype()
        body = self._parse_expression()
        return Function(prototype, body)

    def _parse_top_level_expression(self) -> Function:
        return anonymous_function(self._parse_expression())

    def _parse_prototype(self) -> Prototype:
        """Parse a prototype: IDENTIFIER '(' IDENTIFIER* ')'."""
        name_token = self.current_token
        if not name_token.is_identifier:
            raise create_prototype_error("function name", name_token)

        if not self.advance().is_char('('):
            raise create_prototype_error("'('", self.current_token)

        # Parameters are not comma separated
        params: List[str] = []
        while self.advance().is_identifier:
            params.append(self.current_token.value)

        if not self.current_token.is_char(')'):
            raise create_prototype_error("')'", self.current_token)
        self.advance()

        return Prototype(name_token.value, params, location=name_token.location)

    # Expressions

    def _parse_expression(self) -> Node:
        left = self._parse_primary()
        return self._parse_binary_right(0, left)

    def _get_precedence(self) -> int:
        """Precedence of the current token, or -1 if it is not an operator."""
        token = self.current_token
        if token.type != TokenType.CHAR:
            return -1
        return self.precedences.get(token.value, -1)

    def _parse_binary_right(self, min_precedence: int, left: Node) -> Node:
        """
        Fold (operator, primary) pairs into `left` by precedence climbing.

        Returns as soon as the current token binds looser than
        `min_precedence`; a tighter operator after the right operand makes
        the right operand absorb it first.
        """
        while True:
            token_precedence = self._get_precedence()
            if token_precedence < min_precedence:
                return left

            operator_token = self.current_token
            self.advance()

            right = self._parse_primary()

            if token_precedence < self._get_precedence():
                right = self._parse_binary_right(token_precedence + 1, right)

            left = Binary(operator_token.value, left, right, location=operator_token.location)

    def _parse_primary(self) -> Node:
        token = self.current_token

        if token.is_identifier:
            return self._parse_identifier()
        if token.is_literal:
            self.advance()
            if token.type == TokenType.NUMBER:
                return Numerical(token.value, location=token.location)
            return StringLiteral(token.value, location=token.location)
        if token.is_char('('):
            return self._parse_paren()

        raise create_unexpected_token_error(token)

    def _enter_nested(self):
        """Count one more level of nesting; the opening token is current."""
        if self._depth >= self.max_depth:
            raise create_nesting_error(self.max_depth, self.current_token)
        self._depth += 1

    def _parse_paren(self) -> Node:
        """Parse a parenthesized expression."""
        self._enter_nested()
        self.advance()  # Consume (

        expr = self._parse_expression()

        if not self.current_token.is_char(')'):
            raise create_missing_paren_error(self.current_token)
        self.advance()

        self._depth -= 1
        return expr

    def _parse_identifier(self) -> Node:
        """Parse a variable reference or a call."""
        name_token = self.current_token
        self.advance()

        if not self.current_token.is_char('('):
            return Variable(name_token.value, location=name_token.location)

        self._enter_nested()
        self.advance()  # Consume (

        args: List[Node] = []
        if not self.current_token.is_char(')'):
            while True:
                args.append(self._parse_expression())

                if self.current_token.is_char(')'):
                    break
                if not self.current_token.is_char(','):
                    raise create_argument_list_error(self.current_token)
                self.advance()

        self.advance()  # Consume )

        self._depth -= 1
        return Call(name_token.value, args, location=name_token.location)


def parse_expression(source: str, filename: str = "<string>") -> Node:
    """
    Convenience function to parse a single expression.

    Raises:
        LexerError, ParseError: If parsing fails
    """
    parser = Parser(Lexer(source, filename))
    return parser.parse_top_level_expression().unwrap().body
