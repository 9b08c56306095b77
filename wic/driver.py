"""
Top-level driving loop.

Pulls one top-level construct at a time out of a Parser, dispatching on the
current token, and applies the recovery policy: after a failure, drop one
token and try again from the top.
"""

import logging
from typing import Iterator, List, Optional, TextIO, Union

from .lexer import Lexer, LexerError, TokenType
from .parser import Parser, ParseResult

logger = logging.getLogger(__name__)

SUCCESS_MESSAGES = {
    "definition": "Parsed a function definition",
    "export": "Parsed an export",
    "expression": "Parsed a top-level expression",
}


class Driver:
    """
    Runs a Parser over its whole input.

    `run()` yields one ParseResult per top-level construct, failures
    included, until the end of input.
    """

    def __init__(self, parser: Parser):
        self.parser = parser

    def _skip(self) -> Optional[ParseResult]:
        """Drop the current token. Returns a failure if the lexer objects."""
        try:
            self.parser.advance()
        except LexerError as e:
            logger.warning("%s", e.diagnostic)
            return ParseResult("recovery", error=e)
        return None

    def run(self) -> Iterator[ParseResult]:
        parser = self.parser

        while True:
            if parser.current_token is None:
                failure = self._skip()
                if failure is not None:
                    yield failure
                continue

            token = parser.current_token

            if token.type == TokenType.EOF:
                logger.debug("[Loop] EOF reached")
                return

            if token.is_char(';'):
                failure = self._skip()
                if failure is not None:
                    yield failure
                continue

            if token.is_keyword:
                failure = self._skip()
                if failure is not None:
                    yield failure
                    continue
                if token.type == TokenType.FN:
                    result = parser.parse_definition()
                else:
                    result = parser.parse_export()
            else:
                result = parser.parse_top_level_expression()

            if result.ok:
                logger.info("%s", SUCCESS_MESSAGES[result.kind])
                yield result
                continue

            logger.warning("%s", result.error.diagnostic)
            yield result

            # Skip token for error recovery
            failure = self._skip()
            if failure is not None:
                yield failure


def parse_source(source: Union[str, TextIO], filename: str = "<string>") -> List[ParseResult]:
    """Parse every top-level construct in `source`."""
    return list(Driver(Parser(Lexer(source, filename))).run())
