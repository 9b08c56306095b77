"""
Wi Parser Package

Recursive descent / precedence climbing parser for the Wi language.
Produces immutable AST nodes with source locations.

Key Features:
- Precedence climbing for binary operators (configurable table)
- Failures returned as values (ParseResult) rather than raised
- Source printer that round-trips through the parser

Author: xwest
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, Expression, Node,
    Numerical, StringLiteral, Variable, Binary, Call,
    Prototype, Function, anonymous_function,
)
from .parser import Parser, ParseResult, DEFAULT_BINOP_PRECEDENCE, DEFAULT_MAX_DEPTH, parse_expression
from .printer import to_source, dump
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "ParseResult", "DEFAULT_BINOP_PRECEDENCE", "DEFAULT_MAX_DEPTH", "parse_expression",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "Expression", "Node",
    "Numerical", "StringLiteral", "Variable", "Binary", "Call",
    "Prototype", "Function", "anonymous_function",

    # Printing
    "to_source", "dump",

    # Error handling
    "ParseError",
]
