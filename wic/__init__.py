"""
Wi Compiler Front End

Lexer and parser for Wi, a small expression-oriented language with function
definitions (`fn`), external declarations (`export`) and binary operators.

Architecture:
    wic/
    ├── lexer/           # Characters -> tokens, one token per call
    ├── parser/          # Tokens -> AST, plus a source printer
    ├── driver.py        # Top-level loop with error recovery
    ├── diagnostics.py   # Error rendering with source excerpts
    └── cli.py           # `wic` command

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser
from .driver import Driver, parse_source

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Driver",
    "parse_source",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
