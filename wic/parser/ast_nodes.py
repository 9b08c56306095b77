"""
Abstract Syntax Tree node definitions for Wi.

The node set is closed: five expression kinds plus Prototype and Function.
Nodes are frozen dataclasses, so a tree is immutable once built and two
trees compare equal when they have the same shape and values. Source
locations ride along on every node but take no part in equality.

Author: xwest
"""

from abc import ABC
from typing import List, Optional, Any, Tuple, Union
from dataclasses import dataclass, field
from enum import Enum

from ..lexer.tokens import SourceLocation


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Expressions
    NUMERICAL = "Numerical"
    STRING_LITERAL = "StringLiteral"
    VARIABLE = "Variable"
    BINARY = "Binary"
    CALL = "Call"

    # Top-level
    PROTOTYPE = "Prototype"
    FUNCTION = "Function"


class ASTVisitor(ABC):
    """
    Visitor base for traversing AST nodes.

    `visit` dispatches to `visit_<ClassName>`. A visitor that meets a node
    kind it has no method for raises NotImplementedError rather than
    silently skipping it.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise NotImplementedError(
                f"{type(self).__name__} does not handle {type(node).__name__} nodes"
            )
        return method(node)


class ASTNode:
    """Base class for all AST nodes."""

    node_type: ASTNodeType

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        return []


# ============================================================================
# Expressions
# ============================================================================

class Expression(ASTNode):
    """Base class for expression nodes."""
    pass


@dataclass(frozen=True)
class Numerical(Expression):
    """Numeric literal. All Wi numbers are doubles."""
    value: float
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.NUMERICAL


@dataclass(frozen=True)
class StringLiteral(Expression):
    """String literal."""
    value: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.STRING_LITERAL


@dataclass(frozen=True)
class Variable(Expression):
    """Reference to a named value, e.g. a function parameter."""
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.VARIABLE


@dataclass(frozen=True)
class Binary(Expression):
    """Binary operation. `operator` is a single character such as '+'."""
    operator: str
    left: 'Node'
    right: 'Node'
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.BINARY

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Call(Expression):
    """Function call by name."""
    callee: str
    arguments: Tuple['Node', ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.CALL

    def __post_init__(self):
        # Accept any sequence but store a tuple so the node stays immutable
        object.__setattr__(self, 'arguments', tuple(self.arguments))

    def children(self) -> List[ASTNode]:
        return list(self.arguments)


Node = Union[Numerical, StringLiteral, Variable, Binary, Call]


# ============================================================================
# Top-level constructs
# ============================================================================

@dataclass(frozen=True)
class Prototype(ASTNode):
    """
    Function signature: name plus parameter names.

    The name is empty for the wrapper around an anonymous top-level
    expression. Duplicate parameter names are accepted here.
    """
    name: str
    params: Tuple[str, ...] = ()
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)

    node_type = ASTNodeType.PROTOTYPE

    def __post_init__(self):
        object.__setattr__(self, 'params', tuple(self.params))

    @property
    def is_anonymous(self) -> bool:
        return self.name == ""


@dataclass(frozen=True)
class Function(ASTNode):
    """Function definition: a prototype and a single body expression."""
    prototype: Prototype
    body: 'Node'

    node_type = ASTNodeType.FUNCTION

    @property
    def name(self) -> str:
        return self.prototype.name

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.prototype.location or self.body.location

    def children(self) -> List[ASTNode]:
        return [self.prototype, self.body]


def anonymous_function(body: 'Node') -> Function:
    """Wrap a bare expression in a nameless, parameterless Function."""
    return Function(Prototype("", (), location=body.location), body)
