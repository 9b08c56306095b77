"""
Turn AST nodes back into Wi source text, or into an indented tree dump.

Printed source is fully parenthesized, so parsing it again gives back an
equal tree whatever the precedence table says.
"""

from decimal import Decimal
from typing import List

from .ast_nodes import (
    ASTVisitor, ASTNode, Numerical, StringLiteral, Variable, Binary, Call,
    Prototype, Function
)


def format_number(value: float) -> str:
    """Render a float the way the lexer reads numbers: digits and one '.'."""
    text = repr(float(value))
    if 'e' in text or 'E' in text:
        # Positional form of the shortest repr, e.g. 1e-05 -> 0.00001
        text = format(Decimal(text), 'f')
    return text


class SourcePrinter(ASTVisitor):
    """Renders nodes as Wi source."""

    def visit_Numerical(self, node: Numerical) -> str:
        return format_number(node.value)

    def visit_StringLiteral(self, node: StringLiteral) -> str:
        return f'"{node.value}"'

    def visit_Variable(self, node: Variable) -> str:
        return node.name

    def visit_Binary(self, node: Binary) -> str:
        return f"({self.visit(node.left)} {node.operator} {self.visit(node.right)})"

    def visit_Call(self, node: Call) -> str:
        args = ", ".join(self.visit(arg) for arg in node.arguments)
        return f"{node.callee}({args})"

    def visit_Prototype(self, node: Prototype) -> str:
        return f"{node.name}({' '.join(node.params)})"

    def visit_Function(self, node: Function) -> str:
        body = self.visit(node.body)
        if node.prototype.is_anonymous:
            return body
        return f"fn {self.visit(node.prototype)} {body}"


class TreeDumper(ASTVisitor):
    """Renders nodes as an indented tree, one node per line."""

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self._depth = 0
        self._lines: List[str] = []

    def dump(self, node: ASTNode) -> str:
        self._depth = 0
        self._lines = []
        self.visit(node)
        return "\n".join(self._lines)

    def _emit(self, text: str):
        self._lines.append(self.indent * self._depth + text)

    def _nested(self, *nodes: ASTNode):
        self._depth += 1
        for child in nodes:
            self.visit(child)
        self._depth -= 1

    def visit_Numerical(self, node: Numerical):
        self._emit(f"Numerical {format_number(node.value)}")

    def visit_StringLiteral(self, node: StringLiteral):
        self._emit(f'StringLiteral "{node.value}"')

    def visit_Variable(self, node: Variable):
        self._emit(f"Variable {node.name}")

    def visit_Binary(self, node: Binary):
        self._emit(f"Binary {node.operator}")
        self._nested(node.left, node.right)

    def visit_Call(self, node: Call):
        self._emit(f"Call {node.callee}")
        self._nested(*node.arguments)

    def visit_Prototype(self, node: Prototype):
        name = node.name or "<anonymous>"
        self._emit(f"Prototype {name}({', '.join(node.params)})")

    def visit_Function(self, node: Function):
        self._emit("Function")
        self._nested(node.prototype, node.body)


def to_source(node: ASTNode, export: bool = False) -> str:
    """
    Render a node, Prototype or Function as Wi source.

    With `export=True` a Prototype is rendered as an export declaration.
    """
    text = SourcePrinter().visit(node)
    if export:
        if not isinstance(node, Prototype):
            raise TypeError("Only prototypes can be exported")
        return f"export {text}"
    return text


def dump(node: ASTNode) -> str:
    """Indented tree view of a node."""
    return TreeDumper().dump(node)
