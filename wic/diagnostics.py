"""
Render diagnostics with the offending source line and a caret under the
reported column.

    ERROR[P003]: Expected ')' or ',' in argument list, found number '2'
      --> add.wi:1:7
       |
     1 | foo(1 2)
       |       ^
      help: Separate call arguments with ','
"""

from typing import Optional

from .lexer.errors import Diagnostic


def source_line(source_text: str, line: int) -> Optional[str]:
    """Return 1-based line `line` of `source_text`, or None if out of range."""
    lines = source_text.splitlines()
    if 1 <= line <= len(lines):
        return lines[line - 1]
    return None


def format_diagnostic(diagnostic: Diagnostic, source_text: Optional[str] = None) -> str:
    header = diagnostic.severity.upper()
    if diagnostic.code:
        header += f"[{diagnostic.code}]"

    location = diagnostic.location
    result = [f"{header}: {diagnostic.message}", f"  --> {location}"]

    text = source_line(source_text, location.line) if source_text is not None else None
    if text is not None:
        gutter = " " * len(str(location.line))
        # Tabs keep their width so the caret lines up under the column
        prefix = "".join(c if c == "\t" else " " for c in text[:location.column - 1])
        result.append(f" {gutter} |")
        result.append(f" {location.line} | {text}")
        result.append(f" {gutter} | {prefix}^")

    if diagnostic.help_text:
        result.append(f"  help: {diagnostic.help_text}")

    return "\n".join(result)
