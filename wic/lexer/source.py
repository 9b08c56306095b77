"""
Character sources for the Wi lexer.

The lexer pulls one character at a time; a CharSource hides whether those
characters come from an in-memory string or a text stream such as stdin.
"""

from typing import TextIO, Union

from .tokens import SourceLocation


class CharSource:
    """
    Reads characters one at a time, tracking line/column/offset.

    `read()` returns the next character, or "" once input is exhausted
    (and on every call after that).
    """

    def __init__(self, source: Union[str, TextIO], filename: str = "<stdin>"):
        if isinstance(source, str):
            self._text = source
            self._stream = None
        else:
            self._text = None
            self._stream = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self._exhausted = False

    def location(self) -> SourceLocation:
        """Location of the character the next read() will return."""
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def read(self) -> str:
        if self._exhausted:
            return ""

        if self._text is not None:
            char = self._text[self.pos] if self.pos < len(self._text) else ""
        else:
            char = self._stream.read(1)

        if not char:
            self._exhausted = True
            return ""

        self.pos += 1
        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char
