"""
errors.py – the single failure type raised while assembling.
"""

from __future__ import annotations

from typing import Optional


class ParseFailure(ValueError):
    """
    Raised for any malformed input: bad numeric literal, oversized short
    string, unbalanced braces, duplicate or undefined label, unknown token.

    *pos* is the character offset of the offending token in the source text,
    filled in by the driver when the failure is raised below it.
    """

    def __init__(self, message: str, pos: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos
        # Set by assemble_file once the failing source is known.
        self.filename: Optional[str] = None
        self.line: Optional[int] = None
        self.column: Optional[int] = None

    def location(self, text: str) -> tuple[int, int]:
        """Return the 1-based (line, column) of *pos* within *text*."""
        pos = len(text) if self.pos is None else min(self.pos, len(text))
        line = text.count("\n", 0, pos) + 1
        column = pos - (text.rfind("\n", 0, pos) + 1) + 1
        return line, column

    def describe(self) -> str:
        """One-line diagnostic: ``file:line:col: message`` where known."""
        where = [str(part) for part in (self.filename, self.line, self.column)
                 if part is not None]
        if where:
            return f"{':'.join(where)}: {self.message}"
        return self.message
