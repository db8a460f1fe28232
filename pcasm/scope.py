"""
scope.py – nested output buffers and their label tables.

Each ``{ ... }`` block literal assembles into its own buffer with its own
label namespace.  Closing the block folds the buffer into its parent as a
length-prefixed blob; the labels are dropped with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .emitter import put_block
from .errors import ParseFailure


@dataclass
class Scope:
    buffer: bytearray = field(default_factory=bytearray)
    # label name -> byte offset in this scope's buffer
    labels: dict[str, int] = field(default_factory=dict)

    def define(self, name: str) -> int:
        """Bind *name* to the current end of the buffer and return the offset."""
        if name in self.labels:
            raise ParseFailure(f"Label {name} already defined")
        offset = len(self.buffer)
        self.labels[name] = offset
        return offset

    def resolve(self, name: str) -> int:
        """Return the offset of a label defined earlier in this scope."""
        try:
            return self.labels[name]
        except KeyError:
            raise ParseFailure(f"Label {name} is not defined") from None


class ScopeStack:
    """Stack of scopes; the bottom entry is the whole program."""

    def __init__(self) -> None:
        self._scopes: list[Scope] = [Scope()]

    @property
    def current(self) -> Scope:
        return self._scopes[-1]

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def push(self) -> Scope:
        scope = Scope()
        self._scopes.append(scope)
        return scope

    def close(self) -> Scope:
        """Pop the innermost block and append it to its parent's buffer."""
        if len(self._scopes) <= 1:
            raise ParseFailure("Unexpected } (end of code literal)")
        inner = self._scopes.pop()
        put_block(self.current.buffer, inner.buffer)
        return inner

    def finish(self) -> bytes:
        """Return the outermost buffer; every block must have been closed."""
        if len(self._scopes) > 1:
            raise ParseFailure("Unmatched { (start of code literal)")
        return bytes(self._scopes[0].buffer)
