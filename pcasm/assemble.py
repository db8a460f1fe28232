"""
assemble.py - Pseudocode assembler driver.

Reads mnemonic assembly text and produces the flat bytecode image executed
by the Pseudocode VM.  Translation is a single left-to-right pass: labels
may only be referenced after they are defined, and the first error aborts
the whole run without writing anything.

Entry points: ``assemble_text(text)`` and
``assemble_file(source, destination)``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .emitter import (
    put_byte,
    put_f64,
    put_i64,
    put_long_string,
    put_short_string,
    put_u32,
    write_image,
)
from .errors import ParseFailure
from .opcodes import lookup
from .scope import ScopeStack
from .tokens import Token, TokenKind, recognize, skip_whitespace


_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1


class Assembler:
    """One-pass assembler over a single source text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.scopes = ScopeStack()

        self._handlers: dict[TokenKind, Callable[[Token], None]] = {
            TokenKind.OPCODE:       self._emit_opcode,
            TokenKind.REAL:         self._emit_real,
            TokenKind.WIDE_INT:     self._emit_wide_int,
            TokenKind.BYTE:         self._emit_byte,
            TokenKind.LONG_STRING:  self._emit_long_string,
            TokenKind.SHORT_STRING: self._emit_short_string,
            TokenKind.BLOCK_OPEN:   self._open_block,
            TokenKind.BLOCK_CLOSE:  self._close_block,
            TokenKind.LABEL_DEF:    self._define_label,
            TokenKind.LABEL_REF:    self._emit_label_ref,
            TokenKind.UNKNOWN:      self._unknown,
        }

    @property
    def _buffer(self) -> bytearray:
        return self.scopes.current.buffer

    # ------------------------------------------------------------------
    # Token handlers
    # ------------------------------------------------------------------

    def _emit_opcode(self, tok: Token) -> None:
        put_byte(self._buffer, lookup(tok.text))

    def _emit_real(self, tok: Token) -> None:
        try:
            value = float(tok.text)
        except ValueError:
            raise ParseFailure(f"Invalid real value: {tok.text}") from None
        put_f64(self._buffer, value)

    def _emit_wide_int(self, tok: Token) -> None:
        try:
            value = int(tok.text)
        except ValueError:
            value = None
        if value is None or not _I64_MIN <= value <= _I64_MAX:
            raise ParseFailure(f"Invalid integer value: {tok.text}")
        put_i64(self._buffer, value)

    def _emit_byte(self, tok: Token) -> None:
        try:
            value = int(tok.text)
        except ValueError:
            value = None
        if value is None or value > 0xff:
            raise ParseFailure(f"Invalid byte value: {tok.text}")
        put_byte(self._buffer, value)

    def _emit_long_string(self, tok: Token) -> None:
        put_long_string(self._buffer, tok.text)

    def _emit_short_string(self, tok: Token) -> None:
        put_short_string(self._buffer, tok.text)

    def _open_block(self, tok: Token) -> None:
        self.scopes.push()

    def _close_block(self, tok: Token) -> None:
        self.scopes.close()

    def _define_label(self, tok: Token) -> None:
        self.scopes.current.define(tok.text)

    def _emit_label_ref(self, tok: Token) -> None:
        put_u32(self._buffer, self.scopes.current.resolve(tok.text))

    def _unknown(self, tok: Token) -> None:
        raise ParseFailure(f"Unknown token: {tok.text}")

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def step(self) -> Token:
        """Recognise and apply the token at the cursor, then advance past it."""
        tok = recognize(self.text, self.pos)
        try:
            self._handlers[tok.kind](tok)
        except ParseFailure as exc:
            if exc.pos is None:
                exc.pos = tok.pos
            raise
        self.pos += tok.length
        return tok

    def assemble(self) -> bytes:
        """Assemble the whole text and return the program image."""
        self.pos = skip_whitespace(self.text, 0)
        while self.pos < len(self.text):
            self.step()
        try:
            return self.scopes.finish()
        except ParseFailure as exc:
            exc.pos = len(self.text)
            raise


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def assemble_text(text: str) -> bytes:
    """Assemble *text* and return the bytecode; raises ParseFailure."""
    return Assembler(text).assemble()


def assemble_file(source: str | Path, destination: str | Path) -> Path:
    """Assemble the file *source* into the bytecode file *destination*.

    The source is read as UTF-8 (a byte-order mark is ignored) with its line
    endings untouched.  The destination is only created once assembly has
    succeeded, so a ParseFailure leaves no output behind.

    Returns the Path written.
    """
    source = Path(source)
    # Decode the raw bytes so CR and CRLF inside string literals survive.
    text = source.read_bytes().decode('utf-8-sig')
    try:
        image = assemble_text(text)
    except ParseFailure as exc:
        exc.filename = str(source)
        exc.line, exc.column = exc.location(text)
        raise
    return write_image(destination, image)
