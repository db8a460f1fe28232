"""
tokens.py – token recognisers for Pseudocode assembly text.

Each recogniser looks at the source text at a cursor position and either
claims exactly one token starting *at* that position or returns None.  They
are tried in the fixed order of ``RECOGNIZERS``; the first hit wins.  A
token's ``length`` covers the token itself plus any trailing whitespace, so
the next recogniser always starts on a non-blank character.

Recognisers only classify text.  Turning the captured text into bytes (and
rejecting out-of-range numbers) is the driver's job.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Callable, Optional

from .opcodes import opcode_pattern


class TokenKind(enum.Enum):
    OPCODE = "opcode"
    REAL = "real"
    WIDE_INT = "wide-int"
    BYTE = "byte"
    LONG_STRING = "long-string"
    SHORT_STRING = "short-string"
    BLOCK_OPEN = "block-open"
    BLOCK_CLOSE = "block-close"
    LABEL_DEF = "label-def"
    LABEL_REF = "label-ref"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    # Captured payload: spelling, numeric text, unescaped string body or
    # label name, depending on kind.
    text: str
    pos: int
    length: int


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_WS = r"\s"
_NAME = r"\S+"
_END = r"(?:" + _WS + r"+|\Z)"
_TRAIL = _WS + r"*"

_REAL_RE = re.compile(r"(?P<val>[0-9.Ee+-]+)[FfRr]" + _TRAIL)
_WIDE_INT_RE = re.compile(r"(?P<val>(?:\+-|[+-])?[0-9]+)[Ii]" + _TRAIL)
_BYTE_RE = re.compile(r"(?P<val>\+?[0-9]+)" + _TRAIL)
_LONG_STRING_RE = re.compile(r'"(?P<body>(?:[^"]|"")*)"' + _TRAIL)
_SHORT_STRING_RE = re.compile(r"'(?P<body>(?:[^']|'')*)'" + _TRAIL)
_BLOCK_OPEN_RE = re.compile(r"\{" + _TRAIL)
_BLOCK_CLOSE_RE = re.compile(r"\}" + _TRAIL)
_LABEL_DEF_RE = re.compile(r":(?P<name>" + _NAME + r")" + _END)
_LABEL_REF_RE = re.compile(r"->(?P<name>" + _NAME + r")" + _END)
_UNKNOWN_RE = re.compile(r"(?P<token>\S*)" + _END)

WHITESPACE_RE = re.compile(_TRAIL)


def _token(kind: TokenKind, m: re.Match, text: str) -> Token:
    return Token(kind, text, m.start(), m.end() - m.start())


# ---------------------------------------------------------------------------
# Recognisers
# ---------------------------------------------------------------------------

def match_opcode(src: str, pos: int) -> Optional[Token]:
    m = opcode_pattern().match(src, pos)
    return _token(TokenKind.OPCODE, m, m.group("opcode")) if m else None


def match_real(src: str, pos: int) -> Optional[Token]:
    m = _REAL_RE.match(src, pos)
    return _token(TokenKind.REAL, m, m.group("val")) if m else None


def match_wide_int(src: str, pos: int) -> Optional[Token]:
    m = _WIDE_INT_RE.match(src, pos)
    return _token(TokenKind.WIDE_INT, m, m.group("val")) if m else None


def match_byte(src: str, pos: int) -> Optional[Token]:
    m = _BYTE_RE.match(src, pos)
    return _token(TokenKind.BYTE, m, m.group("val")) if m else None


def match_long_string(src: str, pos: int) -> Optional[Token]:
    m = _LONG_STRING_RE.match(src, pos)
    if m is None:
        return None
    return _token(TokenKind.LONG_STRING, m, m.group("body").replace('""', '"'))


def match_short_string(src: str, pos: int) -> Optional[Token]:
    m = _SHORT_STRING_RE.match(src, pos)
    if m is None:
        return None
    return _token(TokenKind.SHORT_STRING, m, m.group("body").replace("''", "'"))


def match_block_open(src: str, pos: int) -> Optional[Token]:
    m = _BLOCK_OPEN_RE.match(src, pos)
    return _token(TokenKind.BLOCK_OPEN, m, "{") if m else None


def match_block_close(src: str, pos: int) -> Optional[Token]:
    m = _BLOCK_CLOSE_RE.match(src, pos)
    return _token(TokenKind.BLOCK_CLOSE, m, "}") if m else None


def match_label_def(src: str, pos: int) -> Optional[Token]:
    m = _LABEL_DEF_RE.match(src, pos)
    return _token(TokenKind.LABEL_DEF, m, m.group("name")) if m else None


def match_label_ref(src: str, pos: int) -> Optional[Token]:
    m = _LABEL_REF_RE.match(src, pos)
    return _token(TokenKind.LABEL_REF, m, m.group("name")) if m else None


def match_unknown(src: str, pos: int) -> Token:
    """Catch-all: the next non-blank run (or the rest of the input)."""
    m = _UNKNOWN_RE.match(src, pos)
    return _token(TokenKind.UNKNOWN, m, m.group("token"))


Recognizer = Callable[[str, int], Optional[Token]]

# Priority order matters: e.g. "F" is BoolFalse, not a malformed real, and
# "1I" is a wide integer, not the byte 1 followed by garbage.
RECOGNIZERS: tuple[Recognizer, ...] = (
    match_opcode,
    match_real,
    match_wide_int,
    match_byte,
    match_long_string,
    match_short_string,
    match_block_open,
    match_block_close,
    match_label_def,
    match_label_ref,
    match_unknown,
)


def recognize(src: str, pos: int) -> Token:
    """Return the first token any recogniser claims at *pos*."""
    for recognizer in RECOGNIZERS[:-1]:
        tok = recognizer(src, pos)
        if tok is not None:
            return tok
    return match_unknown(src, pos)


def skip_whitespace(src: str, pos: int) -> int:
    return WHITESPACE_RE.match(src, pos).end()
