"""
emitter.py – big-endian serialisation helpers for the bytecode buffers.

All multi-byte values are written most-significant byte first.
"""

from __future__ import annotations

import os
import struct
import tempfile
from pathlib import Path

from .errors import ParseFailure


SHORT_STRING_MAX = 255


def put_byte(buf: bytearray, value: int) -> None:
    buf.append(value)


def put_u32(buf: bytearray, value: int) -> None:
    buf.extend(struct.pack(">I", value))


def put_i64(buf: bytearray, value: int) -> None:
    buf.extend(struct.pack(">q", value))


def put_f64(buf: bytearray, value: float) -> None:
    """Append the raw IEEE-754 bit pattern of *value* (8 bytes)."""
    buf.extend(struct.pack(">d", value))


def put_long_string(buf: bytearray, text: str) -> None:
    """u32 byte length followed by the UTF-8 bytes of *text*."""
    raw = text.encode("utf-8")
    put_u32(buf, len(raw))
    buf.extend(raw)


def put_short_string(buf: bytearray, text: str) -> None:
    """u8 byte length followed by the UTF-8 bytes of *text*."""
    raw = text.encode("utf-8")
    if len(raw) > SHORT_STRING_MAX:
        raise ParseFailure(
            f"Short-string literal must be less than 256 bytes, "
            f"actually {len(raw)} bytes"
        )
    put_byte(buf, len(raw))
    buf.extend(raw)


def put_block(buf: bytearray, inner: bytes | bytearray) -> None:
    """Embed *inner* as a length-prefixed block literal."""
    put_u32(buf, len(inner))
    buf.extend(inner)


def write_image(path: str | Path, data: bytes | bytearray) -> Path:
    """Write the finished program image to *path* atomically.

    The bytes go to a temporary file beside *path* which is then renamed
    over it, so a failed write never leaves a truncated image behind.
    """
    path = Path(path)
    fd, tmp_path = tempfile.mkstemp(suffix=".pca.tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(bytes(data))
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    return path
