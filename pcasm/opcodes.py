"""
opcodes.py – Pseudocode VM instruction table.

Every instruction has two spellings, a descriptive long name and a short
symbolic name, both matched case-insensitively.  The position of a name in
the tables below *is* its byte code, so the order is part of the bytecode
format and must never change.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Optional


# ---------------------------------------------------------------------------
# Spelling tables (index = opcode byte)
# ---------------------------------------------------------------------------

LONG_NAMES: tuple[str, ...] = (
    "Ret", "Call", "TailCall", "Jump", "TrueJump", "FalseJump",
    "BoolNot", "IntNot", "BoolAnd", "IntAnd", "BoolOr", "IntOr",
    "StrictEqual", "StrictNeq", "NumEqual", "NumNeq",
    "NumLt", "NumGt", "NumLeq", "NumGeq",
    "Null", "BoolFalse", "BoolTrue",
    "IntLiteral", "RealLiteral", "TypeLiteral",
    "Add", "Sub", "Mul", "Neg",
    "IntDiv", "IntMod", "RealDiv", "RealMod",
    "ToInt", "ToReal",
    "GetType",
    "CreateObject", "ShallowCopy", "GetGlobalObject", "GetFunctionObject",
    "GetMember", "SetMember", "GetMemberDynamic", "SetMemberDynamic",
    "PushFrame", "PopFrame", "Pick", "Bury", "PopDiscard",
    "ClearCode", "ClearText", "AppendCode", "AppendCodeLiteral", "AppendText",
    "AppendFormat", "PrintText",
    "DebugLine",
    "PerformGC",
)

SHORT_NAMES: tuple[str, ...] = (
    "R", "C", "TC", "JMP", "JT", "JF",
    "!", "~", "&&", "&", "||", "|",
    "===", "!==", "==", "!=",
    "<", ">", "<=", ">=",
    "N", "F", "T",
    "IL", "RL", "TL",
    "+", "-", "*", "--",
    "/", "%", "//", "%%",
    "TO_I", "TO_R",
    "GT",
    "NEW", "CPY", "GLOBAL", "THIS",
    "GET", "SET", "GETD", "SETD",
    "PUSHF", "POPF", "P", "B", "POP",
    "CL_C", "CL_T", "+C", "+L", "+T", "+F", "PRINT",
    "LINE",
    "GC",
)

OPCODE_COUNT = len(LONG_NAMES)


def _build_table() -> dict[str, int]:
    if len(SHORT_NAMES) != OPCODE_COUNT:
        raise RuntimeError("long and short opcode tables differ in length")
    table: dict[str, int] = {}
    for names in (LONG_NAMES, SHORT_NAMES):
        for code, name in enumerate(names):
            key = name.upper()
            if key in table:
                raise RuntimeError(f"duplicate opcode spelling {name!r}")
            table[key] = code
    return table


# Upper-cased spelling -> code.  Read-only once the module is imported.
OPCODES = MappingProxyType(_build_table())

# Token separator (any Unicode whitespace).
_WS = r"\s"

_OPCODE_RE = re.compile(
    # Spellings match ASCII-only case-insensitively, so every hit upper-cases
    # to a table key; the separator stays Unicode-aware.
    r"(?P<opcode>(?ai:"
    + "|".join(re.escape(name) for name in LONG_NAMES + SHORT_NAMES)
    + r"))(?:" + _WS + r"+|\Z)"
)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def lookup(spelling: str) -> Optional[int]:
    """Return the code for *spelling* (either form, any case), or None."""
    return OPCODES.get(spelling.upper())


def opcode_name(code: int, short: bool = False) -> str:
    """Return the canonical long (or short) spelling of *code*."""
    if not 0 <= code < OPCODE_COUNT:
        raise ValueError(f"opcode {code} out of range 0..{OPCODE_COUNT - 1}")
    return SHORT_NAMES[code] if short else LONG_NAMES[code]


def opcode_pattern() -> re.Pattern:
    """
    Compiled alternation of every spelling followed by a separator.

    The matched span includes the trailing whitespace; the spelling itself is
    in the ``opcode`` group.
    """
    return _OPCODE_RE
