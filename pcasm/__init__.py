"""
pcasm – assembler for the Pseudocode stack virtual machine.

Public API re-exports:

  from pcasm.assemble import Assembler, assemble_text, assemble_file
  from pcasm.errors   import ParseFailure
  from pcasm.opcodes  import LONG_NAMES, SHORT_NAMES, lookup, opcode_name
"""

from .assemble import Assembler, assemble_text, assemble_file
from .errors   import ParseFailure
from .opcodes  import LONG_NAMES, SHORT_NAMES, OPCODE_COUNT, lookup, opcode_name

__all__ = [
    "Assembler",
    "assemble_text",
    "assemble_file",
    "ParseFailure",
    "LONG_NAMES",
    "SHORT_NAMES",
    "OPCODE_COUNT",
    "lookup",
    "opcode_name",
]
