"""
__main__.py – CLI entry-point for the pcasm package.

Usage:  python -m pcasm [-v] [SOURCE] [DESTINATION]
        python -m pcasm --opcodes

SOURCE is Pseudocode assembly text (UTF-8); DESTINATION receives the raw
bytecode.  Either path is prompted for when omitted.  Nothing is written
unless assembly succeeds; the exit status is 1 on any error.
"""

from __future__ import annotations

import argparse
import sys


def _prompt(label: str) -> str:
    print(f"{label}:")
    return input().strip()


def cmd_opcodes(args: argparse.Namespace) -> int:
    """Print the instruction table: code, long name, short name."""
    from pcasm.opcodes import LONG_NAMES, SHORT_NAMES

    for code, (long_name, short_name) in enumerate(zip(LONG_NAMES, SHORT_NAMES)):
        print(f"{code:3d}  {long_name:<20} {short_name}")
    return 0


def cmd_assemble(args: argparse.Namespace) -> int:
    from pcasm.assemble import assemble_file
    from pcasm.errors import ParseFailure

    try:
        source = args.source or _prompt("Source file")
        destination = args.destination or _prompt("Destination file")
    except EOFError:
        print("Error: no source/destination given", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Assembling {source}…")
    try:
        out_path = assemble_file(source, destination)
    except ParseFailure as exc:
        print(f"Error: {exc.describe()}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if args.verbose:
        print(f"  → {out_path} ({out_path.stat().st_size} bytes)")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m pcasm",
        description="Assemble Pseudocode VM assembly text into bytecode.",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print progress messages.")
    parser.add_argument("--opcodes", action="store_true",
                        help="List the instruction table and exit.")
    parser.add_argument("source", nargs="?", metavar="SOURCE",
                        help="Assembly source file (prompted for if omitted).")
    parser.add_argument("destination", nargs="?", metavar="DESTINATION",
                        help="Bytecode output file (prompted for if omitted).")
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args   = parser.parse_args(argv)

    if args.opcodes:
        return cmd_opcodes(args)
    return cmd_assemble(args)


if __name__ == "__main__":
    sys.exit(main())
