"""Command line entry point of the compiler."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .compiler import Compiler


def _ask(prompt: str) -> str:
    line = input(prompt)
    words = line.split()
    return words[0] if words else ""


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Compile a source file; file names missing from ``argv`` are asked for."""
    parser = argparse.ArgumentParser(
        prog="exprcompiler",
        description="Compile a source file into x86-64 assembly.",
    )
    parser.add_argument("input", nargs="?", help="source file to compile")
    parser.add_argument("output", nargs="?", help="assembly file to write")
    args = parser.parse_args(sys.argv[1:] if argv is None else list(argv))

    input_name = args.input or _ask("Please input the name of the input file: ")
    output_name = args.output or _ask("Please input the name of the output file: ")

    compiler = Compiler()
    return 0 if compiler.compile(input_name, output_name) else 1


if __name__ == "__main__":
    sys.exit(main())