from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import (
    BFError,
    ExecutionCancelled,
    InputExhausted,
    InvalidInputCharacter,
    ParseError,
    TapeOverflow,
    TapeUnderflow,
)
from .evaluator import ExecutionLimits, execute
from .parser import parse
from .state import DEFAULT_TAPE_LENGTH, Tape

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_PARSE_ERROR = 2
EXIT_TAPE_BOUNDS = 3
EXIT_INPUT_EXHAUSTED = 4
EXIT_INVALID_INPUT = 5
EXIT_CANCELLED = 6


def exit_code_for(error: BFError) -> int:
    if isinstance(error, ParseError):
        return EXIT_PARSE_ERROR
    if isinstance(error, (TapeOverflow, TapeUnderflow)):
        return EXIT_TAPE_BOUNDS
    if isinstance(error, InputExhausted):
        return EXIT_INPUT_EXHAUSTED
    if isinstance(error, InvalidInputCharacter):
        return EXIT_INVALID_INPUT
    if isinstance(error, ExecutionCancelled):
        return EXIT_CANCELLED
    return EXIT_USAGE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfwalk",
        description="A tree-walking Brainfuck interpreter.",
    )
    parser.add_argument("file", nargs="?", help="Brainfuck source file")
    parser.add_argument("-b", "--brainfuck", metavar="CODE", help="Brainfuck program text to execute")
    parser.add_argument("-i", "--input", default="", metavar="INPUT",
                        help="A string for your Brainfuck program to read (',' character)")
    parser.add_argument("--tape-length", type=int, default=DEFAULT_TAPE_LENGTH,
                        help=f"Number of cells on the tape (default {DEFAULT_TAPE_LENGTH})")
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after this many instructions")
    parser.add_argument("--timeout", type=float, default=None, help="Stop after this many seconds")
    parser.add_argument("--dump-tape", type=int, default=0, metavar="N",
                        help="Print the first N cells to stderr after the run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _dump(tape: Tape, count: int) -> None:
    cells = tape.snapshot(0, count)
    for i in range(0, len(cells), 8):
        print(" ".join(f"{b:3d}" for b in cells[i:i + 8]), file=sys.stderr)
    print(f"pointer={tape.pointer}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if (args.file is None) == (args.brainfuck is None):
        print("Error: give exactly one of FILE or --brainfuck", file=sys.stderr)
        return EXIT_USAGE

    if args.brainfuck is not None:
        code = args.brainfuck
    else:
        try:
            code = Path(args.file).read_bytes()
        except FileNotFoundError:
            print(f"Couldn't find file: {args.file}", file=sys.stderr)
            return EXIT_USAGE

    try:
        tape = Tape.create(args.tape_length)
        limits = ExecutionLimits(max_steps=args.max_steps, timeout=args.timeout)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    stdout = getattr(sys.stdout, "buffer", sys.stdout)
    try:
        program = parse(code)
        execute(program, tape, args.input, stdout, limits=limits)
    except BFError as e:
        stdout.flush()
        print(e, file=sys.stderr)
        return exit_code_for(e)
    finally:
        if args.dump_tape > 0:
            _dump(tape, args.dump_tape)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
