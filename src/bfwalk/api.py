from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .evaluator import ExecutionLimits, execute
from .parser import parse
from .state import DEFAULT_TAPE_LENGTH, Tape


@dataclass(frozen=True)
class RunOptions:
    tape_length: int = DEFAULT_TAPE_LENGTH
    limits: Optional[ExecutionLimits] = None

    def __post_init__(self) -> None:
        if self.tape_length < 1:
            raise ValueError("tape_length must be at least 1")


@dataclass(frozen=True)
class RunResult:
    output: bytes
    tape: Tape

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')

    @property
    def pointer(self) -> int:
        return self.tape.pointer


def run_string(source: str | bytes, input_text: Any = "", *, options: Optional[RunOptions] = None,
               output: Any = None) -> RunResult:
    opts = options if options is not None else RunOptions()
    program = parse(source)
    tape = Tape.create(opts.tape_length)
    data = execute(program, tape, input_text, output, limits=opts.limits)
    return RunResult(output=data, tape=tape)


def run_file(path: str | Path, input_text: Any = "", *, options: Optional[RunOptions] = None,
             output: Any = None, encoding: Optional[str] = None) -> RunResult:
    p = Path(path)
    # Programs are bytes; decode only when the caller names an encoding
    data = p.read_bytes()
    source = data.decode(encoding) if encoding is not None else data
    return run_string(source, input_text, options=options, output=output)
