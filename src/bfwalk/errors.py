from __future__ import annotations

from dataclasses import dataclass, fields
from functools import partial
from typing import TYPE_CHECKING, Any, List, Optional, Tuple, Type, TypeVar

if TYPE_CHECKING:
    from .state import Tape

UNEXPECTED_CHARACTER = 'unexpected character'
UNTERMINATED_LOOP = 'unterminated loop'

_E = TypeVar('_E', bound='ExecutionError')


def line_and_column(text: str, position: int) -> Tuple[int, int]:
    line = text.count('\n', 0, position) + 1
    line_start = text.rfind('\n', 0, position) + 1
    return line, position - line_start + 1


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"  {'':4s} | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(reason: str, char: Optional[str], opened_at: Optional[Tuple[int, int]]) -> Optional[str]:
    if reason == UNTERMINATED_LOOP:
        if opened_at is not None:
            line, column = opened_at
            return f"The '[' at line {line}, column {column} has no matching ']'."
        return "Every '[' needs a matching ']'."
    if reason == UNEXPECTED_CHARACTER:
        if char == ']':
            return "This ']' has no matching '['."
        if char == '/':
            return 'Comments start with "//" and run to the end of the line.'
        return 'Only + - > < . , [ ] are commands. Put notes after "//".'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __reduce__(self):
        # Rebuild from the dataclass fields so pickle and copy keep every attribute
        return partial(type(self), **{f.name: getattr(self, f.name) for f in fields(self)}), ()

    def __str__(self) -> str:
        return self.message


@dataclass
class ParseError(BFError):
    position: int
    reason: str
    line: int
    column: int
    context: str


@dataclass
class ExecutionError(BFError):
    instruction: Any
    pointer: int
    cell: int
    steps: int
    output: bytes


@dataclass
class TapeOverflow(ExecutionError):
    pass


@dataclass
class TapeUnderflow(ExecutionError):
    pass


@dataclass
class InputExhausted(ExecutionError):
    pass


@dataclass
class InvalidInputCharacter(ExecutionError):
    value: str


@dataclass
class ExecutionCancelled(BFError):
    reason: str
    steps: int
    output: bytes


def make_parse_error(*, source: str, position: int, reason: str,
                     opened_at: Optional[int] = None) -> ParseError:
    line, column = line_and_column(source, position)
    ctx = _build_context(source.split('\n'), line, column)
    char = source[position] if position < len(source) else None
    opened = line_and_column(source, opened_at) if opened_at is not None else None
    hint = _hint_for(reason, char, opened)
    hint_block = f"\nHint: {hint}" if hint else ""
    found = f" {char!r}" if char is not None and reason == UNEXPECTED_CHARACTER else ""
    return ParseError(
        message=f"ParseError: {reason}{found} at position {position} (line {line}, column {column})\n{ctx}{hint_block}",
        position=position,
        reason=reason,
        line=line,
        column=column,
        context=ctx,
    )


def make_execution_error(cls: Type[_E], *, detail: str, instruction: Any, tape: Tape,
                         steps: int, output: bytes, **extra: Any) -> _E:
    pointer = tape.pointer
    cell = int(tape.cells[pointer])
    kind = type(instruction).__name__
    return cls(
        message=f"{cls.__name__}: {detail} ({kind} at step {steps}, pointer={pointer}, cell={cell})",
        instruction=instruction,
        pointer=pointer,
        cell=cell,
        steps=steps,
        output=output,
        **extra,
    )


def make_cancelled(*, reason: str, steps: int, output: bytes) -> ExecutionCancelled:
    return ExecutionCancelled(
        message=f"ExecutionCancelled: {reason} after {steps} steps",
        reason=reason,
        steps=steps,
        output=output,
    )
