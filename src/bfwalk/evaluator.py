from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .errors import (
    InputExhausted,
    InvalidInputCharacter,
    TapeOverflow,
    TapeUnderflow,
    make_cancelled,
    make_execution_error,
)
from .instructions import (
    Comment,
    Decrement,
    Increment,
    Input,
    Instruction,
    Loop,
    Output,
    PointerLeft,
    PointerRight,
    Program,
)
from .state import Tape
from .streams import as_sink, as_source

logger = logging.getLogger(__name__)

STEP_BUDGET_EXHAUSTED = 'step budget exhausted'
DEADLINE_EXCEEDED = 'deadline exceeded'
CANCELLED = 'cancelled'


@dataclass(frozen=True)
class ExecutionLimits:
    """Cooperative stop conditions, checked before every instruction.

    max_steps counts executed instructions, including each loop condition
    check. timeout is wall-clock seconds from the start of the run. cancel is
    an event another thread may set to stop the run.
    """

    max_steps: Optional[int] = None
    timeout: Optional[float] = None
    cancel: Optional[threading.Event] = None

    def __post_init__(self) -> None:
        if self.max_steps is not None and self.max_steps < 0:
            raise ValueError("max_steps must be >= 0")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")


class _Guard:
    def __init__(self, limits: ExecutionLimits):
        self.max_steps = limits.max_steps
        self.deadline = None if limits.timeout is None else time.monotonic() + limits.timeout
        self.cancel = limits.cancel

    def reason(self, steps: int) -> Optional[str]:
        if self.cancel is not None and self.cancel.is_set():
            return CANCELLED
        if self.max_steps is not None and steps >= self.max_steps:
            return STEP_BUDGET_EXHAUSTED
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DEADLINE_EXCEEDED
        return None


def execute(program: Program, tape: Tape, input: Any = None, output: Any = None, *,
            limits: Optional[ExecutionLimits] = None) -> bytes:
    """Run ``program`` against ``tape`` and return every byte it printed.

    The tree is walked with an explicit stack of (body, next index, loop)
    frames, so loop nesting never consumes Python call stack. A loop frame
    that reaches the end of its body re-checks the current cell and either
    restarts the body or is popped.

    ``tape.pointer`` is updated in place, including when an error aborts the
    run. Bytes already sent to ``output`` stay there.

    Raises:
        TapeOverflow, TapeUnderflow: pointer moved off either end of the tape.
        InputExhausted: ``,`` with no input left.
        InvalidInputCharacter: ``,`` read a character above U+00FF.
        ExecutionCancelled: one of ``limits`` tripped.
    """
    source = as_source(input)
    sink = as_sink(output)
    guard = _Guard(limits if limits is not None else ExecutionLimits())

    cells = tape.cells
    length = len(cells)
    out = bytearray()
    steps = 0

    top = program.body if isinstance(program, Program) else tuple(program)
    frames: List[List[Any]] = [[top, 0, None]]
    logger.debug("Executing %d top-level instructions on a %d-cell tape", len(top), length)

    def fail(cls, detail: str, node: Instruction, **extra: Any):
        return make_execution_error(cls, detail=detail, instruction=node, tape=tape,
                                    steps=steps, output=bytes(out), **extra)

    def check() -> None:
        stop = guard.reason(steps)
        if stop is not None:
            logger.debug("Execution stopped: %s after %d steps", stop, steps)
            raise make_cancelled(reason=stop, steps=steps, output=bytes(out))

    while frames:
        frame = frames[-1]
        body: Tuple[Instruction, ...] = frame[0]
        index: int = frame[1]

        if index == len(body):
            if frame[2] is None:
                frames.pop()
                continue
            # Full pass through the body done; re-check the loop condition
            check()
            steps += 1
            if cells[tape.pointer]:
                frame[1] = 0
            else:
                frames.pop()
            continue

        check()
        node = body[index]
        frame[1] = index + 1
        steps += 1
        kind = type(node)

        if kind is Increment:
            cells[tape.pointer] = (int(cells[tape.pointer]) + 1) & 0xFF
        elif kind is Decrement:
            cells[tape.pointer] = (int(cells[tape.pointer]) - 1) & 0xFF
        elif kind is PointerRight:
            if tape.pointer + 1 >= length:
                raise fail(TapeOverflow, f"pointer cannot move past cell {length - 1}", node)
            tape.pointer += 1
        elif kind is PointerLeft:
            if tape.pointer == 0:
                raise fail(TapeUnderflow, "pointer cannot move left of cell 0", node)
            tape.pointer -= 1
        elif kind is Output:
            value = int(cells[tape.pointer])
            sink.write_byte(value)
            out.append(value)
        elif kind is Input:
            ch = source.next_char()
            if ch is None:
                raise fail(InputExhausted, "no input left to read", node)
            code = ord(ch)
            if code > 0xFF:
                raise fail(InvalidInputCharacter, f"input character {ch!r} (U+{code:04X}) does not fit in a cell",
                           node, value=ch)
            cells[tape.pointer] = code
        elif kind is Loop:
            if cells[tape.pointer]:
                frames.append([node.body, 0, node])
        elif kind is Comment:
            pass
        else:
            raise TypeError(f"not an instruction: {node!r}")

    logger.debug("Execution finished after %d steps, %d bytes of output", steps, len(out))
    return bytes(out)
