import logging

from .api import RunOptions, RunResult, run_file, run_string
from .errors import (
    BFError,
    ExecutionCancelled,
    ExecutionError,
    InputExhausted,
    InvalidInputCharacter,
    ParseError,
    TapeOverflow,
    TapeUnderflow,
)
from .evaluator import ExecutionLimits, execute
from .instructions import (
    Comment,
    Decrement,
    Increment,
    Input,
    Loop,
    Output,
    PointerLeft,
    PointerRight,
    Program,
    count_instructions,
    emit,
)
from .parser import parse
from .state import DEFAULT_TAPE_LENGTH, Tape

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'parse',
    'execute',
    'emit',
    'count_instructions',
    'Program',
    'Increment',
    'Decrement',
    'PointerRight',
    'PointerLeft',
    'Output',
    'Input',
    'Loop',
    'Comment',
    'Tape',
    'DEFAULT_TAPE_LENGTH',
    'ExecutionLimits',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'BFError',
    'ParseError',
    'ExecutionError',
    'TapeOverflow',
    'TapeUnderflow',
    'InputExhausted',
    'InvalidInputCharacter',
    'ExecutionCancelled',
]
