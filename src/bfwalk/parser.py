from __future__ import annotations

import logging
from typing import List, Tuple, Union

from .errors import UNEXPECTED_CHARACTER, UNTERMINATED_LOOP, make_parse_error
from .instructions import COMMANDS, Comment, Instruction, Loop, Program

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(' \t\r\n\f\v')
COMMENT_START = '//'


def _as_text(source: Union[str, bytes, bytearray]) -> str:
    if isinstance(source, (bytes, bytearray)):
        # latin-1 keeps one character per byte, so positions stay byte offsets
        return bytes(source).decode('latin-1')
    if isinstance(source, str):
        return source
    raise TypeError(f"source must be str or bytes, not {type(source).__name__}")


def parse(source: Union[str, bytes, bytearray]) -> Program:
    """Parse program text into an instruction tree.

    Statements are matched in the order ``+ - > < . , [ //``; whitespace
    between statements is skipped. A comment runs to the next newline or to
    the end of the input.

    Open loops are tracked on an explicit stack rather than by recursion, so
    bracket nesting depth is bounded only by the source.

    Raises:
        ParseError: on an unrecognized character, a stray ``]``, or a ``[``
            that is never closed.
    """
    text = _as_text(source)
    length = len(text)

    # (position of '[', statements collected so far); the bottom entry is the top level
    stack: List[Tuple[int, List[Instruction]]] = [(-1, [])]
    pos = 0

    while pos < length:
        ch = text[pos]

        if ch in WHITESPACE:
            pos += 1
            continue

        node = COMMANDS.get(ch)
        if node is not None:
            stack[-1][1].append(node)
            pos += 1
            continue

        if ch == '[':
            stack.append((pos, []))
            pos += 1
            continue

        if ch == ']' and len(stack) > 1:
            _, body = stack.pop()
            stack[-1][1].append(Loop(tuple(body)))
            pos += 1
            continue

        if text.startswith(COMMENT_START, pos):
            end = text.find('\n', pos + len(COMMENT_START))
            stack[-1][1].append(Comment())
            pos = length if end == -1 else end + 1
            continue

        if len(stack) > 1:
            raise make_parse_error(source=text, position=pos, reason=UNTERMINATED_LOOP,
                                   opened_at=stack[-1][0])
        raise make_parse_error(source=text, position=pos, reason=UNEXPECTED_CHARACTER)

    if len(stack) > 1:
        raise make_parse_error(source=text, position=length, reason=UNTERMINATED_LOOP,
                               opened_at=stack[-1][0])

    program = Program(tuple(stack[0][1]))
    logger.debug("Parsed %d top-level instructions from %d characters", len(program), length)
    return program
