from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from itertools import zip_longest
from typing import ClassVar, Dict, Iterable, Iterator, List, Tuple, Union

# ---------------- Instruction tree ----------------
@dataclass(frozen=True)
class Increment:
    symbol: ClassVar[str] = '+'

@dataclass(frozen=True)
class Decrement:
    symbol: ClassVar[str] = '-'

@dataclass(frozen=True)
class PointerRight:
    symbol: ClassVar[str] = '>'

@dataclass(frozen=True)
class PointerLeft:
    symbol: ClassVar[str] = '<'

@dataclass(frozen=True)
class Output:
    symbol: ClassVar[str] = '.'

@dataclass(frozen=True)
class Input:
    symbol: ClassVar[str] = ','

@dataclass(frozen=True)
class Comment:
    pass  # parse artifact, no runtime effect

@dataclass(frozen=True, eq=False)
class Loop:
    body: Tuple["Instruction", ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.body, tuple):
            object.__setattr__(self, 'body', tuple(self.body))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Loop):
            return NotImplemented
        return _same_shape(self.body, other.body)

    def __hash__(self) -> int:
        return hash((Loop, tuple(_shape(self.body))))

    def __repr__(self) -> str:
        return f"Loop({emit(self.body, comments=True)!r})"

Instruction = Union[Increment, Decrement, PointerRight, PointerLeft, Output, Input, Loop, Comment]

COMMANDS: Dict[str, Instruction] = {
    '+': Increment(),
    '-': Decrement(),
    '>': PointerRight(),
    '<': PointerLeft(),
    '.': Output(),
    ',': Input(),
}


@dataclass(frozen=True, eq=False)
class Program:
    """Top-level instruction sequence produced by the parser.

    Equality, hashing and repr walk the tree with an explicit stack, so they
    work at any loop nesting depth.
    """

    body: Tuple[Instruction, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.body, tuple):
            object.__setattr__(self, 'body', tuple(self.body))

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.body)

    def __len__(self) -> int:
        return len(self.body)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return _same_shape(self.body, other.body)

    def __hash__(self) -> int:
        return hash((Program, tuple(_shape(self.body))))

    def __repr__(self) -> str:
        return f"Program({emit(self.body, comments=True)!r})"


_CLOSE = ']'


def _shape(body: Iterable[Instruction]) -> Iterator[object]:
    # Node types in source order, with _CLOSE after each loop body
    stack: List[Iterator[Instruction]] = [iter(body)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            yield _CLOSE
            continue
        yield type(node)
        if isinstance(node, Loop):
            stack.append(iter(node.body))


def _same_shape(a: Iterable[Instruction], b: Iterable[Instruction]) -> bool:
    return all(x == y for x, y in zip_longest(_shape(a), _shape(b)))


def _top(program: Union[Program, Iterable[Instruction]]) -> Iterable[Instruction]:
    return program.body if isinstance(program, Program) else program


# ---------------- Walk + emit + counts ----------------
def walk(program: Union[Program, Iterable[Instruction]]) -> Iterator[Instruction]:
    """Yield every instruction depth-first in source order, loops before their bodies."""
    stack: List[Iterator[Instruction]] = [iter(_top(program))]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        yield node
        if isinstance(node, Loop):
            stack.append(iter(node.body))


def emit(program: Union[Program, Iterable[Instruction]], *, comments: bool = False) -> str:
    out: List[str] = []
    stack: List[Iterator[Instruction]] = [iter(_top(program))]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            if stack:
                out.append(']')
            continue
        if isinstance(node, Loop):
            out.append('[')
            stack.append(iter(node.body))
        elif isinstance(node, Comment):
            if comments:
                out.append('//\n')
        else:
            out.append(node.symbol)
    return ''.join(out)


def count_instructions(program: Union[Program, Iterable[Instruction]]) -> Dict[str, int]:
    return dict(Counter(type(node).__name__ for node in walk(program)))


def max_depth(program: Union[Program, Iterable[Instruction]]) -> int:
    deepest = 0
    stack: List[Tuple[Iterator[Instruction], int]] = [(iter(_top(program)), 0)]
    while stack:
        it, depth = stack[-1]
        node = next(it, None)
        if node is None:
            stack.pop()
            continue
        if isinstance(node, Loop):
            deepest = max(deepest, depth + 1)
            stack.append((iter(node.body), depth + 1))
    return deepest
