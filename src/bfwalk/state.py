from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

DEFAULT_TAPE_LENGTH = 32000


@dataclass(eq=False)
class Tape:
    """Machine memory: a fixed row of 8-bit cells plus the data pointer."""

    cells: np.ndarray
    pointer: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.cells, np.ndarray) or self.cells.dtype != np.uint8 or self.cells.ndim != 1:
            raise TypeError("cells must be a one-dimensional uint8 array")
        if len(self.cells) < 1:
            raise ValueError("tape length must be at least 1")
        if not 0 <= self.pointer < len(self.cells):
            raise ValueError(f"pointer {self.pointer} outside tape of length {len(self.cells)}")

    @classmethod
    def create(cls, length: int = DEFAULT_TAPE_LENGTH) -> "Tape":
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError("tape length must be an int")
        if length < 1:
            raise ValueError("tape length must be at least 1")
        return cls(cells=np.zeros(length, dtype=np.uint8))

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> int:
        return int(self.cells[index])

    @property
    def current(self) -> int:
        return int(self.cells[self.pointer])

    def snapshot(self, start: int = 0, stop: Optional[int] = None) -> List[int]:
        return [int(b) for b in self.cells[start:stop]]

    def used(self) -> int:
        # One past the highest non-zero cell
        nonzero = np.nonzero(self.cells)[0]
        return int(nonzero[-1]) + 1 if len(nonzero) else 0

    def reset(self) -> None:
        self.cells[:] = 0
        self.pointer = 0
