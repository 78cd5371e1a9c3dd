"""
Tape memory — zero-indexed byte cells that grow to the right.

Starts as a single zero cell. Moving the cursor past the end appends
zero cells; the tape never shrinks and there is no upper bound.
"""

from typing import List

from .instructions import CELL_MASK


class Tape:
    """Right-growing bytearray with wraparound cell arithmetic."""

    def __init__(self, initial: bytes = b"\x00"):
        self._cells = bytearray(initial or b"\x00")

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index):
        return self._cells[index]

    # --- Core read/write ---

    def read(self, index: int) -> int:
        return self._cells[index]

    def write(self, index: int, value: int):
        self._cells[index] = value & CELL_MASK

    def add(self, index: int, amount: int):
        """Add ``amount`` (may be negative) to a cell, wrapping mod 256."""
        self._cells[index] = (self._cells[index] + amount) & CELL_MASK

    def ensure(self, index: int):
        """Grow with zero cells until ``index`` is in bounds."""
        missing = index + 1 - len(self._cells)
        if missing > 0:
            self._cells.extend(bytes(missing))

    # --- Inspection ---

    def to_bytes(self) -> bytes:
        return bytes(self._cells)

    def window(self, center: int, radius: int = 8) -> List[int]:
        start = max(0, center - radius)
        return list(self._cells[start:center + radius + 1])

    def __repr__(self) -> str:
        return f"Tape({len(self._cells)} cells)"
