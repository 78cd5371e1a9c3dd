"""
Instruction set for the tape machine.

Each instruction kind is a small frozen dataclass produced by the
translator and consumed by the machine. Jump instructions carry their
resolved target index inline, so the machine never consults a side table
while running.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Union


CELL_MASK = 0xFF          # cells are bytes, arithmetic wraps mod 256
INPUT_END_VALUE = 0xFF    # written by Input once the input is exhausted


# ──────────────────────────────────────────────
# Data instructions
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Add:
    amount: int = 1

    def __str__(self) -> str:
        return "+" if self.amount == 1 else f"+ x{self.amount}"


@dataclass(frozen=True)
class Sub:
    amount: int = 1

    def __str__(self) -> str:
        return "-" if self.amount == 1 else f"- x{self.amount}"


@dataclass(frozen=True)
class Move:
    offset: int                 # signed; negative moves left

    def __str__(self) -> str:
        sym = ">" if self.offset >= 0 else "<"
        n = abs(self.offset)
        return sym if n == 1 else f"{sym} x{n}"


@dataclass(frozen=True)
class Input:
    def __str__(self) -> str:
        return ","


@dataclass(frozen=True)
class Output:
    def __str__(self) -> str:
        return "."


# ──────────────────────────────────────────────
# Loop boundaries
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class JumpIfZero:
    """Loop open. ``target`` is the index of the matching JumpIfNonZero."""
    target: int

    def __str__(self) -> str:
        return f"[  -> {self.target:04d}"


@dataclass(frozen=True)
class JumpIfNonZero:
    """Loop close. ``target`` is the index of the matching JumpIfZero."""
    target: int

    def __str__(self) -> str:
        return f"]  -> {self.target:04d}"


Instruction = Union[Add, Sub, Move, Input, Output, JumpIfZero, JumpIfNonZero]
Jump = (JumpIfZero, JumpIfNonZero)


# ──────────────────────────────────────────────
# Source symbol table (brackets are handled by the translator)
# ──────────────────────────────────────────────

SYMBOLS: Dict[str, Instruction] = {
    "+": Add(1),
    "-": Sub(1),
    ">": Move(1),
    "<": Move(-1),
    ".": Output(),
    ",": Input(),
}

LOOP_OPEN = "["
LOOP_CLOSE = "]"


def is_jump(instr: Instruction) -> bool:
    return isinstance(instr, Jump)
