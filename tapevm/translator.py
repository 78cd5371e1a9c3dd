"""
Translator: program source → resolved instruction arena.

Single left-to-right scan. Significant symbols become instructions,
everything else is commentary. Loop brackets are matched with a stack of
open-loop indices; when a ``]`` closes a loop both boundaries get each
other's index as their inline jump target, so the result needs no
runtime lookup.

Unclosed ``[`` at end of source is rejected the same way as a stray
``]``.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Tuple, Union

from .errors import TranslationError, UnmatchedBracket
from .instructions import (
    Instruction, JumpIfZero, JumpIfNonZero, SYMBOLS, LOOP_OPEN, LOOP_CLOSE, is_jump,
)

__all__ = ['Program', 'Translator', 'TranslationError', 'UnmatchedBracket', 'translate']

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Program:
    """Immutable instruction sequence with resolved loop targets."""
    instructions: Tuple[Instruction, ...]
    jump_table: Mapping[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        table = {i: instr.target for i, instr in enumerate(self.instructions)
                 if is_jump(instr)}
        object.__setattr__(self, 'jump_table', MappingProxyType(table))

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def dump(self) -> str:
        """One line per instruction: ``0004: [  -> 0009``."""
        return "\n".join(f"{i:04d}: {instr}" for i, instr in enumerate(self.instructions))


class Translator:
    """Translates source text into a Program."""

    def __init__(self, source: Union[str, bytes]):
        if isinstance(source, (bytes, bytearray)):
            source = source.decode("latin-1")
        self.source = source
        self.line = 1
        self.col = 0

    def translate(self) -> Program:
        self.line = 1
        self.col = 0
        program: List[Instruction] = []
        # (instruction index, source position, line, col) of each open loop
        open_loops: List[Tuple[int, int, int, int]] = []

        for pos, ch in enumerate(self.source):
            if ch == "\n":
                self.line += 1
                self.col = 0
                continue
            self.col += 1

            instr = SYMBOLS.get(ch)
            if instr is not None:
                program.append(instr)
            elif ch == LOOP_OPEN:
                open_loops.append((len(program), pos, self.line, self.col))
                program.append(JumpIfZero(-1))  # patched when the loop closes
            elif ch == LOOP_CLOSE:
                if not open_loops:
                    raise UnmatchedBracket(LOOP_CLOSE, pos, self.line, self.col)
                start = open_loops.pop()[0]
                end = len(program)
                program[start] = JumpIfZero(end)
                program.append(JumpIfNonZero(start))
            # anything else is a comment

        if open_loops:
            _, pos, line, col = open_loops[-1]
            raise UnmatchedBracket(LOOP_OPEN, pos, line, col)

        log.debug("translated %d chars into %d instructions (%d lines)",
                  len(self.source), len(program), self.line)
        return Program(tuple(program))


def translate(source: Union[str, bytes]) -> Program:
    """Translate program source into a resolved Program."""
    return Translator(source).translate()
