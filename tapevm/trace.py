"""
Tracing collaborators for Machine.

A tracer is any callable ``tracer(machine, index, instruction)``; the
machine calls it after every executed instruction, with ``index`` being
where the instruction was fetched from. Two ready-made tracers:

  - LogTracer:      one DEBUG record per instruction on ``tapevm.trace``
  - TraceRecorder:  keeps the same lines in memory (tests, post-mortems)
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Callable, List, Optional

from .instructions import Instruction

if TYPE_CHECKING:
    from .machine import Machine

__all__ = ['Tracer', 'LogTracer', 'TraceRecorder', 'format_step']

Tracer = Callable[['Machine', int, Instruction], None]


def format_step(machine: Machine, index: int, instr: Instruction) -> str:
    """``0007: +        ptr=2 cell=65``"""
    return f"{index:04d}: {str(instr):8s} ptr={machine.cursor} cell={machine.cell}"


class LogTracer:
    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger("tapevm.trace")
        self.level = level

    def __call__(self, machine: Machine, index: int, instr: Instruction):
        if self.logger.isEnabledFor(self.level):
            self.logger.log(self.level, "%s", format_step(machine, index, instr))


class TraceRecorder:
    """Collects trace lines. ``tape_radius`` appends a tape window around the cursor."""

    def __init__(self, tape_radius: Optional[int] = None):
        self.tape_radius = tape_radius
        self.lines: List[str] = []

    def __call__(self, machine: Machine, index: int, instr: Instruction):
        line = format_step(machine, index, instr)
        if self.tape_radius is not None:
            line += f" tape={machine.tape.window(machine.cursor, self.tape_radius)}"
        self.lines.append(line)

    def get_trace(self) -> str:
        return "\n".join(self.lines)

    def clear(self):
        self.lines.clear()
