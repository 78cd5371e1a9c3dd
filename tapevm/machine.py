"""
Tape Machine — fetch/decode/execute loop over a translated Program.

Execution model:
  1. Check the step budget
  2. Fetch the instruction at ip
  3. Dispatch on its kind → update tape, cursor, input/output
  4. Notify the tracer (if any)
  5. Advance ip by one (jumps have already overwritten it)

Termination reasons:
  - HALT:        ip ran past the last instruction
  - UNDERFLOW:   a Move would take the cursor below cell 0
  - STEP_LIMIT:  max_steps instructions executed and more remain
  - ERROR:       any other ExecutionError (e.g. raised by a tracer)

Every Machine owns its tape, cursors and output buffer, so independent
runs never share state.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Union

from .errors import ExecutionError, PointerUnderflow, StepBudgetExceeded
from .instructions import (
    Add, Sub, Move, Input, Output, JumpIfZero, JumpIfNonZero,
    INPUT_END_VALUE,
)
from .tape import Tape
from .trace import Tracer
from .translator import Program

__all__ = [
    'Machine', 'RunResult', 'StopReason', 'run',
    'ExecutionError', 'PointerUnderflow', 'StepBudgetExceeded',
]

log = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    UNDERFLOW = 'UNDERFLOW'
    STEP_LIMIT = 'STEP_LIMIT'
    ERROR = 'ERROR'


_ABORT_REASONS = {
    PointerUnderflow: StopReason.UNDERFLOW,
    StepBudgetExceeded: StopReason.STEP_LIMIT,
}


@dataclass(frozen=True)
class RunResult:
    """Outcome of one run. ``output`` holds everything written before the stop."""
    reason: StopReason
    output: bytes
    steps: int
    error: Optional[ExecutionError] = None

    @property
    def halted(self) -> bool:
        return self.reason is StopReason.HALT

    @property
    def aborted(self) -> bool:
        return not self.halted

    @property
    def text(self) -> str:
        return self.output.decode("latin-1")

    def raise_for_error(self):
        if self.error is not None:
            raise self.error


class Machine:
    """Tape machine state plus the interpreter loop.

    Usage:
        m = Machine(translate(",+[-.,+]"), b"abc", max_steps=10_000)
        result = m.run()
        result.output   # b"abc"
    """

    def __init__(self, program: Program, input: Union[bytes, str] = b"", *,
                 max_steps: Optional[int] = None, tracer: Optional[Tracer] = None):
        if isinstance(input, str):
            input = input.encode("utf-8")
        self.program = program
        self.input = bytes(input)
        self.max_steps = max_steps if max_steps is not None and max_steps >= 0 else None
        self.tracer = tracer

        self.tape = Tape()
        self.ip = 0
        self.cursor = 0
        self.input_ptr = 0
        self.output = bytearray()
        self.halted = False
        self.steps = 0

        self._dispatch: Dict[type, Callable] = self._build_dispatch()

    @property
    def cell(self) -> int:
        return self.tape.read(self.cursor)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason.HALT once halted, else None.

        Raises PointerUnderflow / StepBudgetExceeded on fatal conditions.
        """
        if self.ip >= len(self.program):
            self.halted = True
            return StopReason.HALT

        if self.max_steps is not None and self.steps >= self.max_steps:
            raise StepBudgetExceeded(self.ip, self.max_steps)

        here = self.ip
        instr = self.program[here]
        self._dispatch[type(instr)](instr)
        self.steps += 1

        if self.tracer is not None:
            self.tracer(self, here, instr)

        self.ip += 1
        return None

    def run(self) -> RunResult:
        """Run until halt or a fatal condition. Never raises ExecutionError."""
        try:
            while self.step() is None:
                pass
        except ExecutionError as e:
            log.info("run aborted after %d steps: %s", self.steps, e)
            return RunResult(_ABORT_REASONS.get(type(e), StopReason.ERROR), bytes(self.output), self.steps, e)

        log.debug("halted after %d steps, %d output bytes, %d tape cells",
                  self.steps, len(self.output), len(self.tape))
        return RunResult(StopReason.HALT, bytes(self.output), self.steps)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> dict:
        return {
            Add: self._op_add,
            Sub: self._op_sub,
            Move: self._op_move,
            Output: self._op_output,
            Input: self._op_input,
            JumpIfZero: self._op_jump_if_zero,
            JumpIfNonZero: self._op_jump_if_nonzero,
        }

    def _op_add(self, instr: Add):
        self.tape.add(self.cursor, instr.amount)

    def _op_sub(self, instr: Sub):
        self.tape.add(self.cursor, -instr.amount)

    def _op_move(self, instr: Move):
        new = self.cursor + instr.offset
        if new < 0:
            raise PointerUnderflow(self.ip, self.cursor, instr.offset)
        self.tape.ensure(new)
        self.cursor = new

    def _op_output(self, instr: Output):
        self.output.append(self.cell)

    def _op_input(self, instr: Input):
        if self.input_ptr < len(self.input):
            self.tape.write(self.cursor, self.input[self.input_ptr])
            self.input_ptr += 1
        else:
            self.tape.write(self.cursor, INPUT_END_VALUE)

    # Jumps land on the matching boundary; the ip increment in step()
    # then moves one past it.

    def _op_jump_if_zero(self, instr: JumpIfZero):
        if self.cell == 0:
            self.ip = instr.target

    def _op_jump_if_nonzero(self, instr: JumpIfNonZero):
        if self.cell != 0:
            self.ip = instr.target

    def __repr__(self) -> str:
        return (f"Machine(ip={self.ip}, cursor={self.cursor}, steps={self.steps}, "
                f"tape={len(self.tape)}, output={len(self.output)})")


def run(program: Program, input: Union[bytes, str] = b"", max_steps: Optional[int] = None,
        tracer: Optional[Tracer] = None) -> RunResult:
    """Execute ``program`` on a fresh Machine."""
    return Machine(program, input, max_steps=max_steps, tracer=tracer).run()
