"""
tapevm — a small virtual machine for the eight-symbol tape language
====================================================================

Programs use eight significant symbols (``+ - > < . , [ ]``); every other
character is a comment.

Architecture:
    ┌──────────┐    ┌────────────┐    ┌──────────┐    ┌──────────┐
    │  Source  │───>│ Translator │───>│ Program  │───>│ Machine  │───> output bytes
    │  (text)  │    │ (1 pass)   │    │ (arena)  │    │ (tape)   │
    └──────────┘    └────────────┘    └──────────┘    └──────────┘

    - translator.py:   bracket matching, inline jump targets
    - instructions.py: frozen dataclass per instruction kind
    - machine.py:      fetch/decode/execute loop, step budget, RunResult
    - tape.py:         right-growing byte tape, wraparound cells
    - trace.py:        pluggable per-instruction tracers
"""

__version__ = "0.1.0"

from typing import Optional, Union

from .errors import (
    TapeVMError, TranslationError, UnmatchedBracket,
    ExecutionError, PointerUnderflow, StepBudgetExceeded,
)
from .instructions import (
    Add, Sub, Move, Input, Output, JumpIfZero, JumpIfNonZero, Instruction,
    INPUT_END_VALUE,
)
from .translator import Program, Translator, translate
from .machine import Machine, RunResult, StopReason, run
from .tape import Tape
from .trace import Tracer, LogTracer, TraceRecorder


def run_source(source: Union[str, bytes], input: Union[bytes, str] = b"", *,
               max_steps: Optional[int] = None, tracer: Optional[Tracer] = None) -> RunResult:
    """Translate and run program source in one call.

    Translation errors (UnmatchedBracket) are raised; execution aborts
    are reported in the returned RunResult.
    """
    return run(translate(source), input, max_steps=max_steps, tracer=tracer)
