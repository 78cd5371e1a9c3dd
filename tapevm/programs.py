"""
Built-in sample programs, selectable from the CLI with ``--example``.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class SampleProgram:
    name: str
    source: str
    description: str
    input: bytes = b""


PROGRAMS: Dict[str, SampleProgram] = {
    "hello": SampleProgram(
        name="hello",
        source=">>>>>+[-->-[>>+ >-----<<]< --<---]>-.>>>+.>>..+++[.>]<<<<.+++.------.<<-.>>>>+.",
        description="Prints 'Hello, World!' (relies on cell wraparound)",
    ),
    "cat": SampleProgram(
        name="cat",
        source=",+[-.,+]",
        description="Echoes input until the end-of-input sentinel (255)",
        input=b"cool cat :3",
    ),
    "overflow": SampleProgram(
        name="overflow",
        source="++++++++[->++++++++<]",
        description="Multiplies 8 x 8 into cell 1 (no output)",
    ),
}
