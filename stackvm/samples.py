"""
Hand-assembled sample programs used by the CLI driver.

No assembler exists; programs are built instruction by instruction
through Program.push(), the same way an embedding application would.
"""

from .instructions import (
    Push, PushString, Add, JumpIfEqual, Jump, StandardCall, StdFunc,
)
from .program import Program


def hello_program(text: str = "Hello, World!\n") -> Program:
    """Print text through PRINT_STRING."""
    program = Program()
    program.push(PushString(text))
    program.push(StandardCall(StdFunc.PRINT_STRING))
    return program


def count_program(limit: int = 10) -> Program:
    """Count from 0 up to limit, then print the counter.

    Equivalent to:
        i = 0
        while i != limit:
            i += 1
        print(i)
    """
    program = Program()
    program.push(Push(limit))                         # 0
    program.push(Push(0))                             # 1  i = 0
    program.push(JumpIfEqual(6))                      # 2  i == limit → done
    program.push(Push(1))                             # 3
    program.push(Add())                               # 4  i += 1
    program.push(Jump(2))                             # 5
    program.push(StandardCall(StdFunc.PRINT_U8))      # 6
    program.push(Push(ord('\n')))                     # 7
    program.push(StandardCall(StdFunc.PRINT_CHAR))    # 8
    return program


def overflow_program() -> Program:
    """Counting loop that jumps back one instruction too far.

    Every pass re-pushes the zero counter, so the comparison never
    matches and the stack grows until it overflows.
    """
    program = Program()
    program.push(Push(10))        # 0
    program.push(Push(0))         # 1
    program.push(JumpIfEqual(6))  # 2
    program.push(Push(1))         # 3
    program.push(Add())           # 4
    program.push(Jump(1))         # 5
    return program


SAMPLES = {
    'hello': hello_program,
    'count': count_program,
    'overflow': overflow_program,
}
