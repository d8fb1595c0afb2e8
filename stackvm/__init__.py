"""
stackvm — minimal byte-stack virtual machine
=============================================
A teaching-scale bytecode interpreter: a closed instruction set, an
append-only program container and an engine that runs them against a
128-byte stack.

Modules:
    - instructions.py: Instruction variants + StdFunc call table
    - program.py:      append-only list, out-of-range index → Halt
    - mem/stack.py:    bounded ByteStack (checked push/pop)
    - cpu/state.py:    MachineState (stack, program_pointer, overflow)
    - cpu/alu.py:      wrapping 8-bit arithmetic
    - vm.py:           fetch/decode/execute loop, StopReason, RunResult
    - trace.py:        text dump of machine state
"""

__version__ = "0.1.0"

from .errors import (
    VMError, VMFault, StackOverflow, StackUnderflow, DivisionByZero,
    InvalidStandardCallId,
)
from .instructions import (
    Instruction, Push, PushString, Pop, Add, Sub, Mul, Div,
    JumpIfEqual, JumpIfNotEqual, Jump, StandardCall, Halt, StdFunc,
)
from .program import Program
from .cpu.state import MachineState
from .periph.output import OutputSink, BufferSink, StreamSink
from .trace import render_state
from .vm import StackVM, StopReason, RunResult


def run_program(program: Program, *, output: OutputSink = None,
                trace: bool = False, max_steps: int = None) -> RunResult:
    """Run program on a fresh machine.

    Returns the RunResult; the machine itself is discarded, so pass a
    BufferSink as output to inspect what the program printed.
    """
    vm = StackVM(output=output)
    return vm.run(program, trace=trace, max_steps=max_steps)
