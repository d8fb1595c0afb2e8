"""
Fault types raised by the stack machine.

Every fatal execution condition has its own class so callers can tell
them apart. A fault is raised by the component that detects it (the
stack, the ALU, the standard-call decoder) and located by the engine,
which attaches the program position and the instruction before it
propagates.
"""

from typing import Optional

__all__ = [
    'VMError', 'VMFault', 'StackOverflow', 'StackUnderflow',
    'DivisionByZero', 'InvalidStandardCallId',
]


class VMError(Exception):
    """Base class for all stackvm errors."""


class VMFault(VMError):
    """Unrecoverable execution fault. Stops the run."""

    def __init__(self, message: str, program_pointer: Optional[int] = None,
                 instruction=None):
        self.message = message
        self.program_pointer = program_pointer
        self.instruction = instruction
        super().__init__(self._format())

    @property
    def kind(self) -> str:
        return type(self).__name__

    def locate(self, program_pointer: int, instruction) -> 'VMFault':
        """Attach the faulting position. Returns self for re-raising."""
        self.program_pointer = program_pointer
        self.instruction = instruction
        self.args = (self._format(),)
        return self

    def _format(self) -> str:
        if self.program_pointer is None:
            return self.message
        if self.instruction is None:
            return f"{self.message} at pc {self.program_pointer}"
        return f"{self.message} at pc {self.program_pointer} ({self.instruction})"


class StackOverflow(VMFault):
    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Stack overflow (capacity {capacity})")


class StackUnderflow(VMFault):
    def __init__(self):
        super().__init__("Stack underflow")


class DivisionByZero(VMFault):
    def __init__(self, dividend: int):
        self.dividend = dividend
        super().__init__(f"Division by zero ({dividend} / 0)")


class InvalidStandardCallId(VMFault):
    def __init__(self, call_id):
        self.call_id = call_id
        super().__init__(f"Invalid standard call id: {call_id!r}")
