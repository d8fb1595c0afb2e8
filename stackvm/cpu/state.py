"""
stackvm — Machine State

The mutable execution context driven by the engine:

  stack            ByteStack, capacity 128, cursor = stack_pointer
  program_pointer  index of the next instruction to execute (>= 0)
  overflow         set by the most recent ADD/SUB, untouched by everything else

Created zeroed, mutated only by StackVM, discarded at the end of a session.
"""

from ..config import STACK_SIZE
from ..mem.stack import ByteStack
from ..trace import render_state


class MachineState:
    """Stack machine register set + byte stack."""

    __slots__ = ('stack', 'program_pointer', 'overflow')

    def __init__(self, stack_size: int = STACK_SIZE):
        self.stack = ByteStack(stack_size)
        self.program_pointer: int = 0
        self.overflow: bool = False

    @property
    def stack_pointer(self) -> int:
        return self.stack.pointer

    # --- Display ---

    def display(self) -> str:
        """One-line register summary for the engine's stop log lines."""
        return (f"PP={self.program_pointer:04d} SP={self.stack_pointer:03d} "
                f"OV={int(self.overflow)}")

    def __str__(self) -> str:
        return render_state(self)

    def reset(self):
        """Back to the power-on state."""
        self.stack.clear()
        self.program_pointer = 0
        self.overflow = False
