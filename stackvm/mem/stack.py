"""
stackvm — Bounded Byte Stack

Fixed-capacity byte buffer with an explicit logical-length cursor.

Layout:
  _mem[0]              bottom of stack
  _mem[sp - 1]         logical top
  _mem[sp .. cap - 1]  unused (stale bytes from earlier pushes stay here)

The bounds checks are part of the contract: a push at capacity raises
StackOverflow, a pop or peek on an empty stack raises StackUnderflow.
Neither leaves the stack modified.
"""

from typing import List

from ..config import STACK_SIZE, BYTE_MASK
from ..errors import StackOverflow, StackUnderflow


class ByteStack:
    """Bounded LIFO of unsigned bytes, backed by a flat bytearray."""

    __slots__ = ('_mem', '_sp')

    def __init__(self, capacity: int = STACK_SIZE):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._mem = bytearray(capacity)
        self._sp = 0

    # --- Core push/pop ---

    def push(self, value: int):
        """Push one byte. Value is masked to 8 bits."""
        if self._sp >= len(self._mem):
            raise StackOverflow(len(self._mem))
        self._mem[self._sp] = value & BYTE_MASK
        self._sp += 1

    def pop(self) -> int:
        """Pop and return the top byte."""
        if self._sp == 0:
            raise StackUnderflow()
        self._sp -= 1
        return self._mem[self._sp]

    def peek(self) -> int:
        """Return the top byte without removing it."""
        if self._sp == 0:
            raise StackUnderflow()
        return self._mem[self._sp - 1]

    # --- Introspection ---

    @property
    def capacity(self) -> int:
        return len(self._mem)

    @property
    def pointer(self) -> int:
        """Stack cursor: index one past the logical top."""
        return self._sp

    @property
    def is_empty(self) -> bool:
        return self._sp == 0

    @property
    def is_full(self) -> bool:
        return self._sp == len(self._mem)

    def __len__(self) -> int:
        return self._sp

    def to_list(self) -> List[int]:
        """Logical contents, bottom to top."""
        return list(self._mem[:self._sp])

    def snapshot(self) -> bytes:
        """Copy of the logical contents as bytes, bottom to top."""
        return bytes(self._mem[:self._sp])

    def __repr__(self) -> str:
        return f"ByteStack({self.to_list()!r}, capacity={len(self._mem)})"

    # --- Reset ---

    def clear(self):
        """Zero the whole buffer and reset the cursor."""
        for i in range(len(self._mem)):
            self._mem[i] = 0
        self._sp = 0
