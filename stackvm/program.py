"""
stackvm — Program Container

Ordered, append-only list of instructions, indexed from 0.

get() is total: any index outside [0, len) yields Halt(), so a program
may omit its trailing terminator and an over-jump simply stops the run.
"""

from typing import Iterable, Iterator, List

from .instructions import Instruction, Halt

_HALT = Halt()


class Program:
    """Append-only instruction sequence."""

    def __init__(self):
        self._instructions: List[Instruction] = []

    @classmethod
    def from_instructions(cls, instructions: Iterable[Instruction]) -> 'Program':
        program = cls()
        for instruction in instructions:
            program.push(instruction)
        return program

    def push(self, instruction: Instruction):
        """Append one instruction. Jump targets are not checked."""
        if not isinstance(instruction, Instruction):
            raise TypeError(f"Expected Instruction, got {type(instruction).__name__}")
        self._instructions.append(instruction)

    def get(self, index: int) -> Instruction:
        """Instruction at index, or Halt() when out of range. Never raises."""
        if 0 <= index < len(self._instructions):
            return self._instructions[index]
        return _HALT

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def listing(self) -> str:
        """Numbered mnemonic listing, one instruction per line."""
        return '\n'.join(f"{i:4d}  {instr}" for i, instr in enumerate(self._instructions))
