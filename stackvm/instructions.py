"""
stackvm — Instruction Set

Closed set of immutable instruction variants consumed by the engine.

  Mnemonic  Variant                 Operand
  PUSH      Push(value)             byte literal 0..255
  PUSHS     PushString(text)        Latin-1 text, laid out reversed + 0 terminator
  POP       Pop()
  ADD       Add()
  SUB       Sub()
  MUL       Mul()
  DIV       Div()
  JEQ       JumpIfEqual(target)     program index
  JNE       JumpIfNotEqual(target)  program index
  JMP       Jump(target)            program index
  CALL      StandardCall(call_id)   StdFunc id, checked at decode time
  HLT       Halt()

Jump targets are never validated against a program: a target past the
end lands on the implicit Halt.

Standard calls are looked up through STD_CALLS. An id that isn't in the
table is rejected with InvalidStandardCallId when the instruction is
executed, never reinterpreted.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

from .config import BYTE_MASK
from .errors import InvalidStandardCallId

__all__ = [
    'Instruction', 'Push', 'PushString', 'Pop', 'Add', 'Sub', 'Mul', 'Div',
    'JumpIfEqual', 'JumpIfNotEqual', 'Jump', 'StandardCall', 'Halt',
    'StdFunc', 'STD_CALLS', 'decode_std_call',
]


# ──────────────────────────────────────────────
# Standard call table
# ──────────────────────────────────────────────

class StdFunc(IntEnum):
    PRINT_U8 = 0x0      # pop, print as unsigned decimal
    PRINT_CHAR = 0x1    # pop, print as one character
    PRINT_STRING = 0x2  # pop + print until 0 or empty stack
    CLONE = 0x3         # duplicate top of stack


STD_CALLS: Dict[int, StdFunc] = {func.value: func for func in StdFunc}


def decode_std_call(call_id) -> StdFunc:
    """Map a numeric standard call id to its routine.

    Raises InvalidStandardCallId for anything not in STD_CALLS,
    including non-integers and bools.
    """
    if isinstance(call_id, bool) or not isinstance(call_id, int):
        raise InvalidStandardCallId(call_id)
    func = STD_CALLS.get(int(call_id))
    if func is None:
        raise InvalidStandardCallId(call_id)
    return func


def _check_index(name: str, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


# ──────────────────────────────────────────────
# Variants
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Instruction:
    """Base of all variants. Never executed directly."""

    MNEMONIC = '???'

    def __str__(self) -> str:
        return self.MNEMONIC


@dataclass(frozen=True)
class Push(Instruction):
    value: int

    MNEMONIC = 'PUSH'

    def __post_init__(self):
        _check_index('value', self.value)
        if self.value > BYTE_MASK:
            raise ValueError(f"Push value out of byte range: {self.value}")

    def __str__(self) -> str:
        return f"PUSH 0x{self.value:02x}"


@dataclass(frozen=True)
class PushString(Instruction):
    text: str

    MNEMONIC = 'PUSHS'

    def __post_init__(self):
        if not isinstance(self.text, str):
            raise TypeError(f"text must be a str, got {type(self.text).__name__}")
        try:
            self.text.encode('latin-1')
        except UnicodeEncodeError as e:
            raise ValueError(f"PushString text must be single-byte characters: {e}") from None

    @property
    def data(self) -> bytes:
        return self.text.encode('latin-1')

    def __str__(self) -> str:
        return f"PUSHS {self.text!r}"


@dataclass(frozen=True)
class Pop(Instruction):
    MNEMONIC = 'POP'


@dataclass(frozen=True)
class Add(Instruction):
    MNEMONIC = 'ADD'


@dataclass(frozen=True)
class Sub(Instruction):
    MNEMONIC = 'SUB'


@dataclass(frozen=True)
class Mul(Instruction):
    MNEMONIC = 'MUL'


@dataclass(frozen=True)
class Div(Instruction):
    MNEMONIC = 'DIV'


@dataclass(frozen=True)
class _Branch(Instruction):
    target: int

    def __post_init__(self):
        _check_index('target', self.target)

    def __str__(self) -> str:
        return f"{self.MNEMONIC} {self.target}"


@dataclass(frozen=True)
class JumpIfEqual(_Branch):
    MNEMONIC = 'JEQ'


@dataclass(frozen=True)
class JumpIfNotEqual(_Branch):
    MNEMONIC = 'JNE'


@dataclass(frozen=True)
class Jump(_Branch):
    MNEMONIC = 'JMP'


@dataclass(frozen=True)
class StandardCall(Instruction):
    call_id: int

    MNEMONIC = 'CALL'

    def __str__(self) -> str:
        call_id = self.call_id
        valid = isinstance(call_id, int) and not isinstance(call_id, bool)
        func = STD_CALLS.get(call_id) if valid else None
        if func is None:
            return f"CALL {self.call_id!r}"
        return f"CALL {func.name}"


@dataclass(frozen=True)
class Halt(Instruction):
    MNEMONIC = 'HLT'
