"""
stackvm — ALU Operations

Unsigned 8-bit arithmetic with wrap-around. Each function takes the two
popped operands in pop order (lhs = first popped, i.e. the old top of
stack; rhs = second popped) and returns ``(result_byte, overflow)``.

Only ADD and SUB report overflow to the machine state; MUL computes the
flag too but the engine discards it, so a wrapped product is silent.
"""

from ..config import BYTE_MASK
from ..errors import DivisionByZero


def add8(lhs: int, rhs: int) -> tuple:
    """lhs + rhs mod 256. Overflow = unsigned carry out of bit 7."""
    result = lhs + rhs
    return (result & BYTE_MASK, result > BYTE_MASK)


def sub8(lhs: int, rhs: int) -> tuple:
    """lhs - rhs mod 256. Overflow = borrow (rhs > lhs)."""
    result = lhs - rhs
    return (result & BYTE_MASK, result < 0)


def mul8(lhs: int, rhs: int) -> tuple:
    """lhs * rhs mod 256."""
    result = lhs * rhs
    return (result & BYTE_MASK, result > BYTE_MASK)


def div8(lhs: int, rhs: int) -> int:
    """Integer quotient lhs // rhs. Never overflows for unsigned bytes."""
    if rhs == 0:
        raise DivisionByZero(lhs)
    return (lhs // rhs) & BYTE_MASK
