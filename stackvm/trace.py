"""
stackvm — Trace / Inspector

Read-only text rendering of machine state for debugging. Nothing here
mutates state; the engine calls these only when tracing is enabled.
"""

from .config import TRACE_ROW_WIDTH


def render_state(state, row_width: int = TRACE_ROW_WIDTH) -> str:
    """Program cursor, logical stack size, then the stack as hex rows.

    Only bytes below the stack cursor are shown, row_width per row:

        Program Pointer: 3
        Stack [2]:
        0a 00
    """
    if row_width <= 0:
        raise ValueError(f"row_width must be positive, got {row_width}")
    data = state.stack.snapshot()
    lines = [
        f"Program Pointer: {state.program_pointer}",
        f"Stack [{len(data)}]:",
    ]
    for offset in range(0, len(data), row_width):
        row = data[offset:offset + row_width]
        lines.append(' '.join(f"{b:02x}" for b in row))
    return '\n'.join(lines)


def render_instruction(program_pointer: int, instruction) -> str:
    return f"Instruction: [{program_pointer:04d}] {instruction}"
