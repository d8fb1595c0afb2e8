"""
stackvm — Execution Engine

Fetch / decode / execute loop for the byte-stack instruction set.

Execution model:
  1. Fetch the instruction at program_pointer (out of range → Halt)
  2. Dispatch on the instruction type to its handler
  3. Handler mutates the stack / overflow flag, writes to the output sink
  4. Advance program_pointer by one, unless the handler redirected it
  5. Halt returns False from step() and leaves program_pointer in place

Termination reasons (run):
  HALT:     Halt executed (explicitly or by running off the end)
  FAULT:    StackOverflow, StackUnderflow, DivisionByZero,
            InvalidStandardCallId
  TIMEOUT:  max_steps exhausted

Faults raised inside step() carry the program position and instruction.
run() never lets them escape: they come back in RunResult.fault.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from .config import DEFAULT_MAX_STEPS
from .cpu import alu
from .cpu.state import MachineState
from .errors import VMFault
from .instructions import (
    Instruction, Push, PushString, Pop, Add, Sub, Mul, Div,
    JumpIfEqual, JumpIfNotEqual, Jump, StandardCall, Halt,
    StdFunc, decode_std_call,
)
from .periph.output import OutputSink, StreamSink
from .program import Program
from .trace import render_instruction, render_state

log = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    FAULT = 'FAULT'
    TIMEOUT = 'TIMEOUT'


@dataclass
class RunResult:
    reason: StopReason
    steps: int
    fault: Optional[VMFault] = None

    @property
    def ok(self) -> bool:
        return self.reason is StopReason.HALT


class StackVM:
    """Byte-stack virtual machine.

    Usage:
        program = Program.from_instructions([
            PushString("Hi\\n"),
            StandardCall(StdFunc.PRINT_STRING),
        ])
        sink = BufferSink()
        vm = StackVM(output=sink)
        result = vm.run(program)
        print(sink.text)        # "Hi\\n"
    """

    def __init__(self, state: Optional[MachineState] = None,
                 output: Optional[OutputSink] = None):
        self.state = state if state is not None else MachineState()
        self.output = output if output is not None else StreamSink()

        self._trace = False
        self._trace_output: List[str] = []

        # Instruction type → handler. Handlers return True when they
        # redirected program_pointer themselves.
        self._dispatch: Dict[type, Callable[[Instruction], bool]] = self._build_dispatch()
        self._std_calls: Dict[StdFunc, Callable[[], None]] = {
            StdFunc.PRINT_U8: self._std_print_u8,
            StdFunc.PRINT_CHAR: self._std_print_char,
            StdFunc.PRINT_STRING: self._std_print_string,
            StdFunc.CLONE: self._std_clone,
        }

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self, program: Program) -> bool:
        """Execute exactly one instruction.

        Returns False iff the instruction was Halt. Raises a VMFault
        subclass (located at the current position) on a fatal condition;
        program_pointer then still points at the faulting instruction.
        """
        pc = self.state.program_pointer
        instruction = program.get(pc)

        if isinstance(instruction, Halt):
            return False

        handler = self._dispatch.get(type(instruction))
        if handler is None:
            raise TypeError(f"No handler for instruction {instruction!r}")

        try:
            jumped = handler(instruction)
        except VMFault as e:
            e.locate(pc, instruction)
            raise

        if not jumped:
            self.state.program_pointer = pc + 1
        return True

    def run(self, program: Program, trace: bool = False,
            max_steps: Optional[int] = DEFAULT_MAX_STEPS) -> RunResult:
        """Run until Halt, a fault, or max_steps instructions.

        Args:
            program: instructions to execute
            trace: record the instruction before and the state after each step;
                a trace switched on with enable_trace() stays on either way
            max_steps: instruction budget, None for unlimited

        Returns:
            RunResult with the stop reason, executed instruction count and
            the fault (if any)

        A traced run starts from an empty trace buffer.
        """
        if trace:
            self.enable_trace()
        if self._trace:
            self.clear_trace()
        steps = 0
        log.debug("run: %d instructions, max_steps=%s", len(program), max_steps)

        while max_steps is None or steps < max_steps:
            pc = self.state.program_pointer
            if self._trace:
                self._record(render_instruction(pc, program.get(pc)))
            try:
                running = self.step(program)
            except VMFault as e:
                log.warning("fault: %s [%s]", e, self.state.display())
                if self._trace:
                    self._record(f"  FAULT: {e}")
                return RunResult(StopReason.FAULT, steps, e)
            if not running:
                log.debug("halt after %d steps: %s", steps, self.state.display())
                return RunResult(StopReason.HALT, steps)
            steps += 1
            if self._trace:
                self._record(render_state(self.state) + '\n')

        log.info("step budget exhausted (%d): %s", steps, self.state.display())
        return RunResult(StopReason.TIMEOUT, steps)

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Signature: handler(instruction) -> jumped
    # lhs = first popped (old top of stack), rhs = second popped

    def _build_dispatch(self) -> dict:
        return {
            Push:           self._op_push,
            PushString:     self._op_push_string,
            Pop:            self._op_pop,
            Add:            self._op_add,
            Sub:            self._op_sub,
            Mul:            self._op_mul,
            Div:            self._op_div,
            JumpIfEqual:    self._op_jeq,
            JumpIfNotEqual: self._op_jne,
            Jump:           self._op_jmp,
            StandardCall:   self._op_std_call,
        }

    # ── Stack ──

    def _op_push(self, instr: Push) -> bool:
        self.state.stack.push(instr.value)
        return False

    def _op_push_string(self, instr: PushString) -> bool:
        stack = self.state.stack
        stack.push(0)
        for byte in reversed(instr.data):
            stack.push(byte)
        return False

    def _op_pop(self, instr: Pop) -> bool:
        self.state.stack.pop()
        return False

    # ── Arithmetic ──

    def _pop_operands(self) -> tuple:
        lhs = self.state.stack.pop()
        rhs = self.state.stack.pop()
        return lhs, rhs

    def _op_add(self, instr: Add) -> bool:
        lhs, rhs = self._pop_operands()
        value, overflow = alu.add8(lhs, rhs)
        self.state.stack.push(value)
        self.state.overflow = overflow
        return False

    def _op_sub(self, instr: Sub) -> bool:
        lhs, rhs = self._pop_operands()
        value, overflow = alu.sub8(lhs, rhs)
        self.state.stack.push(value)
        self.state.overflow = overflow
        return False

    def _op_mul(self, instr: Mul) -> bool:
        lhs, rhs = self._pop_operands()
        value, _ = alu.mul8(lhs, rhs)
        self.state.stack.push(value)
        return False

    def _op_div(self, instr: Div) -> bool:
        lhs, rhs = self._pop_operands()
        self.state.stack.push(alu.div8(lhs, rhs))
        return False

    # ── Branches ──

    def _compare_and_restore(self) -> bool:
        """Pop two operands, push them back in original order, return lhs == rhs."""
        lhs, rhs = self._pop_operands()
        self.state.stack.push(rhs)
        self.state.stack.push(lhs)
        return lhs == rhs

    def _op_jeq(self, instr: JumpIfEqual) -> bool:
        if self._compare_and_restore():
            self.state.program_pointer = instr.target
            return True
        return False

    def _op_jne(self, instr: JumpIfNotEqual) -> bool:
        if not self._compare_and_restore():
            self.state.program_pointer = instr.target
            return True
        return False

    def _op_jmp(self, instr: Jump) -> bool:
        self.state.program_pointer = instr.target
        return True

    # ── Standard calls ──

    def _op_std_call(self, instr: StandardCall) -> bool:
        func = decode_std_call(instr.call_id)
        self._std_calls[func]()
        return False

    def _std_print_u8(self):
        self.output.write_text(str(self.state.stack.pop()))

    def _std_print_char(self):
        self.output.write_byte(self.state.stack.pop())

    def _std_print_string(self):
        stack = self.state.stack
        while not stack.is_empty:
            value = stack.pop()
            if value == 0:
                break
            self.output.write_byte(value)

    def _std_clone(self):
        self.state.stack.push(self.state.stack.peek())

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        """Enable instruction trace recording."""
        self._trace = enable

    def _record(self, line: str):
        self._trace_output.append(line)
        log.debug(line)

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def reset(self):
        """Full machine reset. The output sink is left alone."""
        self.state.reset()
        self._trace_output.clear()
