"""Engine: fetch-execute loop for sanitized programs.

Execution pipeline:
    SOURCE -> CLEANUP -> DECODE -> JUMP TABLE -> FETCH -> DISPATCH -> STATE

A program is only loaded once its jump table has been built, so malformed
programs never execute a single instruction. The run halts silently as soon
as pc passes the last instruction or ptr leaves the tape.
"""

import io
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .errors import StepLimitExceeded, UnimplementedInstructionError
from .instructions import Op, decode
from .jumps import JumpTable, build_jump_table
from .sanitize import cleanup
from .state import TAPE_SIZE, ExecutionState, create_initial_state

logger = logging.getLogger(__name__)


class HaltReason:
    END_OF_PROGRAM = 'end-of-program'
    POINTER_OUT_OF_RANGE = 'pointer-out-of-range'
    STEP_LIMIT = 'step-limit'


@dataclass
class TraceEntry:
    """One executed step.

    Attributes:
        step: Step number (0-indexed)
        pc: Position of the executed instruction
        symbol: Instruction symbol
        ptr_before: Data pointer before the step
        ptr_after: Data pointer after the step
        cell_before: Cell under ptr_before before the step
        cell_after: Cell under ptr_after, None if ptr left the tape
        output: Byte written by this step, if any
    """
    step: int
    pc: int
    symbol: str
    ptr_before: int
    ptr_after: int
    cell_before: int
    cell_after: Optional[int]
    output: Optional[int] = None


class Engine:
    """Interpreter for one program at a time.

    Attributes:
        output: Binary sink for `.`; sys.stdout.buffer when None
        tape_size: Number of cells on the tape
        max_steps: Optional safety limit, unbounded when None
        tracing: Whether to record a TraceEntry per step
        state: Current execution state
        jumps: Jump table of the loaded program
        trace: Recorded trace entries
    """

    def __init__(
        self,
        output=None,
        tape_size: int = TAPE_SIZE,
        max_steps: Optional[int] = None,
        trace: bool = False
    ):
        if tape_size <= 0:
            raise ValueError(f"Tape size must be positive, got {tape_size}")
        self.output = output
        self.tape_size = tape_size
        self.max_steps = max_steps
        self.tracing = trace
        self.program: str = ""
        self.ops: Optional[Tuple[Op, ...]] = None
        self.jumps: Optional[JumpTable] = None
        self.state: Optional[ExecutionState] = None
        self.trace: List[TraceEntry] = []
        self.halt_reason: Optional[str] = None
        self._written = bytearray()
        self._pending_output: Optional[int] = None
        self._handlers: Dict[Op, Callable[[], None]] = {
            Op.INC: self._op_inc,
            Op.DEC: self._op_dec,
            Op.LEFT: self._op_left,
            Op.RIGHT: self._op_right,
            Op.OUTPUT: self._op_output,
            Op.JUMP_FORWARD: self._op_jump_forward,
            Op.JUMP_BACKWARD: self._op_jump_backward,
        }

    def load_program(self, source: str) -> None:
        """Clean up raw program text and load it.

        Raises:
            ProgramLoadError: If the brackets do not match
        """
        self.load_instructions(cleanup(source))

    def load_instructions(self, program: str) -> None:
        """Load an already sanitized program.

        Raises:
            ProgramLoadError: If the brackets do not match
            UnimplementedInstructionError: If program holds unknown symbols
        """
        self.program = ""
        self.ops = None
        self.jumps = None
        self.state = None
        self.trace = []
        self.halt_reason = None
        self._written = bytearray()

        ops = decode(program)
        jumps = build_jump_table(ops)

        self.program = program
        self.ops = ops
        self.jumps = jumps
        self.state = create_initial_state(self.tape_size)
        logger.debug("Loaded program: %d instruction(s), %d loop(s)", len(ops), len(jumps))

    def step(self) -> Optional[TraceEntry]:
        """Execute a single instruction.

        Returns:
            TraceEntry for the step, or None if the run has just halted or
            tracing is off

        Raises:
            RuntimeError: If no program loaded or engine halted
            StepLimitExceeded: If max_steps has been reached
        """
        if self.state is None:
            raise RuntimeError("No program loaded")
        if self.halt_reason is not None:
            raise RuntimeError("Engine is halted")

        state = self.state
        if state.pc >= len(self.ops):
            self._halt(HaltReason.END_OF_PROGRAM)
            return None
        if not state.pointer_in_range():
            self._halt(HaltReason.POINTER_OUT_OF_RANGE)
            return None

        if self.max_steps is not None and state.step_count >= self.max_steps:
            self._halt(HaltReason.STEP_LIMIT)
            raise StepLimitExceeded(self.max_steps)

        op = self.ops[state.pc]
        pre_state = state.snapshot()
        self._pending_output = None

        # Decoded programs only hold Op members; anything else is corruption.
        handler = self._handlers.get(op)
        if handler is None:
            raise UnimplementedInstructionError(state.pc, getattr(op, "value", op))
        handler()

        state.advance()
        state.step_count += 1

        if not self.tracing:
            return None
        post_state = state.snapshot()
        entry = TraceEntry(
            step=pre_state["step_count"],
            pc=pre_state["pc"],
            symbol=op.symbol,
            ptr_before=pre_state["ptr"],
            ptr_after=post_state["ptr"],
            cell_before=pre_state["cell"],
            cell_after=post_state["cell"],
            output=self._pending_output
        )
        self.trace.append(entry)
        return entry

    def run(self) -> bytes:
        """Run until pc or ptr leaves its range.

        Returns:
            All bytes written during the run

        Raises:
            RuntimeError: If no program loaded
            StepLimitExceeded: If max_steps is set and reached
        """
        if self.state is None:
            raise RuntimeError("No program loaded")

        while self.halt_reason is None:
            self.step()

        return self.get_output()

    def _halt(self, reason: str) -> None:
        self.halt_reason = reason
        logger.debug("Halted after %d step(s): %s", self.state.step_count, reason)

    # =========================================================================
    # Instruction handlers
    # =========================================================================

    def _op_inc(self) -> None:
        self.state.tape.increment(self.state.ptr)

    def _op_dec(self) -> None:
        self.state.tape.decrement(self.state.ptr)

    def _op_left(self) -> None:
        self.state.move_left()

    def _op_right(self) -> None:
        self.state.move_right()

    def _op_output(self) -> None:
        byte = self.state.tape.read_byte(self.state.ptr)
        sink = self.output if self.output is not None else sys.stdout.buffer
        sink.write(byte)
        flush = getattr(sink, "flush", None)
        if flush is not None:
            flush()
        self._written.extend(byte)
        self._pending_output = byte[0]

    def _op_jump_forward(self) -> None:
        if self.state.cell == 0:
            self.state.pc = self.jumps.right(self.state.pc)

    def _op_jump_backward(self) -> None:
        if self.state.cell != 0:
            self.state.pc = self.jumps.left(self.state.pc)

    # =========================================================================
    # Accessors
    # =========================================================================

    def _require_state(self) -> ExecutionState:
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state

    def get_cell(self, index: int) -> int:
        return self._require_state().tape[index]

    def get_tape(self, start: int = 0, end: Optional[int] = None) -> bytes:
        return self._require_state().tape.dump(start, end)

    def get_output(self) -> bytes:
        return bytes(self._written)

    def get_pc(self) -> int:
        return self._require_state().pc

    def get_ptr(self) -> int:
        return self._require_state().ptr

    def get_step_count(self) -> int:
        if self.state is None:
            return 0
        return self.state.step_count

    def is_halted(self) -> bool:
        if self.state is None:
            return True
        return self.halt_reason is not None

    def print_trace(self, file=None) -> None:
        """Print the recorded trace in human-readable format."""
        file = file if file is not None else sys.stdout
        print("=" * 60, file=file)
        print("EXECUTION TRACE", file=file)
        print("=" * 60, file=file)

        for entry in self.trace:
            line = f"[Step {entry.step}] PC={entry.pc} '{entry.symbol}'"
            if entry.ptr_before != entry.ptr_after:
                line += f"  PTR: {entry.ptr_before} -> {entry.ptr_after}"
            else:
                line += f"  PTR={entry.ptr_before}"
            if entry.cell_before != entry.cell_after and entry.ptr_before == entry.ptr_after:
                line += f"  CELL: {entry.cell_before} -> {entry.cell_after}"
            if entry.output is not None:
                line += f"  OUT={entry.output}"
            print(line, file=file)

        print("=" * 60, file=file)
        if self.state:
            print(f"  Steps: {self.get_step_count()}", file=file)
            print(f"  PC: {self.state.pc}", file=file)
            print(f"  PTR: {self.state.ptr}", file=file)
            print(f"  Halt: {self.halt_reason}", file=file)

    def get_summary(self) -> Dict:
        """Get execution summary.

        Returns:
            Dictionary with step count, final pointers, halt reason and output
        """
        return {
            "steps": self.get_step_count(),
            "pc": self.state.pc if self.state else 0,
            "ptr": self.state.ptr if self.state else 0,
            "halt_reason": self.halt_reason,
            "output": self.get_output(),
            "trace_length": len(self.trace),
        }


def run(source: str, output=None, **kwargs) -> bytes:
    """Clean up, load and run source in a fresh Engine.

    Output goes to `output` when given and is always returned as bytes.
    """
    engine = Engine(output=output if output is not None else io.BytesIO(), **kwargs)
    engine.load_program(source)
    return engine.run()
