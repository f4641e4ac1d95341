"""Tape and execution state for the bftape engine.

State Components:
    - Tape: 30,000 byte cells, zero-initialized, fixed length
    - pc: Instruction pointer into the program
    - ptr: Data pointer into the tape
    - step_count: Number of executed steps

Two separate policies apply to the data pointer:
    - Arithmetic: ptr is an unsigned 64-bit value, so moving left from 0
      wraps to 2**64 - 1 instead of going negative.
    - Range: before every step ptr is compared to the tape length. A pointer
      outside the tape ends the run; it is never dereferenced.

Cells wrap modulo 256 on increment and decrement.
"""

from dataclasses import dataclass, field
from typing import Optional


TAPE_SIZE = 30000
CELL_MODULUS = 256

# Width of the pc/ptr integers; matches a 64-bit usize.
POINTER_BITS = 64
POINTER_MAX = (1 << POINTER_BITS) - 1


def wrapping_add(value: int, amount: int = 1) -> int:
    """Add with unsigned POINTER_BITS wraparound."""
    return (value + amount) & POINTER_MAX


def wrapping_sub(value: int, amount: int = 1) -> int:
    """Subtract with unsigned POINTER_BITS wraparound (0 - 1 == POINTER_MAX)."""
    return (value - amount) & POINTER_MAX


class Tape:
    """Fixed-length sequence of byte cells.

    Indexing outside the tape raises IndexError; the engine checks range
    before each access so that never happens during a run.
    """

    def __init__(self, size: int = TAPE_SIZE):
        if size <= 0:
            raise ValueError(f"Tape size must be positive, got {size}")
        self._cells = bytearray(size)

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> int:
        self._check(index)
        return self._cells[index]

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self._cells)

    def increment(self, index: int) -> int:
        self._check(index)
        value = (self._cells[index] + 1) % CELL_MODULUS
        self._cells[index] = value
        return value

    def decrement(self, index: int) -> int:
        self._check(index)
        value = (self._cells[index] - 1) % CELL_MODULUS
        self._cells[index] = value
        return value

    def read_byte(self, index: int) -> bytes:
        """Return the cell at index as a one-byte bytes object."""
        self._check(index)
        return bytes(self._cells[index:index + 1])

    def dump(self, start: int = 0, end: Optional[int] = None) -> bytes:
        return bytes(self._cells[start:end])

    def _check(self, index: int) -> None:
        if not self.in_range(index):
            raise IndexError(f"Tape index out of range: {index}")


@dataclass
class ExecutionState:
    """Mutable execution state of one run.

    Attributes:
        tape: Memory tape owned by this run
        pc: Instruction pointer
        ptr: Data pointer (unsigned, see module docstring)
        step_count: Number of executed steps
    """
    tape: Tape = field(default_factory=Tape)
    pc: int = 0
    ptr: int = 0
    step_count: int = 0

    @property
    def cell(self) -> int:
        """Value of the cell under ptr."""
        return self.tape[self.ptr]

    def pointer_in_range(self) -> bool:
        return self.tape.in_range(self.ptr)

    def move_left(self) -> None:
        self.ptr = wrapping_sub(self.ptr)

    def move_right(self) -> None:
        self.ptr = wrapping_add(self.ptr)

    def advance(self) -> None:
        self.pc = wrapping_add(self.pc)

    def snapshot(self) -> dict:
        """Copy of the scalar state for tracing.

        The tape is left out; only the cell under ptr is recorded.
        """
        return {
            "pc": self.pc,
            "ptr": self.ptr,
            "cell": self.cell if self.pointer_in_range() else None,
            "step_count": self.step_count,
        }

    def __str__(self) -> str:
        cell = self.cell if self.pointer_in_range() else "-"
        return f"[Step {self.step_count}] PC={self.pc} PTR={self.ptr} CELL={cell}"


def create_initial_state(tape_size: int = TAPE_SIZE) -> ExecutionState:
    """Create a fresh state: zeroed tape, pc = 0, ptr = 0."""
    return ExecutionState(tape=Tape(tape_size))
