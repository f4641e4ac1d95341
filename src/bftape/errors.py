"""Exception hierarchy for bftape.

Load errors are raised while building the jump table, before a single
instruction runs. Pointer and cell wraparound are defined behaviour and
never raise.
"""

from typing import Sequence


class BrainfuckError(Exception):
    """Base class for all bftape errors."""


class ProgramLoadError(BrainfuckError, ValueError):
    """The program cannot be executed because its brackets do not match."""


class UnmatchedClosingBracketError(ProgramLoadError):
    """A `]` was found with no open `[` before it."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Unmatched closing bracket at position {position}")


class UnmatchedOpeningBracketError(ProgramLoadError):
    """One or more `[` were still open at the end of the program."""

    def __init__(self, positions: Sequence[int]):
        self.positions = list(positions)
        listed = ", ".join(str(p) for p in self.positions)
        super().__init__(f"Unmatched opening bracket(s) at position(s) {listed}")


class UnimplementedInstructionError(BrainfuckError, AssertionError):
    """An instruction outside the recognized alphabet reached the engine.

    Sanitized programs never contain one, so this signals an internal
    consistency failure rather than bad user input.
    """

    def __init__(self, position: int, symbol: str):
        self.position = position
        self.symbol = symbol
        super().__init__(f"Unimplemented instruction {symbol!r} at position {position}")


class StepLimitExceeded(BrainfuckError, RuntimeError):
    """The engine ran past its configured step limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Max steps ({limit}) exceeded")
