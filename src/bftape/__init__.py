"""bftape: a tape-based interpreter for a bracket-structured esoteric language.

Programs are built from seven symbols: `+` and `-` change the current cell,
`<` and `>` move the data pointer, `.` writes the current cell as a byte, and
`[`/`]` form loops tested against zero.

Architecture:
    SOURCE -> CLEANUP -> DECODE -> JUMP TABLE -> FETCH -> DISPATCH -> STATE
                 |          |           |                                |
            [sanitize] [Op enum]  [stack match]              [30,000-cell tape]

Modules:
    sanitize: cleanup() and the recognized ALPHABET
    instructions: Op enumeration and decoding
    jumps: JumpTable and build_jump_table()
    state: Tape, ExecutionState, unsigned pointer arithmetic
    engine: Engine fetch-execute loop and run()
    errors: Exception hierarchy
"""

__version__ = "0.1.0"

from .errors import (
    BrainfuckError,
    ProgramLoadError,
    StepLimitExceeded,
    UnimplementedInstructionError,
    UnmatchedClosingBracketError,
    UnmatchedOpeningBracketError,
)
from .sanitize import ALPHABET, cleanup
from .instructions import Op, decode
from .jumps import JumpTable, build_jump_table
from .state import TAPE_SIZE, ExecutionState, Tape
from .engine import Engine, HaltReason, TraceEntry, run

__all__ = [
    "ALPHABET",
    "BrainfuckError",
    "Engine",
    "ExecutionState",
    "HaltReason",
    "JumpTable",
    "Op",
    "ProgramLoadError",
    "StepLimitExceeded",
    "TAPE_SIZE",
    "Tape",
    "TraceEntry",
    "UnimplementedInstructionError",
    "UnmatchedClosingBracketError",
    "UnmatchedOpeningBracketError",
    "build_jump_table",
    "cleanup",
    "decode",
    "run",
]
