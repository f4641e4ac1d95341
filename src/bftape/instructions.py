"""Closed instruction set for the engine.

Each recognized symbol maps to exactly one Op member. Decoding happens once at
load time so the engine dispatches on enum members rather than raw characters.
"""

from enum import Enum
from typing import Tuple

from .errors import UnimplementedInstructionError


class Op(Enum):
    """One member per recognized symbol, valued by the symbol itself."""

    INC = "+"
    DEC = "-"
    LEFT = "<"
    RIGHT = ">"
    OUTPUT = "."
    JUMP_FORWARD = "["
    JUMP_BACKWARD = "]"

    @property
    def symbol(self) -> str:
        return self.value


_SYMBOL_TO_OP = {op.value: op for op in Op}


def decode_symbol(symbol: str, position: int = 0) -> Op:
    """Decode a single symbol.

    Args:
        symbol: One character of a sanitized program
        position: Position of the symbol, used in the error message

    Returns:
        The matching Op

    Raises:
        UnimplementedInstructionError: If the symbol is not recognized
    """
    try:
        return _SYMBOL_TO_OP[symbol]
    except KeyError:
        raise UnimplementedInstructionError(position, symbol) from None


def decode(program: str) -> Tuple[Op, ...]:
    """Decode a sanitized program into a tuple of Op members."""
    return tuple(decode_symbol(c, i) for i, c in enumerate(program))
