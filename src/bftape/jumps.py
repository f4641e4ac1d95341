"""JumpTable: precomputed matching positions of loop brackets.

The table is built in a single left-to-right pass with a stack of unmatched
open positions. Construction either produces a total table over every bracket
of the program or raises, so an engine never holds a malformed program.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union

from .errors import UnmatchedClosingBracketError, UnmatchedOpeningBracketError
from .instructions import Op

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JumpTable:
    """Bidirectional map between matched brackets.

    Attributes:
        forward: Position of each `[` mapped to the position of its `]`
        backward: Position of each `]` mapped to the position of its `[`
    """
    forward: Dict[int, int] = field(default_factory=dict)
    backward: Dict[int, int] = field(default_factory=dict)

    def right(self, position: int) -> int:
        """Find the `]` matching the `[` at position.

        Raises:
            KeyError: If position is not an open bracket
        """
        if position not in self.forward:
            raise KeyError(f"No open bracket at position {position}")
        return self.forward[position]

    def left(self, position: int) -> int:
        """Find the `[` matching the `]` at position.

        Raises:
            KeyError: If position is not a closing bracket
        """
        if position not in self.backward:
            raise KeyError(f"No closing bracket at position {position}")
        return self.backward[position]

    def validate(self) -> bool:
        """Check that forward and backward are exact inverses.

        Returns:
            True if every open maps to a later close that maps back to it
        """
        if len(self.forward) != len(self.backward):
            return False
        if set(self.forward) & set(self.backward):
            return False
        for open_pos, close_pos in self.forward.items():
            if close_pos <= open_pos:
                return False
            if self.backward.get(close_pos) != open_pos:
                return False
        return True

    def __len__(self) -> int:
        return len(self.forward)


def _symbol(item: Union[str, Op]) -> str:
    return item.value if isinstance(item, Op) else item


def build_jump_table(program: Iterable[Union[str, Op]]) -> JumpTable:
    """Match every `[` with its `]`.

    Args:
        program: Sanitized program text or a sequence of Op members

    Returns:
        JumpTable covering every bracket of the program

    Raises:
        UnmatchedClosingBracketError: A `]` appears with nothing open
        UnmatchedOpeningBracketError: Some `[` are never closed
    """
    open_positions: List[int] = []
    table = JumpTable()

    for position, item in enumerate(program):
        symbol = _symbol(item)
        if symbol == "[":
            open_positions.append(position)
        elif symbol == "]":
            if not open_positions:
                raise UnmatchedClosingBracketError(position)
            start = open_positions.pop()
            table.forward[start] = position
            table.backward[position] = start

    if open_positions:
        raise UnmatchedOpeningBracketError(open_positions)

    logger.debug("Built jump table with %d bracket pair(s)", len(table))
    return table
