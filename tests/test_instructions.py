"""Tests for the Op enumeration and decoding."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from bftape.errors import UnimplementedInstructionError
from bftape.instructions import Op, decode, decode_symbol
from bftape.sanitize import ALPHABET


class TestOp:
    """Test the instruction set."""

    def test_one_member_per_symbol(self):
        """Each alphabet symbol decodes to a distinct Op."""
        ops = {decode_symbol(c) for c in ALPHABET}
        assert ops == set(Op)

    @pytest.mark.parametrize("symbol,op", [
        ("+", Op.INC),
        ("-", Op.DEC),
        ("<", Op.LEFT),
        (">", Op.RIGHT),
        (".", Op.OUTPUT),
        ("[", Op.JUMP_FORWARD),
        ("]", Op.JUMP_BACKWARD),
    ])
    def test_decode_symbol(self, symbol, op):
        assert decode_symbol(symbol) is op
        assert op.symbol == symbol


class TestDecode:
    """Test whole-program decoding."""

    def test_decode_program(self):
        assert decode("+[>.]") == (
            Op.INC, Op.JUMP_FORWARD, Op.RIGHT, Op.OUTPUT, Op.JUMP_BACKWARD
        )

    def test_unknown_symbol(self):
        """Unsanitized input is an internal consistency failure."""
        with pytest.raises(UnimplementedInstructionError) as excinfo:
            decode("++,")
        assert excinfo.value.position == 2
        assert excinfo.value.symbol == ","

    def test_unknown_symbol_is_assertion(self):
        """The error is an assertion, not a user input error."""
        with pytest.raises(AssertionError):
            decode_symbol("x")
