"""Integration tests for the example programs."""

import io
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from bftape import Engine, HaltReason

PROGRAMS = Path(__file__).parent.parent / "programs"


@pytest.fixture
def engine():
    return Engine(output=io.BytesIO())


class TestHelloWorld:
    """Test hello.bf - the classic greeting."""

    def test_output(self, engine):
        """Prints Hello World! and a newline."""
        engine.load_program((PROGRAMS / "hello.bf").read_text())
        assert engine.run() == b"Hello World!\n"
        assert engine.halt_reason == HaltReason.END_OF_PROGRAM


class TestAddProgram:
    """Test add.bf - adds 2 and 3."""

    def test_result(self, engine):
        """Cell 0 holds 5 and is written out."""
        engine.load_program((PROGRAMS / "add.bf").read_text())
        assert engine.run() == b"\x05"
        assert engine.get_cell(0) == 5
        assert engine.get_cell(1) == 0


class TestUnderflowProgram:
    """Test underflow.bf - stops at the left edge."""

    def test_stops_after_first_output(self, engine):
        engine.load_program((PROGRAMS / "underflow.bf").read_text())
        assert engine.run() == b"\x05"
        assert engine.halt_reason == HaltReason.POINTER_OUT_OF_RANGE


class TestInlinePrograms:
    """Assorted short programs."""

    def test_print_letter_a(self, engine):
        """8 * 8 + 1 = 65."""
        engine.load_program("++++++++[>++++++++<-]>+.")
        assert engine.run() == b"A"

    def test_wraparound_output(self, engine):
        """Decrementing zero and writing gives byte 255."""
        engine.load_program("-.")
        assert engine.run() == b"\xff"

    def test_copy_loop(self, engine):
        """Copy cell 0 to cell 2 using cell 1 as scratch."""
        engine.load_program("+++++++[>+>+<<-]>>[<<+>>-]<<")
        engine.run()
        assert engine.get_tape(0, 3) == bytes([7, 7, 0])
