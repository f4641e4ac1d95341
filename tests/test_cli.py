"""Tests for the command line interface."""

import io
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from bftape.cli import build_parser, main

PROGRAMS = Path(__file__).parent.parent / "programs"


@pytest.fixture
def stdout():
    return io.BytesIO()


class TestRun:
    """Test running programs from the command line."""

    def test_program_file(self, stdout):
        status = main([str(PROGRAMS / "hello.bf")], stdout=stdout)
        assert status == 0
        assert stdout.getvalue() == b"Hello World!\n"

    def test_inline(self, stdout):
        assert main(["--inline", "+++++."], stdout=stdout) == 0
        assert stdout.getvalue() == b"\x05"

    def test_summary(self, stdout, capsys):
        main(["-i", "+.", "--summary"], stdout=stdout)
        err = capsys.readouterr().err
        assert "Steps: 2" in err
        assert "Halt: end-of-program" in err

    def test_trace(self, stdout, capsys):
        main(["-i", "+.", "--trace"], stdout=stdout)
        assert "EXECUTION TRACE" in capsys.readouterr().err

    def test_verbose(self, stdout):
        assert main(["-i", "+", "--verbose"], stdout=stdout) == 0


class TestErrors:
    """Test reported failures and exit codes."""

    def test_missing_file(self, stdout, tmp_path, capsys):
        status = main([str(tmp_path / "missing.bf")], stdout=stdout)
        assert status == 1
        assert "not found" in capsys.readouterr().err

    def test_non_unicode(self, stdout, tmp_path, capsys):
        path = tmp_path / "bad.bf"
        path.write_bytes(b"+\xff\xfe.")
        assert main([str(path)], stdout=stdout) == 1
        assert "Non-unicode program." in capsys.readouterr().err
        assert stdout.getvalue() == b""

    def test_unmatched_close(self, stdout, capsys):
        assert main(["-i", "+.]"], stdout=stdout) == 1
        assert "Unmatched closing bracket" in capsys.readouterr().err
        assert stdout.getvalue() == b""

    def test_unmatched_open(self, stdout, capsys):
        assert main(["-i", "[+"], stdout=stdout) == 1
        assert "Unmatched opening bracket" in capsys.readouterr().err

    def test_step_limit(self, stdout, capsys):
        assert main(["-i", "+[]", "--max-steps", "10"], stdout=stdout) == 1
        assert "Max steps (10) exceeded" in capsys.readouterr().err

    def test_no_program(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["prog.bf"])
        assert args.program == "prog.bf"
        assert args.max_steps is None
        assert args.trace is False
