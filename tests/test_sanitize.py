"""Tests for program cleanup."""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from bftape.sanitize import ALPHABET, cleanup


class TestAlphabet:
    """Test the recognized symbol set."""

    def test_alphabet_contents(self):
        """Alphabet holds the six core symbols plus output."""
        assert set(ALPHABET) == set("+-<>[].")
        assert len(ALPHABET) == 7

    def test_output_symbol_recognized(self):
        """`.` survives cleanup so output instructions are reachable."""
        assert cleanup("+.") == "+."

    def test_input_symbol_dropped(self):
        """`,` is not part of the language."""
        assert cleanup(",+,") == "+"


class TestCleanup:
    """Test filtering behaviour."""

    def test_basic(self):
        """Comments and whitespace are dropped, order preserved."""
        assert cleanup("+- [[--<>]] comment") == "+-[[--<>]]"

    def test_empty(self):
        """Empty text gives an empty program."""
        assert cleanup("") == ""

    def test_only_comments(self):
        """Text without symbols gives an empty program."""
        assert cleanup("hello world\n\tfoo") == ""

    @pytest.mark.parametrize("text", [
        "a+b-c<d>e[f]g.h",
        "+++\n>>>\n[-]\n...",
        "unicode ✓ + é - λ [ ] .",
        "][ .. ++ -- <> ,,",
    ])
    def test_keeps_symbols_in_order(self, text):
        """Every recognized symbol appears once, unchanged, in order."""
        result = cleanup(text)
        assert all(c in ALPHABET for c in result)
        assert result == "".join(c for c in text if c in ALPHABET)

    def test_idempotent(self):
        """Cleaning an already clean program changes nothing."""
        program = "++[>+<-]>."
        assert cleanup(cleanup(program)) == program
