"""
Tests for the Plessey pattern catalogue.
"""

import pytest

from plessey.barcode.patterns import (
    CODE_PATTERNS,
    START_PATTERN,
    STOP_PATTERN,
    SYMBOL_CHARACTERS,
    N,
    T,
    W,
    character_to_code,
    code_to_character,
)


class TestCatalogue:
    """Tests for the pattern tables."""

    def test_sentinels(self):
        """Test start and stop pattern widths."""
        assert START_PATTERN == (W, W, N, W)
        assert STOP_PATTERN == (T, N, W, N, N)

    def test_sixteen_four_bar_symbols(self):
        """Test the symbol table covers every 4-bit combination once."""
        assert len(CODE_PATTERNS) == 16
        assert len(set(CODE_PATTERNS)) == 16
        for shape in CODE_PATTERNS:
            assert len(shape) == 4
            assert set(shape) <= {N, W}

    def test_bits_least_significant_first(self):
        """Test that wide bars mark set bits, first bar lowest."""
        for code, shape in enumerate(CODE_PATTERNS):
            bits = sum(1 << i for i, width in enumerate(shape) if width == W)
            assert bits == code


class TestCharacterMapping:
    """Tests for code/character conversion."""

    def test_digits_and_letters(self):
        """Test mapping of decimal and hex codes."""
        assert code_to_character(0) == "0"
        assert code_to_character(9) == "9"
        assert code_to_character(10) == "A"
        assert code_to_character(15) == "F"
        assert SYMBOL_CHARACTERS == "0123456789ABCDEF"

    def test_character_to_code(self):
        """Test reverse mapping, case-insensitive."""
        assert character_to_code("7") == 7
        assert character_to_code("c") == 12
        assert character_to_code("E") == 14

    def test_invalid_values(self):
        """Test rejection of out-of-range codes and characters."""
        with pytest.raises(ValueError):
            code_to_character(16)
        with pytest.raises(ValueError):
            code_to_character(-1)
        with pytest.raises(ValueError):
            character_to_code("G")
        with pytest.raises(ValueError):
            character_to_code("12")
