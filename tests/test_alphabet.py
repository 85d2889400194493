import pytest

from cipherbrute.core.alphabet import ALPHABET, DEFAULT_SYMBOLS, Alphabet
from cipherbrute.core.utils import mixed_radix_digits, split_range, strip_to_words


def test_default_alphabet_layout():
    assert ALPHABET.size == 68
    assert len(ALPHABET) == 68
    assert ALPHABET.index_of("a") == 0
    assert ALPHABET.index_of("A") == 26
    assert ALPHABET.index_of("0") == 52
    assert ALPHABET.index_of("?") == 67
    assert ALPHABET.symbol_at(67) == "?"


@pytest.mark.parametrize("ch", [" ", "@", "#", "\n", ",", "é"])
def test_unmapped_characters(ch):
    assert ALPHABET.index_of(ch) is None
    assert ch not in ALPHABET


def test_custom_alphabet():
    extended = Alphabet(DEFAULT_SYMBOLS + "-")
    assert extended.size == 69
    assert extended.index_of("-") == 68
    assert "-" in extended


@pytest.mark.parametrize("symbols", ["", "abca"])
def test_rejects_bad_symbols(symbols):
    with pytest.raises(ValueError):
        Alphabet(symbols)


def test_mixed_radix_digits_most_significant_first():
    assert mixed_radix_digits(0, 3, 2) == [0, 0]
    assert mixed_radix_digits(5, 2, 3) == [1, 0, 1]
    assert mixed_radix_digits(7, 3, 2) == [2, 1]


def test_split_range_is_contiguous_and_balanced():
    parts = split_range(10, 3)
    assert parts == [range(0, 4), range(4, 7), range(7, 10)]
    assert split_range(2, 5) == [range(0, 1), range(1, 2)]
    assert split_range(0, 4) == []
    assert split_range(5, 1) == [range(0, 5)]


def test_text_normalizers():
    assert strip_to_words("It's 9 o'clock!") == "its  oclock"
