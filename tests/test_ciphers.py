import pytest

from cipherbrute.classical.common import modinv, parse_two_ints, shift_text
from cipherbrute.classical.monoalphabetic.affine import AffineCipher, valid_multipliers
from cipherbrute.classical.monoalphabetic.atbash import AtbashCipher
from cipherbrute.classical.monoalphabetic.caesar import CaesarCipher
from cipherbrute.classical.polyalphabetic.vigenere import VigenereCipher
from cipherbrute.classical.polygraphic.playfair import PlayfairCipher, build_grid, make_digrams
from cipherbrute.core.alphabet import ALPHABET, DEFAULT_SYMBOLS, Alphabet
from cipherbrute.core.errors import InvalidKeyError

# Alphabet symbols mixed with characters that must pass through untouched
SAMPLE = "Meet me at 10:45; bring the 'Map'! Ok? @home #3, yes."


# ----------------------------
# Caesar
# ----------------------------

def test_caesar_round_trip_every_shift():
    for shift in range(ALPHABET.size):
        c = CaesarCipher(shift)
        assert c.decrypt(c.encrypt(SAMPLE)) == SAMPLE


def test_caesar_wraps_across_cases_and_digits():
    c = CaesarCipher(3)
    assert c.encrypt("abc xyz") == "def ABC"
    assert c.encrypt("Z9") == "2;"
    assert CaesarCipher(1).encrypt("?") == "a"


def test_caesar_shift_seven_keeps_spaces():
    text = "the quick brown fox jumps over thirteen lazy dogs..."
    c = CaesarCipher(7)
    ct = c.encrypt(text)
    assert ct != text
    assert [i for i, ch in enumerate(ct) if ch == " "] == [i for i, ch in enumerate(text) if ch == " "]
    assert c.decrypt(ct) == text


def test_caesar_shift_reduced_modulo_alphabet():
    assert CaesarCipher(68 + 5).shift == 5
    assert CaesarCipher(-1).shift == 67
    assert shift_text("a", -1) == "?"


@pytest.mark.parametrize("raw,expected", [("7", 7), ("shift=12", 12), (" 3 ", 3)])
def test_caesar_parse_key(raw, expected):
    assert CaesarCipher.parse_key(raw) == expected


@pytest.mark.parametrize("raw", [None, "seven", ""])
def test_caesar_parse_key_rejects(raw):
    with pytest.raises(InvalidKeyError):
        CaesarCipher.parse_key(raw)


def test_caesar_key_space_is_nonzero_shifts():
    (group,) = CaesarCipher.key_groups()
    assert list(group) == list(range(1, 68))


# ----------------------------
# Affine
# ----------------------------

def test_affine_rejects_multiplier_sharing_factor():
    with pytest.raises(InvalidKeyError):
        AffineCipher(2, 5)
    with pytest.raises(InvalidKeyError):
        AffineCipher(34, 0)


def test_affine_invalid_key_is_a_value_error():
    with pytest.raises(ValueError):
        AffineCipher.from_key((4, 1))


def test_affine_seven_round_trips_every_offset():
    for b in range(ALPHABET.size):
        c = AffineCipher(7, b)
        assert c.decrypt(c.encrypt(SAMPLE)) == SAMPLE


def test_affine_on_odd_sized_alphabet():
    extended = Alphabet(DEFAULT_SYMBOLS + "-")
    assert extended.size == 69
    for b in range(extended.size):
        c = AffineCipher(7, b, extended)
        assert c.decrypt(c.encrypt(SAMPLE + "-")) == SAMPLE + "-"
    # 2 is coprime with 69 but not with 68
    AffineCipher(2, 0, extended)


def test_affine_identity_key():
    assert AffineCipher(1, 0).encrypt(SAMPLE) == SAMPLE
    assert AffineCipher(7, 3).key_descriptor == "(7, 3)"


def test_affine_key_space_only_has_coprime_multipliers():
    multipliers = valid_multipliers()
    assert len(multipliers) == 32
    assert 2 not in multipliers and 17 not in multipliers and 34 not in multipliers
    (group,) = AffineCipher.key_groups()
    assert group.size == 32 * 68
    assert group.key_at(0) == (1, 0)
    assert group.key_at(68) == (3, 0)
    assert group.key_at(group.size - 1) == (67, 67)


def test_affine_round_trip_whole_key_space():
    for a, b in AffineCipher.key_groups()[0]:
        c = AffineCipher(a, b)
        assert c.decrypt(c.encrypt(SAMPLE)) == SAMPLE


def test_modinv():
    assert (7 * modinv(7, 68)) % 68 == 1
    with pytest.raises(InvalidKeyError):
        modinv(2, 68)


@pytest.mark.parametrize("raw", ["7,3", "7:3", "7 3", "(7, 3)"])
def test_parse_two_ints(raw):
    assert parse_two_ints(raw) == (7, 3)


@pytest.mark.parametrize("raw", ["7", "a,b", "1,2,3"])
def test_parse_two_ints_rejects(raw):
    with pytest.raises(InvalidKeyError):
        parse_two_ints(raw)


# ----------------------------
# Vigenère
# ----------------------------

def test_vigenere_known_value():
    c = VigenereCipher("key")
    assert c.encrypt("hello world") == "riJvs UyvJn"
    assert c.decrypt("riJvs UyvJn") == "hello world"


def test_vigenere_unmapped_key_character_means_no_shift():
    c = VigenereCipher("a@b")
    ct = c.encrypt("hello")
    # key positions: a e(@) b a o(@)
    assert ct == "hemlo"
    assert ct[1] == "e" and ct[4] == "o"
    assert c.decrypt(ct) == "hello"


def test_vigenere_unmapped_text_does_not_advance_key():
    c = VigenereCipher("ab")
    assert c.encrypt("a a") == "a b"


def test_vigenere_empty_key():
    with pytest.raises(InvalidKeyError):
        VigenereCipher("")
    with pytest.raises(InvalidKeyError):
        VigenereCipher.parse_key("key=")


def test_vigenere_parse_key():
    assert VigenereCipher.parse_key("key=lemon") == "lemon"
    assert VigenereCipher.parse_key("lemon") == "lemon"


def test_vigenere_key_space_bound():
    groups = VigenereCipher.key_groups()
    assert [g.size for g in groups] == [68, 26 ** 2, 6 ** 3, 3 ** 4]
    assert groups[1].key_at(0) == "ee"
    assert groups[1].key_at(1) == "et"
    assert groups[1].key_at(26 ** 2 - 1) == "zz"
    assert set("".join(groups[2])) == set("etaoin")
    assert groups[3].key_at(0) == "eeee"


def test_vigenere_round_trip_whole_key_space():
    for group in VigenereCipher.key_groups():
        for key in group:
            c = VigenereCipher(key)
            assert c.decrypt(c.encrypt(SAMPLE)) == SAMPLE


# ----------------------------
# Atbash
# ----------------------------

def test_atbash_is_self_inverse():
    c = AtbashCipher()
    assert c.encrypt("a?") == "?a"
    assert c.encrypt(c.encrypt(SAMPLE)) == SAMPLE
    assert c.decrypt(SAMPLE) == c.encrypt(SAMPLE)


def test_atbash_matches_affine_reflection():
    assert AtbashCipher().encrypt(SAMPLE) == AffineCipher(67, 67).encrypt(SAMPLE)


def test_atbash_is_not_searched():
    assert AtbashCipher.searchable is False
    assert AtbashCipher.parse_key("anything") is None


# ----------------------------
# Playfair
# ----------------------------

def test_playfair_known_vector():
    c = PlayfairCipher("playfair example")
    assert c.encrypt("hidethegoldinthetreestump") == "bmodzbxdnabekudmuixmmouvif"
    assert c.decrypt("bmodzbxdnabekudmuixmmouvif") == "hidethegoldinthetrexestump"


def test_playfair_round_trip_keeps_layout():
    c = PlayfairCipher("playfair example")
    ct = c.encrypt("attack at dawn")
    assert ct[6] == " " and ct[9] == " "
    assert c.decrypt(ct) == "attack at dawn"


def test_playfair_keeps_case_of_source_slots():
    c = PlayfairCipher("monarchy")
    ct = c.encrypt("Attack")
    assert ct[0].isupper() and ct[1:].islower()


def test_playfair_grid():
    grid = build_grid("playfair example")
    assert grid[0] == ["p", "l", "a", "y", "f"]
    assert grid[1] == ["i", "r", "e", "x", "m"]
    assert all(len(row) == 5 for row in grid)
    assert "j" not in "".join("".join(r) for r in grid)


def test_playfair_digrams():
    assert make_digrams("balloon") == [("b", "a"), ("l", "x"), ("l", "o"), ("o", "n")]
    assert make_digrams("abc") == [("a", "b"), ("c", "x")]


def test_playfair_has_no_enumerable_key_space():
    assert PlayfairCipher.searchable is False
    assert PlayfairCipher.key_groups() == []
