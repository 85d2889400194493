from __future__ import annotations

from typing import Optional

from cipherbrute.core.errors import InvalidKeyError
from cipherbrute.core.keyspace import KeyGroup, product_group
from cipherbrute.core.registry import register_plugin
from cipherbrute.classical.common import ALPHABET, Alphabet, strip_key_prefix

# English letters, most frequent first
FREQUENCY_ORDER = "etaoinshrdlcumwfgypbvkjxqz"

# Bounded key space, (key length, letters tried at each position):
#   1 -> the full alphabet
#   2 -> all 26 letters in frequency order
#   3 -> the 6 most frequent letters
#   4 -> the 3 most frequent letters
# Searching every key of length 4 over the full alphabet (M**4) is not
# tractable; this bound decides which keys can be recovered at all.
KEY_LENGTH_LETTERS = (
    (2, FREQUENCY_ORDER),
    (3, FREQUENCY_ORDER[:6]),
    (4, FREQUENCY_ORDER[:3]),
)


class VigenereCipher:
    name = "vigenere"
    searchable = True
    parallel = True

    def __init__(self, key: str, alphabet: Alphabet = ALPHABET):
        if not key:
            raise InvalidKeyError("Vigenère key must contain at least one character.")
        self.alphabet = alphabet
        self.key = key
        # None marks a key character outside the alphabet: no shift at that position
        self._shifts = [alphabet.index_of(ch) for ch in key]

    @property
    def key_descriptor(self) -> str:
        return f"key={self.key}"

    def _apply(self, text: str, direction: int) -> str:
        m = self.alphabet.size
        shifts = self._shifts
        out = []
        j = 0
        for ch in text:
            idx = self.alphabet.index_of(ch)
            if idx is None:
                # Unmapped text characters do not advance the key
                out.append(ch)
                continue
            shift = shifts[j % len(shifts)]
            j += 1
            if shift is None:
                out.append(ch)
            else:
                out.append(self.alphabet.symbol_at((idx + direction * shift) % m))
        return "".join(out)

    def encrypt(self, plaintext: str) -> str:
        return self._apply(plaintext, 1)

    def decrypt(self, ciphertext: str) -> str:
        return self._apply(ciphertext, -1)

    @classmethod
    def from_key(cls, key: str, alphabet: Alphabet = ALPHABET) -> "VigenereCipher":
        return cls(key, alphabet)

    @classmethod
    def parse_key(cls, key: Optional[str]) -> str:
        if key is None:
            raise InvalidKeyError("Vigenère requires a key string.")
        k = strip_key_prefix(key, "key=")
        if not k:
            raise InvalidKeyError("Vigenère key must contain at least one character.")
        return k

    @classmethod
    def key_groups(cls, alphabet: Alphabet = ALPHABET) -> list[KeyGroup]:
        groups = [product_group("length 1", alphabet.symbols, 1)]
        for length, letters in KEY_LENGTH_LETTERS:
            groups.append(product_group(f"length {length}", letters, length))
        return groups


register_plugin(VigenereCipher)
