from __future__ import annotations

from typing import Optional

from cipherbrute.core.errors import InvalidKeyError
from cipherbrute.core.keyspace import KeyGroup
from cipherbrute.core.registry import register_plugin
from cipherbrute.classical.common import ALPHABET, Alphabet, shift_text, strip_key_prefix


class CaesarCipher:
    name = "caesar"
    searchable = True
    parallel = False

    def __init__(self, shift: int, alphabet: Alphabet = ALPHABET):
        self.alphabet = alphabet
        self.shift = shift % alphabet.size

    @property
    def key_descriptor(self) -> str:
        return f"shift={self.shift}"

    def encrypt(self, plaintext: str) -> str:
        return shift_text(plaintext, self.shift, self.alphabet)

    def decrypt(self, ciphertext: str) -> str:
        # Decrypt means shift backwards; map_symbols keeps the index non-negative
        return shift_text(ciphertext, -self.shift, self.alphabet)

    @classmethod
    def from_key(cls, key: int, alphabet: Alphabet = ALPHABET) -> "CaesarCipher":
        return cls(key, alphabet)

    @classmethod
    def parse_key(cls, key: Optional[str]) -> int:
        if key is None:
            raise InvalidKeyError("Caesar requires a shift key.")
        try:
            return int(strip_key_prefix(key, "shift="))
        except ValueError as e:
            raise InvalidKeyError("Caesar key must be an integer shift (e.g. '7' or 'shift=7').") from e

    @classmethod
    def key_groups(cls, alphabet: Alphabet = ALPHABET) -> list[KeyGroup]:
        # Every nonzero shift
        return [KeyGroup(label="shift", size=alphabet.size - 1, decode=lambda i: i + 1)]


register_plugin(CaesarCipher)
