from __future__ import annotations

from typing import Optional

from cipherbrute.core.keyspace import KeyGroup, sequence_group
from cipherbrute.core.registry import register_plugin
from cipherbrute.classical.common import ALPHABET, Alphabet, map_symbols


class AtbashCipher:
    name = "atbash"
    # Affine (M-1, M-1) already yields the same decryption during search
    searchable = False
    parallel = False

    def __init__(self, alphabet: Alphabet = ALPHABET):
        self.alphabet = alphabet

    @property
    def key_descriptor(self) -> str:
        return "atbash"

    def encrypt(self, plaintext: str) -> str:
        last = self.alphabet.size - 1
        return map_symbols(plaintext, self.alphabet, lambda idx: last - idx)

    def decrypt(self, ciphertext: str) -> str:
        # Self-inverse
        return self.encrypt(ciphertext)

    @classmethod
    def from_key(cls, key: None = None, alphabet: Alphabet = ALPHABET) -> "AtbashCipher":
        return cls(alphabet)

    @classmethod
    def parse_key(cls, key: Optional[str]) -> None:
        # key unused; accept anything for CLI consistency
        return None

    @classmethod
    def key_groups(cls, alphabet: Alphabet = ALPHABET) -> list[KeyGroup]:
        return [sequence_group("keyless", [None])]


register_plugin(AtbashCipher)
