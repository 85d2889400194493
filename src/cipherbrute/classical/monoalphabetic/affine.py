from __future__ import annotations

from typing import Optional

from cipherbrute.core.errors import InvalidKeyError
from cipherbrute.core.keyspace import KeyGroup
from cipherbrute.core.registry import register_plugin
from cipherbrute.classical.common import ALPHABET, Alphabet, is_coprime, map_symbols, modinv, parse_two_ints


def valid_multipliers(alphabet: Alphabet = ALPHABET) -> list[int]:
    """Every 'a' in [1, M) that is coprime with M."""
    m = alphabet.size
    return [a for a in range(1, m) if is_coprime(a, m)]


class AffineCipher:
    """
    E(x) = (a*x + b) mod M, D(y) = a^-1 * (y - b) mod M.
    'a' must be coprime with the alphabet size M.
    """

    name = "affine"
    searchable = True
    parallel = False

    def __init__(self, a: int, b: int, alphabet: Alphabet = ALPHABET):
        m = alphabet.size
        if not is_coprime(a, m):
            raise InvalidKeyError(f"The key 'a'={a} must be coprime with alphabet size {m}.")
        self.alphabet = alphabet
        self.a = a
        self.b = b % m
        self.a_inverse = modinv(a, m)

    @property
    def key_descriptor(self) -> str:
        return f"({self.a}, {self.b})"

    def encrypt(self, plaintext: str) -> str:
        return map_symbols(plaintext, self.alphabet, lambda x: self.a * x + self.b)

    def decrypt(self, ciphertext: str) -> str:
        return map_symbols(ciphertext, self.alphabet, lambda y: self.a_inverse * (y - self.b))

    @classmethod
    def from_key(cls, key: tuple[int, int], alphabet: Alphabet = ALPHABET) -> "AffineCipher":
        a, b = key
        return cls(a, b, alphabet)

    @classmethod
    def parse_key(cls, key: Optional[str]) -> tuple[int, int]:
        if key is None:
            raise InvalidKeyError("Affine requires a key like '7,3'.")
        return parse_two_ints(key)

    @classmethod
    def key_groups(cls, alphabet: Alphabet = ALPHABET) -> list[KeyGroup]:
        m = alphabet.size
        multipliers = valid_multipliers(alphabet)

        def decode(index: int) -> tuple[int, int]:
            i, b = divmod(index, m)
            return multipliers[i], b

        return [KeyGroup(label="a,b", size=len(multipliers) * m, decode=decode)]


register_plugin(AffineCipher)
