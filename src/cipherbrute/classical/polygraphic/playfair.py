from __future__ import annotations

import string
from typing import Optional

from cipherbrute.core.errors import InvalidKeyError
from cipherbrute.core.keyspace import KeyGroup
from cipherbrute.core.registry import register_plugin
from cipherbrute.classical.common import ALPHABET, Alphabet, strip_key_prefix

SIZE = 5
FILLER = "x"
_GRID_LETTERS = string.ascii_lowercase.replace("j", "")
_ASCII_LETTERS = set(string.ascii_letters)


def _fold(ch: str) -> str:
    ch = ch.lower()
    return "i" if ch == "j" else ch


def build_grid(seed: str) -> list[list[str]]:
    """5x5 square: unique seed letters first (j folded into i), then the rest of a-z."""
    order: list[str] = []
    for ch in seed:
        if ch in _ASCII_LETTERS:
            c = _fold(ch)
            if c not in order:
                order.append(c)
    for c in _GRID_LETTERS:
        if c not in order:
            order.append(c)
    return [order[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]


def make_digrams(letters: str) -> list[tuple[str, str]]:
    """
    Split into pairs. A pair of identical letters becomes (letter, 'x') and the
    repeated letter starts the next pair; a trailing single letter is padded.
    """
    pairs = []
    i = 0
    while i < len(letters):
        first = letters[i]
        second = letters[i + 1] if i + 1 < len(letters) else FILLER
        if first == second and i + 1 < len(letters):
            pairs.append((first, FILLER))
            i += 1
        else:
            pairs.append((first, second))
            i += 2
    return pairs


class PlayfairCipher:
    name = "playfair"
    # Key space is open-ended; encrypt/decrypt only
    searchable = False
    parallel = False

    def __init__(self, seed: str, alphabet: Alphabet = ALPHABET):
        # Playfair works on its own case-folded 25-letter square; `alphabet` is
        # accepted for a uniform constructor only.
        self.seed = seed
        self.grid = build_grid(seed)
        self._pos = {c: (r, col) for r, row in enumerate(self.grid) for col, c in enumerate(row)}

    @property
    def key_descriptor(self) -> str:
        return f"seed={self.seed}"

    def _transform_pair(self, first: str, second: str, step: int) -> str:
        r1, c1 = self._pos[first]
        r2, c2 = self._pos[second]
        if r1 == r2:
            c1 = (c1 + step) % SIZE
            c2 = (c2 + step) % SIZE
        elif c1 == c2:
            r1 = (r1 + step) % SIZE
            r2 = (r2 + step) % SIZE
        else:
            # Rectangle: swap columns (same both directions)
            c1, c2 = c2, c1
        return self.grid[r1][c1] + self.grid[r2][c2]

    def _apply(self, text: str, step: int) -> str:
        letters = "".join(_fold(ch) for ch in text if ch in _ASCII_LETTERS)
        if step > 0:
            pairs = make_digrams(letters)
        else:
            if len(letters) % 2:
                letters += FILLER
            pairs = [(letters[i], letters[i + 1]) for i in range(0, len(letters), 2)]
        transformed = "".join(self._transform_pair(a, b, step) for a, b in pairs)
        return _restore_layout(text, transformed)

    def encrypt(self, plaintext: str) -> str:
        return self._apply(plaintext, 1)

    def decrypt(self, ciphertext: str) -> str:
        return self._apply(ciphertext, -1)

    @classmethod
    def from_key(cls, key: str, alphabet: Alphabet = ALPHABET) -> "PlayfairCipher":
        return cls(key, alphabet)

    @classmethod
    def parse_key(cls, key: Optional[str]) -> str:
        if key is None:
            raise InvalidKeyError("Playfair requires a seed string.")
        return strip_key_prefix(key, "seed=")

    @classmethod
    def key_groups(cls, alphabet: Alphabet = ALPHABET) -> list[KeyGroup]:
        return []


def _restore_layout(source: str, letters: str) -> str:
    """
    Put transformed letters back into the letter slots of `source`, taking each
    slot's case; non-letters stay where they were. Letters beyond the source's
    letter count (fillers) are appended.
    """
    out = []
    k = 0
    for ch in source:
        if ch in _ASCII_LETTERS and k < len(letters):
            c = letters[k]
            out.append(c.upper() if ch.isupper() else c)
            k += 1
        else:
            out.append(ch)
    out.append(letters[k:])
    return "".join(out)


register_plugin(PlayfairCipher)
