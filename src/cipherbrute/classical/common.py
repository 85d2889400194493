from __future__ import annotations

import math
from typing import Callable, Tuple

from cipherbrute.core.alphabet import ALPHABET, Alphabet  # noqa: F401
from cipherbrute.core.errors import InvalidKeyError


def map_symbols(text: str, alphabet: Alphabet, fn: Callable[[int], int]) -> str:
    """Apply an index -> index mapping to every mapped symbol; others pass through."""
    out = []
    for ch in text:
        idx = alphabet.index_of(ch)
        if idx is None:
            out.append(ch)
        else:
            out.append(alphabet.symbol_at(fn(idx) % alphabet.size))
    return "".join(out)


def shift_text(text: str, shift: int, alphabet: Alphabet = ALPHABET) -> str:
    """Caesar shift over the alphabet (can be negative); unmapped characters preserved."""
    return map_symbols(text, alphabet, lambda idx: idx + shift)


def is_coprime(a: int, m: int) -> bool:
    return math.gcd(a, m) == 1


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    if a == 0:
        return (b, 0, 1)
    g, y, x = egcd(b % a, a)
    return (g, x - (b // a) * y, y)


def modinv(a: int, m: int) -> int:
    """Modular inverse of a under mod m; raises InvalidKeyError if none."""
    a %= m
    g, x, _ = egcd(a, m)
    if g != 1:
        raise InvalidKeyError(f"No modular inverse for a={a} mod {m}.")
    return x % m


def strip_key_prefix(key: str, prefix: str) -> str:
    k = key.strip()
    if k.lower().startswith(prefix):
        return k[len(prefix):]
    return k


def parse_two_ints(key: str) -> tuple[int, int]:
    """
    Parse keys like: "5,8", "5:8", "5 8" or "(5, 8)"
    Returns (a, b).
    """
    raw = key.strip().strip("()").replace(":", ",").replace(" ", ",")
    parts = [p for p in raw.split(",") if p]
    if len(parts) != 2:
        raise InvalidKeyError("Expected key format like 'a,b' (e.g., '7,3').")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise InvalidKeyError(f"Key parts must be integers, got {key!r}.") from e
