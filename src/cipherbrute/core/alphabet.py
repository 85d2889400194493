from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_SYMBOLS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.:;'!?"


@dataclass(frozen=True)
class Alphabet:
    """
    Ordered, duplicate-free symbol set a cipher substitutes over.
    Symbols outside it are "unmapped" and pass through every cipher untouched.
    """

    symbols: str
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.symbols:
            raise ValueError("Alphabet must contain at least one symbol.")
        index = {ch: i for i, ch in enumerate(self.symbols)}
        if len(index) != len(self.symbols):
            raise ValueError("Alphabet symbols must be unique.")
        object.__setattr__(self, "_index", index)

    @property
    def size(self) -> int:
        return len(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def index_of(self, ch: str) -> Optional[int]:
        return self._index.get(ch)

    def symbol_at(self, index: int) -> str:
        return self.symbols[index]


ALPHABET = Alphabet(DEFAULT_SYMBOLS)
