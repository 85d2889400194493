from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence

from .utils import mixed_radix_digits, split_range


@dataclass(frozen=True)
class KeyGroup:
    """
    An index-addressable slice of a cipher's key space.

    Workers receive contiguous index ranges and decode keys themselves with
    `key_at`, so a key space never has to be materialized up front.
    """

    label: str
    size: int
    decode: Callable[[int], Any]

    def key_at(self, index: int) -> Any:
        if not 0 <= index < self.size:
            raise IndexError(f"Key index {index} out of range for group '{self.label}' (size {self.size}).")
        return self.decode(index)

    def keys(self, indices: range | None = None) -> Iterator[Any]:
        for i in indices if indices is not None else range(self.size):
            yield self.key_at(i)

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def __len__(self) -> int:
        return self.size

    def partition(self, parts: int) -> list[range]:
        return split_range(self.size, parts)


def sequence_group(label: str, keys: Sequence[Any]) -> KeyGroup:
    """A group over an explicit list of keys."""
    items = tuple(keys)
    return KeyGroup(label=label, size=len(items), decode=items.__getitem__)


def product_group(label: str, letters: str, length: int) -> KeyGroup:
    """All strings of `length` over `letters`, in nested-loop order."""
    base = len(letters)

    def decode(index: int) -> str:
        return "".join(letters[d] for d in mixed_radix_digits(index, base, length))

    return KeyGroup(label=label, size=base ** length, decode=decode)


def key_space_size(groups: Sequence[KeyGroup]) -> int:
    return sum(g.size for g in groups)
