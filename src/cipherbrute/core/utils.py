from __future__ import annotations

import re
import string

_WORD_CLEAN_RE = re.compile(r"[^a-zA-Z\s]")

ASCII_LOWER = string.ascii_lowercase


def strip_to_words(s: str) -> str:
    """Lowercase and drop everything except ASCII letters and whitespace."""
    return _WORD_CLEAN_RE.sub("", s.lower())


def mixed_radix_digits(index: int, base: int, width: int) -> list[int]:
    """
    Decode `index` into `width` digits of `base`, most significant first.
    Enumerating 0..base**width-1 yields the same order as `width` nested loops.
    """
    digits = [0] * width
    for pos in range(width - 1, -1, -1):
        index, digits[pos] = divmod(index, base)
    return digits


def split_range(total: int, parts: int) -> list[range]:
    """
    Partition range(total) into at most `parts` contiguous, non-empty ranges
    whose sizes differ by at most one.
    """
    if total <= 0:
        return []
    parts = max(1, min(parts, total))
    size, extra = divmod(total, parts)
    out = []
    start = 0
    for i in range(parts):
        stop = start + size + (1 if i < extra else 0)
        out.append(range(start, stop))
        start = stop
    return out
