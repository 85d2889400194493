from __future__ import annotations

def register_all() -> None:
    from .monoalphabetic import caesar, atbash, affine  # noqa: F401
    from .polyalphabetic import vigenere  # noqa: F401
    from .polygraphic import playfair  # noqa: F401
