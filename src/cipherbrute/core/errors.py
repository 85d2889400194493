from __future__ import annotations


class CipherBruteError(Exception):
    """Base class for errors raised by cipherbrute."""


class InvalidKeyError(CipherBruteError, ValueError):
    """Key material a cipher cannot work with (e.g. affine 'a' not coprime with M)."""


class ConfigurationError(CipherBruteError, ValueError):
    """Search settings that are rejected before any work starts."""


class UnknownCipherError(CipherBruteError, KeyError):
    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown cipher '{self.name}'. Available: {', '.join(self.available)}"


class SearchWorkerError(CipherBruteError):
    """
    One or more search workers raised. Raised only after every worker has been
    joined; `errors` holds every underlying exception in submission order.
    """

    def __init__(self, errors: list[BaseException]):
        self.errors = list(errors)
        first = self.errors[0] if self.errors else None
        super().__init__(f"{len(self.errors)} search worker(s) failed; first error: {first!r}")
