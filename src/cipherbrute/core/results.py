from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class HeuristicResult:
    name: str
    # 0..1, higher is more English-like
    score: float
    # What was measured for this single evaluation
    summary: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "score": self.score, "summary": self.summary}


@dataclass(frozen=True)
class Candidate:
    """One (cipher, key) trial: the decryption and how plausible it looks."""

    cipher_name: str
    key: str
    source: str
    ciphertext: str
    plaintext: str

    letter_frequency: HeuristicResult
    dictionary: HeuristicResult
    grapheme: HeuristicResult

    # Mean of the three heuristic scores; derived, never passed in
    combined_score: float = field(init=False)

    def __post_init__(self) -> None:
        combined = (self.letter_frequency.score + self.dictionary.score + self.grapheme.score) / 3.0
        object.__setattr__(self, "combined_score", combined)

    @property
    def heuristics(self) -> tuple[HeuristicResult, HeuristicResult, HeuristicResult]:
        return (self.letter_frequency, self.dictionary, self.grapheme)

    @property
    def summary(self) -> str:
        return (
            f"Letter frequency: {self.letter_frequency.score:.3f} ({self.letter_frequency.summary}), "
            f"Dictionary: {self.dictionary.score:.3f} ({self.dictionary.summary}), "
            f"Grapheme: {self.grapheme.score:.3f} ({self.grapheme.summary})"
        )

    def __str__(self) -> str:
        return f"{self.cipher_name} [{self.key}] {self.source}: {self.combined_score:.3f}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "cipher_name": self.cipher_name,
            "key": self.key,
            "source": self.source,
            "ciphertext": self.ciphertext,
            "plaintext": self.plaintext,
            "combined_score": self.combined_score,
            "letter_frequency": self.letter_frequency.to_dict(),
            "dictionary": self.dictionary.to_dict(),
            "grapheme": self.grapheme.to_dict(),
            "summary": self.summary,
        }
