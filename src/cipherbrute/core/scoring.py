from __future__ import annotations

import logging
from collections import Counter
from importlib import resources
from typing import Protocol

from .ngrams import GraphemeHeuristic
from .results import Candidate, HeuristicResult
from .utils import strip_to_words

logger = logging.getLogger(__name__)


class Heuristic(Protocol):
    name: str

    def analyze(self, text: str) -> HeuristicResult:
        ...


# ----------------------------
# Letter frequency
# ----------------------------

# Percentages, a..z
_ENGLISH_FREQ = {
    "a": 8.12, "b": 1.49, "c": 2.78, "d": 4.25, "e": 12.02, "f": 2.23, "g": 2.02,
    "h": 6.09, "i": 6.97, "j": 0.15, "k": 0.77, "l": 4.03, "m": 2.41, "n": 6.75,
    "o": 7.51, "p": 1.93, "q": 0.10, "r": 5.99, "s": 6.33, "t": 9.06, "u": 2.76,
    "v": 0.98, "w": 2.36, "x": 0.15, "y": 1.97, "z": 0.07,
}

# chi-squared that maps to score 0, per analyzed letter
_CHI_SCALE_PER_LETTER = 10.0


def chi_squared_english(text: str) -> tuple[float, int]:
    """
    Chi-squared of the case-folded a-z counts against English.
    Returns (chi2, letters_counted). Lower chi2 is better.
    """
    counts = Counter(ch for ch in text.lower() if ch in _ENGLISH_FREQ)
    n = sum(counts.values())
    if n == 0:
        return float("inf"), 0

    chi2 = 0.0
    for letter, percent in _ENGLISH_FREQ.items():
        expected = percent / 100.0 * n
        if expected > 0:
            chi2 += (counts.get(letter, 0) - expected) ** 2 / expected
    return chi2, n


class LetterFrequencyHeuristic:
    name = "Letter Frequency Analysis"

    def analyze(self, text: str) -> HeuristicResult:
        if not text or not text.strip():
            return HeuristicResult(self.name, 0.0, "No text to analyze")

        chi2, n = chi_squared_english(text)
        if n == 0:
            return HeuristicResult(self.name, 0.0, "No letters found in text")

        score = max(0.0, 1.0 - chi2 / (len(_ENGLISH_FREQ) * _CHI_SCALE_PER_LETTER))
        return HeuristicResult(self.name, score, f"Analyzed {n} letters, chi-squared: {chi2:.2f}")


# ----------------------------
# Dictionary words
# ----------------------------

_COMMON_WORDS_FALLBACK = frozenset({
    "a", "about", "all", "also", "and", "as", "at", "be", "because", "but", "by", "can",
    "come", "could", "day", "do", "for", "from", "get", "give", "go", "have", "he", "her",
    "his", "how", "i", "if", "in", "into", "is", "it", "just", "know", "like", "make", "me",
    "more", "my", "new", "no", "not", "now", "of", "on", "one", "only", "or", "other", "our",
    "out", "over", "say", "see", "she", "so", "some", "take", "than", "that", "the", "their",
    "them", "there", "these", "they", "this", "time", "to", "two", "up", "use", "very", "way",
    "we", "well", "what", "when", "which", "who", "will", "with", "would", "you", "your",
})

_COMMON_WORDS: frozenset[str] | None = None


def get_common_words() -> frozenset[str]:
    """Load cipherbrute.data/common_words.txt once (one lowercase word per line)."""
    global _COMMON_WORDS
    if _COMMON_WORDS is not None:
        return _COMMON_WORDS

    try:
        raw = resources.files("cipherbrute.data").joinpath("common_words.txt").read_text(encoding="utf-8")
    except (FileNotFoundError, ModuleNotFoundError) as e:
        logger.warning("common word list unavailable (%s); using built-in fallback", e)
        _COMMON_WORDS = _COMMON_WORDS_FALLBACK
        return _COMMON_WORDS

    words = set()
    for line in raw.splitlines():
        w = line.strip().lower()
        if w and not w.startswith("#") and w.isalpha():
            words.add(w)
    _COMMON_WORDS = frozenset(words) or _COMMON_WORDS_FALLBACK
    logger.debug("loaded %d common words", len(_COMMON_WORDS))
    return _COMMON_WORDS


class DictionaryHeuristic:
    name = "Dictionary Matching"

    def __init__(self, words: frozenset[str] | None = None):
        self._words = words

    @property
    def words(self) -> frozenset[str]:
        return self._words if self._words is not None else get_common_words()

    def analyze(self, text: str) -> HeuristicResult:
        if not text or not text.strip():
            return HeuristicResult(self.name, 0.0, "No text to analyze")

        tokens = strip_to_words(text).split()
        if not tokens:
            return HeuristicResult(self.name, 0.0, "No words found in text")

        words = self.words
        hits = sum(1 for w in tokens if w in words)
        score = hits / len(tokens)
        return HeuristicResult(
            self.name, score, f"Found {hits}/{len(tokens)} dictionary words ({score * 100:.1f}%)"
        )


# ----------------------------
# Combination
# ----------------------------

LETTER_FREQUENCY = LetterFrequencyHeuristic()
DICTIONARY = DictionaryHeuristic()
GRAPHEME = GraphemeHeuristic()


def score_text(text: str) -> tuple[HeuristicResult, HeuristicResult, HeuristicResult]:
    """Run the three default heuristics. Pure; safe to call from any thread."""
    return (LETTER_FREQUENCY.analyze(text), DICTIONARY.analyze(text), GRAPHEME.analyze(text))


def combined_score(text: str) -> float:
    results = score_text(text)
    return sum(r.score for r in results) / len(results)


def evaluate_candidate(
    *,
    cipher_name: str,
    key: str,
    source: str,
    ciphertext: str,
    plaintext: str,
) -> Candidate:
    letter, words, graphemes = score_text(plaintext)
    return Candidate(
        cipher_name=cipher_name,
        key=key,
        source=source,
        ciphertext=ciphertext,
        plaintext=plaintext,
        letter_frequency=letter,
        dictionary=words,
        grapheme=graphemes,
    )
