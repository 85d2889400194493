from __future__ import annotations

from collections import Counter

from .results import HeuristicResult
from .utils import ASCII_LOWER, strip_to_words

_DIGRAPHS = (
    "th", "he", "in", "er", "an", "re", "ed", "nd", "on", "en", "at", "ou", "ea", "ha",
    "es", "or", "ti", "to", "it", "st", "ar", "hi", "as", "te", "et", "ng", "of", "al",
    "de", "se", "le", "sa", "si", "ve", "ra", "ld", "ur", "ch", "sh", "wh", "ph",
    "gh", "ck", "qu", "oo", "ee", "ll", "ss", "ff", "pp", "tt", "nn", "mm", "dd", "bb",
    "cc", "gg", "rr", "zz", "ai", "ay", "ei", "ey", "ie", "oe", "ue", "ui", "au", "aw",
    "ew", "ow", "oy", "oi",
)

_TRIGRAPHS = (
    "the", "and", "ing", "ion", "tio", "ent", "ous", "all", "are", "ere", "her", "his",
    "ate", "est", "for", "ght", "cha", "che", "chi", "tch", "dge", "sch",
)

# Only used by the extended (max_length=4) variant
_QUADGRAPHS = (
    "tion", "ough", "ight", "ther", "ment", "ness", "ould", "ence", "ance", "able",
)

# Rough relative frequencies; anything not listed weighs 1.0
_WEIGHTS = {
    "e": 12.0, "t": 9.1, "a": 8.1, "o": 7.5, "i": 7.0, "n": 6.7, "s": 6.3, "h": 6.1,
    "r": 6.0, "th": 3.5, "he": 3.0, "in": 2.5, "er": 2.0, "an": 1.8, "ing": 1.5,
    "the": 1.2, "tion": 1.2,
}

# Normalizer per vocabulary entry. Arbitrary scale; only relative order matters.
_WEIGHT_SCALE = 5.0


def grapheme_vocabulary(max_length: int = 3) -> frozenset[str]:
    vocab = set(ASCII_LOWER)
    if max_length >= 2:
        vocab.update(_DIGRAPHS)
    if max_length >= 3:
        vocab.update(_TRIGRAPHS)
    if max_length >= 4:
        vocab.update(_QUADGRAPHS)
    return frozenset(vocab)


def tokenize_graphemes(text: str, vocabulary: frozenset[str], max_length: int) -> list[str]:
    """
    Greedy longest-match, non-overlapping scan of the lowercased text.
    Positions that start no known grapheme are skipped one character at a time.
    """
    s = text.lower()
    n = len(s)
    out: list[str] = []
    i = 0
    while i < n:
        for length in range(min(max_length, n - i), 0, -1):
            piece = s[i:i + length]
            if piece in vocabulary:
                out.append(piece)
                i += length
                break
        else:
            i += 1
    return out


class GraphemeHeuristic:
    """
    Rewards coverage of common English letter groups. Counts distinct types
    found, not how often each occurs.
    """

    name = "Grapheme Analysis"

    def __init__(self, max_length: int = 3):
        if not 1 <= max_length <= 4:
            raise ValueError("Grapheme max_length must be between 1 and 4.")
        self.max_length = max_length
        self.vocabulary = grapheme_vocabulary(max_length)

    def analyze(self, text: str) -> HeuristicResult:
        if not text or not text.strip():
            return HeuristicResult(self.name, 0.0, "No text to analyze")

        tokens = tokenize_graphemes(text, self.vocabulary, self.max_length)
        if not tokens:
            return HeuristicResult(self.name, 0.0, "No valid graphemes found")

        found = set(tokens)
        total_weight = sum(_WEIGHTS.get(g, 1.0) for g in found)
        score = min(1.0, total_weight / (len(self.vocabulary) * _WEIGHT_SCALE))
        return HeuristicResult(
            self.name,
            score,
            f"Found {len(found)} common graphemes out of {len(tokens)} total graphemes",
        )


class NgramHeuristic:
    """
    Diversity of letter n-grams: unique / total. Natural text sits between
    highly repetitive (< 0.3) and near-random (> 0.8). Not part of the default
    combined score.
    """

    def __init__(self, n: int = 3):
        self.n = max(1, n)
        self.name = f"{self.n}-gram Analysis"

    def analyze(self, text: str) -> HeuristicResult:
        if not text or not text.strip():
            return HeuristicResult(self.name, 0.0, "No text to analyze")

        clean = strip_to_words(text)
        counts: Counter[str] = Counter()
        for i in range(len(clean) - self.n + 1):
            gram = clean[i:i + self.n]
            inner = gram.strip()
            if inner and not any(ch.isspace() for ch in inner):
                counts[gram] += 1

        total = sum(counts.values())
        if total == 0:
            return HeuristicResult(self.name, 0.0, f"No valid {self.n}-grams found")

        diversity = len(counts) / total
        if diversity < 0.3:
            score = diversity / 0.3
        elif diversity > 0.8:
            score = (1.0 - diversity) / 0.2
        else:
            score = 1.0
        score = max(0.0, min(1.0, score))

        return HeuristicResult(
            self.name,
            score,
            f"Found {len(counts)} unique {self.n}-grams out of {total} total (diversity: {diversity:.2f})",
        )
