from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Mapping, Sequence

from .results import Candidate

logger = logging.getLogger(__name__)

_DISPLAY_NAMES = {
    "caesar": "Caesar",
    "vigenere": "Vigenère",
    "affine": "Affine",
    "atbash": "Atbash",
    "playfair": "Playfair",
}


def display_name(cipher_name: str) -> str:
    return _DISPLAY_NAMES.get(cipher_name, cipher_name.title())


def discover_inputs(directory: Path | str, pattern: str = "*.txt") -> Iterator[tuple[str, str]]:
    """Yield (file name, contents) for every matching file, sorted by name."""
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Input directory not found: {root}")
    for path in sorted(p for p in root.glob(pattern) if p.is_file()):
        logger.debug("reading %s", path)
        yield path.name, path.read_text(encoding="utf-8")


def render_candidate(index: int, c: Candidate) -> list[str]:
    name = display_name(c.cipher_name)
    return [
        f"## Decryption {index}: {name} Cipher",
        f"- Cipher: {name}",
        f"- Key: {c.key}",
        f"- Combined Score: {c.combined_score:.3f}",
        f"- Letter Frequency Score: {c.letter_frequency.score:.3f}",
        f"- Dictionary Score: {c.dictionary.score:.3f}",
        f"- Grapheme Score: {c.grapheme.score:.3f}",
        f"- Summary: {c.summary}",
        "",
        "```",
        c.plaintext,
        "```",
        "",
    ]


def render_markdown(results: Mapping[str, Sequence[Candidate]]) -> str:
    lines: list[str] = []
    for source, candidates in results.items():
        lines.append(f"# {source}")
        lines.append("")
        if not candidates:
            lines.append("_No candidates produced._")
            lines.append("")
            continue
        for i, c in enumerate(candidates, start=1):
            lines.extend(render_candidate(i, c))
    return "\n".join(lines)


def write_report(results: Mapping[str, Sequence[Candidate]], path: Path | str) -> Path:
    out = Path(path)
    out.write_text(render_markdown(results), encoding="utf-8")
    logger.info("results exported to %s", out)
    return out
