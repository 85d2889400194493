from __future__ import annotations

import concurrent.futures
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from cipherbrute.classical import register_all

from .alphabet import ALPHABET, Alphabet
from .errors import ConfigurationError, InvalidKeyError, SearchWorkerError, UnknownCipherError
from .keyspace import KeyGroup, key_space_size
from .registry import CipherPlugin, get_plugin, searchable_plugins
from .results import Candidate
from .scoring import evaluate_candidate

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4
DEFAULT_TOP_K = 5
DEFAULT_CIPHERS = ("caesar", "vigenere", "affine")

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class SearchConfig:
    workers: int = DEFAULT_WORKERS
    top_k: int = DEFAULT_TOP_K
    ciphers: tuple[str, ...] = DEFAULT_CIPHERS
    alphabet: Alphabet = field(default=ALPHABET, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigurationError(f"Worker count must be an integer >= 1, got {self.workers!r}.")
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int) or self.top_k < 1:
            raise ConfigurationError(f"top_k must be an integer >= 1, got {self.top_k!r}.")
        names = tuple(c.lower().strip() for c in self.ciphers)
        if not names:
            raise ConfigurationError("At least one cipher must be selected.")
        object.__setattr__(self, "ciphers", names)

    def resolve_plugins(self) -> list[type[CipherPlugin]]:
        """Look up every selected cipher; fails before any trial runs."""
        register_all()
        plugins = []
        for name in self.ciphers:
            try:
                plugin = get_plugin(name)
            except UnknownCipherError as e:
                raise ConfigurationError(str(e)) from e
            if not plugin.key_groups(self.alphabet):
                raise ConfigurationError(
                    f"Cipher '{name}' has no enumerable key space. Searchable: {', '.join(searchable_plugins())}"
                )
            plugins.append(plugin)
        return plugins


class SearchProgress:
    """Thread-safe trial counter, optionally forwarding (done, total) to a callback."""

    def __init__(self, total: int = 0, callback: Optional[ProgressCallback] = None):
        self._lock = threading.Lock()
        self._done = 0
        self._total = total
        self._callback = callback

    @property
    def done(self) -> int:
        return self._done

    @property
    def total(self) -> int:
        return self._total

    def add_total(self, n: int) -> None:
        with self._lock:
            self._total += n

    def advance(self, n: int = 1) -> int:
        # Callback runs under the lock so it sees counts in order
        with self._lock:
            self._done += n
            if self._callback is not None:
                self._callback(self._done, self._total)
            return self._done


def run_trials(
    plugin: type[CipherPlugin],
    keys: Iterable[Any],
    source: str,
    ciphertext: str,
    *,
    alphabet: Alphabet = ALPHABET,
    progress: Optional[SearchProgress] = None,
) -> list[Candidate]:
    """
    Decrypt and score `ciphertext` under each key. Keys the cipher rejects are
    skipped. Everything is local to the call, so it is safe to run per worker.
    """
    out: list[Candidate] = []
    for key in keys:
        if progress is not None:
            progress.advance()
        try:
            cipher = plugin.from_key(key, alphabet)
        except InvalidKeyError as e:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("skipping %s key %r: %s", plugin.name, key, e)
            continue
        out.append(
            evaluate_candidate(
                cipher_name=plugin.name,
                key=cipher.key_descriptor,
                source=source,
                ciphertext=ciphertext,
                plaintext=cipher.decrypt(ciphertext),
            )
        )
    return out


def _run_group_range(
    plugin: type[CipherPlugin],
    group: KeyGroup,
    indices: range,
    source: str,
    ciphertext: str,
    alphabet: Alphabet,
    progress: Optional[SearchProgress],
) -> list[Candidate]:
    return run_trials(plugin, group.keys(indices), source, ciphertext, alphabet=alphabet, progress=progress)


def search_sequential(
    plugin: type[CipherPlugin],
    source: str,
    ciphertext: str,
    *,
    alphabet: Alphabet = ALPHABET,
    progress: Optional[SearchProgress] = None,
) -> list[Candidate]:
    out: list[Candidate] = []
    for group in plugin.key_groups(alphabet):
        out.extend(run_trials(plugin, group, source, ciphertext, alphabet=alphabet, progress=progress))
    return out


def search_parallel(
    plugin: type[CipherPlugin],
    source: str,
    ciphertext: str,
    *,
    workers: int,
    alphabet: Alphabet = ALPHABET,
    progress: Optional[SearchProgress] = None,
) -> list[Candidate]:
    """
    Split every key group into at most `workers` contiguous index ranges and
    run them on a thread pool. Waits for every task before returning; results
    are concatenated in submission order so discovery order is deterministic.
    """
    if workers < 1:
        raise ConfigurationError(f"Worker count must be >= 1, got {workers!r}.")

    jobs: list[tuple[str, range]] = []
    futures: list[concurrent.futures.Future[list[Candidate]]] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix=f"{plugin.name}-search") as ex:
        for group in plugin.key_groups(alphabet):
            for indices in group.partition(workers):
                jobs.append((group.label, indices))
                futures.append(
                    ex.submit(_run_group_range, plugin, group, indices, source, ciphertext, alphabet, progress)
                )
        concurrent.futures.wait(futures)

    out: list[Candidate] = []
    errors: list[BaseException] = []
    for (label, indices), fut in zip(jobs, futures):
        exc = fut.exception()
        if exc is not None:
            logger.error(
                "%s worker for %s keys [%d, %d) failed: %r", plugin.name, label, indices.start, indices.stop, exc
            )
            errors.append(exc)
            continue
        out.extend(fut.result())

    if errors:
        raise SearchWorkerError(errors)
    return out


def rank_candidates(candidates: Iterable[Candidate], top_k: Optional[int] = DEFAULT_TOP_K) -> list[Candidate]:
    """Descending by combined score; equal scores keep discovery order (stable sort)."""
    ranked = sorted(candidates, key=lambda c: c.combined_score, reverse=True)
    if top_k is None:
        return ranked
    return ranked[:top_k]


def trial_count(config: SearchConfig) -> int:
    """Trials one input costs under `config` (keys enumerated, before any are skipped)."""
    return sum(key_space_size(p.key_groups(config.alphabet)) for p in config.resolve_plugins())


def collect_candidates(
    text: str,
    source: str,
    config: SearchConfig,
    progress: Optional[SearchProgress] = None,
) -> list[Candidate]:
    """Every candidate for one input, in discovery order (no ranking)."""
    plugins = config.resolve_plugins()

    logger.info("processing %s (length: %d)", source, len(text))
    candidates: list[Candidate] = []
    for plugin in plugins:
        if plugin.parallel and config.workers > 1:
            found = search_parallel(
                plugin, source, text, workers=config.workers, alphabet=config.alphabet, progress=progress
            )
        else:
            found = search_sequential(plugin, source, text, alphabet=config.alphabet, progress=progress)
        logger.info("  %s: %d candidates", plugin.name, len(found))
        candidates.extend(found)
    return candidates


def search(
    text: str,
    source: str,
    workers: int = DEFAULT_WORKERS,
    *,
    config: Optional[SearchConfig] = None,
    progress: Optional[SearchProgress] = None,
) -> list[Candidate]:
    """
    Brute-force every selected cipher over `text` and return the best
    candidates, highest combined score first (at most config.top_k).

    `workers` is ignored when an explicit `config` is given.
    """
    if config is None:
        config = SearchConfig(workers=workers)
    if progress is not None:
        progress.add_total(trial_count(config))
    candidates = collect_candidates(text, source, config, progress)
    return rank_candidates(candidates, config.top_k)


def search_all(
    inputs: Iterable[tuple[str, str]],
    config: Optional[SearchConfig] = None,
    progress: Optional[SearchProgress] = None,
) -> dict[str, list[Candidate]]:
    """Search each (identifier, text) pair; keeps input order."""
    if config is None:
        config = SearchConfig()
    items = list(inputs)
    # Also validates the cipher selection before any input is searched
    per_input = trial_count(config)
    if progress is not None:
        progress.add_total(per_input * len(items))

    results: dict[str, list[Candidate]] = {}
    for source, text in items:
        results[source] = rank_candidates(collect_candidates(text, source, config, progress), config.top_k)
    return results
