from .errors import (
    CipherBruteError,
    ConfigurationError,
    InvalidKeyError,
    SearchWorkerError,
    UnknownCipherError,
)
from .results import Candidate, HeuristicResult
from .registry import register_plugin, decrypt_known, encrypt_known, list_plugins
from .search import SearchConfig, SearchProgress, rank_candidates, search, search_all

__all__ = [
    "Candidate",
    "CipherBruteError",
    "ConfigurationError",
    "HeuristicResult",
    "InvalidKeyError",
    "SearchConfig",
    "SearchProgress",
    "SearchWorkerError",
    "UnknownCipherError",
    "decrypt_known",
    "encrypt_known",
    "list_plugins",
    "rank_candidates",
    "register_plugin",
    "search",
    "search_all",
]
