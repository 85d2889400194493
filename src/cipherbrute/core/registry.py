from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from .errors import UnknownCipherError
from .keyspace import KeyGroup

logger = logging.getLogger(__name__)


class CipherPlugin(Protocol):
    """
    A cipher class. Instances are bound to one key; class methods describe the
    key model so the search can enumerate it without knowing the cipher.
    """

    name: str
    # Take part in brute-force search at all
    searchable: bool
    # Key space is big enough to be split across workers
    parallel: bool

    @property
    def key_descriptor(self) -> str:
        ...

    def encrypt(self, plaintext: str) -> str:
        ...

    def decrypt(self, ciphertext: str) -> str:
        ...

    @classmethod
    def from_key(cls, key: Any, alphabet: Any = ...) -> "CipherPlugin":
        ...

    @classmethod
    def parse_key(cls, key: Optional[str]) -> Any:
        ...

    @classmethod
    def key_groups(cls, alphabet: Any = ...) -> list[KeyGroup]:
        ...


_PLUGINS: dict[str, type[CipherPlugin]] = {}


def register_plugin(plugin: type[CipherPlugin]) -> None:
    key = plugin.name.lower().strip()
    if not key:
        raise ValueError("Plugin must have a non-empty name.")
    _PLUGINS[key] = plugin
    logger.debug("registered cipher plugin %s", key)


def list_plugins() -> list[str]:
    return sorted(_PLUGINS.keys())


def get_plugin(name: str) -> type[CipherPlugin]:
    key = name.lower().strip()
    if key not in _PLUGINS:
        raise UnknownCipherError(name, list_plugins())
    return _PLUGINS[key]


def searchable_plugins() -> list[str]:
    return [name for name in list_plugins() if _PLUGINS[name].searchable]


def build_cipher(cipher_name: str, key: Optional[str]) -> CipherPlugin:
    plugin = get_plugin(cipher_name)
    return plugin.from_key(plugin.parse_key(key))


def encrypt_known(cipher_name: str, plaintext: str, key: Optional[str]) -> str:
    return build_cipher(cipher_name, key).encrypt(plaintext)


def decrypt_known(cipher_name: str, ciphertext: str, key: Optional[str]) -> str:
    return build_cipher(cipher_name, key).decrypt(ciphertext)
