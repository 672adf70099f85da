# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.lib.cipher

AES-CBC cipher contexts and the cache keeping one context per key.

The initialization vector of a context is the first block of its key,
so equal plaintexts under one key always give equal ciphertexts.
This leaks plaintext equality and is kept for compatibility only.

Example

>>> cache = CipherCache()
>>> ctx = cache.get_or_create(b'0123456789abcdef')
>>> ctx.name, ctx.block_size
('aes128', 16)
>>> cache.get_or_create(b'0123456789abcdef') is ctx
True

"""

from collections import OrderedDict
from cryptography.hazmat.primitives.ciphers import (
    Cipher,
    CipherContext as Transform
)
from cryptography.hazmat.primitives.ciphers.algorithms import AES
from cryptography.hazmat.primitives.ciphers.modes import CBC
from ..constants import BLOCK_SIZE, KEY_SIZES, CacheInfo
from ..log import get_logger
from ..utils import BytesLike
from ..utils.multithread import ReadWriteLock
from .exceptions import InvalidKeyLength

LOGGER = get_logger(__name__)


class CipherContext:

    """AES-CBC cipher bound to one key.

    Key validation and the Cipher object are done once. Every call to
    encryptor() or decryptor() sets up the key again and starts a new
    chain from the same IV.

    """

    name = 'aes'
    key_size = 0
    block_size = BLOCK_SIZE

    def __init__(self, key: bytes):
        if len(key) != self.key_size:
            raise InvalidKeyLength(
                f"{self.name} needs a {self.key_size}-byte key, "
                f"got {len(key)} bytes")
        self._key = key
        self._iv = key[:self.block_size]
        self._cipher = Cipher(AES(key), CBC(self._iv))

    @property
    def key(self) -> bytes:
        """Return the key bytes."""
        return self._key

    @property
    def iv(self) -> bytes:
        """Return the initialization vector."""
        return self._iv

    def encryptor(self) -> Transform:
        """Return a new CBC encryption transform."""
        return self._cipher.encryptor()

    def decryptor(self) -> Transform:
        """Return a new CBC decryption transform."""
        return self._cipher.decryptor()

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name}>"


class AES128Context(CipherContext):

    """AES-128 context."""

    name = 'aes128'
    key_size = 16


class AES192Context(CipherContext):

    """AES-192 context."""

    name = 'aes192'
    key_size = 24


class AES256Context(CipherContext):

    """AES-256 context."""

    name = 'aes256'
    key_size = 32


cipher_contexts = {
    cls.key_size: cls
    for cls in (AES128Context, AES192Context, AES256Context)
}


def get_context_class(key: bytes) -> type[CipherContext]:
    """Get the context class for the key length."""
    if cls := cipher_contexts.get(len(key)):
        return cls
    raise InvalidKeyLength(
        f"Key must be {', '.join(map(str, KEY_SIZES))} bytes long, "
        f"got {len(key)} bytes")


def new_context(key: bytes) -> CipherContext:
    """Build a context for the key."""
    return get_context_class(key)(key)


class CipherCache:

    """Cache of cipher contexts keyed by key bytes.

    A context is built at most once per key while it stays cached.
    Lookups share a read lock; a miss checks, builds and inserts under
    the write lock. With max_size > 0 the least recently used context
    is dropped once the bound is reached, and every lookup takes the
    write lock since a hit reorders the entries.

    """

    def __init__(self, max_size: int = 0):
        if max_size < 0:
            raise ValueError("max_size must not be negative")
        self._max_size = max_size
        self._contexts: OrderedDict[bytes, CipherContext] = OrderedDict()
        self._lock = ReadWriteLock()

    @property
    def max_size(self) -> int:
        """Return the bound, 0 if unbounded."""
        return self._max_size

    def get_or_create(self, key: bytes) -> CipherContext:
        """Return the context for key, building it on first use.

        Raises InvalidKeyLength for keys not 16, 24 or 32 bytes long.
        Failures are never cached.

        """
        key = bytes(key)
        cls = get_context_class(key)
        if not self._max_size:
            with self._lock.rlock:
                if (ctx := self._contexts.get(key)) is not None:
                    return ctx
        with self._lock.wlock:
            if (ctx := self._contexts.get(key)) is not None:
                self._contexts.move_to_end(key)
                return ctx
            ctx = cls(key)
            self._contexts[key] = ctx
            LOGGER.debug("Built %s context, %d cached",
                         ctx.name, len(self._contexts))
            if self._max_size and len(self._contexts) > self._max_size:
                _, evicted = self._contexts.popitem(last=False)
                LOGGER.debug("Evicted least recently used %s context",
                             evicted.name)
            return ctx

    def clear(self):
        """Drop every cached context."""
        with self._lock.wlock:
            self._contexts.clear()

    def info(self) -> CacheInfo:
        """Return the cache size and bound."""
        with self._lock.rlock:
            return CacheInfo(len(self._contexts), self._max_size)

    def __len__(self) -> int:
        with self._lock.rlock:
            return len(self._contexts)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, BytesLike):
            return False
        with self._lock.rlock:
            return bytes(key) in self._contexts
