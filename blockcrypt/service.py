# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.service
===============

Encryption and decryption entry points.

Example

>>> service = CryptoService()
>>> ciphertext = service.encrypt(b'hello world', b'0123456789abcdef')
>>> len(ciphertext)
16
>>> service.decrypt(ciphertext, b'0123456789abcdef')
b'hello world'

"""

from threading import Lock
from .config import get_config
from .lib.cipher import CipherCache, CipherContext
from .lib.exceptions import InvalidKeyLength, MalformedCiphertext
from .lib.padding import pad, unpad
from .log import get_logger
from .utils import BytesLike, to_bytes

LOGGER = get_logger(__name__)


class CryptoService:

    """AES-CBC encryption with PKCS#7 padding.

    Contexts come from the given cache, or from a new one sized by
    the cache.max_size setting, validated first. Services sharing a
    cache share contexts.

    """

    def __init__(self, cache: CipherCache | None = None):
        if cache is None:
            config = get_config()
            config.validate()
            cache = CipherCache(config.cache.max_size)
        self._cache = cache

    @property
    def cache(self) -> CipherCache:
        """Return the cipher cache."""
        return self._cache

    def _context(self, key: BytesLike | str) -> CipherContext:
        key = to_bytes(key, 'key')
        try:
            return self._cache.get_or_create(key)
        except InvalidKeyLength:
            LOGGER.warning("Rejected key of %d bytes", len(key))
            raise

    def encrypt(self, plaintext: BytesLike | str,
                key: BytesLike | str) -> bytes:
        """Encrypt plaintext with key.

        Raises InvalidKeyLength if key is not 16, 24 or 32 bytes long.

        """
        ctx = self._context(key)
        padded = pad(to_bytes(plaintext, 'plaintext'), ctx.block_size)
        encryptor = ctx.encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    def decrypt(self, ciphertext: BytesLike,
                key: BytesLike | str) -> bytes:
        """Decrypt ciphertext with key.

        Raises InvalidKeyLength for a bad key and MalformedCiphertext
        if ciphertext is not whole blocks or its padding is broken.

        """
        ctx = self._context(key)
        ciphertext = to_bytes(ciphertext, 'ciphertext', None)
        if not ciphertext or len(ciphertext) % ctx.block_size:
            LOGGER.warning("Rejected ciphertext of %d bytes", len(ciphertext))
            raise MalformedCiphertext(
                f"Ciphertext length ({len(ciphertext)}) is not a positive "
                f"multiple of block size ({ctx.block_size}).")
        decryptor = ctx.decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        try:
            return unpad(padded, ctx.block_size)
        except MalformedCiphertext:
            LOGGER.warning("Rejected ciphertext with invalid padding")
            raise


_default_service = None
_default_lock = Lock()


def get_default_service() -> CryptoService:
    """Return the process-wide service, creating it on first use."""
    global _default_service
    if _default_service is None:
        with _default_lock:
            if _default_service is None:
                _default_service = CryptoService()
    return _default_service


def encrypt(plaintext: BytesLike | str, key: BytesLike | str) -> bytes:
    """Encrypt plaintext with key using the default service."""
    return get_default_service().encrypt(plaintext, key)


def decrypt(ciphertext: BytesLike, key: BytesLike | str) -> bytes:
    """Decrypt ciphertext with key using the default service."""
    return get_default_service().decrypt(ciphertext, key)
