"""Unit tests for cipher contexts and the cipher cache."""
from concurrent.futures import ThreadPoolExecutor
from threading import Barrier
from unittest.mock import patch

import pytest

from blockcrypt.lib import cipher
from blockcrypt.lib.cipher import (
    AES128Context,
    AES192Context,
    AES256Context,
    CipherCache,
    get_context_class,
    new_context,
)
from blockcrypt.lib.exceptions import InvalidKeyLength

from conftest import KEY_16, KEY_24, KEY_32


@pytest.mark.parametrize("key, cls, name", [
    (KEY_16, AES128Context, "aes128"),
    (KEY_24, AES192Context, "aes192"),
    (KEY_32, AES256Context, "aes256"),
])
def test_context_class_by_key_length(key: bytes, cls: type, name: str) -> None:
    """Test the key length selects the AES variant"""
    assert get_context_class(key) is cls
    ctx = new_context(key)
    assert isinstance(ctx, cls)
    assert ctx.name == name
    assert ctx.block_size == 16
    assert ctx.key == key


def test_context_iv_is_key_prefix() -> None:
    """Test the IV is the first block of the key"""
    ctx = new_context(KEY_32)
    assert ctx.iv == KEY_32[:16]


def test_context_transforms_are_fresh() -> None:
    """Test each transform starts a new chain from the same IV"""
    ctx = new_context(KEY_16)
    block = b"A" * 16
    first = ctx.encryptor()
    second = ctx.encryptor()
    assert first is not second
    assert first.update(block) == second.update(block)


def test_context_rejects_wrong_length() -> None:
    """Test a context class refuses keys of another size"""
    with pytest.raises(InvalidKeyLength):
        AES256Context(KEY_16)


@pytest.mark.parametrize("length", [0, 1, 15, 17, 23, 25, 31, 33, 64])
def test_invalid_key_length(cache: CipherCache, length: int) -> None:
    """Test unsupported key lengths fail and are not cached"""
    key = b"k" * length
    with pytest.raises(InvalidKeyLength) as exc_info:
        cache.get_or_create(key)
    assert str(length) in str(exc_info.value)
    assert len(cache) == 0
    assert key not in cache
    # Retrying fails the same way
    with pytest.raises(InvalidKeyLength):
        cache.get_or_create(key)


def test_invalid_key_does_not_affect_valid_key(cache: CipherCache) -> None:
    """Test a failure for one key is not reused for another"""
    with pytest.raises(InvalidKeyLength):
        cache.get_or_create(KEY_16[:15])
    ctx = cache.get_or_create(KEY_16)
    assert ctx.name == "aes128"


def test_same_key_same_context(cache: CipherCache) -> None:
    """Test every lookup of a key returns the same instance"""
    ctx = cache.get_or_create(KEY_16)
    assert cache.get_or_create(KEY_16) is ctx
    assert cache.get_or_create(bytearray(KEY_16)) is ctx
    assert len(cache) == 1
    assert KEY_16 in cache


def test_distinct_keys_distinct_contexts(cache: CipherCache) -> None:
    """Test keys differing in one bit get their own context"""
    other = bytes([KEY_16[0] ^ 1]) + KEY_16[1:]
    assert cache.get_or_create(KEY_16) is not cache.get_or_create(other)
    assert len(cache) == 2


def test_separate_caches_are_isolated() -> None:
    """Test two caches never share contexts"""
    first, second = CipherCache(), CipherCache()
    assert first.get_or_create(KEY_16) is not second.get_or_create(KEY_16)


def test_clear(cache: CipherCache) -> None:
    """Test clear drops every context"""
    ctx = cache.get_or_create(KEY_16)
    cache.get_or_create(KEY_24)
    cache.clear()
    assert len(cache) == 0
    assert cache.get_or_create(KEY_16) is not ctx


def test_info(cache: CipherCache) -> None:
    """Test info reports size and bound"""
    cache.get_or_create(KEY_16)
    info = cache.info()
    assert info.size == 1
    assert info.max_size == 0


def test_contains_ignores_non_bytes(cache: CipherCache) -> None:
    """Test membership of non-bytes objects is False"""
    cache.get_or_create(KEY_16)
    assert KEY_16.decode() not in cache
    assert None not in cache


def test_negative_max_size() -> None:
    """Test a negative bound is rejected"""
    with pytest.raises(ValueError):
        CipherCache(-1)


def test_bounded_cache_evicts_least_recently_used() -> None:
    """Test the bounded cache drops the oldest unused context"""
    cache = CipherCache(max_size=2)
    ctx_16 = cache.get_or_create(KEY_16)
    cache.get_or_create(KEY_24)
    # Touch KEY_16 so KEY_24 becomes the oldest
    assert cache.get_or_create(KEY_16) is ctx_16
    cache.get_or_create(KEY_32)
    assert len(cache) == 2
    assert KEY_16 in cache
    assert KEY_32 in cache
    assert KEY_24 not in cache


def test_concurrent_misses_build_once(cache: CipherCache) -> None:
    """Test threads racing on a new key build a single context"""
    workers = 16
    barrier = Barrier(workers)
    built = []
    real_class = AES128Context

    class CountingContext(real_class):
        def __init__(self, key):
            built.append(key)
            super().__init__(key)

    def lookup(_):
        barrier.wait()
        return cache.get_or_create(KEY_16)

    with patch.dict(cipher.cipher_contexts, {16: CountingContext}):
        with ThreadPoolExecutor(max_workers=workers) as executor:
            contexts = list(executor.map(lookup, range(workers)))

    assert len(built) == 1
    assert all(ctx is contexts[0] for ctx in contexts)
