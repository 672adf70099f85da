"""Shared fixtures for blockcrypt tests."""
import pytest

from blockcrypt import CipherCache, CryptoService

KEY_16 = b"0123456789abcdef"
KEY_24 = b"0123456789abcdefghijklmn"
KEY_32 = b"0123456789abcdefghijklmnopqrstuv"
VALID_KEYS = [KEY_16, KEY_24, KEY_32]


@pytest.fixture
def cache() -> CipherCache:
    """A fresh unbounded cache per test"""
    return CipherCache()


@pytest.fixture
def service(cache: CipherCache) -> CryptoService:
    """A service bound to the per-test cache"""
    return CryptoService(cache)


@pytest.fixture(params=VALID_KEYS, ids=["aes128", "aes192", "aes256"])
def valid_key(request) -> bytes:
    """Each supported key size"""
    return request.param
