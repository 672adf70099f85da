# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.lib.padding

PKCS#7 padding.

Example

>>> pad(b'hello world', 16)
b'hello world\\x05\\x05\\x05\\x05\\x05'
>>> unpad(pad(b'hello world', 16))
b'hello world'

"""

from cryptography.hazmat.primitives.padding import PKCS7
from ..constants import MAX_PADDING_BLOCK_SIZE
from .exceptions import MalformedCiphertext


def pad(data: bytes, block_size: int) -> bytes:
    """Pad data up to a multiple of block_size.

    Always appends between 1 and block_size bytes,
    a whole block if data is already aligned.

    """
    if not 0 < block_size <= MAX_PADDING_BLOCK_SIZE:
        raise ValueError(f"block_size must be in 1..{MAX_PADDING_BLOCK_SIZE}")
    padder = PKCS7(block_size * 8).padder()
    return padder.update(data) + padder.finalize()


def unpad(data: bytes, block_size: int | None = None) -> bytes:
    """Strip the padding added by pad.

    Only the final length byte is read. If block_size is given,
    the padding length may not exceed it.

    """
    if not data:
        raise MalformedCiphertext("Cannot unpad empty data.")
    size = data[-1]
    if not size or size > len(data):
        raise MalformedCiphertext(
            f"Invalid padding length {size} for {len(data)} bytes.")
    if block_size is not None and size > block_size:
        raise MalformedCiphertext(
            f"Padding length {size} exceeds block size {block_size}.")
    return data[:-size]
