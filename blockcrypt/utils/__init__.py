# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.utils

Blockcrypt utilities.

"""

from ..constants import ENCODING

BytesLike = bytes | bytearray | memoryview


def to_bytes(data: BytesLike | str, name='data',
             encoding: str | None = ENCODING) -> bytes:
    """Return data as bytes.

    Strings are encoded, bytes-like objects are copied into bytes.
    Strings are refused if encoding is None.

    """
    if isinstance(data, str) and encoding is not None:
        return data.encode(encoding)
    if isinstance(data, BytesLike):
        return bytes(data)
    kinds = 'bytes' if encoding is None else 'bytes or str'
    raise TypeError(f"{name} must be {kinds}, not {type(data).__name__}")
