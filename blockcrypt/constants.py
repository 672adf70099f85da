# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.constants

Constants for blockcrypt.

"""

from collections import namedtuple

# AES works on 128-bit blocks whatever the key size
BLOCK_SIZE = 16

# Key byte length -> algorithm name
KEY_SIZES = {
    16: 'aes128',
    24: 'aes192',
    32: 'aes256',
}

# Text arguments are encoded with this before encryption
ENCODING = 'utf-8'

# Padding length must fit in one byte
MAX_PADDING_BLOCK_SIZE = 255


class CacheInfo(namedtuple('CacheInfo', ['size', 'max_size'])):

    __slots__ = ()


CacheInfo.size.__doc__ = """Number of cached contexts."""
CacheInfo.max_size.__doc__ = """Bound of the cache, 0 if unbounded."""
