# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt

AES-CBC encryption with cached per-key cipher contexts.
"""

__author__ = 'SiumLhahah'
__version__ = '0.1.0'

from .lib.cipher import CipherCache, CipherContext
from .lib.exceptions import CryptoError, InvalidKeyLength, MalformedCiphertext
from .service import CryptoService, decrypt, encrypt, get_default_service
