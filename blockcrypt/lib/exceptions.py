# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.lib.exceptions

Errors.

"""


class ErrorMetaclass(type):
    """Error Metaclass"""

    def __new__(cls, name, base=Exception, attrs=None):
        attrs = dict(attrs or {})

        def init(self, msg=None):
            base.__init__(self, msg)
            self.msg = msg
        attrs['__init__'] = init
        attrs['__str__'] = lambda self: str(self.msg)
        return type.__new__(cls, name, (base,), attrs)

    def __init__(cls, name, base=Exception, attrs=None):
        super().__init__(name, (base,), attrs or {})


CryptoError = ErrorMetaclass('CryptoError', ValueError)
ConfigurationError = ErrorMetaclass('ConfigurationError', ValueError)
InvalidKeyLength = ErrorMetaclass('InvalidKeyLength', CryptoError)
MalformedCiphertext = ErrorMetaclass('MalformedCiphertext', CryptoError)
