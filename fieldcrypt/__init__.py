"""
fieldcrypt: deterministic field encryption provider.

Derives an AES-256 key from a passphrase and salt and encrypts individual
field values for an ORM or persistence layer. All values share one fixed
IV, so equal plaintexts encrypt to equal ciphertexts and encrypted columns
can be searched by equality.

Basic Usage:
    >>> from fieldcrypt import FieldCipher
    >>>
    >>> cipher = FieldCipher(key="correct horse battery staple", salt="users.ssn")
    >>> token = cipher.encrypt("123-45-6789")
    >>> cipher.decrypt(token)
    '123-45-6789'
    >>>
    >>> # Search expects ciphertext, or use search_encrypted with plaintext
    >>> rows = [{"ssn": token}, {"ssn": cipher.encrypt("987-65-4321")}]
    >>> cipher.search(rows, "ssn", token) == rows[:1]
    True
"""

__version__ = "1.0.0"
__author__ = "fieldcrypt contributors"

from .errors import (
    FieldCryptError,
    ConfigError,
    KeyDerivationError,
    EncryptionError,
    DecryptionError,
)
from .config import FieldCipherConfig
from .crypto.kdf import derive_key, digest_passphrase
from .crypto.aes_cbc import FIXED_IV
from .provider import (
    AesNewProvider,
    FieldCipher,
    search,
    get_provider,
    register_provider,
    available_providers,
)

__all__ = [
    # Version info
    '__version__',

    # Providers
    'AesNewProvider',
    'FieldCipher',
    'get_provider',
    'register_provider',
    'available_providers',
    'search',

    # Key derivation
    'derive_key',
    'digest_passphrase',
    'FIXED_IV',

    # Configuration
    'FieldCipherConfig',

    # Errors
    'FieldCryptError',
    'ConfigError',
    'KeyDerivationError',
    'EncryptionError',
    'DecryptionError',
]
