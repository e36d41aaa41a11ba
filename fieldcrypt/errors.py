"""
Exception hierarchy for fieldcrypt.

Every error raised by the library derives from FieldCryptError so callers
embedding a provider in a persistence layer can catch one type.
"""


class FieldCryptError(Exception):
    """Base class for all fieldcrypt errors."""
    pass


class ConfigError(FieldCryptError):
    """Raised when a provider is constructed with missing or invalid options."""
    pass


class KeyDerivationError(FieldCryptError):
    """Raised when key derivation fails."""
    pass


class EncryptionError(FieldCryptError):
    """Raised when encryption fails."""
    pass


class DecryptionError(FieldCryptError):
    """
    Raised when a value cannot be decrypted.

    AES-CBC carries no authentication tag, so only structural problems
    (bad encoding, wrong length, invalid padding, undecodable text) are
    detected. A ciphertext decrypted under the wrong key may still yield
    garbage plaintext without raising.
    """
    pass
