"""
Key Derivation Functions for fieldcrypt.

Turns a passphrase and salt into the symmetric key used by the field cipher:
- The passphrase is stretched with PBKDF2-HMAC-SHA512 into a 64-byte digest,
  rendered as lowercase hex (the "passphrase digest")
- The AES-256 key is the SHA-256 of that hex digest

Both steps are deterministic, so a provider rebuilt from the same passphrase
and salt can decrypt values stored by an earlier one.
"""

import hashlib
from typing import Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..errors import ConfigError, KeyDerivationError
from .utils import to_bytes


# Derivation constants
DEFAULT_ITERATIONS = 60000
DIGEST_LENGTH = 64  # PBKDF2-HMAC-SHA512 output, 128 hex characters
KEY_LENGTH = 32  # 256-bit AES key

Secret = Union[str, bytes]


def _require(name: str, value: Secret) -> bytes:
    """Validate a required derivation input and return it as bytes."""
    if value is None:
        raise ConfigError(f"{name} is required")
    try:
        data = to_bytes(value)
    except TypeError as e:
        raise ConfigError(f"{name} must be str or bytes") from e
    if not data:
        raise ConfigError(f"{name} must not be empty")
    return data


def digest_passphrase(passphrase: Secret, salt: Secret,
                      iterations: int = DEFAULT_ITERATIONS) -> str:
    """
    Stretch a passphrase and salt into a hex digest.

    Args:
        passphrase: Secret passphrase (str is UTF-8 encoded)
        salt: Salt combined with the passphrase
        iterations: PBKDF2 work factor

    Returns:
        128-character lowercase hex string

    Raises:
        ConfigError: If passphrase or salt is missing/empty, or iterations < 1
        KeyDerivationError: If the underlying KDF fails
    """
    password_bytes = _require("passphrase", passphrase)
    salt_bytes = _require("salt", salt)

    if not isinstance(iterations, int) or isinstance(iterations, bool) or iterations < 1:
        raise ConfigError(f"iterations must be a positive integer, got {iterations!r}")

    try:
        pbkdf2 = PBKDF2HMAC(
            algorithm=hashes.SHA512(),
            length=DIGEST_LENGTH,
            salt=salt_bytes,
            iterations=iterations,
        )
        return pbkdf2.derive(password_bytes).hex()
    except Exception as e:
        raise KeyDerivationError(f"Passphrase digest failed: {str(e)}") from e


def derive_key(passphrase: Secret, salt: Secret,
               iterations: int = DEFAULT_ITERATIONS) -> bytes:
    """
    Derive the 32-byte AES-256 key for a passphrase and salt.

    Same inputs always give the same key.

    Raises:
        ConfigError: If passphrase or salt is missing or empty
        KeyDerivationError: If derivation fails
    """
    digest = digest_passphrase(passphrase, salt, iterations)
    return hashlib.sha256(digest.encode('ascii')).digest()


# Short alias matching the provider vocabulary
derive = derive_key
