"""
Deterministic AES field cipher.

The key is derived once from a passphrase and salt at construction. Every
value is encrypted with the same fixed IV, so equal plaintexts produce equal
ciphertexts under one key. That is what makes equality search on an
encrypted column possible, and it also reveals which stored values are
equal.
"""

import logging
from typing import Any, Iterable, List, Hashable, Optional, Union

from ..config import FieldCipherConfig
from ..crypto.aes_cbc import FIXED_IV, decrypt_data, encrypt_data
from ..crypto.kdf import derive_key
from ..crypto.utils import armor, coerce_plaintext, dearmor, is_blank
from ..errors import DecryptionError
from .search import search as search_records


class AesNewProvider:
    """
    Field encryption provider using AES-256-CBC with a fixed IV.

    None and empty values pass through encrypt and decrypt unchanged.
    """

    name = "aes_new"

    def __init__(self, key: Union[str, bytes], salt: Union[str, bytes],
                 iterations: Optional[int] = None):
        """
        Initialize the provider.

        Args:
            key: Passphrase the encryption key is derived from
            salt: Salt combined with the passphrase
            iterations: PBKDF2 work factor (defaults to the configured value)

        Raises:
            ConfigError: If key or salt is missing or empty
        """
        self.logger = logging.getLogger(__name__)

        options = {"key": key, "salt": salt}
        if iterations is not None:
            options["iterations"] = iterations
        config = FieldCipherConfig.from_options(options)

        self._key = derive_key(config.key, config.salt, config.iterations)
        self._iv = FIXED_IV
        self.iterations = config.iterations

        self.logger.debug(f"{self.name} provider initialized ({config.iterations} KDF iterations)")

    @classmethod
    def from_config(cls, config: FieldCipherConfig) -> "AesNewProvider":
        """Create a provider from a validated config."""
        return cls(config.key, config.salt, iterations=config.iterations)

    @classmethod
    def from_options(cls, options=None) -> "AesNewProvider":
        """Create a provider from the framework's option mapping."""
        return cls.from_config(FieldCipherConfig.from_options(options))

    @property
    def key(self) -> bytes:
        """The derived 32-byte encryption key (read-only)."""
        return self._key

    @property
    def iv(self) -> bytes:
        """The shared fixed IV applied to every value."""
        return self._iv

    def encrypt(self, value: Any) -> Any:
        """
        Encrypt a value.

        None and empty values are returned unchanged. Anything else is
        encrypted and returned as base64 text.

        Returns:
            Base64 ciphertext, or the original blank value
        """
        if is_blank(value):
            return value

        ciphertext = encrypt_data(self._key, self._iv, coerce_plaintext(value))
        return armor(ciphertext)

    def decrypt(self, value: Any) -> Any:
        """
        Decrypt a value produced by encrypt().

        None and empty values are returned unchanged.

        Returns:
            Decrypted text

        Raises:
            DecryptionError: If the value is not well-formed ciphertext for
                this key. Wrong-key input can also decrypt to garbage.
        """
        if is_blank(value):
            return value

        try:
            plaintext = decrypt_data(self._key, self._iv, dearmor(value))
            return plaintext.decode('utf-8')
        except UnicodeDecodeError as e:
            self.logger.warning(f"{self.name} decryption produced non-UTF-8 plaintext")
            raise DecryptionError("Decrypted value is not valid UTF-8 (wrong key?)") from e
        except DecryptionError as e:
            self.logger.warning(f"{self.name} decryption failed: {e}")
            raise

    def search(self, records: Iterable[Any], field: Hashable, criteria: Any) -> List[Any]:
        """
        Find records whose stored field value equals criteria.

        criteria is compared as-is. To look up an encrypted column by
        plaintext use search_encrypted().
        """
        return search_records(records, field, criteria)

    def search_encrypted(self, records: Iterable[Any], field: Hashable, plaintext: Any) -> List[Any]:
        """Encrypt plaintext with this provider, then search for the ciphertext."""
        return search_records(records, field, self.encrypt(plaintext))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(iterations={self.iterations})"


# Public name for the provider
FieldCipher = AesNewProvider
