"""
Cryptographic primitives for fieldcrypt.

This module provides the building blocks of the field cipher:
- Passphrase digest and key derivation (PBKDF2-HMAC-SHA512, SHA-256)
- AES-256-CBC encryption with an explicit IV
"""

from .kdf import derive_key, digest_passphrase, DEFAULT_ITERATIONS, KEY_LENGTH
from .aes_cbc import encrypt_data, decrypt_data, FIXED_IV, FIXED_IV_BLOCK

__all__ = [
    'derive_key',
    'digest_passphrase',
    'encrypt_data',
    'decrypt_data',
    'DEFAULT_ITERATIONS',
    'KEY_LENGTH',
    'FIXED_IV',
    'FIXED_IV_BLOCK',
]
