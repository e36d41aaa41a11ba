"""
AES-256-CBC transform for fieldcrypt.

The IV is an explicit argument rather than module state so the fixed IV used
by the field cipher can be audited and swapped independently of the key.
CBC is unauthenticated: tampered or wrong-key ciphertext is only detected when
it breaks the PKCS#7 padding, otherwise it decrypts to garbage.
"""

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import DecryptionError, EncryptionError
from .kdf import KEY_LENGTH


BLOCK_SIZE = 16  # AES block size in bytes

# Fixed IV shared by every deterministic encryption. Values stored under this
# scheme only decrypt with the same constant.
FIXED_IV = bytes.fromhex(
    '4358eccd66f96e36c0c35420f619f0ced2e2c6d20556df2ba7af26761dab7fe7'
    'f0d676520176f11dac8c0e22d64ef4e195bc7406bf5a0c211c59bc2a196ae6a8'
)

# OpenSSL-style truncation: CBC consumes the first block of the constant
FIXED_IV_BLOCK = FIXED_IV[:BLOCK_SIZE]


def normalize_iv(iv: bytes) -> bytes:
    """
    Reduce an IV to the cipher's block size.

    Longer IVs are truncated to their first 16 bytes.

    Raises:
        ValueError: If the IV is shorter than one block
    """
    if len(iv) < BLOCK_SIZE:
        raise ValueError(f"IV must be at least {BLOCK_SIZE} bytes, got {len(iv)}")
    return bytes(iv[:BLOCK_SIZE])


def _cipher(key: bytes, iv: bytes) -> Cipher:
    if len(key) != KEY_LENGTH:
        raise ValueError(f"AES-256-CBC requires {KEY_LENGTH}-byte key")
    return Cipher(algorithms.AES(key), modes.CBC(normalize_iv(iv)))


def encrypt_data(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    """
    Encrypt data with AES-256-CBC and PKCS#7 padding.

    Args:
        key: 32-byte encryption key
        iv: Initialization vector (at least 16 bytes)
        plaintext: Data to encrypt

    Returns:
        Raw ciphertext, a multiple of 16 bytes

    Raises:
        EncryptionError: If encryption fails
    """
    try:
        padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = _cipher(key, iv).encryptor()
        return encryptor.update(padded) + encryptor.finalize()

    except Exception as e:
        raise EncryptionError(f"Encryption failed: {str(e)}") from e


def decrypt_data(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    """
    Decrypt AES-256-CBC data and strip PKCS#7 padding.

    Args:
        key: 32-byte encryption key
        iv: Initialization vector used for encryption
        ciphertext: Raw ciphertext

    Returns:
        Decrypted plaintext

    Raises:
        DecryptionError: If the ciphertext is empty, not block aligned,
            or its padding is invalid
    """
    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise DecryptionError(
            f"Ciphertext length must be a positive multiple of {BLOCK_SIZE}, got {len(ciphertext)}"
        )

    try:
        decryptor = _cipher(key, iv).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
        return unpadder.update(padded) + unpadder.finalize()

    except ValueError as e:
        raise DecryptionError(f"Decryption failed: {str(e)}") from e
