"""
Security Tests for fieldcrypt.

Tests the fixed IV, tamper handling and what the unauthenticated CBC mode
does and does not detect.
"""

import base64
import logging

import pytest

from fieldcrypt import FieldCipher, DecryptionError
from fieldcrypt.crypto.aes_cbc import (
    FIXED_IV,
    FIXED_IV_BLOCK,
    BLOCK_SIZE,
    encrypt_data,
    decrypt_data,
    normalize_iv,
)
from fieldcrypt.errors import EncryptionError
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

TEST_ITERATIONS = 1000
TEST_KEY = bytes(range(32))


def make_cipher(key="passphrase", salt="salt"):
    return FieldCipher(key, salt, iterations=TEST_ITERATIONS)


class TestFixedIV:
    """Test the constant initialization vector."""

    def test_iv_constant(self):
        """Test the IV is the published 64-byte constant."""
        assert len(FIXED_IV) == 64
        assert FIXED_IV.hex().startswith("4358eccd66f96e36")
        assert FIXED_IV.hex().endswith("1c59bc2a196ae6a8")

    def test_iv_block(self):
        """Test CBC uses the first block of the constant."""
        assert FIXED_IV_BLOCK == FIXED_IV[:BLOCK_SIZE]
        assert normalize_iv(FIXED_IV) == FIXED_IV_BLOCK

    def test_short_iv_rejected(self):
        """Test an IV shorter than one block is rejected."""
        with pytest.raises(ValueError):
            normalize_iv(b"\x00" * 8)

    def test_provider_uses_fixed_iv(self):
        """Test every provider shares the same IV."""
        assert make_cipher().iv == FIXED_IV
        assert make_cipher("other", "pair").iv == FIXED_IV

    def test_provider_iv_not_overridable(self):
        """Test the IV cannot be chosen per instance."""
        with pytest.raises(TypeError):
            FieldCipher("passphrase", "salt", iterations=TEST_ITERATIONS, iv=b"\x00" * 16)

    def test_ciphertext_interoperates_with_plain_cbc(self):
        """Test output is plain AES-256-CBC/PKCS7 under the key and first IV block."""
        cipher = make_cipher()
        raw = base64.b64decode(cipher.encrypt("interop"))

        decryptor = Cipher(algorithms.AES(cipher.key), modes.CBC(FIXED_IV_BLOCK)).decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()
        unpadder = padding.PKCS7(128).unpadder()

        assert unpadder.update(padded) + unpadder.finalize() == b"interop"

    def test_equal_prefix_leaks(self):
        """Test the fixed IV leaks equal leading blocks, as expected for this scheme."""
        raw_a = encrypt_data(TEST_KEY, FIXED_IV, b"A" * 16 + b"tail one")
        raw_b = encrypt_data(TEST_KEY, FIXED_IV, b"A" * 16 + b"tail two")

        assert raw_a[:16] == raw_b[:16]
        assert raw_a[16:] != raw_b[16:]


class TestCorruptionDetection:
    """Test handling of malformed and tampered ciphertext."""

    def test_invalid_base64(self):
        """Test non-base64 input raises DecryptionError."""
        with pytest.raises(DecryptionError):
            make_cipher().decrypt("not base64!!")

    def test_unaligned_ciphertext(self):
        """Test ciphertext that is not block aligned raises DecryptionError."""
        bogus = base64.b64encode(b"short").decode('ascii')

        with pytest.raises(DecryptionError):
            make_cipher().decrypt(bogus)

    def test_non_text_ciphertext(self):
        """Test values that cannot be ciphertext raise DecryptionError."""
        with pytest.raises(DecryptionError):
            make_cipher().decrypt(12345)

    def test_truncated_ciphertext(self):
        """Test dropping a block from a multi-block ciphertext is detected or garbled."""
        cipher = make_cipher()
        raw = base64.b64decode(cipher.encrypt("x" * 40))
        truncated = base64.b64encode(raw[:-16]).decode('ascii')

        try:
            result = cipher.decrypt(truncated)
        except DecryptionError:
            return
        assert result != "x" * 40

    def test_wrong_key(self):
        """Test decrypting under another key errors or yields garbage, never the plaintext."""
        token = make_cipher("right", "salt").encrypt("top secret value")

        try:
            result = make_cipher("wrong", "salt").decrypt(token)
        except DecryptionError:
            return
        assert result != "top secret value"

    def test_cbc_malleability_yields_garbage_not_error(self):
        """Test a flipped bit is not detected: CBC has no integrity check."""
        plaintext = b"A" * 20
        raw = bytearray(encrypt_data(TEST_KEY, FIXED_IV, plaintext))
        raw[0] ^= 0x01

        result = decrypt_data(TEST_KEY, FIXED_IV, bytes(raw))

        assert result != plaintext
        assert result[16] == ord("A") ^ 0x01
        assert result[17:] == plaintext[17:]

    def test_failure_is_logged(self, caplog):
        """Test decryption failures are logged at warning level."""
        with caplog.at_level(logging.WARNING, logger="fieldcrypt.provider.aes_new"):
            with pytest.raises(DecryptionError):
                make_cipher().decrypt("not base64!!")

        assert any("decryption failed" in record.message for record in caplog.records)


class TestPrimitiveErrors:
    """Test the raw cipher rejects bad keys."""

    def test_encrypt_wrong_key_size(self):
        """Test encryption with a short key raises EncryptionError."""
        with pytest.raises(EncryptionError):
            encrypt_data(b"\x00" * 16, FIXED_IV, b"data")

    def test_decrypt_wrong_key_size(self):
        """Test decryption with a short key raises DecryptionError."""
        with pytest.raises(DecryptionError):
            decrypt_data(b"\x00" * 16, FIXED_IV, b"\x00" * 16)

    def test_decrypt_empty(self):
        """Test empty raw ciphertext is rejected."""
        with pytest.raises(DecryptionError):
            decrypt_data(TEST_KEY, FIXED_IV, b"")


class TestSecretHygiene:
    """Test secrets stay out of logs."""

    def test_construction_log_has_no_secrets(self, caplog):
        """Test the debug log at construction omits passphrase, salt and key."""
        with caplog.at_level(logging.DEBUG, logger="fieldcrypt"):
            cipher = FieldCipher("hunter2-passphrase", "pepper-salt", iterations=TEST_ITERATIONS)

        text = caplog.text
        assert "provider initialized" in text
        assert "hunter2-passphrase" not in text
        assert "pepper-salt" not in text
        assert cipher.key.hex() not in text
