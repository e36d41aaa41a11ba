"""
Byte and encoding utilities shared by the key derivation and cipher modules.
"""

import base64
import binascii
from collections.abc import Sized
from typing import Any, Union

from ..errors import DecryptionError, EncryptionError


def to_bytes(data: Union[str, bytes, bytearray, memoryview]) -> bytes:
    """
    Convert text or a bytes-like object to bytes.

    Args:
        data: str (UTF-8 encoded) or bytes-like object

    Returns:
        Bytes representation

    Raises:
        TypeError: If data is neither text nor bytes-like
    """
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"Expected str or bytes, got {type(data).__name__}")


def coerce_plaintext(value: Any) -> bytes:
    """
    Turn an arbitrary field value into plaintext bytes.

    Non-text values are rendered with str() first, so integers, decimals and
    dates are stored as their string form.
    Bytes must already be UTF-8, since decrypt() always returns text.

    Raises:
        EncryptionError: If the value cannot be represented as UTF-8
    """
    try:
        if isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
            data.decode('utf-8')
            return data
        if not isinstance(value, str):
            value = str(value)
        return value.encode('utf-8')
    except UnicodeError as e:
        raise EncryptionError(f"Plaintext is not valid UTF-8 text: {e}") from e


def is_blank(value: Any) -> bool:
    """Return True for None and for zero-length sequences."""
    if value is None:
        return True
    return isinstance(value, Sized) and len(value) == 0


def armor(data: bytes) -> str:
    """Encode binary ciphertext as single-line base64 text."""
    return base64.b64encode(data).decode('ascii')


def dearmor(text: Union[str, bytes]) -> bytes:
    """
    Decode base64 ciphertext produced by armor().

    ASCII whitespace is ignored so line-wrapped values still decode.

    Raises:
        DecryptionError: If the text is not valid base64
    """
    try:
        raw = to_bytes(text)
        return base64.b64decode(b"".join(raw.split()), validate=True)
    except (TypeError, binascii.Error) as e:
        raise DecryptionError(f"Ciphertext is not valid base64: {e}") from e
