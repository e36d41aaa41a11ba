#!/usr/bin/env python3
"""
Simple example demonstrating fieldcrypt deterministic field encryption.

This example shows how to:
1. Build a provider from a passphrase and salt
2. Encrypt and decrypt column values
3. Search an encrypted column by equality
"""

import sys
import os

# Add the current directory to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from fieldcrypt import get_provider, FieldCipher, DecryptionError


def main():
    print("🔐 Field Encryption - Example & Test")
    print("=" * 50)

    # Low work factor keeps the example fast
    options = {"key": "correct horse battery staple", "salt": "customers.email", "iterations": 1000}

    print("1. Building provider...")
    provider = get_provider("aes_new", **options)
    print(f"   ✅ {provider!r}")

    print("\n2. Encrypting values...")
    emails = ["alice@example.com", "bob@example.com", "alice@example.com", None, ""]
    rows = [{"id": i, "email": provider.encrypt(email)} for i, email in enumerate(emails, 1)]
    for row in rows:
        print(f"   Row {row['id']}: {row['email']!r}")
    assert rows[0]["email"] == rows[2]["email"], "Equal plaintexts must encrypt equally"
    assert rows[3]["email"] is None and rows[4]["email"] == "", "Blank values pass through"
    print("   ✅ Deterministic ciphertext, blanks untouched")

    print("\n3. Decrypting with a fresh provider...")
    reader = FieldCipher(**options)
    for row, email in zip(rows, emails):
        assert reader.decrypt(row["email"]) == email
    print("   ✅ All values recovered")

    print("\n4. Searching the encrypted column...")
    matches = provider.search_encrypted(rows, "email", "alice@example.com")
    print(f"   Matches: {[row['id'] for row in matches]}")
    assert [row["id"] for row in matches] == [1, 3]
    assert provider.search(rows, "email", "alice@example.com") == [], "Raw search expects ciphertext"
    print("   ✅ Search found rows 1 and 3")

    print("\n5. Rejecting malformed ciphertext...")
    try:
        provider.decrypt("definitely-not-ciphertext")
        raise AssertionError("Malformed ciphertext should not decrypt")
    except DecryptionError as e:
        print(f"   ✅ {e}")

    print("\n🎉 Field encryption example completed")


if __name__ == "__main__":
    main()
