#!/usr/bin/env python3
"""
Command line interface for fieldcrypt.

Encrypts and decrypts single values with the aes_new provider, for checking
stored data or preparing search criteria by hand.

Usage:
    fieldcrypt --key PASS --salt SALT encrypt "value"
    FIELDCRYPT_KEY=PASS FIELDCRYPT_SALT=SALT fieldcrypt decrypt "Q2lwaGVy..."
    fieldcrypt benchmark --sizes 16,256,4096 --iterations 500
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .config import ENV_PREFIX, FieldCipherConfig
from .crypto.kdf import digest_passphrase
from .errors import FieldCryptError
from .evaluation.benchmark import run_benchmark
from .provider.aes_new import AesNewProvider


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(prog='fieldcrypt', description='Deterministic field encryption')
    parser.add_argument('--key', help='Passphrase (default: $FIELDCRYPT_KEY)')
    parser.add_argument('--salt', help='Salt (default: $FIELDCRYPT_SALT)')
    parser.add_argument('--iterations', type=int,
                        help='PBKDF2 iterations (default: $FIELDCRYPT_KDF_ITERATIONS or 60000)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Sub-commands')

    encrypt_parser = subparsers.add_parser('encrypt', help='Encrypt a value')
    encrypt_parser.add_argument('value', help='Plaintext to encrypt')

    decrypt_parser = subparsers.add_parser('decrypt', help='Decrypt a value')
    decrypt_parser.add_argument('value', help='Base64 ciphertext to decrypt')

    subparsers.add_parser('digest', help='Print the hex passphrase digest')

    benchmark_parser = subparsers.add_parser('benchmark', help='Measure encrypt/decrypt throughput')
    benchmark_parser.add_argument('--sizes', type=str, default='16,256,4096',
                                  help='Comma-separated value sizes in bytes')
    benchmark_parser.add_argument('--iterations', dest='bench_iterations', type=int, default=1000,
                                  help='Iterations per size (default: 1000)')

    return parser


def _load_config(args) -> FieldCipherConfig:
    """Build config from flags; each missing flag falls back to its FIELDCRYPT_* variable."""
    options = {
        'key': args.key if args.key is not None else os.environ.get(f"{ENV_PREFIX}KEY"),
        'salt': args.salt if args.salt is not None else os.environ.get(f"{ENV_PREFIX}SALT"),
    }
    if args.iterations is not None:
        options['iterations'] = args.iterations
    return FieldCipherConfig.from_options(options)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the fieldcrypt command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'benchmark':
            sizes = [int(x.strip()) for x in args.sizes.split(',') if x.strip()]
            results = run_benchmark(sizes, args.bench_iterations)
            print(json.dumps(results, indent=2))
            return 0

        config = _load_config(args)

        if args.command == 'digest':
            print(digest_passphrase(config.key, config.salt, config.iterations))
            return 0

        provider = AesNewProvider.from_config(config)
        if args.command == 'encrypt':
            print(provider.encrypt(args.value))
        elif args.command == 'decrypt':
            print(provider.decrypt(args.value))
        return 0

    except (FieldCryptError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
