#!/usr/bin/env python3
"""
Generate the encrypted x-api-key header value for a client.

Usage:
    python scripts/generate_api_key.py --api-key "your-api-key" --encryption-key "your-encryption-key"

    Or with environment variables:
    export ENCRYPTION_KEY="your-encryption-key"
    python scripts/generate_api_key.py --api-key "your-api-key"
"""

import argparse
import os
import sys

from middleware.auth import decrypt_api_key, encrypt_api_key


def main():
    parser = argparse.ArgumentParser(
        description="Generate encrypted API keys for Vehicle Damage Assessment API authentication"
    )
    parser.add_argument(
        "--api-key",
        required=True,
        help="The API key to encrypt"
    )
    parser.add_argument(
        "--encryption-key",
        default=os.environ.get("ENCRYPTION_KEY"),
        help="The encryption key (or set ENCRYPTION_KEY env var)"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Verify the encrypted key by decrypting it"
    )

    args = parser.parse_args()

    if not args.encryption_key:
        print("Error: Encryption key is required.")
        print("Provide --encryption-key or set ENCRYPTION_KEY environment variable.")
        sys.exit(1)

    encrypted_key = encrypt_api_key(args.api_key, args.encryption_key)

    print(f"\nEncrypted Key:\n{encrypted_key}\n")
    print("Add this value to the 'x-api-key' header, e.g.:")
    print(f'curl -H "x-api-key: {encrypted_key}" -F "files=@car.jpg" http://localhost:8000/vehicle-damage/analyze\n')

    if args.verify:
        if decrypt_api_key(encrypted_key, args.encryption_key) == args.api_key:
            print("✓ Verification successful: Decrypted key matches original")
        else:
            print("✗ Verification failed: Decrypted key does not match")
            sys.exit(1)


if __name__ == "__main__":
    main()
