"""Authentication dependency for API key validation."""

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken
from fastapi import Depends, Header, HTTPException

from config.settings import Settings, get_settings


def get_fernet(encryption_key: str) -> Fernet:
    """
    Build a Fernet cipher from an arbitrary shared secret.
    Fernet requires a 32-byte base64-encoded key, so the secret is hashed first.
    """
    key_hash = hashlib.sha256(encryption_key.encode()).digest()
    return Fernet(base64.urlsafe_b64encode(key_hash))


def encrypt_api_key(api_key: str, encryption_key: str) -> str:
    """Encrypt a plain API key into an x-api-key header value."""
    return get_fernet(encryption_key).encrypt(api_key.encode()).decode()


def decrypt_api_key(encrypted_value: str, encryption_key: str) -> str:
    """
    Decrypt an x-api-key header value.

    Raises:
        InvalidToken: If the value was not produced with the same encryption key
    """
    return get_fernet(encryption_key).decrypt(encrypted_value.encode()).decode()


def verify_api_key(
    x_api_key: str = Header(..., alias="x-api-key"),
    settings: Settings = Depends(get_settings),
) -> bool:
    """
    FastAPI dependency to verify the API key.

    The header carries the API key encrypted with ENCRYPTION_KEY; it is
    decrypted and compared with API_KEY.

    Raises:
        HTTPException: 500 if the server is not configured, 401 if the key is invalid
    """
    if not settings.api_key or not settings.encryption_key:
        raise HTTPException(
            status_code=500,
            detail="Server API key not configured"
        )

    if not x_api_key:
        raise HTTPException(
            status_code=401,
            detail="Missing x-api-key header"
        )

    try:
        decrypted_key = decrypt_api_key(x_api_key, settings.encryption_key)
    except (InvalidToken, ValueError):
        raise HTTPException(
            status_code=401,
            detail="Invalid API key - decryption failed"
        )

    if decrypted_key != settings.api_key:
        raise HTTPException(
            status_code=401,
            detail="Invalid API key"
        )

    return True
