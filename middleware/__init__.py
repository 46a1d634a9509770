"""Middleware package for authentication and other cross-cutting concerns."""

from .auth import verify_api_key, encrypt_api_key, decrypt_api_key

__all__ = ["verify_api_key", "encrypt_api_key", "decrypt_api_key"]
