"""
Token helpers

Raw tokens are handed to the user once; only their SHA-256 hex digest is
persisted and used for lookups.
"""

import hashlib
import secrets


def generate_token() -> str:
    """Generate a 256-bit URL-safe random token"""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a raw token"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
