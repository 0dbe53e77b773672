"""Security primitives for password workflows."""

from __future__ import annotations

import hashlib
import hmac
import secrets


def _digest(password: str, salt: str, pepper: str) -> str:
    value = f"{pepper}:{salt}:{password}".encode("utf-8")
    return hashlib.sha256(value).hexdigest()


def hash_password(password: str, pepper: str = "", salt: str | None = None) -> str:
    """Return ``salt$digest`` for storage on the account record."""
    salt = salt or secrets.token_hex(16)
    return f"{salt}${_digest(password, salt, pepper)}"


def verify_password(password: str, hashed_password: str, pepper: str = "") -> bool:
    """Constant-time comparison for hashed password values."""
    salt, sep, expected = hashed_password.partition("$")
    if not sep:
        return False
    candidate = _digest(password, salt, pepper)
    return hmac.compare_digest(candidate, expected)
