"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import bcrypt

from config.settings import config
from utils.errors import HashError

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt (auto-salted, ``config.bcrypt_rounds``)."""
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        raise HashError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
    try:
        salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
        return bcrypt.hashpw(raw, salt).decode()
    except ValueError as exc:
        raise HashError() from exc


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison against a bcrypt hash.

    Returns ``False`` on mismatch.  Raises ``HashError`` when
    *password_hash* is not a valid bcrypt hash.
    """
    raw = password.encode()
    if len(raw) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(raw, password_hash.encode())
    except ValueError as exc:
        raise HashError("Malformed password hash") from exc
