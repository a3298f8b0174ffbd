"""
JWT-style token creation and verification.

Tokens are urlsafe-base64-encoded JSON payloads signed with HMAC-SHA256.
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict, Optional

from config.settings import config
from utils.errors import AuthError, AuthErrorKind, ConfigurationError


class TokenSigner:
    """Issue and verify signed bearer tokens for a single secret."""

    def __init__(self, secret: str, expiry_seconds: int) -> None:
        if not secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def create(self, user_id: int, now: Optional[float] = None) -> str:
        """Create a signed token containing ``user_id``, issue time and expiry."""
        issued = int(now if now is not None else time.time())
        payload = {
            "user_id": user_id,
            "iat": issued,
            "exp": issued + self._expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str, now: Optional[float] = None) -> Dict[str, Any]:
        """
        Verify *token* and return its claims.

        Raises ``AuthError(UNAUTHENTICATED)`` on malformed, tampered or
        expired tokens.
        """
        parts = token.split(".", 1)
        if len(parts) != 2:
            raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Malformed token")
        try:
            raw = urlsafe_b64decode(parts[0].encode())
        except (binascii.Error, ValueError):
            raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Malformed token")

        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Invalid token signature")

        try:
            payload = json.loads(raw)
        except ValueError:
            raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Malformed token")
        if not isinstance(payload, dict):
            raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Malformed token")

        user_id = payload.get("user_id")
        # bool is an int subclass
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Token missing user_id")

        current = now if now is not None else time.time()
        exp = payload.get("exp")
        if not isinstance(exp, int) or exp < current:
            raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Token expired")
        return payload


_signer: Optional[TokenSigner] = None


def get_signer() -> TokenSigner:
    """Return the process-wide signer, building it from config on first use."""
    global _signer
    if _signer is None:
        _signer = TokenSigner(config.jwt_secret, config.jwt_expiry_seconds)
    return _signer


def reset_signer() -> None:
    global _signer
    _signer = None


def create_token(user_id: int) -> str:
    return get_signer().create(user_id)


def verify_token(token: str) -> int:
    """Verify token and return ``user_id``."""
    return get_signer().verify(token)["user_id"]
