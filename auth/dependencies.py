"""
FastAPI dependencies for authentication.

Provides ``get_store`` and ``get_current_user_id`` dependencies that
are used across all protected routes.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header, Request

from auth.jwt import verify_token
from database.store import CredentialStore
from utils.errors import AuthError, AuthErrorKind

_BEARER_PREFIX = "bearer "


def get_store(request: Request) -> CredentialStore:
    """Return the store installed on the application at startup."""
    return request.app.state.store


async def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> int:
    """
    Verify the token from the Authorization header, returning the
    authenticated ``user_id``.

    The header carries the raw token; a ``Bearer `` prefix is tolerated
    but not required.  The id is also stored on ``request.state.user_id``
    for downstream handlers.
    """
    token = (authorization or "").strip()
    if token[: len(_BEARER_PREFIX)].lower() == _BEARER_PREFIX:
        token = token[len(_BEARER_PREFIX):].strip()
    if not token:
        raise AuthError(AuthErrorKind.UNAUTHENTICATED, "Missing token")

    user_id = verify_token(token)
    request.state.user_id = user_id
    return user_id
