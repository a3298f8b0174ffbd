"""
Auth API routes — register, login.
"""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends

from auth.dependencies import get_store
from auth.jwt import create_token
from auth.password import verify_password
from database.store import CredentialStore
from utils.errors import AuthError, AuthErrorKind, HashError
from utils.schemas import CredentialsRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=TokenResponse)
async def register(
    req: CredentialsRequest,
    store: CredentialStore = Depends(get_store),
) -> Dict[str, str]:
    """Register a new user and return a token for it."""
    user = await store.create_user(req.username, req.password)
    token = create_token(user.id)
    logger.info("Registered user %s (%s)", user.username, user.id)
    return {"token": token}


@router.post("/login", response_model=TokenResponse)
async def login(
    req: CredentialsRequest,
    store: CredentialStore = Depends(get_store),
) -> Dict[str, str]:
    """
    Login with username + password.

    Unknown usernames and wrong passwords fail with the same response.
    """
    user = await store.get_user_by_username(req.username)

    valid = False
    if user is not None:
        try:
            valid = verify_password(req.password, user.password_hash)
        except HashError:
            logger.error("Stored password hash for user %s is malformed", user.id)

    if user is None or not valid:
        raise AuthError(AuthErrorKind.INVALID_CREDENTIALS)

    token = create_token(user.id)
    logger.info("Login: %s (%s)", user.username, user.id)
    return {"token": token}
