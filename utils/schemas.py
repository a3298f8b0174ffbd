"""
Pydantic schemas shared by the stores and the HTTP layer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ═══════════════════════════════════════════════════════════════════════════════
# Stored records
# ═══════════════════════════════════════════════════════════════════════════════


class UserRecord(BaseModel):
    """A persisted user.  ``password_hash`` is the bcrypt string, never plaintext."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    password_hash: str


class TemplateRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    prompt: str


# ═══════════════════════════════════════════════════════════════════════════════
# Request / response bodies
# ═══════════════════════════════════════════════════════════════════════════════


class CredentialsRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt input is capped at 72 bytes, not characters.
        if len(value.encode()) > 72:
            raise ValueError("password must be at most 72 bytes")
        return value


class TokenResponse(BaseModel):
    token: str


class TemplateCreateRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
