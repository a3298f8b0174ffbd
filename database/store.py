"""
CredentialStore — abstract interface for user and template persistence.

Every storage engine (relational, in-memory, …) subclasses this and
implements the methods below.  Handlers only ever talk to this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from utils.schemas import TemplateRecord, UserRecord


class CredentialStore(ABC):
    """Abstract base for all credential / template stores."""

    # ── Users ───────────────────────────────────────────────────────────

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        """
        Look a user up by username.

        Returns ``None`` when no such user exists; that is a normal
        outcome, not an error.  Raises ``StoreError`` on engine failure.
        """
        ...

    @abstractmethod
    async def create_user(self, username: str, password: str) -> UserRecord:
        """
        Hash *password* and persist a new user.

        Raises
        ------
        DuplicateUsernameError
            The username is taken.  The storage-level uniqueness guard is
            authoritative; any pre-check is only a shortcut.
        HashError
            The password cannot be hashed.
        StoreError
            Underlying engine failure.
        """
        ...

    # ── Templates ───────────────────────────────────────────────────────

    @abstractmethod
    async def list_templates(self) -> List[TemplateRecord]:
        """Return every template, ordered by id."""
        ...

    @abstractmethod
    async def add_template(self, prompt: str) -> TemplateRecord:
        ...

    @abstractmethod
    async def delete_template(self, template_id: int) -> None:
        """Delete a template.  Raises ``NotFoundError`` if *template_id* is unknown."""
        ...

    # ── Lifecycle ───────────────────────────────────────────────────────

    async def close(self) -> None:
        """Release any held resources."""
        return None
