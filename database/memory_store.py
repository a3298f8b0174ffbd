"""
In-memory CredentialStore, used by tests and for throwaway local runs.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Dict, List, Optional

from auth.password import hash_password
from database.store import CredentialStore
from utils.errors import DuplicateUsernameError, NotFoundError
from utils.schemas import TemplateRecord, UserRecord


class InMemoryStore(CredentialStore):
    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._users: Dict[str, UserRecord] = {}
        self._templates: Dict[int, TemplateRecord] = {}
        self._user_ids = itertools.count(1)
        self._template_ids = itertools.count(1)

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        return self._users.get(username)

    async def create_user(self, username: str, password: str) -> UserRecord:
        password_hash = hash_password(password)
        async with self._lock:
            if username in self._users:
                raise DuplicateUsernameError()
            user = UserRecord(
                id=next(self._user_ids),
                username=username,
                password_hash=password_hash,
            )
            self._users[username] = user
        return user

    async def list_templates(self) -> List[TemplateRecord]:
        return [self._templates[k] for k in sorted(self._templates)]

    async def add_template(self, prompt: str) -> TemplateRecord:
        async with self._lock:
            template = TemplateRecord(id=next(self._template_ids), prompt=prompt)
            self._templates[template.id] = template
        return template

    async def delete_template(self, template_id: int) -> None:
        async with self._lock:
            if self._templates.pop(template_id, None) is None:
                raise NotFoundError(f"Template {template_id} not found")
