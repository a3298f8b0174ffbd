"""
Relational CredentialStore backed by async SQLAlchemy.

Defaults to SQLite (``sqlite+aiosqlite``); any async SQLAlchemy URL works.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from auth.password import hash_password
from database.models import Template, User
from database.session import build_engine, build_session_factory, init_db, session_scope
from database.store import CredentialStore
from utils.errors import DuplicateUsernameError, NotFoundError, StoreError
from utils.schemas import TemplateRecord, UserRecord

logger = logging.getLogger(__name__)


class SQLStore(CredentialStore):
    """CredentialStore over an ``AsyncEngine``; one session per operation."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    async def connect(cls, database_url: str | None = None) -> "SQLStore":
        """Build the engine, create missing tables and return a ready store."""
        engine = build_engine(database_url)
        try:
            await init_db(engine)
        except SQLAlchemyError as exc:
            logger.exception("Error creating database tables")
            await engine.dispose()
            raise StoreError() from exc
        return cls(engine)

    # ── Users ───────────────────────────────────────────────────────────

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(
                    select(User).where(User.username == username)
                )
                user = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching user %r from database", username)
            raise StoreError() from exc
        return UserRecord.model_validate(user) if user is not None else None

    async def create_user(self, username: str, password: str) -> UserRecord:
        if await self.get_user_by_username(username) is not None:
            raise DuplicateUsernameError()

        password_hash = hash_password(password)
        try:
            async with session_scope(self._session_factory) as session:
                user = User(username=username, password_hash=password_hash)
                session.add(user)
                await session.flush()
                record = UserRecord.model_validate(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same name.
            logger.info("Unique constraint rejected username %r", username)
            raise DuplicateUsernameError() from exc
        except SQLAlchemyError as exc:
            logger.exception("Error inserting user %r into database", username)
            raise StoreError() from exc
        return record

    # ── Templates ───────────────────────────────────────────────────────

    async def list_templates(self) -> List[TemplateRecord]:
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(select(Template).order_by(Template.id))
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching templates from database")
            raise StoreError() from exc
        return [TemplateRecord.model_validate(row) for row in rows]

    async def add_template(self, prompt: str) -> TemplateRecord:
        try:
            async with session_scope(self._session_factory) as session:
                template = Template(prompt=prompt)
                session.add(template)
                await session.flush()
                record = TemplateRecord.model_validate(template)
        except SQLAlchemyError as exc:
            logger.exception("Error inserting template into database")
            raise StoreError() from exc
        return record

    async def delete_template(self, template_id: int) -> None:
        if not -(2**63) <= template_id < 2**63:
            # Cannot be bound as an INTEGER, so no such row exists.
            raise NotFoundError(f"Template {template_id} not found")
        try:
            async with session_scope(self._session_factory) as session:
                result = await session.execute(
                    delete(Template).where(Template.id == template_id)
                )
                deleted = result.rowcount
        except SQLAlchemyError as exc:
            logger.exception("Error deleting template %s from database", template_id)
            raise StoreError() from exc
        if not deleted:
            raise NotFoundError(f"Template {template_id} not found")

    async def close(self) -> None:
        await self._engine.dispose()
