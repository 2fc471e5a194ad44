"""User repository for database operations."""

import uuid
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models import User


class UserRepositoryProtocol(Protocol):
    """Contract for user persistence, implemented by UserRepository.

    Failures (connection loss, timeouts) surface as exceptions; an empty
    store, a missing id or a rejected write are ordinary return values.
    """

    async def get_all(self) -> Sequence[User]: ...

    async def get_by_id(self, user_id: uuid.UUID) -> User | None: ...

    async def create(self, user: User) -> bool: ...

    async def delete_by_id(self, user_id: uuid.UUID) -> bool: ...


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self) -> list[User]:
        """Get every user. Returns an empty list when there are none."""
        result = await self.db.execute(select(User))
        return list(result.scalars().all())

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Get a user by their ID."""
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def create(self, user: User) -> bool:
        """Insert a user. Returns False if a user with the same ID exists.

        Uses INSERT ... ON CONFLICT DO NOTHING so concurrent creates with the
        same ID never raise.
        """
        bind = self.db.get_bind()
        dialect = bind.dialect.name if bind else ""
        values = {"id": user.id, "full_name": user.full_name}

        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as pg_insert

            stmt = (
                pg_insert(User)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["id"])
            )
            result = await self.db.execute(stmt)
            return result.rowcount > 0

        if dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as sqlite_insert

            stmt = (
                sqlite_insert(User)
                .values(**values)
                .on_conflict_do_nothing(index_elements=["id"])
            )
            result = await self.db.execute(stmt)
            return result.rowcount > 0

        try:
            async with self.db.begin_nested():
                self.db.add(User(**values))
                await self.db.flush()
        except IntegrityError:
            # Savepoint rolled back, the existing row stays
            return False
        return True

    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        """Delete a user by ID. Returns True if a row was removed."""
        result = await self.db.execute(delete(User).where(User.id == user_id))
        return result.rowcount > 0
