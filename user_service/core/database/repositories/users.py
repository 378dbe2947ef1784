"""
User repository interface and implementation.

This module provides data access operations for user accounts, including
CRUD operations and the case-insensitive lookups used for login and
uniqueness checks. Built on SQLModel for type-safe ORM operations.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from user_service.core.errors import NotUniqueEntityError

from ..entities.users import User
from ..utils import utc_now
from .base import BaseRepository, QueryBuilder


class UserRepository(BaseRepository[User]):
    """Repository for user account data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async session for database operations
        """
        super().__init__(session, User)

    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User SQLModel instance

        Returns:
            Persisted User with generated fields

        Raises:
            NotUniqueEntityError: The username or email is already stored
        """
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by its ID.

        Args:
            user_id: User ID

        Returns:
            User instance or None
        """
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, user: User) -> User:
        """Update an existing user.

        Args:
            user: User instance with updated fields

        Returns:
            Updated User instance

        Raises:
            NotUniqueEntityError: The new username or email belongs to another user
        """
        user.updated_at = utc_now()
        self.session.add(user)
        await self._commit()
        await self.session.refresh(user)
        return user

    async def save(self, user: User) -> User:
        """Insert ``user`` when it has no ID yet, update it otherwise."""
        if user.id is None:
            return await self.create(user)
        return await self.update(user)

    async def delete(self, user_id: int) -> bool:
        """Delete a user by its ID.

        Args:
            user_id: User ID to delete

        Returns:
            True if deleted, False if not found
        """
        user = await self.get_by_id(user_id)
        if user:
            await self.session.delete(user)
            await self.session.commit()
            return True
        return False

    async def delete_by_id(self, user_id: int) -> bool:
        """Alias of :meth:`delete`."""
        return await self.delete(user_id)

    async def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[User]:
        """List users ordered by ID with optional pagination.

        Args:
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of User instances
        """
        stmt = QueryBuilder.apply_pagination(select(User).order_by(User.id), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_all(self) -> List[User]:
        """Every stored user ordered by ID."""
        return await self.list()

    async def find_by_username_ignore_case(self, username: str) -> Optional[User]:
        """Get a user whose username equals ``username`` ignoring case."""
        stmt = select(User).where(func.lower(User.username) == username.lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_by_email_ignore_case(self, email: str) -> Optional[User]:
        """Get a user whose email equals ``email`` ignoring case."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def exists_by_username_ignore_case(self, username: str, exclude_id: Optional[int] = None) -> bool:
        """Whether another user already uses ``username`` (case-insensitive).

        Args:
            username: Username to look up
            exclude_id: ID of a user to ignore, typically the one being updated
        """
        stmt = select(User.id).where(func.lower(User.username) == username.lower())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def exists_by_email_ignore_case(self, email: Optional[str], exclude_id: Optional[int] = None) -> bool:
        """Whether another user already uses ``email`` (case-insensitive).

        A missing email never collides.
        """
        if email is None:
            return False
        stmt = select(User.id).where(func.lower(User.email) == email.lower())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def _commit(self) -> None:
        """Commit the session, turning unique index violations into ``NotUniqueEntityError``.

        Covers writes that race past the ``exists_by_*`` checks.
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if "email" in str(e.orig).lower():
                raise NotUniqueEntityError("Email is already exists") from e
            raise NotUniqueEntityError("Login is already exists") from e
