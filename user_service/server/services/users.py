"""
User Service.

Business rules for user accounts on top of ``UserRepository``:

- usernames and emails are unique, compared case-insensitively;
- new accounts always get ``ROLE_USER``; administrators are only created by
  :meth:`UserService.ensure_admin`;
- updates apply only the fields present in the payload and re-hash a new
  password.

Failures are raised as ``NotFoundEntityError`` / ``NotUniqueEntityError`` and
translated to HTTP responses by the server's exception handlers.
"""

from __future__ import annotations

from typing import List, Optional

from user_service.core.database.entities.users import User, UserRole
from user_service.core.database.mappers import provided_fields, to_entity, update_entity
from user_service.core.database.repositories.users import UserRepository
from user_service.core.database.schemas.users import UserDto
from user_service.core.errors import NotFoundEntityError, NotUniqueEntityError
from user_service.core.logging_config import get_logger
from user_service.core.monitoring import log_user_event
from user_service.server.core.security import hash_password, verify_password

logger = get_logger(__name__)


class UserService:
    """Account management operations used by the API and the authentication layer."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def create_user(self, user: UserDto) -> User:
        """Create a ``ROLE_USER`` account.

        Raises:
            NotUniqueEntityError: The username or the email is already taken.
        """
        await self._ensure_unique(user.username, user.email)
        created = await self.repository.save(to_entity(user, hash_password))
        logger.info(f"Created user {created.id} ({created.username})")
        log_user_event("created", created.id, created.username)
        return created

    async def get_all_users(self) -> List[User]:
        return await self.repository.find_all()

    async def delete_by_id(self, user_id: int) -> None:
        """Delete a user.

        Raises:
            NotFoundEntityError: No user has this ID.
        """
        if not await self.repository.delete_by_id(user_id):
            raise NotFoundEntityError(f"User {user_id} does not exists. User can't be deleted")
        logger.info(f"Deleted user {user_id}")
        log_user_event("deleted", user_id)

    async def get_user(self, user_id: int) -> User:
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundEntityError(f"User {user_id} does not exists. User can't be found")
        return user

    async def get_user_by_username(self, username: str) -> User:
        user = await self.repository.find_by_username_ignore_case(username)
        if user is None:
            raise NotFoundEntityError(f"{username} does not exists. User can't be found")
        return user

    async def get_user_by_email(self, email: str) -> User:
        user = await self.repository.find_by_email_ignore_case(email)
        if user is None:
            raise NotFoundEntityError(f"{email} does not exist. User can't be found")
        return user

    async def update_user_by_id(self, user_id: int, user_dto: UserDto) -> User:
        """Apply ``user_dto`` to the user with ``user_id``.

        Raises:
            NotFoundEntityError: No user has this ID.
            NotUniqueEntityError: A changed username or email belongs to another user.
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundEntityError(f"Not found user, id: {user_id}")
        return await self._apply_update(user, user_dto)

    async def update_user_by_username(self, username: str, user_dto: UserDto) -> User:
        """Apply ``user_dto`` to the user named ``username`` (case-insensitive).

        Raises:
            NotFoundEntityError: No user has this username.
            NotUniqueEntityError: A changed username or email belongs to another user.
        """
        user = await self.repository.find_by_username_ignore_case(username)
        if user is None:
            raise NotFoundEntityError(f"User not found, username: {username}")
        return await self._apply_update(user, user_dto)

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the account matching the credentials, or ``None``."""
        user = await self.repository.find_by_username_ignore_case(username)
        if user is None or not user.is_enabled:
            return None
        if not verify_password(password, user.password):
            return None
        return user

    async def ensure_admin(self, username: str, password: str, email: Optional[str] = None) -> User:
        """Create an administrator account unless ``username`` already exists.

        An existing account is returned unchanged, whatever its role.
        """
        existing = await self.repository.find_by_username_ignore_case(username)
        if existing is not None:
            if not existing.has_role(UserRole.ROLE_ADMIN):
                logger.warning(f"Bootstrap admin '{username}' exists without ROLE_ADMIN; leaving it unchanged")
            return existing

        await self._ensure_unique(username, email)
        admin = await self.repository.save(
            to_entity(UserDto(username=username, email=email, password=password), hash_password, UserRole.ROLE_ADMIN)
        )
        logger.info(f"Created bootstrap administrator '{username}'")
        log_user_event("created", admin.id, admin.username)
        return admin

    async def _apply_update(self, user: User, user_dto: UserDto) -> User:
        changes = provided_fields(user_dto)
        await self._ensure_unique(changes.get("username"), changes.get("email"), exclude_id=user.id)

        update_entity(user_dto, user, hash_password)
        updated = await self.repository.save(user)
        logger.info(f"Updated user {updated.id} fields={sorted(changes)}")
        log_user_event("updated", updated.id, updated.username)
        return updated

    async def _ensure_unique(
        self, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None
    ) -> None:
        repository = self.repository
        if username is not None and await repository.exists_by_username_ignore_case(username, exclude_id=exclude_id):
            raise NotUniqueEntityError("Login is already exists")
        if email is not None and await repository.exists_by_email_ignore_case(email, exclude_id=exclude_id):
            raise NotUniqueEntityError("Email is already exists")
