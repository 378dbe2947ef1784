"""
Mapping between user schemas and the ``User`` entity.

Only the fields a client actually sent are copied, so a partial payload never
blanks out stored values. Plain text passwords are hashed on the way in with
the hasher supplied by the caller.
"""

from __future__ import annotations

from typing import Callable, Optional

from .entities.users import User, UserRole
from .schemas.users import UserDto

PasswordHasher = Callable[[str], str]


def provided_fields(dto: UserDto) -> dict:
    """Fields explicitly set on ``dto`` with a non-null value."""
    return {key: value for key, value in dto.model_dump(exclude_unset=True).items() if value is not None}


def update_entity(dto: Optional[UserDto], user: User, hash_password: PasswordHasher) -> User:
    """Copy the provided fields of ``dto`` onto ``user``.

    Args:
        dto: Incoming payload; ``None`` leaves the entity untouched
        user: Entity to update in place
        hash_password: Function turning a plain text password into a stored hash

    Returns:
        The same ``user`` instance
    """
    if dto is None:
        return user

    for key, value in provided_fields(dto).items():
        if key == "password":
            user.password = hash_password(value)
        else:
            setattr(user, key, value)
    return user


def to_entity(dto: UserDto, hash_password: PasswordHasher, role: UserRole = UserRole.ROLE_USER) -> User:
    """Build a new, not yet persisted ``User`` from ``dto``."""
    return User(
        username=dto.username,
        email=dto.email,
        password=hash_password(dto.password),
        user_role=role,
    )
