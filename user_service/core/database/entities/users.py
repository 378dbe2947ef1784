"""
User entity models.

This module contains the database entity for user accounts and the role
enumeration used for authorization. A user authenticates with its username
and password and is granted exactly one role.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

import sqlalchemy as sa
from sqlmodel import Field

from ..base import Base
from ..utils import utc_now


class UserRole(str, Enum):
    """Role granted to a user account."""

    ROLE_ADMIN = "ROLE_ADMIN"
    ROLE_USER = "ROLE_USER"

    @property
    def authority(self) -> str:
        """Authority string checked by the access rules."""
        return self.name


class UserBase(Base):
    """Base fields for a user account."""

    username: str = Field(max_length=100, unique=True, index=True, description="Login name")
    email: Optional[str] = Field(default=None, max_length=255, unique=True, index=True, description="Email address")


class User(UserBase, table=True):
    """Persistent user account in database.

    Stores the login name, email, bcrypt password hash and role of an account.

    Table: user
    """

    __tablename__ = "user"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password: str = Field(max_length=255, description="bcrypt password hash")
    user_role: UserRole = Field(
        default=UserRole.ROLE_USER,
        sa_type=sa.Enum(UserRole, native_enum=False, length=32, validate_strings=True),
        sa_column_kwargs={"nullable": False},
        description="Granted role",
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=sa.DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )

    @property
    def authorities(self) -> List[str]:
        """Authorities granted to this account."""
        return [UserRole(self.user_role).authority]

    # Account status flags. Expiry, locking and disabling are not modelled,
    # so every stored account is usable.
    @property
    def is_account_non_expired(self) -> bool:
        return True

    @property
    def is_account_non_locked(self) -> bool:
        return True

    @property
    def is_credentials_non_expired(self) -> bool:
        return True

    @property
    def is_enabled(self) -> bool:
        return True

    def has_role(self, *roles: UserRole) -> bool:
        """Whether the account holds one of ``roles``."""
        return UserRole(self.user_role) in roles

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, role={self.user_role})"
