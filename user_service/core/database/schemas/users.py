"""
Schema models for user API requests and responses.

These schemas are used for API serialization/deserialization and are separate
from the entity models so that the stored password hash never leaves the
service.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..entities.users import User, UserRole


class UserDto(BaseModel):
    """Fields a client may send for a user.

    Every field is optional so the same payload serves partial updates; only
    the fields present in the request are applied.
    """

    username: Optional[str] = Field(default=None, min_length=1, max_length=100, description="Login name")
    email: Optional[str] = Field(default=None, max_length=255, description="Email address")
    password: Optional[str] = Field(default=None, min_length=1, description="Plain text password")

    @field_validator("username", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email_to_none(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class UserCreate(UserDto):
    """Schema for creating a user."""

    username: str = Field(min_length=1, max_length=100, description="Login name")
    password: str = Field(min_length=1, description="Plain text password")


class UserRead(BaseModel):
    """Schema for reading a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: Optional[str] = None
    user_role: UserRole
    authorities: List[str]
    account_non_expired: bool = True
    account_non_locked: bool = True
    credentials_non_expired: bool = True
    enabled: bool = True

    @classmethod
    def from_entity(cls, user: User) -> "UserRead":
        """Build the response model from a persisted ``User``."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            user_role=user.user_role,
            authorities=user.authorities,
            account_non_expired=user.is_account_non_expired,
            account_non_locked=user.is_account_non_locked,
            credentials_non_expired=user.is_credentials_non_expired,
            enabled=user.is_enabled,
        )
