"""
Authentication and authorization dependencies for API routes.

``get_current_user`` resolves HTTP Basic credentials to a stored account;
``require_roles`` narrows a route to the listed roles.

- missing or invalid credentials: 401 with ``WWW-Authenticate: Basic``
- authenticated but without a permitted role: 403
"""

from __future__ import annotations

from typing import Annotated, Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasicCredentials

from user_service.core.database.entities.users import User, UserRole
from user_service.core.logging_config import get_logger
from user_service.server.core.security import basic_auth
from user_service.server.services.deps import UserServiceDep

logger = get_logger(__name__)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Basic"},
    )


async def get_current_user(
    service: UserServiceDep,
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
) -> User:
    """Authenticate the request with HTTP Basic credentials."""
    if credentials is None:
        raise _unauthorized()

    user = await service.authenticate(credentials.username, credentials.password)
    if user is None:
        logger.info(f"Rejected credentials for '{credentials.username}'")
        raise _unauthorized()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole) -> Callable:
    """Build a dependency that admits only users holding one of ``roles``."""

    async def _check(user: CurrentUser) -> User:
        if not user.has_role(*roles):
            logger.info(f"User '{user.username}' with {user.user_role} denied; requires one of {list(roles)}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access is denied")
        return user

    return _check


AnyUser = Annotated[User, Depends(require_roles(UserRole.ROLE_ADMIN, UserRole.ROLE_USER))]
AdminUser = Annotated[User, Depends(require_roles(UserRole.ROLE_ADMIN))]
