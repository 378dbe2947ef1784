"""
Service Dependencies.

Builds the repository and service objects for API endpoints from the
request-scoped database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.database import get_session
from user_service.core.database.repositories.users import UserRepository
from user_service.server.services.users import UserService


def get_user_repository(session: AsyncSession = Depends(get_session)) -> UserRepository:
    return UserRepository(session)


def get_user_service(repository: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repository)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
