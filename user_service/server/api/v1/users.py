"""
API endpoints for managing user accounts.

Every route requires HTTP Basic authentication with a ``ROLE_USER`` or
``ROLE_ADMIN`` account. Listing and deleting users is reserved to
administrators.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from user_service.core.database.schemas.users import UserCreate, UserDto, UserRead
from user_service.core.logging_config import get_logger
from user_service.server.api.deps import AdminUser, AnyUser
from user_service.server.services.deps import UserServiceDep

logger = get_logger(__name__)

router = APIRouter(
    tags=["users"],
    responses={
        401: {"description": "Missing or invalid credentials"},
        403: {"description": "Authenticated user lacks the required role"},
    },
)


@router.get(
    "/all",
    response_model=list[UserRead],
    summary="List Users",
    description="Retrieve every stored user. Requires ROLE_ADMIN.",
    response_description="A list of user objects.",
)
async def get_all_users(_: AdminUser, service: UserServiceDep) -> list[UserRead]:
    users = await service.get_all_users()
    logger.debug(f"Retrieved {len(users)} users")
    return [UserRead.from_entity(user) for user in users]


@router.delete(
    "/id/{user_id}",
    summary="Delete User",
    description="Permanently delete a user. Requires ROLE_ADMIN.",
    responses={
        200: {"description": "User deleted"},
        404: {"description": "User not found"},
    },
)
async def delete_by_id(user_id: int, _: AdminUser, service: UserServiceDep) -> Response:
    await service.delete_by_id(user_id)
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/id/{user_id}",
    response_model=UserRead,
    summary="Get User by ID",
    responses={404: {"description": "User not found"}},
)
async def get_user_by_id(user_id: int, _: AnyUser, service: UserServiceDep) -> UserRead:
    return UserRead.from_entity(await service.get_user(user_id))


@router.get(
    "/username/{username}",
    response_model=UserRead,
    summary="Get User by Username",
    description="Look a user up by username, ignoring case.",
    responses={404: {"description": "User not found"}},
)
async def get_user_by_username(username: str, _: AnyUser, service: UserServiceDep) -> UserRead:
    return UserRead.from_entity(await service.get_user_by_username(username))


@router.get(
    "/email/{email}",
    response_model=UserRead,
    summary="Get User by Email",
    description="Look a user up by email, ignoring case.",
    responses={404: {"description": "User not found"}},
)
async def get_user_by_email(email: str, _: AnyUser, service: UserServiceDep) -> UserRead:
    return UserRead.from_entity(await service.get_user_by_email(email))


@router.post(
    "",
    response_model=UserRead,
    summary="Create User",
    description="Create a ROLE_USER account. Username and email must be unique, ignoring case.",
    responses={409: {"description": "Username or email already exists"}},
)
async def create_user(user: UserCreate, _: AnyUser, service: UserServiceDep) -> UserRead:
    """
    Create a new user.

    - **username**: Login name, required.
    - **email**: Email address, optional.
    - **password**: Plain text password, stored as a bcrypt hash.
    """
    return UserRead.from_entity(await service.create_user(user))


@router.put(
    "/id/{user_id}",
    response_model=UserRead,
    summary="Update User by ID",
    description="Update the provided fields of a user. Omitted or null fields keep their value.",
    responses={
        404: {"description": "User not found"},
        409: {"description": "Username or email already used by another user"},
    },
)
async def update_user_by_id(user_id: int, user_dto: UserDto, _: AnyUser, service: UserServiceDep) -> UserRead:
    return UserRead.from_entity(await service.update_user_by_id(user_id, user_dto))


@router.put(
    "/username/{username}",
    response_model=UserRead,
    summary="Update User by Username",
    description="Update the provided fields of a user looked up by username, ignoring case.",
    responses={
        404: {"description": "User not found"},
        409: {"description": "Username or email already used by another user"},
    },
)
async def update_user_by_username(
    username: str, user_dto: UserDto, _: AnyUser, service: UserServiceDep
) -> UserRead:
    return UserRead.from_entity(await service.update_user_by_username(username, user_dto))
