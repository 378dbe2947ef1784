"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request tracing), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.core.database import async_session_maker, engine, ping
from user_service.core.database.entities.users import User
from user_service.core.database.repositories.users import UserRepository
from user_service.core.logging_config import get_logger, setup_logging
from user_service.core.monitoring import initialize_logfire
from user_service.server.services.users import UserService

from .api.v1 import health, users
from .core import constant
from .core.config import BootstrapAdminConfig, settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = get_logger(__name__)


async def bootstrap_admin(
    config: BootstrapAdminConfig,
    session_factory: async_sessionmaker[AsyncSession],
) -> Optional[User]:
    """Create the configured administrator account if it is missing.

    Returns the administrator, or ``None`` when no bootstrap account is configured.
    """
    if not config.enabled:
        logger.debug("No bootstrap administrator configured")
        return None

    async with session_factory() as session:
        service = UserService(UserRepository(session))
        return await service.ensure_admin(
            username=config.username,
            password=config.password.get_secret_value(),
            email=config.email,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    On startup, verifies the database connection and seeds the bootstrap
    administrator. Failures are logged and the server keeps starting so that
    ``/actuator/health`` can report the problem.
    """
    logger.info(f"Starting up {constant.PROJECT_NAME} {constant.API_VERSION}...")
    try:
        await ping(engine)
        logger.info("Database connection verified")
        await bootstrap_admin(settings.bootstrap_admin, async_session_maker)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info(f"Shutting down {constant.PROJECT_NAME}...")
    await engine.dispose()


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, handlers and routers."""
    application = FastAPI(
        title=constant.PROJECT_NAME,
        description="""
    user-service API

    Manage user accounts: list, look up, create, update and delete users.
    All /api/user routes use HTTP Basic authentication against stored accounts.
    """,
        version=constant.API_VERSION,
        lifespan=lifespan,
    )

    cors = settings.cors
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )
    application.add_middleware(LogfireMiddleware)

    setup_exception_handlers(application)

    application.include_router(health.router, tags=["health"])
    application.include_router(users.router, prefix=constant.USER_API_PREFIX)

    initialize_logfire(application)
    return application


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(
        "user_service.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
