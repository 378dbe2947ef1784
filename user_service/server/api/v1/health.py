"""
Health Check Endpoints.

This module provides the public status endpoints (home, health, info)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.database import get_session
from user_service.core.logging_config import get_logger
from user_service.server.core import constant

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/",
    summary="Home",
    description="Public landing endpoint.",
)
@router.get("/home", include_in_schema=False)
async def home():
    """Return a short description of the service and where its API lives."""
    return {
        "name": constant.PROJECT_NAME,
        "api": constant.USER_API_PREFIX,
        "health": f"{constant.ACTUATOR_PREFIX}/health",
    }


@router.get(
    f"{constant.ACTUATOR_PREFIX}/health",
    summary="Health Check",
    description="Check the operational status of the API server and its database.",
    response_description="Status object.",
    responses={503: {"description": "A component is down"}},
)
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    Health check endpoint.

    Reports ``UP`` when the database answers a trivial query, ``DOWN`` with
    HTTP 503 otherwise.
    """
    try:
        await session.execute(text("SELECT 1"))
        db = {"status": "UP"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        db = {"status": "DOWN", "error": type(e).__name__}

    overall = "UP" if db["status"] == "UP" else "DOWN"
    return JSONResponse(
        status_code=status.HTTP_200_OK if overall == "UP" else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": overall, "components": {"db": db}},
    )


@router.get(
    f"{constant.ACTUATOR_PREFIX}/info",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def info():
    """
    Get API version.

    Returns the current semantic version of the API and supported schema version.
    """
    return {
        "name": constant.PROJECT_NAME,
        "version": constant.API_VERSION,
        "schema_version": constant.SCHEMA_VERSION,
    }
