"""
Sidekick Service - Health API Routes

GET /health - liveness, always 200 with service info
GET /ready  - readiness, 503 until the content store and AI gateway
              credentials are configured
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sidekick import __version__
from sidekick.core.config import Settings, get_settings
from sidekick.core.logging import get_logger

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    status: str
    checks: dict[str, bool]


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Service class for health check operations."""

    def __init__(self, version: str = __version__):
        self._version = version

    def check_health(self) -> dict[str, Any]:
        """Check basic service health."""
        return {
            "status": "healthy",
            "version": self._version,
            "service": "sidekick-service",
        }

    def check_readiness(self, settings: Settings) -> tuple[dict[str, Any], bool]:
        """Check whether the external collaborators are configured.

        Returns:
            Tuple of (readiness dict, is_ready bool)
        """
        checks = {
            "content_store_configured": bool(settings.supabase_url and settings.supabase_key),
            "ai_gateway_configured": bool(settings.ai_gateway_api_key),
        }

        is_ready = all(checks.values())
        result: dict[str, Any] = {
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
        }
        return result, is_ready


_health_service = HealthService()


def get_health_service() -> HealthService:
    """Get health service instance."""
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness checks",
)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    data = get_health_service().check_health()
    logger.debug("health_check", status=data["status"])
    return HealthResponse(**data)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint for readiness checks",
)
async def readiness_check() -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if ready, 503 if not ready
    """
    data, is_ready = get_health_service().check_readiness(get_settings())
    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
