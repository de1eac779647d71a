"""Health check endpoints."""

from fastapi import APIRouter

from app.core.config import settings
from app.core.deps import Credentials
from app.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(credentials: Credentials) -> HealthResponse:
    """
    Health check endpoint.

    Reports whether the Shopify app credentials are configured. Values are
    never included.
    """
    configured = credentials.is_configured
    return HealthResponse(
        status="healthy" if configured else "unhealthy",
        version=settings.version,
        environment=settings.environment,
        checks={"credentials": "configured" if configured else "missing"},
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """
    Liveness probe for Kubernetes/container orchestration.

    Simple check that the service is running.
    """
    return {"status": "alive"}
