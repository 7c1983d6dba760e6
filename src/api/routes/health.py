"""Health check endpoints for monitoring and deployment verification."""

import time

from fastapi import APIRouter, Response, status

from src.api.deps import Gateway
from src.api.middleware.latency_logging import get_latency_stats
from src.core.config import get_settings
from src.core.openai import get_openai_metrics
from src.schemas.common import CheckResult, HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running. Used for liveness probes.",
)
async def health_check() -> HealthResponse:
    """Return basic health status.

    This endpoint should always return 200 if the service is running.
    It does not contact the database.

    Returns:
        HealthResponse: Current health status with timestamp.
    """
    settings = get_settings()
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        database="Connected" if settings.database_configured else "Not configured",
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Readiness check",
    description="Check if the database is reachable. Used for readiness probes.",
)
async def readiness_check(response: Response, gateway: Gateway) -> ReadinessResponse:
    """Check readiness of the database.

    Returns 503 if the database is unreachable.

    Args:
        response: FastAPI response object for setting status code.
        gateway: Persistence gateway to probe.

    Returns:
        ReadinessResponse: Status of all dependency checks.
    """
    start_time = time.perf_counter()
    db_result = await gateway.check_connection()
    latency_ms = (time.perf_counter() - start_time) * 1000

    checks = [
        CheckResult(
            name="database",
            healthy=db_result["healthy"],
            latency_ms=round(latency_ms, 2),
            error=db_result.get("error"),
        )
    ]

    all_healthy = all(check.healthy for check in checks)
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status=HealthStatus.HEALTHY if all_healthy else HealthStatus.UNHEALTHY,
        checks=checks,
    )


@router.get(
    "/health/stats",
    summary="Latency stats",
    description="Request latency and OpenAI call statistics collected since startup.",
)
async def stats() -> dict:
    """Return in-memory request and OpenAI call statistics."""
    return {
        "requests": get_latency_stats().get_stats(),
        "openai": get_openai_metrics().get_stats(),
    }
