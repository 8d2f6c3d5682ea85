"""
Health endpoint for load balancers and container health checks.
Reports process liveness plus database reachability; no retries.
"""

from fastapi import APIRouter, Response, status

from core.dependencies import DatabaseDep, LoggerDep, SettingsDep
from core.exceptions import ConnectivityError
from models.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/healthcheck",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Database unreachable"}},
)
def healthcheck(
    response: Response,
    settings: SettingsDep,
    database: DatabaseDep,
    logger: LoggerDep,
) -> HealthResponse:
    """Ping the store. 200 healthy/connected, or 503 unhealthy/disconnected."""
    try:
        database.ping()
    except ConnectivityError:
        logger.error("health_check_failed", extra={"database": "disconnected"})
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="unhealthy", database="disconnected", service=settings.APP_NAME)

    logger.info("health_check_passed")
    return HealthResponse(status="healthy", database="connected", service=settings.APP_NAME)
