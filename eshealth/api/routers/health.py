"""
Health router
=============
"""

from fastapi import APIRouter, Depends, Request, Response

from eshealth.api.schemas import HealthResponse
from eshealth.models.health import HealthCheckRegistration, HealthStatus
from eshealth.services.probe import ElasticsearchHealthCheck
from eshealth.services.runner import run_health_check

router = APIRouter(tags=["health"])


def get_health_check(request: Request) -> ElasticsearchHealthCheck:
    return request.app.state.health_check


def get_registration(request: Request) -> HealthCheckRegistration:
    return request.app.state.registration

# ------------------------------ Endpoints ------------------------------------


# curl -s -XGET http://localhost:8000/health | jq
@router.get(
    "/health",
    summary="Elasticsearch health check",
    response_model=HealthResponse,
    response_description="Tri-state health of the backing Elasticsearch cluster",
    responses={503: {"model": HealthResponse, "description": "Cluster unhealthy"}},
)
async def health(
    response: Response,
    check: ElasticsearchHealthCheck = Depends(get_health_check),
    registration: HealthCheckRegistration = Depends(get_registration),
) -> HealthResponse:
    """
    GET /health

    200 for healthy or degraded, 503 for unhealthy. Only the exception type
    is exposed, so hostnames and credentials in error messages stay in logs.
    """
    result = await run_health_check(check, registration)
    if result.status is HealthStatus.UNHEALTHY:
        response.status_code = 503
    return HealthResponse(
        name=registration.name,
        status=result.status,
        description=result.description,
        data=result.data,
        error=type(result.exception).__name__ if result.exception is not None else None,
    )
