"""Read-only REST endpoints exposing a discovery source's service list."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from sd_dns.application.models import ServiceInfo, ServiceListResponse
from sd_dns.domain.interfaces import ServiceDiscovery
from sd_dns.infrastructure.logging import get_logger

logger = get_logger(__name__)


def create_services_router(discovery: ServiceDiscovery) -> APIRouter:
    """Create the services router for one discovery source.

    Args:
        discovery: Discovery source to expose

    Returns:
        Configured FastAPI router
    """
    router = APIRouter(
        prefix="/api/v1/admin",
        tags=["Service Discovery"],
    )

    @router.get(  # type: ignore[misc]
        "/services",
        response_model=ServiceListResponse,
        summary="List known services",
        description="Retrieve the service list adopted by the latest successful refresh",
    )
    async def list_services() -> ServiceListResponse:
        """List the currently known services."""
        # Read once: a refresh may replace the set while the response is built.
        services = discovery.services

        logger.debug(
            "Listed services",
            extra={"source": discovery.source_type, "service_count": len(services)},
        )

        return ServiceListResponse(
            source=discovery.source_type,
            services=[ServiceInfo.from_service(service) for service in services],
            total_count=len(services),
        )

    @router.get(  # type: ignore[misc]
        "/health",
        summary="Check discovery health",
        description="Healthy when at least one service is known",
    )
    async def check_health() -> JSONResponse:
        """Report whether the source currently knows any service."""
        service_count = len(discovery.services)
        is_healthy = service_count > 0

        return JSONResponse(
            status_code=(
                status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
            ),
            content={
                "status": "healthy" if is_healthy else "unhealthy",
                "source": discovery.source_type,
                "service_count": service_count,
            },
        )

    return router
