"""Read models for discovered services and membership events."""

from __future__ import annotations

from pydantic import BaseModel, Field

from sd_dns.domain.entities import Service
from sd_dns.domain.events import ServiceEvent


class ServiceInfo(BaseModel):
    """Public view of a discovered service.

    Credentials are never included; ``has_credentials`` tells whether any
    are configured.
    """

    kind: str = Field(..., description="Origin tag of the discovery source")
    host: str = Field(..., description="Resolved address")
    port: int = Field(..., description="Port of the service")
    name: str = Field(..., description="Display identifier")
    weight: int = Field(..., description="Load balancing weight")
    shared: bool = Field(default=False, description="Shared across discovery sources")
    has_credentials: bool = Field(
        default=False, description="Whether a username, password or shared key is set"
    )

    @classmethod
    def from_service(cls, service: Service) -> ServiceInfo:
        return cls(
            kind=service.kind.value,
            host=service.host,
            port=service.port,
            name=service.name,
            weight=service.weight,
            shared=service.shared,
            has_credentials=bool(service.username or service.password or service.shared_key),
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "kind": "dns",
                "host": "127.0.0.1",
                "port": 24224,
                "name": "0-localhost",
                "weight": 60,
                "shared": False,
                "has_credentials": False,
            }
        }
    }


class ServiceListResponse(BaseModel):
    """Response model for the current service list."""

    source: str = Field(..., description="Discovery source type")
    services: list[ServiceInfo] = Field(default_factory=list, description="Known services")
    total_count: int = Field(..., description="Number of known services")


class ServiceEventInfo(BaseModel):
    """Public view of a membership event."""

    type: str = Field(..., description="service_in or service_out")
    service: ServiceInfo = Field(..., description="Service the event is about")

    @classmethod
    def from_event(cls, event: ServiceEvent) -> ServiceEventInfo:
        return cls(type=event.event_type.value, service=ServiceInfo.from_service(event.service))
