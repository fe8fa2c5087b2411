"""Domain events for service membership changes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .entities.service import Service


class ServiceEventType(Enum):
    """Types of service membership events."""

    JOIN = "service_in"
    DRAIN = "service_out"


@dataclass(frozen=True)
class ServiceEvent:
    """A membership change pushed to the event sink.

    Attributes:
        event_type: Whether the service joined or is being drained
        service: The service the event is about
    """

    event_type: ServiceEventType
    service: Service


def join_event(service: Service) -> ServiceEvent:
    """Build the event announcing a newly available service."""
    return ServiceEvent(event_type=ServiceEventType.JOIN, service=service)


def drain_event(service: Service) -> ServiceEvent:
    """Build the event withdrawing a previously available service."""
    return ServiceEvent(event_type=ServiceEventType.DRAIN, service=service)
