"""Application models for the service discovery source."""

from __future__ import annotations

from .service_models import ServiceEventInfo, ServiceInfo, ServiceListResponse

__all__ = ["ServiceEventInfo", "ServiceInfo", "ServiceListResponse"]
