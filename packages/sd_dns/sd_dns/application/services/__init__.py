"""Application services for the service discovery source."""

from __future__ import annotations

from .discovery_factory import create_service_discovery, open_service_discovery
from .dns_discovery import DnsServiceDiscovery
from .refresh_scheduler import RefreshScheduler
from .service_set_builder import ServiceSetBuilder
from .static_discovery import StaticServiceDiscovery

__all__ = [
    "DnsServiceDiscovery",
    "RefreshScheduler",
    "ServiceSetBuilder",
    "StaticServiceDiscovery",
    "create_service_discovery",
    "open_service_discovery",
]
