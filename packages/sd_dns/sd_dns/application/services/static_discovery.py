"""Static discovery source."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sd_dns.config import StaticDiscoveryConfig, load_discovery_config
from sd_dns.domain.entities import ServiceSet
from sd_dns.domain.exceptions import ConfigurationError, DiscoveryStateError
from sd_dns.domain.interfaces import EventSink, ServiceDiscovery
from sd_dns.infrastructure.logging import get_logger
from sd_dns.infrastructure.monitoring import known_services

logger = get_logger(__name__)


class StaticServiceDiscovery(ServiceDiscovery):
    """Discovery source serving a fixed list of services.

    The list never changes after ``configure``, so no events are pushed.
    """

    def __init__(self) -> None:
        self._services = ServiceSet()
        self._configured = False
        self._running = False

    @property
    def source_type(self) -> str:
        return "static"

    @property
    def services(self) -> ServiceSet:
        return self._services

    @property
    def running(self) -> bool:
        return self._running

    async def configure(self, config: StaticDiscoveryConfig | Mapping[str, Any]) -> None:
        if isinstance(config, Mapping):
            config = load_discovery_config({"type": "static", **config})
        if not isinstance(config, StaticDiscoveryConfig):
            raise ConfigurationError("type", f"Expected 'static' source, got '{config.type}'")

        self._services = ServiceSet(service.to_service() for service in config.services)
        self._configured = True
        known_services.labels(source=self.source_type).set(len(self._services))

        logger.info(
            "Static discovery configured",
            extra={"service_count": len(self._services)},
        )

    async def start(self, sink: EventSink) -> None:
        if not self._configured:
            raise DiscoveryStateError(self.source_type, "start", "source is not configured")
        self._running = True

    async def stop(self) -> None:
        self._running = False
