"""DNS discovery source."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sd_dns.application.services.refresh_scheduler import RefreshScheduler
from sd_dns.application.services.service_set_builder import ServiceSetBuilder
from sd_dns.config import DnsDiscoveryConfig, load_discovery_config
from sd_dns.domain.entities import ServiceSet
from sd_dns.domain.events import ServiceEvent
from sd_dns.domain.exceptions import ConfigurationError, DiscoveryStateError
from sd_dns.domain.interfaces import EventSink, Resolver, ServiceDiscovery
from sd_dns.infrastructure.logging import get_logger
from sd_dns.infrastructure.resolvers import SocketResolver

logger = get_logger(__name__)


class DnsServiceDiscovery(ServiceDiscovery):
    """Discovery source that resolves configured hosts into services.

    ``configure`` resolves every entry once; a resolution failure that is
    not ignored is fatal there. ``start`` refreshes once, or on the
    configured interval, pushing JOIN events before DRAIN events.
    """

    def __init__(self, resolver: Resolver | None = None) -> None:
        """Initialize the source.

        Args:
            resolver: Resolver to use, defaults to the system resolver
        """
        self._resolver = resolver or SocketResolver()
        self._config: DnsDiscoveryConfig | None = None
        self._scheduler: RefreshScheduler | None = None

    @property
    def source_type(self) -> str:
        return "dns"

    @property
    def config(self) -> DnsDiscoveryConfig | None:
        return self._config

    @property
    def services(self) -> ServiceSet:
        if self._scheduler is None:
            return ServiceSet()
        return self._scheduler.services

    @property
    def scheduler(self) -> RefreshScheduler | None:
        return self._scheduler

    async def configure(self, config: DnsDiscoveryConfig | Mapping[str, Any]) -> None:
        """Validate the configuration and resolve the initial service list.

        A failed configuration leaves a previously configured source as it was.

        Args:
            config: Validated configuration or a raw mapping

        Raises:
            ConfigurationError: If the configuration is invalid
            DiscoveryStateError: If the source is started and not yet stopped
            ResolutionError: If an entry fails and errors are not ignored
        """
        if self._scheduler is not None and self._scheduler.active:
            raise DiscoveryStateError(self.source_type, "configure", "source is already started")

        if isinstance(config, Mapping):
            config = load_discovery_config(config)
        if not isinstance(config, DnsDiscoveryConfig):
            raise ConfigurationError("type", f"Expected 'dns' source, got '{config.type}'")

        builder = ServiceSetBuilder(self._resolver, config.ignore_resolution_error)
        scheduler = RefreshScheduler(
            builder,
            config.resolution_entries(),
            interval=config.interval.total_seconds() if config.interval else None,
            source_name=self.source_type,
        )
        await scheduler.initialize()
        self._scheduler = scheduler
        self._config = config

        logger.info(
            "DNS discovery configured",
            extra={
                "entries": [f"{entry.host}:{entry.port}" for entry in config.entries],
                "ignore_resolution_error": config.ignore_resolution_error,
                "interval": scheduler.interval,
            },
        )

    async def start(self, sink: EventSink) -> None:
        """Start pushing membership events onto ``sink``.

        Raises:
            DiscoveryStateError: If the source is not configured
        """
        await self._require_scheduler("start").start(sink)

    async def stop(self) -> None:
        if self._scheduler is not None:
            await self._scheduler.stop()

    async def refresh(self) -> tuple[ServiceEvent, ...]:
        """Run one refresh cycle immediately, outside the timer."""
        return await self._require_scheduler("refresh").run_one_cycle()

    def _require_scheduler(self, operation: str) -> RefreshScheduler:
        if self._scheduler is None or self._config is None:
            raise DiscoveryStateError(self.source_type, operation, "source is not configured")
        return self._scheduler
