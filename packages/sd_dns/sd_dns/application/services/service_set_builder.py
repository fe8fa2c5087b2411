"""Builds service sets by resolving configured entries."""

from __future__ import annotations

from collections.abc import Iterable

from sd_dns.domain.entities import EntryResolution, ResolutionEntry, Service, ServiceSet
from sd_dns.domain.enums import ServiceKind
from sd_dns.domain.exceptions import ResolutionError
from sd_dns.domain.interfaces import Resolver
from sd_dns.infrastructure.logging import get_logger
from sd_dns.infrastructure.monitoring import resolution_failures_total

logger = get_logger(__name__)


class ServiceSetBuilder:
    """Turns configured entries into a ServiceSet through a Resolver.

    Each entry is resolved into an explicit EntryResolution. In strict mode
    the first failed entry aborts the build; with ``ignore_resolution_error``
    failed entries are logged and skipped.
    """

    def __init__(self, resolver: Resolver, ignore_resolution_error: bool = False) -> None:
        """Initialize the builder.

        Args:
            resolver: Resolver used for every entry
            ignore_resolution_error: Skip entries that fail to resolve
        """
        self._resolver = resolver
        self._ignore_resolution_error = ignore_resolution_error

    @property
    def ignore_resolution_error(self) -> bool:
        return self._ignore_resolution_error

    async def resolve_entry(self, entry: ResolutionEntry) -> EntryResolution:
        """Resolve one entry into services named ``<position>-<host>``.

        Args:
            entry: Entry to resolve

        Returns:
            Successful resolution with one service per address, or the failure
        """
        try:
            addresses = await self._resolver.resolve(entry.host, entry.port, entry.address_family)
        except ResolutionError as e:
            return EntryResolution.failure(entry, e)

        services = tuple(
            Service(
                kind=ServiceKind.DNS,
                host=address,
                port=port,
                name=f"{position}-{entry.host}",
                weight=entry.weight,
                shared=False,
                username=entry.username,
                password=entry.password,
                shared_key=entry.shared_key,
            )
            for position, (address, port) in enumerate(addresses)
        )
        return EntryResolution.success(entry, services)

    async def build(self, entries: Iterable[ResolutionEntry]) -> ServiceSet:
        """Resolve every entry, in order, into a single service set.

        Args:
            entries: Configured entries in order

        Returns:
            ServiceSet in entry order, then resolution order. Empty when every
            entry was skipped.

        Raises:
            ResolutionError: If an entry fails and errors are not ignored
        """
        services: list[Service] = []

        for entry in entries:
            resolution = await self.resolve_entry(entry)
            if resolution.error is not None:
                resolution_failures_total.labels(
                    host=entry.host,
                    ignored=str(self._ignore_resolution_error).lower(),
                ).inc()
                if not self._ignore_resolution_error:
                    raise resolution.error

                logger.warning(
                    f"Failed to get service list from {entry.host}",
                    extra={
                        "host": entry.host,
                        "port": entry.port,
                        "error": resolution.error.message,
                    },
                )
                continue

            services.extend(resolution.services)

        return ServiceSet(services)
