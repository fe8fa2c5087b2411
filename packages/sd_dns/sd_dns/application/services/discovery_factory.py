"""Selection of the discovery source implementation by configuration type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sd_dns.application.services.dns_discovery import DnsServiceDiscovery
from sd_dns.application.services.static_discovery import StaticServiceDiscovery
from sd_dns.config import DnsDiscoveryConfig, StaticDiscoveryConfig, load_discovery_config
from sd_dns.domain.exceptions import ConfigurationError
from sd_dns.domain.interfaces import Resolver, ServiceDiscovery


def create_service_discovery(
    config: DnsDiscoveryConfig | StaticDiscoveryConfig,
    resolver: Resolver | None = None,
) -> ServiceDiscovery:
    """Create an unconfigured source matching ``config.type``.

    Args:
        config: Validated source configuration
        resolver: Resolver for DNS sources, defaults to the system resolver

    Raises:
        ConfigurationError: If the source type is unknown
    """
    if isinstance(config, DnsDiscoveryConfig):
        return DnsServiceDiscovery(resolver)
    if isinstance(config, StaticDiscoveryConfig):
        return StaticServiceDiscovery()
    raise ConfigurationError("type", f"Unknown discovery source type: {type(config).__name__}")


async def open_service_discovery(
    config: DnsDiscoveryConfig | StaticDiscoveryConfig | Mapping[str, Any],
    resolver: Resolver | None = None,
) -> ServiceDiscovery:
    """Create and configure a source in one step.

    Raises:
        ConfigurationError: If the configuration is invalid
        ResolutionError: If the initial DNS build fails and errors are not ignored
    """
    if isinstance(config, Mapping):
        config = load_discovery_config(config)
    discovery = create_service_discovery(config, resolver)
    await discovery.configure(config)
    return discovery
