"""Configuration package for the service discovery source."""

from .config import (
    DiscoveryConfig,
    DiscoverySettings,
    DnsDiscoveryConfig,
    EntryConfig,
    MetricsConfig,
    StaticDiscoveryConfig,
    StaticServiceConfig,
    get_settings,
    load_discovery_config,
    load_discovery_config_file,
    parse_duration,
    reload_settings,
)

__all__ = [
    "DiscoveryConfig",
    "DiscoverySettings",
    "DnsDiscoveryConfig",
    "EntryConfig",
    "MetricsConfig",
    "StaticDiscoveryConfig",
    "StaticServiceConfig",
    "get_settings",
    "load_discovery_config",
    "load_discovery_config_file",
    "parse_duration",
    "reload_settings",
]
