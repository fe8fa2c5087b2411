"""Configuration models for discovery sources and the host process.

Source configuration is a tagged union selected by ``type``:

- ``dns``: resolve a list of entries, once or on an interval
- ``static``: a fixed list of services

Process-wide settings are read from environment variables prefixed with
``SD_DNS_`` (nested keys use ``__``, e.g. ``SD_DNS_LOGGING__LEVEL=DEBUG``).
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    SecretStr,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from sd_dns.domain.entities import DEFAULT_WEIGHT, ResolutionEntry, Service
from sd_dns.domain.enums import AddressFamily, ServiceKind
from sd_dns.domain.exceptions import ConfigurationError
from sd_dns.infrastructure.logging import LoggingConfig

_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h|d)?\s*$")
_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}


def parse_duration(value: Any) -> Any:
    """Turn ``"10s"``-style strings into timedeltas.

    Anything else (numbers, ISO-8601 strings, timedeltas) is left for
    pydantic's own timedelta parsing.
    """
    if not isinstance(value, str):
        return value
    match = _DURATION_PATTERN.match(value)
    if match is None:
        return value
    amount, unit = match.groups()
    return float(amount) * _DURATION_UNITS[unit or "s"]


class EntryConfig(BaseModel):
    """A host to resolve for a DNS discovery source."""

    host: str = Field(..., min_length=1, description="Hostname for service lookup")
    port: int = Field(..., ge=0, le=65535, description="Port of service")
    address_family: AddressFamily = Field(
        default=AddressFamily.UNSPECIFIED,
        description="Address family for returned addresses",
    )
    shared_key: SecretStr | None = Field(
        default=None, description="The shared_key for authentication per host"
    )
    username: str = Field(default="", description="The username for authentication per host")
    password: SecretStr = Field(
        default=SecretStr(""), description="The password for authentication per host"
    )
    weight: int = Field(default=DEFAULT_WEIGHT, gt=0, description="Load balancing weight")

    @field_validator("address_family", mode="before")
    @classmethod
    def validate_address_family(cls, v: Any) -> Any:
        """Accept address family names case-insensitively."""
        if v is None:
            return AddressFamily.UNSPECIFIED
        if isinstance(v, str):
            return AddressFamily.parse(v)
        return v

    def to_entry(self) -> ResolutionEntry:
        """Convert to the domain entry the service set builder consumes."""
        return ResolutionEntry(
            host=self.host,
            port=self.port,
            address_family=self.address_family,
            weight=self.weight,
            username=self.username,
            password=self.password.get_secret_value(),
            shared_key=self.shared_key.get_secret_value() if self.shared_key else None,
        )


class DnsDiscoveryConfig(BaseModel):
    """Configuration of a DNS discovery source."""

    type: Literal["dns"] = "dns"
    ignore_resolution_error: bool = Field(
        default=False,
        validation_alias=AliasChoices("ignore_resolution_error", "ignore_dns_error"),
        description="Skip entries that fail to resolve instead of failing",
    )
    interval: timedelta | None = Field(
        default=None, description="Interval to refresh the service list"
    )
    entries: list[EntryConfig] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("entries", "entry"),
        description="Hosts to resolve, in order",
    )

    @field_validator("interval", mode="before")
    @classmethod
    def validate_interval_format(cls, v: Any) -> Any:
        """Accept ``10s``/``5m``/``1h`` style durations."""
        return parse_duration(v)

    @field_validator("interval")
    @classmethod
    def validate_interval_positive(cls, v: timedelta | None) -> timedelta | None:
        """Reject zero or negative intervals."""
        if v is not None and v <= timedelta(0):
            raise ValueError("Interval must be positive")
        return v

    def resolution_entries(self) -> list[ResolutionEntry]:
        """Get the configured entries as domain entries, in order."""
        return [entry.to_entry() for entry in self.entries]


class StaticServiceConfig(BaseModel):
    """A fixed service for a static discovery source."""

    host: str = Field(..., min_length=1, description="Address of the service")
    port: int = Field(..., ge=0, le=65535, description="Port of service")
    name: str | None = Field(default=None, description="Display name, defaults to host:port")
    weight: int = Field(default=DEFAULT_WEIGHT, gt=0, description="Load balancing weight")
    username: str = Field(default="", description="The username for authentication")
    password: SecretStr = Field(default=SecretStr(""), description="The password for authentication")
    shared_key: SecretStr | None = Field(
        default=None, description="The shared_key for authentication"
    )

    def to_service(self) -> Service:
        """Convert to a static Service."""
        return Service(
            kind=ServiceKind.STATIC,
            host=self.host,
            port=self.port,
            name=self.name or f"{self.host}:{self.port}",
            weight=self.weight,
            shared=False,
            username=self.username,
            password=self.password.get_secret_value(),
            shared_key=self.shared_key.get_secret_value() if self.shared_key else None,
        )


class StaticDiscoveryConfig(BaseModel):
    """Configuration of a static discovery source."""

    type: Literal["static"] = "static"
    services: list[StaticServiceConfig] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("services", "service"),
        description="Fixed services, in order",
    )


DiscoveryConfig = Annotated[
    DnsDiscoveryConfig | StaticDiscoveryConfig,
    Field(discriminator="type"),
]

_discovery_config_adapter: TypeAdapter[DnsDiscoveryConfig | StaticDiscoveryConfig] = TypeAdapter(
    DiscoveryConfig
)


def load_discovery_config(data: Mapping[str, Any]) -> DnsDiscoveryConfig | StaticDiscoveryConfig:
    """Validate a source configuration mapping.

    A mapping without ``type`` is treated as a DNS source.

    Args:
        data: Raw configuration

    Returns:
        The validated source configuration

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    raw = dict(data)
    raw.setdefault("type", "dns")
    try:
        return _discovery_config_adapter.validate_python(raw)
    except PydanticValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0]
        config_key = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise ConfigurationError(
            config_key,
            first["msg"],
            details={"errors": [error["msg"] for error in errors]},
        ) from e


def load_discovery_config_file(path: Path) -> DnsDiscoveryConfig | StaticDiscoveryConfig:
    """Load and validate a JSON source configuration file.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "Top-level value must be an object")
    return load_discovery_config(data)


class MetricsConfig(BaseModel):
    """Prometheus exporter configuration."""

    enabled: bool = Field(default=False, description="Expose Prometheus metrics over HTTP")
    port: int = Field(default=9108, ge=1, le=65535, description="Metrics HTTP port")


class DiscoverySettings(BaseSettings):
    """Process-wide settings for hosts running discovery sources.

    All values can be overridden using environment variables with the prefix
    SD_DNS_ (e.g., SD_DNS_METRICS__ENABLED=true).
    """

    model_config = SettingsConfigDict(
        env_prefix="SD_DNS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)


@lru_cache(maxsize=1)
def get_settings() -> DiscoverySettings:
    """Get the cached process settings."""
    return DiscoverySettings()


def reload_settings() -> DiscoverySettings:
    """Re-read process settings from the environment."""
    get_settings.cache_clear()
    return get_settings()
