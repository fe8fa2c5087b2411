"""Domain-specific exceptions for the service discovery source.

This module defines the exception hierarchy, following clean architecture
principles where domain exceptions are independent of infrastructure concerns.
"""

from typing import Any


class DiscoveryError(Exception):
    """Base exception for all service discovery errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code for programmatic handling
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class DomainError(DiscoveryError):
    """Base class for domain-layer errors."""

    pass


class DiscoveryStateError(DomainError):
    """Raised when a discovery source is driven out of its lifecycle order."""

    def __init__(self, source: str, operation: str, reason: str, **kwargs: Any) -> None:
        """
        Initialize discovery state error.

        Args:
            source: Discovery source type (e.g., "dns")
            operation: Operation that was attempted
            reason: Why the operation is not allowed now
            **kwargs: Additional error details
        """
        message = f"Cannot {operation} discovery source '{source}': {reason}"
        details = {
            "source": source,
            "operation": operation,
            "reason": reason,
            **kwargs.pop("details", {}),
        }
        super().__init__(message, error_code="DISCOVERY_STATE_ERROR", details=details)


class InfrastructureError(DiscoveryError):
    """Base class for infrastructure-layer errors."""

    pass


class ConfigurationError(InfrastructureError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, reason: str, **kwargs: Any) -> None:
        """
        Initialize configuration error.

        Args:
            config_key: Configuration key that has issues
            reason: Reason for configuration error
            **kwargs: Additional error details
        """
        message = f"Configuration error for '{config_key}': {reason}"
        details = {
            "config_key": config_key,
            "reason": reason,
            **kwargs.pop("details", {}),
        }
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details)


class ResolutionError(InfrastructureError):
    """Raised when name resolution fails for a configured entry."""

    def __init__(self, host: str, port: int, reason: str | None = None, **kwargs: Any) -> None:
        """
        Initialize resolution error.

        Args:
            host: Hostname that failed to resolve
            port: Port of the configured entry
            reason: Failure reason reported by the resolver
            **kwargs: Additional error details
        """
        message = f"Failed to resolve {host}:{port}"
        if reason:
            message += f": {reason}"
        details = {
            "host": host,
            "port": port,
            "reason": reason,
            **kwargs.pop("details", {}),
        }
        super().__init__(message, error_code="RESOLUTION_ERROR", details=details)
        self.host = host
        self.port = port
