"""Domain enums for the service discovery source."""

from __future__ import annotations

import socket
from enum import Enum


class ServiceKind(str, Enum):
    """Origin tag of a discovered service."""

    DNS = "dns"
    STATIC = "static"


class AddressFamily(str, Enum):
    """Address family requested from the resolver."""

    UNSPECIFIED = "unspecified"
    IPV4 = "ipv4"
    IPV6 = "ipv6"

    @classmethod
    def parse(cls, value: str) -> AddressFamily:
        """Parse a configured address family, case-insensitively.

        Accepts ``unspecified``, ``ipv4``/``v4`` and ``ipv6``/``v6``.

        Raises:
            ValueError: If the value is not a supported address family
        """
        normalized = value.strip().lower()
        aliases = {"v4": cls.IPV4, "v6": cls.IPV6}
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported parameter value: {value}") from None

    @property
    def socket_family(self) -> int:
        """Socket module constant for this family."""
        if self is AddressFamily.IPV4:
            return socket.AF_INET
        if self is AddressFamily.IPV6:
            return socket.AF_INET6
        return socket.AF_UNSPEC


class SchedulerState(Enum):
    """Lifecycle state of a refresh scheduler."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
