"""Resolver backed by the system's ``getaddrinfo``."""

from __future__ import annotations

import asyncio
import socket

from sd_dns.domain.enums import AddressFamily
from sd_dns.domain.exceptions import ResolutionError
from sd_dns.domain.interfaces import ResolvedAddress, Resolver
from sd_dns.infrastructure.logging import get_logger

logger = get_logger(__name__)


class SocketResolver(Resolver):
    """Resolve hosts through the event loop's ``getaddrinfo``.

    The lookup runs in the loop's default executor, so a slow resolver
    blocks only the calling refresh cycle.
    """

    async def resolve(
        self, host: str, port: int, family: AddressFamily
    ) -> list[ResolvedAddress]:
        loop = asyncio.get_running_loop()
        try:
            addr_info = await loop.getaddrinfo(
                host,
                port,
                family=family.socket_family,
                type=socket.SOCK_STREAM,
            )
        except (OSError, UnicodeError) as e:
            # UnicodeError: hostname that cannot be IDNA-encoded (empty or over-long label)
            raise ResolutionError(host, port, str(e)) from e

        addresses = [(sockaddr[0], sockaddr[1]) for _, _, _, _, sockaddr in addr_info]

        logger.debug(
            "Resolved host",
            extra={
                "host": host,
                "port": port,
                "address_family": family.value,
                "addresses": [address for address, _ in addresses],
            },
        )
        return addresses
