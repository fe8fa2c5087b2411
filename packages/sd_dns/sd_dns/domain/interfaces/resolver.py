"""Abstract interface for name resolution.

This module defines the contract the service set builder uses to turn a
configured host into concrete addresses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..enums import AddressFamily

ResolvedAddress = tuple[str, int]


class Resolver(ABC):
    """Abstract base class for name resolvers."""

    @abstractmethod
    async def resolve(
        self, host: str, port: int, family: AddressFamily
    ) -> list[ResolvedAddress]:
        """Resolve a host into concrete addresses.

        Args:
            host: Hostname or address literal to resolve.
            port: Port of the configured entry.
            family: Address family to restrict results to.

        Returns:
            ``(address, port)`` pairs in resolver order, possibly empty.

        Raises:
            ResolutionError: If resolution fails.
        """
        pass

