"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest
from sd_dns.domain.enums import AddressFamily
from sd_dns.domain.exceptions import ResolutionError
from sd_dns.domain.interfaces import ResolvedAddress, Resolver


class FakeResolver(Resolver):
    """Resolver answering from an in-memory table keyed by (host, port)."""

    def __init__(self) -> None:
        self.records: dict[tuple[str, int], list[ResolvedAddress] | Exception] = {}
        self.calls: list[tuple[str, int, AddressFamily]] = []

    def answer(self, host: str, port: int, *addresses: Any) -> None:
        """Resolve ``host:port`` to ``addresses`` (bare hosts reuse ``port``)."""
        self.records[(host, port)] = [
            address if isinstance(address, tuple) else (address, port) for address in addresses
        ]

    def fail(self, host: str, port: int, reason: str = "Failed for test!") -> None:
        self.records[(host, port)] = ResolutionError(host, port, reason)

    async def resolve(
        self, host: str, port: int, family: AddressFamily
    ) -> list[ResolvedAddress]:
        self.calls.append((host, port, family))
        result = self.records.get((host, port))
        if result is None:
            raise ResolutionError(host, port, "Name or service not known")
        if isinstance(result, Exception):
            raise result
        return list(result)


@pytest.fixture
def resolver() -> FakeResolver:
    """Create a fake resolver."""
    return FakeResolver()
