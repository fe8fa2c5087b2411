"""Unit tests for the DNS discovery source."""

from __future__ import annotations

import asyncio
import logging

import pytest
from sd_dns.application.services import DnsServiceDiscovery
from sd_dns.domain.entities import Service
from sd_dns.domain.enums import AddressFamily, ServiceKind
from sd_dns.domain.events import ServiceEventType
from sd_dns.domain.exceptions import ConfigurationError, DiscoveryStateError, ResolutionError
from sd_dns.infrastructure.resolvers import SocketResolver


def config(af: str = "ipv4", interval: str | None = None, **entry: object) -> dict:
    conf: dict = {
        "type": "dns",
        "entries": [{"host": "localhost", "port": 80, "address_family": af, **entry}],
    }
    if interval is not None:
        conf["interval"] = interval
    return conf


def dns_service(host: str, port: int, name: str = "0-localhost", **kwargs: object) -> Service:
    return Service(ServiceKind.DNS, host, port, name, **kwargs)  # type: ignore[arg-type]


@pytest.mark.asyncio
class TestConfigure:
    """Test DnsServiceDiscovery.configure."""

    async def test_set_services(self, resolver) -> None:
        """Test configuring resolves the initial service list."""
        resolver.answer("localhost", 80, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)

        await sd_dns.configure(config())

        assert sd_dns.services[0] == dns_service("127.0.0.1", 80, weight=60, shared=False)
        assert resolver.calls == [("localhost", 80, AddressFamily.IPV4)]

    async def test_set_services_with_auth_settings(self, resolver) -> None:
        """Test auth settings are carried onto services."""
        resolver.answer("localhost", 80, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)

        await sd_dns.configure(
            config(shared_key="test_key", username="test_user", password="test_pass")
        )

        assert sd_dns.services[0] == dns_service(
            "127.0.0.1",
            80,
            username="test_user",
            password="test_pass",
            shared_key="test_key",
        )

    async def test_set_services_with_multiple_entries(self, resolver) -> None:
        """Test each entry produces its own services."""
        for port in (80, 81, 82):
            resolver.answer("localhost", port, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)

        await sd_dns.configure(
            {
                "type": "dns",
                "entries": [
                    {"host": "localhost", "port": port, "address_family": "ipv4"}
                    for port in (80, 81, 82)
                ],
            }
        )

        assert list(sd_dns.services) == [
            dns_service("127.0.0.1", 80),
            dns_service("127.0.0.1", 81),
            dns_service("127.0.0.1", 82),
        ]

    async def test_unspecified_address_family_yields_every_address(self, resolver) -> None:
        """Test both address families are kept, named by position."""
        resolver.answer("localhost", 80, "::1", "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)

        await sd_dns.configure({"entries": [{"host": "localhost", "port": 80}]})

        assert list(sd_dns.services) == [
            dns_service("::1", 80, "0-localhost"),
            dns_service("127.0.0.1", 80, "1-localhost"),
        ]
        assert resolver.calls[0][2] is AddressFamily.UNSPECIFIED

    async def test_raise_an_error_for_no_entries(self, resolver) -> None:
        """Test configuration without entries is rejected."""
        sd_dns = DnsServiceDiscovery(resolver)
        with pytest.raises(ConfigurationError):
            await sd_dns.configure({"type": "dns"})

    async def test_rejects_static_config(self, resolver) -> None:
        """Test a static configuration cannot configure a DNS source."""
        sd_dns = DnsServiceDiscovery(resolver)
        with pytest.raises(ConfigurationError):
            await sd_dns.configure({"type": "static", "services": [{"host": "a", "port": 1}]})

    async def test_resolution_error_is_fatal(self, resolver) -> None:
        """Test a strict resolution failure fails configuration."""
        resolver.fail("localhost", 80, "Failed for test!")
        sd_dns = DnsServiceDiscovery(resolver)

        with pytest.raises(ResolutionError, match="Failed for test!"):
            await sd_dns.configure(config())

        assert len(sd_dns.services) == 0
        with pytest.raises(DiscoveryStateError):
            await sd_dns.start(asyncio.Queue())

    async def test_resolution_error_with_ignore_flag(self, resolver, caplog) -> None:
        """Test an ignored resolution failure logs the host and yields no services."""
        resolver.fail("localhost", 80, "Failed for test!")
        sd_dns = DnsServiceDiscovery(resolver)

        with caplog.at_level(logging.WARNING):
            await sd_dns.configure({**config(), "ignore_dns_error": True})

        assert len(sd_dns.services) == 0
        assert any(
            "Failed to get service list from localhost" in record.getMessage()
            for record in caplog.records
        )

    async def test_unencodable_host_with_ignore_flag(self, caplog) -> None:
        """Test an over-long hostname is an ignorable resolution failure."""
        host = "a" * 64 + ".example"
        sd_dns = DnsServiceDiscovery(SocketResolver())

        with caplog.at_level(logging.WARNING):
            await sd_dns.configure(
                {
                    "type": "dns",
                    "ignore_dns_error": True,
                    "entries": [{"host": host, "port": 80, "address_family": "ipv4"}],
                }
            )

        assert len(sd_dns.services) == 0
        assert any(
            f"Failed to get service list from {host}" in record.getMessage()
            for record in caplog.records
        )


@pytest.mark.asyncio
class TestReconfigure:
    """Test configuring a source that is already configured."""

    async def test_failed_reconfigure_keeps_previous_state(self, resolver) -> None:
        """Test a failing configuration leaves the previous one in place."""
        resolver.answer("localhost", 80, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)
        await sd_dns.configure(config())
        previous_config = sd_dns.config
        previous_scheduler = sd_dns.scheduler

        resolver.fail("localhost", 80, "Failed for test!")
        with pytest.raises(ResolutionError):
            await sd_dns.configure(config(interval="10s"))

        assert sd_dns.config is previous_config
        assert sd_dns.scheduler is previous_scheduler
        assert list(sd_dns.services) == [dns_service("127.0.0.1", 80)]

        resolver.answer("localhost", 80, "127.0.0.2")
        queue: asyncio.Queue = asyncio.Queue()
        await sd_dns.start(queue)

        assert queue.get_nowait().service.host == "127.0.0.2"
        assert queue.get_nowait().service.host == "127.0.0.1"

    async def test_reconfigure_replaces_services(self, resolver) -> None:
        """Test a successful reconfiguration adopts the new entries."""
        resolver.answer("localhost", 80, "127.0.0.1")
        resolver.answer("localhost", 81, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)
        await sd_dns.configure(config())

        await sd_dns.configure(config(port=81))

        assert list(sd_dns.services) == [dns_service("127.0.0.1", 81)]

    async def test_reconfigure_started_source_is_rejected(self, resolver) -> None:
        """Test a started source cannot be reconfigured until stopped."""
        resolver.answer("localhost", 80, "127.0.0.1")
        resolver.answer("localhost", 81, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)
        await sd_dns.configure(config(interval="10s"))
        scheduler = sd_dns.scheduler
        await sd_dns.start(asyncio.Queue())

        with pytest.raises(DiscoveryStateError, match="already started"):
            await sd_dns.configure(config(port=81))
        assert sd_dns.scheduler is scheduler

        await sd_dns.stop()
        await sd_dns.configure(config(port=81))

        assert sd_dns.scheduler is not scheduler
        assert list(sd_dns.services) == [dns_service("127.0.0.1", 81)]


@pytest.mark.asyncio
class TestStart:
    """Test DnsServiceDiscovery.start."""

    async def test_skip_if_service_list_is_not_updated(self, resolver) -> None:
        """Test unchanged refreshes push nothing."""
        resolver.answer("localhost", 80, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)
        await sd_dns.configure(config(interval="10s"))
        queue: asyncio.Queue = asyncio.Queue()

        await sd_dns.start(queue)
        await sd_dns.refresh()
        assert queue.empty()

        await sd_dns.refresh()
        assert queue.empty()

        await sd_dns.stop()

    async def test_service_in_and_service_out_when_list_changes(self, resolver) -> None:
        """Test a changed resolution pushes service_in then service_out."""
        resolver.answer("localhost", 80, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)
        await sd_dns.configure(config())

        resolver.answer("localhost", 80, ("192.168.0.1", 90))
        queue: asyncio.Queue = asyncio.Queue()
        await sd_dns.start(queue)

        join = queue.get_nowait()
        assert join.event_type is ServiceEventType.JOIN
        assert join.service.port == 90
        assert join.service.host == "192.168.0.1"

        drain = queue.get_nowait()
        assert drain.event_type is ServiceEventType.DRAIN
        assert drain.service.port == 80
        assert drain.service.host == "127.0.0.1"

        assert queue.empty()

    async def test_interval_from_config(self, resolver) -> None:
        """Test the configured interval reaches the scheduler in seconds."""
        resolver.answer("localhost", 80, "127.0.0.1")
        sd_dns = DnsServiceDiscovery(resolver)
        await sd_dns.configure(config(interval="10s"))

        assert sd_dns.scheduler is not None
        assert sd_dns.scheduler.interval == 10.0

    async def test_start_before_configure(self, resolver) -> None:
        """Test starting an unconfigured source is rejected."""
        with pytest.raises(DiscoveryStateError):
            await DnsServiceDiscovery(resolver).start(asyncio.Queue())

    async def test_stop_before_configure(self, resolver) -> None:
        """Test stopping an unconfigured source is a no-op."""
        await DnsServiceDiscovery(resolver).stop()
