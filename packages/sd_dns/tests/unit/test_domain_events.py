"""Unit tests for domain events."""

from __future__ import annotations

from sd_dns.domain.entities import Service
from sd_dns.domain.enums import ServiceKind
from sd_dns.domain.events import ServiceEvent, ServiceEventType, drain_event, join_event


class TestServiceEventType:
    """Test ServiceEventType enum."""

    def test_event_type_values(self) -> None:
        """Test event type enum values."""
        assert ServiceEventType.JOIN.value == "service_in"
        assert ServiceEventType.DRAIN.value == "service_out"


class TestEventConstructors:
    """Test the JOIN/DRAIN event constructors."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.service = Service(kind=ServiceKind.DNS, host="127.0.0.1", port=80, name="0-localhost")

    def test_join_event(self) -> None:
        """Test building a JOIN event."""
        event = join_event(self.service)
        assert event.event_type is ServiceEventType.JOIN
        assert event.service is self.service

    def test_drain_event(self) -> None:
        """Test building a DRAIN event."""
        event = drain_event(self.service)
        assert event.event_type is ServiceEventType.DRAIN
        assert event.service is self.service

    def test_events_compare_by_value(self) -> None:
        """Test events with the same type and service are equal."""
        assert join_event(self.service) == ServiceEvent(ServiceEventType.JOIN, self.service)
        assert join_event(self.service) != drain_event(self.service)
