"""Abstract interface shared by every discovery source type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..entities.service import ServiceSet
from .event_sink import EventSink


class ServiceDiscovery(ABC):
    """Lifecycle contract for a discovery source.

    A source is configured once, started with the sink it pushes membership
    events to, and stopped when the host shuts down.
    """

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Type tag the source was selected by (e.g. ``"dns"``)."""
        pass

    @property
    @abstractmethod
    def services(self) -> ServiceSet:
        """Currently known services."""
        pass

    @abstractmethod
    async def configure(self, config: Any) -> None:
        """Validate settings and build the initial service set.

        Raises:
            ConfigurationError: If the configuration is unusable.
            ResolutionError: If the initial build fails and errors are not ignored.
        """
        pass

    @abstractmethod
    async def start(self, sink: EventSink) -> None:
        """Start pushing membership events onto ``sink``."""
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Stop producing events."""
        pass
