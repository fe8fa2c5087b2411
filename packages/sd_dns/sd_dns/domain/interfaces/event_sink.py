"""Interface for the queue discovery events are pushed onto."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..events import ServiceEvent


@runtime_checkable
class EventSink(Protocol):
    """Append-only queue consumed by the routing layer.

    ``asyncio.Queue`` satisfies this protocol.
    """

    def put_nowait(self, item: ServiceEvent) -> None:
        """Append an event without blocking."""
        ...
