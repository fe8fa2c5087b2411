"""Diffing of service sets into ordered membership events."""

from __future__ import annotations

from dataclasses import dataclass

from ..entities.service import ServiceSet
from ..events import ServiceEvent, ServiceEventType, drain_event, join_event


@dataclass(frozen=True)
class ReconciliationResult:
    """Events produced by comparing two service sets.

    Attributes:
        events: JOIN events followed by DRAIN events
        updated: False when the candidate set must not replace the current one
    """

    events: tuple[ServiceEvent, ...] = ()
    updated: bool = False

    @property
    def joined(self) -> int:
        return sum(1 for event in self.events if event.event_type is ServiceEventType.JOIN)

    @property
    def drained(self) -> int:
        return len(self.events) - self.joined


NO_UPDATE = ReconciliationResult()


def diff_service_sets(old: ServiceSet, new: ServiceSet | None) -> ReconciliationResult:
    """Compute the membership events that turn ``old`` into ``new``.

    An empty or missing ``new`` set yields no events and ``updated=False`` so
    that a transient total resolution failure never drains every endpoint.

    Every JOIN precedes every DRAIN: a consumer applying events in order always
    sees at least one live endpoint when a host's address changes.

    Args:
        old: Currently adopted service set
        new: Candidate service set from the latest resolution

    Returns:
        ReconciliationResult with the ordered events
    """
    if not new:
        return NO_UPDATE

    joins = [join_event(service) for service in new - old]
    drains = [drain_event(service) for service in old - new]
    return ReconciliationResult(events=(*joins, *drains), updated=True)
