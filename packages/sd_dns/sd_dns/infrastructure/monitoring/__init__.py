"""Monitoring infrastructure for the discovery source."""

from __future__ import annotations

from .metrics import (
    CycleOutcome,
    known_services,
    refresh_cycles_total,
    refresh_duration,
    resolution_failures_total,
    service_events_total,
)

__all__ = [
    "CycleOutcome",
    "known_services",
    "refresh_cycles_total",
    "refresh_duration",
    "resolution_failures_total",
    "service_events_total",
]
