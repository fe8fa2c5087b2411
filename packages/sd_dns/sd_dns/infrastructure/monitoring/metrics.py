"""Prometheus metrics for discovery refresh cycles."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

refresh_cycles_total = Counter(
    "sd_refresh_cycles_total",
    "Total number of refresh cycles by outcome",
    ["source", "outcome"],
)

refresh_duration = Histogram(
    "sd_refresh_duration_seconds",
    "Duration of a refresh cycle in seconds",
    ["source"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

service_events_total = Counter(
    "sd_service_events_total",
    "Total number of membership events pushed to the sink",
    ["source", "event_type"],
)

resolution_failures_total = Counter(
    "sd_resolution_failures_total",
    "Total number of failed entry resolutions",
    ["host", "ignored"],
)

known_services = Gauge(
    "sd_known_services",
    "Number of services in the currently adopted set",
    ["source"],
)


class CycleOutcome:
    """Label values for ``sd_refresh_cycles_total``."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    EMPTY = "empty"
    FAILED = "failed"
    ERROR = "error"
