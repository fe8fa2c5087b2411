"""Refresh scheduling for a discovery source."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

from sd_dns.application.services.service_set_builder import ServiceSetBuilder
from sd_dns.domain.entities import ResolutionEntry, ServiceSet
from sd_dns.domain.enums import SchedulerState
from sd_dns.domain.events import ServiceEvent, ServiceEventType
from sd_dns.domain.exceptions import DiscoveryStateError, ResolutionError
from sd_dns.domain.interfaces import EventSink
from sd_dns.domain.services import diff_service_sets
from sd_dns.infrastructure.logging import get_logger
from sd_dns.infrastructure.monitoring import (
    CycleOutcome,
    known_services,
    refresh_cycles_total,
    refresh_duration,
    service_events_total,
)

logger = get_logger(__name__)


class RefreshScheduler:
    """Owns the current service set and runs refresh cycles against it.

    A refresh cycle builds a candidate set, diffs it against the current one,
    adopts it and pushes the resulting events onto the sink. Cycles are
    serialized; a failed cycle leaves the current set untouched and never
    stops the scheduler.
    """

    def __init__(
        self,
        builder: ServiceSetBuilder,
        entries: Iterable[ResolutionEntry],
        interval: float | None = None,
        source_name: str = "dns",
    ) -> None:
        """Initialize the scheduler.

        Args:
            builder: Builder used to produce candidate sets
            entries: Entries to resolve on every cycle
            interval: Seconds between refresh cycles, None for a single refresh
            source_name: Source label used in logs and metrics
        """
        self._builder = builder
        self._entries = tuple(entries)
        self._interval = interval
        self._source_name = source_name

        self._services = ServiceSet()
        self._sink: EventSink | None = None
        self._state = SchedulerState.IDLE
        self._cycle_lock = asyncio.Lock()
        self._stop_event = asyncio.Event()
        self._timer_task: asyncio.Task[None] | None = None

    @property
    def services(self) -> ServiceSet:
        """The currently adopted service set."""
        return self._services

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def interval(self) -> float | None:
        return self._interval

    @property
    def active(self) -> bool:
        """Whether the scheduler has been started and not yet stopped."""
        return self._sink is not None and self._state is not SchedulerState.STOPPED

    async def initialize(self) -> ServiceSet:
        """Build and adopt the initial service set.

        Returns:
            The adopted service set

        Raises:
            ResolutionError: If an entry fails and errors are not ignored
        """
        services = await self._builder.build(self._entries)
        self._adopt(services)

        logger.info(
            "Initial service list resolved",
            extra={
                "source": self._source_name,
                "service_count": len(services),
            },
        )
        return services

    async def start(self, sink: EventSink) -> None:
        """Start refreshing into ``sink``.

        Without an interval a single refresh cycle runs before this returns.
        With an interval a background timer runs one cycle per firing.

        Raises:
            DiscoveryStateError: If the scheduler was stopped
        """
        if self._state is SchedulerState.STOPPED:
            raise DiscoveryStateError(self._source_name, "start", "scheduler is stopped")
        if self._sink is not None:
            logger.warning("Refresh scheduler already started", extra={"source": self._source_name})
            return

        self._sink = sink

        if self._interval is None:
            await self.run_one_cycle()
        else:
            self._timer_task = asyncio.create_task(
                self._timer_loop(), name=f"sd-{self._source_name}-refresh"
            )

        logger.info(
            "Refresh scheduler started",
            extra={"source": self._source_name, "interval": self._interval},
        )

    async def stop(self) -> None:
        """Stop scheduling refresh cycles.

        A cycle already in flight completes before this returns.
        """
        if self._state is SchedulerState.STOPPED:
            return

        self._stop_event.set()
        if self._timer_task is not None:
            await self._timer_task
            self._timer_task = None

        async with self._cycle_lock:
            self._state = SchedulerState.STOPPED

        logger.info("Refresh scheduler stopped", extra={"source": self._source_name})

    async def run_one_cycle(self) -> tuple[ServiceEvent, ...]:
        """Run a single refresh cycle.

        Returns:
            Events pushed to the sink, empty when nothing changed or the
            cycle was aborted

        Raises:
            DiscoveryStateError: If called before ``start``
        """
        if self._sink is None:
            raise DiscoveryStateError(self._source_name, "refresh", "scheduler is not started")

        async with self._cycle_lock:
            if self._stop_event.is_set():
                return ()

            self._state = SchedulerState.RUNNING
            started = time.perf_counter()
            try:
                return await self._refresh(self._sink)
            finally:
                refresh_duration.labels(source=self._source_name).observe(
                    time.perf_counter() - started
                )
                self._state = SchedulerState.IDLE

    async def _refresh(self, sink: EventSink) -> tuple[ServiceEvent, ...]:
        try:
            candidate = await self._builder.build(self._entries)
        except ResolutionError as e:
            refresh_cycles_total.labels(source=self._source_name, outcome=CycleOutcome.FAILED).inc()
            logger.error(
                f"Failed to refresh service list: {e.message}",
                extra={
                    "source": self._source_name,
                    "host": e.host,
                    "known_services": len(self._services),
                },
            )
            return ()
        except Exception as e:
            # Not a resolution failure; still isolated to this cycle.
            refresh_cycles_total.labels(source=self._source_name, outcome=CycleOutcome.ERROR).inc()
            logger.error(
                "Unexpected error while refreshing service list",
                exc_info=e,
                extra={
                    "source": self._source_name,
                    "known_services": len(self._services),
                },
            )
            return ()

        result = diff_service_sets(self._services, candidate)
        if not result.updated:
            refresh_cycles_total.labels(source=self._source_name, outcome=CycleOutcome.EMPTY).inc()
            logger.debug(
                "Refresh produced no services, keeping current list",
                extra={"source": self._source_name, "known_services": len(self._services)},
            )
            return ()

        self._adopt(candidate)

        if not result.events:
            refresh_cycles_total.labels(
                source=self._source_name, outcome=CycleOutcome.UNCHANGED
            ).inc()
            return ()

        for event in result.events:
            sink.put_nowait(event)

        refresh_cycles_total.labels(source=self._source_name, outcome=CycleOutcome.UPDATED).inc()
        service_events_total.labels(
            source=self._source_name, event_type=ServiceEventType.JOIN.value
        ).inc(result.joined)
        service_events_total.labels(
            source=self._source_name, event_type=ServiceEventType.DRAIN.value
        ).inc(result.drained)

        logger.info(
            "Service list updated",
            extra={
                "source": self._source_name,
                "joined": result.joined,
                "drained": result.drained,
                "service_count": len(candidate),
            },
        )
        return result.events

    def _adopt(self, services: ServiceSet) -> None:
        self._services = services
        known_services.labels(source=self._source_name).set(len(services))

    async def _timer_loop(self) -> None:
        """Run one refresh cycle per interval until stopped."""
        assert self._interval is not None
        while not self._stop_event.is_set():
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
            except TimeoutError:
                pass
            else:
                break

            try:
                await self.run_one_cycle()
            except Exception as e:
                logger.error(
                    "Error in refresh loop",
                    exc_info=e,
                    extra={"source": self._source_name},
                )
