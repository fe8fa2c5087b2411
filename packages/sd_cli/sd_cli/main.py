"""Main entry point for the service discovery CLI."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from prometheus_client import start_http_server
from sd_dns.application.models import ServiceEventInfo, ServiceInfo
from sd_dns.application.services import DnsServiceDiscovery, open_service_discovery
from sd_dns.config import get_settings, load_discovery_config_file
from sd_dns.domain.events import ServiceEvent
from sd_dns.domain.exceptions import DiscoveryError
from sd_dns.domain.interfaces import ServiceDiscovery
from sd_dns.infrastructure.logging import get_logger, setup_logging
from sd_dns.version import __version__

app = typer.Typer(help="Resolve configured hosts into service membership events.")

logger = get_logger(__name__)

ConfigArgument = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="JSON discovery source configuration",
)


def _refreshes(discovery: ServiceDiscovery) -> bool:
    """Whether the source keeps producing events after start."""
    return (
        isinstance(discovery, DnsServiceDiscovery)
        and discovery.config is not None
        and discovery.config.interval is not None
    )


async def _resolve(config_path: Path) -> list[ServiceInfo]:
    discovery = await open_service_discovery(load_discovery_config_file(config_path))
    return [ServiceInfo.from_service(service) for service in discovery.services]


async def _watch(config_path: Path, max_events: int | None) -> int:
    discovery = await open_service_discovery(load_discovery_config_file(config_path))
    queue: asyncio.Queue[ServiceEvent] = asyncio.Queue()
    seen = 0

    for service in discovery.services:
        typer.echo(ServiceInfo.from_service(service).model_dump_json())

    await discovery.start(queue)
    try:
        while max_events is None or seen < max_events:
            if not _refreshes(discovery) and queue.empty():
                break
            event = await queue.get()
            typer.echo(ServiceEventInfo.from_event(event).model_dump_json())
            seen += 1
    finally:
        await discovery.stop()
    return seen


def _configure_process() -> None:
    settings = get_settings()
    setup_logging(settings.logging)
    if settings.metrics.enabled:
        start_http_server(settings.metrics.port)
        logger.info("Metrics exporter started", extra={"port": settings.metrics.port})


@app.command()  # type: ignore[misc]
def version() -> None:
    """Show the CLI version."""
    typer.echo(f"sd-dns version {__version__}")


@app.command()  # type: ignore[misc]
def resolve(config: Path = ConfigArgument) -> None:
    """Resolve the configured entries once and print the services as JSON lines."""
    setup_logging(get_settings().logging)
    try:
        services = asyncio.run(_resolve(config))
    except DiscoveryError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1) from e

    for service in services:
        typer.echo(service.model_dump_json())


@app.command()  # type: ignore[misc]
def watch(
    config: Path = ConfigArgument,
    max_events: int | None = typer.Option(
        None, "--max-events", min=1, help="Exit after printing this many events"
    ),
) -> None:
    """Print the initial services, then every JOIN/DRAIN event as JSON lines."""
    _configure_process()
    try:
        asyncio.run(_watch(config, max_events))
    except DiscoveryError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1) from e
    except KeyboardInterrupt:
        raise typer.Exit(code=130) from None


if __name__ == "__main__":
    app()
