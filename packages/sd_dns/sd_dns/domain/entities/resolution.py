"""Resolution entries and per-entry resolution outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..enums import AddressFamily
from ..exceptions import ResolutionError
from .service import DEFAULT_WEIGHT, Service


@dataclass(frozen=True)
class ResolutionEntry:
    """One configured host/port to resolve, with its auth and weight settings."""

    host: str
    port: int
    address_family: AddressFamily = AddressFamily.UNSPECIFIED
    weight: int = DEFAULT_WEIGHT
    username: str = ""
    password: str = field(default="", repr=False)
    shared_key: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class EntryResolution:
    """Outcome of resolving a single entry.

    Exactly one of ``services`` (on success) or ``error`` (on failure) is
    meaningful.
    """

    entry: ResolutionEntry
    services: tuple[Service, ...] = ()
    error: ResolutionError | None = None

    @property
    def ok(self) -> bool:
        """Whether the entry resolved successfully."""
        return self.error is None

    @classmethod
    def success(cls, entry: ResolutionEntry, services: tuple[Service, ...]) -> EntryResolution:
        return cls(entry=entry, services=services)

    @classmethod
    def failure(cls, entry: ResolutionEntry, error: ResolutionError) -> EntryResolution:
        return cls(entry=entry, error=error)
