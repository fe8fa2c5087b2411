"""Domain entities for the service discovery source."""

from __future__ import annotations

from .resolution import EntryResolution, ResolutionEntry
from .service import DEFAULT_WEIGHT, Service, ServiceSet

__all__ = [
    "DEFAULT_WEIGHT",
    "EntryResolution",
    "ResolutionEntry",
    "Service",
    "ServiceSet",
]
