"""Domain interfaces for the service discovery source.

This module contains abstract interfaces that define contracts for the
collaborators the discovery core depends on.
"""

from __future__ import annotations

from .event_sink import EventSink
from .resolver import ResolvedAddress, Resolver
from .service_discovery import ServiceDiscovery

__all__ = ["EventSink", "ResolvedAddress", "Resolver", "ServiceDiscovery"]
