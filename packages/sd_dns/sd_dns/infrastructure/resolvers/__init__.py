"""Name resolver implementations."""

from __future__ import annotations

from .socket_resolver import SocketResolver

__all__ = ["SocketResolver"]
