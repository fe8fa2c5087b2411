"""Admin API endpoints."""

from __future__ import annotations

from .services_api import create_services_router

__all__ = ["create_services_router"]
