"""Domain services for the service discovery source."""

from __future__ import annotations

from .reconciliation import NO_UPDATE, ReconciliationResult, diff_service_sets

__all__ = ["NO_UPDATE", "ReconciliationResult", "diff_service_sets"]
