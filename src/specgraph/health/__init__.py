"""Corpus health scoring and combined reports."""

from ._models import HealthBreakdown, HealthReport, SpecReport
from ._service import HealthService, assess_health

__all__ = [
    "HealthBreakdown",
    "HealthReport",
    "HealthService",
    "SpecReport",
    "assess_health",
]
