# pyright: reportExplicitAny=false
"""Health check and report models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from datetime import datetime

    from specgraph.analysis import CoverageReport, CycleAnalysis, OrphanAnalysis
    from specgraph.validation import ValidationReport


@dataclass(frozen=True, slots=True)
class HealthBreakdown:
    """Per-dimension health scores, each in 0..100."""

    coverage: int
    dependencies: int
    validation: int

    @property
    def values(self) -> tuple[int, int, int]:
        return (self.coverage, self.dependencies, self.validation)


@dataclass(frozen=True, slots=True)
class HealthReport:
    """Overall health of a spec corpus.

    Attributes:
        score: Rounded mean of the breakdown scores.
        breakdown: Coverage, dependency, and validation scores.
        issues: Problems found, validation errors first.
        recommendations: Suggested actions, dependency advice first.
        timestamp: When the check ran (UTC).
    """

    score: int
    breakdown: HealthBreakdown
    issues: tuple[str, ...]
    recommendations: tuple[str, ...]
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "breakdown": {
                "coverage": self.breakdown.coverage,
                "dependencies": self.breakdown.dependencies,
                "validation": self.breakdown.validation,
            },
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class SpecReport:
    """Combined report over every analysis."""

    health: HealthReport
    coverage: CoverageReport
    cycles: CycleAnalysis
    orphans: OrphanAnalysis
    validation: ValidationReport
    total_specs: int
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "totalSpecs": self.total_specs,
                "healthScore": self.health.score,
                "issues": len(self.health.issues),
                "generatedAt": self.generated_at.isoformat(),
            },
            "health": self.health.to_dict(),
            "coverage": self.coverage.to_dict(),
            "cycles": self.cycles.to_dict(),
            "orphans": self.orphans.to_dict(),
            "validation": self.validation.to_dict(),
        }
