# pyright: reportExplicitAny=false, reportAny=false
"""Health scoring across coverage, dependencies, and validation."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from functools import partial
from typing import TYPE_CHECKING, Any, Final

import anyio
import anyio.to_thread

from specgraph.analysis import (
    CoverageAnalyzer,
    CycleDetector,
    DependencyAnalyzer,
    GraphBuilder,
    OrphanDetector,
    safe_analyze,
)
from specgraph.config import AnalysisThresholds
from specgraph.exceptions import AnalysisError
from specgraph.health._models import HealthBreakdown, HealthReport, SpecReport
from specgraph.utils import create_null_logger
from specgraph.validation import ValidationEngine

if TYPE_CHECKING:
    from collections.abc import Callable

    import anyio.abc
    from structlog.typing import FilteringBoundLogger

    from specgraph.analysis import (
        AnalysisResult,
        CoverageReport,
        CycleAnalysis,
        DependencyAnalysisResult,
    )
    from specgraph.entities import EntitySnapshot
    from specgraph.repository import EntityRepository
    from specgraph.validation import ValidationReport

__all__ = ["HealthService", "assess_health"]

COVERAGE: Final = "coverage"
DEPENDENCIES: Final = "dependencies"
VALIDATION: Final = "validation"
CYCLES: Final = "cycles"
ORPHANS: Final = "orphans"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def assess_health(
    coverage: AnalysisResult[CoverageReport],
    dependencies: AnalysisResult[DependencyAnalysisResult],
    validation: AnalysisResult[ValidationReport],
    thresholds: AnalysisThresholds,
) -> HealthReport:
    """Combine three analysis results into a health report.

    A failed analysis scores 0 in its dimension and contributes a failure
    issue instead of its findings.

    Args:
        coverage: Coverage analysis result.
        dependencies: Dependency analysis result.
        validation: Validation result.
        thresholds: Penalty and recommendation thresholds.

    Returns:
        HealthReport whose score is the rounded mean of the breakdown.
    """
    coverage_report = coverage.data if coverage.success else None
    dependency_result = dependencies.data if dependencies.success else None
    validation_report = validation.data if validation.success else None

    coverage_score = coverage_report.coverage_percentage if coverage_report else 0
    dependency_score = dependency_result.health.score if dependency_result else 0
    if validation_report is None:
        validation_score = 0
    elif validation_report.valid:
        validation_score = 100
    else:
        validation_score = max(
            0,
            100 - thresholds.validation_error_penalty * len(validation_report.errors),
        )
    breakdown = HealthBreakdown(
        coverage=coverage_score,
        dependencies=dependency_score,
        validation=validation_score,
    )

    issues: list[str] = []
    if validation_report is not None:
        issues.extend(validation_report.errors)
    else:
        issues.append("Validation failed")
    if dependency_result is not None:
        issues.extend(dependency_result.health.issues)
    else:
        issues.append("Dependency analysis failed")
    if coverage_report is None:
        issues.append("Coverage analysis failed")
    elif coverage_report.orphaned_specs:
        issues.append(f"{len(coverage_report.orphaned_specs)} orphaned specs")

    recommendations: list[str] = []
    if dependency_result is not None:
        recommendations.extend(dependency_result.health.recommendations)
    else:
        recommendations.append(
            "Fix analysis errors before assessing dependency health"
        )
    if coverage_report is not None:
        recommendations.extend(coverage_report.recommendations)
    if coverage_score < thresholds.health_improvement:
        recommendations.append("Improve spec coverage")
    if validation_report is not None and validation_report.errors:
        recommendations.append("Fix validation errors")

    return HealthReport(
        score=_round_half_up(sum(breakdown.values) / len(breakdown.values)),
        breakdown=breakdown,
        issues=tuple(issues),
        recommendations=tuple(recommendations),
        timestamp=datetime.now(UTC),
    )


class HealthService:
    """Runs the analyses concurrently and scores the results.

    Each analysis runs in a worker thread inside one anyio task group, all
    against the same immutable snapshot. Failures are captured per analysis
    by :func:`~specgraph.analysis.safe_analyze`, so one failing analysis
    degrades the score instead of aborting the check.
    """

    __slots__: Final = (
        "_coverage",
        "_cycles",
        "_dependencies",
        "_logger",
        "_orphans",
        "_repository",
        "_thresholds",
        "_validation",
    )

    _repository: EntityRepository
    _thresholds: AnalysisThresholds
    _logger: FilteringBoundLogger
    _coverage: CoverageAnalyzer
    _dependencies: DependencyAnalyzer
    _validation: ValidationEngine
    _orphans: OrphanDetector
    _cycles: CycleDetector

    def __init__(
        self,
        repository: EntityRepository,
        thresholds: AnalysisThresholds | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Source of the snapshot to analyze.
            thresholds: Analysis thresholds. Defaults to built-in values.
            logger: Optional logger for diagnostics.
        """
        self._repository = repository
        self._thresholds = (
            thresholds if thresholds is not None else AnalysisThresholds()
        )
        self._logger = logger if logger is not None else create_null_logger()
        self._coverage = CoverageAnalyzer(self._thresholds, self._logger)
        self._dependencies = DependencyAnalyzer(self._thresholds, logger=self._logger)
        self._validation = ValidationEngine(self._logger)
        self._orphans = OrphanDetector(self._logger)
        self._cycles = CycleDetector(self._logger)

    async def check_health(self) -> HealthReport:
        """Load the snapshot and compute its health report.

        Raises:
            RepositoryError: If the snapshot cannot be loaded.
            EntityParseError: If a stored entity is malformed.
        """
        snapshot = await self._repository.load_snapshot()
        return await self._check(snapshot)

    async def generate_report(self) -> SpecReport:
        """Run the health check alongside every individual analysis.

        Raises:
            AnalysisError: If any analysis failed.
            RepositoryError: If the snapshot cannot be loaded.
            EntityParseError: If a stored entity is malformed.
        """
        snapshot = await self._repository.load_snapshot()
        health: list[HealthReport] = []

        async def run_health() -> None:
            health.append(await self._check(snapshot))

        async with anyio.create_task_group() as tg:
            tg.start_soon(run_health)
            results = self._start_all(
                tg,
                snapshot,
                {
                    COVERAGE: self._coverage.generate_report,
                    CYCLES: self._detect_cycles,
                    ORPHANS: self._orphans.detect_orphans,
                    VALIDATION: self._validation.validate,
                },
            )

        failed = [name for name, result in results.items() if not result.success]
        if failed:
            msg = f"Failed to generate complete report: {', '.join(sorted(failed))}"
            raise AnalysisError(msg)

        report = SpecReport(
            health=health[0],
            coverage=results[COVERAGE].unwrap(),
            cycles=results[CYCLES].unwrap(),
            orphans=results[ORPHANS].unwrap(),
            validation=results[VALIDATION].unwrap(),
            total_specs=snapshot.total,
            generated_at=datetime.now(UTC),
        )
        self._logger.info(
            "report_generated",
            total_specs=report.total_specs,
            score=report.health.score,
        )
        return report

    async def _check(self, snapshot: EntitySnapshot) -> HealthReport:
        async with anyio.create_task_group() as tg:
            results = self._start_all(
                tg,
                snapshot,
                {
                    COVERAGE: self._coverage.generate_report,
                    DEPENDENCIES: self._dependencies.analyze,
                    VALIDATION: self._validation.validate,
                },
            )

        report = assess_health(
            results[COVERAGE],
            results[DEPENDENCIES],
            results[VALIDATION],
            self._thresholds,
        )
        self._logger.info(
            "health_checked",
            score=report.score,
            coverage=report.breakdown.coverage,
            dependencies=report.breakdown.dependencies,
            validation=report.breakdown.validation,
        )
        return report

    def _start_all(
        self,
        tg: anyio.abc.TaskGroup,
        snapshot: EntitySnapshot,
        analyses: dict[str, Callable[[EntitySnapshot], Any]],
    ) -> dict[str, AnalysisResult[Any]]:
        """Schedule each analysis in ``tg``; the dict fills as they finish."""
        results: dict[str, AnalysisResult[Any]] = {}

        async def run(name: str, analysis: Callable[[EntitySnapshot], Any]) -> None:
            result = await anyio.to_thread.run_sync(
                partial(safe_analyze, name, analysis, snapshot, logger=self._logger)
            )
            results[name] = result

        for name, analysis in analyses.items():
            tg.start_soon(run, name, analysis)
        return results

    def _detect_cycles(self, snapshot: EntitySnapshot) -> CycleAnalysis:
        graph = GraphBuilder(self._logger).build(snapshot)
        return self._cycles.detect_all_cycles(graph)
