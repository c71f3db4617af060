"""Coverage analysis across requirements, plans, and components."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from specgraph.analysis._links import ReferenceIndex, percentage
from specgraph.analysis._models import CategoryCoverage, CoverageReport
from specgraph.config import AnalysisThresholds
from specgraph.entities import entity_id
from specgraph.utils import create_null_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structlog.typing import FilteringBoundLogger

    from specgraph.entities import EntitySnapshot

__all__ = ["CoverageAnalyzer"]


class CoverageAnalyzer:
    """Computes how much of the corpus is linked to implementation work.

    Requirements count as covered when a plan targets one of their criteria.
    Plans and components count as covered when they are justified in the
    same sense as :class:`~specgraph.analysis.OrphanDetector` uses; the
    ones that are not become ``orphaned_specs``.
    """

    __slots__: Final = ("_logger", "_thresholds")

    _thresholds: AnalysisThresholds
    _logger: FilteringBoundLogger

    def __init__(
        self,
        thresholds: AnalysisThresholds | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            thresholds: Recommendation thresholds. Defaults to the built-in
                values.
            logger: Optional logger for diagnostics.
        """
        self._thresholds = (
            thresholds if thresholds is not None else AnalysisThresholds()
        )
        self._logger = logger if logger is not None else create_null_logger()

    def generate_report(
        self,
        snapshot: EntitySnapshot,
        index: ReferenceIndex | None = None,
    ) -> CoverageReport:
        """Generate the coverage report for a snapshot.

        Args:
            snapshot: The entities to analyze.
            index: Prebuilt reference index for the same snapshot, if any.

        Returns:
            CoverageReport with totals, per-category breakdown, and
            recommendations.
        """
        if index is None:
            index = ReferenceIndex.build(snapshot)

        uncovered: list[str] = []
        covered_requirements = 0
        for requirement in snapshot.requirements:
            if index.requirement_satisfied(requirement):
                covered_requirements += 1
            else:
                uncovered.append(entity_id(requirement))

        orphaned: list[str] = []
        covered_plans = 0
        for plan in snapshot.plans:
            if index.plan_justified(plan):
                covered_plans += 1
            else:
                orphaned.append(entity_id(plan))

        covered_components = 0
        for component in snapshot.components:
            if index.component_justified(component):
                covered_components += 1
            else:
                orphaned.append(entity_id(component))

        by_category = {
            "requirements": _category(covered_requirements, len(snapshot.requirements)),
            "plans": _category(covered_plans, len(snapshot.plans)),
            "components": _category(covered_components, len(snapshot.components)),
        }
        total = snapshot.total
        covered = covered_requirements + covered_plans + covered_components
        overall = percentage(covered, total)

        report = CoverageReport(
            total_specs=total,
            covered_specs=covered,
            coverage_percentage=overall,
            uncovered_specs=tuple(uncovered),
            orphaned_specs=tuple(orphaned),
            by_category=MappingProxyType(by_category),
            recommendations=self._recommend(
                overall, by_category, len(orphaned), len(uncovered)
            ),
        )
        self._logger.debug(
            "coverage_computed",
            total=total,
            covered=covered,
            percentage=overall,
        )
        return report

    def _recommend(
        self,
        overall: int,
        by_category: Mapping[str, CategoryCoverage],
        orphan_count: int,
        uncovered_count: int,
    ) -> tuple[str, ...]:
        thresholds = self._thresholds
        recommendations: list[str] = []

        if overall < thresholds.coverage_warning:
            recommendations.append(
                f"Coverage is below {thresholds.coverage_warning}%. "
                "Consider adding more comprehensive test coverage."
            )
        if orphan_count > 0:
            recommendations.append(
                f"{orphan_count} orphaned specifications need attention."
            )
        if uncovered_count > 0:
            recommendations.append(
                f"{uncovered_count} specifications lack proper coverage."
            )

        requirements = by_category["requirements"]
        below = requirements.percentage < thresholds.requirements_warning
        if requirements.total and below:
            recommendations.append(
                "Requirements coverage is low. "
                "Ensure all requirements have associated plans."
            )
        components = by_category["components"]
        if components.total and components.percentage < thresholds.components_warning:
            recommendations.append(
                "Component coverage could be improved. "
                "Verify all components are properly tested."
            )

        if not recommendations:
            recommendations.append(
                "Coverage looks good! "
                "Consider maintaining or improving current levels."
            )
        return tuple(recommendations)


def _category(covered: int, total: int) -> CategoryCoverage:
    return CategoryCoverage(
        total=total, covered=covered, percentage=percentage(covered, total)
    )
