"""Orphan detection for specification entities."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from specgraph.analysis._links import ReferenceIndex
from specgraph.analysis._models import OrphanAnalysis, OrphanSummary
from specgraph.entities import entity_id
from specgraph.utils import create_null_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from specgraph.entities import EntitySnapshot

__all__ = ["OrphanDetector"]


class OrphanDetector:
    """Finds entities that nothing in the corpus justifies.

    Justification differs per type rather than being a plain in-degree
    check:

    - a requirement needs a plan whose ``criteria_id`` names one of its
      criteria
    - a plan needs a resolvable ``criteria_id`` or another plan depending
      on it
    - a component needs a test case referencing it or another component
      depending on it

    Self-references never count.
    """

    __slots__: Final = ("_logger",)

    _logger: FilteringBoundLogger

    def __init__(self, logger: FilteringBoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else create_null_logger()

    def detect_orphans(
        self,
        snapshot: EntitySnapshot,
        index: ReferenceIndex | None = None,
    ) -> OrphanAnalysis:
        """Detect orphaned entities.

        Args:
            snapshot: The entities to analyze.
            index: Prebuilt reference index for the same snapshot, if the
                caller already has one.

        Returns:
            OrphanAnalysis with orphan IDs (requirements, then plans, then
            components) and per-type counts.
        """
        if index is None:
            index = ReferenceIndex.build(snapshot)

        requirements = [
            entity_id(requirement)
            for requirement in snapshot.requirements
            if not index.requirement_satisfied(requirement)
        ]
        plans = [
            entity_id(plan)
            for plan in snapshot.plans
            if not index.plan_justified(plan)
        ]
        components = [
            entity_id(component)
            for component in snapshot.components
            if not index.component_justified(component)
        ]

        orphans = (*requirements, *plans, *components)
        self._logger.debug("orphans_detected", total=len(orphans))
        return OrphanAnalysis(
            orphans=orphans,
            summary=OrphanSummary(
                total_orphans=len(orphans),
                by_type=MappingProxyType(
                    {
                        "requirements": len(requirements),
                        "plans": len(plans),
                        "components": len(components),
                    }
                ),
            ),
        )
