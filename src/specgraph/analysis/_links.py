"""Cross-reference index shared by the orphan and coverage analyzers.

Both analyzers answer the same question per entity ("does anything in the
corpus justify this?"), so the justification predicates live here once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from specgraph.entities import (
    Component,
    EntitySnapshot,
    Plan,
    Requirement,
    criteria_ref,
    entity_id,
)

__all__ = ["ReferenceIndex", "percentage"]


def percentage(covered: int, total: int) -> int:
    """Return ``covered / total`` as a whole percentage, rounding halves up.

    Returns 0 when ``total`` is 0.
    """
    if total <= 0:
        return 0
    return math.floor(covered / total * 100 + 0.5)


@dataclass(frozen=True, slots=True)
class ReferenceIndex:
    """Lookup tables for the references between entities in a snapshot.

    Attributes:
        criteria: Fully qualified criterion references that exist.
        targeted_criteria: Criterion references named by some plan's
            ``criteria_id``.
        plan_dependents: Plan IDs listed in another plan's ``depends_on``.
        tested_components: Component IDs referenced by any plan test case.
        component_dependents: Component IDs listed in another component's
            ``depends_on``.
    """

    criteria: frozenset[str]
    targeted_criteria: frozenset[str]
    plan_dependents: frozenset[str]
    tested_components: frozenset[str]
    component_dependents: frozenset[str]

    @classmethod
    def build(cls, snapshot: EntitySnapshot) -> ReferenceIndex:
        """Index every cross-reference in a snapshot."""
        criteria = {
            criteria_ref(requirement, criterion.id)
            for requirement in snapshot.requirements
            for criterion in requirement.criteria
        }

        targeted: set[str] = set()
        plan_dependents: set[str] = set()
        tested: set[str] = set()
        for plan in snapshot.plans:
            plan_id = entity_id(plan)
            if plan.criteria_id:
                targeted.add(plan.criteria_id)
            plan_dependents.update(dep for dep in plan.depends_on if dep != plan_id)
            for test_case in plan.test_cases:
                tested.update(test_case.components)

        component_dependents: set[str] = set()
        for component in snapshot.components:
            component_id = entity_id(component)
            component_dependents.update(
                dep for dep in component.depends_on if dep != component_id
            )

        return cls(
            criteria=frozenset(criteria),
            targeted_criteria=frozenset(targeted),
            plan_dependents=frozenset(plan_dependents),
            tested_components=frozenset(tested),
            component_dependents=frozenset(component_dependents),
        )

    def requirement_satisfied(self, requirement: Requirement) -> bool:
        """A requirement is satisfied when a plan targets one of its criteria."""
        return any(
            criteria_ref(requirement, criterion.id) in self.targeted_criteria
            for criterion in requirement.criteria
        )

    def plan_justified(self, plan: Plan) -> bool:
        """A plan is justified by a resolvable criterion or a dependent plan."""
        if plan.criteria_id and plan.criteria_id in self.criteria:
            return True
        return entity_id(plan) in self.plan_dependents

    def component_justified(self, component: Component) -> bool:
        """A component is justified by a test case or a dependent component."""
        component_id = entity_id(component)
        return (
            component_id in self.tested_components
            or component_id in self.component_dependents
        )
