"""Snapshot-wide validation of references, ID formats, and business rules."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Final

from specgraph.analysis import ReferenceIndex
from specgraph.entities import (
    COMPONENT_ID_PATTERN,
    CRITERIA_ID_PATTERN,
    CRITERION_ID_PATTERN,
    PLAN_ID_PATTERN,
    REQUIREMENT_ID_PATTERN,
    TEST_CASE_ID_PATTERN,
    entity_id,
)
from specgraph.utils import create_null_logger
from specgraph.validation._models import (
    IssueCategory,
    Severity,
    ValidationIssue,
    ValidationReport,
)
from specgraph.validation._similarity import suggest

if TYPE_CHECKING:
    from collections.abc import Iterable
    from re import Pattern

    from structlog.typing import FilteringBoundLogger

    from specgraph.entities import Entity, EntitySnapshot, Plan

__all__ = ["ValidationEngine"]

MIN_COMPONENT_DESCRIPTION: Final = 10


class _Findings:
    """Accumulates issues in the order checks emit them."""

    __slots__: Final = ("issues",)

    issues: list[ValidationIssue]

    def __init__(self) -> None:
        self.issues = []

    def error(self, entity: str, message: str, category: IssueCategory) -> None:
        self.issues.append(
            ValidationIssue(entity, message, Severity.ERROR, category)
        )

    def warning(self, entity: str, message: str) -> None:
        self.issues.append(
            ValidationIssue(
                entity, message, Severity.WARNING, IssueCategory.BUSINESS_RULE
            )
        )


def _with_suggestions(message: str, missing: str, candidates: Iterable[str]) -> str:
    matches = suggest(missing, candidates)
    if not matches:
        return message
    return f"{message}. Did you mean: {', '.join(matches)}?"


class ValidationEngine:
    """Validates a snapshot as a whole.

    Three groups of checks run in order. Reference checks and format checks
    report errors; business rules report warnings, which never make a
    report invalid.
    """

    __slots__: Final = ("_logger",)

    _logger: FilteringBoundLogger

    def __init__(self, logger: FilteringBoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else create_null_logger()

    def validate(self, snapshot: EntitySnapshot) -> ValidationReport:
        """Validate every entity in a snapshot.

        Args:
            snapshot: The entities to validate.

        Returns:
            ValidationReport listing reference and format errors followed by
            business-rule warnings.
        """
        findings = _Findings()
        index = ReferenceIndex.build(snapshot)
        self._check_references(snapshot, index, findings)
        self._check_formats(snapshot, findings)
        self._check_business_rules(snapshot, index, findings)

        report = ValidationReport(issues=tuple(findings.issues))
        self._logger.debug(
            "snapshot_validated",
            errors=len(report.errors),
            warnings=len(report.warnings),
        )
        return report

    # -------------------------------------------------------------------------
    # Reference checks
    # -------------------------------------------------------------------------

    def _check_references(
        self, snapshot: EntitySnapshot, index: ReferenceIndex, findings: _Findings
    ) -> None:
        entities: list[Entity] = [
            *snapshot.requirements,
            *snapshot.plans,
            *snapshot.components,
        ]
        counts = Counter(entity_id(entity) for entity in entities)
        for duplicate in (eid for eid, count in counts.items() if count > 1):
            findings.error(
                duplicate, f"Duplicate ID: {duplicate}", IssueCategory.REFERENCE
            )

        criteria = sorted(index.criteria)
        plan_ids = [entity_id(plan) for plan in snapshot.plans]
        component_ids = [entity_id(component) for component in snapshot.components]
        known_plans = set(plan_ids)
        known_components = set(component_ids)

        for plan in snapshot.plans:
            plan_id = entity_id(plan)
            criteria_id = plan.criteria_id
            if (
                criteria_id
                and CRITERIA_ID_PATTERN.match(criteria_id)
                and criteria_id not in index.criteria
            ):
                findings.error(
                    plan_id,
                    _with_suggestions(
                        f"Plan '{plan_id}' references non-existent criteria "
                        f"'{criteria_id}'",
                        criteria_id,
                        criteria,
                    ),
                    IssueCategory.REFERENCE,
                )

            for dep in plan.depends_on:
                if dep == plan_id:
                    findings.error(
                        plan_id,
                        f"Plan cannot depend on itself: {dep}",
                        IssueCategory.REFERENCE,
                    )
                elif dep not in known_plans:
                    findings.error(
                        plan_id,
                        _with_suggestions(
                            f"Plan '{plan_id}' depends on non-existent plan '{dep}'",
                            dep,
                            plan_ids,
                        ),
                        IssueCategory.REFERENCE,
                    )

            for test_case in plan.test_cases:
                for component_ref in test_case.components:
                    if component_ref not in known_components:
                        findings.error(
                            plan_id,
                            _with_suggestions(
                                f"Test case '{test_case.id}' in plan '{plan_id}' "
                                f"references non-existent component "
                                f"'{component_ref}'",
                                component_ref,
                                component_ids,
                            ),
                            IssueCategory.REFERENCE,
                        )

            self._check_tasks(plan, plan_id, findings)

        for component in snapshot.components:
            component_id = entity_id(component)
            for dep in component.depends_on:
                if dep == component_id:
                    findings.error(
                        component_id,
                        f"Component cannot depend on itself: {dep}",
                        IssueCategory.REFERENCE,
                    )
                elif dep not in known_components:
                    findings.error(
                        component_id,
                        _with_suggestions(
                            f"Component '{component_id}' depends on "
                            f"non-existent component '{dep}'",
                            dep,
                            component_ids,
                        ),
                        IssueCategory.REFERENCE,
                    )

    @staticmethod
    def _check_tasks(plan: Plan, plan_id: str, findings: _Findings) -> None:
        task_ids = [task.id for task in plan.tasks]
        known = set(task_ids)
        for task in plan.tasks:
            for dep in task.depends_on:
                if dep == task.id:
                    findings.error(
                        plan_id,
                        f"Task cannot depend on itself: {plan_id}/{dep}",
                        IssueCategory.REFERENCE,
                    )
                elif dep not in known:
                    findings.error(
                        plan_id,
                        _with_suggestions(
                            f"Task '{task.id}' in plan '{plan_id}' depends on "
                            f"non-existent task '{dep}'",
                            dep,
                            task_ids,
                        ),
                        IssueCategory.REFERENCE,
                    )

    # -------------------------------------------------------------------------
    # Format checks
    # -------------------------------------------------------------------------

    def _check_formats(self, snapshot: EntitySnapshot, findings: _Findings) -> None:
        for requirement in snapshot.requirements:
            requirement_id = entity_id(requirement)
            _check_entity_id(
                requirement_id, REQUIREMENT_ID_PATTERN, "requirement", findings
            )
            for criterion in requirement.criteria:
                _check_short_id(
                    requirement_id,
                    criterion.id,
                    CRITERION_ID_PATTERN,
                    "criterion",
                    findings,
                )

        for plan in snapshot.plans:
            plan_id = entity_id(plan)
            _check_entity_id(plan_id, PLAN_ID_PATTERN, "plan", findings)
            if plan.criteria_id and not CRITERIA_ID_PATTERN.match(plan.criteria_id):
                findings.error(
                    plan_id,
                    f"Invalid criteria reference format: {plan.criteria_id} "
                    "(expected req-XXX-slug/crit-XXX)",
                    IssueCategory.FORMAT,
                )
            for test_case in plan.test_cases:
                _check_short_id(
                    plan_id, test_case.id, TEST_CASE_ID_PATTERN, "test case", findings
                )

        for component in snapshot.components:
            _check_entity_id(
                entity_id(component), COMPONENT_ID_PATTERN, "component", findings
            )

    # -------------------------------------------------------------------------
    # Business rules
    # -------------------------------------------------------------------------

    def _check_business_rules(
        self, snapshot: EntitySnapshot, index: ReferenceIndex, findings: _Findings
    ) -> None:
        for requirement in snapshot.requirements:
            if not index.requirement_satisfied(requirement):
                requirement_id = entity_id(requirement)
                findings.warning(
                    requirement_id,
                    f"Requirement '{requirement_id}' has no plans linked to "
                    "its criteria",
                )

        for plan in snapshot.plans:
            plan_id = entity_id(plan)
            if not plan.acceptance_criteria.strip():
                findings.warning(
                    plan_id, f"Plan '{plan_id}' has no acceptance criteria"
                )
            if not plan.test_cases:
                findings.warning(plan_id, f"Plan '{plan_id}' has no test cases")

        for component in snapshot.components:
            if len(component.description.strip()) < MIN_COMPONENT_DESCRIPTION:
                component_id = entity_id(component)
                findings.warning(
                    component_id,
                    f"Component '{component_id}' description is too short "
                    f"(minimum {MIN_COMPONENT_DESCRIPTION} characters)",
                )


def _check_entity_id(
    value: str, pattern: Pattern[str], label: str, findings: _Findings
) -> None:
    if not pattern.match(value):
        findings.error(
            value, f"Invalid {label} ID format: {value}", IssueCategory.FORMAT
        )


def _check_short_id(
    owner: str,
    value: str,
    pattern: Pattern[str],
    label: str,
    findings: _Findings,
) -> None:
    if not pattern.match(value):
        findings.error(
            owner,
            f"Invalid {label} ID format in '{owner}': {value}",
            IssueCategory.FORMAT,
        )
