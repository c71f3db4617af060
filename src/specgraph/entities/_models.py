"""Data models for specification entities.

This module defines the enums and dataclasses for requirements, plans, and
components, plus the snapshot that groups them for analysis. All models are
frozen dataclasses with slots; collections are tuples so a snapshot can be
shared between concurrent analyses without copying.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

# =============================================================================
# Enums
# =============================================================================


class EntityKind(StrEnum):
    """Top-level entity categories."""

    REQUIREMENT = "requirement"
    PLAN = "plan"
    COMPONENT = "component"


class ComponentType(StrEnum):
    """Component variants."""

    APP = "app"
    SERVICE = "service"
    LIBRARY = "library"
    TOOL = "tool"


class Priority(StrEnum):
    """Priority values shared by requirements and plans."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NICE_TO_HAVE = "nice-to-have"


class CriterionStatus(StrEnum):
    """Lifecycle status of an acceptance criterion."""

    NEEDS_REVIEW = "needs-review"
    ACTIVE = "active"
    ARCHIVED = "archived"


# =============================================================================
# Requirement Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class Criterion:
    """A single acceptance criterion scoped to its parent requirement.

    Attributes:
        id: Short identifier (e.g., "crit-001"), unique within the requirement.
        description: What must be true for the criterion to hold.
        status: Lifecycle status of the criterion.
    """

    id: str
    description: str
    status: CriterionStatus = CriterionStatus.NEEDS_REVIEW


@dataclass(frozen=True, slots=True)
class Requirement:
    """A requirement with ordered acceptance criteria."""

    number: int
    slug: str
    name: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    criteria: tuple[Criterion, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Plan Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class Task:
    """A unit of work inside a plan.

    Attributes:
        id: Short identifier (e.g., "task-001").
        description: What the task accomplishes.
        depends_on: IDs of tasks in the same plan that must finish first.
        completed: Whether the task is done.
    """

    id: str
    description: str
    depends_on: tuple[str, ...] = ()
    completed: bool = False


@dataclass(frozen=True, slots=True)
class TestCase:
    """A test case belonging to a plan.

    Attributes:
        id: Short identifier (e.g., "tc-001").
        name: Test case name.
        description: What the test case verifies.
        steps: Ordered steps to execute.
        expected_result: Expected outcome.
        implemented: Whether the test exists in code.
        passing: Whether the test currently passes.
        components: IDs of components exercised by this test case.
    """

    __test__ = False  # not a pytest class

    id: str
    name: str
    description: str = ""
    steps: tuple[str, ...] = ()
    expected_result: str = ""
    implemented: bool = False
    passing: bool = False
    components: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Plan:
    """An implementation plan.

    Attributes:
        number: Positive plan number, unique among plans.
        slug: URL-safe slug.
        name: Human-readable name.
        description: Plan description.
        criteria_id: Fully qualified criterion reference
            ("req-XXX-slug/crit-XXX") this plan fulfils, if any.
        priority: Plan priority.
        acceptance_criteria: Free-form acceptance criteria text.
        depends_on: IDs of plans that must complete before this one.
        tasks: Ordered tasks.
        test_cases: Test cases verifying the plan.
        completed: Whether the plan is complete.
        approved: Whether the plan is approved.
    """

    number: int
    slug: str
    name: str
    description: str = ""
    criteria_id: str | None = None
    priority: Priority = Priority.MEDIUM
    acceptance_criteria: str = ""
    depends_on: tuple[str, ...] = ()
    tasks: tuple[Task, ...] = ()
    test_cases: tuple[TestCase, ...] = ()
    completed: bool = False
    approved: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# Component Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class BaseComponent:
    """Fields shared by every component variant.

    Attributes:
        number: Positive component number, unique per variant.
        slug: URL-safe slug.
        name: Human-readable name.
        description: Component description.
        folder: Source folder of the component, relative to the project.
        depends_on: IDs of other components this one relies on.
        external_dependencies: Third-party services or libraries used.
        capabilities: What the component provides.
        constraints: Technical constraints it must honour.
        tech_stack: Technologies it is built with.
    """

    number: int
    slug: str
    name: str
    description: str = ""
    folder: str = "."
    depends_on: tuple[str, ...] = ()
    external_dependencies: tuple[str, ...] = ()
    capabilities: tuple[str, ...] = ()
    constraints: tuple[str, ...] = ()
    tech_stack: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class AppComponent(BaseComponent):
    """A user-facing application."""


@dataclass(frozen=True, slots=True)
class ServiceComponent(BaseComponent):
    """A long-running service."""


@dataclass(frozen=True, slots=True)
class LibraryComponent(BaseComponent):
    """A reusable library."""


@dataclass(frozen=True, slots=True)
class ToolComponent(BaseComponent):
    """A developer or operations tool."""


Component = AppComponent | ServiceComponent | LibraryComponent | ToolComponent
Entity = Requirement | Plan | Component

COMPONENT_CLASSES: dict[ComponentType, type[BaseComponent]] = {
    ComponentType.APP: AppComponent,
    ComponentType.SERVICE: ServiceComponent,
    ComponentType.LIBRARY: LibraryComponent,
    ComponentType.TOOL: ToolComponent,
}


# =============================================================================
# Snapshot
# =============================================================================


@dataclass(frozen=True, slots=True)
class EntitySnapshot:
    """Immutable collection of entities handed to the analysis engine.

    A snapshot is built fresh for each analysis call; analyzers never write
    back to it.

    Attributes:
        requirements: All requirements.
        plans: All plans.
        components: All components, of any variant.
    """

    requirements: tuple[Requirement, ...] = ()
    plans: tuple[Plan, ...] = ()
    components: tuple[Component, ...] = ()

    @property
    def total(self) -> int:
        """Number of entities across all kinds."""
        return len(self.requirements) + len(self.plans) + len(self.components)

    @property
    def is_empty(self) -> bool:
        return self.total == 0
