import dataclasses
from collections.abc import Callable

import pytest

from specgraph.entities import (
    COMPONENT_CLASSES,
    Component,
    ComponentType,
    CriterionStatus,
    EntitySnapshot,
    Plan,
    Priority,
    Requirement,
)


class TestDefaults:
    def test_requirement_defaults(self) -> None:
        requirement = Requirement(number=1, slug="a", name="A")

        assert requirement.priority is Priority.MEDIUM
        assert requirement.criteria == ()
        assert requirement.created_at is None

    def test_criterion_defaults_to_needs_review(
        self, make_requirement: Callable[..., Requirement]
    ) -> None:
        requirement = make_requirement()

        assert requirement.criteria[0].status is CriterionStatus.NEEDS_REVIEW

    def test_plan_defaults(self, make_plan: Callable[..., Plan]) -> None:
        plan = make_plan()

        assert plan.criteria_id is None
        assert plan.depends_on == ()
        assert not plan.completed

    def test_component_defaults_folder(
        self, make_component: Callable[..., Component]
    ) -> None:
        assert make_component().folder == "."


class TestImmutability:
    def test_entities_are_frozen(self, make_plan: Callable[..., Plan]) -> None:
        plan = make_plan()

        with pytest.raises(dataclasses.FrozenInstanceError):
            plan.name = "changed"  # pyright: ignore[reportAttributeAccessIssue]

    def test_component_classes_cover_every_variant(self) -> None:
        assert set(COMPONENT_CLASSES) == set(ComponentType)


class TestEntitySnapshot:
    def test_empty(self) -> None:
        snapshot = EntitySnapshot()

        assert snapshot.is_empty
        assert snapshot.total == 0

    def test_total_counts_all_kinds(
        self,
        make_snapshot: Callable[..., EntitySnapshot],
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_component: Callable[..., Component],
    ) -> None:
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[make_plan(), make_plan(number=2)],
            components=[make_component()],
        )

        assert snapshot.total == 4
        assert not snapshot.is_empty
