from collections.abc import Callable

from specgraph.analysis import OrphanDetector, ReferenceIndex
from specgraph.entities import (
    Component,
    ComponentType,
    EntitySnapshot,
    Plan,
    Requirement,
    TestCase,
)


class TestReferenceIndex:
    def test_collects_every_reference_kind(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[
                make_plan(
                    criteria_id="req-001-user-auth/crit-001",
                    depends_on=("pln-002-other",),
                    test_cases=(
                        TestCase(id="tc-001", name="t", components=("svc-001-api",)),
                    ),
                )
            ],
            components=[make_component(depends_on=("lib-001-core",))],
        )

        index = ReferenceIndex.build(snapshot)

        assert index.criteria == frozenset({"req-001-user-auth/crit-001"})
        assert index.targeted_criteria == frozenset({"req-001-user-auth/crit-001"})
        assert index.plan_dependents == frozenset({"pln-002-other"})
        assert index.tested_components == frozenset({"svc-001-api"})
        assert index.component_dependents == frozenset({"lib-001-core"})

    def test_self_references_are_dropped(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(plans=[make_plan(depends_on=("pln-001-login-form",))])

        assert ReferenceIndex.build(snapshot).plan_dependents == frozenset()


class TestOrphanDetector:
    def test_orders_requirements_plans_components(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[make_plan()],
            components=[make_component(ComponentType.TOOL, slug="lint")],
        )

        analysis = OrphanDetector().detect_orphans(snapshot)

        assert analysis.orphans == (
            "req-001-user-auth",
            "pln-001-login-form",
            "tol-001-lint",
        )
        assert analysis.summary.total_orphans == 3
        assert dict(analysis.summary.by_type) == {
            "requirements": 1,
            "plans": 1,
            "components": 1,
        }

    def test_plan_with_dangling_criterion_is_orphaned(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[make_plan(criteria_id="req-001-user-auth/crit-099")],
        )

        analysis = OrphanDetector().detect_orphans(snapshot)

        assert "pln-001-login-form" in analysis.orphans
        assert "req-001-user-auth" in analysis.orphans

    def test_plan_with_dependent_is_justified(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(number=1, slug="base"),
                make_plan(number=2, slug="next", depends_on=("pln-001-base",)),
            ]
        )

        analysis = OrphanDetector().detect_orphans(snapshot)

        assert analysis.orphans == ("pln-002-next",)

    def test_tested_component_is_justified(
        self,
        make_plan: Callable[..., Plan],
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(
                    number=1,
                    slug="base",
                    test_cases=(
                        TestCase(
                            id="tc-001",
                            name="t",
                            components=("svc-001-auth-service",),
                        ),
                    ),
                ),
                make_plan(number=2, slug="next", depends_on=("pln-001-base",)),
            ],
            components=[make_component()],
        )

        analysis = OrphanDetector().detect_orphans(snapshot)

        assert "svc-001-auth-service" not in analysis.orphans

    def test_accepts_prebuilt_index(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(plans=[make_plan()])
        index = ReferenceIndex.build(snapshot)

        analysis = OrphanDetector().detect_orphans(snapshot, index)

        assert analysis.orphans == ("pln-001-login-form",)

    def test_to_dict_shape(self) -> None:
        data = OrphanDetector().detect_orphans(EntitySnapshot()).to_dict()

        assert data == {
            "orphans": [],
            "summary": {
                "totalOrphans": 0,
                "byType": {"requirements": 0, "plans": 0, "components": 0},
            },
        }
