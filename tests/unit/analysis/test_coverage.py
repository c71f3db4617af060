from collections.abc import Callable

import pytest

from specgraph.analysis import (
    CoverageAnalyzer,
    CycleDetector,
    GraphBuilder,
    OrphanDetector,
    percentage,
)
from specgraph.config import AnalysisThresholds
from specgraph.entities import (
    Component,
    Criterion,
    EntitySnapshot,
    Plan,
    Requirement,
    TestCase,
)


class TestPercentage:
    @pytest.mark.parametrize(
        ("covered", "total", "expected"),
        [(0, 0, 0), (0, 5, 0), (5, 5, 100), (2, 3, 67), (1, 3, 33), (1, 8, 13)],
    )
    def test_rounds_half_up(self, covered: int, total: int, expected: int) -> None:
        assert percentage(covered, total) == expected


class TestCoverageScenarios:
    def test_milestone_plan_covered_through_dependent(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        # pln-001 targets a real criterion and depends on pln-002, which has
        # no criterion of its own
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[
                make_plan(
                    number=1,
                    slug="login-form",
                    criteria_id="req-001-user-auth/crit-001",
                    depends_on=("pln-002-milestone",),
                ),
                make_plan(number=2, slug="milestone"),
            ],
        )

        report = CoverageAnalyzer().generate_report(snapshot)
        orphans = OrphanDetector().detect_orphans(snapshot)

        assert report.by_category["plans"].covered == 2
        assert report.orphaned_specs == ()
        assert report.coverage_percentage == 100
        assert orphans.orphans == ()

    def test_dependent_plan_without_criterion_is_orphaned(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[
                make_plan(
                    number=1, slug="base", criteria_id="req-001-user-auth/crit-001"
                ),
                make_plan(number=2, slug="follow-up", depends_on=("pln-001-base",)),
            ],
        )

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.orphaned_specs == ("pln-002-follow-up",)

    def test_three_plan_cycle_is_reported_once(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(number=1, slug="a", depends_on=("pln-003-c",)),
                make_plan(number=2, slug="b", depends_on=("pln-001-a",)),
                make_plan(number=3, slug="c", depends_on=("pln-002-b",)),
            ]
        )

        analysis = CycleDetector().detect_all_cycles(GraphBuilder().build(snapshot))

        assert analysis.has_cycles
        assert analysis.cycles == (
            ("pln-001-a", "pln-002-b", "pln-003-c", "pln-001-a"),
        )
        assert analysis.summary.max_cycle_length == 4

    def test_unreferenced_requirement_is_uncovered(
        self,
        make_requirement: Callable[..., Requirement],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(requirements=[make_requirement()])

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.uncovered_specs == ("req-001-user-auth",)
        assert report.coverage_percentage == 0

    def test_unreferenced_component_is_orphaned_in_both_analyses(
        self,
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(components=[make_component()])

        report = CoverageAnalyzer().generate_report(snapshot)
        orphans = OrphanDetector().detect_orphans(snapshot)

        assert report.orphaned_specs == ("svc-001-auth-service",)
        assert orphans.orphans == ("svc-001-auth-service",)
        assert orphans.summary.by_type["components"] == 1

    def test_empty_snapshot(self) -> None:
        snapshot = EntitySnapshot()

        report = CoverageAnalyzer().generate_report(snapshot)
        cycles = CycleDetector().detect_all_cycles(GraphBuilder().build(snapshot))
        orphans = OrphanDetector().detect_orphans(snapshot)

        assert report.total_specs == 0
        assert report.coverage_percentage == 0
        assert not cycles.has_cycles
        assert orphans.orphans == ()


class TestCoverageRules:
    def test_criterion_must_resolve_for_plan_coverage(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[make_plan(criteria_id="req-001-user-auth/crit-001")]
        )

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.orphaned_specs == ("pln-001-login-form",)

    def test_any_criterion_satisfies_requirement(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        requirement = make_requirement(
            criteria=(
                Criterion(id="crit-001", description="a"),
                Criterion(id="crit-002", description="b"),
            )
        )
        snapshot = make_snapshot(
            requirements=[requirement],
            plans=[make_plan(criteria_id="req-001-user-auth/crit-002")],
        )

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.uncovered_specs == ()
        assert report.by_category["requirements"].percentage == 100

    def test_component_covered_by_test_case_or_dependency(
        self,
        make_plan: Callable[..., Plan],
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(
                    test_cases=(
                        TestCase(id="tc-001", name="t", components=("svc-001-api",)),
                    )
                )
            ],
            components=[
                make_component(number=1, slug="api"),
                make_component(number=2, slug="db"),
                make_component(number=3, slug="worker", depends_on=("svc-002-db",)),
            ],
        )

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.by_category["components"].covered == 2
        assert "svc-003-worker" in report.orphaned_specs

    def test_self_dependency_does_not_justify(
        self,
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            components=[make_component(depends_on=("svc-001-auth-service",))]
        )

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.orphaned_specs == ("svc-001-auth-service",)


class TestRecommendations:
    def test_low_coverage_recommendations(
        self,
        make_requirement: Callable[..., Requirement],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(requirements=[make_requirement()])

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.recommendations == (
            "Coverage is below 70%. Consider adding more comprehensive test coverage.",
            "1 specifications lack proper coverage.",
            "Requirements coverage is low. "
            "Ensure all requirements have associated plans.",
        )

    def test_orphan_and_component_recommendations(
        self,
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(components=[make_component()])

        report = CoverageAnalyzer().generate_report(snapshot)

        assert "1 orphaned specifications need attention." in report.recommendations
        assert (
            "Component coverage could be improved. "
            "Verify all components are properly tested."
        ) in report.recommendations

    def test_affirmative_message_when_nothing_triggers(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[make_plan(criteria_id="req-001-user-auth/crit-001")],
        )

        report = CoverageAnalyzer().generate_report(snapshot)

        assert report.recommendations == (
            "Coverage looks good! Consider maintaining or improving current levels.",
        )

    def test_thresholds_are_configurable(
        self,
        make_requirement: Callable[..., Requirement],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        thresholds = AnalysisThresholds(coverage_warning=0, requirements_warning=0)
        snapshot = make_snapshot(requirements=[make_requirement()])

        report = CoverageAnalyzer(thresholds).generate_report(snapshot)

        assert report.recommendations == ("1 specifications lack proper coverage.",)

    def test_to_dict_shape(self) -> None:
        data = CoverageAnalyzer().generate_report(EntitySnapshot()).to_dict()

        assert data["totalSpecs"] == 0
        assert data["byCategory"]["plans"] == {
            "total": 0,
            "covered": 0,
            "percentage": 0,
        }
        assert set(data) == {
            "totalSpecs",
            "coveredSpecs",
            "coveragePercentage",
            "uncoveredSpecs",
            "orphanedSpecs",
            "byCategory",
            "recommendations",
        }
