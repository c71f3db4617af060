from collections.abc import Callable

import orjson

from specgraph.analysis import (
    CoverageAnalyzer,
    CycleDetector,
    DependencyAnalyzer,
    DependencyResolver,
    GraphBuilder,
    OrphanDetector,
)
from specgraph.cli import OutputFormat
from specgraph.cli._commands._analyze._formatters import (
    render,
    render_coverage,
    render_cycles,
    render_dependencies,
    render_order,
    render_orphans,
    render_validation,
)
from specgraph.entities import Component, EntitySnapshot, Plan
from specgraph.validation import ValidationEngine


class TestRender:
    def test_structured_formats_ignore_table_builder(self) -> None:
        def fail() -> str:
            raise AssertionError

        result = render({"score": 1}, OutputFormat.JSON, fail)

        assert orjson.loads(result) == {"score": 1}

    def test_table_format_uses_builder(self) -> None:
        assert render({}, OutputFormat.TABLE, lambda: "markdown") == "markdown"

    def test_plain_format(self) -> None:
        assert render({"a": {"b": 2}}, OutputFormat.PLAIN, str) == "a.b=2"


class TestRenderers:
    def test_coverage_lists_categories_and_total(
        self, linked_snapshot: EntitySnapshot
    ) -> None:
        output = render_coverage(CoverageAnalyzer().generate_report(linked_snapshot))

        assert "Requirements" in output
        assert "Total" in output
        assert "100%" in output
        assert "Recommendations:\n- Coverage looks good!" in output

    def test_cycles_none(self) -> None:
        analysis = CycleDetector().detect_all_cycles(
            GraphBuilder().build(EntitySnapshot())
        )

        assert render_cycles(analysis) == "No circular dependencies found."

    def test_cycles_table(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(number=1, slug="a", depends_on=("pln-002-b",)),
                make_plan(number=2, slug="b", depends_on=("pln-001-a",)),
            ]
        )
        analysis = CycleDetector().detect_all_cycles(GraphBuilder().build(snapshot))

        output = render_cycles(analysis)

        assert "->" in output
        assert "1 cycle(s), longest 3, 2 affected node(s)." in output

    def test_orphans_show_kind(
        self,
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(components=[make_component()])

        output = render_orphans(OrphanDetector().detect_orphans(snapshot))

        assert "component" in output
        assert "svc-001-auth-service" in output

    def test_orphans_none(self) -> None:
        output = render_orphans(OrphanDetector().detect_orphans(EntitySnapshot()))

        assert output == "No orphaned specs found."

    def test_dependencies(self, linked_snapshot: EntitySnapshot) -> None:
        output = render_dependencies(DependencyAnalyzer().analyze(linked_snapshot))

        assert "Health score" in output
        assert "- Well-structured dependency graph" in output

    def test_order(self, linked_snapshot: EntitySnapshot) -> None:
        output = render_order(DependencyResolver().resolve(linked_snapshot))

        assert "pln-002-session-refresh" in output
        first, second = "pln-002-session-refresh", "pln-001-login-form"
        assert output.index(first) < output.index(second)
        assert "Order:\n- pln-002-session-refresh" in output

    def test_order_without_plans(self) -> None:
        output = render_order(DependencyResolver().resolve(EntitySnapshot()))

        assert output == "No plans to schedule."

    def test_validation_passed(self, linked_snapshot: EntitySnapshot) -> None:
        output = render_validation(ValidationEngine().validate(linked_snapshot))

        assert output == "Validation passed: no issues found."

    def test_validation_summary(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(plans=[make_plan(depends_on=("pln-009-gone",))])

        output = render_validation(ValidationEngine().validate(snapshot))

        assert "Validation failed: 1 error(s), 2 warning(s)." in output
