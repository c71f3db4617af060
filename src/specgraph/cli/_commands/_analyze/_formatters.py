"""Human-readable renderers for analysis results.

Each renderer returns Markdown: summary tables built with pytablewriter
followed by bullet lists for issues and recommendations.
"""

from collections.abc import Callable, Iterable

from specgraph.analysis import (
    CoverageReport,
    CycleAnalysis,
    DependencyAnalysisResult,
    ExecutionPlan,
    OrphanAnalysis,
)
from specgraph.cli._context import OutputFormat
from specgraph.cli._shared import (
    FormattableData,
    format_json,
    format_plain,
    format_table,
    format_toml,
    format_yaml,
)
from specgraph.entities import parse_entity_id
from specgraph.exceptions import InvalidEntityIdError
from specgraph.health import HealthReport, SpecReport
from specgraph.validation import ValidationReport


def render(
    data: FormattableData,
    output_format: OutputFormat,
    table: Callable[[], str],
) -> str:
    """Render a result in the requested format.

    Args:
        data: The result's ``to_dict()`` payload, used by the structured
            formats.
        output_format: Requested output format.
        table: Builds the Markdown rendering for the table format.
    """
    match output_format:
        case OutputFormat.JSON:
            return format_json(data)
        case OutputFormat.YAML:
            return format_yaml(data)
        case OutputFormat.TOML:
            return format_toml(data)
        case OutputFormat.PLAIN:
            return format_plain(data)
        case _:
            return table()


def _bullets(title: str, items: Iterable[str]) -> str:
    lines = [f"- {item}" for item in items]
    if not lines:
        return ""
    return "\n".join([f"{title}:", *lines])


def _join(*blocks: str) -> str:
    return "\n\n".join(block.rstrip() for block in blocks if block)


def _kind(entity_id: str) -> str:
    try:
        return parse_entity_id(entity_id).kind.value
    except InvalidEntityIdError:
        return "unknown"


def render_health(report: HealthReport) -> str:
    table = format_table(
        ["Dimension", "Score"],
        [
            ["Overall", str(report.score)],
            ["Coverage", str(report.breakdown.coverage)],
            ["Dependencies", str(report.breakdown.dependencies)],
            ["Validation", str(report.breakdown.validation)],
        ],
    )
    return _join(
        table,
        _bullets("Issues", report.issues),
        _bullets("Recommendations", report.recommendations),
    )


def render_coverage(report: CoverageReport) -> str:
    rows = [
        [name.capitalize(), str(c.total), str(c.covered), f"{c.percentage}%"]
        for name, c in report.by_category.items()
    ]
    rows.append(
        [
            "Total",
            str(report.total_specs),
            str(report.covered_specs),
            f"{report.coverage_percentage}%",
        ]
    )
    return _join(
        format_table(["Category", "Total", "Covered", "Coverage"], rows),
        _bullets("Uncovered", report.uncovered_specs),
        _bullets("Orphaned", report.orphaned_specs),
        _bullets("Recommendations", report.recommendations),
    )


def render_cycles(analysis: CycleAnalysis) -> str:
    if not analysis.has_cycles:
        return "No circular dependencies found."
    rows = [
        [str(number), str(len(cycle) - 1), " -> ".join(cycle)]
        for number, cycle in enumerate(analysis.cycles, start=1)
    ]
    summary = analysis.summary
    return _join(
        format_table(["#", "Length", "Cycle"], rows),
        f"{summary.total_cycles} cycle(s), longest {summary.max_cycle_length}, "
        f"{len(summary.affected_nodes)} affected node(s).",
    )


def render_orphans(analysis: OrphanAnalysis) -> str:
    if not analysis.orphans:
        return "No orphaned specs found."
    return format_table(
        ["Type", "ID"], [[_kind(orphan), orphan] for orphan in analysis.orphans]
    )


def render_dependencies(result: DependencyAnalysisResult) -> str:
    graph = result.graph
    depth = result.depth
    table = format_table(
        ["Metric", "Value"],
        [
            ["Nodes", str(graph.node_count)],
            ["Edges", str(graph.edge_count)],
            ["Cycles", str(result.cycles.summary.total_cycles)],
            ["Unresolved", str(len(graph.unresolved))],
            ["Max depth", str(depth.max_depth)],
            ["Average depth", f"{depth.average_depth:.2f}"],
            ["Health score", str(result.health.score)],
        ],
    )
    return _join(
        table,
        _bullets("Critical path", depth.critical_path),
        _bullets("Unresolved references", graph.unresolved),
        _bullets("Issues", result.health.issues),
        _bullets("Recommendations", result.health.recommendations),
    )


def render_order(plan: ExecutionPlan) -> str:
    rows = [
        [str(number), ", ".join(batch)]
        for number, batch in enumerate(plan.batches, start=1)
    ]
    return _join(
        format_table(["Batch", "Plans"], rows) if rows else "No plans to schedule.",
        _bullets("Order", plan.order),
    )


def render_validation(report: ValidationReport) -> str:
    if not report.issues:
        return "Validation passed: no issues found."
    rows = [
        [issue.severity.value, issue.entity_id, issue.message]
        for issue in report.issues
    ]
    status = "passed" if report.valid else "failed"
    return _join(
        format_table(["Severity", "Entity", "Message"], rows),
        f"Validation {status}: {len(report.errors)} error(s), "
        f"{len(report.warnings)} warning(s).",
    )


def render_report(report: SpecReport) -> str:
    return _join(
        f"# Spec report ({report.total_specs} specs)",
        "## Health",
        render_health(report.health),
        "## Coverage",
        render_coverage(report.coverage),
        "## Cycles",
        render_cycles(report.cycles),
        "## Orphans",
        render_orphans(report.orphans),
        "## Validation",
        render_validation(report.validation),
    )
