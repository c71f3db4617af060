# pyright: reportUnusedFunction=false
# ruff: noqa: D415, A002, TC003  # Path needed at runtime for cyclopts parameter parsing
"""Analyze commands."""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any

import anyio
from cyclopts import Parameter

from specgraph.analysis import (
    AnalysisResult,
    CoverageAnalyzer,
    CycleDetector,
    DependencyAnalyzer,
    DependencyResolver,
    GraphBuilder,
    OrphanDetector,
    safe_analyze,
)
from specgraph.cli._context import CLIContext, OutputFormat
from specgraph.cli._shared import ExitCode, exit_with_error
from specgraph.entities import EntitySnapshot
from specgraph.exceptions import (
    AnalysisError,
    CircularDependencyError,
    EntityParseError,
    RepositoryError,
)
from specgraph.health import HealthService
from specgraph.repository import YamlRepository
from specgraph.validation import ValidationEngine

from ._app import app
from ._formatters import (
    render,
    render_coverage,
    render_cycles,
    render_dependencies,
    render_health,
    render_order,
    render_orphans,
    render_report,
    render_validation,
)

SpecsDirOption = Annotated[
    Path | None,
    Parameter(
        name=["--specs-dir", "-d"],
        help="Specs directory (default: storage.specs_dir under the project root)",
    ),
]
FormatOption = Annotated[
    OutputFormat,
    Parameter(
        name=["--format", "-f"],
        help="Output format (table, json, yaml, toml, plain)",
    ),
]

# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------


def _open_repository(ctx: CLIContext, specs_dir: Path | None) -> YamlRepository:
    """Resolve the specs directory and open a repository on it."""
    if specs_dir is None:
        specs_dir = Path(ctx.config.storage.specs_dir)
    if not specs_dir.is_absolute():
        specs_dir = ctx.resolved_root / specs_dir
    if not specs_dir.is_dir():
        exit_with_error(f"Specs directory not found: {specs_dir}", ExitCode.NOT_FOUND)
    return YamlRepository(specs_dir, ctx.log)


def _run_async[T](ctx: CLIContext, func: Callable[[], Awaitable[T]]) -> T:
    """Run an async entry point, mapping load failures to exit codes."""
    try:
        return anyio.run(func)
    except EntityParseError as e:
        ctx.log.error("entity_parse_failed", path=str(e.path), error=str(e))
        exit_with_error(str(e), ExitCode.LOAD_ERROR)
    except RepositoryError as e:
        ctx.log.error("repository_failed", path=str(e.path), error=str(e))
        exit_with_error(str(e), ExitCode.IO_ERROR)
    except AnalysisError as e:
        ctx.log.error("analysis_failed", error=str(e))
        exit_with_error(str(e), ExitCode.INTERNAL_ERROR)


def _load(specs_dir: Path | None) -> tuple[CLIContext, EntitySnapshot]:
    ctx = CLIContext.get_current()
    repository = _open_repository(ctx, specs_dir)
    return ctx, _run_async(ctx, repository.load_snapshot)


def _unwrap[T](ctx: CLIContext, result: AnalysisResult[T]) -> T:
    if not result.success or result.data is None:
        exit_with_error("; ".join(result.errors), ExitCode.INTERNAL_ERROR)
    return result.data


def _analyze[T](
    ctx: CLIContext,
    source: str,
    func: Callable[[EntitySnapshot], T],
    snapshot: EntitySnapshot,
) -> T:
    return _unwrap(ctx, safe_analyze(source, func, snapshot, logger=ctx.log))


def _emit(
    data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    output_format: OutputFormat,
    table: Callable[[], str],
) -> None:
    print(render(data, output_format, table).rstrip())  # noqa: T201


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------


@app.command(name="health")
def _health(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show the overall health score

    Combines coverage, dependency health, and validation into one score
    with issues and recommendations.

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx = CLIContext.get_current()
    service = HealthService(
        _open_repository(ctx, specs_dir), ctx.config.analysis, ctx.log
    )
    report = _run_async(ctx, service.check_health)
    _emit(report.to_dict(), format, lambda: render_health(report))
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="coverage")
def _coverage(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show spec coverage

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx, snapshot = _load(specs_dir)
    analyzer = CoverageAnalyzer(ctx.config.analysis, ctx.log)
    report = _analyze(ctx, "coverage", analyzer.generate_report, snapshot)
    _emit(report.to_dict(), format, lambda: render_coverage(report))
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="cycles")
def _cycles(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Detect circular dependencies

    Exits with VALIDATION_ERROR (2) when any cycle is found.

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx, snapshot = _load(specs_dir)
    builder = GraphBuilder(ctx.log)
    detector = CycleDetector(ctx.log)
    analysis = _analyze(
        ctx,
        "cycles",
        lambda snap: detector.detect_all_cycles(builder.build(snap)),
        snapshot,
    )
    _emit(analysis.to_dict(), format, lambda: render_cycles(analysis))
    raise SystemExit(
        ExitCode.VALIDATION_ERROR if analysis.has_cycles else ExitCode.SUCCESS
    )


@app.command(name="orphans")
def _orphans(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """List specs that nothing links to

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx, snapshot = _load(specs_dir)
    detector = OrphanDetector(ctx.log)
    analysis = _analyze(ctx, "orphans", detector.detect_orphans, snapshot)
    _emit(analysis.to_dict(), format, lambda: render_orphans(analysis))
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="deps")
def _deps(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Analyze the dependency graph

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx, snapshot = _load(specs_dir)
    analyzer = DependencyAnalyzer(ctx.config.analysis, logger=ctx.log)
    result = _analyze(ctx, "dependencies", analyzer.analyze, snapshot)
    _emit(result.to_dict(), format, lambda: render_dependencies(result))
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="order")
def _order(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Show the execution order of plans

    Exits with VALIDATION_ERROR (2) when the graph has a cycle.

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx, snapshot = _load(specs_dir)
    try:
        plan = DependencyResolver(GraphBuilder(ctx.log)).resolve(snapshot)
    except CircularDependencyError as e:
        ctx.log.warning("order_blocked_by_cycle", cycle=list(e.cycle))
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)
    _emit(plan.to_dict(), format, lambda: render_order(plan))
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="validate")
def _validate(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Validate references, ID formats, and business rules

    Exits with VALIDATION_ERROR (2) when any error is found. Warnings do not
    affect the exit code.

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx, snapshot = _load(specs_dir)
    engine = ValidationEngine(ctx.log)
    report = _analyze(ctx, "validation", engine.validate, snapshot)
    _emit(report.to_dict(), format, lambda: render_validation(report))
    raise SystemExit(ExitCode.SUCCESS if report.valid else ExitCode.VALIDATION_ERROR)


@app.command(name="report")
def _report(
    *,
    specs_dir: SpecsDirOption = None,
    format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Generate the full combined report

    Args:
        specs_dir: Specs directory to analyze.
        format: Output format.
    """
    ctx = CLIContext.get_current()
    service = HealthService(
        _open_repository(ctx, specs_dir), ctx.config.analysis, ctx.log
    )
    report = _run_async(ctx, service.generate_report)
    _emit(report.to_dict(), format, lambda: render_report(report))
    raise SystemExit(ExitCode.SUCCESS)
