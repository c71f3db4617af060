# pyright: reportUnusedFunction=false
# ruff: noqa: D415, A002
"""Read-only config commands."""

from collections.abc import Callable
from typing import Annotated

from cyclopts import Parameter

from specgraph.cli._context import CLIContext, OutputFormat
from specgraph.cli._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    format_plain,
    format_toml,
    format_yaml,
)
from specgraph.config import get_config_schema

from ._app import app

# TOML doubles as the fallback for --format table
_SERIALIZERS: dict[OutputFormat, Callable[[FormattableData], str]] = {
    OutputFormat.JSON: format_json,
    OutputFormat.YAML: format_yaml,
    OutputFormat.PLAIN: format_plain,
}


@app.command(name="show")
def _show(
    *,
    format: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format (toml, json, yaml)"),
    ] = OutputFormat.TOML,
    section: Annotated[
        str | None,
        Parameter(name=["--section"], help="Show one section (e.g., analysis)"),
    ] = None,
    no_defaults: Annotated[
        bool,
        Parameter(name="--no-defaults", help="Only show values changed from defaults"),
    ] = False,
) -> None:
    """Display the merged configuration

    Args:
        format: Output format.
        section: Limit output to analysis, logging, or storage.
        no_defaults: Only show values that differ from the defaults.
    """
    ctx = CLIContext.get_current()
    data = ctx.config.to_dict(include_defaults=not no_defaults)

    if section is not None:
        if section not in data:
            ctx.log.warning("config_section_missing", section=section)
            exit_with_error(f"Section '{section}' not found", ExitCode.NOT_FOUND)
        data = {section: data[section]}

    serialize = _SERIALIZERS.get(format, format_toml)
    print(serialize(data).rstrip())  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="schema")
def _schema(
    *,
    strict: Annotated[
        bool, Parameter(name="--strict", help="Reject unknown keys in the schema")
    ] = False,
) -> None:
    """Print the JSON Schema for specgraph.toml

    Args:
        strict: Print the variant that forbids unknown keys.
    """
    print(format_json(get_config_schema(strict=strict)))  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)
