# pyright: reportExplicitAny=false
"""Exit codes, serializers, and error reporting shared by the commands."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

if TYPE_CHECKING:
    from rich.console import Console

# Report payloads are built from to_dict() and contain only plain values
FormattableData = dict[str, Any]

type PlainValue = (
    None | bool | int | float | str | list[PlainValue] | dict[str, PlainValue]
)

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_with_error",
    "format_json",
    "format_plain",
    "format_table",
    "format_toml",
    "format_yaml",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Process exit status of a specgraph command.

    Attributes:
        SUCCESS: The command ran and found nothing blocking.
        LOAD_ERROR: A spec file or the configuration could not be parsed.
        VALIDATION_ERROR: Cycles or validation errors were found.
        NOT_FOUND: The specs directory or a config section does not exist.
        IO_ERROR: The specs directory could not be read.
        INTERNAL_ERROR: An analysis failed unexpectedly.
    """

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


# =============================================================================
# Serializers
# =============================================================================


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    import orjson  # noqa: PLC0415

    return orjson.dumps(data, option=orjson.OPT_INDENT_2 if indent else 0).decode()


def format_yaml(data: FormattableData) -> str:
    """Dump as block-style YAML in insertion order."""
    import yaml  # noqa: PLC0415

    return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)


def format_toml(data: FormattableData) -> str:
    import tomli_w  # noqa: PLC0415

    return tomli_w.dumps(data)


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Render rows as a Markdown table with pytablewriter."""
    from pytablewriter import MarkdownTableWriter  # noqa: PLC0415

    return MarkdownTableWriter(headers=headers, value_matrix=rows, margin=1).dumps()


def _plain_scalar(value: PlainValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, list):
        return ",".join(_plain_scalar(item) for item in value)
    return str(value)


def format_plain(value: PlainValue, prefix: str = "") -> str:
    """Render ``key=value`` lines, one per leaf.

    Nested tables become dotted keys (``analysis.max_depth=10``). Lists are
    joined with commas. A scalar on its own renders without a key.
    """
    if not isinstance(value, dict):
        return _plain_scalar(value)
    lines: list[str] = []
    for key, item in value.items():
        dotted = f"{prefix}.{key}" if prefix else key
        if isinstance(item, dict):
            if nested := format_plain(item, dotted):
                lines.append(nested)
        else:
            lines.append(f"{dotted}={_plain_scalar(item)}")
    return "\n".join(lines)


# =============================================================================
# Errors
# =============================================================================


def get_error_console(*, no_color: bool = False) -> Console:
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True, no_color=no_color)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print ``Error: <message>`` and exit with ``code``.

    Without an explicit console the message goes to stderr, uncolored when
    the active CLI context was started with ``--no-color``.

    Raises:
        SystemExit: Always.
    """
    if console is None:
        from specgraph.cli._context import CLIContext  # noqa: PLC0415

        console = get_error_console(no_color=CLIContext.get_current().no_color)
    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)
