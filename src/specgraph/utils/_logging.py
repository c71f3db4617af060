"""structlog loggers for the CLI and the analysis services.

Loggers are built with ``structlog.wrap_logger`` so nothing here touches
the global structlog configuration. Services take a logger argument and
fall back to :func:`create_null_logger`, so importing specgraph as a
library never writes anywhere.
"""

import logging
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_cli_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger, Processor

LogFormatType = Literal["json", "text"]

DEBUG_ENV = "SPECGRAPH_DEBUG"
LOG_LEVEL_ENV = "SPECGRAPH_LOG_LEVEL"


def _resolve_level(level: str | None) -> int:
    """Map a level name to its number.

    ``SPECGRAPH_DEBUG`` forces debug. Without an explicit name,
    ``SPECGRAPH_LOG_LEVEL`` is consulted. Unknown names mean info.
    """
    if getenv(DEBUG_ENV):
        return logging.DEBUG
    name = level if level is not None else getenv(LOG_LEVEL_ENV, "info")
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _processors(log_format: LogFormatType) -> list["Processor"]:
    chain: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        chain.append(structlog.processors.dict_tracebacks)
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=False))
    return chain


def _create_logger(
    log_file_path: str,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Build a logger appending to ``log_file_path``.

    The parent directory is created if needed. ``log_level`` defaults to
    the level taken from the environment.
    """
    path = Path(log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    level = log_level if log_level is not None else _resolve_level(None)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(path.open("a")),
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
        ),
    )


def create_null_logger() -> "FilteringBoundLogger":  # noqa: UP037
    """A logger that drops every event."""
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[],
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
    project_root: Path | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Build the logger for one CLI invocation.

    Args:
        level: Configured ``logging.level``. ``SPECGRAPH_DEBUG`` overrides it.
        log_format: Configured ``logging.format``.
        log_file: Configured ``logging.file``; empty selects
            ``<project>/.specgraph/logs/cli.log``.
        command: Command name bound to every entry, e.g. ``"analyze health"``.
        project_root: Root used for the default log file.
    """
    logger = _create_logger(
        log_file or str(get_cli_log_file(project_root)),
        log_level=_resolve_level(level),
        log_format=log_format,
    )
    return logger.bind(command=command) if command else logger
