# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""Per-invocation state shared between the meta app and the commands.

The meta default builds one :class:`CLIContext` from the global options and
activates it for the duration of the command. Commands read it back with
:meth:`CLIContext.get_current`.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from specgraph.utils import create_null_logger, get_project_root

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.typing import FilteringBoundLogger

    from specgraph.config import Config


class OutputFormat(StrEnum):
    """Values accepted by ``--format``."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"
    PLAIN = "plain"


_active: contextvars.ContextVar[CLIContext | None] = contextvars.ContextVar(
    "specgraph_cli_context", default=None
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and the services built from them.

    Attributes:
        config: Merged configuration, or defaults if loading failed.
        verbose: ``--verbose`` was given; the log level is debug.
        quiet: ``--quiet`` was given; only errors are logged.
        no_color: ``--no-color`` was given.
        project_root: ``--project-root``, when given.
        config_error: Why configuration fell back to defaults, if it did.
        logger: File logger for this invocation.
    """

    config: Config = field(repr=False)
    verbose: bool = False
    quiet: bool = False
    no_color: bool = False
    project_root: Path | None = None
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    @property
    def resolved_root(self) -> Path:
        """``--project-root``, else the nearest ``.specgraph/`` ancestor or cwd."""
        return self.project_root or get_project_root()

    @property
    def log(self) -> FilteringBoundLogger:
        return self.logger if self.logger is not None else create_null_logger()

    @classmethod
    def get_current(cls) -> CLIContext:
        """The active context, or one with default configuration."""
        if (ctx := _active.get()) is not None:
            return ctx

        from specgraph.config import Config  # noqa: PLC0415

        return cls(config=Config.from_dict({}))

    @contextmanager
    def activate(self) -> Iterator[CLIContext]:
        """Make this the current context until the block exits."""
        token = _active.set(self)
        try:
            yield self
        finally:
            _active.reset(token)

    @classmethod
    def reset(cls) -> None:
        """Drop any active context; used between tests."""
        _ = _active.set(None)
