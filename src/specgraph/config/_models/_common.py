"""Enums and the source record shared by the configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class LogLevel(StrEnum):
    """Minimum level written to the CLI log file, most verbose first."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration sources, listed from highest to lowest precedence."""

    CLI = "cli"
    ENV = "env"
    LOCAL = "local"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """One place configuration values were (or could have been) read from.

    Attributes:
        name: Which kind of source this is.
        path: The TOML file, or None for the CLI, environment, and defaults.
        exists: Whether the file exists or the source has values.
        values: The values the source contributed, once loaded.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any] = field(  # pyright: ignore[reportExplicitAny]
        default_factory=dict
    )
