"""specgraph exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class SpecGraphError(Exception):
    """Base exception for specgraph errors."""


class ConfigError(SpecGraphError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Entity Exceptions
# =============================================================================


class EntityError(SpecGraphError):
    """Base exception for entity operations."""


class InvalidEntityIdError(EntityError, ValueError):
    """Raised when a string is not a well-formed entity identifier."""

    def __init__(self, message: str, *, value: str) -> None:
        """Initialize with error message and the rejected value."""
        super().__init__(message)
        self.value: str = value


class EntityNotFoundError(EntityError, KeyError):
    """Raised when an entity cannot be found in a snapshot."""

    def __init__(self, message: str, *, entity_id: str) -> None:
        """Initialize with error message and the missing entity ID."""
        super().__init__(message)
        self.entity_id: str = entity_id

    def __str__(self) -> str:
        # KeyError wraps its message in quotes
        return str(self.args[0]) if self.args else ""


class EntityParseError(EntityError):
    """Raised when an entity file cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and file context."""
        super().__init__(message)
        self.path: Path | None = path
        self.cause: Exception | None = cause


class RepositoryError(EntityError):
    """Raised when an entity repository cannot produce a snapshot."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and optional storage path."""
        super().__init__(message)
        self.path: Path | None = path


# =============================================================================
# Analysis Exceptions
# =============================================================================


class AnalysisError(SpecGraphError):
    """Base exception for analysis failures."""


class CircularDependencyError(AnalysisError):
    """Raised when an operation requires an acyclic graph but found a cycle."""

    def __init__(self, message: str, *, cycle: tuple[str, ...] = ()) -> None:
        """Initialize with error message and the offending cycle path."""
        super().__init__(message)
        self.cycle: tuple[str, ...] = cycle
