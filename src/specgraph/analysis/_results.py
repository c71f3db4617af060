"""Tagged success/failure results for analysis entry points.

Top-level analyses are wrapped with :func:`safe_analyze` so an orchestrator
running several of them can degrade gracefully when one fails instead of
aborting the whole run.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from specgraph import __version__
from specgraph.exceptions import AnalysisError, SpecGraphError
from specgraph.utils import create_null_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from structlog.typing import FilteringBoundLogger

__all__ = ["AnalysisMetadata", "AnalysisResult", "log_result", "safe_analyze"]

# Exceptions that indicate bad input rather than a programming error
_RECOVERABLE_ERRORS = (SpecGraphError, ValueError, KeyError, TypeError)


@dataclass(frozen=True, slots=True)
class AnalysisMetadata:
    """Provenance of an analysis result.

    Attributes:
        source: Name of the analysis that produced the result.
        execution_time: Wall time in milliseconds.
        version: specgraph version that produced the result.
    """

    source: str
    execution_time: float
    version: str = __version__


@dataclass(frozen=True, slots=True)
class AnalysisResult[T]:
    """Outcome of one analysis call.

    Attributes:
        success: Whether the analysis completed.
        data: The analysis payload on success, otherwise None.
        errors: Failure messages; empty on success.
        warnings: Non-fatal notes.
        metadata: Provenance information.
    """

    success: bool
    metadata: AnalysisMetadata
    data: T | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def ok(
        cls,
        data: T,
        metadata: AnalysisMetadata,
        warnings: tuple[str, ...] = (),
    ) -> AnalysisResult[T]:
        return cls(success=True, data=data, metadata=metadata, warnings=warnings)

    @classmethod
    def failure(
        cls,
        errors: tuple[str, ...],
        metadata: AnalysisMetadata,
    ) -> AnalysisResult[T]:
        return cls(success=False, errors=errors, metadata=metadata)

    def unwrap(self) -> T:
        """Return the payload of a successful result.

        Raises:
            AnalysisError: If the analysis failed.
        """
        if not self.success or self.data is None:
            msg = "; ".join(self.errors) or f"{self.metadata.source} failed"
            raise AnalysisError(msg)
        return self.data

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        to_dict = getattr(self.data, "to_dict", None)
        return {
            "success": self.success,
            "data": to_dict() if callable(to_dict) else self.data,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "metadata": {
                "source": self.metadata.source,
                "executionTime": self.metadata.execution_time,
                "version": self.metadata.version,
            },
        }


def safe_analyze[T, *Ts](
    source: str,
    func: Callable[[*Ts], T],
    /,
    *args: *Ts,
    logger: FilteringBoundLogger | None = None,
) -> AnalysisResult[T]:
    """Run an analysis and capture failures as a result value.

    The outcome is logged through :func:`log_result`: completions at debug,
    failures at warning.

    Args:
        source: Name recorded in the result metadata and logs.
        func: The analysis callable.
        *args: Positional arguments for ``func``.
        logger: Where to log the outcome; a null logger when omitted.

    Returns:
        A successful AnalysisResult wrapping the return value, or a failed
        one carrying the error message. Errors outside the recoverable set
        (specgraph errors, ValueError, KeyError, TypeError) propagate.
    """
    started = time.perf_counter()
    try:
        data = func(*args)
    except _RECOVERABLE_ERRORS as e:
        elapsed = (time.perf_counter() - started) * 1000
        result: AnalysisResult[T] = AnalysisResult.failure(
            (f"{type(e).__name__}: {e}",),
            AnalysisMetadata(source=source, execution_time=elapsed),
        )
    else:
        elapsed = (time.perf_counter() - started) * 1000
        result = AnalysisResult.ok(
            data, AnalysisMetadata(source=source, execution_time=elapsed)
        )
    log_result(result, logger)
    return result


def log_result(
    result: AnalysisResult[Any],  # pyright: ignore[reportExplicitAny]
    logger: FilteringBoundLogger | None = None,
) -> None:
    """Log the outcome of an analysis result."""
    log = logger if logger is not None else create_null_logger()
    if result.success:
        log.debug(
            "analysis_completed",
            source=result.metadata.source,
            duration_ms=round(result.metadata.execution_time, 3),
        )
    else:
        log.warning(
            "analysis_failed",
            source=result.metadata.source,
            errors=list(result.errors),
        )
