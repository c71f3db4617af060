# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownMemberType=false, reportUnknownVariableType=false
"""Validation of raw configuration tables against the section models.

Lenient validation ignores unknown keys like the section models themselves.
Strict validation (``specgraph config schema --strict`` and
``validate_config(strict=True)``) runs against copies of the models that
forbid extras.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from specgraph.config._models._analysis import AnalysisThresholds
from specgraph.config._models._logging import LoggingConfig
from specgraph.config._models._storage import StorageConfig
from specgraph.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

    from specgraph.config._models._common import ConfigSource

SECTIONS: dict[str, type[BaseModel]] = {
    "analysis": AnalysisThresholds,
    "logging": LoggingConfig,
    "storage": StorageConfig,
}


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single problem found in a configuration table.

    Attributes:
        key: Dotted key, e.g. ``"analysis.max_depth"``.
        message: Pydantic's description of the problem.
        expected: The violated bound or expected type, when pydantic says.
        actual: The offending value.
        source: Name of the source the value came from, if known.
        severity: Always ``"error"`` for schema violations.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None
    severity: Literal["error", "warning"]


# =============================================================================
# Schemas
# =============================================================================


def _forbid_extras(model: type[BaseModel]) -> type[BaseModel]:
    return type(model)(
        f"{model.__name__}Strict",
        (model,),
        {
            "__module__": __name__,
            "model_config": ConfigDict(frozen=True, extra="forbid"),
        },
    )


@cache
def _root_schema(*, strict: bool) -> type[BaseModel]:
    fields: dict[str, Any] = {}
    for name, model in SECTIONS.items():
        section = _forbid_extras(model) if strict else model
        fields[name] = (section, section())
    return create_model(
        "SpecgraphConfigStrict" if strict else "SpecgraphConfig",
        __config__=ConfigDict(extra="forbid" if strict else "ignore"),
        **fields,
    )


# =============================================================================
# Validation
# =============================================================================


def _describe_expected(error: ErrorDetails) -> str | None:
    ctx = error.get("ctx") or {}
    if "expected" in ctx:
        return str(ctx["expected"])
    bounds = [f"{bound} {ctx[bound]}" for bound in ("ge", "le") if bound in ctx]
    return " and ".join(bounds) or None


def _issues(error: ValidationError, source: str | None) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            key=".".join(str(part) for part in err.get("loc", ())),
            message=str(err.get("msg", "Validation error")),
            expected=_describe_expected(err),
            actual=err.get("input"),
            source=source,
            severity="error",
        )
        for err in error.errors()
    ]


def validate_config(
    config: dict[str, Any], *, strict: bool = False
) -> list[ValidationIssue]:
    """Validate a merged configuration table.

    Args:
        config: Merged configuration values.
        strict: Report unknown keys as errors.

    Returns:
        The issues found; empty when the table is valid.
    """
    try:
        _ = _root_schema(strict=strict).model_validate(config)
    except ValidationError as e:
        return _issues(e, source=None)
    return []


def validate_source(source: ConfigSource) -> list[ValidationIssue]:
    """Validate one source's own values, tagging issues with its name."""
    if not source.exists or not source.values:
        return []
    try:
        _ = _root_schema(strict=False).model_validate(source.values)
    except ValidationError as e:
        return _issues(e, source=source.name.value)
    return []


def raise_if_validation_errors(
    issues: list[ValidationIssue], source: str | None = None
) -> None:
    """Raise for the first error-severity issue, if any.

    Raises:
        ConfigValidationError: Carrying the issue's key, value, and
            expectation. ``source`` overrides the issue's own source.
    """
    first = next((issue for issue in issues if issue.severity == "error"), None)
    if first is None:
        return
    msg = f"Invalid configuration value for '{first.key}'"
    raise ConfigValidationError(
        msg,
        key=first.key,
        value=first.actual,
        expected=first.expected or first.message,
        source=source or first.source,
    )


def get_config_schema(*, strict: bool = False) -> dict[str, Any]:
    """JSON Schema for ``specgraph.toml`` files."""
    return _root_schema(strict=strict).model_json_schema()
