# pyright: reportExplicitAny=false
"""Validation result models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Severity(StrEnum):
    """How serious a validation finding is."""

    ERROR = "error"
    WARNING = "warning"


class IssueCategory(StrEnum):
    """Which group of checks produced a finding."""

    REFERENCE = "reference"
    FORMAT = "format"
    BUSINESS_RULE = "business-rule"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single validation finding.

    Attributes:
        entity_id: Canonical ID of the entity the finding is about.
        message: Human-readable description.
        severity: Error or warning.
        category: The check group that produced it.
    """

    entity_id: str
    message: str
    severity: Severity
    category: IssueCategory


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """All findings for a snapshot, in check order."""

    issues: tuple[ValidationIssue, ...] = ()

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(i.message for i in self.issues if i.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(
            i.message for i in self.issues if i.severity is Severity.WARNING
        )

    @property
    def valid(self) -> bool:
        """True when there are no errors; warnings do not invalidate."""
        return not any(i.severity is Severity.ERROR for i in self.issues)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "issues": [
                {
                    "entityId": issue.entity_id,
                    "message": issue.message,
                    "severity": issue.severity.value,
                    "category": issue.category.value,
                }
                for issue in self.issues
            ],
        }
