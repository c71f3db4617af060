"""Snapshot validation: references, ID formats, and business rules."""

from ._engine import ValidationEngine
from ._models import IssueCategory, Severity, ValidationIssue, ValidationReport
from ._similarity import levenshtein, similarity, suggest

__all__ = [
    "IssueCategory",
    "Severity",
    "ValidationEngine",
    "ValidationIssue",
    "ValidationReport",
    "levenshtein",
    "similarity",
    "suggest",
]
