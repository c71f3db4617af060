"""Cross-entity graph analysis.

Builds a dependency graph over a snapshot of requirements, plans, and
components, and computes cycles, orphans, coverage, depth, and a dependency
health score. Every analyzer is stateless: each call is a pure function of
the snapshot it receives.
"""

from ._coverage import CoverageAnalyzer
from ._cycles import CycleDetector
from ._dependency import DependencyAnalyzer, compute_depths, score_health
from ._graph import GraphBuilder
from ._links import ReferenceIndex, percentage
from ._models import (
    CategoryCoverage,
    CoverageReport,
    CycleAnalysis,
    CycleSummary,
    DependencyAnalysisResult,
    DependencyEdge,
    DependencyGraph,
    DependencyHealth,
    DepthAnalysis,
    EdgeKind,
    ExecutionPlan,
    OrphanAnalysis,
    OrphanSummary,
)
from ._orphans import OrphanDetector
from ._resolver import DependencyResolver
from ._results import AnalysisMetadata, AnalysisResult, log_result, safe_analyze

__all__ = [
    "AnalysisMetadata",
    "AnalysisResult",
    "CategoryCoverage",
    "CoverageAnalyzer",
    "CoverageReport",
    "CycleAnalysis",
    "CycleDetector",
    "CycleSummary",
    "DependencyAnalysisResult",
    "DependencyAnalyzer",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyHealth",
    "DependencyResolver",
    "DepthAnalysis",
    "EdgeKind",
    "ExecutionPlan",
    "GraphBuilder",
    "OrphanAnalysis",
    "OrphanDetector",
    "OrphanSummary",
    "ReferenceIndex",
    "compute_depths",
    "log_result",
    "percentage",
    "safe_analyze",
    "score_health",
]
