# pyright: reportExplicitAny=false
"""Result models for the graph analysis engine.

All results are frozen dataclasses. Each top-level result exposes
``to_dict()`` returning the camelCase shape consumed by reporting layers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

import rustworkx as rx

# =============================================================================
# Graph Models
# =============================================================================


class EdgeKind(StrEnum):
    """Reference kind an edge was synthesized from."""

    PLAN_DEPENDENCY = "plan-dependency"
    COMPONENT_DEPENDENCY = "component-dependency"
    TEST_COVERAGE = "test-coverage"


@dataclass(frozen=True, slots=True)
class DependencyEdge:
    """Directed edge between two entity IDs.

    ``source`` is a prerequisite of ``target``, except for test-coverage
    edges, which point from a component to the plan whose test cases it
    participates in.

    Attributes:
        source: ID of the edge origin.
        target: ID of the edge destination.
        kind: Which reference produced the edge.
    """

    source: str
    target: str
    kind: EdgeKind


def _empty_digraph() -> rx.PyDiGraph[str, EdgeKind]:
    return rx.PyDiGraph(check_cycle=False)


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """Directed dependency graph over entity IDs.

    Attributes:
        nodes: Node IDs in insertion order.
        edges: Distinct edges in insertion order.
        unresolved: Referenced IDs that name no entity in the snapshot.
        digraph: The underlying rustworkx graph; node payloads are IDs.
        indices: Mapping from node ID to rustworkx node index.
        successor_map: Edge targets per node ID, in edge insertion order.
    """

    nodes: tuple[str, ...] = ()
    edges: tuple[DependencyEdge, ...] = ()
    unresolved: tuple[str, ...] = ()
    digraph: rx.PyDiGraph[str, EdgeKind] = field(
        default_factory=_empty_digraph, repr=False, compare=False
    )
    indices: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )
    successor_map: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def successors(self, node: str) -> tuple[str, ...]:
        """Return the targets of edges leaving ``node``, in edge order."""
        return self.successor_map.get(node, ())

    def has_edge(self, source: str, target: str) -> bool:
        if source not in self.indices or target not in self.indices:
            return False
        return self.digraph.has_edge(self.indices[source], self.indices[target])

    def in_degree(self, node: str) -> int:
        return self.digraph.in_degree(self.indices[node])

    def roots(self) -> tuple[str, ...]:
        """Nodes with no incoming edges, in node order."""
        return tuple(node for node in self.nodes if self.in_degree(node) == 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "edges": [
                {"from": edge.source, "to": edge.target, "kind": edge.kind.value}
                for edge in self.edges
            ],
            "unresolved": list(self.unresolved),
            "metadata": {
                "nodeCount": self.node_count,
                "edgeCount": self.edge_count,
            },
        }


# =============================================================================
# Cycle Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class CycleSummary:
    """Aggregate cycle statistics.

    Attributes:
        total_cycles: Number of reported cycles.
        max_cycle_length: Length of the longest cycle, 0 if none.
        affected_nodes: Distinct nodes on any cycle, in first-seen order.
    """

    total_cycles: int = 0
    max_cycle_length: int = 0
    affected_nodes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CycleAnalysis:
    """Every cycle discovered in a dependency graph.

    Each cycle starts and ends with the same node; a self-loop has length 2.
    """

    cycles: tuple[tuple[str, ...], ...] = ()
    summary: CycleSummary = field(default_factory=CycleSummary)

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hasCycles": self.has_cycles,
            "cycles": [list(cycle) for cycle in self.cycles],
            "summary": {
                "totalCycles": self.summary.total_cycles,
                "maxCycleLength": self.summary.max_cycle_length,
                "affectedNodes": list(self.summary.affected_nodes),
            },
        }


# =============================================================================
# Orphan Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class OrphanSummary:
    """Orphan counts.

    Attributes:
        total_orphans: Number of orphaned entities.
        by_type: Counts keyed by "requirements", "plans", and "components".
    """

    total_orphans: int = 0
    by_type: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(
            {"requirements": 0, "plans": 0, "components": 0}
        )
    )


@dataclass(frozen=True, slots=True)
class OrphanAnalysis:
    """Entities with no inbound justification."""

    orphans: tuple[str, ...] = ()
    summary: OrphanSummary = field(default_factory=OrphanSummary)

    def to_dict(self) -> dict[str, Any]:
        return {
            "orphans": list(self.orphans),
            "summary": {
                "totalOrphans": self.summary.total_orphans,
                "byType": dict(self.summary.by_type),
            },
        }


# =============================================================================
# Coverage Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class CategoryCoverage:
    """Coverage of a single entity category.

    Attributes:
        total: Number of entities in the category.
        covered: Number of covered (justified) entities.
        percentage: ``round(covered / total * 100)``, 0 when total is 0.
    """

    total: int
    covered: int
    percentage: int


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Requirement, plan, and component coverage.

    Attributes:
        total_specs: Number of entities considered.
        covered_specs: Number of covered entities.
        coverage_percentage: Overall percentage, 0–100.
        uncovered_specs: Requirements not satisfied by any plan.
        orphaned_specs: Plans and components with no justifying reference.
        by_category: Per-category breakdown keyed by "requirements",
            "plans", and "components".
        recommendations: Human-readable follow-ups.
    """

    total_specs: int
    covered_specs: int
    coverage_percentage: int
    uncovered_specs: tuple[str, ...]
    orphaned_specs: tuple[str, ...]
    by_category: Mapping[str, CategoryCoverage]
    recommendations: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSpecs": self.total_specs,
            "coveredSpecs": self.covered_specs,
            "coveragePercentage": self.coverage_percentage,
            "uncoveredSpecs": list(self.uncovered_specs),
            "orphanedSpecs": list(self.orphaned_specs),
            "byCategory": {
                name: {
                    "total": category.total,
                    "covered": category.covered,
                    "percentage": category.percentage,
                }
                for name, category in self.by_category.items()
            },
            "recommendations": list(self.recommendations),
        }


# =============================================================================
# Dependency Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class DepthAnalysis:
    """Longest dependency chain per node.

    Attributes:
        max_depth: Largest node depth, 0 for an empty graph.
        average_depth: Mean depth over all nodes.
        depths: Depth per node ID.
        critical_path: Nodes whose depth equals ``max_depth``.
    """

    max_depth: int = 0
    average_depth: float = 0.0
    depths: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    critical_path: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DependencyHealth:
    """Penalty-based 0–100 score for the dependency graph."""

    score: int
    issues: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DependencyAnalysisResult:
    """Graph, cycles, depth, and health of a snapshot's dependencies."""

    graph: DependencyGraph
    cycles: CycleAnalysis
    depth: DepthAnalysis
    health: DependencyHealth

    def to_dict(self) -> dict[str, Any]:
        graph = self.graph.to_dict()
        graph["metadata"]["cycleCount"] = self.cycles.summary.total_cycles
        return {
            "graph": graph,
            "cycles": self.cycles.to_dict(),
            "health": {
                "score": self.health.score,
                "issues": list(self.health.issues),
                "recommendations": list(self.health.recommendations),
            },
            "depth": {
                "maxDepth": self.depth.max_depth,
                "averageDepth": self.depth.average_depth,
                "depths": dict(self.depth.depths),
                "criticalPath": list(self.depth.critical_path),
            },
        }


# =============================================================================
# Resolution Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class ExecutionPlan:
    """Topological ordering of a snapshot's dependency graph.

    Attributes:
        order: Every graph node, prerequisites first.
        batches: Plan IDs grouped into levels; plans in one batch have no
            dependencies on each other and only depend on earlier batches.
    """

    order: tuple[str, ...] = ()
    batches: tuple[tuple[str, ...], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "order": list(self.order),
            "batches": [list(batch) for batch in self.batches],
        }
