"""Dependency analysis: graph, cycles, depth, and a health sub-score."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from specgraph.analysis._cycles import CycleDetector
from specgraph.analysis._graph import GraphBuilder
from specgraph.analysis._models import (
    CycleAnalysis,
    DependencyAnalysisResult,
    DependencyGraph,
    DependencyHealth,
    DepthAnalysis,
)
from specgraph.config import AnalysisThresholds
from specgraph.utils import create_null_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.typing import FilteringBoundLogger

    from specgraph.entities import EntitySnapshot

__all__ = ["DependencyAnalyzer", "compute_depths", "score_health"]

# A flat, acyclic graph up to this depth earns the affirmative note
_SHALLOW_DEPTH: Final = 5


@dataclass(slots=True)
class _DepthFrame:
    node: str
    neighbours: Iterator[str]
    deepest_child: int = 0


def compute_depths(graph: DependencyGraph) -> DepthAnalysis:
    """Compute the longest dependency chain below every node.

    A node without successors has depth 1; any other node has depth one more
    than its deepest successor. Traversal starts from the roots and memoizes
    finished nodes. A successor that is still in progress (a back edge on a
    cycle) contributes 0, which keeps cyclic graphs finite. Nodes that no
    root reaches are traversed afterwards in node order.

    Args:
        graph: The dependency graph.

    Returns:
        DepthAnalysis with per-node depths and the critical path.
    """
    depths: dict[str, int] = {}
    in_progress: set[str] = set()

    for start in (*graph.roots(), *graph.nodes):
        if start in depths:
            continue
        in_progress.add(start)
        stack = [_DepthFrame(start, iter(graph.successors(start)))]

        while stack:
            frame = stack[-1]
            descended = False
            for neighbour in frame.neighbours:
                if neighbour in depths:
                    frame.deepest_child = max(frame.deepest_child, depths[neighbour])
                elif neighbour not in in_progress:
                    in_progress.add(neighbour)
                    stack.append(
                        _DepthFrame(neighbour, iter(graph.successors(neighbour)))
                    )
                    descended = True
                    break
            if descended:
                continue

            _ = stack.pop()
            in_progress.discard(frame.node)
            depths[frame.node] = frame.deepest_child + 1
            if stack:
                parent = stack[-1]
                parent.deepest_child = max(parent.deepest_child, depths[frame.node])

    ordered = {node: depths[node] for node in graph.nodes}
    max_depth = max(ordered.values(), default=0)
    average = sum(ordered.values()) / len(ordered) if ordered else 0.0
    return DepthAnalysis(
        max_depth=max_depth,
        average_depth=average,
        depths=MappingProxyType(ordered),
        critical_path=tuple(
            node for node, depth in ordered.items() if depth == max_depth
        ),
    )


def score_health(
    graph: DependencyGraph,
    cycles: CycleAnalysis,
    depth: DepthAnalysis,
    thresholds: AnalysisThresholds,
) -> DependencyHealth:
    """Score a dependency graph from 100 down, one penalty per problem class.

    Args:
        graph: The dependency graph.
        cycles: Cycles found in the graph.
        depth: Depth analysis of the graph.
        thresholds: Penalty sizes and limits.

    Returns:
        DependencyHealth with a score in 0..100 and matching issues and
        recommendations.
    """
    score = 100
    issues: list[str] = []
    recommendations: list[str] = []

    total_cycles = cycles.summary.total_cycles
    if total_cycles:
        score -= min(
            thresholds.max_cycle_penalty, thresholds.cycle_penalty * total_cycles
        )
        issues.append(f"{total_cycles} circular dependencies detected")
        recommendations.append(
            "Resolve circular dependencies to improve maintainability"
        )

    missing = set(graph.unresolved)
    unresolved = sum(1 for edge in graph.edges if edge.source in missing)
    if unresolved:
        score -= min(
            thresholds.max_unresolved_penalty,
            thresholds.unresolved_penalty * unresolved,
        )
        issues.append(f"{unresolved} unresolved dependency references")
        recommendations.append(
            "Create or remove references to missing specifications"
        )

    if depth.max_depth > thresholds.max_depth:
        score -= min(
            thresholds.max_depth_penalty, (depth.max_depth - thresholds.max_depth) * 2
        )
        issues.append(
            f"Maximum dependency depth is {depth.max_depth} "
            f"(recommended: ≤{thresholds.max_depth})"
        )
        recommendations.append("Consider flattening deep dependency chains")

    if graph.node_count > thresholds.max_nodes:
        score -= min(
            thresholds.max_nodes_penalty,
            (graph.node_count - thresholds.max_nodes) // 20,
        )
        issues.append(
            f"High complexity: {graph.node_count} nodes in dependency graph"
        )
        recommendations.append("Consider breaking down large specifications")

    if not total_cycles and not unresolved and depth.max_depth <= _SHALLOW_DEPTH:
        recommendations.append("Well-structured dependency graph")

    return DependencyHealth(
        score=max(0, score),
        issues=tuple(issues),
        recommendations=tuple(recommendations),
    )


class DependencyAnalyzer:
    """Composes graph building, cycle detection, and depth analysis.

    The resulting health score is the only summary the analyzer exposes
    upward; the full graph, cycles, and depths ride along for reporting.
    """

    __slots__: Final = ("_builder", "_detector", "_logger", "_thresholds")

    _builder: GraphBuilder
    _detector: CycleDetector
    _thresholds: AnalysisThresholds
    _logger: FilteringBoundLogger

    def __init__(
        self,
        thresholds: AnalysisThresholds | None = None,
        *,
        builder: GraphBuilder | None = None,
        detector: CycleDetector | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the analyzer.

        Args:
            thresholds: Health scoring thresholds. Defaults to built-in values.
            builder: Graph builder to use; one is created if omitted.
            detector: Cycle detector to use; one is created if omitted.
            logger: Optional logger for diagnostics.
        """
        self._logger = logger if logger is not None else create_null_logger()
        self._thresholds = (
            thresholds if thresholds is not None else AnalysisThresholds()
        )
        self._builder = builder if builder is not None else GraphBuilder(self._logger)
        self._detector = (
            detector if detector is not None else CycleDetector(self._logger)
        )

    def analyze(self, snapshot: EntitySnapshot) -> DependencyAnalysisResult:
        """Analyze the dependency structure of a snapshot.

        Args:
            snapshot: The entities to analyze.

        Returns:
            DependencyAnalysisResult with graph, cycles, depth, and health.
        """
        graph = self._builder.build(snapshot)
        cycles = self._detector.detect_all_cycles(graph)
        depth = compute_depths(graph)
        health = score_health(graph, cycles, depth, self._thresholds)
        self._logger.debug(
            "dependencies_analyzed",
            score=health.score,
            max_depth=depth.max_depth,
            cycles=cycles.summary.total_cycles,
        )
        return DependencyAnalysisResult(
            graph=graph, cycles=cycles, depth=depth, health=health
        )
