"""Cycle detection over dependency graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from specgraph.analysis._models import CycleAnalysis, CycleSummary
from specgraph.utils import create_null_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from specgraph.analysis._models import DependencyGraph

__all__ = ["CycleDetector"]


class CycleDetector:
    """Finds every cycle reachable by depth-first traversal.

    The traversal keeps a ``visited`` set of fully explored nodes and an
    index map of the nodes on the current path. Meeting a neighbour that is
    on the path closes a cycle: the path slice from that neighbour's
    position to the current node, with the neighbour appended again.

    A node leaves the path once its neighbours are exhausted but stays
    visited. Every discovered path is reported, so cycles sharing sub-paths
    may be reported more than once.
    """

    __slots__: Final = ("_logger",)

    _logger: FilteringBoundLogger

    def __init__(self, logger: FilteringBoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else create_null_logger()

    def detect_all_cycles(self, graph: DependencyGraph) -> CycleAnalysis:
        """Detect all cycles in a graph.

        Args:
            graph: The dependency graph to traverse.

        Returns:
            CycleAnalysis listing each cycle as a closed node sequence.
        """
        visited: set[str] = set()
        path: list[str] = []
        on_path: dict[str, int] = {}
        cycles: list[tuple[str, ...]] = []

        for start in graph.nodes:
            if start in visited:
                continue

            # Explicit stack of (node, neighbour iterator) frames
            visited.add(start)
            on_path[start] = len(path)
            path.append(start)
            stack = [(start, iter(graph.successors(start)))]

            while stack:
                node, neighbours = stack[-1]
                advanced = False
                for neighbour in neighbours:
                    if neighbour in on_path:
                        cycle = (*path[on_path[neighbour] :], neighbour)
                        cycles.append(cycle)
                    elif neighbour not in visited:
                        visited.add(neighbour)
                        on_path[neighbour] = len(path)
                        path.append(neighbour)
                        stack.append((neighbour, iter(graph.successors(neighbour))))
                        advanced = True
                        break
                if not advanced:
                    _ = stack.pop()
                    _ = path.pop()
                    del on_path[node]

        analysis = CycleAnalysis(cycles=tuple(cycles), summary=_summarize(cycles))
        self._logger.debug(
            "cycles_detected",
            total=analysis.summary.total_cycles,
            max_length=analysis.summary.max_cycle_length,
        )
        return analysis


def _summarize(cycles: list[tuple[str, ...]]) -> CycleSummary:
    affected: dict[str, None] = {}
    for cycle in cycles:
        for node in cycle:
            affected[node] = None
    return CycleSummary(
        total_cycles=len(cycles),
        max_cycle_length=max((len(cycle) for cycle in cycles), default=0),
        affected_nodes=tuple(affected),
    )
