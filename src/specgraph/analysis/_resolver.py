"""Execution ordering over the dependency graph."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Final

import rustworkx as rx

from specgraph.analysis._graph import GraphBuilder
from specgraph.analysis._models import DependencyGraph, ExecutionPlan
from specgraph.entities import entity_id
from specgraph.exceptions import CircularDependencyError

if TYPE_CHECKING:
    from specgraph.entities import EntitySnapshot

__all__ = ["DependencyResolver"]


class DependencyResolver:
    """Orders entities so every prerequisite comes before its dependents."""

    __slots__: Final = ("_builder",)

    _builder: GraphBuilder

    def __init__(self, builder: GraphBuilder | None = None) -> None:
        self._builder = builder if builder is not None else GraphBuilder()

    def resolve(self, snapshot: EntitySnapshot) -> ExecutionPlan:
        """Compute the execution order and plan batches for a snapshot.

        Ties are broken by ID so the result is stable.

        Args:
            snapshot: The entities to order.

        Returns:
            ExecutionPlan with the full topological order and plan batches.

        Raises:
            CircularDependencyError: If the graph contains a cycle.
        """
        graph = self._builder.build(snapshot)
        order = self.topological_order(graph)

        levels: dict[str, int] = {}
        for node in order:
            predecessors = graph.digraph.predecessor_indices(graph.indices[node])
            levels[node] = max(
                (levels[graph.digraph[idx]] + 1 for idx in predecessors), default=0
            )

        plan_ids = {entity_id(plan) for plan in snapshot.plans}
        grouped: defaultdict[int, list[str]] = defaultdict(list)
        for node in order:
            if node in plan_ids:
                grouped[levels[node]].append(node)

        return ExecutionPlan(
            order=order,
            batches=tuple(tuple(sorted(grouped[level])) for level in sorted(grouped)),
        )

    def topological_order(self, graph: DependencyGraph) -> tuple[str, ...]:
        """Return the graph's nodes in dependency order.

        Raises:
            CircularDependencyError: If the graph contains a cycle.
        """
        if not rx.is_directed_acyclic_graph(graph.digraph):
            cycle = _find_cycle(graph)
            msg = f"Circular dependency: {' -> '.join(cycle)}"
            raise CircularDependencyError(msg, cycle=cycle)
        return tuple(rx.lexicographical_topological_sort(graph.digraph, key=str))


def _find_cycle(graph: DependencyGraph) -> tuple[str, ...]:
    cycle_edges = rx.digraph_find_cycle(graph.digraph)
    if not cycle_edges:
        return ()
    # Build path from source nodes, then close with target of last edge
    cycle_ids = [graph.digraph[source_idx] for source_idx, _ in cycle_edges]
    _, last_target = cycle_edges[-1]
    cycle_ids.append(graph.digraph[last_target])
    return tuple(cycle_ids)
