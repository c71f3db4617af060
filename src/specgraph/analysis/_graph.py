"""Dependency graph construction from an entity snapshot."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Final

import rustworkx as rx

from specgraph.analysis._models import DependencyEdge, DependencyGraph, EdgeKind
from specgraph.entities import entity_id
from specgraph.utils import create_null_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from specgraph.entities import EntitySnapshot

__all__ = ["GraphBuilder"]


class _GraphAccumulator:
    """Mutable scratch state for a single build call."""

    __slots__: Final = (
        "digraph",
        "edges",
        "indices",
        "known",
        "successors",
        "unresolved",
    )

    def __init__(self, known: set[str]) -> None:
        self.digraph: rx.PyDiGraph[str, EdgeKind] = rx.PyDiGraph(check_cycle=False)
        self.indices: dict[str, int] = {}
        self.edges: dict[tuple[str, str], DependencyEdge] = {}
        self.successors: dict[str, list[str]] = {}
        self.unresolved: dict[str, None] = {}
        self.known = known

    def add_node(self, node: str) -> int:
        if node not in self.indices:
            self.indices[node] = self.digraph.add_node(node)
            self.successors[node] = []
            if node not in self.known:
                self.unresolved[node] = None
        return self.indices[node]

    def add_edge(self, source: str, target: str, kind: EdgeKind) -> None:
        if (source, target) in self.edges:
            return
        source_idx = self.add_node(source)
        target_idx = self.add_node(target)
        _ = self.digraph.add_edge(source_idx, target_idx, kind)
        self.edges[(source, target)] = DependencyEdge(source, target, kind)
        self.successors[source].append(target)

    def freeze(self) -> DependencyGraph:
        return DependencyGraph(
            nodes=tuple(self.indices),
            edges=tuple(self.edges.values()),
            unresolved=tuple(self.unresolved),
            digraph=self.digraph,
            indices=MappingProxyType(dict(self.indices)),
            successor_map=MappingProxyType(
                {node: tuple(targets) for node, targets in self.successors.items()}
            ),
        )


class GraphBuilder:
    """Builds the directed dependency graph over plans and components.

    Edges come from three kinds of reference:

    - ``dep -> plan`` for each ID in a plan's ``depends_on``
    - ``dep -> component`` for each ID in a component's ``depends_on``
    - ``component -> plan`` for each component a plan's test case references

    Requirements are not graph nodes; they relate to plans through criteria,
    which is a satisfaction relation rather than a dependency. Referenced IDs
    that name no entity still become nodes and are reported as unresolved.
    Repeated references produce a single edge.
    """

    __slots__: Final = ("_logger",)

    _logger: FilteringBoundLogger

    def __init__(self, logger: FilteringBoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else create_null_logger()

    def build(self, snapshot: EntitySnapshot) -> DependencyGraph:
        """Build the dependency graph for a snapshot.

        Args:
            snapshot: The entities to analyze. Not modified.

        Returns:
            A DependencyGraph whose nodes are canonical entity IDs.
        """
        known = {entity_id(plan) for plan in snapshot.plans}
        known.update(entity_id(component) for component in snapshot.components)
        acc = _GraphAccumulator(known)

        for plan in snapshot.plans:
            plan_id = entity_id(plan)
            _ = acc.add_node(plan_id)
            for dep in plan.depends_on:
                acc.add_edge(dep, plan_id, EdgeKind.PLAN_DEPENDENCY)

        for component in snapshot.components:
            component_id = entity_id(component)
            _ = acc.add_node(component_id)
            for dep in component.depends_on:
                acc.add_edge(dep, component_id, EdgeKind.COMPONENT_DEPENDENCY)

        for plan in snapshot.plans:
            plan_id = entity_id(plan)
            for test_case in plan.test_cases:
                for component_ref in test_case.components:
                    acc.add_edge(component_ref, plan_id, EdgeKind.TEST_COVERAGE)

        graph = acc.freeze()
        self._logger.debug(
            "graph_built",
            nodes=graph.node_count,
            edges=graph.edge_count,
            unresolved=len(graph.unresolved),
        )
        return graph
