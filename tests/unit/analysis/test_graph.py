import dataclasses
from collections.abc import Callable

from specgraph.analysis import EdgeKind, GraphBuilder
from specgraph.entities import (
    Component,
    ComponentType,
    EntitySnapshot,
    Plan,
    Requirement,
    TestCase,
)


class TestGraphBuilder:
    def test_empty_snapshot(self) -> None:
        graph = GraphBuilder().build(EntitySnapshot())

        assert graph.nodes == ()
        assert graph.edges == ()
        assert graph.unresolved == ()

    def test_plan_dependency_points_at_dependent(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(number=1, slug="base"),
                make_plan(number=2, slug="next", depends_on=("pln-001-base",)),
            ]
        )

        graph = GraphBuilder().build(snapshot)

        assert graph.has_edge("pln-001-base", "pln-002-next")
        assert not graph.has_edge("pln-002-next", "pln-001-base")
        assert graph.edges[0].kind is EdgeKind.PLAN_DEPENDENCY

    def test_component_dependency(
        self,
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            components=[
                make_component(ComponentType.LIBRARY, number=1, slug="core"),
                make_component(
                    ComponentType.APP,
                    number=1,
                    slug="web",
                    depends_on=("lib-001-core",),
                ),
            ]
        )

        graph = GraphBuilder().build(snapshot)

        assert graph.has_edge("lib-001-core", "app-001-web")
        assert graph.edges[0].kind is EdgeKind.COMPONENT_DEPENDENCY

    def test_test_case_edge_points_from_component_to_plan(
        self,
        make_plan: Callable[..., Plan],
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(
                    test_cases=(
                        TestCase(
                            id="tc-001",
                            name="t",
                            components=("svc-001-auth-service",),
                        ),
                    )
                )
            ],
            components=[make_component()],
        )

        graph = GraphBuilder().build(snapshot)

        assert graph.has_edge("svc-001-auth-service", "pln-001-login-form")
        assert graph.edges[0].kind is EdgeKind.TEST_COVERAGE

    def test_requirements_are_not_nodes(
        self,
        make_requirement: Callable[..., Requirement],
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            requirements=[make_requirement()],
            plans=[make_plan(criteria_id="req-001-user-auth/crit-001")],
        )

        graph = GraphBuilder().build(snapshot)

        assert graph.nodes == ("pln-001-login-form",)
        assert graph.edges == ()

    def test_unknown_reference_becomes_unresolved_node(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(plans=[make_plan(depends_on=("pln-009-missing",))])

        graph = GraphBuilder().build(snapshot)

        assert "pln-009-missing" in graph.nodes
        assert graph.unresolved == ("pln-009-missing",)

    def test_repeated_references_produce_one_edge(
        self,
        make_plan: Callable[..., Plan],
        make_component: Callable[..., Component],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        test_case = TestCase(
            id="tc-001", name="t", components=("svc-001-auth-service",)
        )
        snapshot = make_snapshot(
            plans=[
                make_plan(
                    test_cases=(test_case, dataclasses.replace(test_case, id="tc-002"))
                )
            ],
            components=[make_component()],
        )

        graph = GraphBuilder().build(snapshot)

        assert graph.edge_count == 1
        assert graph.digraph.num_edges() == 1

    def test_roots_have_no_incoming_edges(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(number=1, slug="a"),
                make_plan(number=2, slug="b", depends_on=("pln-001-a",)),
            ]
        )

        graph = GraphBuilder().build(snapshot)

        assert graph.roots() == ("pln-001-a",)
        assert graph.successors("pln-001-a") == ("pln-002-b",)
        assert graph.successors("pln-002-b") == ()

    def test_to_dict_shape(
        self,
        make_plan: Callable[..., Plan],
        make_snapshot: Callable[..., EntitySnapshot],
    ) -> None:
        snapshot = make_snapshot(
            plans=[
                make_plan(number=1, slug="a"),
                make_plan(number=2, slug="b", depends_on=("pln-001-a",)),
            ]
        )

        data = GraphBuilder().build(snapshot).to_dict()

        assert data == {
            "nodes": ["pln-001-a", "pln-002-b"],
            "edges": [
                {"from": "pln-001-a", "to": "pln-002-b", "kind": "plan-dependency"}
            ],
            "unresolved": [],
            "metadata": {"nodeCount": 2, "edgeCount": 1},
        }

