"""Shared test fixtures for specgraph tests."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml
from rich.console import Console

from specgraph.entities import (
    COMPONENT_CLASSES,
    Component,
    ComponentType,
    Criterion,
    EntitySnapshot,
    Plan,
    Requirement,
    TestCase,
)


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


# ---------------------------------------------------------------------------
# Entity factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_requirement() -> Callable[..., Requirement]:
    """Return a factory creating Requirements with one criterion by default."""

    def _make(**overrides: Any) -> Requirement:
        defaults: dict[str, Any] = {
            "number": 1,
            "slug": "user-auth",
            "name": "User authentication",
            "description": "Users can sign in",
            "criteria": (Criterion(id="crit-001", description="Login works"),),
        }
        defaults.update(overrides)
        return Requirement(**defaults)

    return _make


@pytest.fixture
def make_plan() -> Callable[..., Plan]:
    """Return a factory creating Plans with no links by default."""

    def _make(**overrides: Any) -> Plan:
        defaults: dict[str, Any] = {
            "number": 1,
            "slug": "login-form",
            "name": "Login form",
        }
        defaults.update(overrides)
        return Plan(**defaults)

    return _make


@pytest.fixture
def make_component() -> Callable[..., Component]:
    """Return a factory creating components; ``kind`` selects the variant."""

    def _make(
        kind: ComponentType = ComponentType.SERVICE, **overrides: Any
    ) -> Component:
        defaults: dict[str, Any] = {
            "number": 1,
            "slug": "auth-service",
            "name": "Auth service",
            "description": "Issues and verifies session tokens",
        }
        defaults.update(overrides)
        return COMPONENT_CLASSES[kind](**defaults)  # pyright: ignore[reportReturnType]

    return _make


@pytest.fixture
def make_snapshot() -> Callable[..., EntitySnapshot]:
    """Return a factory creating snapshots from any iterables of entities."""

    def _make(
        requirements: tuple[Requirement, ...] | list[Requirement] = (),
        plans: tuple[Plan, ...] | list[Plan] = (),
        components: tuple[Component, ...] | list[Component] = (),
    ) -> EntitySnapshot:
        return EntitySnapshot(
            requirements=tuple(requirements),
            plans=tuple(plans),
            components=tuple(components),
        )

    return _make


# ---------------------------------------------------------------------------
# On-disk spec corpora
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SpecProject:
    """Paths for a specgraph-enabled test project."""

    root: Path
    specgraph_dir: Path
    specs_dir: Path

    def write(self, folder: str, name: str, data: dict[str, Any]) -> Path:
        """Write one entity mapping as YAML under ``specs/<folder>/``."""
        directory = self.specs_dir / folder
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        _ = path.write_text(yaml.safe_dump(data, sort_keys=False))
        return path


@pytest.fixture
def spec_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> SpecProject:
    """Create a project with an empty specs directory.

    Structure:
        tmp_path/
            project/
                .specgraph/
                specs/
    """
    root = tmp_path / "project"
    specgraph_dir = root / ".specgraph"
    specgraph_dir.mkdir(parents=True)
    specs_dir = root / "specs"
    specs_dir.mkdir()

    user_config = tmp_path / "user_config" / "config.toml"
    monkeypatch.setattr(
        "specgraph.config._discovery.get_user_config_path",
        lambda: user_config,
    )
    monkeypatch.chdir(root)

    return SpecProject(root=root, specgraph_dir=specgraph_dir, specs_dir=specs_dir)


def write_linked_corpus(project: SpecProject) -> None:
    """Write a small, fully linked corpus.

    One requirement, two plans (the first depending on the second, a
    milestone with no criterion), and two components exercised by the first
    plan's test case.
    """
    _ = project.write(
        "requirements",
        "req-001-user-auth.yml",
        {
            "number": 1,
            "slug": "user-auth",
            "name": "User authentication",
            "criteria": [{"id": "crit-001", "description": "Login works"}],
        },
    )
    _ = project.write(
        "plans",
        "pln-001-login-form.yml",
        {
            "number": 1,
            "slug": "login-form",
            "name": "Login form",
            "criteria_id": "req-001-user-auth/crit-001",
            "depends_on": ["pln-002-session-refresh"],
            "acceptance_criteria": "Users can log in",
            "test_cases": [
                {
                    "id": "tc-001",
                    "name": "Login succeeds",
                    "components": ["app-001-web", "svc-001-auth-service"],
                }
            ],
        },
    )
    _ = project.write(
        "plans",
        "pln-002-session-refresh.yaml",
        {
            "number": 2,
            "slug": "session-refresh",
            "name": "Session refresh",
            "acceptance_criteria": "Sessions refresh silently",
            "test_cases": [{"id": "tc-001", "name": "Refresh succeeds"}],
        },
    )
    _ = project.write(
        "components",
        "app-001-web.yml",
        {
            "number": 1,
            "slug": "web",
            "name": "Web",
            "type": "app",
            "description": "Browser front end for end users",
            "depends_on": ["svc-001-auth-service"],
        },
    )
    _ = project.write(
        "components",
        "svc-001-auth-service.yml",
        {
            "number": 1,
            "slug": "auth-service",
            "name": "Auth service",
            "type": "service",
            "description": "Issues and verifies session tokens",
        },
    )


@pytest.fixture
def linked_project(spec_project: SpecProject) -> SpecProject:
    """A spec project pre-populated with the linked corpus."""
    write_linked_corpus(spec_project)
    return spec_project


@pytest.fixture
def linked_snapshot(
    make_requirement: Callable[..., Requirement],
    make_plan: Callable[..., Plan],
    make_component: Callable[..., Component],
    make_snapshot: Callable[..., EntitySnapshot],
) -> EntitySnapshot:
    """The linked corpus as an in-memory snapshot."""
    return make_snapshot(
        requirements=[make_requirement()],
        plans=[
            make_plan(
                criteria_id="req-001-user-auth/crit-001",
                depends_on=("pln-002-session-refresh",),
                acceptance_criteria="Users can log in",
                test_cases=(
                    TestCase(
                        id="tc-001",
                        name="Login succeeds",
                        components=("app-001-web", "svc-001-auth-service"),
                    ),
                ),
            ),
            make_plan(
                number=2,
                slug="session-refresh",
                name="Session refresh",
                acceptance_criteria="Sessions refresh silently",
                test_cases=(TestCase(id="tc-001", name="Refresh succeeds"),),
            ),
        ],
        components=[
            make_component(
                ComponentType.APP,
                slug="web",
                name="Web",
                description="Browser front end for end users",
                depends_on=("svc-001-auth-service",),
            ),
            make_component(),
        ],
    )
