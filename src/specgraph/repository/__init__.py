"""Entity repositories that produce analysis snapshots."""

from ._memory import InMemoryRepository
from ._parse import parse_component, parse_plan, parse_requirement
from ._protocol import EntityRepository
from ._yaml import (
    COMPONENTS_DIR,
    PLANS_DIR,
    REQUIREMENTS_DIR,
    YamlRepository,
    parse_entity_file,
)

__all__ = [
    "COMPONENTS_DIR",
    "PLANS_DIR",
    "REQUIREMENTS_DIR",
    "EntityRepository",
    "InMemoryRepository",
    "YamlRepository",
    "parse_component",
    "parse_entity_file",
    "parse_plan",
    "parse_requirement",
]
