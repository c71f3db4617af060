"""Specification entities, canonical IDs, and slugs."""

from ._ids import (
    COMPONENT_CODES,
    COMPONENT_ID_PATTERN,
    CRITERIA_ID_PATTERN,
    CRITERION_ID_PATTERN,
    PLAN_CODE,
    PLAN_ID_PATTERN,
    REQUIREMENT_CODE,
    REQUIREMENT_ID_PATTERN,
    TASK_ID_PATTERN,
    TEST_CASE_ID_PATTERN,
    ParsedId,
    criteria_ref,
    entity_code,
    entity_id,
    format_entity_id,
    is_valid_entity_id,
    next_number,
    parse_criteria_id,
    parse_entity_id,
)
from ._models import (
    COMPONENT_CLASSES,
    AppComponent,
    BaseComponent,
    Component,
    ComponentType,
    Criterion,
    CriterionStatus,
    Entity,
    EntityKind,
    EntitySnapshot,
    LibraryComponent,
    Plan,
    Priority,
    Requirement,
    ServiceComponent,
    Task,
    TestCase,
    ToolComponent,
)
from ._slug import SlugGenerator

__all__ = [
    "COMPONENT_CLASSES",
    "COMPONENT_CODES",
    "COMPONENT_ID_PATTERN",
    "CRITERIA_ID_PATTERN",
    "CRITERION_ID_PATTERN",
    "PLAN_CODE",
    "PLAN_ID_PATTERN",
    "REQUIREMENT_CODE",
    "REQUIREMENT_ID_PATTERN",
    "TASK_ID_PATTERN",
    "TEST_CASE_ID_PATTERN",
    "AppComponent",
    "BaseComponent",
    "Component",
    "ComponentType",
    "Criterion",
    "CriterionStatus",
    "Entity",
    "EntityKind",
    "EntitySnapshot",
    "LibraryComponent",
    "ParsedId",
    "Plan",
    "Priority",
    "Requirement",
    "ServiceComponent",
    "SlugGenerator",
    "Task",
    "TestCase",
    "ToolComponent",
    "criteria_ref",
    "entity_code",
    "entity_id",
    "format_entity_id",
    "is_valid_entity_id",
    "next_number",
    "parse_criteria_id",
    "parse_entity_id",
]
