# pyright: reportAny=false, reportExplicitAny=false
"""Conversion of raw entity mappings into entity dataclasses.

Keys mirror the dataclass field names. Unknown keys are ignored; missing
optional keys take the dataclass defaults.
"""

from datetime import datetime
from typing import Any

from specgraph.entities import (
    COMPONENT_CLASSES,
    Component,
    ComponentType,
    Criterion,
    CriterionStatus,
    Plan,
    Priority,
    Requirement,
    Task,
    TestCase,
)


def _strings(raw: dict[str, Any], key: str) -> tuple[str, ...]:
    value = raw.get(key) or ()
    if isinstance(value, str):
        msg = f"'{key}' must be a list, got a string"
        raise TypeError(msg)
    return tuple(str(item) for item in value)


def _mappings(raw: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = raw.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        msg = f"'{key}' must be a list of mappings"
        raise TypeError(msg)
    return value


def _timestamp(raw: dict[str, Any], key: str) -> datetime | None:
    value = raw.get(key)
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _number(raw: dict[str, Any]) -> int:
    number = raw["number"]
    if isinstance(number, bool) or not isinstance(number, int):
        msg = f"'number' must be an integer, got {number!r}"
        raise TypeError(msg)
    if number < 1:
        msg = f"'number' must be positive, got {number}"
        raise ValueError(msg)
    return number


def parse_requirement(raw: dict[str, Any]) -> Requirement:
    """Build a Requirement from its stored mapping.

    Raises:
        KeyError: If a required key is missing.
        TypeError: If a value has the wrong shape.
        ValueError: If an enum value or timestamp is invalid.
    """
    return Requirement(
        number=_number(raw),
        slug=str(raw["slug"]),
        name=str(raw["name"]),
        description=str(raw.get("description", "")),
        priority=Priority(raw.get("priority", Priority.MEDIUM)),
        criteria=tuple(
            Criterion(
                id=str(item["id"]),
                description=str(item.get("description", "")),
                status=CriterionStatus(
                    item.get("status", CriterionStatus.NEEDS_REVIEW)
                ),
            )
            for item in _mappings(raw, "criteria")
        ),
        created_at=_timestamp(raw, "created_at"),
        updated_at=_timestamp(raw, "updated_at"),
    )


def _parse_test_case(raw: dict[str, Any]) -> TestCase:
    return TestCase(
        id=str(raw["id"]),
        name=str(raw.get("name", "")),
        description=str(raw.get("description", "")),
        steps=_strings(raw, "steps"),
        expected_result=str(raw.get("expected_result", "")),
        implemented=bool(raw.get("implemented", False)),
        passing=bool(raw.get("passing", False)),
        components=_strings(raw, "components"),
    )


def parse_plan(raw: dict[str, Any]) -> Plan:
    """Build a Plan from its stored mapping.

    Raises:
        KeyError: If a required key is missing.
        TypeError: If a value has the wrong shape.
        ValueError: If an enum value or timestamp is invalid.
    """
    criteria_id = raw.get("criteria_id")
    return Plan(
        number=_number(raw),
        slug=str(raw["slug"]),
        name=str(raw["name"]),
        description=str(raw.get("description", "")),
        criteria_id=str(criteria_id) if criteria_id else None,
        priority=Priority(raw.get("priority", Priority.MEDIUM)),
        acceptance_criteria=str(raw.get("acceptance_criteria", "")),
        depends_on=_strings(raw, "depends_on"),
        tasks=tuple(
            Task(
                id=str(item["id"]),
                description=str(item.get("description", "")),
                depends_on=_strings(item, "depends_on"),
                completed=bool(item.get("completed", False)),
            )
            for item in _mappings(raw, "tasks")
        ),
        test_cases=tuple(
            _parse_test_case(item) for item in _mappings(raw, "test_cases")
        ),
        completed=bool(raw.get("completed", False)),
        approved=bool(raw.get("approved", False)),
        created_at=_timestamp(raw, "created_at"),
        updated_at=_timestamp(raw, "updated_at"),
    )


def parse_component(raw: dict[str, Any]) -> Component:
    """Build a component of the variant named by its ``type`` key.

    Raises:
        KeyError: If a required key is missing.
        TypeError: If a value has the wrong shape.
        ValueError: If the type, or a timestamp, is invalid.
    """
    component_class = COMPONENT_CLASSES[ComponentType(raw["type"])]
    component = component_class(
        number=_number(raw),
        slug=str(raw["slug"]),
        name=str(raw["name"]),
        description=str(raw.get("description", "")),
        folder=str(raw.get("folder", ".")),
        depends_on=_strings(raw, "depends_on"),
        external_dependencies=_strings(raw, "external_dependencies"),
        capabilities=_strings(raw, "capabilities"),
        constraints=_strings(raw, "constraints"),
        tech_stack=_strings(raw, "tech_stack"),
        created_at=_timestamp(raw, "created_at"),
        updated_at=_timestamp(raw, "updated_at"),
    )
    return component  # pyright: ignore[reportReturnType]
