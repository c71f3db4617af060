"""ID derivation, parsing, and validation for specification entities.

Canonical IDs have the form ``{code}-{number:03d}-{slug}`` (for example
``req-001-user-auth``). The type code is selected per entity class through
:func:`entity_code`, a single-dispatch function with one registration per
variant, so adding a component variant means registering one more function.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import singledispatch
from typing import Final

from specgraph.entities._models import (
    AppComponent,
    ComponentType,
    Entity,
    EntityKind,
    LibraryComponent,
    Plan,
    Requirement,
    ServiceComponent,
    ToolComponent,
)
from specgraph.exceptions import InvalidEntityIdError

# =============================================================================
# Type Codes
# =============================================================================

REQUIREMENT_CODE: Final = "req"
PLAN_CODE: Final = "pln"

COMPONENT_CODES: Final[dict[ComponentType, str]] = {
    ComponentType.APP: "app",
    ComponentType.SERVICE: "svc",
    ComponentType.LIBRARY: "lib",
    ComponentType.TOOL: "tol",
}

CODE_KINDS: Final[dict[str, EntityKind]] = {
    REQUIREMENT_CODE: EntityKind.REQUIREMENT,
    PLAN_CODE: EntityKind.PLAN,
    **dict.fromkeys(COMPONENT_CODES.values(), EntityKind.COMPONENT),
}

# =============================================================================
# Patterns
# =============================================================================

_SLUG = r"[a-z0-9]+(?:-[a-z0-9]+)*"
_NUMBER = r"\d{3,}"

ENTITY_ID_PATTERN: Final = re.compile(
    rf"^(?P<code>req|pln|app|svc|lib|tol)-(?P<number>{_NUMBER})-(?P<slug>{_SLUG})$"
)
REQUIREMENT_ID_PATTERN: Final = re.compile(rf"^req-{_NUMBER}-{_SLUG}$")
PLAN_ID_PATTERN: Final = re.compile(rf"^pln-{_NUMBER}-{_SLUG}$")
COMPONENT_ID_PATTERN: Final = re.compile(rf"^(app|svc|lib|tol)-{_NUMBER}-{_SLUG}$")
CRITERIA_ID_PATTERN: Final = re.compile(
    rf"^(?P<requirement>req-{_NUMBER}-{_SLUG})/(?P<criterion>crit-{_NUMBER})$"
)
CRITERION_ID_PATTERN: Final = re.compile(rf"^crit-{_NUMBER}$")
TEST_CASE_ID_PATTERN: Final = re.compile(rf"^tc-{_NUMBER}$")
TASK_ID_PATTERN: Final = re.compile(rf"^task-{_NUMBER}$")


@dataclass(frozen=True, slots=True)
class ParsedId:
    """Parsed components of a canonical entity ID.

    Attributes:
        code: The short type code (e.g., "req", "svc").
        number: The numeric portion.
        slug: The slug portion.
    """

    code: str
    number: int
    slug: str

    @property
    def kind(self) -> EntityKind:
        return CODE_KINDS[self.code]


# =============================================================================
# Derivation
# =============================================================================


def format_entity_id(code: str, number: int, slug: str) -> str:
    """Build a canonical ID from its parts.

    Numbers are zero-padded to three digits; larger numbers are kept as-is.
    """
    return f"{code}-{number:03d}-{slug}"


@singledispatch
def entity_code(entity: object) -> str:
    """Return the short type code for an entity.

    Raises:
        TypeError: If the object is not a registered entity variant.
    """
    msg = f"Not a specification entity: {type(entity).__name__}"
    raise TypeError(msg)


@entity_code.register
def _requirement_code(entity: Requirement) -> str:
    return REQUIREMENT_CODE


@entity_code.register
def _plan_code(entity: Plan) -> str:
    return PLAN_CODE


@entity_code.register
def _app_code(entity: AppComponent) -> str:
    return COMPONENT_CODES[ComponentType.APP]


@entity_code.register
def _service_code(entity: ServiceComponent) -> str:
    return COMPONENT_CODES[ComponentType.SERVICE]


@entity_code.register
def _library_code(entity: LibraryComponent) -> str:
    return COMPONENT_CODES[ComponentType.LIBRARY]


@entity_code.register
def _tool_code(entity: ToolComponent) -> str:
    return COMPONENT_CODES[ComponentType.TOOL]


def entity_id(entity: Entity) -> str:
    """Derive the canonical ID of an entity.

    Args:
        entity: Any requirement, plan, or component.

    Returns:
        The canonical ID string, e.g. ``"pln-004-checkout-flow"``.

    Raises:
        TypeError: If the object is not a specification entity.
    """
    return format_entity_id(entity_code(entity), entity.number, entity.slug)


def criteria_ref(requirement: Requirement, criterion_id: str) -> str:
    """Build the fully qualified reference to a requirement's criterion."""
    return f"{entity_id(requirement)}/{criterion_id}"


# =============================================================================
# Parsing
# =============================================================================


def parse_entity_id(value: str) -> ParsedId:
    """Parse a canonical entity ID into its components.

    Args:
        value: The ID string to parse.

    Returns:
        ParsedId with code, number, and slug.

    Raises:
        InvalidEntityIdError: If the value is not a canonical entity ID.
    """
    match = ENTITY_ID_PATTERN.match(value)
    if match is None:
        msg = f"Invalid entity ID: {value!r}"
        raise InvalidEntityIdError(msg, value=value)
    return ParsedId(
        code=match.group("code"),
        number=int(match.group("number")),
        slug=match.group("slug"),
    )


def parse_criteria_id(value: str) -> tuple[str, str]:
    """Split a fully qualified criterion reference.

    Returns:
        Tuple of (requirement_id, criterion_id).

    Raises:
        InvalidEntityIdError: If the value is not of the form
            ``req-XXX-slug/crit-XXX``.
    """
    match = CRITERIA_ID_PATTERN.match(value)
    if match is None:
        msg = f"Invalid criteria ID: {value!r}"
        raise InvalidEntityIdError(msg, value=value)
    return match.group("requirement"), match.group("criterion")


def is_valid_entity_id(value: str, code: str | None = None) -> bool:
    """Check whether a string is a canonical entity ID.

    Args:
        value: The string to check.
        code: If given, the ID must also carry this type code.
    """
    match = ENTITY_ID_PATTERN.match(value)
    if match is None:
        return False
    return code is None or match.group("code") == code


def next_number(entities: Iterable[Entity]) -> int:
    """Return the next free entity number (max + 1, or 1 when empty)."""
    return max((entity.number for entity in entities), default=0) + 1
