# pyright: reportAny=false, reportExplicitAny=false
"""YAML-backed repository.

Layout under the specs directory::

    specs/
        requirements/req-001-user-auth.yml
        plans/pln-001-login-form.yaml
        components/svc-001-auth-service.yml

Each file holds one entity mapping; components carry a ``type`` key naming
their variant.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any, Final

import anyio
import yaml
from structlog.typing import FilteringBoundLogger

from specgraph.entities import EntitySnapshot
from specgraph.exceptions import EntityParseError, RepositoryError
from specgraph.repository._parse import parse_component, parse_plan, parse_requirement
from specgraph.utils import create_null_logger

REQUIREMENTS_DIR: Final = "requirements"
PLANS_DIR: Final = "plans"
COMPONENTS_DIR: Final = "components"

_SUFFIXES: Final = frozenset({".yml", ".yaml"})


class YamlRepository:
    """Loads a snapshot from per-entity YAML files.

    Missing kind directories yield no entities of that kind. Files are read
    in file-name order so snapshots are deterministic.
    """

    __slots__: Final = ("_logger", "_specs_dir")

    _specs_dir: Path
    _logger: FilteringBoundLogger

    def __init__(
        self,
        specs_dir: Path,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._specs_dir = specs_dir
        self._logger = logger if logger is not None else create_null_logger()

    @property
    def specs_dir(self) -> Path:
        return self._specs_dir

    async def load_snapshot(self) -> EntitySnapshot:
        """Read every entity file under the specs directory.

        Raises:
            RepositoryError: If a directory or file cannot be read.
            EntityParseError: If a file is not valid YAML or not a valid
                entity.
        """
        requirements = await self._load_kind(REQUIREMENTS_DIR, parse_requirement)
        plans = await self._load_kind(PLANS_DIR, parse_plan)
        components = await self._load_kind(COMPONENTS_DIR, parse_component)

        snapshot = EntitySnapshot(
            requirements=requirements, plans=plans, components=components
        )
        self._logger.debug(
            "snapshot_loaded",
            specs_dir=str(self._specs_dir),
            requirements=len(requirements),
            plans=len(plans),
            components=len(components),
        )
        return snapshot

    async def _load_kind[T](
        self,
        folder: str,
        parse: Callable[[dict[str, Any]], T],
    ) -> tuple[T, ...]:
        directory = anyio.Path(self._specs_dir / folder)
        if not await directory.is_dir():
            return ()

        try:
            paths = sorted(
                [
                    path
                    async for path in directory.iterdir()
                    if path.suffix in _SUFFIXES
                ],
                key=lambda path: path.name,
            )
        except OSError as e:
            msg = f"Failed to list {directory}: {e}"
            raise RepositoryError(msg, path=Path(directory)) from e

        entities: list[T] = []
        for path in paths:
            content = await _read(path)
            entities.append(parse_entity_file(content, Path(path), parse))
        return tuple(entities)


async def _read(path: anyio.Path) -> str:
    try:
        return await path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        msg = f"Invalid UTF-8 in {path.name}: {e}"
        raise EntityParseError(msg, path=Path(path), cause=e) from e
    except OSError as e:
        msg = f"Failed to read {path}: {e}"
        raise RepositoryError(msg, path=Path(path)) from e


def parse_entity_file[T](
    content: str,
    path: Path,
    parse: Callable[[dict[str, Any]], T],
) -> T:
    """Parse the YAML text of one entity file.

    Args:
        content: File contents.
        path: Where the content came from, for error context.
        parse: Converts the loaded mapping into an entity.

    Raises:
        EntityParseError: If the YAML is malformed, not a mapping, or does
            not describe a valid entity.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path.name}: {e}"
        raise EntityParseError(msg, path=path, cause=e) from e

    if not isinstance(data, dict):
        msg = f"Expected a YAML mapping in {path.name}, got {type(data).__name__}"
        raise EntityParseError(msg, path=path)

    try:
        return parse(data)
    except KeyError as e:
        msg = f"Missing required key {e} in {path.name}"
        raise EntityParseError(msg, path=path, cause=e) from e
    except (TypeError, ValueError) as e:
        msg = f"Invalid entity in {path.name}: {e}"
        raise EntityParseError(msg, path=path, cause=e) from e
