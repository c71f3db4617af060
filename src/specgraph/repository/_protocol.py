"""Protocol for snapshot sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from specgraph.entities import EntitySnapshot


@runtime_checkable
class EntityRepository(Protocol):
    """Anything that can produce an entity snapshot.

    Loading is async so file- or network-backed stores never block the
    event loop; the analyses that consume the snapshot are synchronous.
    """

    async def load_snapshot(self) -> EntitySnapshot:
        """Load every requirement, plan, and component.

        Raises:
            RepositoryError: If the store cannot be read.
            EntityParseError: If a stored entity is malformed.
        """
        ...
