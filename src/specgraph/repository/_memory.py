"""In-memory repository."""

from typing import Final

from specgraph.entities import EntitySnapshot


class InMemoryRepository:
    """Serves a fixed snapshot. Useful for tests and embedding."""

    __slots__: Final = ("_snapshot",)

    _snapshot: EntitySnapshot

    def __init__(self, snapshot: EntitySnapshot | None = None) -> None:
        self._snapshot = snapshot if snapshot is not None else EntitySnapshot()

    async def load_snapshot(self) -> EntitySnapshot:
        return self._snapshot
