"""Display adapter port."""

from abc import ABC, abstractmethod

from delhi_bus_tracker.domain.ports.snapshot_query import SnapshotQuery


class DisplayAdapter(ABC):
    """Port for handing published snapshots to a rendering collaborator.

    ``start`` runs the adapter's serving loop and returns once it has shut
    down; ``stop`` may be called from another task to end it.
    """

    def __init__(self, query: SnapshotQuery) -> None:
        self.query = query

    @property
    @abstractmethod
    def address(self) -> str:
        """Where the rendering collaborator reaches this adapter."""

    @abstractmethod
    async def start(self) -> None:
        """Serve snapshots until stopped."""

    @abstractmethod
    async def stop(self) -> None:
        """Ask the serving loop to exit."""
