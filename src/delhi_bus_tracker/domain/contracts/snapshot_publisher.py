"""Protocol for the periodic snapshot publisher."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from delhi_bus_tracker.domain.models.cycle import PublisherStatus
    from delhi_bus_tracker.domain.models.snapshot import Snapshot


class SnapshotPublisherProtocol(Protocol):
    """Protocol for running poll cycles and publishing snapshots."""

    async def start(self) -> None:
        """Start the periodic publisher."""
        ...

    async def stop(self) -> None:
        """Stop the periodic publisher."""
        ...

    async def run_cycle(self) -> "Snapshot | None":
        """Run one cycle now; returns the new snapshot or None if nothing was published."""
        ...

    @property
    def status(self) -> "PublisherStatus":
        """Current publisher status."""
        ...
