"""Protocol for holding the published snapshot."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from delhi_bus_tracker.domain.models.snapshot import Snapshot


class SnapshotStoreProtocol(Protocol):
    """Protocol for the single reference to the latest published snapshot."""

    def current(self) -> "Snapshot | None":
        """Get the latest published snapshot, or None before the first publish."""
        ...

    def publish(self, snapshot: "Snapshot") -> None:
        """Replace the published snapshot in one step."""
        ...
