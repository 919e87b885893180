"""In-memory holder of the published snapshot."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from delhi_bus_tracker.domain.contracts.snapshot_store import SnapshotStoreProtocol

if TYPE_CHECKING:
    from delhi_bus_tracker.domain.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


class SnapshotStore(SnapshotStoreProtocol):
    """Holds one reference to the latest snapshot.

    Publishing replaces the reference in a single assignment, so a reader
    sees either the old or the new snapshot, never a mix.
    """

    def __init__(self) -> None:
        """Initialize the store."""
        self._snapshot: Snapshot | None = None

    def current(self) -> Snapshot | None:
        """Get the latest published snapshot.

        Returns:
            The snapshot, or None before the first successful cycle.
        """
        return self._snapshot

    def publish(self, snapshot: Snapshot) -> None:
        """Replace the published snapshot.

        Args:
            snapshot: The new, fully built snapshot.
        """
        self._snapshot = snapshot
        logger.debug(f"Published snapshot with {len(snapshot)} vehicles")
