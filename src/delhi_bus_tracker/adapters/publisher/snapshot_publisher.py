"""Periodic fetch-decode-sanitize-enrich-publish cycle."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from delhi_bus_tracker.domain.contracts.snapshot_publisher import SnapshotPublisherProtocol
from delhi_bus_tracker.domain.errors import CycleError, EmptyCycleResult
from delhi_bus_tracker.domain.models import CycleFailure, CycleStage, PublisherStatus, Snapshot

if TYPE_CHECKING:
    from delhi_bus_tracker.domain.contracts import (
        FeedDecoderProtocol,
        FeedFetcherProtocol,
        SnapshotStoreProtocol,
    )
    from delhi_bus_tracker.domain.ports import Enricher, Sanitizer

logger = logging.getLogger(__name__)


class SnapshotPublisher(SnapshotPublisherProtocol):
    """Runs one pipeline cycle per timer tick and publishes the result.

    A failed cycle leaves the previously published snapshot in place. At most
    one cycle runs at a time; a tick that fires while a cycle is still in
    flight is skipped.
    """

    def __init__(
        self,
        fetcher: FeedFetcherProtocol,
        decoder: FeedDecoderProtocol,
        sanitizer: Sanitizer,
        enricher: Enricher,
        store: SnapshotStoreProtocol,
        poll_interval_seconds: float = 10.0,
    ) -> None:
        """Initialize the publisher.

        Args:
            fetcher: Retrieves the raw feed bytes.
            decoder: Decodes feed bytes into raw entities.
            sanitizer: Validates raw entities into a columnar batch.
            enricher: Joins the batch with reference metadata.
            store: Receives each successfully built snapshot.
            poll_interval_seconds: Timer period between cycle starts.
        """
        self.fetcher = fetcher
        self.decoder = decoder
        self.sanitizer = sanitizer
        self.enricher = enricher
        self.store = store
        self.poll_interval_seconds = poll_interval_seconds
        self._status = PublisherStatus()
        self._cycle_lock = asyncio.Lock()
        self._task: asyncio.Task | None = None
        self._cycle_task: asyncio.Task | None = None

    @property
    def status(self) -> PublisherStatus:
        return self._status

    async def start(self) -> None:
        """Start the publisher timer."""
        if self._task is not None and not self._task.done():
            logger.warning("Snapshot publisher already running")
            return

        self._task = asyncio.create_task(self._tick_loop())
        logger.info(f"Started snapshot publisher (every {self.poll_interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the publisher timer and any cycle in flight."""
        for task in (self._task, self._cycle_task):
            if task and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._task = None
        self._cycle_task = None
        if self._status.stage not in (CycleStage.PUBLISHED, CycleStage.FAILED):
            # A cancelled cycle is no longer running
            self._status = replace(self._status, stage=CycleStage.IDLE)
        logger.info("Stopped snapshot publisher")

    async def _tick_loop(self) -> None:
        """Start a cycle on every tick, beginning immediately."""
        try:
            while True:
                self._on_tick()
                await asyncio.sleep(self.poll_interval_seconds)
        except asyncio.CancelledError:
            logger.info("Snapshot publisher cancelled")
            raise

    def _on_tick(self) -> None:
        if self._cycle_task is not None and not self._cycle_task.done():
            self._skip_tick()
            return
        self._cycle_task = asyncio.create_task(self.run_cycle())

    def _skip_tick(self) -> None:
        self._status = replace(self._status, ticks_skipped=self._status.ticks_skipped + 1)
        logger.warning("Previous cycle still running, skipping this tick")

    def _enter(self, stage: CycleStage) -> None:
        self._status = replace(self._status, stage=stage)
        logger.debug(f"Cycle stage: {stage.value}")

    def _fail(self, stage: CycleStage, kind: str, reason: str) -> None:
        failure = CycleFailure(
            stage=stage, kind=kind, reason=reason, occurred_at=datetime.now(UTC)
        )
        self._status = replace(
            self._status,
            stage=CycleStage.FAILED,
            cycles_failed=self._status.cycles_failed + 1,
            consecutive_failures=self._status.consecutive_failures + 1,
            last_failure=failure,
        )
        logger.error(
            f"Cycle failed while {stage.value} ({kind}): {reason}; "
            "keeping the previously published snapshot"
        )

    async def run_cycle(self) -> Snapshot | None:
        """Run one cycle now.

        Returns:
            The newly published snapshot, or None if the cycle failed or was
            skipped because another cycle is in flight.
        """
        if self._cycle_lock.locked():
            self._skip_tick()
            return None
        async with self._cycle_lock:
            return await self._run_stages()

    async def _run_stages(self) -> Snapshot | None:
        self._status = replace(
            self._status, stage=CycleStage.IDLE, cycles_started=self._status.cycles_started + 1
        )
        stage = CycleStage.FETCHING
        try:
            self._enter(stage)
            payload = await self.fetcher.fetch()

            stage = CycleStage.DECODING
            self._enter(stage)
            decoded = self.decoder.decode(payload)

            stage = CycleStage.SANITIZING
            self._enter(stage)
            batch = self.sanitizer.sanitize(decoded.entities)
            if len(batch) == 0:
                raise EmptyCycleResult(
                    f"No valid vehicles among {decoded.entity_count} feed entities "
                    f"({batch.dropped_missing_coordinates} without coordinates, "
                    f"{batch.dropped_out_of_bounds} outside the bounding box)"
                )

            stage = CycleStage.ENRICHING
            self._enter(stage)
            vehicles = self.enricher.enrich(batch)
        except CycleError as e:
            self._fail(stage, e.kind, str(e))
            return None
        except Exception as e:
            logger.exception(f"Unexpected error while {stage.value}")
            self._fail(stage, "unexpected", f"{type(e).__name__}: {e}")
            return None

        snapshot = Snapshot(
            captured_at=datetime.now(UTC),
            vehicles=vehicles,
            feed_timestamp=decoded.feed_timestamp,
        )
        self.store.publish(snapshot)
        self._status = replace(
            self._status,
            stage=CycleStage.PUBLISHED,
            consecutive_failures=0,
            last_published_at=snapshot.captured_at,
            vehicle_count=len(snapshot),
        )
        logger.info(
            f"Published snapshot with {len(snapshot)} vehicles "
            f"({batch.input_count - len(batch)} of {batch.input_count} dropped)"
        )
        return snapshot
