"""Publisher cycle domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class CycleStage(StrEnum):
    """Stages of one fetch-to-publish cycle."""

    IDLE = "idle"
    FETCHING = "fetching"
    DECODING = "decoding"
    SANITIZING = "sanitizing"
    ENRICHING = "enriching"
    PUBLISHED = "published"
    FAILED = "failed"


class CycleFailure(BaseModel):
    """Why a cycle ended in the failed state."""

    model_config = ConfigDict(frozen=True)

    stage: CycleStage
    kind: str
    reason: str
    occurred_at: datetime


@dataclass(frozen=True)
class PublisherStatus:
    """Observability view of the snapshot publisher."""

    stage: CycleStage = CycleStage.IDLE
    cycles_started: int = 0
    cycles_failed: int = 0
    consecutive_failures: int = 0
    ticks_skipped: int = 0
    last_failure: CycleFailure | None = None
    last_published_at: datetime | None = None
    vehicle_count: int = 0

    @property
    def healthy(self) -> bool:
        """True while the latest finished cycle published a snapshot."""
        return self.last_published_at is not None and self.consecutive_failures == 0
