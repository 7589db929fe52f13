"""
Models for sync state, cycle results and on-demand lookups.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .records import Gist, PublishOutcome

NEVER = "never"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
FIRST_VISIT = "First Visit"


def utc_timestamp() -> str:
    """Current time in the ISO 8601 form GitHub accepts for `since`."""
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


class SyncState(BaseModel):
    """
    Holder for the process-wide sync checkpoint.

    Passed into every cycle. The holder does no locking; callers that trigger
    cycles from more than one place must serialize access themselves.
    """
    last_run: str = NEVER

    @property
    def has_run(self) -> bool:
        return self.last_run != NEVER

    def advance(self, timestamp: str) -> str:
        """
        Move the checkpoint to `timestamp`.
        
        The checkpoint never stays put or goes back: if `timestamp` is not
        later than the current value, it becomes the current value plus one
        second.
        
        Returns:
            The new checkpoint
        """
        if self.has_run:
            try:
                previous = datetime.strptime(self.last_run, TIMESTAMP_FORMAT)
                proposed = datetime.strptime(timestamp, TIMESTAMP_FORMAT)
            except ValueError:
                # Hand-set checkpoints in another format are replaced as-is
                previous = proposed = None
            if previous is not None and proposed <= previous:
                timestamp = (previous + timedelta(seconds=1)).strftime(TIMESTAMP_FORMAT)
        self.last_run = timestamp
        return self.last_run


class SyncCycleStatus(str, Enum):
    """Where a sync cycle ended."""
    IDLE = "idle"
    SKIPPED = "skipped"      # no tracked users
    EMPTY = "empty"          # nothing new on GitHub
    ADVANCED = "advanced"    # at least one activity created
    STALLED = "stalled"      # gists fetched but none published
    FAILED = "failed"


class SyncExecution(BaseModel):
    """Represents one sync cycle."""
    id: str
    status: SyncCycleStatus = SyncCycleStatus.IDLE
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None
    triggered_by: Optional[str] = None
    entities: int = 0
    gists_fetched: int = 0
    activities_prepared: int = 0
    outcomes: List[PublishOutcome] = Field(default_factory=list)
    checkpoint_before: str = NEVER
    checkpoint_after: str = NEVER
    error_message: Optional[str] = None
    execution_time_seconds: Optional[float] = None

    def mark_finished(self, status: SyncCycleStatus, checkpoint_after: str) -> None:
        """Close the execution record."""
        self.status = status
        self.checkpoint_after = checkpoint_after
        self.completed_at = datetime.now(timezone.utc)
        self.execution_time_seconds = (self.completed_at - self.started_at).total_seconds()

    def mark_failed(self, error_message: str, checkpoint_after: str) -> None:
        self.error_message = error_message
        self.mark_finished(SyncCycleStatus.FAILED, checkpoint_after)

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the execution."""
        return {
            "id": self.id,
            "status": self.status.value,
            "triggered_by": self.triggered_by,
            "entities": self.entities,
            "gists_fetched": self.gists_fetched,
            "activities_prepared": self.activities_prepared,
            "activities_posted": len(self.outcomes),
            "checkpoint_before": self.checkpoint_before,
            "checkpoint_after": self.checkpoint_after,
            "execution_time_seconds": self.execution_time_seconds,
        }


class EntityLookup(BaseModel):
    """Result of an on-demand lookup of one tracked user."""
    name: str
    success: bool
    gists: List[Gist] = Field(default_factory=list)
    previous_visit: str = FIRST_VISIT
    last_visit: Optional[str] = None
