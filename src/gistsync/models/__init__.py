"""
Models for the gistsync system.
"""

from .config import AppConfig, TrackedEntity
from .records import (
    Activity, EntityFetchResult, Gist, GistOwner, PublishOutcome, SourceBatch
)
from .sync import (
    NEVER, EntityLookup, SyncCycleStatus, SyncExecution, SyncState, utc_timestamp
)

__all__ = [
    # Configuration
    "AppConfig",
    "TrackedEntity",

    # Records
    "Activity",
    "EntityFetchResult",
    "Gist",
    "GistOwner",
    "PublishOutcome",
    "SourceBatch",

    # Sync state
    "NEVER",
    "EntityLookup",
    "SyncCycleStatus",
    "SyncExecution",
    "SyncState",
    "utc_timestamp",
]
