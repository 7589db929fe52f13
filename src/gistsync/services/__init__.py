"""
Services for gistsync.

The scheduler lives in `gistsync.services.scheduler`; it depends on the
engine, so it is not imported here.
"""

from .storage import SnapshotStore

__all__ = [
    "SnapshotStore",
]
