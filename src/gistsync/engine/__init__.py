"""
Sync engine for mirroring gists into activities.
"""

from .sync import SyncEngine
from .transforms import ActivityTransformer

__all__ = [
    "SyncEngine",
    "ActivityTransformer",
]
