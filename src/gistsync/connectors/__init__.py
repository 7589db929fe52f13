"""
Connectors for the services on either side of the sync.

GistSourceConnector reads from GitHub, ActivityPublisher writes to Pipedrive.
"""

from .base import BaseConnector
from .github import GistSourceConnector, count_gists
from .pipedrive import ActivityPublisher

__all__ = [
    "BaseConnector",
    "GistSourceConnector",
    "ActivityPublisher",
    "count_gists",
]
