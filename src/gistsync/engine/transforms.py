"""
Transformation from GitHub gists to Pipedrive activities.
"""

import logging
from typing import List

from ..models.records import (
    ACTIVITY_NOT_DONE, ACTIVITY_TYPE, NOTE_OWNER_SEPARATOR, Activity, Gist, SourceBatch
)

logger = logging.getLogger(__name__)


class ActivityTransformer:
    """
    Maps gists to activities. Pure: no I/O and no state.

    Every gist is expected to carry `id`, `html_url` and `owner.login`;
    `Gist` validation guarantees this before a gist reaches the transformer.
    """
    
    @staticmethod
    def flatten(batch: SourceBatch) -> List[Gist]:
        """
        Flatten a per-user batch into one list.
        
        Order is user order first, then the order GitHub returned each
        user's gists in.
        """
        return [gist for gists in batch for gist in gists]
    
    @staticmethod
    def to_activity(gist: Gist) -> Activity:
        """Build the activity for a single gist."""
        return Activity(
            subject=gist.id,
            note=f"{gist.html_url}{NOTE_OWNER_SEPARATOR}{gist.owner.login}",
            type=ACTIVITY_TYPE,
            done=ACTIVITY_NOT_DONE
        )
    
    @classmethod
    def transform(cls, batch: SourceBatch) -> List[Activity]:
        """
        Map a whole batch to activities, one per gist.
        
        Args:
            batch: Gists per tracked user
            
        Returns:
            Activities in flattened batch order
        """
        gists = cls.flatten(batch)
        logger.info(f"Preparing data for Pipedrive. Received gists: {len(gists)}")
        activities = [cls.to_activity(gist) for gist in gists]
        logger.info(f"Data finished preparing. Created entries: {len(activities)}")
        return activities
