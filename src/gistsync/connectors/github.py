"""
GitHub connector for reading the gists of tracked users.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from ..exceptions import FetchError
from ..integrations.github.client import GitHubClient
from ..models.config import TrackedEntity
from ..models.records import EntityFetchResult, Gist, SourceBatch
from ..models.sync import NEVER
from .base import BaseConnector

logger = logging.getLogger(__name__)


class GistSourceConnector(BaseConnector):
    """
    Reads gists from GitHub, one user at a time.

    Failures are contained per user: a user whose request fails contributes
    an empty list and the remaining users are still fetched.
    """
    
    def __init__(self, client: GitHubClient):
        super().__init__(client)
    
    def fetch_entity(self, entity: TrackedEntity, since: Optional[str]) -> EntityFetchResult:
        """
        Fetch the gists of one user.
        
        Args:
            entity: Tracked user
            since: Checkpoint timestamp, or None for all gists
            
        Returns:
            EntityFetchResult; never raises for API errors
        """
        try:
            raw_gists = self.client.get_user_gists(entity.name, since=since)
            gists = _parse_gists(entity.name, raw_gists)
        except FetchError as e:
            logger.error(f"Failed to fetch gists: {e}")
            return EntityFetchResult(
                entity=entity.name,
                success=False,
                status_code=e.status_code,
                error=e.message
            )
        
        return EntityFetchResult(entity=entity.name, success=True, gists=gists)
    
    def fetch_for_all(self, entities: List[TrackedEntity], checkpoint: str) -> SourceBatch:
        """
        Fetch gists for every tracked user since the global checkpoint.
        
        Args:
            entities: Tracked users, fetched in list order
            checkpoint: Global checkpoint, or "never" to fetch everything
            
        Returns:
            One list of gists per user, in the same order as `entities`
        """
        since = None if checkpoint == NEVER else checkpoint
        results = [self.fetch_entity(entity, since) for entity in entities]
        
        batch = [result.gists for result in results]
        failed = [result.entity for result in results if not result.success]
        if failed:
            logger.warning(f"Fetch failed for {len(failed)} of {len(results)} users: {', '.join(failed)}")
        logger.info(f"Total gists fetched: {count_gists(batch)}")
        return batch
    
    def fetch_for_one(self, entity: TrackedEntity) -> Optional[List[Gist]]:
        """
        Fetch gists for one user since that user's own last visit.
        
        Returns:
            The gists, or None if the fetch failed. None means the caller must
            keep the user's last visit unchanged.
        """
        result = self.fetch_entity(entity, entity.last_visit or None)
        if not result.success:
            return None
        return result.gists


def _parse_gists(entity: str, raw_gists: list) -> List[Gist]:
    try:
        return [Gist.model_validate(raw) for raw in raw_gists]
    except ValidationError as e:
        raise FetchError(entity, f"Malformed gist in response: {e}", 200) from e


def count_gists(batch: SourceBatch) -> int:
    """Total number of gists across all users in a batch."""
    return sum(len(gists) for gists in batch)
