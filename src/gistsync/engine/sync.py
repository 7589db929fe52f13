"""
Sync engine that runs gist to activity sync cycles.
"""

import logging
import uuid
from typing import Callable, List, Optional

from ..connectors.github import GistSourceConnector, count_gists
from ..connectors.pipedrive import ActivityPublisher
from ..integrations.github.client import create_github_client_from_config
from ..integrations.pipedrive.client import create_pipedrive_client_from_config
from ..models.config import AppConfig, TrackedEntity
from ..models.sync import (
    FIRST_VISIT, EntityLookup, SyncCycleStatus, SyncExecution, SyncState, utc_timestamp
)
from ..services.storage import SnapshotStore
from .transforms import ActivityTransformer

logger = logging.getLogger(__name__)


class SyncEngine:
    """
    Runs sync cycles: fetch gists, transform, publish, move the checkpoint.

    The checkpoint only moves forward when a cycle created at least one
    activity. Everything else (no users, nothing new, nothing accepted)
    leaves it exactly as it was, so the next cycle fetches the same window.
    """
    
    def __init__(
        self,
        source: GistSourceConnector,
        publisher: ActivityPublisher,
        snapshots: Optional[SnapshotStore] = None,
        clock: Callable[[], str] = utc_timestamp
    ):
        """
        Initialize the sync engine.
        
        Args:
            source: Connector that reads gists
            publisher: Connector that creates activities
            snapshots: Where raw batches are saved; None disables saving
            clock: Returns the timestamp used when the checkpoint moves
        """
        self.source = source
        self.publisher = publisher
        self.snapshots = snapshots
        self.clock = clock
        self.transformer = ActivityTransformer()
    
    @classmethod
    def from_config(cls, config: AppConfig) -> "SyncEngine":
        """Build an engine with real API clients."""
        return cls(
            source=GistSourceConnector(create_github_client_from_config(config)),
            publisher=ActivityPublisher(create_pipedrive_client_from_config(config)),
            snapshots=SnapshotStore(config.data_dir)
        )
    
    def run_cycle(
        self,
        entities: List[TrackedEntity],
        state: SyncState,
        triggered_by: str = "manual"
    ) -> SyncExecution:
        """
        Run one sync cycle.
        
        Args:
            entities: Tracked users
            state: Checkpoint holder, updated in place on success
            triggered_by: What triggered this cycle (scheduler, api, cli, startup)
            
        Returns:
            SyncExecution describing how the cycle ended
        """
        execution = SyncExecution(
            id=str(uuid.uuid4()),
            triggered_by=triggered_by,
            entities=len(entities),
            checkpoint_before=state.last_run
        )
        
        if not entities:
            logger.warning("No users are currently tracked. Add them to the config file")
            execution.mark_finished(SyncCycleStatus.SKIPPED, state.last_run)
            return execution
        
        window = f"since {state.last_run}" if state.has_run else "with no previous run"
        logger.info(f"Starting sync cycle {execution.id} for {len(entities)} users {window}")
        
        try:
            self._execute(execution, entities, state)
        except Exception as e:
            logger.error(f"Sync cycle {execution.id} failed: {e}", exc_info=True)
            execution.mark_failed(str(e), state.last_run)
        
        return execution
    
    def _execute(self, execution: SyncExecution, entities: List[TrackedEntity], state: SyncState) -> None:
        """Fetch, transform and publish; records the outcome on `execution`."""
        batch = self.source.fetch_for_all(entities, state.last_run)
        execution.gists_fetched = count_gists(batch)
        
        if execution.gists_fetched == 0:
            logger.info("No new gists have been created since last run. Nothing will be sent to Pipedrive")
            execution.mark_finished(SyncCycleStatus.EMPTY, state.last_run)
            return
        
        activities = self.transformer.transform(batch)
        execution.activities_prepared = len(activities)
        self._save_snapshot(batch)
        
        execution.outcomes = self.publisher.publish(activities)
        
        if execution.outcomes:
            state.advance(self.clock())
            logger.info(
                f"Sync cycle {execution.id} completed: {len(execution.outcomes)} of "
                f"{len(activities)} activities created, last run is now {state.last_run}"
            )
            execution.mark_finished(SyncCycleStatus.ADVANCED, state.last_run)
        else:
            logger.warning(
                f"POST to Pipedrive failed. Retry in next cycle. "
                f"Current last successful run: {state.last_run}"
            )
            execution.mark_finished(SyncCycleStatus.STALLED, state.last_run)
    
    def lookup_entity(self, entities: List[TrackedEntity], name: str) -> Optional[EntityLookup]:
        """
        Fetch the gists of one tracked user since that user's last visit.
        
        The user's last visit moves to now only when the fetch succeeds.
        
        Args:
            entities: Tracked users
            name: Name of the user to look up
            
        Returns:
            EntityLookup, or None if the user is not tracked
        """
        entity = next((e for e in entities if e.name == name), None)
        if entity is None:
            return None
        
        previous_visit = entity.last_visit or FIRST_VISIT
        gists = self.source.fetch_for_one(entity)
        
        if gists is None:
            return EntityLookup(
                name=name,
                success=False,
                previous_visit=previous_visit,
                last_visit=entity.last_visit
            )
        
        entity.last_visit = self.clock()
        return EntityLookup(
            name=name,
            success=True,
            gists=gists,
            previous_visit=previous_visit,
            last_visit=entity.last_visit
        )
    
    def _save_snapshot(self, batch) -> None:
        if self.snapshots is None:
            return
        try:
            self.snapshots.write_batch(batch)
        except OSError as e:
            logger.error(f"Could not save gist snapshot: {e}")
