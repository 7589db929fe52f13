"""
Recurring trigger for sync cycles.
"""

import logging
import threading
from typing import List, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..engine.sync import SyncEngine
from ..exceptions import ConfigurationError
from ..models.config import TrackedEntity
from ..models.sync import SyncExecution, SyncState

logger = logging.getLogger(__name__)

JOB_ID = "gist-sync"


class SchedulerService:
    """
    Runs a sync cycle on a cron schedule.

    Every cycle (scheduled or run_now) takes `lock`, the same lock the web
    app holds for on-demand lookups, so the checkpoint and last-visit values
    are only ever touched by one caller at a time.
    """
    
    def __init__(
        self,
        engine: SyncEngine,
        state: SyncState,
        entities: List[TrackedEntity],
        schedule: str = "*/15 * * * *",
        lock: Optional[threading.Lock] = None
    ):
        """
        Initialize the scheduler service.
        
        Args:
            engine: Engine that runs the cycles
            state: Shared checkpoint holder
            entities: Tracked users
            schedule: Cron expression (5 fields, UTC)
            lock: Lock serializing all engine calls
        """
        try:
            self.trigger = CronTrigger.from_crontab(schedule, timezone="UTC")
        except ValueError as e:
            raise ConfigurationError(f"Invalid schedule '{schedule}': {e}") from e
        
        self.engine = engine
        self.state = state
        self.entities = entities
        self.schedule = schedule
        self.lock = lock or threading.Lock()
        self.scheduler = BackgroundScheduler(timezone="UTC")
        self.last_execution: Optional[SyncExecution] = None
    
    @property
    def running(self) -> bool:
        return self.scheduler.running
    
    def run_now(self, triggered_by: str = "scheduler") -> SyncExecution:
        """Run one cycle immediately, waiting for any cycle in progress."""
        with self.lock:
            execution = self.engine.run_cycle(self.entities, self.state, triggered_by=triggered_by)
        self.last_execution = execution
        return execution
    
    def run_soon(self, triggered_by: str = "startup") -> None:
        """Queue a one-off cycle on the scheduler thread."""
        self.scheduler.add_job(self._run_job, kwargs={"triggered_by": triggered_by})
    
    def _run_job(self, triggered_by: str = "scheduler") -> None:
        try:
            self.run_now(triggered_by=triggered_by)
        except Exception:
            logger.exception("Scheduled sync cycle failed")
    
    def start(self) -> None:
        """Start the recurring job."""
        self.scheduler.add_job(
            self._run_job,
            trigger=self.trigger,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True
        )
        self.scheduler.start()
        logger.info(f"Scheduler started with schedule: {self.schedule}")
    
    def shutdown(self, wait: bool = False) -> None:
        """Stop the recurring job."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("Scheduler stopped")
