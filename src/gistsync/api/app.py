"""
FastAPI application for gistsync.
"""

import html
import json
import logging
import threading
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from .. import __version__
from ..core.config import load_config
from ..engine.sync import SyncEngine
from ..exceptions import ConfigurationError
from ..models.config import AppConfig
from ..models.sync import SyncExecution, SyncState
from ..services.scheduler import SchedulerService

logger = logging.getLogger(__name__)

NO_GISTS = "No gists to display!"


class AppServices:
    """Everything the routes need, built once per process."""
    
    def __init__(self, config: AppConfig, engine: SyncEngine):
        self.config = config
        self.engine = engine
        self.state = SyncState()
        # Serializes every engine call: scheduled cycles, manual cycles, lookups
        self.lock = threading.Lock()
        self.scheduler = SchedulerService(
            engine=engine,
            state=self.state,
            entities=config.users,
            schedule=config.schedule,
            lock=self.lock
        )


services: Optional[AppServices] = None


def configure(config: AppConfig, engine: Optional[SyncEngine] = None) -> AppServices:
    """Build the process-wide services from a loaded config."""
    global services
    services = AppServices(config, engine or SyncEngine.from_config(config))
    return services


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    if services is None:
        try:
            configure(load_config())
        except ConfigurationError as e:
            logger.error(f"{e}. Exiting...")
            raise
    
    services.scheduler.start()
    logger.info(f"Users tracked: {json.dumps([u.name for u in services.config.users])}")
    # Initial cycle runs on the scheduler thread so startup is not blocked
    services.scheduler.run_soon("startup")
    
    yield
    
    services.scheduler.shutdown()
    logger.info("Application shutdown")


app = FastAPI(
    title="gistsync",
    description="Mirrors GitHub gists into Pipedrive activities",
    version=__version__,
    lifespan=lifespan
)


def get_services() -> AppServices:
    if services is None:
        raise HTTPException(status_code=500, detail="Services not initialized")
    return services


@app.get("/", response_class=HTMLResponse)
async def index():
    """Landing page."""
    return "<h2>Application</h2> <br> Click <a href=/users/>here</a> to see scanned users"


@app.get("/users", response_class=HTMLResponse)
async def list_users(svc: AppServices = Depends(get_services)):
    """List every tracked user, linking to their gists."""
    links = "".join(
        f'<br> <a href="/users/{html.escape(user.name)}">{html.escape(user.name)}</a>'
        for user in svc.config.users
    )
    return f"<h2>Users that are being scanned:</h2> <br> {links}"


@app.get("/users/{name}", response_class=HTMLResponse)
async def user_gists(name: str, svc: AppServices = Depends(get_services)):
    """Show a user's gists since the previous visit."""
    def lookup():
        with svc.lock:
            return svc.engine.lookup_entity(svc.config.users, name)
    
    result = await run_in_threadpool(lookup)
    if result is None:
        return HTMLResponse('User does not exist <br><a href="./">Back</a>', status_code=404)
    
    if result.gists:
        gists = html.escape(json.dumps([gist.model_dump(mode="json") for gist in result.gists]))
    else:
        gists = NO_GISTS
    
    return (
        f"<h2>Gists since last visited:</h2> <br> {gists}<br><br>"
        f"Last visited: {html.escape(result.previous_visit)} <br><a href=\"./\">Back</a>"
    )


@app.get("/health")
async def health_check(svc: AppServices = Depends(get_services)):
    """Check the health of the application and its services."""
    last = svc.scheduler.last_execution
    return {
        "status": "healthy",
        "version": __version__,
        "last_run": svc.state.last_run,
        "services": {
            "engine": svc.engine is not None,
            "scheduler": svc.scheduler.running,
        },
        "last_execution": last.get_summary() if last else None,
    }


@app.post("/api/v1/sync", response_model=SyncExecution)
async def trigger_sync(svc: AppServices = Depends(get_services)):
    """Run one sync cycle now and return its result."""
    try:
        return await run_in_threadpool(svc.scheduler.run_now, "api")
    except Exception as e:
        logger.error(f"Manual sync failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
