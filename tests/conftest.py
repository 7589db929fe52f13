"""
Pytest configuration and shared fixtures for gistsync tests.
"""

import logging
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest

from gistsync.connectors.github import GistSourceConnector
from gistsync.connectors.pipedrive import ActivityPublisher
from gistsync.engine.sync import SyncEngine
from gistsync.exceptions import FetchError, PublishError
from gistsync.models import AppConfig, Gist, TrackedEntity


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure logging for tests."""
    logging.basicConfig(level=logging.DEBUG)


def raw_gist(gist_id: str, owner: str) -> Dict[str, Any]:
    """A gist the way GitHub returns it."""
    return {
        "id": gist_id,
        "html_url": f"http://x/{gist_id}",
        "owner": {"login": owner, "id": 1},
        "description": f"gist {gist_id}",
        "public": True,
    }


def gist(gist_id: str, owner: str) -> Gist:
    return Gist.model_validate(raw_gist(gist_id, owner))


class FakeClock:
    """Hands out strictly increasing timestamps."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return f"2024-01-01T00:00:{self.calls:02d}Z"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def github_client() -> MagicMock:
    """GitHub client mock returning no gists by default."""
    client = MagicMock()
    client.get_user_gists.return_value = []
    client.test_connection.return_value = True
    return client


@pytest.fixture
def pipedrive_client() -> MagicMock:
    """Pipedrive client mock that accepts every activity with ascending ids."""
    client = MagicMock()
    counter = {"next": 41}

    def create_activity(payload: Dict[str, Any]) -> Dict[str, Any]:
        counter["next"] += 1
        return {"data": {"id": counter["next"], "subject": payload["subject"]}, "success": True}

    client.create_activity.side_effect = create_activity
    client.test_connection.return_value = True
    return client


@pytest.fixture
def source(github_client: MagicMock) -> GistSourceConnector:
    return GistSourceConnector(github_client)


@pytest.fixture
def publisher(pipedrive_client: MagicMock) -> ActivityPublisher:
    return ActivityPublisher(pipedrive_client)


@pytest.fixture
def engine(source: GistSourceConnector, publisher: ActivityPublisher, clock: FakeClock) -> SyncEngine:
    return SyncEngine(source, publisher, snapshots=None, clock=clock)


@pytest.fixture
def entities() -> List[TrackedEntity]:
    return [TrackedEntity(name="a"), TrackedEntity(name="b"), TrackedEntity(name="c")]


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        github_token="gh-token",
        pipedrive_base_url="https://acme.pipedrive.com",
        pipedrive_token="pd-token",
        users=[TrackedEntity(name="a"), TrackedEntity(name="b")],
        data_dir=str(tmp_path / "data"),
    )


def fetch_failure(name: str, status: int = 404, message: str = "Not Found") -> FetchError:
    return FetchError(name, message, status)


def publish_failure(subject: str, status: int = 400, message: str = "Bad request") -> PublishError:
    return PublishError(message, status, subject)
