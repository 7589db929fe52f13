"""
Tests for the command line interface.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import raw_gist

from gistsync.core.cli import cli
from gistsync.engine.sync import SyncEngine


@pytest.fixture
def config_file(tmp_path, monkeypatch) -> str:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("PIPEDRIVE_TOKEN", raising=False)
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "githubToken": "gh",
        "pipedriveBaseUrl": "https://acme.pipedrive.com",
        "pipedriveToken": "pd",
        "users": [{"name": "a"}],
        "dataDir": str(tmp_path / "data"),
    }), encoding="utf-8")
    return str(path)


@pytest.fixture
def patched_engine(engine: SyncEngine):
    with patch("gistsync.core.cli.SyncEngine.from_config", return_value=engine):
        yield engine


def _invoke(*args):
    return CliRunner().invoke(cli, list(args), obj={})


class TestCli:
    """Tests for the gistsync CLI commands."""

    def test_missing_config_exits(self, tmp_path) -> None:
        result = _invoke("--config", str(tmp_path / "missing.json"), "sync")
        assert result.exit_code == 1
        assert "Configuration Error" in result.output

    def test_sync_json(self, config_file, patched_engine, github_client) -> None:
        github_client.get_user_gists.return_value = [raw_gist("g1", "a")]

        result = _invoke("--config", config_file, "sync", "--output", "json")

        assert result.exit_code == 0, result.output
        body = json.loads(result.output)
        assert body["status"] == "advanced"
        assert body["outcomes"][0]["subject"] == "g1"

    def test_sync_since(self, config_file, patched_engine, github_client) -> None:
        result = _invoke("--config", config_file, "sync", "--since", "2024-01-01T00:00:00Z")
        assert result.exit_code == 0, result.output
        github_client.get_user_gists.assert_called_once_with("a", since="2024-01-01T00:00:00Z")
        assert "empty" in result.output

    def test_lookup(self, config_file, patched_engine, github_client) -> None:
        github_client.get_user_gists.return_value = [raw_gist("g1", "a")]
        result = _invoke("--config", config_file, "lookup", "a")
        assert result.exit_code == 0, result.output
        assert "Last visited: First Visit" in result.output
        assert '"g1"' in result.output

    def test_lookup_unknown_user(self, config_file, patched_engine) -> None:
        result = _invoke("--config", config_file, "lookup", "nobody")
        assert result.exit_code == 1

    def test_users(self, config_file) -> None:
        result = _invoke("--config", config_file, "users")
        assert result.exit_code == 0, result.output
        assert "First Visit" in result.output

    def test_test_connection(self, config_file, patched_engine, pipedrive_client) -> None:
        pipedrive_client.test_connection.return_value = False
        result = _invoke("--config", config_file, "test-connection")
        assert result.exit_code == 1
        assert "GitHub connection successful" in result.output
