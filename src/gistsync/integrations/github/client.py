"""GitHub API client for reading user gists."""

import logging
from typing import Any, Dict, List, Optional

import requests

from ...exceptions import FetchError
from ...models.config import AppConfig
from .. import response_error_message

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github+json"


class GitHubClient:
    """Client for the GitHub REST API gist endpoints."""
    
    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: float = 30.0):
        """Initialize the GitHub client.
        
        Args:
            token: GitHub personal access token
            base_url: Base URL for the GitHub API
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        
        # Single attempt per request, no retry adapter
        self.session = requests.Session()
        self.session.headers.update({
            'Accept': GITHUB_ACCEPT,
            'Authorization': f'token {self.token}',
            'User-Agent': 'gistsync/0.1.0'
        })
    
    def get_user_gists(self, username: str, since: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get the public gists of a user.
        
        Args:
            username: GitHub username
            since: Only return gists updated after this ISO 8601 timestamp
            
        Returns:
            List of raw gist objects
            
        Raises:
            FetchError: If the request fails or GitHub does not answer 200
        """
        url = f"{self.base_url}/users/{username}/gists"
        params = {'since': since} if since else None
        
        try:
            logger.debug(f"Making GET request to {url} with params: {params}")
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchError(username, f"Request failed: {e}") from e
        
        if response.status_code != 200:
            raise FetchError(username, response_error_message(response, 'message'), response.status_code)
        
        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(username, f"Invalid JSON in response: {e}", response.status_code) from e
        
        if not isinstance(data, list):
            raise FetchError(username, "Expected a list of gists", response.status_code)
        
        logger.info(f"GET {url} returned {response.status_code}: SUCCESS for user: {username}")
        return data
    
    def test_connection(self) -> bool:
        """Test if the token is accepted by GitHub."""
        try:
            response = self.session.get(f"{self.base_url}/rate_limit", timeout=self.timeout)
            return response.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.error(f"GitHub connection test failed: {e}")
            return False


def create_github_client_from_config(config: AppConfig) -> GitHubClient:
    """Create a GitHub client from the loaded configuration."""
    return GitHubClient(
        token=config.github_token,
        base_url=config.github_base_url,
        timeout=config.request_timeout
    )
