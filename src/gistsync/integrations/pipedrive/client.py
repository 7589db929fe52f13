"""Pipedrive API client for creating activities."""

import logging
from typing import Any, Dict

import requests

from ...exceptions import PublishError
from ...models.config import AppConfig
from .. import response_error_message

logger = logging.getLogger(__name__)


class PipedriveClient:
    """Client for the Pipedrive v1 activities API."""
    
    def __init__(self, api_token: str, base_url: str, timeout: float = 30.0):
        """Initialize the Pipedrive client.
        
        Args:
            api_token: Pipedrive API token
            base_url: Company domain base URL, e.g. https://acme.pipedrive.com
            timeout: Per-request timeout in seconds
        """
        self.api_token = api_token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        
        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'User-Agent': 'gistsync/0.1.0'
        })
    
    @property
    def activities_url(self) -> str:
        return f"{self.base_url}/v1/activities"
    
    def create_activity(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a single activity.
        
        Args:
            payload: Activity body (subject, note, type, done)
            
        Returns:
            Parsed response body, `{"data": {"id": ..., "subject": ...}, "success": ...}`
            
        Raises:
            PublishError: If the request fails or Pipedrive does not answer 201
        """
        subject = payload.get('subject')
        
        try:
            logger.debug(f"Making POST request to {self.activities_url} for subject: {subject}")
            response = self.session.post(
                self.activities_url,
                params={'api_token': self.api_token},
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise PublishError(f"Request failed: {e}", subject=subject) from e
        
        if response.status_code != 201:
            raise PublishError(response_error_message(response, 'error'), response.status_code, subject)
        
        try:
            body = response.json()
            body['data']['id']
        except (ValueError, KeyError, TypeError) as e:
            raise PublishError(f"Unexpected response body: {e}", response.status_code, subject) from e
        
        return body
    
    def test_connection(self) -> bool:
        """Test if the API token is accepted by Pipedrive."""
        try:
            response = self.session.get(
                f"{self.base_url}/v1/users/me",
                params={'api_token': self.api_token},
                timeout=self.timeout
            )
            return response.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.error(f"Pipedrive connection test failed: {e}")
            return False


def create_pipedrive_client_from_config(config: AppConfig) -> PipedriveClient:
    """Create a Pipedrive client from the loaded configuration."""
    return PipedriveClient(
        api_token=config.pipedrive_token,
        base_url=config.pipedrive_base_url,
        timeout=config.request_timeout
    )
