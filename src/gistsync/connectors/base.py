"""
Base connector class for the services on either side of the sync.
"""

import logging

logger = logging.getLogger(__name__)


class BaseConnector:
    """Holds the API client shared by a connector's operations."""
    
    def __init__(self, client):
        """
        Initialize the connector.
        
        Args:
            client: API client used for all remote calls
        """
        self.client = client
        logger.info(f"Initialized {self.__class__.__name__} connector")
    
    def test_connection(self) -> bool:
        """Test if the connector can successfully connect to the service."""
        return self.client.test_connection()
