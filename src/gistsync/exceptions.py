"""
Custom exceptions for the gistsync application.
"""

from typing import Optional


class GistSyncException(Exception):
    """Base exception for all application-specific errors."""
    pass

class ConfigurationError(GistSyncException):
    """Error related to loading or validating the sync configuration."""
    pass

class ConnectorError(GistSyncException):
    """Error returned by a remote API behind a connector."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

class FetchError(ConnectorError):
    """Non-success response from the gist source for one tracked user."""

    def __init__(self, entity: str, message: str, status_code: int = 0):
        super().__init__(message, status_code)
        self.entity = entity

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message} for user: {self.entity}"

class PublishError(ConnectorError):
    """Non-created response from the activity destination for one record."""

    def __init__(self, message: str, status_code: int = 0, subject: Optional[str] = None):
        super().__init__(message, status_code)
        self.subject = subject

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message} for activity: {self.subject}"
