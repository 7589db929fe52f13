"""
HTTP clients for the remote APIs.
"""

import requests


def response_error_message(response: requests.Response, key: str) -> str:
    """Pull the server-provided error text out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "Unknown error"
    if isinstance(body, dict) and body.get(key):
        return str(body[key])
    return response.text or "Unknown error"
