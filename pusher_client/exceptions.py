"""
Custom exceptions for the Pusher REST client library.
"""

from typing import Optional


class PusherClientError(Exception):
    """Base exception for Pusher client errors."""
    pass


class ConfigurationError(PusherClientError):
    """Raised when credentials or client options are invalid."""
    pass


class ServerFailureError(PusherClientError):
    """
    Raised when the API answers with a status other than 200.

    The message is the raw response body, as returned by the service.
    """

    def __init__(self, body: str, status_code: Optional[int] = None):
        super().__init__(body)
        self.body = body
        self.status_code = status_code
