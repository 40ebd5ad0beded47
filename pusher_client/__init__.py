"""
Pusher REST Client Library

A Python client library for the Pusher Channels HTTP API that signs
requests with HMAC-SHA256 and decodes responses into typed results.

Example usage:
    from pusher_client import Pusher

    pusher = Pusher({"pusher": {"cluster": "mt1", "key": "...", "appid": "...", "secret": "..."}})
    result = pusher.trigger_event("my-event", {"message": "hi"}, "my-channel")
"""

from .client import PusherService
from .config import Credentials, EnvironmentConfig, MappingConfig, load_credentials
from .exceptions import (
    PusherClientError,
    ConfigurationError,
    ServerFailureError
)
from .pusher import Pusher
from .responses import (
    BatchEvent,
    Channel,
    Channels,
    ChannelSummary,
    Event,
    User,
    Users
)
from .signature import SignedRequest, sign, sign_request
from .constants import (
    AUTH_VERSION,
    DEFAULT_CONFIG,
    DEFAULT_NAMESPACE,
    PUSHER_URL
)

__version__ = "1.0.0"
__all__ = [
    "Pusher",
    "PusherService",
    "Credentials",
    "EnvironmentConfig",
    "MappingConfig",
    "load_credentials",
    "PusherClientError",
    "ConfigurationError",
    "ServerFailureError",
    "BatchEvent",
    "Channel",
    "Channels",
    "ChannelSummary",
    "Event",
    "User",
    "Users",
    "SignedRequest",
    "sign",
    "sign_request",
    "AUTH_VERSION",
    "DEFAULT_CONFIG",
    "DEFAULT_NAMESPACE",
    "PUSHER_URL"
]
