"""
Pusher REST API client for a single application.

This module builds signed requests for the Pusher Channels HTTP API, sends
them with requests and decodes the responses into typed results.
"""

import json
import logging
import time
from typing import Any, List, Mapping, Optional, Sequence, Union

import requests

from .config import Credentials, load_credentials
from .constants import BODY_METHODS, DEFAULT_CONFIG, QUERY_METHODS
from .exceptions import ConfigurationError, ServerFailureError
from .responses import (
    BatchEvent,
    Channel,
    Channels,
    Event,
    Users,
    decode_batch_event,
    decode_channel,
    decode_channels,
    decode_event,
    decode_users,
)
from .signature import sign_request

logger = logging.getLogger(__name__)


class PusherService:
    """
    Client for one Pusher application.

    Holds the application's credentials and an HTTP session. Every public
    method performs exactly one blocking request.
    """

    def __init__(self, credentials: Credentials, session: Optional[requests.Session] = None, **config):
        """
        Initialize Pusher service.

        Args:
            credentials: Credentials for the application
            session: HTTP session to send requests with (a new one if omitted)
            **config: Configuration options (timeout)
        """
        self.credentials = credentials
        self.base_url = credentials.base_url

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()

        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_config(cls, provider, namespace: str, session: Optional[requests.Session] = None, **config):
        """Create a service from a configuration provider namespace."""
        return cls(load_credentials(provider, namespace), session=session, **config)

    def _validate_config(self):
        """Validate client configuration."""
        timeout = self.config['timeout']
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def _path(self, *parts: str) -> str:
        return '/apps/' + '/'.join((self.credentials.app_id,) + parts)

    def _make_request(
        self,
        path: str,
        method: str = 'GET',
        arguments: Optional[Mapping[str, Any]] = None,
    ) -> requests.Response:
        """
        Make a signed HTTP request.

        Args:
            path: Request path, starting with /apps/
            method: HTTP method
            arguments: Query parameters for GET, JSON body for POST

        Returns:
            requests.Response with status 200

        Raises:
            ServerFailureError: If the response status is not 200
            ValueError: If the method is not supported
        """
        method = method.upper()
        if method not in QUERY_METHODS and method not in BODY_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        timestamp = int(time.time())
        signed = sign_request(self.credentials, method, path, timestamp, arguments)

        kwargs = {'timeout': self.config['timeout']}
        if method in QUERY_METHODS:
            kwargs['params'] = {**signed.query_params, **(arguments or {})}
        else:
            kwargs['params'] = signed.query_params
            kwargs['headers'] = {'Content-Type': 'application/json'}
            if signed.body is not None:
                kwargs['data'] = signed.body

        logger.debug("Pusher request %s %s", method, path)
        response = self.session.request(method, self.base_url + path, **kwargs)

        if response.status_code != 200:
            logger.warning(
                "Pusher request %s %s failed with status %s", method, path, response.status_code
            )
            raise ServerFailureError(response.text, response.status_code)
        return response

    def get_users(self, channel: str) -> Optional[Users]:
        """
        Get the users subscribed to a presence channel.

        Args:
            channel: Channel name

        Returns:
            Users, or None if the response held nothing
        """
        response = self._make_request(self._path('channels', channel, 'users'))
        return decode_users(response.text)

    def batch_events(self, events: Sequence[Mapping[str, Any]]) -> Optional[BatchEvent]:
        """
        Trigger multiple events in one request.

        Args:
            events: Event dicts, each with name, channel and data keys

        Returns:
            BatchEvent, one entry per event in the batch
        """
        response = self._make_request(
            self._path('batch_events'), 'POST', {'batch': list(events)}
        )
        return decode_batch_event(response.text)

    def get_channel_info(self, channel: str, info_types: Sequence[str]) -> Optional[Channel]:
        """
        Fetch information for a single channel.

        Args:
            channel: Channel name
            info_types: Attributes to fetch, e.g. user_count, subscription_count

        Returns:
            Channel, or None if the response held nothing
        """
        response = self._make_request(
            self._path('channels', channel),
            arguments={'info': ','.join(info_types)},
        )
        return decode_channel(response.text)

    def get_channels_info(
        self,
        prefix: Optional[str] = None,
        info_types: Optional[Sequence[str]] = None,
    ) -> Optional[Channels]:
        """
        Fetch information for multiple channels.

        Args:
            prefix: Only return channels whose name starts with this
            info_types: Attributes to fetch, currently only user_count

        Returns:
            Channels, or None if the response held nothing
        """
        arguments = {}
        if prefix is not None:
            arguments['filter_by_prefix'] = prefix
        if info_types is not None:
            arguments['info'] = ','.join(info_types)
        response = self._make_request(self._path('channels'), arguments=arguments)
        return decode_channels(response.text)

    def trigger_event(
        self,
        name: str,
        data: Any,
        channels: Union[str, List[str]],
        socket_id: Optional[str] = None,
        info: Optional[Sequence[str]] = None,
    ) -> Optional[Event]:
        """
        Trigger a single event.

        Args:
            name: Event name
            data: JSON serializable event payload, sent as a JSON string
            channels: One channel name, or a list of channel names
            socket_id: Exclude the event from this socket id
            info: Attributes to return for each channel triggered to

        Returns:
            Event, or None if the response held nothing
        """
        request_data = {
            'name': name,
            'data': json.dumps(data, separators=(',', ':')),
        }
        if isinstance(channels, str):
            request_data['channel'] = channels
        else:
            request_data['channels'] = list(channels)
        if socket_id is not None:
            request_data['socket_id'] = socket_id
        if info is not None:
            request_data['info'] = ','.join(info)

        response = self._make_request(self._path('events'), 'POST', request_data)
        return decode_event(response.text)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
