"""
Multi-application facade over PusherService.

Each operation takes a configuration namespace and is routed to the
PusherService for that namespace, created on first use and cached for the
lifetime of the Pusher instance.
"""

import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import requests

from .client import PusherService
from .config import MappingConfig, load_credentials
from .constants import DEFAULT_NAMESPACE
from .responses import BatchEvent, Channel, Channels, Event, Users

logger = logging.getLogger(__name__)


class Pusher:
    """
    Pusher client that resolves credentials by configuration namespace.

    Services are cached per namespace and never evicted. The cache is
    guarded by a lock on first construction; all services share one
    HTTP session.
    """

    def __init__(self, config, session: Optional[requests.Session] = None, **options):
        """
        Initialize Pusher facade.

        Args:
            config: Provider with get_setting(namespace), or a dict of
                namespace -> settings
            session: HTTP session shared by every namespace
            **options: Options passed to each PusherService (timeout)
        """
        if isinstance(config, Mapping):
            config = MappingConfig(config)
        self.config = config
        self.options = options
        self.session = session if session is not None else requests.Session()
        self._connections: Dict[str, PusherService] = {}
        self._lock = threading.Lock()

    def get_service(self, namespace: str = DEFAULT_NAMESPACE) -> PusherService:
        """
        Return the cached service for a namespace, creating it if needed.

        Raises:
            ConfigurationError: If the namespace configuration is invalid
        """
        service = self._connections.get(namespace)
        if service is not None:
            return service

        with self._lock:
            service = self._connections.get(namespace)
            if service is None:
                credentials = load_credentials(self.config, namespace)
                service = PusherService(credentials, session=self.session, **self.options)
                self._connections[namespace] = service
                logger.debug("Created Pusher connection for namespace %s", namespace)
        return service

    def get_users(self, channel: str, namespace: str = DEFAULT_NAMESPACE) -> Optional[Users]:
        """Get the users subscribed to a presence channel."""
        return self.get_service(namespace).get_users(channel)

    def batch_events(
        self,
        events: Sequence[Mapping[str, Any]],
        namespace: str = DEFAULT_NAMESPACE,
    ) -> Optional[BatchEvent]:
        """Trigger multiple events in one request."""
        return self.get_service(namespace).batch_events(events)

    def channel_info(
        self,
        channel: str,
        info_types: Sequence[str],
        namespace: str = DEFAULT_NAMESPACE,
    ) -> Optional[Channel]:
        """Fetch information for a single channel."""
        return self.get_service(namespace).get_channel_info(channel, info_types)

    def channels_info(
        self,
        prefix: Optional[str] = None,
        info_types: Optional[Sequence[str]] = None,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> Optional[Channels]:
        """Fetch information for multiple channels."""
        return self.get_service(namespace).get_channels_info(prefix, info_types)

    def trigger_event(
        self,
        name: str,
        data: Any,
        channels: Union[str, List[str]],
        socket_id: Optional[str] = None,
        info: Optional[Sequence[str]] = None,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> Optional[Event]:
        """Trigger a single event on one or more channels."""
        return self.get_service(namespace).trigger_event(name, data, channels, socket_id, info)

    def close(self):
        """Close the HTTP session shared by every cached service."""
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
