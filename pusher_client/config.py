"""
Configuration loading for Pusher connections.

A configuration provider maps a namespace name to a settings object holding
cluster, key, appid and secret. Settings may be a mapping or any object with
those attributes.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .constants import AUTH_VERSION, PUSHER_URL, REQUIRED_CONFIG_KEYS
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """Immutable credentials for one Pusher application."""

    cluster: str
    app_id: str
    auth_key: str
    secret: str = field(repr=False)
    auth_version: str = AUTH_VERSION

    @property
    def base_url(self) -> str:
        return PUSHER_URL.replace('{cluster}', self.cluster)


class MappingConfig:
    """Configuration provider backed by a dict of namespace -> settings."""

    def __init__(self, settings: Mapping[str, Any]):
        self.settings = settings

    def get_setting(self, namespace: str) -> Optional[Any]:
        return self.settings.get(namespace)


class EnvironmentConfig:
    """
    Configuration provider backed by environment variables.

    Namespace "pusher" reads PUSHER_CLUSTER, PUSHER_KEY, PUSHER_APPID and
    PUSHER_SECRET. Characters other than letters and digits in the namespace
    become underscores.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    @staticmethod
    def prefix(namespace: str) -> str:
        return re.sub(r'[^A-Za-z0-9]', '_', namespace).upper()

    def get_setting(self, namespace: str) -> dict:
        prefix = self.prefix(namespace)
        return {
            name: self.environ.get(f"{prefix}_{name.upper()}")
            for name in REQUIRED_CONFIG_KEYS
        }


def _read_field(settings: Any, name: str) -> Any:
    if settings is None:
        return None
    if isinstance(settings, Mapping):
        return settings.get(name)
    return getattr(settings, name, None)


def load_credentials(provider, namespace: str) -> Credentials:
    """
    Resolve and validate credentials for a namespace.

    Args:
        provider: Object with a get_setting(namespace) method
        namespace: Configuration namespace

    Returns:
        Credentials

    Raises:
        ConfigurationError: If any required key is missing or empty
    """
    settings = provider.get_setting(namespace)
    values = {name: _read_field(settings, name) for name in REQUIRED_CONFIG_KEYS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Invalid pusher configuration key: {namespace}. "
            f"Please ensure all keys are set.\n"
            f"Required keys: {', '.join(REQUIRED_CONFIG_KEYS)} "
            f"(missing: {', '.join(missing)})"
        )

    return Credentials(
        cluster=str(values['cluster']),
        app_id=str(values['appid']),
        auth_key=str(values['key']),
        secret=str(values['secret']),
    )
