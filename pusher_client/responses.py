"""
Typed results for Pusher REST API responses.

Each endpoint decodes into its own dataclass. Optional numeric fields stay
None when the service did not report them, so a missing subscription count
is never confused with zero subscribers. An empty or unparseable body
decodes to None.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class User:
    id: str


@dataclass
class Users:
    users: List[User] = field(default_factory=list)


@dataclass
class ChannelSummary:
    user_count: Optional[int] = None
    subscription_count: Optional[int] = None


@dataclass
class Channel:
    occupied: Optional[bool] = None
    user_count: Optional[int] = None
    subscription_count: Optional[int] = None


@dataclass
class Channels:
    channels: Dict[str, ChannelSummary] = field(default_factory=dict)


@dataclass
class Event:
    channels: Dict[str, ChannelSummary] = field(default_factory=dict)


@dataclass
class BatchEvent:
    batch: List[ChannelSummary] = field(default_factory=list)


def parse_json(raw_body: Optional[str]) -> Optional[dict]:
    """
    Parse a response body into a JSON object.

    Returns None for an empty body, invalid JSON, or a top-level value
    that is not an object.
    """
    if not raw_body:
        return None
    try:
        payload = json.loads(raw_body)
    except (ValueError, RecursionError):
        logger.debug("Response body is not valid JSON, no result")
        return None
    if not isinstance(payload, dict):
        logger.debug("Response body is not a JSON object, no result")
        return None
    return payload


def _optional_int(value: Any) -> Optional[int]:
    # bool is a subclass of int, it is never a count
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _optional_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _summary(data: Any) -> ChannelSummary:
    if not isinstance(data, dict):
        return ChannelSummary()
    return ChannelSummary(
        user_count=_optional_int(data.get('user_count')),
        subscription_count=_optional_int(data.get('subscription_count')),
    )


def _summaries(data: Any) -> Dict[str, ChannelSummary]:
    if not isinstance(data, dict):
        return {}
    return {name: _summary(info) for name, info in data.items()}


def users_from_json(payload: dict) -> Users:
    entries = payload.get('users')
    if not isinstance(entries, list):
        entries = []
    users = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        user_id = entry.get('id')
        # numeric ids are accepted, bool and null are not
        if isinstance(user_id, str) or (isinstance(user_id, int) and not isinstance(user_id, bool)):
            users.append(User(id=str(user_id)))
    return Users(users=users)


def channel_from_json(payload: dict) -> Channel:
    return Channel(
        occupied=_optional_bool(payload.get('occupied')),
        user_count=_optional_int(payload.get('user_count')),
        subscription_count=_optional_int(payload.get('subscription_count')),
    )


def channels_from_json(payload: dict) -> Channels:
    return Channels(channels=_summaries(payload.get('channels')))


def event_from_json(payload: dict) -> Event:
    return Event(channels=_summaries(payload.get('channels')))


def batch_event_from_json(payload: dict) -> BatchEvent:
    batch = payload.get('batch')
    if not isinstance(batch, list):
        batch = []
    return BatchEvent(batch=[_summary(entry) for entry in batch])


RESULT_KINDS: Dict[str, Callable[[dict], Any]] = {
    'users': users_from_json,
    'channel': channel_from_json,
    'channels': channels_from_json,
    'event': event_from_json,
    'batch_event': batch_event_from_json,
}


def decode(raw_body: Optional[str], kind: str):
    """
    Decode a raw response body into the result type for an endpoint.

    Args:
        raw_body: Response body text
        kind: One of RESULT_KINDS

    Returns:
        Typed result, or None when the body is empty or not a JSON object

    Raises:
        ValueError: If kind is unknown
    """
    try:
        projector = RESULT_KINDS[kind]
    except KeyError:
        raise ValueError(f"Unknown result kind: {kind}")

    payload = parse_json(raw_body)
    if payload is None:
        return None
    return projector(payload)


def decode_users(raw_body: Optional[str]) -> Optional[Users]:
    return decode(raw_body, 'users')


def decode_channel(raw_body: Optional[str]) -> Optional[Channel]:
    return decode(raw_body, 'channel')


def decode_channels(raw_body: Optional[str]) -> Optional[Channels]:
    return decode(raw_body, 'channels')


def decode_event(raw_body: Optional[str]) -> Optional[Event]:
    return decode(raw_body, 'event')


def decode_batch_event(raw_body: Optional[str]) -> Optional[BatchEvent]:
    return decode(raw_body, 'batch_event')
