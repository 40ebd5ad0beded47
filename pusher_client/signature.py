"""
Request signing for the Pusher REST API.

Every request carries auth_key, auth_timestamp, auth_version and
auth_signature query parameters. The signature is an HMAC-SHA256 over a
canonical string built from the method, the path and the signed parameters:

    METHOD\\nPATH\\nauth_key=K&auth_timestamp=T&auth_version=V[&body_md5=H][&k=v...]
"""

import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .constants import (
    BODY_METHODS,
    PARAM_AUTH_KEY,
    PARAM_AUTH_SIGNATURE,
    PARAM_AUTH_TIMESTAMP,
    PARAM_AUTH_VERSION,
    PARAM_BODY_MD5,
    QUERY_METHODS,
)


@dataclass(frozen=True)
class SignedRequest:
    """A request ready to hand to the transport. Built once, never reused."""

    method: str
    path: str
    query_params: Dict[str, str]
    body: Optional[bytes]
    timestamp: int
    signature: str


def serialize_body(arguments: Any) -> bytes:
    """Serialize a request body exactly as it is sent on the wire."""
    return json.dumps(arguments, separators=(',', ':')).encode('utf-8')


def body_md5(body: bytes) -> str:
    """Hex MD5 digest of the body bytes."""
    return hashlib.md5(body).hexdigest()


def build_canonical_string(
    method: str,
    path: str,
    timestamp: int,
    auth_key: str,
    auth_version: str,
    body_hash: Optional[str] = None,
    query_params: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Build the string that gets signed.

    Args:
        method: HTTP method
        path: Request path, starting with /apps/
        timestamp: Unix timestamp in seconds
        auth_key: Application key
        auth_version: Auth protocol version
        body_hash: MD5 of the body, only for methods that carry one
        query_params: Caller query parameters, only signed for GET

    Returns:
        Canonical string
    """
    method = method.upper()
    data = (
        f"{method}\n{path}\n"
        f"{PARAM_AUTH_KEY}={auth_key}"
        f"&{PARAM_AUTH_TIMESTAMP}={timestamp}"
        f"&{PARAM_AUTH_VERSION}={auth_version}"
    )
    if body_hash is not None and method not in QUERY_METHODS:
        data += f"&{PARAM_BODY_MD5}={body_hash}"
    if method == 'GET' and query_params:
        for key in sorted(query_params):
            data += f"&{key}={query_params[key]}"
    return data


def sign(
    secret: str,
    method: str,
    path: str,
    timestamp: int,
    auth_key: str,
    auth_version: str,
    body_hash: Optional[str] = None,
    query_params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Return the lowercase hex HMAC-SHA256 signature for a request."""
    data = build_canonical_string(
        method, path, timestamp, auth_key, auth_version, body_hash, query_params
    )
    mac = hmac.new(
        secret.encode('utf-8'),
        data.encode('utf-8'),
        hashlib.sha256
    )
    return mac.hexdigest()


def sign_request(
    credentials,
    method: str,
    path: str,
    timestamp: int,
    arguments: Optional[Mapping[str, Any]] = None,
) -> SignedRequest:
    """
    Produce the auth query parameters and body for a request.

    The body is serialized once and both hashed and returned, so the
    signed bytes and the sent bytes are always the same.

    Args:
        credentials: Credentials for the target application
        method: HTTP method
        path: Request path
        timestamp: Unix timestamp captured for this request
        arguments: Caller parameters (query for GET, JSON body for POST)

    Returns:
        SignedRequest with the auth query parameters (caller query
        parameters are not merged in)
    """
    method = method.upper()
    body = None
    body_hash = None
    if arguments is not None and method in BODY_METHODS:
        body = serialize_body(arguments)
        body_hash = body_md5(body)

    query_params = {
        PARAM_AUTH_KEY: credentials.auth_key,
        PARAM_AUTH_TIMESTAMP: str(timestamp),
        PARAM_AUTH_VERSION: credentials.auth_version,
    }
    if body_hash is not None:
        query_params[PARAM_BODY_MD5] = body_hash

    signature = sign(
        credentials.secret,
        method,
        path,
        timestamp,
        credentials.auth_key,
        credentials.auth_version,
        body_hash,
        arguments if method == 'GET' else None,
    )
    query_params[PARAM_AUTH_SIGNATURE] = signature

    return SignedRequest(
        method=method,
        path=path,
        query_params=query_params,
        body=body,
        timestamp=timestamp,
        signature=signature,
    )
