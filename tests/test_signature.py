"""
Unit tests for request signing.
"""

import hashlib
import hmac
import json

import pytest

from pusher_client import Credentials, sign, sign_request
from pusher_client.signature import body_md5, build_canonical_string, serialize_body


class TestSignature:
    """Test canonical string construction and signing."""

    @pytest.fixture
    def credentials(self):
        """Create test credentials."""
        return Credentials(cluster="us2", app_id="3", auth_key="278d425bdf160c739803", secret="7ad3773142a6692b25b8")

    def test_canonical_string_get(self):
        """Test canonical string for a GET without caller parameters."""
        data = build_canonical_string("GET", "/apps/3/channels", 1353088179, "key", "1.0")

        assert data == "GET\n/apps/3/channels\nauth_key=key&auth_timestamp=1353088179&auth_version=1.0"

    def test_canonical_string_sorts_query_params(self):
        """Test GET parameters are appended sorted by key, values verbatim."""
        data = build_canonical_string(
            "GET", "/apps/3/channels", 10, "key", "1.0",
            query_params={"info": "user_count,subscription_count", "filter_by_prefix": "presence-"}
        )

        assert data.endswith(
            "&auth_version=1.0&filter_by_prefix=presence-&info=user_count,subscription_count"
        )

    def test_canonical_string_post_body_md5(self):
        """Test body_md5 is included for POST and query params are not."""
        data = build_canonical_string(
            "POST", "/apps/3/events", 10, "key", "1.0",
            body_hash="ec365a775a4cd0599faeb73354201b6f",
            query_params={"ignored": "x"}
        )

        assert data == (
            "POST\n/apps/3/events\n"
            "auth_key=key&auth_timestamp=10&auth_version=1.0"
            "&body_md5=ec365a775a4cd0599faeb73354201b6f"
        )

    def test_canonical_string_get_ignores_body_md5(self):
        """Test body_md5 is never part of a GET canonical string."""
        data = build_canonical_string("GET", "/apps/3/channels", 10, "key", "1.0", body_hash="abc")

        assert "body_md5" not in data

    def test_sign_matches_hmac_sha256(self):
        """Test signature is lowercase hex HMAC-SHA256 of the canonical string."""
        signature = sign("secret", "GET", "/apps/3/channels", 10, "key", "1.0", query_params={"info": "user_count"})

        expected = hmac.new(
            b"secret",
            b"GET\n/apps/3/channels\nauth_key=key&auth_timestamp=10&auth_version=1.0&info=user_count",
            hashlib.sha256
        ).hexdigest()
        assert signature == expected
        assert signature == signature.lower()
        assert len(signature) == 64

    def test_sign_is_deterministic(self):
        """Test identical inputs always produce the same signature."""
        args = ("secret", "GET", "/apps/3/channels", 10, "key", "1.0")

        assert sign(*args) == sign(*args)

    def test_sign_ignores_param_order(self):
        """Test changing only parameter order does not change the signature."""
        first = sign("secret", "GET", "/p", 10, "key", "1.0", query_params={"a": "1", "b": "2", "c": "3"})
        second = sign("secret", "GET", "/p", 10, "key", "1.0", query_params={"c": "3", "a": "1", "b": "2"})

        assert first == second

    def test_sign_changes_with_timestamp(self):
        """Test the timestamp is part of the signature."""
        assert sign("secret", "GET", "/p", 10, "key", "1.0") != sign("secret", "GET", "/p", 11, "key", "1.0")

    def test_sign_request_get(self, credentials):
        """Test auth parameters for a GET request."""
        signed = sign_request(credentials, "get", "/apps/3/channels", 1353088179, {"info": "user_count"})

        assert signed.method == "GET"
        assert signed.body is None
        assert list(signed.query_params) == ["auth_key", "auth_timestamp", "auth_version", "auth_signature"]
        assert signed.query_params["auth_key"] == "278d425bdf160c739803"
        assert signed.query_params["auth_timestamp"] == "1353088179"
        assert signed.query_params["auth_version"] == "1.0"
        assert signed.signature == sign(
            "7ad3773142a6692b25b8", "GET", "/apps/3/channels", 1353088179,
            "278d425bdf160c739803", "1.0", query_params={"info": "user_count"}
        )
        assert signed.query_params["auth_signature"] == signed.signature

    def test_sign_request_post(self, credentials):
        """Test body_md5 matches the exact body bytes for a POST."""
        arguments = {"name": "foo", "channels": ["project-3"], "data": json.dumps({"some": "data"})}
        signed = sign_request(credentials, "POST", "/apps/3/events", 1353088179, arguments)

        assert signed.body == serialize_body(arguments)
        assert signed.query_params["body_md5"] == hashlib.md5(signed.body).hexdigest()
        assert list(signed.query_params) == [
            "auth_key", "auth_timestamp", "auth_version", "body_md5", "auth_signature"
        ]

    def test_sign_request_post_body_change_changes_signature(self, credentials):
        """Test altering any body field changes the signature."""
        first = sign_request(credentials, "POST", "/apps/3/events", 10, {"name": "foo"})
        second = sign_request(credentials, "POST", "/apps/3/events", 10, {"name": "bar"})

        assert first.query_params["body_md5"] != second.query_params["body_md5"]
        assert first.signature != second.signature

    def test_sign_request_post_without_body(self, credentials):
        """Test a POST without arguments carries no body_md5."""
        signed = sign_request(credentials, "POST", "/apps/3/events", 10)

        assert signed.body is None
        assert "body_md5" not in signed.query_params

    def test_sign_request_delete_has_no_body(self, credentials):
        """Test DELETE arguments are never hashed as a body."""
        signed = sign_request(credentials, "DELETE", "/apps/3/users/1", 10, {"x": "y"})

        assert signed.body is None
        assert "body_md5" not in signed.query_params

    def test_body_md5(self):
        """Test body hash is the hex MD5 digest."""
        assert body_md5(b"") == "d41d8cd98f00b204e9800998ecf8427e"

    def test_serialize_body_compact(self):
        """Test body serialization uses compact separators."""
        assert serialize_body({"batch": [{"a": 1}]}) == b'{"batch":[{"a":1}]}'
