"""
Constants for the Pusher REST client library.
Values follow the Pusher Channels HTTP API reference.
"""

# Base URL, {cluster} is substituted from configuration
PUSHER_URL = "https://api-{cluster}.pusher.com"

# Only auth version accepted by the REST API
AUTH_VERSION = "1.0"

# Configuration namespace used when none is given
DEFAULT_NAMESPACE = "pusher"

# Configuration keys every namespace must define
REQUIRED_CONFIG_KEYS = ("cluster", "key", "appid", "secret")

# Query parameter names used for request authentication
PARAM_AUTH_KEY = "auth_key"
PARAM_AUTH_TIMESTAMP = "auth_timestamp"
PARAM_AUTH_VERSION = "auth_version"
PARAM_AUTH_SIGNATURE = "auth_signature"
PARAM_BODY_MD5 = "body_md5"

# HTTP methods whose caller arguments travel in the query string
QUERY_METHODS = ("GET", "DELETE")

# HTTP methods whose caller arguments travel as a JSON body
BODY_METHODS = ("POST", "PUT", "PATCH")

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
}
