"""Scout APM API client package: HTTP client, errors, helpers, secrets."""

from scoutdash.client.client import ScoutClient
from scoutdash.client.errors import ApiError, AuthError, ScoutError
from scoutdash.client.helpers import (
    format_timestamp_display,
    parse_scout_url,
)
from scoutdash.client.secret import ApiKeySource, get_api_key

__all__ = [
    "ApiError",
    "ApiKeySource",
    "AuthError",
    "ScoutClient",
    "ScoutError",
    "format_timestamp_display",
    "get_api_key",
    "parse_scout_url",
]
