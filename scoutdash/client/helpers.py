"""Helpers for time ranges, timestamp display and Scout APM URL parsing."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import urlparse

from scoutdash.client.errors import ScoutError
from scoutdash.constants.enums import ScoutUrlType
from scoutdash.constants.limits import MAX_QUERY_RANGE_SECONDS

_RANGE_RE = re.compile(r"^(\d+)(.*)$")


# =============================================================================
# Time parsing and formatting
# =============================================================================


def parse_time(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted, and naive timestamps are taken as UTC.

    Raises:
        ValueError: If the string is not a valid ISO 8601 timestamp.
    """
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_time(moment: datetime) -> str:
    """Format a datetime as the ISO 8601 form the API expects."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def format_timestamp_display(value: str, use_utc: bool) -> str:
    """Format an ISO 8601 timestamp for display.

    Returns the original string unchanged when it cannot be parsed.
    """
    try:
        moment = parse_time(value)
    except ValueError:
        return value
    if use_utc:
        return moment.strftime("%Y-%m-%d %H:%M:%S UTC")
    local = moment.astimezone()
    return f"{local.strftime('%Y-%m-%d %H:%M:%S')} {_format_offset(local)}"


def _format_offset(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


# =============================================================================
# Ranges
# =============================================================================


def parse_range(range_str: str) -> int:
    """Parse a range string such as ``30min``, ``2hrs`` or ``7days`` into seconds."""
    text = range_str.strip().lower().replace(" ", "")
    match = _RANGE_RE.match(text)
    if match is None:
        raise ScoutError(f"Invalid range: {range_str}")
    amount = int(match.group(1))
    unit = match.group(2).strip()
    if unit.startswith("min"):
        return amount * 60
    if unit.startswith("hr") or unit.startswith("hour"):
        return amount * 3600
    if unit.startswith("day"):
        return amount * 86400
    raise ScoutError(f"Unknown time unit in range: {range_str}")


def calculate_range(range_str: str, to: str | None = None) -> tuple[str, str]:
    """Return ``(from, to)`` ISO strings for a range ending at ``to`` (or now)."""
    if to is None:
        end = datetime.now(timezone.utc)
    else:
        try:
            end = parse_time(to)
        except ValueError as e:
            raise ScoutError(str(e)) from e
    start = end - timedelta(seconds=parse_range(range_str))
    return format_time(start), format_time(end)


def validate_time_range(from_: str, to: str) -> None:
    """Reject inverted ranges and ranges longer than two weeks."""
    try:
        start = parse_time(from_)
        end = parse_time(to)
    except ValueError as e:
        raise ScoutError(str(e)) from e
    if start >= end:
        raise ScoutError("from_time must be before to_time")
    if (end - start).total_seconds() > MAX_QUERY_RANGE_SECONDS:
        raise ScoutError("Time range cannot exceed 2 weeks")


# =============================================================================
# URL parsing
# =============================================================================


@dataclass(frozen=True)
class ParsedScoutUrl:
    """Identifiers extracted from a Scout APM web URL."""

    url_type: ScoutUrlType
    app_id: int | None = None
    endpoint_id: str | None = None
    trace_id: int | None = None
    error_id: int | None = None
    insight_type: str | None = None
    decoded_endpoint: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["url_type"] = self.url_type.value
        return data


def _segment_after(segments: list[str], marker: str) -> str | None:
    if marker not in segments:
        return None
    index = segments.index(marker)
    if index + 1 < len(segments):
        return segments[index + 1]
    return None


def _as_int(value: str | None) -> int | None:
    if value is None or not value.isdigit():
        return None
    return int(value)


def parse_scout_url(url: str) -> ParsedScoutUrl:
    """Parse a Scout APM URL and extract resource identifiers."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ScoutError(f"Invalid URL: {url}")
    segments = parsed.path.strip("/").split("/")

    app_id = _as_int(_segment_after(segments, "apps"))
    if "trace" in segments:
        url_type = ScoutUrlType.TRACE
    elif "endpoints" in segments:
        url_type = ScoutUrlType.ENDPOINT
    elif "error_groups" in segments:
        url_type = ScoutUrlType.ERROR_GROUP
    elif "insights" in segments:
        url_type = ScoutUrlType.INSIGHT
    elif "apps" in segments and len(segments) >= 2 and segments[0] == "apps":
        url_type = ScoutUrlType.APP
    else:
        url_type = ScoutUrlType.UNKNOWN

    endpoint_id = _segment_after(segments, "endpoints")
    decoded_endpoint = None
    if endpoint_id is not None:
        try:
            decoded_endpoint = decode_endpoint_id(endpoint_id)
        except ValueError:
            decoded_endpoint = None

    return ParsedScoutUrl(
        url_type=url_type,
        app_id=app_id,
        endpoint_id=endpoint_id,
        trace_id=_as_int(_segment_after(segments, "trace")),
        error_id=_as_int(_segment_after(segments, "error_groups")),
        insight_type=_segment_after(segments, "insights"),
        decoded_endpoint=decoded_endpoint,
    )


def decode_endpoint_id(endpoint_id: str) -> str:
    """Decode a base64url endpoint ID into readable text.

    Raises:
        ValueError: If the ID is not valid base64 or not UTF-8.
    """
    raw = endpoint_id.encode("ascii", errors="strict")
    padded = raw + b"=" * (-len(raw) % 4)
    try:
        decoded = base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error:
        try:
            decoded = base64.b64decode(padded, validate=True)
        except binascii.Error as e:
            raise ValueError(str(e)) from e
    return decoded.decode("utf-8")


__all__ = [
    "ParsedScoutUrl",
    "calculate_range",
    "decode_endpoint_id",
    "format_time",
    "format_timestamp_display",
    "parse_range",
    "parse_scout_url",
    "parse_time",
    "validate_time_range",
]
