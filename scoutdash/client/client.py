"""Async HTTP client for the Scout APM REST API.

All operations are read-only. Every call returns the relevant part of the
``results`` envelope or raises a :class:`~scoutdash.client.errors.ScoutError`
subclass; transport failures and timeouts surface as plain ``ScoutError``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from scoutdash.client.errors import ApiError, AuthError, ScoutError
from scoutdash.client.helpers import (
    calculate_range,
    format_time,
    parse_time,
    validate_time_range,
)
from scoutdash.constants.defaults import TRAILING_WINDOW_DEFAULT
from scoutdash.constants.timeouts import API_REQUEST_TIMEOUT
from scoutdash.constants.values import (
    API_BASE,
    API_KEY_HEADER,
    USER_AGENT,
    VALID_INSIGHTS,
    VALID_METRICS,
)

logger = logging.getLogger(__name__)


def _dig(data: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None as soon as a level is missing."""
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _status_message(data: Any, default: str) -> str:
    message = _dig(data, "header", "status", "message")
    return message if isinstance(message, str) else default


def _check_metric_type(metric_type: str) -> None:
    if metric_type not in VALID_METRICS:
        raise ScoutError(
            f"Invalid metric_type. Must be one of: {', '.join(VALID_METRICS)}"
        )


def _check_insight_type(insight_type: str) -> None:
    if insight_type not in VALID_INSIGHTS:
        raise ScoutError(
            f"Invalid insight_type. Must be one of: {', '.join(VALID_INSIGHTS)}"
        )


def _optional_range(
    from_: str | None, to: str | None, range_: str | None
) -> tuple[str | None, str | None]:
    """Resolve an optional window; validated only when both ends are known."""
    if range_ is not None:
        from_, to = calculate_range(range_, to)
    if from_ is not None and to is not None:
        validate_time_range(from_, to)
    return from_, to


def _trailing_window(
    from_: str | None, to: str | None, range_: str | None
) -> tuple[str, str]:
    """Resolve a window that always has both ends (default trailing 7 days)."""
    if range_ is not None:
        start, end = calculate_range(range_, to)
    elif from_ is None and to is None:
        start, end = calculate_range(TRAILING_WINDOW_DEFAULT)
    else:
        end = to if to is not None else format_time(datetime.now(timezone.utc))
        start = from_ if from_ is not None else calculate_range(TRAILING_WINDOW_DEFAULT, end)[0]
    validate_time_range(start, end)
    return start, end


class ScoutClient:
    """Scout APM API client.

    The underlying ``httpx.AsyncClient`` is created on first use so the
    client binds to whichever event loop issues the first request.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_base: str = API_BASE,
        timeout: float = API_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> ScoutClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self._api_base,
                timeout=self._timeout,
                transport=self._transport,
                headers={
                    API_KEY_HEADER: self._api_key,
                    "User-Agent": USER_AGENT,
                    "Accept": "application/json",
                },
            )
        return self._http

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug("GET %s %s", path, query)
        try:
            response = await self._client().get(path, params=query)
        except httpx.HTTPError as e:
            raise ScoutError(str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code == 401:
            raise AuthError("Check your API key.")
        if not response.is_success:
            raise ApiError(
                _status_message(data, "API request failed"),
                status_code=response.status_code,
                response_data=data,
            )
        code = _dig(data, "header", "status", "code")
        if isinstance(code, int) and not isinstance(code, bool) and code >= 400:
            raise ApiError(
                _status_message(data, "Unknown API error"),
                status_code=code,
                response_data=data,
            )
        return data

    # =========================================================================
    # Applications
    # =========================================================================

    async def list_apps(self, active_since: str | None = None) -> list[dict[str, Any]]:
        """List applications accessible with the API key."""
        data = await self._get("/apps")
        apps = _dig(data, "results", "apps")
        if not isinstance(apps, list):
            return []
        if active_since is None:
            return apps
        try:
            since = parse_time(active_since)
        except ValueError as e:
            raise ScoutError(str(e)) from e
        return [app for app in apps if _reported_since(app, since)]

    async def get_app(self, app_id: int) -> Any:
        data = await self._get(f"/apps/{app_id}")
        return _dig(data, "results", "app")

    # =========================================================================
    # Metrics
    # =========================================================================

    async def list_metrics(self, app_id: int) -> list[str]:
        """List available metric types for an app."""
        data = await self._get(f"/apps/{app_id}/metrics")
        available = _dig(data, "results", "availableMetrics")
        if not isinstance(available, list):
            return []
        return [name for name in available if isinstance(name, str)]

    async def get_metric(
        self,
        app_id: int,
        metric_type: str,
        from_: str | None = None,
        to: str | None = None,
        range_: str | None = None,
    ) -> Any:
        """Get time-series data for one metric type."""
        _check_metric_type(metric_type)
        from_, to = _optional_range(from_, to, range_)
        data = await self._get(
            f"/apps/{app_id}/metrics/{metric_type}", {"from": from_, "to": to}
        )
        return _dig(data, "results", "series")

    # =========================================================================
    # Endpoints and traces
    # =========================================================================

    async def list_endpoints(
        self,
        app_id: int,
        from_: str | None = None,
        to: str | None = None,
        range_: str | None = None,
    ) -> Any:
        start, end = _trailing_window(from_, to, range_)
        data = await self._get(f"/apps/{app_id}/endpoints", {"from": start, "to": end})
        return _dig(data, "results")

    async def get_endpoint_metrics(
        self,
        app_id: int,
        endpoint_id: str,
        metric_type: str,
        from_: str | None = None,
        to: str | None = None,
        range_: str | None = None,
    ) -> Any:
        _check_metric_type(metric_type)
        from_, to = _optional_range(from_, to, range_)
        data = await self._get(
            f"/apps/{app_id}/endpoints/{endpoint_id}/metrics/{metric_type}",
            {"from": from_, "to": to},
        )
        return _dig(data, "results", "series")

    async def list_endpoint_traces(
        self,
        app_id: int,
        endpoint_id: str,
        from_: str | None = None,
        to: str | None = None,
        range_: str | None = None,
    ) -> Any:
        """List traces for an endpoint (max 100, within 7 days)."""
        start, end = _trailing_window(from_, to, range_)
        data = await self._get(
            f"/apps/{app_id}/endpoints/{endpoint_id}/traces", {"from": start, "to": end}
        )
        return _dig(data, "results")

    async def fetch_trace(self, app_id: int, trace_id: int) -> Any:
        data = await self._get(f"/apps/{app_id}/traces/{trace_id}")
        return _dig(data, "results", "trace")

    # =========================================================================
    # Errors
    # =========================================================================

    async def list_error_groups(
        self,
        app_id: int,
        from_: str | None = None,
        to: str | None = None,
        endpoint: str | None = None,
    ) -> list[Any]:
        if from_ is not None and to is not None:
            validate_time_range(from_, to)
        data = await self._get(
            f"/apps/{app_id}/error_groups",
            {"from": from_, "to": to, "endpoint": endpoint},
        )
        groups = _dig(data, "results", "error_groups")
        return groups if isinstance(groups, list) else []

    async def get_error_group(self, app_id: int, error_id: int) -> Any:
        data = await self._get(f"/apps/{app_id}/error_groups/{error_id}")
        return _dig(data, "results", "error_group")

    async def get_error_group_errors(self, app_id: int, error_id: int) -> list[Any]:
        """Get individual errors within an error group (max 100)."""
        data = await self._get(f"/apps/{app_id}/error_groups/{error_id}/errors")
        errors = _dig(data, "results", "errors")
        return errors if isinstance(errors, list) else []

    # =========================================================================
    # Insights
    # =========================================================================

    async def get_all_insights(self, app_id: int, limit: int | None = None) -> Any:
        data = await self._get(f"/apps/{app_id}/insights", {"limit": limit})
        return _dig(data, "results")

    async def get_insight_by_type(
        self, app_id: int, insight_type: str, limit: int | None = None
    ) -> Any:
        _check_insight_type(insight_type)
        data = await self._get(f"/apps/{app_id}/insights/{insight_type}", {"limit": limit})
        return _dig(data, "results")

    async def get_insights_history(
        self,
        app_id: int,
        from_: str | None = None,
        to: str | None = None,
        limit: int | None = None,
        pagination_cursor: int | None = None,
        pagination_direction: str | None = None,
        pagination_page: int | None = None,
    ) -> Any:
        """Get historical insights with cursor-based pagination."""
        data = await self._get(
            f"/apps/{app_id}/insights/history",
            {
                "from": from_,
                "to": to,
                "limit": limit,
                "pagination_cursor": pagination_cursor,
                "pagination_direction": pagination_direction,
                "pagination_page": pagination_page,
            },
        )
        return _dig(data, "results")

    async def get_insights_history_by_type(
        self,
        app_id: int,
        insight_type: str,
        from_: str | None = None,
        to: str | None = None,
        limit: int | None = None,
        pagination_cursor: int | None = None,
        pagination_direction: str | None = None,
        pagination_page: int | None = None,
    ) -> Any:
        _check_insight_type(insight_type)
        data = await self._get(
            f"/apps/{app_id}/insights/history/{insight_type}",
            {
                "from": from_,
                "to": to,
                "limit": limit,
                "pagination_cursor": pagination_cursor,
                "pagination_direction": pagination_direction,
                "pagination_page": pagination_page,
            },
        )
        return _dig(data, "results")


def _reported_since(app: Any, since: datetime) -> bool:
    reported = app.get("last_reported_at") if isinstance(app, dict) else None
    if not isinstance(reported, str):
        return False
    try:
        return parse_time(reported) >= since
    except ValueError:
        return False


__all__ = ["ScoutClient"]
