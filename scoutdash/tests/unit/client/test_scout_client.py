"""Unit tests for ScoutClient.

This module tests:
- Request headers and query parameters
- Status mapping to AuthError / ApiError / ScoutError
- Result envelope unwrapping per operation
- Client-side validation before any request is sent
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from scoutdash.client.client import ScoutClient
from scoutdash.client.errors import ApiError, AuthError, ScoutError
from scoutdash.constants.values import API_KEY_HEADER, USER_AGENT


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status: int = 200, payload: Any = None, raise_error: bool = False) -> None:
        self.status = status
        self.payload = payload if payload is not None else {"results": {}}
        self.raise_error = raise_error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(self.status, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _client(recorder: Recorder) -> ScoutClient:
    return ScoutClient(
        "secret-key",
        api_base="https://scout.test/api/v0/",
        transport=httpx.MockTransport(recorder),
    )


# =============================================================================
# Transport and status handling
# =============================================================================


class TestRequests:
    """Tests for the shared request path."""

    @pytest.mark.asyncio
    async def test_headers_and_url(self) -> None:
        recorder = Recorder(payload={"results": {"apps": []}})
        async with _client(recorder) as client:
            await client.list_apps()
        request = recorder.last
        assert request.method == "GET"
        assert str(request.url) == "https://scout.test/api/v0/apps"
        assert request.headers[API_KEY_HEADER] == "secret-key"
        assert request.headers["User-Agent"] == USER_AGENT
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_none_params_are_omitted(self) -> None:
        recorder = Recorder()
        async with _client(recorder) as client:
            await client.get_all_insights(5)
            await client.get_all_insights(5, limit=10)
        first, second = recorder.requests
        assert first.url.params.get("limit") is None
        assert second.url.params["limit"] == "10"

    @pytest.mark.asyncio
    async def test_unauthorized(self) -> None:
        recorder = Recorder(status=401, payload={"header": {}})
        async with _client(recorder) as client:
            with pytest.raises(AuthError) as excinfo:
                await client.list_apps()
        assert str(excinfo.value) == "Authentication failed: Check your API key."

    @pytest.mark.asyncio
    async def test_http_error_uses_header_message(self) -> None:
        payload = {"header": {"status": {"code": 404, "message": "App not found"}}}
        recorder = Recorder(status=404, payload=payload)
        async with _client(recorder) as client:
            with pytest.raises(ApiError) as excinfo:
                await client.get_app(9)
        assert excinfo.value.status_code == 404
        assert excinfo.value.response_data == payload
        assert str(excinfo.value) == "API error: App not found"

    @pytest.mark.asyncio
    async def test_http_error_default_message(self) -> None:
        recorder = Recorder(status=500, payload={"oops": True})
        async with _client(recorder) as client:
            with pytest.raises(ApiError, match="API request failed"):
                await client.get_app(9)

    @pytest.mark.asyncio
    async def test_error_code_inside_successful_response(self) -> None:
        payload = {"header": {"status": {"code": 422, "message": "Bad range"}}}
        recorder = Recorder(status=200, payload=payload)
        async with _client(recorder) as client:
            with pytest.raises(ApiError) as excinfo:
                await client.get_app(9)
        assert excinfo.value.status_code == 422

    @pytest.mark.asyncio
    async def test_transport_failure_is_generic(self) -> None:
        recorder = Recorder(raise_error=True)
        async with _client(recorder) as client:
            with pytest.raises(ScoutError) as excinfo:
                await client.list_apps()
        assert not isinstance(excinfo.value, (AuthError, ApiError))
        assert "connection refused" in str(excinfo.value)


# =============================================================================
# Operations
# =============================================================================


class TestApplications:
    """Tests for list_apps() and get_app()."""

    APPS = {
        "results": {
            "apps": [
                {"id": 1, "name": "Shop", "last_reported_at": "2024-05-02T10:00:00Z"},
                {"id": 2, "name": "Blog", "last_reported_at": "2024-04-01T10:00:00Z"},
                {"id": 3, "name": "Quiet"},
            ]
        }
    }

    @pytest.mark.asyncio
    async def test_list_apps(self) -> None:
        async with _client(Recorder(payload=self.APPS)) as client:
            apps = await client.list_apps()
        assert [app["id"] for app in apps] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_active_since_filter(self) -> None:
        async with _client(Recorder(payload=self.APPS)) as client:
            apps = await client.list_apps("2024-05-01T00:00:00Z")
        assert [app["name"] for app in apps] == ["Shop"]

    @pytest.mark.asyncio
    async def test_invalid_active_since(self) -> None:
        async with _client(Recorder(payload=self.APPS)) as client:
            with pytest.raises(ScoutError):
                await client.list_apps("last tuesday")

    @pytest.mark.asyncio
    async def test_missing_apps_key(self) -> None:
        async with _client(Recorder(payload={"results": {}})) as client:
            assert await client.list_apps() == []

    @pytest.mark.asyncio
    async def test_get_app(self) -> None:
        recorder = Recorder(payload={"results": {"app": {"id": 7}}})
        async with _client(recorder) as client:
            assert await client.get_app(7) == {"id": 7}
        assert recorder.last.url.path == "/api/v0/apps/7"


class TestMetrics:
    """Tests for metric operations."""

    @pytest.mark.asyncio
    async def test_list_metrics_keeps_strings(self) -> None:
        payload = {"results": {"availableMetrics": ["apdex", 3, "throughput"]}}
        async with _client(Recorder(payload=payload)) as client:
            assert await client.list_metrics(1) == ["apdex", "throughput"]

    @pytest.mark.asyncio
    async def test_get_metric_returns_series(self) -> None:
        payload = {"results": {"series": {"apdex": [["2024-01-01T00:00:00Z", 0.9]]}}}
        recorder = Recorder(payload=payload)
        async with _client(recorder) as client:
            series = await client.get_metric(
                1, "apdex", "2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"
            )
        assert series == payload["results"]["series"]
        assert recorder.last.url.path == "/api/v0/apps/1/metrics/apdex"
        assert recorder.last.url.params["from"] == "2024-01-01T00:00:00Z"
        assert recorder.last.url.params["to"] == "2024-01-02T00:00:00Z"

    @pytest.mark.asyncio
    async def test_get_metric_with_range(self) -> None:
        recorder = Recorder()
        async with _client(recorder) as client:
            await client.get_metric(1, "errors", to="2024-01-02T00:00:00Z", range_="3hrs")
        assert recorder.last.url.params["from"] == "2024-01-01T21:00:00Z"

    @pytest.mark.asyncio
    async def test_invalid_metric_type_sends_nothing(self) -> None:
        recorder = Recorder()
        async with _client(recorder) as client:
            with pytest.raises(ScoutError, match="Invalid metric_type"):
                await client.get_metric(1, "latency")
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_inverted_range_sends_nothing(self) -> None:
        recorder = Recorder()
        async with _client(recorder) as client:
            with pytest.raises(ScoutError, match="before"):
                await client.get_metric(
                    1, "apdex", "2024-01-02T00:00:00Z", "2024-01-01T00:00:00Z"
                )
        assert recorder.requests == []


class TestEndpointsAndTraces:
    """Tests for endpoint and trace operations."""

    @pytest.mark.asyncio
    async def test_list_endpoints_always_sends_window(self) -> None:
        recorder = Recorder(payload={"results": [{"name": "GET /"}]})
        async with _client(recorder) as client:
            endpoints = await client.list_endpoints(4)
        assert endpoints == [{"name": "GET /"}]
        params = recorder.last.url.params
        assert "from" in params and "to" in params

    @pytest.mark.asyncio
    async def test_endpoint_traces_path(self) -> None:
        recorder = Recorder(payload={"results": []})
        async with _client(recorder) as client:
            await client.list_endpoint_traces(4, "R0VUIC8", range_="1day")
        assert recorder.last.url.path == "/api/v0/apps/4/endpoints/R0VUIC8/traces"

    @pytest.mark.asyncio
    async def test_fetch_trace(self) -> None:
        recorder = Recorder(payload={"results": {"trace": {"id": 55}}})
        async with _client(recorder) as client:
            assert await client.fetch_trace(4, 55) == {"id": 55}


class TestErrorsAndInsights:
    """Tests for error group and insight operations."""

    @pytest.mark.asyncio
    async def test_list_error_groups(self) -> None:
        payload = {"results": {"error_groups": [{"id": 1}]}}
        recorder = Recorder(payload=payload)
        async with _client(recorder) as client:
            groups = await client.list_error_groups(4, endpoint="abc")
        assert groups == [{"id": 1}]
        assert recorder.last.url.params["endpoint"] == "abc"

    @pytest.mark.asyncio
    async def test_error_group_errors_missing(self) -> None:
        async with _client(Recorder(payload={"results": {}})) as client:
            assert await client.get_error_group_errors(4, 1) == []

    @pytest.mark.asyncio
    async def test_invalid_insight_type(self) -> None:
        recorder = Recorder()
        async with _client(recorder) as client:
            with pytest.raises(ScoutError, match="Invalid insight_type"):
                await client.get_insight_by_type(4, "cpu")
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_insights_history_pagination(self) -> None:
        recorder = Recorder()
        async with _client(recorder) as client:
            await client.get_insights_history_by_type(
                4, "n_plus_one", limit=20, pagination_cursor=99, pagination_direction="forward"
            )
        params = recorder.last.url.params
        assert recorder.last.url.path == "/api/v0/apps/4/insights/history/n_plus_one"
        assert params["limit"] == "20"
        assert params["pagination_cursor"] == "99"
        assert params["pagination_direction"] == "forward"
        assert "pagination_page" not in params
