"""Tab controller - one query per view against the Scout API."""

from __future__ import annotations

import logging
from typing import Any

from scoutdash.client.client import ScoutClient
from scoutdash.client.helpers import calculate_range
from scoutdash.constants.defaults import INSIGHTS_LIMIT_DEFAULT, TRAILING_WINDOW_DEFAULT
from scoutdash.constants.enums import View
from scoutdash.controllers.base.base_controller import BaseController
from scoutdash.controllers.tabs.parsers.tab_parser import TabParser
from scoutdash.models.cache.tab_cache import CacheKey, TabDataset

logger = logging.getLogger(__name__)


class TabController(BaseController):
    """Fetches and parses the dataset behind each dashboard view."""

    def __init__(
        self,
        client: ScoutClient,
        *,
        window: str = TRAILING_WINDOW_DEFAULT,
        insights_limit: int = INSIGHTS_LIMIT_DEFAULT,
    ) -> None:
        self._client = client
        self._window = window
        self._insights_limit = insights_limit
        self._parser = TabParser()

    async def fetch_dataset(self, key: CacheKey) -> TabDataset:
        logger.debug("Fetching %s for app %s", key.view.value, key.app_id)
        if key.view is View.ENDPOINTS:
            results = await self._client.list_endpoints(key.app_id, range_=self._window)
            return self._parser.endpoints(results)
        if key.view is View.INSIGHTS:
            results = await self._client.get_all_insights(
                key.app_id, limit=self._insights_limit
            )
            return self._parser.insights(results)
        if key.view is View.METRICS:
            return self._parser.metrics(await self._client.list_metrics(key.app_id))
        from_, to = calculate_range(self._window)
        groups = await self._client.list_error_groups(key.app_id, from_=from_, to=to)
        return self._parser.errors(groups)

    async def fetch_metric_series(self, app_id: int, metric_type: str) -> Any:
        logger.debug("Fetching metric %s for app %s", metric_type, app_id)
        return await self._client.get_metric(app_id, metric_type, range_=self._window)


__all__ = ["TabController"]
