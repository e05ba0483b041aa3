"""CLI argument parsing and main entry point.

Two modes of operation:

* ``scoutdash``            - launch the interactive dashboard.
* ``scoutdash <command>``  - run one read-only query and print the result.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from rich.console import Console

from scoutdash import __version__
from scoutdash.client.client import ScoutClient
from scoutdash.client.errors import ScoutError
from scoutdash.client.helpers import parse_scout_url
from scoutdash.client.secret import get_api_key
from scoutdash.constants.defaults import (
    INITIAL_VIEW_DEFAULT,
    LOG_LEVEL_DEFAULT,
    OUTPUT_FORMAT_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from scoutdash.constants.enums import OutputFormat
from scoutdash.constants.values import APP_NAME, VALID_INSIGHTS, VALID_METRICS
from scoutdash.display.logging_config import setup_logging
from scoutdash.models.core.application import Application
from scoutdash.models.state.app_settings import AppSettings, ConfigError
from scoutdash.utils.output import format_json, format_plain
from scoutdash.utils.series_renderer import extract_series_points, format_series_table

logger = logging.getLogger(__name__)

CommandHandler = Callable[[ScoutClient, argparse.Namespace], Awaitable[Any]]

# Commands whose result is a metric series
_SERIES_COMMANDS = ("metric", "endpoint-metric")
# Commands that never touch the API
_OFFLINE_COMMANDS = ("version", "parse-url")


# ── Parser ───────────────────────────────────────────────────────────────


def _add_range_options(parser: argparse.ArgumentParser, *, with_range: bool = True) -> None:
    parser.add_argument("--from", dest="from_", help="Start time (ISO 8601)")
    parser.add_argument("--to", help="End time (ISO 8601)")
    if with_range:
        parser.add_argument("--range", dest="range_", help="Trailing window, e.g. 30min, 2hrs, 7days")


def _add_pagination_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--limit", type=int)
    parser.add_argument("--pagination-cursor", type=int)
    parser.add_argument("--pagination-direction")
    parser.add_argument("--pagination-page", type=int)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Scout APM dashboard - browse apps, endpoints, metrics, errors and insights.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=OUTPUT_FORMAT_DEFAULT,
        help="Output format for commands: plain or json (ignored by the dashboard)",
    )
    parser.add_argument("--app", help="[dashboard] Open this app on start: numeric id or name")
    parser.add_argument(
        "--tab",
        default=INITIAL_VIEW_DEFAULT,
        help="[dashboard] Initial view: endpoints, insights, metrics or errors",
    )
    parser.add_argument(
        "--refresh",
        type=int,
        default=REFRESH_INTERVAL_DEFAULT,
        help="[dashboard] Auto-refresh interval in seconds (0 = off)",
    )
    parser.add_argument("--utc", action="store_true", help="Show timestamps in UTC")
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL_DEFAULT,
        help="File log level: debug, info, warning, error, critical",
    )

    sub = parser.add_subparsers(dest="command", metavar="command")

    apps = sub.add_parser("apps", help="List applications")
    apps.add_argument("--active-since", help="Only apps reporting since (ISO 8601)")

    sub.add_parser("app", help="Show one application").add_argument("app_id", type=int)
    sub.add_parser("metrics", help="List available metric types").add_argument(
        "app_id", type=int
    )

    metric = sub.add_parser("metric", help="Get time-series metric data")
    metric.add_argument("app_id", type=int)
    metric.add_argument("metric_type", choices=VALID_METRICS)
    _add_range_options(metric)

    endpoints = sub.add_parser("endpoints", help="List endpoints")
    endpoints.add_argument("app_id", type=int)
    _add_range_options(endpoints)

    endpoint_metric = sub.add_parser("endpoint-metric", help="Get metric data for one endpoint")
    endpoint_metric.add_argument("app_id", type=int)
    endpoint_metric.add_argument("endpoint_id")
    endpoint_metric.add_argument("metric_type", choices=VALID_METRICS)
    _add_range_options(endpoint_metric)

    traces = sub.add_parser("endpoint-traces", help="List traces for an endpoint (max 100)")
    traces.add_argument("app_id", type=int)
    traces.add_argument("endpoint_id")
    _add_range_options(traces)

    trace = sub.add_parser("trace", help="Fetch a trace")
    trace.add_argument("app_id", type=int)
    trace.add_argument("trace_id", type=int)

    errors = sub.add_parser("errors", help="List error groups")
    errors.add_argument("app_id", type=int)
    _add_range_options(errors, with_range=False)
    errors.add_argument("--endpoint", help="Filter by endpoint id")

    error = sub.add_parser("error", help="Show one error group")
    error.add_argument("app_id", type=int)
    error.add_argument("error_id", type=int)

    group_errors = sub.add_parser("error-group-errors", help="List errors in an error group")
    group_errors.add_argument("app_id", type=int)
    group_errors.add_argument("error_id", type=int)

    insights = sub.add_parser("insights", help="Get all insights")
    insights.add_argument("app_id", type=int)
    insights.add_argument("--limit", type=int)

    insight = sub.add_parser("insight", help="Get insights of one type")
    insight.add_argument("app_id", type=int)
    insight.add_argument("insight_type", choices=VALID_INSIGHTS)
    insight.add_argument("--limit", type=int)

    history = sub.add_parser("insights-history", help="Get insights history")
    history.add_argument("app_id", type=int)
    _add_range_options(history, with_range=False)
    _add_pagination_options(history)

    history_by_type = sub.add_parser(
        "insights-history-by-type", help="Get insights history of one type"
    )
    history_by_type.add_argument("app_id", type=int)
    history_by_type.add_argument("insight_type", choices=VALID_INSIGHTS)
    _add_range_options(history_by_type, with_range=False)
    _add_pagination_options(history_by_type)

    sub.add_parser("parse-url", help="Extract ids from a Scout APM URL").add_argument("url")
    sub.add_parser("version", help="Show version")
    return parser


# ── Commands ─────────────────────────────────────────────────────────────


def _pagination(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "from_": args.from_,
        "to": args.to,
        "limit": args.limit,
        "pagination_cursor": args.pagination_cursor,
        "pagination_direction": args.pagination_direction,
        "pagination_page": args.pagination_page,
    }


COMMANDS: dict[str, CommandHandler] = {
    "apps": lambda c, a: c.list_apps(a.active_since),
    "app": lambda c, a: c.get_app(a.app_id),
    "metrics": lambda c, a: c.list_metrics(a.app_id),
    "metric": lambda c, a: c.get_metric(a.app_id, a.metric_type, a.from_, a.to, a.range_),
    "endpoints": lambda c, a: c.list_endpoints(a.app_id, a.from_, a.to, a.range_),
    "endpoint-metric": lambda c, a: c.get_endpoint_metrics(
        a.app_id, a.endpoint_id, a.metric_type, a.from_, a.to, a.range_
    ),
    "endpoint-traces": lambda c, a: c.list_endpoint_traces(
        a.app_id, a.endpoint_id, a.from_, a.to, a.range_
    ),
    "trace": lambda c, a: c.fetch_trace(a.app_id, a.trace_id),
    "errors": lambda c, a: c.list_error_groups(a.app_id, a.from_, a.to, a.endpoint),
    "error": lambda c, a: c.get_error_group(a.app_id, a.error_id),
    "error-group-errors": lambda c, a: c.get_error_group_errors(a.app_id, a.error_id),
    "insights": lambda c, a: c.get_all_insights(a.app_id, a.limit),
    "insight": lambda c, a: c.get_insight_by_type(a.app_id, a.insight_type, a.limit),
    "insights-history": lambda c, a: c.get_insights_history(a.app_id, **_pagination(a)),
    "insights-history-by-type": lambda c, a: c.get_insights_history_by_type(
        a.app_id, a.insight_type, **_pagination(a)
    ),
}


async def run_command(client: ScoutClient, args: argparse.Namespace) -> Any:
    """Run one API command and return its decoded result."""
    async with client:
        return await COMMANDS[args.command](client, args)


def render_result(
    value: Any,
    output_format: OutputFormat,
    console: Console,
    *,
    command: str | None = None,
    metric_type: str | None = None,
    use_utc: bool = False,
) -> None:
    """Print a command result in the requested format."""
    if output_format is OutputFormat.JSON:
        console.print_json(format_json(value))
        return
    if command in _SERIES_COMMANDS and extract_series_points(value):
        text = format_series_table(value, metric_type, use_utc)
    else:
        text = format_plain(value).rstrip("\n")
    console.print(text, markup=False, highlight=False, soft_wrap=True)


# ── Dashboard ────────────────────────────────────────────────────────────


async def _fetch_applications(api_key: str) -> list[Application]:
    async with ScoutClient(api_key) as client:
        payload = await client.list_apps()
    return [Application.from_payload(item) for item in payload]


def run_dashboard(settings: AppSettings, api_key: str) -> None:
    """Fetch the application list, then hand the terminal to Textual."""
    applications = asyncio.run(_fetch_applications(api_key))
    logger.info("Fetched %d applications", len(applications))

    # Imported here so batch commands do not pay for Textual start-up.
    from scoutdash.app import ScoutDashApp

    ScoutDashApp(applications, settings, client=ScoutClient(api_key)).run()


# ── Entry point ──────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = AppSettings.from_options(
            app=args.app,
            tab=args.tab,
            refresh_interval=args.refresh,
            use_utc=args.utc,
            output_format=args.output,
            log_level=args.log_level,
        )
    except ConfigError as e:
        err_console.print(f"Error: {e}", markup=False, highlight=False)
        return 1

    if args.command == "version":
        console.print(f"{APP_NAME} {__version__}", markup=False, highlight=False)
        return 0

    log_path, level = setup_logging(settings.log_level)
    logger.info("---- %s v%s starting (file log level: %s) ----", APP_NAME, __version__, level)
    logger.debug("Log file: %s", log_path)

    try:
        if args.command == "parse-url":
            parsed = parse_scout_url(args.url)
            render_result(parsed.to_dict(), settings.output_format, console)
            return 0

        api_key, source = get_api_key()
        logger.info("Using API key from %s", source.value)

        if args.command is None:
            run_dashboard(settings, api_key)
            return 0

        result = asyncio.run(run_command(ScoutClient(api_key), args))
        render_result(
            result,
            settings.output_format,
            console,
            command=args.command,
            metric_type=getattr(args, "metric_type", None),
            use_utc=settings.use_utc,
        )
        return 0
    except ScoutError as e:
        logger.error("%s failed: %s", args.command or "dashboard", e)
        err_console.print(f"Error: {e}", markup=False, highlight=False)
        return 1


__all__ = ["COMMANDS", "build_parser", "main", "render_result", "run_command"]
