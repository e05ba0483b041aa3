"""Unit tests for the command-line entry point.

This module tests:
- Argument parsing for batch commands
- Offline commands (version, parse-url)
- Settings and credential failures exiting with status 1
- A full batch command against a mocked transport
- Result rendering in plain and JSON formats
"""

from __future__ import annotations

import io
import json

import httpx
import pytest
from rich.console import Console

from scoutdash import __version__
from scoutdash import main as cli
from scoutdash.client.client import ScoutClient
from scoutdash.client.errors import ScoutError
from scoutdash.client.secret import ApiKeySource
from scoutdash.constants.enums import OutputFormat


@pytest.fixture(autouse=True)
def no_log_files(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "setup_logging", lambda level: ("/dev/null", level.upper()))


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120), buffer


# =============================================================================
# Parser
# =============================================================================


class TestParser:
    """Tests for build_parser()."""

    def test_global_defaults(self) -> None:
        args = cli.build_parser().parse_args([])
        assert args.command is None
        assert args.output == "plain"
        assert args.refresh == 0
        assert args.utc is False

    def test_metric_command(self) -> None:
        args = cli.build_parser().parse_args(
            ["-o", "json", "metric", "12", "apdex", "--range", "3hrs"]
        )
        assert (args.command, args.app_id, args.metric_type) == ("metric", 12, "apdex")
        assert args.range_ == "3hrs"
        assert args.from_ is None

    def test_invalid_metric_choice(self) -> None:
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["metric", "12", "latency"])

    def test_every_api_command_has_a_handler(self) -> None:
        parser = cli.build_parser()
        subparsers = next(
            action for action in parser._actions if action.dest == "command"
        )
        api_commands = set(subparsers.choices) - {"version", "parse-url"}
        assert api_commands == set(cli.COMMANDS)


# =============================================================================
# main()
# =============================================================================


class TestMain:
    """Tests for main() exit codes and output."""

    def test_version(self, capsys) -> None:
        assert cli.main(["version"]) == 0
        assert capsys.readouterr().out.strip() == f"scoutdash {__version__}"

    def test_parse_url_needs_no_credentials(self, capsys, monkeypatch) -> None:
        def no_key():
            raise AssertionError("credentials must not be read")

        monkeypatch.setattr(cli, "get_api_key", no_key)
        assert cli.main(["-o", "json", "parse-url", "https://scoutapm.com/apps/5/error_groups/8"]) == 0
        parsed = json.loads(capsys.readouterr().out)
        assert parsed["url_type"] == "error_group"
        assert parsed["app_id"] == 5
        assert parsed["error_id"] == 8

    def test_invalid_settings(self, capsys) -> None:
        assert cli.main(["--tab", "traces", "apps"]) == 1
        assert capsys.readouterr().err.startswith("Error: Invalid settings")

    def test_missing_credentials(self, capsys, monkeypatch) -> None:
        def no_key():
            raise ScoutError("API key not found.")

        monkeypatch.setattr(cli, "get_api_key", no_key)
        assert cli.main(["apps"]) == 1
        assert "Error: API key not found." in capsys.readouterr().err

    def test_batch_command(self, capsys, monkeypatch) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"results": {"app": {"id": 5, "name": "Shop"}}})

        monkeypatch.setattr(cli, "get_api_key", lambda: ("key", ApiKeySource.BITWARDEN))
        monkeypatch.setattr(
            cli,
            "ScoutClient",
            lambda api_key: ScoutClient(api_key, transport=httpx.MockTransport(handler)),
        )
        assert cli.main(["app", "5"]) == 0
        assert capsys.readouterr().out == "id: 5\nname: Shop\n"
        assert requests[0].url.path.endswith("/apps/5")

    def test_api_failure_exits_one(self, capsys, monkeypatch) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={})

        monkeypatch.setattr(cli, "get_api_key", lambda: ("key", ApiKeySource.BITWARDEN))
        monkeypatch.setattr(
            cli,
            "ScoutClient",
            lambda api_key: ScoutClient(api_key, transport=httpx.MockTransport(handler)),
        )
        assert cli.main(["apps"]) == 1
        assert "Authentication failed" in capsys.readouterr().err


# =============================================================================
# Rendering
# =============================================================================


class TestRenderResult:
    """Tests for render_result()."""

    def test_json(self) -> None:
        console, buffer = _console()
        cli.render_result({"id": 1, "tags": ["a"]}, OutputFormat.JSON, console)
        assert json.loads(buffer.getvalue()) == {"id": 1, "tags": ["a"]}

    def test_plain_keeps_brackets_literal(self) -> None:
        console, buffer = _console()
        cli.render_result({"name": "[bold]x[/bold]"}, OutputFormat.PLAIN, console)
        assert buffer.getvalue() == "name: [bold]x[/bold]\n"

    def test_series_command_prints_table(self) -> None:
        console, buffer = _console()
        payload = {"points": [["2024-01-01T00:00:00Z", 2], ["2024-01-01T00:01:00Z", 3]]}
        cli.render_result(
            payload,
            OutputFormat.PLAIN,
            console,
            command="metric",
            metric_type="throughput",
            use_utc=True,
        )
        assert buffer.getvalue().splitlines() == [
            "2024-01-01 00:01:00 UTC  3.00 RPM",
            "2024-01-01 00:00:00 UTC  2.00 RPM",
        ]

    def test_series_command_without_points_is_plain(self) -> None:
        console, buffer = _console()
        cli.render_result({"note": "none"}, OutputFormat.PLAIN, console, command="metric")
        assert buffer.getvalue() == "note: none\n"
