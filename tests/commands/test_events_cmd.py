"""Tests for the ``events`` command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from cadencectl.cli import cli
from tests.conftest import EventsWriter, sample_records

NOW = ["--now", "2024-06-15T12:00"]


@pytest.mark.usefixtures("_isolated_dir")
class TestEventsCommand:
    def test_json_listing(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        write_events(sample_records())
        result = cli_runner.invoke(cli, ["--json", "events", *NOW])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "list_events"
        assert [e["title"] for e in data["data"]["special"]] == ["Exhibition", "Fair", "Gala"]
        assert [e["when"] for e in data["data"]["regular"]] == [
            "2024-06-17T09:00",
            "2024-07-05T19:30",
        ]
        assert len(data["warnings"]) == 2

    def test_rich_listing(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        write_events(sample_records())
        result = cli_runner.invoke(cli, ["events", *NOW])
        assert result.exit_code == 0, result.output
        assert "Special events" in result.output
        assert "Regular events" in result.output
        assert "Club Night" in result.output
        assert "Mon, Jun 17, 2024" in result.output
        assert "Past Fete" not in result.output

    def test_warnings_on_stderr(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        write_events(sample_records())
        result = cli_runner.invoke(cli, ["events", *NOW])
        assert "WARNING: Event #0 skipped: not an object" in result.stderr
        assert "WARNING" not in result.stdout

    def test_quiet(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        write_events(sample_records())
        result = cli_runner.invoke(cli, ["-q", "events", "--combined", *NOW])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "2024-06-10T10:00\tExhibition"
        assert lines[-1] == "2024-07-05T19:30\tBook Swap"
        assert result.stderr == ""

    def test_combined(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        write_events(sample_records())
        result = cli_runner.invoke(cli, ["--json", "events", "--combined", *NOW])
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 5
        assert len(data["data"]["items"]) == 5

    def test_empty_file(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        write_events([])
        result = cli_runner.invoke(cli, ["events", *NOW])
        assert result.exit_code == 0
        assert "No special events currently listed." in result.output
        assert "No regular events currently listed." in result.output

    def test_explicit_path(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        path = write_events([{"title": "Solo", "dateStart": "2024-12-01"}], name="custom.json")
        result = cli_runner.invoke(cli, ["--json", "events", str(path), *NOW])
        data = json.loads(result.stdout)
        assert data["data"]["special"][0]["title"] == "Solo"
        assert data["meta"]["path"] == str(path)

    def test_config_path_used(
        self, cli_runner: CliRunner, tmp_path: Path, write_events: EventsWriter
    ) -> None:
        write_events(sample_records(), name="site/data.json")
        (tmp_path / "cadencectl.toml").write_text(
            '[events]\npath = "site/data.json"\n', encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["--json", "events", *NOW])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["count"] == 5

    def test_missing_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "events", *NOW])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["ok"] is False
        assert data["error"]["code"] == "NOT_FOUND"

    def test_invalid_json(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "events" / "events.json"
        path.parent.mkdir()
        path.write_text("[{", encoding="utf-8")
        result = cli_runner.invoke(cli, ["--json", "events", *NOW])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "INVALID_JSON"

    def test_not_an_array(self, cli_runner: CliRunner, write_events: EventsWriter) -> None:
        write_events({"title": "Not a list"})
        result = cli_runner.invoke(cli, ["events", *NOW])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
        assert "must contain a JSON array" in result.stderr

    def test_bracketed_title_printed_literally(
        self, cli_runner: CliRunner, write_events: EventsWriter
    ) -> None:
        write_events([{"title": "Quiz [/night]", "dateStart": "2024-06-20T19:00"}])
        result = cli_runner.invoke(cli, ["events", *NOW])
        assert result.exit_code == 0, result.output
        assert "Quiz [/night]" in result.stdout

    def test_bad_now_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["events", "--now", "yesterday"])
        assert result.exit_code == 2
        assert "ISO 8601" in result.output
