"""Shared pytest fixtures and test helpers for cadencectl tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cadencectl.config.settings import CadenceSettings

EventsWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer config and env overrides out of every test."""
    monkeypatch.delenv("CADENCECTL_CONFIG", raising=False)
    monkeypatch.delenv("CADENCECTL_EVENTS__PATH", raising=False)
    monkeypatch.delenv("CADENCECTL_RECURRENCE__MONTHLY_HORIZON_MONTHS", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> CadenceSettings:
    """Default settings rooted at a temp directory."""
    return CadenceSettings.from_cli(base_dir=tmp_path)


@pytest.fixture
def write_events(tmp_path: Path) -> EventsWriter:
    """Write a list of records to ``events/events.json`` (or *name*) under tmp_path."""

    def _write(records: Any, name: str = "events/events.json") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def _isolated_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to tmp_path so the CLI resolves config and events there.

    Use via ``@pytest.mark.usefixtures("_isolated_dir")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared sample data
# ---------------------------------------------------------------------------


def sample_records() -> list[Any]:
    """A mixed event list exercising every classification branch.

    Evaluated against ``now = 2024-06-15 12:00`` (a Saturday).
    """
    return [
        "not an object",
        {
            "title": "Club Night",
            "recurring": True,
            "cadence": {"type": "weekly", "interval": 1, "weekday": 1},
            "dateStart": "2024-01-01T09:00",
            "schedule": "Every Monday",
            "location": "Main Hall",
        },
        {
            "title": "Broken",
            "recurring": True,
            "cadence": {"type": "monthly", "weekday": 5, "weekOfMonth": 6},
            "dateStart": "2024-01-01T09:00",
        },
        {
            "title": "Book Swap",
            "recurring": True,
            "cadence": {"type": "monthly", "weekday": 5, "weekOfMonth": 1},
            "dateStart": "2024-01-01T19:30",
        },
        {"title": "Past Fete", "dateStart": "2024-05-01T10:00"},
        {
            "title": "Gala",
            "dateStart": "2024-07-01T18:00",
            "dateEnd": "2024-07-01T22:00",
            "links": [{"href": "https://example.org/gala", "label": "Tickets"}, {"href": "x"}],
        },
        {"title": "Fair", "dateStart": "2024-06-20"},
        {
            "title": "Exhibition",
            "dateStart": "2024-06-10T10:00",
            "dateEnd": "2024-06-16T17:00",
        },
    ]
