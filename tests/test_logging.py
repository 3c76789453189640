"""Tests for structlog configuration."""

from __future__ import annotations

import json

import pytest
import structlog

from bellschedule.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_lines_go_to_stderr(capsys):
    setup_logging(json_output=True, log_level="INFO")
    get_logger("bellschedule.test").info("calendar_imported", events=3)

    captured = capsys.readouterr()
    assert captured.out == ""
    record = json.loads(captured.err.strip())
    assert record["event"] == "calendar_imported"
    assert record["events"] == 3
    assert record["level"] == "info"


def test_level_filters(capsys):
    setup_logging(json_output=True, log_level="WARNING")
    log = get_logger("bellschedule.test")
    log.info("calendar_disabled")
    log.warning("calendar_fetch_transient", status=503)

    lines = capsys.readouterr().err.strip().splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["calendar_fetch_transient"]
