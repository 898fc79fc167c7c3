"""Tests for gostat.logging_setup."""

from __future__ import annotations

import logging

import pytest

from gostat.logging_setup import configure_logging, flush_logging


def test_records_held_until_flush(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()
    logging.getLogger("gostat.telemetry").warning("docker timed out")
    assert capsys.readouterr().err == ""

    flush_logging()
    assert "gostat: WARNING gostat.telemetry: docker timed out" in capsys.readouterr().err


def test_level_filters_records(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("ERROR")
    logging.getLogger("gostat.panels").warning("not shown")
    flush_logging()
    assert capsys.readouterr().err == ""


def test_configure_is_idempotent() -> None:
    first = configure_logging()
    second = configure_logging()
    assert first is second
    assert len(first.handlers) == 1
    assert first.propagate is False


def test_buffer_keeps_most_recent_records() -> None:
    log = configure_logging()
    handler = log.handlers[0]
    for i in range(handler.capacity + 5):
        log.warning("record %d", i)
    assert len(handler.buffer) == handler.capacity
    assert handler.buffer[0].getMessage() == "record 5"
