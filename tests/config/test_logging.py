"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest

from wydy.config.logging import configure_logging


def test_quiet_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()
    logging.getLogger("wydy.test").info("hidden")
    logging.getLogger("wydy.test").warning("shown")
    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err


def test_verbose_enables_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)
    logging.getLogger("wydy.test").debug("details here")
    assert "details here" in capsys.readouterr().err


def test_other_loggers_stay_at_warning(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)
    logging.getLogger("somelib").info("noise")
    assert "noise" not in capsys.readouterr().err


def test_json_lines(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(log_json=True)
    logging.getLogger("wydy.test").warning("daemon %s", "up")
    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "daemon up"
    assert record["level"] == "warning"
    assert record["logger"] == "wydy.test"
