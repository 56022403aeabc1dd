"""
Tests for setup_logging().
"""

import json
import logging

import pytest
import structlog

from egofix.lib.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_json_output_in_production(monkeypatch, capsys):
    monkeypatch.delenv("EGOFIX_DEV_MODE", raising=False)
    setup_logging("info")

    logging.getLogger("egofix.test").info("run finished")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "run finished"
    assert record["level"] == "info"
    assert record["logger"] == "egofix.test"


def test_console_output_in_dev_mode(monkeypatch, capsys):
    monkeypatch.setenv("EGOFIX_DEV_MODE", "1")
    setup_logging()

    logging.getLogger("egofix.test").warning("cannot mark pattern")

    assert "cannot mark pattern" in capsys.readouterr().err


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    setup_logging()

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    setup_logging("error")

    assert logging.getLogger().level == logging.ERROR


def test_single_handler_after_repeated_setup():
    setup_logging()
    setup_logging()

    assert len(logging.getLogger().handlers) == 1
