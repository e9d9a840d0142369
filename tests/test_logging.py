"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from debtsage.config import BaseConfig
from debtsage.logging_config import JSONFormatter, get_logger, setup_logging


@pytest.fixture
def reset_debtsage_logger():
    yield
    logger = logging.getLogger("debtsage")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="debtsage.test",
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg="Test message",
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record(funcName="simulate")))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "debtsage.test"
    assert log_data["message"] == "Test message"
    assert log_data["function"] == "simulate"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_extra_fields():
    log_data = json.loads(JSONFormatter().format(_record(debt_id="card-1", remaining_balance=12.5)))
    assert log_data["extra"] == {"debt_id": "card-1", "remaining_balance": 12.5}


def test_json_formatter_ignores_console_timestamp():
    """A record already rendered by the console handler carries asctime."""
    record = _record(debt_id=3)
    logging.Formatter("%(asctime)s %(message)s").format(record)

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"debt_id": 3}


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(exc_info=exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert log_data["exception"]["message"] == "Test error"
    assert "Traceback" in log_data["exception"]["traceback"]


def test_setup_logging_writes_json_file(isolated_env, reset_debtsage_logger):
    config = BaseConfig()
    logger = setup_logging(config)

    get_logger("services.debts").warning("cap reached", extra={"debt_id": 3})
    for handler in logger.handlers:
        handler.flush()

    lines = config.log_file.read_text(encoding="utf-8").strip().splitlines()
    entry = json.loads(lines[-1])
    assert entry["message"] == "cap reached"
    assert entry["logger"] == "debtsage.services.debts"
    assert entry["extra"] == {"debt_id": 3}


def test_setup_logging_is_idempotent(isolated_env, reset_debtsage_logger):
    config = BaseConfig()
    setup_logging(config)
    logger = setup_logging(config)
    assert len(logger.handlers) == 2


def test_get_logger_namespaces():
    assert get_logger("cli").name == "debtsage.cli"
    assert get_logger("debtsage.services.interest").name == "debtsage.services.interest"
    assert get_logger("debtsage").name == "debtsage"
