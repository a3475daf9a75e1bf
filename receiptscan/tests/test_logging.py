"""Tests for the receiptscan logger namespace."""

from __future__ import annotations

import logging

import pytest

from receiptscan.runtime.logging import LOG_FORMAT, LOG_FORMAT_DEBUG, LOGGER_NAMESPACE, get_logger, set_log_level


def test_loggers_live_under_package_namespace() -> None:
    logger = get_logger("receiptscan.cli.receipt")
    assert logger.name == "receiptscan.receiptscan.cli.receipt"
    assert logging.getLogger(LOGGER_NAMESPACE).propagate is False


def test_set_log_level_switches_format() -> None:
    get_logger(__name__)
    root = logging.getLogger(LOGGER_NAMESPACE)
    previous = root.level
    try:
        set_log_level(logging.DEBUG)
        assert root.level == logging.DEBUG
        assert all(handler.formatter._fmt == LOG_FORMAT_DEBUG for handler in root.handlers)

        set_log_level(logging.WARNING)
        assert all(handler.formatter._fmt == LOG_FORMAT for handler in root.handlers)
    finally:
        set_log_level(previous)


@pytest.mark.parametrize(
    ("value", "level"),
    [("DEBUG", logging.DEBUG), ("warn", logging.WARNING), ("ERROR", logging.ERROR), ("bogus", logging.INFO)],
)
def test_level_from_env(monkeypatch: pytest.MonkeyPatch, value: str, level: int) -> None:
    from receiptscan.runtime.logging import _level_from_env

    monkeypatch.setenv("RECEIPTSCAN_LOG_LEVEL", value)
    assert _level_from_env() == level
