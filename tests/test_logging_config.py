"""
Tests for the logging configuration.
"""

import logging
from unittest.mock import patch

from conftest import live_token
from sessionkeeper.logging_config import (
    TokenRedactionFilter,
    configure_logging,
    get_logging_config,
)


def make_record(msg, *args):
    return logging.LogRecord("sessionkeeper.test", logging.INFO, __file__, 1, msg, args, None)


def test_redaction_filter_masks_tokens():
    """Test that token-shaped strings are removed from messages."""
    token = live_token("admin")
    record = make_record("Attaching %s to request", token)

    assert TokenRedactionFilter().filter(record) is True
    assert token not in record.getMessage()
    assert "[REDACTED]" in record.getMessage()


def test_redaction_filter_leaves_other_messages():
    """Test that ordinary messages pass through untouched."""
    record = make_record("Stored credentials for %s (%s)", "admin", "persistent")

    assert TokenRedactionFilter().filter(record) is True
    assert record.getMessage() == "Stored credentials for admin (persistent)"


def test_get_logging_config():
    """Test the dictConfig layout."""
    config = get_logging_config("DEBUG")

    assert config["loggers"]["sessionkeeper"]["level"] == "DEBUG"
    assert config["handlers"]["default"]["filters"] == ["token_redaction_filter"]
    assert config["filters"]["token_redaction_filter"]["()"] is TokenRedactionFilter


def test_configure_logging_reads_env_level(monkeypatch):
    """Test that the level defaults to LOG_LEVEL."""
    monkeypatch.setenv("LOG_LEVEL", "warning")

    with patch("sessionkeeper.logging_config.logging.config.dictConfig") as dict_config:
        configure_logging()

    dict_config.assert_called_once_with(get_logging_config("WARNING"))
