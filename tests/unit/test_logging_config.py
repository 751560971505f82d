"""
Unit tests for logging and Sentry setup.
"""

import logging
import threading
from unittest.mock import patch

import pytest

from manu_shop.core.config import reset_settings
from manu_shop.core.logging_config import CorrelationIDFilter, configure_logging, init_sentry


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    CorrelationIDFilter.reset_correlation_id()


def test_configure_logging_console_only(root_logger):
    configure_logging(level="DEBUG", correlation_id="abc123", log_to_file=False)

    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert CorrelationIDFilter.get_correlation_id() == "abc123"


def test_quiets_http_loggers(root_logger):
    configure_logging(level=logging.INFO, log_to_file=False)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_correlation_filter_tags_records():
    CorrelationIDFilter.set_correlation_id("sess-1")
    record = logging.LogRecord("manu_shop", logging.INFO, __file__, 1, "hello", None, None)

    assert CorrelationIDFilter().filter(record)
    assert record.correlation_id == "sess-1"
    CorrelationIDFilter.reset_correlation_id()


def test_sentry_disabled_without_dsn():
    with patch("manu_shop.core.logging_config.sentry_sdk.init") as mock_init:
        assert init_sentry() is False
    mock_init.assert_not_called()


def test_sentry_enabled_with_dsn(monkeypatch):
    monkeypatch.setenv("SENTRY_DSN", "https://public@sentry.example.com/1")
    monkeypatch.setenv("ENVIRONMENT", "production")
    reset_settings()

    with patch("manu_shop.core.logging_config.sentry_sdk.init") as mock_init:
        assert init_sentry() is True

    kwargs = mock_init.call_args.kwargs
    assert kwargs["dsn"] == "https://public@sentry.example.com/1"
    assert kwargs["environment"] == "production"


def test_concurrent_sessions_keep_their_own_id():
    """Each session thread stamps its own id, even when they interleave."""
    seen = {}
    barrier = threading.Barrier(2)
    log_filter = CorrelationIDFilter()

    def session(correlation_id):
        CorrelationIDFilter.set_correlation_id(correlation_id)
        barrier.wait()
        record = logging.LogRecord("manu_shop", logging.INFO, __file__, 1, "render", None, None)
        log_filter.filter(record)
        seen[correlation_id] = record.correlation_id

    threads = [threading.Thread(target=session, args=(cid,)) for cid in ("session-A", "session-B")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(5)

    assert seen == {"session-A": "session-A", "session-B": "session-B"}
    assert CorrelationIDFilter.get_correlation_id() == ""
