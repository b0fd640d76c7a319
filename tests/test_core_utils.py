"""
Unit tests for complaints_proxy.core.utils and core.logging.
"""

import logging
from datetime import datetime, timedelta, timezone

from complaints_proxy.app import create_app
from complaints_proxy.config import ProxySettings
from complaints_proxy.core.logging import configure_logging, excerpt, resolve_level
from complaints_proxy.core.utils import iso_timestamp, utc_now_iso


class TestIsoTimestamp:
    def test_millisecond_precision_with_z(self):
        dt = datetime(2025, 3, 1, 12, 0, 5, 123456, tzinfo=timezone.utc)
        assert iso_timestamp(dt) == "2025-03-01T12:00:05.123Z"

    def test_converts_to_utc(self):
        addis = timezone(timedelta(hours=3))
        dt = datetime(2025, 3, 1, 15, 0, 0, tzinfo=addis)
        assert iso_timestamp(dt) == "2025-03-01T12:00:00.000Z"

    def test_now_shape(self):
        stamp = utc_now_iso()
        assert len(stamp) == len("2025-03-01T12:00:00.000Z")
        assert stamp.endswith("Z")


class TestExcerpt:
    def test_truncates(self):
        assert excerpt("abcdef", 3) == "abc"

    def test_short_text_unchanged(self):
        assert excerpt("abc", 200) == "abc"

    def test_empty(self):
        assert excerpt(None, 10) == ""
        assert excerpt("", 10) == ""


class TestConfigureLogging:
    def setup_method(self):
        self._saved = logging.getLogger().level

    def teardown_method(self):
        logging.getLogger().setLevel(self._saved)

    def test_each_app_applies_its_own_level(self):
        create_app(ProxySettings(log_level="ERROR"))
        assert logging.getLogger().level == logging.ERROR
        create_app(ProxySettings(log_level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG

    def test_environment_does_not_override_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        configure_logging("WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_means_info(self):
        assert resolve_level("chatty") == logging.INFO
        assert resolve_level(None) == logging.INFO
        assert resolve_level("debug") == logging.DEBUG

    def test_handler_installed_once(self):
        configure_logging("INFO")
        before = len(logging.getLogger().handlers)
        configure_logging("INFO")
        assert len(logging.getLogger().handlers) == before
