"""Test structured logging setup."""

import logging

import structlog

from binance_relay.core.config import Settings
from binance_relay.core.logging import QUIET_LOGGERS, _get_renderer, get_logger, setup_logging


class TestLoggingSetup:
    """Test logging configuration."""

    def test_json_renderer_by_default(self):
        assert isinstance(_get_renderer(Settings()), structlog.processors.JSONRenderer)

    def test_console_renderer_for_text_format(self):
        renderer = _get_renderer(Settings(LOG_FORMAT="text"))

        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_events_are_rendered_as_json(self, caplog):
        setup_logging(Settings())
        try:
            with caplog.at_level(logging.INFO):
                get_logger("binance_relay.test").info("Llamando a Binance", endpoint="/api/v3/time")
        finally:
            structlog.reset_defaults()

        assert '"endpoint": "/api/v3/time"' in caplog.text
        assert '"event": "Llamando a Binance"' in caplog.text

    def test_httpx_request_lines_are_silenced(self, caplog):
        setup_logging(Settings(LOG_LEVEL="DEBUG"))
        try:
            assert logging.getLogger("httpx").level == logging.WARNING
            with caplog.at_level(logging.DEBUG):
                logging.getLogger("httpx").info(
                    "HTTP Request: GET https://api.binance.com/api/v3/account?timestamp=1&signature=abc"
                )
        finally:
            structlog.reset_defaults()
            for name in QUIET_LOGGERS:
                logging.getLogger(name).setLevel(logging.NOTSET)

        assert "signature=abc" not in caplog.text
