"""Unit tests for ConsoleAdapter (structured console logging).

structlog is patched out; the tests check what the adapter hands it.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from latchkey.infrastructure.logging import ConsoleAdapter

STRUCTLOG = "latchkey.infrastructure.logging.console_adapter.structlog"


@pytest.fixture
def structlog_mock():
    with patch(STRUCTLOG) as mock_structlog:
        mock_structlog.get_logger.return_value = MagicMock()
        yield mock_structlog


@pytest.mark.unit
class TestConsoleAdapterLogging:
    def test_info_passes_structured_context(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.info("user_registered", user_id=7, username="ada_lovelace")

        structlog_mock.get_logger.return_value.info.assert_called_once_with(
            "user_registered", user_id=7, username="ada_lovelace"
        )

    def test_error_flattens_exception(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.error(
            "smtp_send_failed", error=OSError("connection refused"), to="a@b.io"
        )

        structlog_mock.get_logger.return_value.error.assert_called_once_with(
            "smtp_send_failed",
            to="a@b.io",
            error_type="OSError",
            error_message="connection refused",
        )

    def test_critical_without_exception(self, structlog_mock):
        adapter = ConsoleAdapter()
        adapter.critical("database_unreachable")

        structlog_mock.get_logger.return_value.critical.assert_called_once_with(
            "database_unreachable"
        )

    def test_bind_wraps_bound_logger(self, structlog_mock):
        underlying = structlog_mock.get_logger.return_value
        bound_logger = MagicMock()
        underlying.bind.return_value = bound_logger

        adapter = ConsoleAdapter()
        bound = adapter.bind(user_id=7)
        bound.warning("totp_code_rejected")

        underlying.bind.assert_called_once_with(user_id=7)
        assert bound is not adapter
        bound_logger.warning.assert_called_once_with("totp_code_rejected")


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("bogus", logging.INFO)],
    )
    def test_level_filter(self, structlog_mock, level, expected):
        ConsoleAdapter(level=level)

        structlog_mock.make_filtering_bound_logger.assert_called_once_with(expected)

    def test_json_renderer_when_requested(self, structlog_mock):
        ConsoleAdapter(use_json=True)

        processors = structlog_mock.configure.call_args.kwargs["processors"]
        assert processors[-1] is structlog_mock.processors.JSONRenderer.return_value
        assert structlog_mock.contextvars.merge_contextvars in processors

    def test_console_renderer_by_default(self, structlog_mock):
        ConsoleAdapter()

        processors = structlog_mock.configure.call_args.kwargs["processors"]
        assert processors[-1] is structlog_mock.dev.ConsoleRenderer.return_value
