"""Unit tests for session notifier adapters."""

import pytest

from src.domain.value_objects import GeoLocation
from src.infrastructure.notifications import (
    LoggerSessionNotifier,
    NoOpSessionNotifier,
)
from tests.conftest import make_session


@pytest.mark.unit
class TestLoggerSessionNotifier:
    def test_binds_audit_channel(self, mock_logger):
        LoggerSessionNotifier(mock_logger)

        mock_logger.bind.assert_called_once_with(channel="session_audit")

    async def test_log_login(self, mock_logger):
        session = make_session(geolocation=GeoLocation.local())

        await LoggerSessionNotifier(mock_logger).log_login(session)

        mock_logger.info.assert_called_once()
        args, kwargs = mock_logger.info.call_args
        assert args == ("session_created",)
        assert kwargs["session_id"] == str(session.id)
        assert kwargs["device"] == "Chrome on Windows (desktop)"
        assert kwargs["location"] == "Local, Local"
        assert session.token not in str(kwargs)

    async def test_log_revocation(self, mock_logger):
        session = make_session()

        await LoggerSessionNotifier(mock_logger).log_revocation(
            session, "admin_action", "admin-7"
        )

        args, kwargs = mock_logger.warning.call_args
        assert args == ("session_revoked",)
        assert kwargs["reason"] == "admin_action"
        assert kwargs["revoked_by"] == "admin-7"

    async def test_alert_anomaly(self, mock_logger):
        session = make_session()

        await LoggerSessionNotifier(mock_logger).alert_anomaly(
            session, "ip_change", {"previous_ip": "8.8.8.8", "current_ip": "1.1.1.1"}
        )

        args, kwargs = mock_logger.error.call_args
        assert args == ("session_anomaly",)
        assert kwargs["anomaly"] == "ip_change"
        assert kwargs["current_ip"] == "1.1.1.1"


@pytest.mark.unit
class TestNoOpSessionNotifier:
    async def test_methods_do_nothing(self):
        notifier = NoOpSessionNotifier()
        session = make_session()

        assert await notifier.log_login(session) is None
        assert await notifier.log_revocation(session, "timeout", None) is None
        assert await notifier.alert_anomaly(session, "ip_change", {}) is None
