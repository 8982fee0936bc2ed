"""Logger-backed session notifier.

Writes login, revocation and anomaly events as structured audit log lines
through LoggerProtocol. Where the lines end up (stdout, a log shipper, a SIEM)
is decided by the logging configuration, not here.
"""

from typing import Any

from src.domain.entities import Session
from src.domain.protocols import LoggerProtocol


class LoggerSessionNotifier:
    """Audit/alert sink that emits structured log events.

    Args:
        logger: Logger the audit lines are written to (bound with
            ``channel="session_audit"``).
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger.bind(channel="session_audit")

    async def log_login(self, session: Session) -> None:
        self._logger.info(
            "session_created",
            session_id=str(session.id),
            user_id=session.user_id,
            tenant_id=session.tenant_id,
            device=str(session.device_info),
            ip_address=session.ip_address,
            location=str(session.geolocation) if session.geolocation else None,
            remember_device=session.remember_device,
            ephemeral=session.is_ephemeral,
        )

    async def log_revocation(
        self, session: Session, reason: str, revoked_by: str | None
    ) -> None:
        self._logger.warning(
            "session_revoked",
            session_id=str(session.id),
            user_id=session.user_id,
            tenant_id=session.tenant_id,
            reason=reason,
            revoked_by=revoked_by,
        )

    async def alert_anomaly(
        self, session: Session, event: str, context: dict[str, Any]
    ) -> None:
        """Log a suspicious-activity event at error level."""
        self._logger.error(
            "session_anomaly",
            session_id=str(session.id),
            user_id=session.user_id,
            tenant_id=session.tenant_id,
            anomaly=event,
            **context,
        )
