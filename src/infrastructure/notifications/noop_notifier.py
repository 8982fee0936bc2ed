"""No-op session notifier.

Default notifier when no audit/alert sink is configured, and the one unit
tests use so they never depend on an alerting backend.
"""

from typing import Any

from src.domain.entities import Session


class NoOpSessionNotifier:
    """Notifier whose methods do nothing."""

    async def log_login(self, session: Session) -> None:
        pass

    async def log_revocation(
        self, session: Session, reason: str, revoked_by: str | None
    ) -> None:
        pass

    async def alert_anomaly(
        self, session: Session, event: str, context: dict[str, Any]
    ) -> None:
        pass
