"""Audit and alert notifier protocol.

Best-effort sinks for login, revocation and anomaly events. The lifecycle
service runs every call in the background and bounds it by a timeout, so an
implementation's failures can never reach the service's caller.
"""

from typing import Any, Protocol

from src.domain.entities import Session


class SessionNotifier(Protocol):
    """Fire-and-forget audit/alert port.

    Implementations:
        - NoOpSessionNotifier: default, does nothing
        - LoggerSessionNotifier: structured audit log lines
    """

    async def log_login(self, session: Session) -> None:
        """Record that ``session`` was issued."""
        ...

    async def log_revocation(
        self, session: Session, reason: str, revoked_by: str | None
    ) -> None:
        """Record that ``session`` was revoked."""
        ...

    async def alert_anomaly(
        self, session: Session, event: str, context: dict[str, Any]
    ) -> None:
        """Raise a risk signal for ``session`` (e.g. ``ip_change``)."""
        ...
