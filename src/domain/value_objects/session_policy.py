"""Session policy value object.

Per-tenant limits applied by the session lifecycle service. Tenants without a
stored policy get the configured defaults.

Usage:
    from src.core.config import settings
    from src.domain.value_objects import SessionPolicy

    policy = SessionPolicy.defaults(settings)
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.config import Settings


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionPolicy:
    """Concurrency and timeout limits for one tenant.

    Attributes:
        max_concurrent_sessions_per_device: Active sessions allowed per
            (user, tenant, device fingerprint). 1 enables strict device dedup.
        max_concurrent_sessions_total: Active sessions allowed per
            (user, tenant) across all devices. None means unlimited.
        max_idle_minutes: Inactivity window before a session expires.
        max_session_hours: Absolute lifetime; refresh never extends past it.

    Raises:
        ValueError: If any limit is zero or negative.
    """

    max_concurrent_sessions_per_device: int = 1
    max_concurrent_sessions_total: int | None = None
    max_idle_minutes: int = 30
    max_session_hours: int = 8

    def __post_init__(self) -> None:
        if self.max_concurrent_sessions_per_device <= 0:
            raise ValueError(
                "max_concurrent_sessions_per_device must be positive, "
                f"got {self.max_concurrent_sessions_per_device}"
            )
        if (
            self.max_concurrent_sessions_total is not None
            and self.max_concurrent_sessions_total <= 0
        ):
            raise ValueError(
                "max_concurrent_sessions_total must be positive, "
                f"got {self.max_concurrent_sessions_total}"
            )
        if self.max_idle_minutes <= 0:
            raise ValueError(
                f"max_idle_minutes must be positive, got {self.max_idle_minutes}"
            )
        if self.max_session_hours <= 0:
            raise ValueError(
                f"max_session_hours must be positive, got {self.max_session_hours}"
            )

    @classmethod
    def defaults(cls, settings: "Settings") -> "SessionPolicy":
        """Build the fallback policy from application settings."""
        return cls(
            max_concurrent_sessions_per_device=settings.session_max_concurrent_per_device,
            max_concurrent_sessions_total=settings.session_max_concurrent_total,
            max_idle_minutes=settings.session_max_idle_minutes,
            max_session_hours=settings.session_max_hours,
        )

    def tightened(
        self,
        *,
        idle_minutes: int | None = None,
        session_hours: int | None = None,
    ) -> "SessionPolicy":
        """Apply per-session timeouts, which may shorten but never extend limits.

        Args:
            idle_minutes: Requested idle window.
            session_hours: Requested absolute lifetime.

        Returns:
            SessionPolicy: Copy with the smaller of each pair of limits.
        """
        return replace(
            self,
            max_idle_minutes=min(self.max_idle_minutes, idle_minutes)
            if idle_minutes
            else self.max_idle_minutes,
            max_session_hours=min(self.max_session_hours, session_hours)
            if session_hours
            else self.max_session_hours,
        )
