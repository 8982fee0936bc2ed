"""Session lifecycle DTOs (Data Transfer Objects).

Inputs and results of SessionLifecycleService operations.

DTOs:
    - SessionTimeout: Per-session timeout override (may only tighten policy)
    - CreateSessionOptions: Client context for create_session
    - IssuedSession: Result of create_session
    - ValidSession / InvalidSession: ValidationOutcome variants
"""

from dataclasses import dataclass
from typing import TypeAlias

from src.domain.entities import Session
from src.domain.enums import InvalidReason
from src.domain.value_objects import DeviceInfo, GeoLocation, SessionPrincipal


@dataclass(frozen=True, kw_only=True)
class SessionTimeout:
    """Per-session timeout override.

    Attributes:
        idle_minutes: Idle window for this session.
        session_hours: Absolute lifetime for this session.

    Raises:
        ValueError: If either value is zero or negative.
    """

    idle_minutes: int | None = None
    session_hours: int | None = None

    def __post_init__(self) -> None:
        if self.idle_minutes is not None and self.idle_minutes <= 0:
            raise ValueError(f"idle_minutes must be positive, got {self.idle_minutes}")
        if self.session_hours is not None and self.session_hours <= 0:
            raise ValueError(
                f"session_hours must be positive, got {self.session_hours}"
            )


@dataclass(frozen=True, kw_only=True)
class CreateSessionOptions:
    """Client context supplied at login.

    Attributes:
        device_info: Parsed device; required (dedup key and forensic record).
            None is accepted here so the service can report the missing
            value as a contract violation.
        ip_address: Client IP.
        user_agent: Raw User-Agent header.
        geolocation: Pre-resolved location; resolved from ip_address when
            absent.
        remember_device: Skip the idle timeout for this session.
        timeout: Optional tighter timeouts for this session.
    """

    device_info: DeviceInfo | None
    ip_address: str | None = None
    user_agent: str | None = None
    geolocation: GeoLocation | None = None
    remember_device: bool = False
    timeout: SessionTimeout | None = None


@dataclass(frozen=True, kw_only=True)
class IssuedSession:
    """Newly issued session and the token to hand to the client.

    Attributes:
        session: The session (``session.is_ephemeral`` marks fallback sessions).
        token: Client secret.
    """

    session: Session
    token: str


@dataclass(frozen=True, kw_only=True)
class ValidSession:
    """Token resolves to an active session."""

    session: Session
    user: SessionPrincipal


@dataclass(frozen=True, kw_only=True)
class InvalidSession:
    """Token does not authenticate anyone."""

    reason: InvalidReason


ValidationOutcome: TypeAlias = ValidSession | InvalidSession
