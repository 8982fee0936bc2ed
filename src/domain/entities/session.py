"""Session domain entity.

Pure business logic, no framework dependencies.

A session is the unit of authentication state: it belongs to exactly one
(user, tenant) pair, carries the device it was issued to, and moves through
ACTIVE → EXPIRED (derived) or ACTIVE → REVOKED (persisted, terminal).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from src.domain.enums import SessionState
from src.domain.value_objects import DeviceInfo, GeoLocation

TOKEN_LOG_PREFIX_LENGTH = 8


@dataclass(slots=True, kw_only=True)
class Session:
    """Session domain entity with device and timeout tracking.

    Business Rules:
        - Revocation is monotonic: once is_revoked is True it stays True
        - expires_at is fixed at creation (created_at + max_session_hours);
          activity only moves idle_timeout_at, never past expires_at
        - remember_device sessions skip the idle check, not the absolute cap
        - Expiry is derived at read time and never written back

    Attributes:
        id: Server-generated identifier.
        user_id: Owning user (tenant-scoped identity).
        tenant_id: Tenant the session was issued for.
        token: Client secret used for lookup; never logged in full.

        Device Information:
            device_info: Parsed device (dedup key and forensic record).
            device_fingerprint: SHA256 of device_info.
            user_agent: Raw user agent string.

        Network Information:
            ip_address: Client IP at creation.
            last_ip_address: Most recent IP seen on refresh.
            geolocation: Derived location (display only).

        Timestamps:
            created_at: Creation time.
            last_activity_at: Last successful refresh (or creation).
            expires_at: Absolute cap.
            idle_timeout_at: Idle deadline, never later than expires_at.

        Policy Snapshot:
            max_idle_minutes: Idle window applied to this session.
            max_session_hours: Absolute lifetime applied to this session.
            remember_device: Relaxes idle timeout for this session only.

        Revocation:
            is_active: False once revoked.
            is_revoked: Terminal revocation flag.
            revoked_at, revoked_by, revoked_reason: Revocation stamp.

        is_ephemeral: True for sessions issued while the store was
            unavailable (never persisted).
    """

    # Identity
    id: UUID
    user_id: str
    tenant_id: str
    token: str = field(repr=False)

    # Device Information
    device_info: DeviceInfo
    device_fingerprint: str = ""
    user_agent: str | None = None

    # Network Information
    ip_address: str | None = None
    last_ip_address: str | None = None
    geolocation: GeoLocation | None = None

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_activity_at: datetime | None = None
    expires_at: datetime | None = None
    idle_timeout_at: datetime | None = None

    # Policy snapshot
    max_idle_minutes: int = 30
    max_session_hours: int = 8
    remember_device: bool = False

    # Revocation
    is_active: bool = True
    is_revoked: bool = False
    revoked_at: datetime | None = None
    revoked_by: str | None = None
    revoked_reason: str | None = None

    is_ephemeral: bool = False

    def __post_init__(self) -> None:
        if not self.device_fingerprint:
            self.device_fingerprint = self.device_info.fingerprint()
        if self.last_activity_at is None:
            self.last_activity_at = self.created_at
        if self.expires_at is None:
            self.expires_at = self.created_at + timedelta(hours=self.max_session_hours)
        if self.idle_timeout_at is None:
            self.idle_timeout_at = self.next_idle_deadline(self.last_activity_at)

    @property
    def token_prefix(self) -> str:
        """Loggable token prefix."""
        return self.token[:TOKEN_LOG_PREFIX_LENGTH]

    def next_idle_deadline(self, now: datetime) -> datetime:
        """Idle deadline for activity at ``now``, capped at expires_at.

        Args:
            now: Time of the activity.

        Returns:
            datetime: min(now + max_idle_minutes, expires_at).
        """
        deadline = now + timedelta(minutes=self.max_idle_minutes)
        if self.expires_at is not None and deadline > self.expires_at:
            return self.expires_at
        return deadline

    def is_expired(self, now: datetime) -> bool:
        """Check the absolute cap and (unless remember_device) the idle window."""
        if self.expires_at is not None and now > self.expires_at:
            return True
        if self.remember_device:
            return False
        return self.idle_timeout_at is not None and now > self.idle_timeout_at

    def state(self, now: datetime) -> SessionState:
        """Lifecycle state observed at ``now``.

        REVOKED is reported before EXPIRED: a session that was signed out
        stays "signed out" after its timeout would also have passed.

        Args:
            now: Observation time (UTC).

        Returns:
            SessionState: ACTIVE, EXPIRED or REVOKED.
        """
        if self.is_revoked or not self.is_active:
            return SessionState.REVOKED
        if self.is_expired(now):
            return SessionState.EXPIRED
        return SessionState.ACTIVE

    def revoke(
        self,
        reason: str,
        *,
        revoked_by: str | None = None,
        now: datetime | None = None,
    ) -> bool:
        """Revoke this session.

        Args:
            reason: Why the session is being revoked.
            revoked_by: Actor performing the revocation.
            now: Revocation time (defaults to current UTC time).

        Returns:
            bool: True if this call revoked the session, False if it was
                already revoked (the existing stamp is left untouched).
        """
        if self.is_revoked:
            return False
        self.is_active = False
        self.is_revoked = True
        self.revoked_at = now or datetime.now(UTC)
        self.revoked_by = revoked_by
        self.revoked_reason = reason
        return True

    def touch(self, now: datetime, ip_address: str | None = None) -> None:
        """Record activity at ``now`` and slide the idle deadline."""
        self.last_activity_at = now
        self.idle_timeout_at = self.next_idle_deadline(now)
        if ip_address:
            self.last_ip_address = ip_address
