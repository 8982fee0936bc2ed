"""User session database model.

One row per issued session. Rows are never deleted by the session lifecycle
code: expiry is derived at read time and revocation is a flag, so the table
doubles as the forensic record of every login.

Concurrency:
    - Inserts go through a conditional INSERT ... SELECT that counts active
      rows for the same (user_id, tenant_id[, device_fingerprint]) first
    - Revocation is UPDATE ... WHERE is_revoked = false (monotonic)
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel
from src.infrastructure.persistence.types import UTCDateTime


class UserSessionModel(BaseMutableModel):
    """Persisted session.

    Indexes:
        - ix_user_sessions_token (unique): validation lookup
        - ix_user_sessions_device_active: (user_id, tenant_id,
          device_fingerprint, is_revoked) for the dedup count
        - ix_user_sessions_user_recent: (user_id, tenant_id, last_activity_at)
          for the device list
    """

    __tablename__ = "user_sessions"

    # Identity
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owning user (tenant-scoped identity)",
    )
    tenant_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Tenant the session was issued for",
    )
    token: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Session token (128 hex chars)",
    )

    # Device
    device_info: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Parsed device: browser, os, device, is_mobile",
    )
    device_fingerprint: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="SHA256 of browser|os|device",
    )
    user_agent: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Raw User-Agent header",
    )

    # Network
    ip_address: Mapped[str | None] = mapped_column(
        String(45),
        nullable=True,
        default=None,
        comment="Client IP at creation",
    )
    last_ip_address: Mapped[str | None] = mapped_column(
        String(45),
        nullable=True,
        default=None,
        comment="Most recent client IP",
    )
    geolocation: Mapped[dict[str, Any] | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        comment="Derived location (display only)",
    )

    # Timestamps
    last_activity_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        comment="Last refresh (or creation)",
    )
    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        comment="Absolute cap (created_at + max_session_hours)",
    )
    idle_timeout_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        comment="Idle deadline, never after expires_at",
    )

    # Policy snapshot
    max_idle_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    max_session_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    remember_device: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Skip idle timeout for this session",
    )

    # Revocation
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_revoked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Terminal revocation flag",
    )
    revoked_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime, nullable=True, default=None
    )
    revoked_by: Mapped[str | None] = mapped_column(
        String(255), nullable=True, default=None
    )
    revoked_reason: Mapped[str | None] = mapped_column(
        String(255), nullable=True, default=None
    )

    __table_args__ = (
        Index("ix_user_sessions_token", "token", unique=True),
        Index(
            "ix_user_sessions_device_active",
            "user_id",
            "tenant_id",
            "device_fingerprint",
            "is_revoked",
        ),
        Index(
            "ix_user_sessions_user_recent",
            "user_id",
            "tenant_id",
            "last_activity_at",
        ),
    )
