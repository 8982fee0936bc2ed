"""Per-tenant session policy model."""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class SessionPolicyModel(BaseMutableModel):
    """Session limits for one tenant.

    Tenants without an active row use the configured defaults.
    """

    __tablename__ = "session_policies"

    tenant_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Tenant this policy applies to",
    )
    max_concurrent_sessions_per_device: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1
    )
    max_concurrent_sessions_total: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        default=None,
        comment="NULL = unlimited",
    )
    max_idle_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    max_session_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=8)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
