"""Session store gateway protocol.

Port between the session lifecycle service and whatever persists sessions.
All cross-request coordination lives behind this interface: the dedup check
and the insert are one conditional write, and revocation is an update that
only applies to a row that is not already revoked.

Every method may fail. Adapters raise GatewayError with a GatewayErrorKind;
the service maps kinds to its fail-safe or fail-closed branches and never
inspects driver-specific errors.

Tenant isolation (row-level policies) is the store's responsibility. Every
query here is scoped by (user_id, tenant_id) or by a unique key.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities import Session
from src.domain.enums import GatewayErrorKind
from src.domain.value_objects import SessionPolicy


class GatewayError(Exception):
    """Classified session store failure.

    Attributes:
        kind: Closed failure category the service branches on.
    """

    def __init__(self, kind: GatewayErrorKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind


class SessionGateway(Protocol):
    """Session store port.

    Implementations:
        - SQLAlchemySessionGateway: relational store (async SQLAlchemy)
        - InMemorySessionGateway: single-process store for development/tests
    """

    async def get_policy(self, tenant_id: str) -> SessionPolicy | None:
        """Return the tenant's policy, or None when the tenant has none."""
        ...

    async def find_by_token(self, token: str) -> Session | None:
        """Return the session holding ``token`` in any state, or None."""
        ...

    async def find_by_id(self, session_id: UUID) -> Session | None:
        """Return the session with ``session_id`` in any state, or None."""
        ...

    async def count_active_for_device(
        self,
        user_id: str,
        tenant_id: str,
        device_fingerprint: str,
        now: datetime,
    ) -> int:
        """Count active, unrevoked, unexpired sessions on one device."""
        ...

    async def insert_session(
        self,
        session: Session,
        *,
        max_per_device: int,
        max_total: int | None,
        now: datetime,
    ) -> None:
        """Persist ``session`` only if the concurrency caps still allow it.

        The cap check and the insert are a single atomic operation.

        Args:
            session: Session to persist.
            max_per_device: Cap on active sessions for the session's
                (user, tenant, device fingerprint).
            max_total: Cap on active sessions for (user, tenant), or None.
            now: Reference time for "active" (unexpired).

        Raises:
            GatewayError: CONFLICT when a cap would be exceeded or the token
                already exists; UNAVAILABLE/OTHER on store failure.
        """
        ...

    async def touch(
        self,
        session_id: UUID,
        *,
        last_activity_at: datetime,
        idle_timeout_at: datetime,
        ip_address: str | None,
    ) -> bool:
        """Record activity on an active, unrevoked session.

        Returns:
            bool: False if the session no longer qualifies (revoked between
                read and write, or missing).
        """
        ...

    async def revoke(
        self,
        session_id: UUID,
        *,
        reason: str,
        revoked_by: str | None,
        revoked_at: datetime,
    ) -> Session | None:
        """Revoke the session if it is not already revoked.

        Exactly one of any number of concurrent calls for the same session
        gets the revoked session back; every other call gets None.

        Returns:
            Session | None: The revoked session for the winning call; None if
                the session was already revoked or does not exist.
        """
        ...

    async def list_for_user(self, user_id: str, tenant_id: str) -> list[Session]:
        """All sessions of (user, tenant), most recent activity first."""
        ...

    async def count_active(self, user_id: str, tenant_id: str, now: datetime) -> int:
        """Count active, unrevoked, unexpired sessions of (user, tenant)."""
        ...
