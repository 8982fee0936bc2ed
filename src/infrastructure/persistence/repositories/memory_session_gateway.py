"""InMemorySessionGateway - single-process implementation of SessionGateway.

For development and tests. An asyncio.Lock makes each operation atomic with
respect to other coroutines in the same event loop, giving the same
conditional-insert and monotonic-revoke guarantees as the relational store.
Sessions are copied on the way in and out so callers never alias stored state.
"""

import asyncio
from dataclasses import replace
from datetime import datetime
from uuid import UUID

from src.domain.entities import Session
from src.domain.enums import GatewayErrorKind, SessionState
from src.domain.protocols import GatewayError
from src.domain.value_objects import SessionPolicy


class InMemorySessionGateway:
    """Dict-backed session store."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._sessions: dict[UUID, Session] = {}
        self._tokens: dict[str, UUID] = {}
        self._policies: dict[str, SessionPolicy] = {}

    async def get_policy(self, tenant_id: str) -> SessionPolicy | None:
        return self._policies.get(tenant_id)

    async def set_policy(self, tenant_id: str, policy: SessionPolicy) -> None:
        self._policies[tenant_id] = policy

    async def find_by_token(self, token: str) -> Session | None:
        session_id = self._tokens.get(token)
        if session_id is None:
            return None
        return replace(self._sessions[session_id])

    async def find_by_id(self, session_id: UUID) -> Session | None:
        session = self._sessions.get(session_id)
        return replace(session) if session is not None else None

    def _active(self, user_id: str, tenant_id: str, now: datetime) -> list[Session]:
        return [
            s
            for s in self._sessions.values()
            if s.user_id == user_id
            and s.tenant_id == tenant_id
            and s.state(now) is SessionState.ACTIVE
        ]

    async def count_active_for_device(
        self,
        user_id: str,
        tenant_id: str,
        device_fingerprint: str,
        now: datetime,
    ) -> int:
        return sum(
            1
            for s in self._active(user_id, tenant_id, now)
            if s.device_fingerprint == device_fingerprint
        )

    async def count_active(self, user_id: str, tenant_id: str, now: datetime) -> int:
        return len(self._active(user_id, tenant_id, now))

    async def list_for_user(self, user_id: str, tenant_id: str) -> list[Session]:
        sessions = [
            replace(s)
            for s in self._sessions.values()
            if s.user_id == user_id and s.tenant_id == tenant_id
        ]
        sessions.sort(key=lambda s: (s.last_activity_at, s.created_at), reverse=True)
        return sessions

    async def insert_session(
        self,
        session: Session,
        *,
        max_per_device: int,
        max_total: int | None,
        now: datetime,
    ) -> None:
        async with self._lock:
            if session.token in self._tokens or session.id in self._sessions:
                raise GatewayError(GatewayErrorKind.CONFLICT, "duplicate session")
            active = self._active(session.user_id, session.tenant_id, now)
            on_device = [
                s for s in active if s.device_fingerprint == session.device_fingerprint
            ]
            if len(on_device) >= max_per_device:
                raise GatewayError(
                    GatewayErrorKind.CONFLICT, "concurrent session limit reached"
                )
            if max_total is not None and len(active) >= max_total:
                raise GatewayError(
                    GatewayErrorKind.CONFLICT, "concurrent session limit reached"
                )
            self._sessions[session.id] = replace(session)
            self._tokens[session.token] = session.id

    async def touch(
        self,
        session_id: UUID,
        *,
        last_activity_at: datetime,
        idle_timeout_at: datetime,
        ip_address: str | None,
    ) -> bool:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session.is_revoked or not session.is_active:
                return False
            session.last_activity_at = last_activity_at
            session.idle_timeout_at = idle_timeout_at
            if ip_address:
                session.last_ip_address = ip_address
            return True

    async def revoke(
        self,
        session_id: UUID,
        *,
        reason: str,
        revoked_by: str | None,
        revoked_at: datetime,
    ) -> Session | None:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if not session.revoke(reason, revoked_by=revoked_by, now=revoked_at):
                return None
            return replace(session)
