"""SQLAlchemySessionGateway - relational implementation of SessionGateway.

Adapter for hexagonal architecture. Maps between the Session domain entity and
UserSessionModel rows, and translates SQLAlchemy/driver failures into
GatewayError kinds.

Every method opens its own short-lived AsyncSession from the shared engine
and performs a single atomic statement (plus a read-back where noted):
- insert_session: INSERT ... SELECT ... WHERE <active count> < <cap>
  (on PostgreSQL, preceded by a transaction-scoped advisory lock on
  (user_id, tenant_id) so concurrent inserts for one user run one at a time;
  SQLite already serializes writers)
- revoke: UPDATE ... WHERE id = :id AND is_revoked = false
- touch: UPDATE ... WHERE id = :id AND is_active AND NOT is_revoked
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import (
    ColumnElement,
    and_,
    func,
    insert,
    literal,
    or_,
    select,
    update,
)
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Session
from src.domain.enums import GatewayErrorKind
from src.domain.protocols import GatewayError
from src.domain.value_objects import DeviceInfo, GeoLocation, SessionPolicy
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models import SessionPolicyModel, UserSessionModel

M = UserSessionModel


def _active_at(now: datetime) -> ColumnElement[bool]:
    """Rows that are unrevoked and neither past their cap nor idle deadline."""
    return and_(
        M.is_active.is_(True),
        M.is_revoked.is_(False),
        M.expires_at >= now,
        or_(M.remember_device.is_(True), M.idle_timeout_at >= now),
    )


class SQLAlchemySessionGateway:
    """SQLAlchemy implementation of the SessionGateway protocol.

    Does NOT inherit from SessionGateway (structural typing).

    Args:
        database: Shared Database (engine + session factory).

    Example:
        >>> gateway = SQLAlchemySessionGateway(Database(settings.database_url))
        >>> session = await gateway.find_by_token(token)
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """Transactional session whose failures surface as GatewayError."""
        try:
            async with self._database.get_session() as session:
                yield session
        except IntegrityError as e:
            raise GatewayError(GatewayErrorKind.CONFLICT, str(e.orig)) from e
        except (OperationalError, InterfaceError) as e:
            raise GatewayError(GatewayErrorKind.UNAVAILABLE, str(e.orig)) from e
        except SQLAlchemyError as e:
            raise GatewayError(GatewayErrorKind.OTHER, str(e)) from e
        except OSError as e:
            raise GatewayError(GatewayErrorKind.UNAVAILABLE, str(e)) from e

    async def _lock_user(
        self, db_session: AsyncSession, user_id: str, tenant_id: str
    ) -> None:
        """Serialize writers for (user_id, tenant_id) until the transaction ends.

        Under READ COMMITTED two concurrent INSERT ... SELECT statements would
        both count zero active rows; the advisory lock makes the second wait
        for the first to commit so its count sees the new row.
        """
        if self._database.engine.dialect.name != "postgresql":
            return
        key = f"{tenant_id}:{user_id}"
        await db_session.execute(
            select(func.pg_advisory_xact_lock(func.hashtext(key)))
        )

    # =========================================================================
    # Policy
    # =========================================================================

    async def get_policy(self, tenant_id: str) -> SessionPolicy | None:
        async with self._session() as session:
            stmt = select(SessionPolicyModel).where(
                SessionPolicyModel.tenant_id == tenant_id,
                SessionPolicyModel.is_active.is_(True),
            )
            model = (await session.execute(stmt)).scalar_one_or_none()

        if model is None:
            return None
        try:
            return SessionPolicy(
                max_concurrent_sessions_per_device=model.max_concurrent_sessions_per_device,
                max_concurrent_sessions_total=model.max_concurrent_sessions_total,
                max_idle_minutes=model.max_idle_minutes,
                max_session_hours=model.max_session_hours,
            )
        except ValueError as e:
            raise GatewayError(
                GatewayErrorKind.OTHER, f"invalid policy for tenant {tenant_id}: {e}"
            ) from e

    async def set_policy(self, tenant_id: str, policy: SessionPolicy) -> None:
        """Create or replace the tenant's policy (admin tooling, tests)."""
        async with self._session() as session:
            stmt = select(SessionPolicyModel).where(
                SessionPolicyModel.tenant_id == tenant_id
            )
            model = (await session.execute(stmt)).scalar_one_or_none()
            if model is None:
                model = SessionPolicyModel(tenant_id=tenant_id)
                session.add(model)
            model.max_concurrent_sessions_per_device = (
                policy.max_concurrent_sessions_per_device
            )
            model.max_concurrent_sessions_total = policy.max_concurrent_sessions_total
            model.max_idle_minutes = policy.max_idle_minutes
            model.max_session_hours = policy.max_session_hours
            model.is_active = True

    # =========================================================================
    # Reads
    # =========================================================================

    async def find_by_token(self, token: str) -> Session | None:
        async with self._session() as session:
            stmt = select(M).where(M.token == token)
            model = (await session.execute(stmt)).scalar_one_or_none()
            return self._to_entity(model) if model is not None else None

    async def find_by_id(self, session_id: UUID) -> Session | None:
        async with self._session() as session:
            model = await session.get(M, session_id)
            return self._to_entity(model) if model is not None else None

    async def count_active_for_device(
        self,
        user_id: str,
        tenant_id: str,
        device_fingerprint: str,
        now: datetime,
    ) -> int:
        async with self._session() as session:
            stmt = select(func.count()).where(
                M.user_id == user_id,
                M.tenant_id == tenant_id,
                M.device_fingerprint == device_fingerprint,
                _active_at(now),
            )
            return (await session.execute(stmt)).scalar_one()

    async def count_active(self, user_id: str, tenant_id: str, now: datetime) -> int:
        async with self._session() as session:
            stmt = select(func.count()).where(
                M.user_id == user_id,
                M.tenant_id == tenant_id,
                _active_at(now),
            )
            return (await session.execute(stmt)).scalar_one()

    async def list_for_user(self, user_id: str, tenant_id: str) -> list[Session]:
        async with self._session() as session:
            stmt = (
                select(M)
                .where(M.user_id == user_id, M.tenant_id == tenant_id)
                .order_by(M.last_activity_at.desc(), M.created_at.desc())
            )
            models = (await session.execute(stmt)).scalars().all()
            return [self._to_entity(model) for model in models]

    # =========================================================================
    # Conditional writes
    # =========================================================================

    async def insert_session(
        self,
        session: Session,
        *,
        max_per_device: int,
        max_total: int | None,
        now: datetime,
    ) -> None:
        row = self._to_row(session)
        columns = list(row)
        table = M.__table__

        device_count = (
            select(func.count())
            .select_from(M)
            .where(
                M.user_id == session.user_id,
                M.tenant_id == session.tenant_id,
                M.device_fingerprint == session.device_fingerprint,
                _active_at(now),
            )
            .scalar_subquery()
        )
        conditions = [device_count < max_per_device]
        if max_total is not None:
            total_count = (
                select(func.count())
                .select_from(M)
                .where(
                    M.user_id == session.user_id,
                    M.tenant_id == session.tenant_id,
                    _active_at(now),
                )
                .scalar_subquery()
            )
            conditions.append(total_count < max_total)

        source = select(
            *(literal(row[name], type_=table.c[name].type) for name in columns)
        ).where(*conditions)
        stmt = insert(table).from_select(columns, source)

        async with self._session() as db_session:
            await self._lock_user(db_session, session.user_id, session.tenant_id)
            result = await db_session.execute(stmt)
            inserted = cast(Any, result).rowcount or 0

        if inserted != 1:
            raise GatewayError(
                GatewayErrorKind.CONFLICT, "concurrent session limit reached"
            )

    async def touch(
        self,
        session_id: UUID,
        *,
        last_activity_at: datetime,
        idle_timeout_at: datetime,
        ip_address: str | None,
    ) -> bool:
        values: dict[str, Any] = {
            "last_activity_at": last_activity_at,
            "idle_timeout_at": idle_timeout_at,
            "updated_at": last_activity_at,
        }
        if ip_address:
            values["last_ip_address"] = ip_address

        stmt = (
            update(M)
            .where(
                M.id == session_id,
                M.is_active.is_(True),
                M.is_revoked.is_(False),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return (cast(Any, result).rowcount or 0) == 1

    async def revoke(
        self,
        session_id: UUID,
        *,
        reason: str,
        revoked_by: str | None,
        revoked_at: datetime,
    ) -> Session | None:
        stmt = (
            update(M)
            .where(M.id == session_id, M.is_revoked.is_(False))
            .values(
                is_active=False,
                is_revoked=True,
                revoked_at=revoked_at,
                revoked_by=revoked_by,
                revoked_reason=reason,
                updated_at=revoked_at,
            )
            .execution_options(synchronize_session=False)
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            if (cast(Any, result).rowcount or 0) != 1:
                return None
            model = await session.get(M, session_id)
            return self._to_entity(model) if model is not None else None

    # =========================================================================
    # Mapping
    # =========================================================================

    @staticmethod
    def _to_row(session: Session) -> dict[str, Any]:
        return {
            "id": session.id,
            "created_at": session.created_at,
            "updated_at": session.last_activity_at or session.created_at,
            "user_id": session.user_id,
            "tenant_id": session.tenant_id,
            "token": session.token,
            "device_info": session.device_info.to_dict(),
            "device_fingerprint": session.device_fingerprint,
            "user_agent": session.user_agent,
            "ip_address": session.ip_address,
            "last_ip_address": session.last_ip_address,
            "geolocation": session.geolocation.to_dict()
            if session.geolocation
            else None,
            "last_activity_at": session.last_activity_at,
            "expires_at": session.expires_at,
            "idle_timeout_at": session.idle_timeout_at,
            "max_idle_minutes": session.max_idle_minutes,
            "max_session_hours": session.max_session_hours,
            "remember_device": session.remember_device,
            "is_active": session.is_active,
            "is_revoked": session.is_revoked,
            "revoked_at": session.revoked_at,
            "revoked_by": session.revoked_by,
            "revoked_reason": session.revoked_reason,
        }

    @staticmethod
    def _to_entity(model: UserSessionModel) -> Session:
        return Session(
            id=model.id,
            user_id=model.user_id,
            tenant_id=model.tenant_id,
            token=model.token,
            device_info=DeviceInfo.from_dict(model.device_info),
            device_fingerprint=model.device_fingerprint,
            user_agent=model.user_agent,
            ip_address=model.ip_address,
            last_ip_address=model.last_ip_address,
            geolocation=GeoLocation.from_dict(model.geolocation),
            created_at=model.created_at,
            last_activity_at=model.last_activity_at,
            expires_at=model.expires_at,
            idle_timeout_at=model.idle_timeout_at,
            max_idle_minutes=model.max_idle_minutes,
            max_session_hours=model.max_session_hours,
            remember_device=model.remember_device,
            is_active=model.is_active,
            is_revoked=model.is_revoked,
            revoked_at=model.revoked_at,
            revoked_by=model.revoked_by,
            revoked_reason=model.revoked_reason,
        )
