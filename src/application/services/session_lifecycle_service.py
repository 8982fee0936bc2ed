"""Session lifecycle service.

Creates, validates, refreshes, lists and revokes sessions, enforces the
tenant's concurrency policy, and decides what happens when the session store
misbehaves.

Failure policy:
- create_session fails SAFE: a store outage yields an ephemeral, unpersisted
  session instead of refusing the login
- validate_session, refresh_session and revoke_session fail CLOSED: a store
  outage yields "not found"/False, never a valid session
- list/count operations return empty results on store failure

Error taxonomy:
- Caller-contract violations raise SessionContractError
- Business outcomes are returned (Result, ValidationOutcome, bool)
- Store failures never cross this boundary; they are logged and absorbed

Architecture:
- Application layer ONLY imports from core and domain
- Store, notifier and geolocation are injected through domain protocols
- Stateless: safe to share across concurrent requests
"""

import asyncio
import secrets
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any, TypeVar
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos import (
    CreateSessionOptions,
    InvalidSession,
    IssuedSession,
    ValidationOutcome,
    ValidSession,
)
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, SessionContractError
from src.core.ip_address import is_same_network
from src.core.result import Failure, Result, Success
from src.domain.entities import Session
from src.domain.enums import (
    GatewayErrorKind,
    InvalidReason,
    RevocationReason,
    SessionState,
)
from src.domain.protocols import (
    GatewayError,
    GeolocationProvider,
    LoggerProtocol,
    SessionGateway,
    SessionNotifier,
)
from src.domain.validators import (
    TOKEN_BYTES,
    validate_identity,
    validate_revocation_reason,
    validate_session_token,
)
from src.domain.value_objects import GeoLocation, SessionPolicy, SessionPrincipal

T = TypeVar("T")

def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


class SessionLifecycleService:
    """Session lifecycle manager.

    Args:
        gateway: Session store.
        logger: Structured logger.
        notifier: Audit/alert sink (defaults to doing nothing).
        geolocation: Resolver for client IPs (defaults to no geolocation).
        default_policy: Policy for tenants without one of their own.
        gateway_timeout_seconds: Upper bound on each store call.
        notifier_timeout_seconds: Upper bound on each notification.
        geolocation_timeout_seconds: Upper bound on each geolocation lookup.
        revocation_reason_max_length: Upper bound on revocation reason text.

    Example:
        >>> service = SessionLifecycleService(gateway, logger=logger)
        >>> result = await service.create_session("u1", "t1", options)
        >>> match result:
        ...     case Success(value=issued):
        ...         outcome = await service.validate_session(issued.token)
    """

    def __init__(
        self,
        gateway: SessionGateway,
        *,
        logger: LoggerProtocol,
        notifier: SessionNotifier | None = None,
        geolocation: GeolocationProvider | None = None,
        default_policy: SessionPolicy | None = None,
        gateway_timeout_seconds: float = 5.0,
        notifier_timeout_seconds: float = 2.0,
        geolocation_timeout_seconds: float = 1.0,
        revocation_reason_max_length: int = 200,
    ) -> None:
        self._gateway = gateway
        self._logger = logger
        self._notifier = notifier
        self._geolocation = geolocation
        self._default_policy = default_policy or SessionPolicy()
        self._gateway_timeout = gateway_timeout_seconds
        self._notifier_timeout = notifier_timeout_seconds
        self._geolocation_timeout = geolocation_timeout_seconds
        self._reason_max_length = revocation_reason_max_length
        # In-flight notifier tasks; the event loop only keeps weak references.
        self._background_tasks: set[asyncio.Task[None]] = set()

    # =========================================================================
    # Create
    # =========================================================================

    async def create_session(
        self,
        user_id: str,
        tenant_id: str,
        options: CreateSessionOptions,
    ) -> Result[IssuedSession, ConflictError]:
        """Issue a new session for (user_id, tenant_id).

        Args:
            user_id: Tenant-scoped user identity.
            tenant_id: Tenant the session is issued for.
            options: Client context; ``device_info`` is required.

        Returns:
            Success(IssuedSession) for a persisted session, or for an
            ephemeral one when the store is unavailable.
            Failure(ConflictError) with CONCURRENT_SESSION_DENIED when the
            tenant's per-device or total cap is reached.

        Raises:
            SessionContractError: INVALID_IDENTITY or MISSING_DEVICE_INFO.
        """
        validate_identity(user_id, tenant_id)
        if options is None or options.device_info is None:
            raise SessionContractError(
                ErrorCode.MISSING_DEVICE_INFO,
                "device_info is required to create a session",
                field="device_info",
            )

        log = self._logger.bind(user_id=user_id, tenant_id=tenant_id)
        now = _utc_now()

        policy = await self._resolve_policy(tenant_id, log)
        if options.timeout is not None:
            policy = policy.tightened(
                idle_minutes=options.timeout.idle_minutes,
                session_hours=options.timeout.session_hours,
            )

        geolocation = options.geolocation
        if geolocation is None and options.ip_address:
            geolocation = await self._locate(options.ip_address)

        session = Session(
            id=uuid7(),
            user_id=user_id,
            tenant_id=tenant_id,
            token=_new_token(),
            device_info=options.device_info,
            user_agent=options.user_agent,
            ip_address=options.ip_address,
            last_ip_address=options.ip_address,
            geolocation=geolocation,
            created_at=now,
            max_idle_minutes=policy.max_idle_minutes,
            max_session_hours=policy.max_session_hours,
            remember_device=options.remember_device,
        )

        try:
            on_device = await self._call(
                self._gateway.count_active_for_device,
                user_id,
                tenant_id,
                session.device_fingerprint,
                now,
            )
            if on_device >= policy.max_concurrent_sessions_per_device:
                return self._deny(session, policy, log)
            await self._call(
                self._gateway.insert_session,
                session,
                max_per_device=policy.max_concurrent_sessions_per_device,
                max_total=policy.max_concurrent_sessions_total,
                now=now,
            )
        except GatewayError as e:
            if e.kind is GatewayErrorKind.CONFLICT:
                return self._deny(session, policy, log)
            session = self._fallback_session(session, e, log)

        if not session.is_ephemeral:
            log.info(
                "session created",
                session_id=str(session.id),
                token_prefix=session.token_prefix,
                device=str(session.device_info),
                expires_at=session.expires_at.isoformat()
                if session.expires_at
                else None,
            )
        self._dispatch("log_login", session, lambda n: n.log_login(session))
        return Success(value=IssuedSession(session=session, token=session.token))

    def _deny(
        self,
        session: Session,
        policy: SessionPolicy,
        log: LoggerProtocol,
    ) -> Failure[ConflictError]:
        log.info(
            "concurrent session denied",
            device_fingerprint=session.device_fingerprint[:12],
            max_per_device=policy.max_concurrent_sessions_per_device,
            max_total=policy.max_concurrent_sessions_total,
        )
        return Failure(
            error=ConflictError(
                code=ErrorCode.CONCURRENT_SESSION_DENIED,
                message="An active session already exists for this device",
                resource_type="Session",
                conflicting_field="device_fingerprint",
            )
        )

    def _fallback_session(
        self,
        attempted: Session,
        error: GatewayError,
        log: LoggerProtocol,
    ) -> Session:
        """Ephemeral copy of ``attempted`` with a fresh id and token.

        The attempted token is discarded because a timed-out insert may still
        have committed it.
        """
        session = replace(
            attempted,
            id=uuid7(),
            token=_new_token(),
            is_ephemeral=True,
        )
        log.warning(
            "create_session fallback",
            error_kind=error.kind.value,
            error_message=str(error),
            session_id=str(session.id),
            token_prefix=session.token_prefix,
        )
        return session

    async def _resolve_policy(
        self, tenant_id: str, log: LoggerProtocol
    ) -> SessionPolicy:
        try:
            policy = await self._call(self._gateway.get_policy, tenant_id)
        except GatewayError as e:
            log.warning(
                "session policy lookup failed, using defaults",
                error_kind=e.kind.value,
                error_message=str(e),
            )
            return self._default_policy
        return policy or self._default_policy

    async def _locate(self, ip_address: str) -> GeoLocation | None:
        if self._geolocation is None:
            return None
        try:
            async with asyncio.timeout(self._geolocation_timeout):
                return await self._geolocation.lookup(ip_address)
        except Exception as e:
            self._logger.debug(
                "geolocation lookup failed", error_type=type(e).__name__
            )
            return None

    # =========================================================================
    # Validate / refresh
    # =========================================================================

    async def validate_session(self, token: str) -> ValidationOutcome:
        """Resolve a client token to a ValidationOutcome.

        Never returns ValidSession unless the store positively returned an
        active session; store failures read as NOT_FOUND.

        Args:
            token: Token previously issued by create_session.

        Returns:
            ValidSession, or InvalidSession with NOT_FOUND, SESSION_EXPIRED
            or SESSION_REVOKED.

        Raises:
            SessionContractError: INVALID_TOKEN for a malformed token.
        """
        validate_session_token(token)
        try:
            session = await self._call(self._gateway.find_by_token, token)
        except GatewayError as e:
            self._logger.error(
                "validate_session store failure",
                error=e,
                error_kind=e.kind.value,
                token_prefix=token[:8],
            )
            return InvalidSession(reason=InvalidReason.NOT_FOUND)

        if session is None:
            return InvalidSession(reason=InvalidReason.NOT_FOUND)

        match session.state(_utc_now()):
            case SessionState.REVOKED:
                return InvalidSession(reason=InvalidReason.SESSION_REVOKED)
            case SessionState.EXPIRED:
                return InvalidSession(reason=InvalidReason.SESSION_EXPIRED)
            case _:
                return ValidSession(
                    session=session,
                    user=SessionPrincipal(
                        user_id=session.user_id, tenant_id=session.tenant_id
                    ),
                )

    async def refresh_session(self, token: str, ip_address: str | None = None) -> bool:
        """Record activity on an active session and slide its idle deadline.

        The idle deadline never moves past ``expires_at``, and ``expires_at``
        itself is never changed. A move to a different network raises an
        ``ip_change`` anomaly with the notifier (non-blocking).

        Args:
            token: Session token.
            ip_address: Current client IP (optional).

        Returns:
            bool: True if activity was recorded; False if the token does not
                resolve to an active session or the store failed.

        Raises:
            SessionContractError: INVALID_TOKEN for a malformed token.
        """
        validate_session_token(token)
        now = _utc_now()
        try:
            session = await self._call(self._gateway.find_by_token, token)
            if session is None or session.state(now) is not SessionState.ACTIVE:
                return False
            touched = await self._call(
                self._gateway.touch,
                session.id,
                last_activity_at=now,
                idle_timeout_at=session.next_idle_deadline(now),
                ip_address=ip_address,
            )
        except GatewayError as e:
            self._logger.error(
                "refresh_session store failure",
                error=e,
                error_kind=e.kind.value,
                token_prefix=token[:8],
            )
            return False

        if touched and ip_address:
            self._check_ip_continuity(session, ip_address)
        return touched

    def _check_ip_continuity(self, session: Session, ip_address: str) -> None:
        previous_ip = session.last_ip_address or session.ip_address
        if not previous_ip or previous_ip == ip_address:
            return
        if is_same_network(previous_ip, ip_address):
            return
        context = {"previous_ip": previous_ip, "current_ip": ip_address}
        self._logger.warning(
            "session ip change",
            session_id=str(session.id),
            user_id=session.user_id,
            tenant_id=session.tenant_id,
            **context,
        )
        self._dispatch(
            "alert_anomaly",
            session,
            lambda n: n.alert_anomaly(session, "ip_change", context),
        )

    # =========================================================================
    # Revoke
    # =========================================================================

    async def revoke_session(
        self,
        session_id: UUID | str,
        reason: str,
        revoked_by: str | None = None,
    ) -> bool:
        """Revoke a session ("make it so").

        Idempotent and safe under concurrency: of any number of calls for the
        same session exactly one returns True; the rest, and calls for
        unknown sessions, return False.

        Args:
            session_id: Session identifier.
            reason: Bounded free text, typically a RevocationReason value.
            revoked_by: Actor performing the revocation.

        Returns:
            bool: True if this call revoked the session.

        Raises:
            SessionContractError: INVALID_REVOCATION_REASON for a blank or
                over-long reason.
        """
        reason = validate_revocation_reason(reason, self._reason_max_length)
        if not isinstance(session_id, UUID):
            try:
                session_id = UUID(str(session_id))
            except ValueError:
                return False

        try:
            revoked = await self._call(
                self._gateway.revoke,
                session_id,
                reason=reason,
                revoked_by=revoked_by,
                revoked_at=_utc_now(),
            )
        except GatewayError as e:
            self._logger.error(
                "revoke_session store failure",
                error=e,
                error_kind=e.kind.value,
                session_id=str(session_id),
            )
            return False

        if revoked is None:
            self._logger.debug(
                "session already revoked or missing", session_id=str(session_id)
            )
            return False

        self._logger.info(
            "session revoked",
            session_id=str(session_id),
            user_id=revoked.user_id,
            tenant_id=revoked.tenant_id,
            reason=reason,
            revoked_by=revoked_by,
        )
        self._dispatch(
            "log_revocation",
            revoked,
            lambda n: n.log_revocation(revoked, reason, revoked_by),
        )
        return True

    async def revoke_other_sessions(
        self,
        current_token: str,
        user_id: str,
        tenant_id: str,
        revoked_by: str | None = None,
    ) -> int:
        """Revoke every unrevoked session of (user, tenant) except the current one.

        Returns:
            int: Number of sessions this call revoked (0 on store failure).

        Raises:
            SessionContractError: INVALID_IDENTITY or INVALID_TOKEN.
        """
        validate_identity(user_id, tenant_id)
        validate_session_token(current_token)
        sessions = await self.get_user_sessions(user_id, tenant_id)
        revoked = 0
        for session in sessions:
            if session.token == current_token or session.is_revoked:
                continue
            if await self.revoke_session(
                session.id, RevocationReason.SIGNED_OUT_ELSEWHERE, revoked_by
            ):
                revoked += 1
        return revoked

    # =========================================================================
    # Listing
    # =========================================================================

    async def get_user_sessions(self, user_id: str, tenant_id: str) -> list[Session]:
        """All sessions of (user, tenant), most recent activity first.

        Expired and revoked sessions are included; use ``session.state(now)``
        to tell them apart.

        Raises:
            SessionContractError: INVALID_IDENTITY.
        """
        validate_identity(user_id, tenant_id)
        try:
            sessions = await self._call(
                self._gateway.list_for_user, user_id, tenant_id
            )
        except GatewayError as e:
            self._logger.error(
                "get_user_sessions store failure",
                error=e,
                error_kind=e.kind.value,
                user_id=user_id,
                tenant_id=tenant_id,
            )
            return []
        return [
            s for s in sessions if s.user_id == user_id and s.tenant_id == tenant_id
        ]

    async def get_active_session_count(self, user_id: str, tenant_id: str) -> int:
        """Number of active sessions of (user, tenant); 0 on store failure.

        Raises:
            SessionContractError: INVALID_IDENTITY.
        """
        validate_identity(user_id, tenant_id)
        try:
            return await self._call(
                self._gateway.count_active, user_id, tenant_id, _utc_now()
            )
        except GatewayError as e:
            self._logger.error(
                "get_active_session_count store failure",
                error=e,
                error_kind=e.kind.value,
                user_id=user_id,
                tenant_id=tenant_id,
            )
            return 0

    # =========================================================================
    # Plumbing
    # =========================================================================

    async def _call(
        self,
        operation: Callable[..., Awaitable[T]],
        /,
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run a store call under the gateway timeout.

        Raises:
            GatewayError: For every failure; timeouts and OS-level errors map
                to UNAVAILABLE, anything unclassified to OTHER.
        """
        try:
            async with asyncio.timeout(self._gateway_timeout):
                return await operation(*args, **kwargs)
        except GatewayError:
            raise
        except TimeoutError as e:
            raise GatewayError(
                GatewayErrorKind.UNAVAILABLE, "session store timed out"
            ) from e
        except OSError as e:
            raise GatewayError(GatewayErrorKind.UNAVAILABLE, str(e)) from e
        except Exception as e:
            raise GatewayError(GatewayErrorKind.OTHER, repr(e)) from e

    def _dispatch(
        self,
        event: str,
        session: Session,
        call: Callable[[SessionNotifier], Awaitable[None]],
    ) -> None:
        """Run a notifier call in the background; failures are only logged."""
        notifier = self._notifier
        if notifier is None:
            return

        async def run() -> None:
            try:
                async with asyncio.timeout(self._notifier_timeout):
                    await call(notifier)
            except Exception as e:
                self._logger.warning(
                    "session notifier failed",
                    notifier_event=event,
                    session_id=str(session.id),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

        task = asyncio.create_task(run())
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
