"""FastAPI integration for the session lifecycle service.

The HTTP API itself belongs to the host application; this module only
provides the dependencies a host needs to plug the service into its routes:

- ``get_client_context``: user agent, parsed device and client IP of a request
- ``get_session_service``: the application-scoped SessionLifecycleService
- ``require_session``: resolves the bearer session token or answers 401

Usage:
    @router.post("/login")
    async def login(
        context: Annotated[ClientContext, Depends(get_client_context)],
        service: Annotated[SessionLifecycleService, Depends(get_session_service)],
    ):
        result = await service.create_session(user_id, tenant_id, context.to_options())

    @router.get("/me")
    async def me(session: Annotated[ValidSession, Depends(require_session)]):
        return {"user_id": session.user.user_id}
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.dtos import (
    CreateSessionOptions,
    InvalidSession,
    SessionTimeout,
    ValidSession,
)
from src.application.services import SessionLifecycleService
from src.core.config import get_settings
from src.core.container import get_session_service as _container_session_service
from src.core.errors import SessionContractError
from src.core.ip_address import parse_ip
from src.domain.value_objects import DeviceInfo
from src.infrastructure.context import parse_user_agent

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class ClientContext:
    """Client signals extracted from an HTTP request.

    Attributes:
        ip_address: Client IP (None if unknown or malformed).
        user_agent: Raw User-Agent header.
        device_info: Parsed device.
    """

    ip_address: str | None
    user_agent: str | None
    device_info: DeviceInfo

    def to_options(
        self,
        *,
        remember_device: bool = False,
        timeout: SessionTimeout | None = None,
    ) -> CreateSessionOptions:
        """Build create_session options from this context."""
        return CreateSessionOptions(
            device_info=self.device_info,
            ip_address=self.ip_address,
            user_agent=self.user_agent,
            remember_device=remember_device,
            timeout=timeout,
        )


def get_client_ip(request: Request, *, trust_forwarded: bool) -> str | None:
    """Extract the client IP address from a request.

    X-Forwarded-For is only honoured behind a trusted proxy; its first entry
    is the original client. Malformed values are discarded.

    Args:
        request: HTTP request.
        trust_forwarded: Whether to read X-Forwarded-For.

    Returns:
        str | None: Normalized IP address, or None.
    """
    candidate: str | None = None
    if trust_forwarded:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            candidate = forwarded_for.split(",")[0].strip()
    if candidate is None and request.client:
        candidate = request.client.host
    ip = parse_ip(candidate)
    return str(ip) if ip is not None else None


def get_client_context(request: Request) -> ClientContext:
    """FastAPI dependency: client context of the current request."""
    user_agent = request.headers.get("User-Agent")
    return ClientContext(
        ip_address=get_client_ip(
            request, trust_forwarded=get_settings().trust_forwarded_ip
        ),
        user_agent=user_agent,
        device_info=parse_user_agent(user_agent or ""),
    )


def get_session_service() -> SessionLifecycleService:
    """FastAPI dependency: application-scoped session service."""
    return _container_session_service()


async def require_session(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    service: Annotated[SessionLifecycleService, Depends(get_session_service)],
) -> ValidSession:
    """FastAPI dependency: the valid session behind the bearer token.

    Raises:
        HTTPException: 401 with the invalid reason (``missing_token``,
            ``invalid_token``, ``not_found``, ``session_expired`` or
            ``session_revoked``).
    """
    if credentials is None:
        raise _unauthorized("missing_token")
    try:
        outcome = await service.validate_session(credentials.credentials)
    except SessionContractError as e:
        raise _unauthorized(e.code.value) from e

    match outcome:
        case ValidSession():
            return outcome
        case InvalidSession(reason=reason):
            raise _unauthorized(reason.value)


def _unauthorized(reason: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=reason,
        headers={"WWW-Authenticate": "Bearer"},
    )
