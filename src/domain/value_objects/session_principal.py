"""Authenticated principal resolved from a valid session."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionPrincipal:
    """Identity the session authenticates.

    Attributes:
        user_id: Tenant-scoped user identity.
        tenant_id: Tenant the session was issued for.
    """

    user_id: str
    tenant_id: str
