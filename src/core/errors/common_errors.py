"""Common error classes used across all domains and layers.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- ConflictError: Resource conflicts (policy denials, state conflicts)

Usage:
    from src.core.errors import ConflictError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ConflictError(
        code=ErrorCode.CONCURRENT_SESSION_DENIED,
        message="Device already has an active session",
        resource_type="Session",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        resource_type: Type of resource (Session, SessionPolicy, etc.).
        resource_id: ID of the resource that was not found.
        details: Additional context.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (policy denial, state conflict).

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (device_fingerprint, etc.).
        details: Additional context.
    """

    resource_type: str
    conflicting_field: str | None = None
